from .frame import Point3, TagModel, BeamModel, FrameResponse, DemoFrameResponse
from .manifest import Manifest, ManifestEntry
from .playback import PlaybackStatus, ControlResponse, LoadRequest
from .view import PixelPoint, AnchorPx, TagPx, ViewLayoutResponse
