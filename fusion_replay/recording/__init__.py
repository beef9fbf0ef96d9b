from .assembler import FrameAssembler, parse_beam_csv, parse_lidar_csv, parse_tag_csv
from .blobs import BlobRegistry
from .catalog import load, parse_filename_timestamp, scan_aux_files
from .cursor import CursorSignal, PlaybackCursor
from .errors import LoadError, ManifestMalformed, ManifestMissing, PermissionDenied
from .indexer import AuxIndex, nearest_index, resolve
from .models import (
    AssembledFrame,
    BeamPowerSample,
    ImageRefs,
    ManifestFrame,
    PlaybackState,
    PositionSample,
    RangePoint,
    TimestampedFileRef,
)
from .storage import DirEntry, LocalDirectoryStorage, MemoryStorage, StorageProvider, list_recordings
