"""
SharedState: top-level container handed to the API layer.
"""
from dataclasses import dataclass, field

from . import config as C
from .session import PlaybackSession
from ..services.demo_service import DemoSampler


@dataclass
class SharedState:
    """
    One playback session plus the demo sampler used while nothing is loaded.
    Tests build their own instance instead of sharing the app's.
    """
    session: PlaybackSession = field(default_factory=PlaybackSession)
    demo: DemoSampler = field(default_factory=DemoSampler)
    data_dir: str = C.DATA_DIR

    def reset(self):
        """Drop the loaded recording and its image handles."""
        self.session.close()
