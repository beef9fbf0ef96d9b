"""Time-aligned playback of multi-sensor recordings (camera, 2D lidar, UWB, mmWave)."""

__version__ = "0.1.0"
