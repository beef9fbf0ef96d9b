"""
Recording catalog: index.json plus the UWB / mmWave files found by directory scan.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import List, Optional

from pydantic import ValidationError

from ..core import config as C
from ..models.manifest import Manifest
from .errors import ManifestMalformed, ManifestMissing, PermissionDenied
from .indexer import AuxIndex
from .models import ManifestFrame, PlaybackState, TimestampedFileRef
from .storage import StorageProvider, join_path, norm_path

log = logging.getLogger(__name__)


def parse_filename_timestamp(filename: str, prefix: str, ext: str = C.AUX_EXT) -> Optional[int]:
    """
    Epoch milliseconds encoded in '<prefix>YYYYMMDD_HHMMSS_mmm<ext>'
    (or '..._HHMMSS.mmm<ext>'), read as local wall-clock time.
    Returns None if the name does not carry a valid timestamp.
    """
    if not filename.startswith(prefix) or not filename.endswith(ext):
        return None
    raw = filename[len(prefix):len(filename) - len(ext)]
    parts = raw.split("_")
    if len(parts) < 2:
        return None

    date_str, time_str = parts[0], parts[1]
    ms_str = "0"
    if len(parts) >= 3:
        ms_str = parts[2][:3]
    elif "." in time_str:
        time_str, ms_str = time_str.split(".", 1)
        ms_str = ms_str[:3]

    if len(date_str) != 8 or not date_str.isdigit():
        return None
    if len(time_str) < 6 or not time_str[:6].isdigit() or not ms_str.isdigit():
        return None
    try:
        dt = datetime(
            int(date_str[0:4]), int(date_str[4:6]), int(date_str[6:8]),
            int(time_str[0:2]), int(time_str[2:4]), int(time_str[4:6]),
            int(ms_str) * 1000,
        )
        ts = int(round(dt.timestamp() * 1000))
    except (ValueError, OverflowError, OSError):
        return None
    return ts if ts > 0 else None


def _read_manifest(storage: StorageProvider) -> List[ManifestFrame]:
    text = storage.read_text(C.INDEX_FILENAME)
    if text is None:
        raise ManifestMissing(f"Missing {C.INDEX_FILENAME}")
    try:
        manifest = Manifest.model_validate(json.loads(text))
    except json.JSONDecodeError as e:
        raise ManifestMalformed(f"{C.INDEX_FILENAME} is not valid JSON: {e}") from e
    except ValidationError as e:
        raise ManifestMalformed(f"{C.INDEX_FILENAME} does not match the manifest schema: {e}") from e
    if not manifest.frames:
        raise ManifestMalformed(f"{C.INDEX_FILENAME} lists no frames")

    # stable: frames sharing t_ns keep file order
    entries = sorted(enumerate(manifest.frames), key=lambda p: p[1].t_ns)
    frames = []
    for ordinal, (pos, entry) in enumerate(entries):
        paths = {k: norm_path(v) for k, v in entry.streams.items() if v}
        frames.append(ManifestFrame(
            ordinal=ordinal,
            timestamp_ns=entry.t_ns,
            stream_paths=paths,
            source_index=entry.idx if entry.idx is not None else pos,
        ))
    return frames


def scan_aux_files(storage: StorageProvider, subdir: str, prefix: str,
                   ext: str = C.AUX_EXT) -> List[TimestampedFileRef]:
    """
    Timestamped files for one auxiliary stream. Prefers <root>/<subdir>;
    falls back to the root when that directory does not exist.
    """
    base = subdir
    entries = storage.list_dir(subdir)
    if entries is None:
        base = ""
        entries = storage.list_dir("") or []

    index = AuxIndex()
    skipped = 0
    for entry in entries:
        if not entry.is_file or not entry.name.startswith(prefix) or not entry.name.endswith(ext):
            continue
        ts = parse_filename_timestamp(entry.name, prefix, ext)
        if ts is None:
            skipped += 1
            continue
        index.add(TimestampedFileRef(timestamp_ms=ts, locator=join_path(base, entry.name)))
    index.finalize()
    if skipped:
        log.debug("[catalog] skipped %d %s* files without a valid timestamp", skipped, prefix)
    return index.refs


def load(storage: StorageProvider) -> PlaybackState:
    """
    Build a fresh PlaybackState for the recording behind storage.
    Raises ManifestMissing / ManifestMalformed / PermissionDenied.
    """
    name = getattr(storage, "name", "")
    try:
        storage.open_root()
        frames = _read_manifest(storage)
        tag_index = scan_aux_files(storage, C.TAG_SUBDIR, C.TAG_PREFIX)
        beam_index = scan_aux_files(storage, C.BEAM_SUBDIR, C.BEAM_PREFIX)
    except OSError as e:
        raise PermissionDenied(str(e) or f"access denied: {name}") from e

    log.info(
        "[catalog] loaded %s: %d frames, %d uwb files, %d mmwave files",
        name or "<recording>", len(frames), len(tag_index), len(beam_index),
    )
    return PlaybackState(manifest=frames, tag_index=tag_index, beam_index=beam_index, name=name)
