"""
Load failures. Anything else that goes wrong while reading a recording is
absorbed per field by the assembler.
"""


class LoadError(Exception):
    """A recording could not be loaded; the previous session is left as-is."""

    kind = "load_error"


class ManifestMissing(LoadError):
    kind = "manifest_missing"


class ManifestMalformed(LoadError):
    kind = "manifest_malformed"


class PermissionDenied(LoadError):
    kind = "permission_denied"
