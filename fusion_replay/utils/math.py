"""
Common mathematical utility functions.
"""


def clip(v, lo, hi):
    """Clip value v to range [lo, hi]."""
    return lo if v < lo else hi if v > hi else v
