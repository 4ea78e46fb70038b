"""
.. include:: ../README.md
"""

__all__ = [
    "images",
    "csi",
    "image",
    "config",
    "exceptions",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
