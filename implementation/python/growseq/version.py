"""growseq version information."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed growseq version."""
    return __version__
