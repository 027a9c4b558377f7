"""ticketlink - CI check that links pull requests to tracking tickets."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the package version."""
    return __version__
