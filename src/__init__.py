"""versionfusion: semantic version bump detection by weighted signal fusion."""

from versionfusion.version import __version__

__all__ = ["__version__"]
