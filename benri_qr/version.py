"""
BenriQR - Version Management
==============================
Semantic version of the package.
"""

from typing import NamedTuple


class VersionInfo(NamedTuple):
    """Version information structure"""
    major: int
    minor: int
    patch: int
    prerelease: str = ""


VERSION = VersionInfo(
    major=0,
    minor=2,
    patch=0,
    prerelease="",  # alpha, beta, rc1, etc.
)


def get_version_string() -> str:
    """
    Get version as string.

    Example:
        >>> get_version_string()
        '0.2.0'
    """
    version_str = f"{VERSION.major}.{VERSION.minor}.{VERSION.patch}"

    if VERSION.prerelease:
        version_str += f"-{VERSION.prerelease}"

    return version_str


__version__ = get_version_string()
__version_info__ = VERSION

__all__ = [
    "__version__",
    "__version_info__",
    "VERSION",
    "get_version_string",
]
