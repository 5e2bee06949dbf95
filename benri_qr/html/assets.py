"""
BenriQR - Built-in Assets
===========================
Stylesheet shipped inside the package.
"""

from functools import lru_cache
from importlib import resources

STYLESHEET_NAME = "default.css"


@lru_cache(maxsize=1)
def default_stylesheet() -> str:
    """
    Built-in stylesheet inserted into every document.

    Read once from package data, then served from cache.
    """
    return (
        (resources.files("benri_qr") / "assets" / STYLESHEET_NAME)
        .read_text(encoding="utf-8")
    )


__all__ = ["default_stylesheet", "STYLESHEET_NAME"]
