"""
BenriQR - Contact QR Codes
============================
Convert MeCard contact records into QR codes and HTML galleries.

License: MIT
"""

from benri_qr.version import __version__

# Core imports
from benri_qr.domain import QREncodable, MeCard
from benri_qr.config import QRSettings, get_settings
from benri_qr.pipeline import RenderOptions, render_file, xlsx_to_html

# Errors
from benri_qr.errors import (
    BenriQRException,
    SourceError,
    CapacityError,
    RenderError,
    OutputError,
)

__all__ = [
    # Version
    "__version__",

    # Core
    "QREncodable",
    "MeCard",
    "QRSettings",
    "get_settings",
    "RenderOptions",
    "render_file",
    "xlsx_to_html",

    # Errors
    "BenriQRException",
    "SourceError",
    "CapacityError",
    "RenderError",
    "OutputError",
]
