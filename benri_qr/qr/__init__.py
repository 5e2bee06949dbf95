"""
BenriQR - QR Code Generation
==============================
QR symbol generation and SVG rendering.
"""

from benri_qr.qr.generator import (
    Matrix,
    QRCodeGenerator,
    generate_matrix,
)
from benri_qr.qr.renderer import SvgRenderer

__all__ = [
    # Generator
    "Matrix",
    "QRCodeGenerator",
    "generate_matrix",

    # Renderer
    "SvgRenderer",
]
