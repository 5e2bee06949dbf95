"""
BenriQR - HTML Output
=======================
Document composition and built-in stylesheet.
"""

from benri_qr.html.assets import default_stylesheet
from benri_qr.html.composer import HtmlComposer

__all__ = [
    "HtmlComposer",
    "default_stylesheet",
]
