"""
BenriQR - Input
=================
Record loaders for JSON and workbook sources.
"""

from benri_qr.io.loaders import load_json, load_excel, cell_to_text

__all__ = [
    "load_json",
    "load_excel",
    "cell_to_text",
]
