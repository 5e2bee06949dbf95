"""
BenriQR - Domain
==================
Record types and the QR encodable interface.
"""

from benri_qr.domain.encodable import QREncodable
from benri_qr.domain.models import MeCard

__all__ = [
    "QREncodable",
    "MeCard",
]
