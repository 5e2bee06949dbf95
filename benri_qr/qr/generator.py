"""
BenriQR - QR Symbol Generator
===============================
Turn an encoded string into a QR module matrix.

The symbol itself (Reed-Solomon, masking, layout) is built by ``qrcode``;
this module fixes the error correction level and maps its failures onto
BenriQR exceptions.
"""

from typing import List

import qrcode
import qrcode.constants
from qrcode.exceptions import DataOverflowError

from benri_qr.constants import ERROR_CORRECTION_LEVEL, DEFAULT_QUIET_ZONE
from benri_qr.errors import CapacityError, EncodeError
from benri_qr.logging_setup import get_logger

logger = get_logger("qr.generator")

Matrix = List[List[bool]]


# ============================================================================
# QR CODE GENERATOR
# ============================================================================

class QRCodeGenerator:
    """
    QR symbol generator.

    Examples:
        >>> generator = QRCodeGenerator()
        >>> matrix = generator.matrix("MECARD:N:John;")
        >>> len(matrix) == len(matrix[0])
        True
    """

    LEVELS = {
        "L": qrcode.constants.ERROR_CORRECT_L,
        "M": qrcode.constants.ERROR_CORRECT_M,
        "Q": qrcode.constants.ERROR_CORRECT_Q,
        "H": qrcode.constants.ERROR_CORRECT_H,
    }

    def __init__(
        self,
        error_correction: str = ERROR_CORRECTION_LEVEL,
        quiet_zone: int = DEFAULT_QUIET_ZONE
    ):
        """
        Initialize QR generator.

        Args:
            error_correction: Error correction level (L, M, Q, H)
            quiet_zone: Border size in modules
        """
        if quiet_zone < 0:
            raise EncodeError(
                f"Quiet zone must be >= 0, got {quiet_zone}",
                details={"quiet_zone": quiet_zone}
            )

        self.level = error_correction.upper()
        self.error_correction = self._get_error_correction(self.level)
        self.quiet_zone = quiet_zone

    def _get_error_correction(self, level: str) -> int:
        try:
            return self.LEVELS[level]
        except KeyError:
            raise EncodeError(
                f"Unsupported error correction level: {level}",
                details={"level": level}
            ) from None

    def matrix(self, data: str) -> Matrix:
        """
        Build the module matrix of ``data``, quiet zone included.

        The smallest QR version holding ``data`` is chosen.

        Args:
            data: Text to encode

        Returns:
            Matrix: Square matrix, True for dark modules

        Raises:
            CapacityError: If ``data`` does not fit version 40
        """
        qr = qrcode.QRCode(
            version=None,
            error_correction=self.error_correction,
            box_size=1,
            border=self.quiet_zone,
        )
        qr.add_data(data)

        # qrcode >= 8 rejects version 41 in the setter before DataOverflowError
        try:
            qr.make(fit=True)
        except (DataOverflowError, ValueError) as e:
            raise CapacityError(
                f"Encoded string too long for a QR symbol at level {self.level}",
                code="CAPACITY_EXCEEDED",
                details={"length": len(data), "level": self.level}
            ) from e

        logger.debug(
            "QR symbol generated",
            extra_data={"version": qr.version, "length": len(data)}
        )
        return [[bool(module) for module in row] for row in qr.get_matrix()]


def generate_matrix(data: str, quiet_zone: int = DEFAULT_QUIET_ZONE) -> Matrix:
    """
    Module matrix of ``data`` at the fixed error correction level.

    Args:
        data: Encoded string
        quiet_zone: Border size in modules

    Returns:
        Matrix: Square boolean matrix
    """
    return QRCodeGenerator(quiet_zone=quiet_zone).matrix(data)


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "Matrix",
    "QRCodeGenerator",
    "generate_matrix",
]
