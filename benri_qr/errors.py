"""
BenriQR - Custom Exceptions
=============================
Exception hierarchy for the conversion pipeline.

Every exception carries the pipeline ``stage`` that failed
(load, encode, symbol, render, compose) so front ends can report it.
"""

from typing import Optional


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class BenriQRException(Exception):
    """
    Base exception for all BenriQR errors.

    Attributes:
        message (str): Error message
        code (str): Error code (e.g. "SOURCE_ERROR")
        details (dict): Additional details (record_index, label, path, ...)
    """

    stage: str = "pipeline"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

        super().__init__(self.message)

    @property
    def record_index(self) -> Optional[int]:
        """Index of the failing record, when the error is record scoped"""
        return self.details.get("record_index")

    def to_dict(self) -> dict:
        """Serialize exception for logging"""
        return {
            "error": self.code,
            "stage": self.stage,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        if self.details:
            return f"[{self.code}] {self.message} | Details: {self.details}"
        return f"[{self.code}] {self.message}"


# ============================================================================
# CONFIGURATION ERRORS
# ============================================================================

class ConfigError(BenriQRException):
    """Configuration error"""
    stage = "config"


class InvalidConfigError(ConfigError):
    """Invalid configuration value"""
    pass


# ============================================================================
# SOURCE ERRORS
# ============================================================================

class SourceError(BenriQRException):
    """Input could not be loaded (missing file, bad JSON, bad sheet)"""
    stage = "load"


class UnsupportedFormatError(SourceError):
    """Input file extension is not recognized"""
    pass


# ============================================================================
# ENCODING ERRORS
# ============================================================================

class EncodeError(BenriQRException):
    """Record could not be encoded"""
    stage = "encode"


class CapacityError(EncodeError):
    """Encoded string exceeds the QR symbol capacity"""
    stage = "symbol"


# ============================================================================
# RENDER / COMPOSE ERRORS
# ============================================================================

class RenderError(BenriQRException):
    """Symbol matrix could not be rendered"""
    stage = "render"


class ComposeError(BenriQRException):
    """HTML document could not be composed"""
    stage = "compose"


class OutputError(ComposeError):
    """Writing to the output sink failed"""
    pass


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_record_error(
    error: BenriQRException,
    record_index: int,
    label: str
) -> BenriQRException:
    """
    Re-create ``error`` with the failing record attached.

    Args:
        error: Original exception
        record_index: Zero-based position of the record in the batch
        label: Display label of the record

    Returns:
        BenriQRException: Same class, details enriched

    Example:
        >>> raise format_record_error(exc, 2, "John") from exc
    """
    details = {**error.details, "record_index": record_index, "label": label}
    return error.__class__(
        message=f"Record #{record_index} ({label}): {error.message}",
        code=error.code,
        details=details
    )


# ============================================================================
# EXPORT
# ============================================================================

__all__ = [
    "BenriQRException",
    "ConfigError",
    "InvalidConfigError",
    "SourceError",
    "UnsupportedFormatError",
    "EncodeError",
    "CapacityError",
    "RenderError",
    "ComposeError",
    "OutputError",
    "format_record_error",
]
