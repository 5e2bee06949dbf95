"""
BenriQR - Conversion Pipeline
===============================
Input file -> SVG (single record) or HTML document (batch).

Both entry points build the complete output in memory and return it, so
callers only write to their final destination after every record
succeeded.
"""

from dataclasses import dataclass, replace
from io import StringIO
from pathlib import Path
from typing import Optional, Type, Union

from benri_qr.config import QRSettings, get_settings
from benri_qr.constants import (
    DEFAULT_MIN_WIDTH,
    DEFAULT_MIN_HEIGHT,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_DARK_COLOR,
    DEFAULT_LANG,
    DEFAULT_QUIET_ZONE,
    JSON_EXTENSIONS,
    SPREADSHEET_EXTENSIONS,
)
from benri_qr.domain.encodable import QREncodable
from benri_qr.domain.models import MeCard
from benri_qr.errors import UnsupportedFormatError
from benri_qr.io.loaders import WorkbookSource
from benri_qr.logging_setup import get_logger

logger = get_logger("pipeline")

SINGLE_MODE = "single"
BATCH_MODE = "batch"


# ============================================================================
# OPTIONS
# ============================================================================

@dataclass(frozen=True)
class RenderOptions:
    """Request-scoped rendering parameters"""
    width: int = DEFAULT_MIN_WIDTH
    height: int = DEFAULT_MIN_HEIGHT
    light: str = DEFAULT_LIGHT_COLOR
    dark: str = DEFAULT_DARK_COLOR
    quiet_zone: int = DEFAULT_QUIET_ZONE
    lang: str = DEFAULT_LANG
    title: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: Optional[QRSettings] = None, **overrides) -> "RenderOptions":
        """
        Options from settings, ``overrides`` set to None are ignored.

        Example:
            >>> RenderOptions.from_settings(width=256, title=None).width
            256
        """
        settings = settings or get_settings()
        options = cls(
            width=settings.default_width,
            height=settings.default_height,
            light=settings.light_color,
            dark=settings.dark_color,
            quiet_zone=settings.quiet_zone,
            lang=settings.default_lang,
            title=settings.default_title,
        )
        return replace(options, **{k: v for k, v in overrides.items() if v is not None})


# ============================================================================
# DISPATCH
# ============================================================================

def detect_mode(path: Union[str, Path]) -> str:
    """
    Conversion mode from the file extension.

    Returns:
        str: ``"single"`` for JSON, ``"batch"`` for workbooks

    Raises:
        UnsupportedFormatError: Any other extension
    """
    suffix = Path(path).suffix.lower()
    if suffix in JSON_EXTENSIONS:
        return SINGLE_MODE
    if suffix in SPREADSHEET_EXTENSIONS:
        return BATCH_MODE
    raise UnsupportedFormatError(
        "Invalid file format.",
        code="UNSUPPORTED_FORMAT",
        details={"path": str(path), "extension": suffix}
    )


def render_single(card: QREncodable, options: RenderOptions) -> str:
    """SVG markup of one record"""
    return card.svg(
        options.width,
        options.height,
        options.light,
        options.dark,
        options.quiet_zone,
    )


def render_batch(
    cards,
    options: RenderOptions,
    card_type: Type[QREncodable] = MeCard
) -> str:
    """HTML document of ``cards``, title defaults to ``"qr"``"""
    buffer = StringIO()
    card_type.write_html(
        buffer,
        cards,
        title=options.title if options.title is not None else "qr",
        lang=options.lang,
        width=options.width,
        height=options.height,
        light=options.light,
        dark=options.dark,
        quiet_zone=options.quiet_zone,
    )
    return buffer.getvalue()


def render_file(
    path: Union[str, Path],
    options: Optional[RenderOptions] = None,
    card_type: Type[QREncodable] = MeCard
) -> str:
    """
    Convert an input file.

    ``.json`` gives the SVG of its record, a workbook gives an HTML
    document titled ``options.title`` or the file stem.

    Raises:
        UnsupportedFormatError: Unknown extension (nothing is read)
        SourceError: Input cannot be loaded
        CapacityError: A record does not fit a QR symbol
    """
    path = Path(path)
    options = options or RenderOptions.from_settings()
    mode = detect_mode(path)

    logger.info("Converting input", extra_data={"path": str(path), "mode": mode})

    if mode == SINGLE_MODE:
        return render_single(card_type.from_json(path), options)

    cards = card_type.from_excel(path)
    if options.title is None:
        options = replace(options, title=path.stem)
    return render_batch(cards, options, card_type)


def xlsx_to_html(
    xlsx: WorkbookSource,
    title: str,
    lang: str = DEFAULT_LANG,
    width: int = DEFAULT_MIN_WIDTH,
    height: int = DEFAULT_MIN_HEIGHT,
    light: str = DEFAULT_LIGHT_COLOR,
    dark: str = DEFAULT_DARK_COLOR,
) -> str:
    """
    Convert MeCard rows of a workbook into an HTML document.

    Args:
        xlsx: Raw bytes (or path / file object) of an .xlsx file
        title: Document title
        lang: ``<html lang="...">``

    Returns:
        str: HTML document
    """
    options = RenderOptions(
        width=width,
        height=height,
        light=light,
        dark=dark,
        lang=lang,
        title=title,
    )
    return render_batch(MeCard.from_excel(xlsx), options)


__all__ = [
    "RenderOptions",
    "SINGLE_MODE",
    "BATCH_MODE",
    "detect_mode",
    "render_single",
    "render_batch",
    "render_file",
    "xlsx_to_html",
]
