"""
BenriQR - QR Encodable Interface
==================================
Abstract base for record types that can be turned into QR codes.

A record type implements two things:

- ``encode()``: the text stored in the QR symbol
- ``display()``: a short label (the ``<figcaption>`` in HTML)

plus ``from_dict()`` for deserialization. Symbol generation, SVG rendering,
loading and HTML composition are provided here on top of those, so new
record shapes plug into the pipeline without touching it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, ClassVar, Iterable, List, Mapping, TextIO, Tuple, Type, TypeVar, Union

from benri_qr.constants import (
    DEFAULT_MIN_WIDTH,
    DEFAULT_MIN_HEIGHT,
    DEFAULT_LIGHT_COLOR,
    DEFAULT_DARK_COLOR,
    DEFAULT_LANG,
    DEFAULT_QUIET_ZONE,
)
from benri_qr.errors import BenriQRException, format_record_error
from benri_qr.qr.generator import generate_matrix
from benri_qr.qr.renderer import SvgRenderer
from benri_qr.html.composer import HtmlComposer
from benri_qr.logging_setup import get_logger, PerformanceLogger

logger = get_logger("domain.encodable")

E = TypeVar("E", bound="QREncodable")


class QREncodable(ABC):
    """
    Record type convertible into a QR code.

    Subclasses declare ``FIELD_NAMES`` (external column/key names) and
    ``REQUIRED_FIELDS``, which the loaders use to map headers.
    """

    FIELD_NAMES: ClassVar[Tuple[str, ...]] = ()
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()

    @abstractmethod
    def encode(self) -> str:
        """Encode fields into the string stored in the QR code"""

    @abstractmethod
    def display(self) -> str:
        """Short descriptive label, used as ``figcaption`` in HTML"""

    @classmethod
    @abstractmethod
    def from_dict(cls: Type[E], data: Mapping[str, Any]) -> E:
        """Build an instance from a mapping keyed by ``FIELD_NAMES``"""

    # ========================================================================
    # RENDERING
    # ========================================================================

    def svg(
        self,
        width: int = DEFAULT_MIN_WIDTH,
        height: int = DEFAULT_MIN_HEIGHT,
        light: str = DEFAULT_LIGHT_COLOR,
        dark: str = DEFAULT_DARK_COLOR,
        quiet_zone: int = DEFAULT_QUIET_ZONE,
    ) -> str:
        """
        Create the SVG markup of ``self.encode()``.

        Args:
            width: Minimum image width
            height: Minimum image height
            light: Background color
            dark: Module color
            quiet_zone: Quiet zone in modules

        Returns:
            str: SVG element

        Raises:
            CapacityError: If the encoded string does not fit a QR symbol
        """
        matrix = generate_matrix(self.encode(), quiet_zone=quiet_zone)
        return SvgRenderer(width, height, light, dark).render(matrix)

    @classmethod
    def write_html(
        cls,
        sink: TextIO,
        cards: Iterable[QREncodable],
        title: str,
        lang: str = DEFAULT_LANG,
        width: int = DEFAULT_MIN_WIDTH,
        height: int = DEFAULT_MIN_HEIGHT,
        light: str = DEFAULT_LIGHT_COLOR,
        dark: str = DEFAULT_DARK_COLOR,
        quiet_zone: int = DEFAULT_QUIET_ZONE,
    ) -> int:
        """
        Stream an HTML document with one figure per card to ``sink``.

        The SVG of each card is rendered before its block is written. The
        first failing card aborts the document (no footer is written) and
        the error is re-raised with ``record_index`` and ``label``.

        Returns:
            int: Number of cards written
        """
        count = 0
        with PerformanceLogger(logger, "write_html"):
            with HtmlComposer(sink, title=title, lang=lang) as composer:
                for index, card in enumerate(cards):
                    label = card.display()
                    try:
                        image = card.svg(width, height, light, dark, quiet_zone)
                    except BenriQRException as e:
                        raise format_record_error(e, index, label) from e
                    composer.add(label, image)
                    count += 1

        logger.info(
            "HTML document written",
            extra_data={"title": title, "records": count}
        )
        return count

    # ========================================================================
    # LOADING
    # ========================================================================

    @classmethod
    def from_json(cls: Type[E], path: Union[str, Path]) -> E:
        """Load a single instance from a JSON file"""
        from benri_qr.io.loaders import load_json
        return load_json(path, card_type=cls)

    @classmethod
    def from_excel(cls: Type[E], source: Any) -> List[E]:
        """Batch load from the first sheet of a workbook"""
        from benri_qr.io.loaders import load_excel
        return load_excel(source, card_type=cls)


__all__ = ["QREncodable"]
