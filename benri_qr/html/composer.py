"""
BenriQR - HTML Composer
=========================
Stream an HTML gallery of QR codes to a text sink.

Document layout:

    <!DOCTYPE html>
    <html lang="..."><head><meta charset="utf-8"><title>...</title><style>
    ...built-in stylesheet...
    </style></head>
    <body>
    <div><figure><figcaption>label</figcaption>
    <svg ...>...</svg>
    </figure></div>
    ...
    </body></html>
"""

from html import escape
from typing import Iterable, Optional, TextIO, Tuple

from benri_qr.constants import DEFAULT_LANG
from benri_qr.errors import ComposeError, OutputError
from benri_qr.html.assets import default_stylesheet
from benri_qr.logging_setup import get_logger

logger = get_logger("html.composer")


# ============================================================================
# TEMPLATES
# ============================================================================

HEADER_TEMPLATE = (
    '<!DOCTYPE html>\n'
    '<html lang="{lang}"><head><meta charset="utf-8"><title>{title}</title><style>\n'
    '{css}\n'
    '</style></head>\n'
    '<body>\n'
)

BLOCK_TEMPLATE = (
    '<div><figure><figcaption>{label}</figcaption>\n'
    '{image}\n'
    '</figure></div>\n'
)

FOOTER = '</body></html>\n'


# ============================================================================
# COMPOSER
# ============================================================================

class HtmlComposer:
    """
    Incremental HTML document writer.

    Each call writes straight to ``sink``; nothing is buffered here.
    Title and labels are HTML-escaped, ``lang`` is inserted verbatim.

    Examples:
        >>> with HtmlComposer(sys.stdout, title="Team", lang="en") as doc:
        ...     doc.add("John", svg_markup)

        >>> HtmlComposer(buffer, "Team").compose([("John", svg_markup)])
    """

    def __init__(
        self,
        sink: TextIO,
        title: str,
        lang: str = DEFAULT_LANG,
        css: Optional[str] = None
    ):
        self.sink = sink
        self.title = title
        self.lang = lang
        self.css = default_stylesheet() if css is None else css
        self.blocks = 0
        self._state = "new"

    def _write(self, text: str) -> None:
        try:
            self.sink.write(text)
        except OSError as e:
            raise OutputError(
                f"Failed to write document: {e}",
                code="OUTPUT_FAILED",
                details={"blocks_written": self.blocks}
            ) from e

    def _require(self, state: str, action: str) -> None:
        if self._state != state:
            raise ComposeError(
                f"Cannot {action} a document in state '{self._state}'",
                code="INVALID_STATE"
            )

    def begin(self) -> None:
        """Write the header (title and stylesheet)"""
        self._require("new", "begin")
        self._write(HEADER_TEMPLATE.format(
            lang=self.lang,
            title=escape(self.title),
            css=self.css,
        ))
        self._state = "open"

    def add(self, label: str, image: str) -> None:
        """Write one figure; ``image`` is inserted as-is"""
        self._require("open", "add to")
        self._write(BLOCK_TEMPLATE.format(label=escape(label), image=image))
        self.blocks += 1

    def end(self) -> None:
        """Write the footer"""
        self._require("open", "end")
        self._write(FOOTER)
        self._state = "closed"
        logger.debug(
            "Document composed",
            extra_data={"title": self.title, "blocks": self.blocks}
        )

    def compose(self, items: Iterable[Tuple[str, str]]) -> int:
        """
        Write a whole document from (label, image) pairs.

        Returns:
            int: Number of figures written
        """
        with self:
            for label, image in items:
                self.add(label, image)
        return self.blocks

    def __enter__(self) -> "HtmlComposer":
        self.begin()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        # Aborted documents are left without footer
        if exc_type is None:
            self.end()
        else:
            self._state = "aborted"
        return False


__all__ = [
    "HtmlComposer",
    "HEADER_TEMPLATE",
    "BLOCK_TEMPLATE",
    "FOOTER",
]
