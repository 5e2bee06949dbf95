"""
BenriQR - Record Loaders
==========================
Load records from a JSON file (single record) or from the first sheet of a
workbook (batch).

Workbook layout: row 1 holds field names (``Name``, ``Reading``, ``TEL``,
``EMail``, ``Memo``, ``Birthday``, ``Address``, ``URL``, ``Nickname``),
one record per following row. Unknown columns are ignored, blank rows are
skipped, row order is preserved.
"""

import json
from datetime import date, datetime, time
from io import BytesIO
from pathlib import Path
from typing import Any, BinaryIO, Dict, List, Optional, Type, Union
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from benri_qr.domain.encodable import QREncodable
from benri_qr.domain.models import MeCard
from benri_qr.errors import SourceError
from benri_qr.logging_setup import get_logger

logger = get_logger("io.loaders")

WorkbookSource = Union[str, Path, bytes, BinaryIO]


# ============================================================================
# JSON
# ============================================================================

def load_json(
    path: Union[str, Path],
    card_type: Type[QREncodable] = MeCard
) -> QREncodable:
    """
    Load one record from a JSON object.

    Args:
        path: JSON file
        card_type: Record type to build

    Returns:
        QREncodable: The record

    Raises:
        SourceError: Unreadable file, invalid JSON, not an object, bad fields
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SourceError(
            f"Cannot read {path}: {e.strerror or e}",
            code="SOURCE_UNREADABLE",
            details={"path": str(path)}
        ) from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise SourceError(
            f"Invalid JSON in {path}: {e}",
            code="INVALID_JSON",
            details={"path": str(path)}
        ) from e

    if not isinstance(data, dict):
        raise SourceError(
            f"Expected a JSON object in {path}, got {type(data).__name__}",
            code="INVALID_JSON",
            details={"path": str(path)}
        )

    card = card_type.from_dict(data)
    logger.debug("Record loaded from JSON", extra_data={"path": str(path)})
    return card


# ============================================================================
# WORKBOOK
# ============================================================================

def cell_to_text(value: Any) -> Optional[str]:
    """
    Convert a cell value to field text, None for empty cells.

    Examples:
        >>> cell_to_text(12345678.0)
        '12345678'
        >>> cell_to_text("  Tokyo ")
        'Tokyo'
    """
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        text = str(int(value))
    elif isinstance(value, datetime):
        text = value.date().isoformat() if value.time() == time() else value.isoformat()
    elif isinstance(value, (date, time)):
        text = value.isoformat()
    else:
        text = str(value)

    text = text.strip()
    return text or None


def _open_workbook(source: WorkbookSource):
    if isinstance(source, (bytes, bytearray)):
        source = BytesIO(source)
    elif isinstance(source, Path):
        source = str(source)

    try:
        return load_workbook(source, read_only=True, data_only=True)
    except FileNotFoundError as e:
        raise SourceError(
            f"Cannot read {source}: file not found",
            code="SOURCE_UNREADABLE",
            details={"path": str(source)}
        ) from e
    except (InvalidFileException, BadZipFile, KeyError, OSError) as e:
        raise SourceError(
            f"Not a readable workbook: {e}",
            code="INVALID_WORKBOOK"
        ) from e


def _map_header(header_row, card_type: Type[QREncodable]) -> Dict[int, str]:
    columns: Dict[int, str] = {}
    for index, raw in enumerate(header_row):
        if not isinstance(raw, str) or raw.strip() not in card_type.FIELD_NAMES:
            continue
        field = raw.strip()
        if field in columns.values():
            raise SourceError(
                f"Duplicate column in header row: {field}",
                code="INVALID_HEADER",
                details={"duplicate": field, "column": index + 1}
            )
        columns[index] = field

    missing = [f for f in card_type.REQUIRED_FIELDS if f not in columns.values()]
    if missing:
        raise SourceError(
            f"Header row does not contain required column(s): {', '.join(missing)}",
            code="INVALID_HEADER",
            details={"missing": missing}
        )
    return columns


def load_excel(
    source: WorkbookSource,
    card_type: Type[QREncodable] = MeCard
) -> List[QREncodable]:
    """
    Load records from the first sheet of a workbook.

    Args:
        source: Path, binary file object or raw bytes of an .xlsx file
        card_type: Record type to build

    Returns:
        List[QREncodable]: Records in row order

    Raises:
        SourceError: No sheet, no header, missing required column, or a row
            without a required value (``details["row"]`` is the sheet row)
    """
    workbook = _open_workbook(source)
    try:
        if not workbook.worksheets:
            raise SourceError("Cannot find a sheet", code="NO_SHEET")

        sheet = workbook.worksheets[0]
        rows = sheet.iter_rows(values_only=True)

        header_row = next(rows, None)
        if header_row is None:
            raise SourceError(
                f"Sheet '{sheet.title}' has no header row",
                code="INVALID_HEADER",
                details={"sheet": sheet.title}
            )
        columns = _map_header(header_row, card_type)

        cards: List[QREncodable] = []
        for row_number, row in enumerate(rows, start=2):
            if all(cell_to_text(cell) is None for cell in row):
                continue

            data = {
                field: cell_to_text(row[index]) if index < len(row) else None
                for index, field in columns.items()
            }
            try:
                cards.append(card_type.from_dict(data))
            except SourceError as e:
                raise SourceError(
                    f"Row {row_number}: {e.message}",
                    code=e.code,
                    details={**e.details, "row": row_number, "sheet": sheet.title}
                ) from e
    finally:
        workbook.close()

    logger.info(
        "Records loaded from workbook",
        extra_data={"sheet": sheet.title, "records": len(cards)}
    )
    return cards


__all__ = [
    "load_json",
    "load_excel",
    "cell_to_text",
]
