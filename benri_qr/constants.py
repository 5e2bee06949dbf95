"""
BenriQR - Constants
=====================
Fixed values of the MECARD format and the rendering pipeline.
"""

from typing import Final, Tuple


# ============================================================================
# MECARD FORMAT
# ============================================================================

MECARD_SCHEME: Final[str] = "MECARD:"

NAME_TAG: Final[str] = "N"

# (attribute, external field name, MECARD tag) in canonical encoding order.
# TEL-AV is omitted, it is obsolete.
OPTIONAL_FIELDS: Final[Tuple[Tuple[str, str, str], ...]] = (
    ("reading", "Reading", "SOUND"),
    ("tel", "TEL", "TEL"),
    ("email", "EMail", "EMAIL"),
    ("memo", "Memo", "NOTE"),
    ("birthday", "Birthday", "BDAY"),
    ("address", "Address", "ADR"),
    ("url", "URL", "URL"),
    ("nickname", "Nickname", "NICKNAME"),
)

NAME_FIELD: Final[str] = "Name"

# External field name -> MeCard attribute
FIELD_ATTRIBUTES: Final[dict] = {
    NAME_FIELD: "name",
    **{external: attr for attr, external, _ in OPTIONAL_FIELDS},
}

FIELD_NAMES: Final[Tuple[str, ...]] = tuple(FIELD_ATTRIBUTES)


# ============================================================================
# RENDERING
# ============================================================================

# Lowest tier, highest capacity
ERROR_CORRECTION_LEVEL: Final[str] = "L"

DEFAULT_QUIET_ZONE: Final[int] = 4

DEFAULT_MIN_WIDTH: Final[int] = 128
DEFAULT_MIN_HEIGHT: Final[int] = 128

DEFAULT_LIGHT_COLOR: Final[str] = "transparent"
DEFAULT_DARK_COLOR: Final[str] = "black"

DEFAULT_LANG: Final[str] = "ja"


# ============================================================================
# INPUT FORMATS
# ============================================================================

JSON_EXTENSIONS: Final[frozenset] = frozenset({".json"})

# Workbook formats understood by openpyxl
SPREADSHEET_EXTENSIONS: Final[frozenset] = frozenset({".xlsx", ".xlsm", ".xltx", ".xltm"})


__all__ = [
    "MECARD_SCHEME",
    "NAME_TAG",
    "NAME_FIELD",
    "OPTIONAL_FIELDS",
    "FIELD_ATTRIBUTES",
    "FIELD_NAMES",
    "ERROR_CORRECTION_LEVEL",
    "DEFAULT_QUIET_ZONE",
    "DEFAULT_MIN_WIDTH",
    "DEFAULT_MIN_HEIGHT",
    "DEFAULT_LIGHT_COLOR",
    "DEFAULT_DARK_COLOR",
    "DEFAULT_LANG",
    "JSON_EXTENSIONS",
    "SPREADSHEET_EXTENSIONS",
]
