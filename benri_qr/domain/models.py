"""
BenriQR - Domain Models
=========================
Contact record in MeCard format.

Models:
- MeCard: name + 8 optional fields, encoded as ``MECARD:N:...;``

Instances are immutable (frozen).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from benri_qr.constants import (
    MECARD_SCHEME,
    NAME_TAG,
    NAME_FIELD,
    OPTIONAL_FIELDS,
    FIELD_NAMES,
)
from benri_qr.domain.encodable import QREncodable
from benri_qr.errors import SourceError


# ============================================================================
# MECARD
# ============================================================================

@dataclass(frozen=True)
class MeCard(QREncodable):
    """
    MeCard contact data.

    Attributes:
        name (str): Full name, always encoded first as ``N``
        reading (Optional[str]): Phonetic reading (``SOUND``)
        tel (Optional[str]): Telephone (``TEL``)
        email (Optional[str]): E-mail (``EMAIL``)
        memo (Optional[str]): Free note (``NOTE``)
        birthday (Optional[str]): Birthday (``BDAY``)
        address (Optional[str]): Postal address (``ADR``)
        url (Optional[str]): Home page (``URL``)
        nickname (Optional[str]): Nickname (``NICKNAME``)

    None means absent; empty strings are normalized to None so an absent
    field is never encoded as an empty tag.

    Examples:
        >>> MeCard("John", tel="1234-5678").encode()
        'MECARD:N:John;TEL:1234-5678;'
    """

    FIELD_NAMES = FIELD_NAMES
    REQUIRED_FIELDS = (NAME_FIELD,)

    name: str
    reading: Optional[str] = None
    tel: Optional[str] = None
    email: Optional[str] = None
    memo: Optional[str] = None
    birthday: Optional[str] = None
    address: Optional[str] = None
    url: Optional[str] = None
    nickname: Optional[str] = None

    def __post_init__(self):
        for attr, _, _ in OPTIONAL_FIELDS:
            if getattr(self, attr) == "":
                object.__setattr__(self, attr, None)

    # ========================================================================
    # QREncodable
    # ========================================================================

    def encode(self) -> str:
        """
        Encode as ``MECARD:N:<name>;[TAG:value;]...``.

        Optional fields follow the fixed order SOUND, TEL, EMAIL, NOTE,
        BDAY, ADR, URL, NICKNAME. Values are not escaped.
        """
        fields = [(NAME_TAG, self.name)]
        for attr, _, tag in OPTIONAL_FIELDS:
            value = getattr(self, attr)
            if value is not None:
                fields.append((tag, value))

        return MECARD_SCHEME + "".join(f"{tag}:{value};" for tag, value in fields)

    def display(self) -> str:
        return self.name

    # ========================================================================
    # SERIALIZATION
    # ========================================================================

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MeCard:
        """
        Build from external field names (``Name``, ``TEL``, ``EMail``, ...).

        Unknown keys are ignored.

        Raises:
            SourceError: If ``Name`` is missing or a value is not text
        """
        name = data.get(NAME_FIELD)
        if name is None:
            raise SourceError(
                f"Missing required field '{NAME_FIELD}'",
                code="MISSING_FIELD",
                details={"field": NAME_FIELD}
            )
        if not isinstance(name, str):
            raise SourceError(
                f"Field '{NAME_FIELD}' must be a string, got {type(name).__name__}",
                code="INVALID_FIELD",
                details={"field": NAME_FIELD}
            )

        values: Dict[str, Optional[str]] = {}
        for attr, external, _ in OPTIONAL_FIELDS:
            value = data.get(external)
            if value is not None and not isinstance(value, str):
                raise SourceError(
                    f"Field '{external}' must be a string or null, got {type(value).__name__}",
                    code="INVALID_FIELD",
                    details={"field": external}
                )
            values[attr] = value

        return cls(name=name, **values)

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Serialize with external field names (None for absent fields)"""
        result = {NAME_FIELD: self.name}
        for attr, external, _ in OPTIONAL_FIELDS:
            result[external] = getattr(self, attr)
        return result


__all__ = ["MeCard"]
