from __future__ import annotations
import re
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def new_id() -> str:
    """Identifiant 24 hex, même forme qu'un ObjectId Mongo."""
    return uuid.uuid4().hex[:24]


def is_valid_id(value: Any) -> bool:
    return isinstance(value, str) and bool(_ID_RE.match(value))


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    # naive -> UTC
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso_z(dt: datetime) -> str:
    """2024-01-31T08:00:00.000Z"""
    return ensure_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class DocumentModel(BaseModel):
    """Base des documents persistés: attributs snake_case, clés stockées en camelCase."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    def to_document(self, exclude_unset: bool = False) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=exclude_unset)

    @classmethod
    def from_document(cls, doc: Dict[str, Any]):
        return cls.model_validate(doc)


class MultilingualField(BaseModel):
    fr: str = ""
    en: str = ""
    ar: str = ""
