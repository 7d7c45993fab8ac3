from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Protocol


@dataclass
class UploadedFile:
    field_name: str
    filename: str
    content: bytes
    content_type: Optional[str] = None


class FileStorage(Protocol):
    def upload_files(self, files: Iterable[UploadedFile], destination: str, allowed_formats: Iterable[str]) -> Dict[str, str]:
        """Retourne {nom de champ logique: chemin relatif stocké}."""
        ...
