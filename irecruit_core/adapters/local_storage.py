from __future__ import annotations
import secrets
import time
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable

from irecruit_core.domain.errors import BadRequestError
from irecruit_core.ports.storage import UploadedFile
from irecruit_core.utils.logging import get_logger

logger = get_logger(__name__)


def _extension(filename: str) -> str:
    suffix = PurePosixPath(filename or "").suffix
    return suffix[1:].lower() if suffix else ""


class LocalFileStorage:
    """Écrit les fichiers sous `root/destination` et renvoie des chemins relatifs à `root`."""

    def __init__(self, root: str = ".") -> None:
        self.root = Path(root)

    def upload_files(self, files: Iterable[UploadedFile], destination: str, allowed_formats: Iterable[str]) -> Dict[str, str]:
        allowed = {f.lower().lstrip(".") for f in allowed_formats}
        files = [f for f in (files or []) if f is not None]
        # valider tout avant d'écrire quoi que ce soit
        for f in files:
            if _extension(f.filename) not in allowed:
                raise BadRequestError(f"Invalid file format for {f.field_name}")

        rel_dir = PurePosixPath(destination.replace("\\", "/").strip("/"))
        target_dir = self.root / rel_dir
        target_dir.mkdir(parents=True, exist_ok=True)

        stored: Dict[str, str] = {}
        for f in files:
            name = f"{f.field_name}-{int(time.time() * 1000)}-{secrets.token_hex(4)}.{_extension(f.filename)}"
            (target_dir / name).write_bytes(f.content)
            stored[f.field_name] = str(rel_dir / name)
        if stored:
            logger.debug("files_uploaded", extra={"extra": {"destination": str(rel_dir), "fields": sorted(stored)}})
        return stored
