from __future__ import annotations
import json
from typing import Any, Dict, List, Sequence, Tuple

from fastapi import Request
from starlette.datastructures import UploadFile

from irecruit_core.domain.errors import BadRequestError
from irecruit_core.ports.storage import UploadedFile


async def read_payload(
    request: Request,
    file_fields: Sequence[str],
    invalid_message: str = "Invalid payload",
) -> Tuple[Dict[str, Any], List[UploadedFile]]:
    """Lit un corps JSON ou multipart.

    En multipart, un champ `data` contenant du JSON est décodé; les autres champs
    texte sont repris tels quels. Seuls les fichiers de `file_fields` sont gardés.
    """
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("multipart/form-data") or content_type.startswith("application/x-www-form-urlencoded"):
        form = await request.form()
        payload: Dict[str, Any] = {}
        files: List[UploadedFile] = []
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if key in file_fields and value.filename:
                    files.append(
                        UploadedFile(
                            field_name=key,
                            filename=value.filename,
                            content=await value.read(),
                            content_type=value.content_type,
                        )
                    )
            elif key == "data":
                try:
                    decoded = json.loads(value)
                except ValueError:
                    raise BadRequestError(invalid_message)
                if not isinstance(decoded, dict):
                    raise BadRequestError(invalid_message)
                payload.update(decoded)
            else:
                payload[key] = value
        return payload, files

    body = await request.body()
    if not body:
        return {}, []
    try:
        decoded = json.loads(body)
    except ValueError:
        raise BadRequestError(invalid_message)
    if not isinstance(decoded, dict):
        raise BadRequestError(invalid_message)
    return decoded, []
