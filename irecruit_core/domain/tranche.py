from __future__ import annotations
from datetime import datetime
from typing import Optional

from pydantic import Field

from irecruit_core.domain.common import DocumentModel, new_id


class Session(DocumentModel):
    """Cycle de recrutement (année). Lecture seule pour ce noyau."""

    id: str = Field(default_factory=new_id, alias="_id")
    name: str = ""
    year: Optional[int] = None
    is_active: bool = False
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


class Tranche(DocumentModel):
    """Fenêtre de candidature d'une session, rattachée à une seule offre."""

    id: str = Field(default_factory=new_id, alias="_id")
    name: str = ""
    session: Optional[str] = None
    job_offer: Optional[str] = None
    is_open: bool = False
    start_date: datetime
    end_date: datetime
