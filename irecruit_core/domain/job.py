from __future__ import annotations
import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from irecruit_core.domain.common import DocumentModel, MultilingualField, new_id, utcnow


class JobOffer(DocumentModel):
    id: str = Field(default_factory=new_id, alias="_id")
    title: MultilingualField = Field(default_factory=MultilingualField)
    description: MultilingualField = Field(default_factory=MultilingualField)
    tag: MultilingualField = Field(default_factory=MultilingualField)
    city: MultilingualField = Field(default_factory=MultilingualField)
    department: MultilingualField = Field(default_factory=MultilingualField)
    grade: Optional[MultilingualField] = None
    organisme: Optional[MultilingualField] = None
    specialite: Optional[MultilingualField] = None
    etablissement: Optional[MultilingualField] = None
    image_url: str = ""
    date_publication: str = ""
    depot_avant: str = ""
    candidates_number: int = 0  # compteur d'affichage, jamais appliqué
    owner: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class JobOfferCreate(DocumentModel):
    title: MultilingualField
    description: MultilingualField
    tag: MultilingualField
    date_publication: str
    depot_avant: str
    image_url: Optional[str] = None
    city: MultilingualField
    department: MultilingualField
    candidates_number: int
    grade: Optional[MultilingualField] = None
    organisme: Optional[MultilingualField] = None
    specialite: Optional[MultilingualField] = None
    etablissement: Optional[MultilingualField] = None


class JobOfferUpdate(DocumentModel):
    title: Optional[MultilingualField] = None
    description: Optional[MultilingualField] = None
    tag: Optional[MultilingualField] = None
    date_publication: Optional[str] = None
    depot_avant: Optional[str] = None
    image_url: Optional[str] = None
    city: Optional[MultilingualField] = None
    department: Optional[MultilingualField] = None
    candidates_number: Optional[int] = None
    grade: Optional[MultilingualField] = None
    organisme: Optional[MultilingualField] = None
    specialite: Optional[MultilingualField] = None
    etablissement: Optional[MultilingualField] = None


class JobOfferQuery(BaseModel):
    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1, le=100)
    title: Optional[str] = None
    date: Optional[str] = None
    city: Optional[str] = None
    department: Optional[str] = None

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


class JobOfferPage(BaseModel):
    data: List[JobOffer]
    total: int
    page: int
    limit: int
    total_pages: int = Field(serialization_alias="totalPages")

    @classmethod
    def build(cls, data: List[JobOffer], total: int, query: JobOfferQuery) -> "JobOfferPage":
        return cls(
            data=data,
            total=total,
            page=query.page,
            limit=query.limit,
            total_pages=math.ceil(total / query.limit) if query.limit else 0,
        )
