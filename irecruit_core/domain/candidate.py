from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from irecruit_core.domain.common import DocumentModel, new_id


class ApplicationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class LocalizedStatus(BaseModel):
    fr: str = ""
    en: str = ""
    ar: str = ""


class _Loose(BaseModel):
    # dossiers hétérogènes: on garde les clés inconnues
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="allow")


class CandidateFiles(_Loose):
    cv_pdf: Optional[str] = None
    cin_pdf: Optional[str] = None
    bac_pdf: Optional[str] = None
    attestation: Optional[str] = None


class PersonalInformation(_Loose):
    prenom: Optional[str] = None
    nom: Optional[str] = None
    prenom_ar: Optional[str] = None
    nom_ar: Optional[str] = None
    email: Optional[str] = None
    cin: Optional[str] = None
    date_naissance: Optional[str] = None
    situation: Optional[str] = None
    telephone: Optional[str] = None
    adresse: Optional[str] = None
    adresse_ar: Optional[str] = None
    lieu_naissance: Optional[str] = None
    sexe: Optional[str] = None
    experiences: Any = None
    situation_de_handicap: Any = None
    files: Optional[CandidateFiles] = None


OneOrMany = Union[List[Dict[str, Any]], Dict[str, Any], None]


class ProfessionalInformation(_Loose):
    parcours_et_diplomes: Optional[List[Any]] = None
    niveaux_langues: Optional[List[Any]] = None
    experiences: Optional[List[Any]] = None
    experience_pedagogique: OneOrMany = None
    publications: Optional[List[Any]] = None
    communications: Optional[List[Any]] = None
    residanat: OneOrMany = None
    autres_documents: Optional[List[Any]] = None


class Candidature(DocumentModel):
    """Dossier unique d'un utilisateur, référencé (jamais possédé) par ses candidatures."""

    id: str = Field(default_factory=new_id, alias="_id")
    user: str
    personal_information: Optional[PersonalInformation] = None
    professional_information: Optional[ProfessionalInformation] = None


class Application(DocumentModel):
    id: str = Field(default_factory=new_id, alias="_id")
    user: str
    offer: str
    session: str
    tranche: str
    statut: LocalizedStatus = Field(default_factory=LocalizedStatus)
    status: Optional[ApplicationStatus] = None  # absent sur les anciens enregistrements
    application_diploma: Optional[str] = None
    attachment: Dict[str, Optional[str]] = Field(default_factory=dict)
    recu_candidature: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
