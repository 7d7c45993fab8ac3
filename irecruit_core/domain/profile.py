from __future__ import annotations
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from irecruit_core.domain.candidate import ApplicationStatus


class _Wire(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class ProfileFiles(_Wire):
    cv_pdf: str = ""
    cin_pdf: str = ""
    bac_pdf: str = ""
    attestation: str = ""


class ProfilePersonalInformation(_Wire):
    prenom: str = ""
    nom: str = ""
    prenom_ar: str = ""
    nom_ar: str = ""
    email: str = ""
    cin: str = ""
    date_naissance: str = ""
    situation: str = ""
    telephone: str = ""
    adresse: str = ""
    adresse_ar: str = ""
    lieu_naissance: str = ""
    sexe: str = ""
    experiences: Dict[str, Any] = Field(default_factory=dict)
    situation_de_handicap: Dict[str, Any] = Field(default_factory=dict)
    files: ProfileFiles = Field(default_factory=ProfileFiles)


class ProfileProfessionalInformation(_Wire):
    parcours_et_diplomes: List[Any] = Field(default_factory=list)
    niveaux_langues: List[Any] = Field(default_factory=list)
    experiences: List[Any] = Field(default_factory=list)
    experience_pedagogique: List[Any] = Field(default_factory=list)
    publications: List[Any] = Field(default_factory=list)
    communications: List[Any] = Field(default_factory=list)
    residanat: List[Any] = Field(default_factory=list)
    autres_documents: List[Any] = Field(default_factory=list)


class ApplicationAttachments(_Wire):
    declaration_pdf: str = ""
    motivation_letter_pdf: str = ""


class CandidateProfile(_Wire):
    """Vue admin (non persistée) d'une candidature + dossier."""

    id: str = Field(alias="_id")
    status: ApplicationStatus
    applied_date: str
    application_diploma: str = ""
    application_attachments: ApplicationAttachments = Field(default_factory=ApplicationAttachments)
    personal_information: ProfilePersonalInformation = Field(default_factory=ProfilePersonalInformation)
    professional_information: ProfileProfessionalInformation = Field(default_factory=ProfileProfessionalInformation)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
