from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, List, Optional

from irecruit_core.domain.candidate import Application, Candidature
from irecruit_core.domain.common import to_iso_z, utcnow
from irecruit_core.domain.profile import (
    ApplicationAttachments,
    CandidateProfile,
    ProfileFiles,
    ProfilePersonalInformation,
    ProfileProfessionalInformation,
)
from irecruit_core.status import resolve_status

_PERSONAL_TEXT_FIELDS = (
    "prenom", "nom", "prenom_ar", "nom_ar", "email", "cin", "date_naissance",
    "situation", "telephone", "adresse", "adresse_ar", "lieu_naissance", "sexe",
)
_PROFESSIONAL_LIST_FIELDS = (
    "parcours_et_diplomes", "niveaux_langues", "experiences",
    "publications", "communications", "autres_documents",
)


def as_list(value: Any) -> List[Any]:
    """absent -> [], objet seul -> [objet], liste -> inchangée."""
    if isinstance(value, list):
        return list(value)
    if isinstance(value, dict) or value:
        return [value]
    return []


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, dict) else {}


def _applied_date(application: Application, now: Optional[datetime]) -> str:
    stamp = application.recu_candidature or application.created_at or now or utcnow()
    return to_iso_z(stamp)


def build_candidate_profile(
    application: Application,
    candidature: Optional[Candidature],
    now: Optional[datetime] = None,
) -> CandidateProfile:
    """Projette une candidature et son dossier (éventuellement absent) vers la vue admin.

    Fonction totale: tout champ manquant prend une valeur vide ("", {} ou []).
    Aucune donnée stockée n'est modifiée.
    """
    personal = candidature.personal_information if candidature else None
    professional = candidature.professional_information if candidature else None

    files = personal.files if personal and personal.files else None
    personal_view = ProfilePersonalInformation(
        **{name: _text(getattr(personal, name, None)) for name in _PERSONAL_TEXT_FIELDS},
        experiences=_mapping(getattr(personal, "experiences", None)),
        situation_de_handicap=_mapping(getattr(personal, "situation_de_handicap", None)),
        files=ProfileFiles(
            cv_pdf=_text(getattr(files, "cv_pdf", None)),
            cin_pdf=_text(getattr(files, "cin_pdf", None)),
            bac_pdf=_text(getattr(files, "bac_pdf", None)),
            attestation=_text(getattr(files, "attestation", None)),
        ),
    )

    professional_view = ProfileProfessionalInformation(
        **{name: as_list(getattr(professional, name, None)) for name in _PROFESSIONAL_LIST_FIELDS},
        experience_pedagogique=as_list(getattr(professional, "experience_pedagogique", None)),
        residanat=as_list(getattr(professional, "residanat", None)),
    )

    attachment = application.attachment or {}
    return CandidateProfile(
        id=str(application.id),
        status=resolve_status(application),
        applied_date=_applied_date(application, now),
        application_diploma=application.application_diploma or "",
        application_attachments=ApplicationAttachments(
            declaration_pdf=_text(attachment.get("declarationPdf")),
            motivation_letter_pdf=_text(attachment.get("motivationLetterPdf")),
        ),
        personal_information=personal_view,
        professional_information=professional_view,
    )
