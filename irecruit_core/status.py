from __future__ import annotations
from typing import Dict, Optional, Union

from irecruit_core.domain.candidate import Application, ApplicationStatus, LocalizedStatus

STATUS_LABELS: Dict[ApplicationStatus, LocalizedStatus] = {
    ApplicationStatus.PENDING: LocalizedStatus(fr="En attente", en="Pending", ar="قيد الانتظار"),
    ApplicationStatus.ACCEPTED: LocalizedStatus(fr="Accepté", en="Accepted", ar="مقبول"),
    ApplicationStatus.REJECTED: LocalizedStatus(fr="Rejeté", en="Rejected", ar="مرفوض"),
}

_REJECT_MARKERS = ("reject", "refus", "rejet")


def labels_for(status: ApplicationStatus) -> LocalizedStatus:
    return STATUS_LABELS[status].model_copy()


def status_from_labels(statut: Union[LocalizedStatus, Dict[str, str], None]) -> ApplicationStatus:
    """Dérive le statut par recherche de sous-chaîne sur les libellés fr/en/ar.

    Utilisé uniquement pour les enregistrements sans code canonique: tout libellé
    qui ne contient ni "accept" ni "reject"/"refus"/"rejet" retombe sur pending.
    """
    if statut is None:
        return ApplicationStatus.PENDING
    if isinstance(statut, LocalizedStatus):
        statut = statut.model_dump()
    raw = " ".join(str(statut.get(loc) or "") for loc in ("en", "fr", "ar")).lower()
    if "accept" in raw:
        return ApplicationStatus.ACCEPTED
    if any(m in raw for m in _REJECT_MARKERS):
        return ApplicationStatus.REJECTED
    return ApplicationStatus.PENDING


def resolve_status(application: Optional[Application]) -> ApplicationStatus:
    if application is None:
        return ApplicationStatus.PENDING
    if application.status is not None:
        return application.status
    return status_from_labels(application.statut)


def apply_status(application: Application, status: ApplicationStatus) -> Application:
    """Écrit le code canonique et ses libellés localisés (en place)."""
    application.status = status
    application.statut = labels_for(status)
    return application
