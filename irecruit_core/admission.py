from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from irecruit_core.domain.candidate import Candidature
from irecruit_core.domain.common import ensure_utc, utcnow
from irecruit_core.domain.errors import BadRequestError, NotFoundError
from irecruit_core.domain.tranche import Tranche


class AdmissionReason(str, Enum):
    NOT_FOUND = "not_found"
    CLOSED = "closed"
    NOT_ACTIVE = "not_active"
    MISCONFIGURED = "misconfigured"
    MISMATCH = "mismatch"
    DOSSIER_NOT_FOUND = "dossier_not_found"


_MESSAGES = {
    AdmissionReason.NOT_FOUND: "Tranche not found",
    AdmissionReason.CLOSED: "Tranche is closed",
    AdmissionReason.NOT_ACTIVE: "Tranche is not active",
    AdmissionReason.MISCONFIGURED: "Tranche is missing session or job offer",
    AdmissionReason.MISMATCH: "Job offer does not match tranche",
    AdmissionReason.DOSSIER_NOT_FOUND: "Candidature not found for user",
}

_NOT_FOUND_REASONS = (AdmissionReason.NOT_FOUND, AdmissionReason.DOSSIER_NOT_FOUND)


@dataclass(frozen=True)
class AdmissionResult:
    ok: bool
    reason: Optional[AdmissionReason] = None
    tranche: Optional[Tranche] = None
    candidature: Optional[Candidature] = None

    @property
    def message(self) -> str:
        return _MESSAGES[self.reason] if self.reason else ""

    @property
    def offer_id(self) -> Optional[str]:
        return self.tranche.job_offer if self.tranche else None

    @property
    def session_id(self) -> Optional[str]:
        return self.tranche.session if self.tranche else None

    def raise_for_reason(self) -> None:
        if self.ok:
            return
        if self.reason in _NOT_FOUND_REASONS:
            raise NotFoundError(self.message)
        raise BadRequestError(self.message)


def _fail(reason: AdmissionReason, tranche: Optional[Tranche] = None) -> AdmissionResult:
    return AdmissionResult(ok=False, reason=reason, tranche=tranche)


def check_admission(
    tranche: Optional[Tranche],
    candidature: Optional[Candidature],
    asserted_offer_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> AdmissionResult:
    """Vérifie qu'une candidature peut être déposée sur la tranche.

    Contrôles dans l'ordre, arrêt au premier échec: existence, ouverture,
    fenêtre [startDate, endDate] bornes incluses, session/offre renseignées,
    cohérence de l'offre fournie par le client, dossier existant.
    """
    if tranche is None:
        return _fail(AdmissionReason.NOT_FOUND)
    if not tranche.is_open:
        return _fail(AdmissionReason.CLOSED, tranche)

    current = ensure_utc(now) if now is not None else utcnow()
    if current < ensure_utc(tranche.start_date) or current > ensure_utc(tranche.end_date):
        return _fail(AdmissionReason.NOT_ACTIVE, tranche)

    if not tranche.session or not tranche.job_offer:
        return _fail(AdmissionReason.MISCONFIGURED, tranche)

    if asserted_offer_id and str(asserted_offer_id) != str(tranche.job_offer):
        return _fail(AdmissionReason.MISMATCH, tranche)

    if candidature is None:
        return _fail(AdmissionReason.DOSSIER_NOT_FOUND, tranche)

    return AdmissionResult(ok=True, tranche=tranche, candidature=candidature)
