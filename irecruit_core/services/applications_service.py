from __future__ import annotations
import logging
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from irecruit_core.admission import check_admission
from irecruit_core.domain.candidate import Application, ApplicationStatus, LocalizedStatus
from irecruit_core.domain.common import is_valid_id, to_iso_z, utcnow
from irecruit_core.domain.errors import BadRequestError, InternalError, IRecruitError, NotFoundError
from irecruit_core.domain.profile import CandidateProfile
from irecruit_core.notifications import render_acceptance_email
from irecruit_core.ports.mailer import Mailer
from irecruit_core.ports.repositories import ApplicationRepository, CandidatureRepository, TrancheRepository
from irecruit_core.ports.storage import FileStorage, UploadedFile
from irecruit_core.profile import build_candidate_profile
from irecruit_core.status import STATUS_LABELS, apply_status, status_from_labels
from irecruit_core.utils.logging import get_logger, log_event


logger = get_logger(__name__)

APPLICATION_UPLOAD_DIR = "uploads/candidats/{cin}/applications"
APPLICATION_FORMATS = ("pdf",)

# champs modifiables par PATCH
_UPDATABLE = {"statut", "status", "applicationDiploma", "attachment", "recuCandidature"}


def _ref_id(value: Any) -> Optional[str]:
    """Accepte un id brut ou un objet {"_id": ...} (forme peuplée)."""
    if isinstance(value, Mapping):
        value = value.get("_id")
    return str(value) if value else None


class ApplicationsService:
    """Dépôt, consultation et décision (accept/reject) des candidatures.

    Les collaborateurs sont passés au constructeur; `clock` permet de figer l'heure.
    """

    def __init__(
        self,
        applications: ApplicationRepository,
        candidatures: CandidatureRepository,
        tranches: TrancheRepository,
        storage: FileStorage,
        mailer: Mailer,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self.applications = applications
        self.candidatures = candidatures
        self.tranches = tranches
        self.storage = storage
        self.mailer = mailer
        self.clock = clock

    # ------------------------------------------------------------------ create
    def create(self, data: Mapping[str, Any], files: Optional[Iterable[UploadedFile]], user_id: Optional[str]) -> Application:
        try:
            return self._create(data or {}, list(files or []), user_id)
        except IRecruitError:
            raise
        except Exception:
            logger.exception("application_save_failed", extra={"extra": {"user": user_id}})
            raise InternalError("Failed to save data")

    def _create(self, data: Mapping[str, Any], files: List[UploadedFile], user_id: Optional[str]) -> Application:
        tranche_id = _ref_id(data.get("trancheId")) or _ref_id(data.get("tranche"))
        if not tranche_id:
            raise BadRequestError("Tranche id is required")
        if not is_valid_id(tranche_id):
            raise BadRequestError("Invalid tranche id")
        if not user_id:
            raise BadRequestError("User is required")

        tranche = self.tranches.get_tranche(tranche_id)
        candidature = self.candidatures.find_candidature_by_user(user_id) if tranche is not None else None
        result = check_admission(tranche, candidature, asserted_offer_id=_ref_id(data.get("offer")), now=self.clock())
        if not result.ok:
            log_event(logger, logging.INFO, "application_refused", tranche=tranche_id, user=user_id, reason=result.reason.value)
            result.raise_for_reason()

        cin = (result.candidature.personal_information.cin if result.candidature.personal_information else None) or user_id
        attachment = self.storage.upload_files(files, APPLICATION_UPLOAD_DIR.format(cin=cin), APPLICATION_FORMATS)

        now = self.clock()
        application = Application(
            user=str(user_id),
            offer=str(result.offer_id),  # dérivé de la tranche, jamais du client
            session=str(result.session_id),
            tranche=str(result.tranche.id),
            application_diploma=data.get("applicationDiploma") or None,
            attachment=attachment,
            created_at=now,
            updated_at=now,
        )
        apply_status(application, ApplicationStatus.PENDING)
        saved = self.applications.insert_application(application)
        log_event(logger, logging.INFO, "application_created", application=saved.id, tranche=saved.tranche, user=saved.user)
        return saved

    # ------------------------------------------------------------------ reads
    def find_all(self) -> List[Application]:
        return self.applications.list_applications()

    def find_by_tranche(self, tranche_id: str) -> List[CandidateProfile]:
        if not is_valid_id(tranche_id):
            raise BadRequestError("Invalid tranche id")
        apps = self.applications.list_applications_by_tranche(tranche_id)
        if not apps:
            return []
        # une seule requête pour tous les dossiers
        user_ids = {a.user for a in apps if a.user}
        by_user = {c.user: c for c in self.candidatures.find_candidatures_by_users(user_ids)}
        now = self.clock()
        return [build_candidate_profile(a, by_user.get(a.user), now=now) for a in apps]

    def find_one(self, application_id: str) -> Application:
        app = self.applications.get_application(application_id)
        if app is None:
            raise NotFoundError(f"Application with ID {application_id} not found")
        return app

    def find_user_applications(self, user_id: str) -> List[Application]:
        return self.applications.list_applications_by_user(user_id)

    # ------------------------------------------------------------------ writes
    def update(self, application_id: str, patch: Mapping[str, Any]) -> Application:
        changes: Dict[str, Any] = {k: v for k, v in (patch or {}).items() if k in _UPDATABLE}
        try:
            if "status" in changes:
                status = ApplicationStatus(changes["status"])
                changes["status"] = status.value
                changes["statut"] = STATUS_LABELS[status].model_dump()
            elif "statut" in changes:
                statut = LocalizedStatus.model_validate(changes["statut"] or {})
                changes["statut"] = statut.model_dump()
                changes["status"] = status_from_labels(statut).value
        except (ValueError, ValidationError):
            raise BadRequestError("Invalid application status")
        if isinstance(changes.get("recuCandidature"), datetime):
            changes["recuCandidature"] = to_iso_z(changes["recuCandidature"])

        current = self.applications.get_application(application_id)
        if current is None:
            raise NotFoundError(f"Application with ID {application_id} not found")
        # le document fusionné doit rester lisible avant toute écriture
        try:
            Application.model_validate({**current.to_document(), **changes})
        except ValidationError:
            log_event(logger, logging.INFO, "application_patch_rejected", application=application_id, fields=sorted(changes))
            raise BadRequestError("Invalid application payload")

        updated = self.applications.update_application(application_id, changes)
        if updated is None:
            raise NotFoundError(f"Application with ID {application_id} not found")
        return updated

    def remove(self, application_id: str) -> None:
        if not self.applications.delete_application(application_id):
            raise NotFoundError(f"Application with ID {application_id} not found")
        log_event(logger, logging.INFO, "application_removed", application=application_id)

    # ------------------------------------------------------------------ decisions
    def accept_application(self, application_id: str, message: str = "") -> Application:
        """Accepte la candidature puis notifie le candidat par email.

        L'écriture du statut est faite AVANT l'envoi: si l'email est absent ou si
        l'envoi échoue, l'appel échoue alors que l'enregistrement reste "accepted".
        """
        try:
            if not is_valid_id(application_id):
                raise BadRequestError("Invalid application id")
            app = self.applications.get_application(application_id)
            if app is None:
                raise NotFoundError(f"Application with ID {application_id} not found")
            candidature = self.candidatures.find_candidature_by_user(app.user)
            if candidature is None:
                raise NotFoundError("Candidature for application user not found")

            now = self.clock()
            apply_status(app, ApplicationStatus.ACCEPTED)
            app.recu_candidature = now
            updated = self.applications.save_application(app)

            personal = candidature.personal_information
            recipient = personal.email if personal else None
            if not recipient:
                raise NotFoundError("Candidate email not found in candidature")

            email = render_acceptance_email(message, year=now.year)
            try:
                self.mailer.send_email(recipient, email.subject, email.html)
            except Exception:
                logger.exception("acceptance_email_failed", extra={"extra": {"application": application_id}})
                raise InternalError("Failed to send notification email")

            log_event(logger, logging.INFO, "application_accepted", application=application_id, user=app.user)
            return updated
        except IRecruitError:
            raise
        except Exception:
            logger.exception("application_accept_failed", extra={"extra": {"application": application_id}})
            raise InternalError("Failed to accept application")

    def reject_application(self, application_id: str) -> Application:
        # pas d'email pour le rejet
        try:
            if not is_valid_id(application_id):
                raise BadRequestError("Invalid application id")
            app = self.applications.get_application(application_id)
            if app is None:
                raise NotFoundError(f"Application with ID {application_id} not found")
            apply_status(app, ApplicationStatus.REJECTED)
            updated = self.applications.save_application(app)
            log_event(logger, logging.INFO, "application_rejected", application=application_id, user=app.user)
            return updated
        except IRecruitError:
            raise
        except Exception:
            logger.exception("application_reject_failed", extra={"extra": {"application": application_id}})
            raise InternalError("Failed to reject application")
