from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Optional

from pydantic import ValidationError

from irecruit_core.domain.errors import BadRequestError, NotFoundError
from irecruit_core.domain.job import JobOffer, JobOfferCreate, JobOfferPage, JobOfferQuery, JobOfferUpdate
from irecruit_core.ports.repositories import ApplicationRepository, JobOfferRepository
from irecruit_core.ports.storage import FileStorage, UploadedFile
from irecruit_core.utils.logging import get_logger, log_event


logger = get_logger(__name__)

JOB_OFFER_UPLOAD_DIR = "uploads/job-offers"
JOB_OFFER_IMAGE_FORMATS = ("png", "jpg", "jpeg", "webp")


def normalize_upload_path(path: str) -> str:
    """'uploads\\job-offers\\a.png' -> '/uploads/job-offers/a.png'"""
    p = path.replace("\\", "/")
    return p if p.startswith("/") else f"/{p}"


def _validation_message(err: ValidationError) -> str:
    first = err.errors()[0] if err.errors() else {}
    loc = ".".join(str(x) for x in first.get("loc", ()))
    return f"Invalid job offer payload: {loc} {first.get('msg', '')}".strip()


class JobOffersService:
    def __init__(self, job_offers: JobOfferRepository, applications: ApplicationRepository, storage: FileStorage) -> None:
        self.job_offers = job_offers
        self.applications = applications
        self.storage = storage

    def _resolve_image_url(self, files: Optional[Iterable[UploadedFile]]) -> Optional[str]:
        files = [f for f in (files or []) if f is not None]
        if not files:
            return None
        uploaded = self.storage.upload_files(files, JOB_OFFER_UPLOAD_DIR, JOB_OFFER_IMAGE_FORMATS)
        path = next(iter(uploaded.values()), None)
        return normalize_upload_path(path) if path else None

    def create(self, payload: Mapping[str, Any], owner_id: Optional[str], files: Optional[Iterable[UploadedFile]] = None) -> JobOffer:
        if not owner_id:
            raise BadRequestError("Owner is required to create a job offer")
        try:
            dto = JobOfferCreate.model_validate(payload or {})
        except ValidationError as e:
            raise BadRequestError(_validation_message(e))

        image_url = self._resolve_image_url(files)
        if not image_url and not dto.image_url:
            raise BadRequestError("Image is required to create a job offer")

        fields = dto.model_dump(exclude={"image_url"})
        offer = JobOffer(**fields, image_url=image_url or dto.image_url, owner=str(owner_id))
        saved = self.job_offers.insert_job_offer(offer)
        log_event(logger, logging.INFO, "job_offer_created", job_offer=saved.id, owner=saved.owner)
        return saved

    def find_all(self, user_id: Optional[str] = None) -> List[JobOffer]:
        offers = self.job_offers.list_job_offers()
        if not user_id:
            return offers
        # exclure les offres auxquelles l'utilisateur a déjà postulé
        applied = {str(a.offer) for a in self.applications.list_applications_by_user(user_id)}
        return [o for o in offers if str(o.id) not in applied]

    def find_all_with_filters(self, query: JobOfferQuery) -> JobOfferPage:
        data, total = self.job_offers.search_job_offers(query)
        return JobOfferPage.build(data, total, query)

    def find_one(self, offer_id: str) -> JobOffer:
        offer = self.job_offers.get_job_offer(offer_id)
        if offer is None:
            raise NotFoundError("Job offer not found")
        return offer

    def update(self, offer_id: str, payload: Mapping[str, Any], files: Optional[Iterable[UploadedFile]] = None) -> JobOffer:
        try:
            dto = JobOfferUpdate.model_validate(payload or {})
        except ValidationError as e:
            raise BadRequestError(_validation_message(e))
        changes = dto.model_dump(mode="json", by_alias=True, exclude_unset=True)
        image_url = self._resolve_image_url(files)
        if image_url:
            changes["imageUrl"] = image_url

        updated = self.job_offers.update_job_offer(offer_id, changes)
        if updated is None:
            raise NotFoundError("Job offer not found")
        log_event(logger, logging.INFO, "job_offer_updated", job_offer=offer_id, fields=sorted(changes))
        return updated

    def remove(self, offer_id: str) -> JobOffer:
        removed = self.job_offers.delete_job_offer(offer_id)
        if removed is None:
            raise NotFoundError("Job offer not found")
        log_event(logger, logging.INFO, "job_offer_removed", job_offer=offer_id)
        return removed
