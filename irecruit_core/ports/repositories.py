from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

from irecruit_core.domain.candidate import Application, Candidature
from irecruit_core.domain.job import JobOffer, JobOfferQuery
from irecruit_core.domain.tranche import Tranche


class TrancheRepository(Protocol):
    def get_tranche(self, tranche_id: str) -> Optional[Tranche]: ...


class CandidatureRepository(Protocol):
    def find_candidature_by_user(self, user_id: str) -> Optional[Candidature]: ...

    def find_candidatures_by_users(self, user_ids: Iterable[str]) -> List[Candidature]: ...


class ApplicationRepository(Protocol):
    def insert_application(self, application: Application) -> Application: ...

    def save_application(self, application: Application) -> Application: ...

    def get_application(self, application_id: str) -> Optional[Application]: ...

    def list_applications(self) -> List[Application]: ...

    def list_applications_by_tranche(self, tranche_id: str) -> List[Application]: ...

    def list_applications_by_user(self, user_id: str) -> List[Application]: ...

    def update_application(self, application_id: str, patch: Dict[str, Any]) -> Optional[Application]: ...

    def delete_application(self, application_id: str) -> bool: ...


class JobOfferRepository(Protocol):
    def insert_job_offer(self, offer: JobOffer) -> JobOffer: ...

    def get_job_offer(self, offer_id: str) -> Optional[JobOffer]: ...

    def list_job_offers(self) -> List[JobOffer]: ...

    def search_job_offers(self, query: JobOfferQuery) -> Tuple[List[JobOffer], int]: ...

    def update_job_offer(self, offer_id: str, patch: Dict[str, Any]) -> Optional[JobOffer]: ...

    def delete_job_offer(self, offer_id: str) -> Optional[JobOffer]: ...
