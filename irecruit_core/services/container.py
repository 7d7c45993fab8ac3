from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from functools import lru_cache
from typing import Callable

from irecruit_core.adapters.local_storage import LocalFileStorage
from irecruit_core.adapters.smtp_mailer import SMTPMailer
from irecruit_core.adapters.sqlite_repository import SQLiteDocumentStore
from irecruit_core.adapters.supabase_repository import SupabaseRepository
from irecruit_core.adapters.supabase_auth import SupabaseTokenVerifier
from irecruit_core.config.settings import AppConfig, get_app_config
from irecruit_core.db import get_supabase
from irecruit_core.domain.common import utcnow
from irecruit_core.ports.auth import TokenVerifier
from irecruit_core.ports.mailer import Mailer
from irecruit_core.ports.storage import FileStorage
from irecruit_core.services.applications_service import ApplicationsService
from irecruit_core.services.job_offers_service import JobOffersService
from irecruit_core.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass
class Container:
    applications: ApplicationsService
    job_offers: JobOffersService
    auth: TokenVerifier


def build_container(
    store,
    storage: FileStorage,
    mailer: Mailer,
    auth: TokenVerifier,
    clock: Callable[[], datetime] = utcnow,
) -> Container:
    """Câblage explicite: `store` implémente tous les ports repository."""
    applications = ApplicationsService(
        applications=store,
        candidatures=store,
        tranches=store,
        storage=storage,
        mailer=mailer,
        clock=clock,
    )
    job_offers = JobOffersService(job_offers=store, applications=store, storage=storage)
    return Container(applications=applications, job_offers=job_offers, auth=auth)


def _build_store(cfg: AppConfig):
    if cfg.backend == "supabase":
        return SupabaseRepository(get_supabase(cfg))
    return SQLiteDocumentStore(cfg.sqlite_db)


def build_default_container(cfg: AppConfig) -> Container:
    logger.info("container_init", extra={"extra": {"backend": cfg.backend, "upload_root": cfg.upload_root}})
    return build_container(
        store=_build_store(cfg),
        storage=LocalFileStorage(cfg.upload_root),
        mailer=SMTPMailer.from_config(cfg),
        auth=SupabaseTokenVerifier(),
    )


@lru_cache(maxsize=1)
def get_container() -> Container:
    return build_default_container(get_app_config())
