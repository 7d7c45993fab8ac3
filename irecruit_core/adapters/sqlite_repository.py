from __future__ import annotations
import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Tuple

from irecruit_core.db import (
    count_documents,
    delete_document,
    ensure_sqlite_documents_schema,
    find_documents,
    get_document,
    get_sqlite,
    in_clause,
    multilingual_contains,
    upsert_document,
)
from irecruit_core.domain.candidate import Application, Candidature
from irecruit_core.domain.common import ensure_utc, to_iso_z, utcnow
from irecruit_core.domain.job import JobOffer, JobOfferQuery
from irecruit_core.domain.tranche import Session, Tranche

JOB_OFFERS = "job_offers"
TRANCHES = "tranches"
SESSIONS = "sessions"
CANDIDATURES = "candidatures"
APPLICATIONS = "applications"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SQLiteDocumentStore:
    """Stockage documentaire (JSON) dans SQLite, implémente tous les ports repository.

    Une table `documents(collection, id, body)`; les filtres passent par json_extract.
    """

    def __init__(self, db_path: str = "irecruit.db") -> None:
        self._db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.RLock()

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = get_sqlite(self._db_path)
            ensure_sqlite_documents_schema(self._conn)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    # --- Helpers ---
    def _put(self, collection: str, doc: Dict[str, Any]) -> Dict[str, Any]:
        with self._lock:
            return upsert_document(self.conn, collection, doc)

    def _get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        with self._lock:
            return get_document(self.conn, collection, doc_id)

    def _find(self, collection: str, clauses=(), order_by: Optional[str] = None, limit: Optional[int] = None, offset: int = 0) -> List[Dict[str, Any]]:
        with self._lock:
            return find_documents(self.conn, collection, clauses, order_by=order_by, limit=limit, offset=offset)

    def _patch(self, collection: str, doc_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        with self._lock:
            doc = get_document(self.conn, collection, doc_id)
            if doc is None:
                return None
            doc.update(patch)
            doc["_id"] = doc_id
            doc["updatedAt"] = to_iso_z(utcnow())
            return upsert_document(self.conn, collection, doc)

    # --- Seeding (sessions/tranches/candidatures sont gérées par d'autres flux) ---
    def save_session(self, session: Session) -> Session:
        self._put(SESSIONS, session.to_document())
        return session

    def save_tranche(self, tranche: Tranche) -> Tranche:
        self._put(TRANCHES, tranche.to_document())
        return tranche

    def save_candidature(self, candidature: Candidature) -> Candidature:
        self._put(CANDIDATURES, candidature.to_document())
        return candidature

    # --- TrancheRepository ---
    def get_tranche(self, tranche_id: str) -> Optional[Tranche]:
        doc = self._get(TRANCHES, tranche_id)
        return Tranche.from_document(doc) if doc else None

    # --- CandidatureRepository ---
    def find_candidature_by_user(self, user_id: str) -> Optional[Candidature]:
        rows = self._find(CANDIDATURES, [("json_extract(body, '$.user') = ?", [str(user_id)])], limit=1)
        return Candidature.from_document(rows[0]) if rows else None

    def find_candidatures_by_users(self, user_ids: Iterable[str]) -> List[Candidature]:
        ids = sorted({str(u) for u in user_ids if u})
        if not ids:
            return []
        rows = self._find(CANDIDATURES, [in_clause("user", ids)])
        return [Candidature.from_document(r) for r in rows]

    # --- ApplicationRepository ---
    def insert_application(self, application: Application) -> Application:
        self._put(APPLICATIONS, application.to_document())
        return application

    def save_application(self, application: Application) -> Application:
        application.updated_at = utcnow()
        self._put(APPLICATIONS, application.to_document())
        return application

    def get_application(self, application_id: str) -> Optional[Application]:
        doc = self._get(APPLICATIONS, application_id)
        return Application.from_document(doc) if doc else None

    def list_applications(self) -> List[Application]:
        return [Application.from_document(r) for r in self._find(APPLICATIONS)]

    def list_applications_by_tranche(self, tranche_id: str) -> List[Application]:
        rows = self._find(APPLICATIONS, [("json_extract(body, '$.tranche') = ?", [str(tranche_id)])])
        apps = [Application.from_document(r) for r in rows]
        # plus récentes d'abord
        return sorted(apps, key=lambda a: ensure_utc(a.created_at) or _EPOCH, reverse=True)

    def list_applications_by_user(self, user_id: str) -> List[Application]:
        rows = self._find(APPLICATIONS, [("json_extract(body, '$.user') = ?", [str(user_id)])])
        return [Application.from_document(r) for r in rows]

    def update_application(self, application_id: str, patch: Dict[str, Any]) -> Optional[Application]:
        doc = self._patch(APPLICATIONS, application_id, patch)
        return Application.from_document(doc) if doc else None

    def delete_application(self, application_id: str) -> bool:
        with self._lock:
            return delete_document(self.conn, APPLICATIONS, application_id) is not None

    # --- JobOfferRepository ---
    def insert_job_offer(self, offer: JobOffer) -> JobOffer:
        self._put(JOB_OFFERS, offer.to_document())
        return offer

    def get_job_offer(self, offer_id: str) -> Optional[JobOffer]:
        doc = self._get(JOB_OFFERS, offer_id)
        return JobOffer.from_document(doc) if doc else None

    def list_job_offers(self) -> List[JobOffer]:
        return [JobOffer.from_document(r) for r in self._find(JOB_OFFERS)]

    def search_job_offers(self, query: JobOfferQuery) -> Tuple[List[JobOffer], int]:
        clauses = []
        if query.title:
            clauses.append(multilingual_contains("title", query.title))
        if query.city:
            clauses.append(multilingual_contains("city", query.city))
        if query.department:
            clauses.append(multilingual_contains("department", query.department))
        if query.date:
            clauses.append(("json_extract(body, '$.datePublication') = ?", [query.date]))
        with self._lock:
            total = count_documents(self.conn, JOB_OFFERS, clauses)
            rows = find_documents(self.conn, JOB_OFFERS, clauses, limit=query.limit, offset=query.skip)
        return [JobOffer.from_document(r) for r in rows], total

    def update_job_offer(self, offer_id: str, patch: Dict[str, Any]) -> Optional[JobOffer]:
        doc = self._patch(JOB_OFFERS, offer_id, patch)
        return JobOffer.from_document(doc) if doc else None

    def delete_job_offer(self, offer_id: str) -> Optional[JobOffer]:
        with self._lock:
            doc = delete_document(self.conn, JOB_OFFERS, offer_id)
        return JobOffer.from_document(doc) if doc else None
