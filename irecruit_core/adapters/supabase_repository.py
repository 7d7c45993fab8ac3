from __future__ import annotations
from typing import Any, Dict, Iterable, List, Optional, Tuple

from supabase import Client

from irecruit_core.db import get_supabase
from irecruit_core.domain.candidate import Application, Candidature
from irecruit_core.domain.common import to_iso_z, utcnow
from irecruit_core.domain.job import JobOffer, JobOfferQuery
from irecruit_core.domain.tranche import Tranche


def _ilike_any(field: str, needle: str) -> str:
    # filtre PostgREST: or=(title->>fr.ilike.*x*,title->>en.ilike.*x*,...)
    safe = needle.replace(",", " ").replace("(", " ").replace(")", " ")
    return ",".join(f"{field}->>{loc}.ilike.*{safe}*" for loc in ("fr", "en", "ar"))


class SupabaseRepository:
    """Implémentation des ports repository via Supabase (PostgREST).

    Chaque table contient les documents avec leurs clés camelCase (`_id`, `jobOffer`,
    `personalInformation` en jsonb, ...).
    """

    def __init__(self, client: Optional[Client] = None) -> None:
        self.sb = client or get_supabase()

    # --- Helpers ---
    def _one(self, table: str, column: str, value: Any) -> Optional[Dict[str, Any]]:
        rows = self.sb.table(table).select("*").eq(column, value).limit(1).execute().data or []
        return rows[0] if rows else None

    def _update(self, table: str, doc_id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        payload = dict(patch)
        payload.pop("_id", None)
        payload["updatedAt"] = to_iso_z(utcnow())
        rows = self.sb.table(table).update(payload).eq("_id", doc_id).execute().data or []
        return rows[0] if rows else None

    # --- TrancheRepository ---
    def get_tranche(self, tranche_id: str) -> Optional[Tranche]:
        row = self._one("tranches", "_id", tranche_id)
        return Tranche.from_document(row) if row else None

    # --- CandidatureRepository ---
    def find_candidature_by_user(self, user_id: str) -> Optional[Candidature]:
        row = self._one("candidatures", "user", user_id)
        return Candidature.from_document(row) if row else None

    def find_candidatures_by_users(self, user_ids: Iterable[str]) -> List[Candidature]:
        ids = sorted({str(u) for u in user_ids if u})
        if not ids:
            return []
        rows = self.sb.table("candidatures").select("*").in_("user", ids).execute().data or []
        return [Candidature.from_document(r) for r in rows]

    # --- ApplicationRepository ---
    def insert_application(self, application: Application) -> Application:
        rows = self.sb.table("applications").insert(application.to_document()).execute().data or []
        return Application.from_document(rows[0]) if rows else application

    def save_application(self, application: Application) -> Application:
        application.updated_at = utcnow()
        rows = self.sb.table("applications").upsert(application.to_document(), on_conflict="_id").execute().data or []
        return Application.from_document(rows[0]) if rows else application

    def get_application(self, application_id: str) -> Optional[Application]:
        row = self._one("applications", "_id", application_id)
        return Application.from_document(row) if row else None

    def list_applications(self) -> List[Application]:
        rows = self.sb.table("applications").select("*").execute().data or []
        return [Application.from_document(r) for r in rows]

    def list_applications_by_tranche(self, tranche_id: str) -> List[Application]:
        rows = (
            self.sb.table("applications")
            .select("*")
            .eq("tranche", tranche_id)
            .order("createdAt", desc=True)
            .execute()
            .data
            or []
        )
        return [Application.from_document(r) for r in rows]

    def list_applications_by_user(self, user_id: str) -> List[Application]:
        rows = self.sb.table("applications").select("*").eq("user", user_id).execute().data or []
        return [Application.from_document(r) for r in rows]

    def update_application(self, application_id: str, patch: Dict[str, Any]) -> Optional[Application]:
        row = self._update("applications", application_id, patch)
        return Application.from_document(row) if row else None

    def delete_application(self, application_id: str) -> bool:
        rows = self.sb.table("applications").delete().eq("_id", application_id).execute().data or []
        return bool(rows)

    # --- JobOfferRepository ---
    def insert_job_offer(self, offer: JobOffer) -> JobOffer:
        rows = self.sb.table("job_offers").insert(offer.to_document()).execute().data or []
        return JobOffer.from_document(rows[0]) if rows else offer

    def get_job_offer(self, offer_id: str) -> Optional[JobOffer]:
        row = self._one("job_offers", "_id", offer_id)
        return JobOffer.from_document(row) if row else None

    def list_job_offers(self) -> List[JobOffer]:
        rows = self.sb.table("job_offers").select("*").execute().data or []
        return [JobOffer.from_document(r) for r in rows]

    def search_job_offers(self, query: JobOfferQuery) -> Tuple[List[JobOffer], int]:
        q = self.sb.table("job_offers").select("*", count="exact")
        # plusieurs paramètres `or` sont combinés en AND par PostgREST
        if query.title:
            q = q.or_(_ilike_any("title", query.title))
        if query.city:
            q = q.or_(_ilike_any("city", query.city))
        if query.department:
            q = q.or_(_ilike_any("department", query.department))
        if query.date:
            q = q.eq("datePublication", query.date)
        res = q.range(query.skip, query.skip + query.limit - 1).execute()
        rows = res.data or []
        total = res.count if res.count is not None else len(rows)
        return [JobOffer.from_document(r) for r in rows], int(total)

    def update_job_offer(self, offer_id: str, patch: Dict[str, Any]) -> Optional[JobOffer]:
        row = self._update("job_offers", offer_id, patch)
        return JobOffer.from_document(row) if row else None

    def delete_job_offer(self, offer_id: str) -> Optional[JobOffer]:
        rows = self.sb.table("job_offers").delete().eq("_id", offer_id).execute().data or []
        return JobOffer.from_document(rows[0]) if rows else None
