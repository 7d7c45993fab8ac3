from __future__ import annotations
from typing import Optional

from supabase import Client

from irecruit_core.db import get_supabase
from irecruit_core.utils.logging import get_logger

logger = get_logger(__name__)


class SupabaseTokenVerifier:
    """Résout l'utilisateur d'un jeton JWT via Supabase Auth."""

    def __init__(self, client: Optional[Client] = None) -> None:
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def verify(self, token: str) -> Optional[str]:
        if not token:
            return None
        try:
            res = self.client.auth.get_user(token)
        except Exception as e:
            logger.info("token_rejected", extra={"extra": {"error": type(e).__name__}})
            return None
        user = getattr(res, "user", None)
        return str(user.id) if user is not None and getattr(user, "id", None) else None
