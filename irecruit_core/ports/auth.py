from __future__ import annotations
from typing import Optional, Protocol


class TokenVerifier(Protocol):
    def verify(self, token: str) -> Optional[str]:
        """Retourne l'id utilisateur du jeton, ou None s'il est invalide."""
        ...
