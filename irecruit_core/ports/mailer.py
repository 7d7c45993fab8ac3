from __future__ import annotations
from typing import Protocol


class Mailer(Protocol):
    def send_email(self, to: str, subject: str, html: str) -> None:
        """Envoie un email HTML; lève une exception en cas d'échec."""
        ...
