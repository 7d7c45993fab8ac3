from __future__ import annotations


class IRecruitError(Exception):
    """Erreur métier; `message` est renvoyé tel quel au client (sauf InternalError)."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(IRecruitError):
    status_code = 404


class BadRequestError(IRecruitError):
    status_code = 400


class InternalError(IRecruitError):
    status_code = 500
