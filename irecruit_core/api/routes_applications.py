from __future__ import annotations
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Request
from starlette.concurrency import run_in_threadpool

from irecruit_core.api.auth import get_app_container, require_user
from irecruit_core.api.payloads import read_payload
from irecruit_core.services.container import Container

router = APIRouter(prefix="/application", tags=["applications"])

ATTACHMENT_FIELDS = ("declarationPdf", "motivationLetterPdf")


@router.post("", status_code=201)
async def create_application(
    request: Request,
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    payload, files = await read_payload(request, ATTACHMENT_FIELDS, "Invalid application payload")
    app = await run_in_threadpool(container.applications.create, payload, files, user_id)
    return app.to_document()


@router.get("")
def list_applications(container: Container = Depends(get_app_container)):
    return [a.to_document() for a in container.applications.find_all()]


@router.get("/user")
def list_user_applications(
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    return [a.to_document() for a in container.applications.find_user_applications(user_id)]


@router.get("/tranche/{tranche_id}")
def list_tranche_candidates(tranche_id: str, container: Container = Depends(get_app_container)):
    return [p.to_wire() for p in container.applications.find_by_tranche(tranche_id)]


@router.get("/{application_id}")
def get_application(application_id: str, container: Container = Depends(get_app_container)):
    return container.applications.find_one(application_id).to_document()


@router.patch("/{application_id}")
def update_application(
    application_id: str,
    patch: Dict[str, Any] = Body(...),
    container: Container = Depends(get_app_container),
):
    return container.applications.update(application_id, patch).to_document()


@router.delete("/{application_id}", status_code=204)
def delete_application(application_id: str, container: Container = Depends(get_app_container)):
    container.applications.remove(application_id)


@router.post("/{application_id}/accept")
def accept_application(
    application_id: str,
    message: str = Body("", embed=True),
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    return container.applications.accept_application(application_id, message).to_document()


@router.post("/{application_id}/reject")
def reject_application(
    application_id: str,
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    return container.applications.reject_application(application_id).to_document()
