from __future__ import annotations
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from starlette.concurrency import run_in_threadpool

from irecruit_core.api.auth import get_app_container, optional_user, require_user
from irecruit_core.api.payloads import read_payload
from irecruit_core.domain.job import JobOfferQuery
from irecruit_core.services.container import Container

router = APIRouter(prefix="/job-offers", tags=["job-offers"])

_INVALID = "Invalid job offer payload"


@router.post("", status_code=201)
async def create_job_offer(
    request: Request,
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    payload, files = await read_payload(request, ("image",), _INVALID)
    offer = await run_in_threadpool(container.job_offers.create, payload, user_id, files)
    return offer.to_document()


@router.get("")
def list_job_offers(
    user_id: Optional[str] = Depends(optional_user),
    container: Container = Depends(get_app_container),
):
    return [o.to_document() for o in container.job_offers.find_all(user_id)]


@router.get("/admin")
def list_job_offers_admin(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    title: Optional[str] = None,
    date: Optional[str] = None,
    city: Optional[str] = None,
    department: Optional[str] = None,
    container: Container = Depends(get_app_container),
):
    query = JobOfferQuery(page=page, limit=limit, title=title, date=date, city=city, department=department)
    return container.job_offers.find_all_with_filters(query).model_dump(mode="json", by_alias=True)


@router.get("/{offer_id}")
def get_job_offer(offer_id: str, container: Container = Depends(get_app_container)):
    return container.job_offers.find_one(offer_id).to_document()


@router.patch("/{offer_id}")
async def update_job_offer(
    offer_id: str,
    request: Request,
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    payload, files = await read_payload(request, ("image",), _INVALID)
    offer = await run_in_threadpool(container.job_offers.update, offer_id, payload, files)
    return offer.to_document()


@router.delete("/{offer_id}")
def delete_job_offer(
    offer_id: str,
    user_id: str = Depends(require_user),
    container: Container = Depends(get_app_container),
):
    return container.job_offers.remove(offer_id).to_document()
