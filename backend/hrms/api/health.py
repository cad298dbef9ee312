from __future__ import annotations

from fastapi import APIRouter

from hrms.schemas.common import OkResponse

router = APIRouter(tags=["health"])


@router.get("/healthz", response_model=OkResponse)
def healthz() -> OkResponse:
    return OkResponse()
