from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from hotcoffee.api.dependencies import Storage, get_storage
from hotcoffee.infrastructure.storage.settings import storage_ready

router = APIRouter()


@router.get("/health/live")
def live() -> dict[str, str]:
    return {"status": "ok"}


@router.get("/health/ready")
def ready(response: Response, storage: Storage = Depends(get_storage)) -> dict[str, object]:
    if storage_ready(storage.data_dir):
        return {"status": "ok"}

    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "unavailable",
        "checks": {"storage": False},
    }
