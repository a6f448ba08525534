"""
Data Source API Endpoints

Read and switch the store the rest of the API reads from and writes to.
"""
from fastapi import APIRouter, Body, Request

from courtside.api.limits import WRITE_LIMIT, limiter
from courtside.services.data_source import get_data_source_router

router = APIRouter()


def _status(changed: bool | None = None) -> dict:
    source_router = get_data_source_router()
    status = {
        "source": source_router.current_source,
        "client": source_router.current_client.source,
        "remote_ready": source_router.is_remote_ready(),
    }
    if changed is not None:
        status["changed"] = changed
    return status


@router.get("/")
async def get_data_source():
    return _status()


@router.put("/")
@limiter.limit(WRITE_LIMIT)
async def set_data_source(
    request: Request,
    source: str = Body(..., embed=True)
):
    """
    Switch to 'local', 'remote' or 'offline'.

    A switch to 'remote' without a configured database is refused; the
    response then reports the unchanged source with changed=false.
    """
    source_router = get_data_source_router()
    previous = source_router.current_source
    active = source_router.set_data_source(source)
    return _status(changed=active != previous)
