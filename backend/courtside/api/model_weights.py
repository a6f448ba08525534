from fastapi import APIRouter, Depends, HTTPException, Request
from typing import List

from courtside.api.limits import WRITE_LIMIT, limiter
from courtside.schemas import ModelWeights, ModelWeightsBase
from courtside.services.data_client import DataClient
from courtside.services.data_source import get_data_client

router = APIRouter()


@router.get("/", response_model=List[ModelWeights])
async def list_model_weights(client: DataClient = Depends(get_data_client)):
    """All stored weight sets, most recently updated first"""
    return await client.model_weights.list("-last_updated")


@router.get("/active", response_model=ModelWeights)
async def get_active_weights(client: DataClient = Depends(get_data_client)):
    weights = await client.model_weights.get_active()

    if not weights:
        raise HTTPException(status_code=404, detail="No active model weights")

    return weights


@router.post("/", response_model=ModelWeights, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_model_weights(
    request: Request,
    payload: ModelWeightsBase,
    client: DataClient = Depends(get_data_client)
):
    """
    Store a weight set.

    The eight feature weights must sum to 1.0; creating an active set
    deactivates every other set.
    """
    return await client.model_weights.create(payload)


@router.post("/{weights_id}/activate", response_model=ModelWeights)
@limiter.limit(WRITE_LIMIT)
async def activate_model_weights(
    request: Request,
    weights_id: str,
    client: DataClient = Depends(get_data_client)
):
    """Make one weight set the active one"""
    return await client.model_weights.activate(weights_id)
