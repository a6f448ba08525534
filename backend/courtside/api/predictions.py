from fastapi import APIRouter, Depends, Query, Request
from typing import List

from courtside.api.limits import WRITE_LIMIT, limiter
from courtside.schemas import (
    AdHocPredictionRequest,
    ModelFeedback,
    ModelType,
    Prediction,
    PredictionBase,
    PredictionResult,
)
from courtside.services.data_client import DataClient, ListOptions, NotFoundError
from courtside.services.data_source import get_data_client
from courtside.services.prediction_service import get_prediction_service

router = APIRouter()


@router.get("/", response_model=List[Prediction])
async def list_predictions(
    match_id: str | None = Query(None, description="Filter by match ID"),
    model_type: ModelType | None = Query(None, description="Filter by model type"),
    limit: int = Query(100, ge=1, le=1000),
    client: DataClient = Depends(get_data_client)
):
    """List stored predictions, newest first"""
    filters = {}
    if match_id:
        filters["match_id"] = match_id
    if model_type:
        filters["model_type"] = model_type.value

    return await client.predictions.list(ListOptions(filters=filters or None, sort="-created_at", limit=limit))


@router.get("/feedback", response_model=List[ModelFeedback])
async def list_feedback(
    model_type: ModelType | None = Query(None, description="Filter by model type"),
    limit: int = Query(100, ge=1, le=1000),
    client: DataClient = Depends(get_data_client)
):
    """Feedback rows derived from predictions, newest first"""
    filters = {"model_type": model_type.value} if model_type else None
    return await client.model_feedback.list(ListOptions(filters=filters, sort="-feedback_date", limit=limit))


@router.post("/run", response_model=PredictionBase)
async def run_prediction(
    payload: AdHocPredictionRequest,
    client: DataClient = Depends(get_data_client)
):
    """Run one model for two stored players. Nothing is persisted."""
    service = get_prediction_service(client)
    return await service.predict_for_players(
        payload.player1_id,
        payload.player2_id,
        model_type=payload.model_type,
        surface=payload.surface,
        best_of=payload.best_of,
        tournament_name=payload.tournament_name,
        location=payload.location,
        odds=payload.odds.model_dump() if payload.odds else None,
    )


@router.post("/{prediction_id}/result", response_model=Prediction)
@limiter.limit(WRITE_LIMIT)
async def record_result(
    request: Request,
    prediction_id: str,
    result: PredictionResult,
    client: DataClient = Depends(get_data_client)
):
    """Record the actual winner of a predicted match"""
    service = get_prediction_service(client)
    return await service.record_result(prediction_id, result.actual_winner_id)


@router.post("/{prediction_id}/feedback", response_model=ModelFeedback, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def submit_feedback(
    request: Request,
    prediction_id: str,
    result: PredictionResult,
    client: DataClient = Depends(get_data_client)
):
    """Record the actual winner and store a manual feedback snapshot"""
    prediction = await client.predictions.get(prediction_id)
    if prediction is None:
        raise NotFoundError("predictions", prediction_id)

    service = get_prediction_service(client)
    return await service.submit_feedback(prediction, result.actual_winner_id)
