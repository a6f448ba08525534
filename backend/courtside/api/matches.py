from fastapi import APIRouter, Depends, HTTPException, Query, Request
from typing import List

from courtside.api.limits import WRITE_LIMIT, limiter
from courtside.schemas import Match, MatchAnalysis, MatchAnalysisRequest, MatchStatus, Surface
from courtside.services.data_client import DataClient, ListOptions
from courtside.services.data_source import get_data_client
from courtside.services.prediction_service import get_prediction_service

router = APIRouter()


@router.get("/", response_model=List[Match])
async def list_matches(
    status: MatchStatus | None = Query(None, description="Filter by match status"),
    surface: Surface | None = Query(None, description="Filter by court surface"),
    player_id: str | None = Query(None, description="Matches involving this player"),
    limit: int = Query(50, ge=1, le=500),
    client: DataClient = Depends(get_data_client)
):
    """List matches, most recent start time first"""
    filters = {}
    if status:
        filters["status"] = status.value
    if surface:
        filters["surface"] = surface.value
    if player_id:
        filters["$or"] = [{"player1_id": player_id}, {"player2_id": player_id}]

    return await client.matches.list(ListOptions(filters=filters or None, sort="-utc_start", limit=limit))


@router.get("/{match_id}", response_model=Match)
async def get_match(
    match_id: str,
    client: DataClient = Depends(get_data_client)
):
    match = await client.matches.get(match_id)

    if not match:
        raise HTTPException(status_code=404, detail="Match not found")

    return match


@router.post("/analysis", response_model=MatchAnalysis, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_match_analysis(
    request: Request,
    payload: MatchAnalysisRequest,
    client: DataClient = Depends(get_data_client)
):
    """
    Create a match and store its predictions.

    Stores the conservative, balanced and aggressive predictions, or a
    single ml_enhanced prediction when use_ml is set.
    """
    service = get_prediction_service(client)
    return await service.create_match_analysis(payload)
