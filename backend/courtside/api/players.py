from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from typing import List

from courtside.api.limits import WRITE_LIMIT, limiter
from courtside.schemas import Player, PlayerCreate, PlayerListItem, PlayerUpdate
from courtside.services.data_client import DataClient, ListOptions
from courtside.services.data_source import get_data_client
from courtside.utils.aliases import generate_player_aliases

router = APIRouter()

NAME_FIELDS = ("display_name", "first_name", "last_name")


@router.get("/", response_model=List[PlayerListItem])
async def list_players(
    search: str | None = Query(None, description="Case-insensitive name substring"),
    sort: str = Query("current_rank", description="Sort field, prefix with '-' for descending"),
    limit: int = Query(100, ge=1, le=500),
    client: DataClient = Depends(get_data_client)
):
    """List players with optional name search"""
    filters = None
    if search:
        filters = {"$or": [{field: {"$contains": search}} for field in NAME_FIELDS]}

    return await client.players.list(ListOptions(filters=filters, sort=sort, limit=limit))


@router.get("/{player_id}", response_model=Player)
async def get_player(
    player_id: str,
    client: DataClient = Depends(get_data_client)
):
    """Get single player details"""
    player = await client.players.get(player_id)

    if not player:
        raise HTTPException(status_code=404, detail="Player not found")

    return player


@router.post("/", response_model=Player, status_code=201)
@limiter.limit(WRITE_LIMIT)
async def create_player(
    request: Request,
    payload: PlayerCreate,
    client: DataClient = Depends(get_data_client)
):
    """Create a player and its auto-generated name aliases"""
    player = await client.players.create(payload)

    for alias in generate_player_aliases(player.name):
        await client.alias.create({**alias, "player_id": player.id, "is_auto_generated": True})

    return player


@router.patch("/{player_id}", response_model=Player)
@limiter.limit(WRITE_LIMIT)
async def update_player(
    request: Request,
    player_id: str,
    payload: PlayerUpdate,
    client: DataClient = Depends(get_data_client)
):
    """Update the supplied fields of a player"""
    return await client.players.update(player_id, payload.model_dump(exclude_unset=True))


@router.delete("/{player_id}", status_code=204)
@limiter.limit(WRITE_LIMIT)
async def delete_player(
    request: Request,
    player_id: str,
    client: DataClient = Depends(get_data_client)
):
    await client.players.remove(player_id)
    return Response(status_code=204)


@router.get("/{player_id}/aliases")
async def get_player_aliases(
    player_id: str,
    client: DataClient = Depends(get_data_client)
):
    """Name aliases recorded for a player"""
    aliases = await client.alias.list(ListOptions(filters={"player_id": player_id}, sort="alias_text"))
    return {"player_id": player_id, "aliases": [a.alias_text for a in aliases]}
