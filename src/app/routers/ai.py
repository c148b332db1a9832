"""Opponent AI API -- create matches, feed tick snapshots, read telemetry."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ConfigDict

from arena.ai.observation import Observation, parse_towers
from arena.units import all_types

router = APIRouter(prefix="/api/ai", tags=["ai"])


class TowerModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    position: tuple[float, float]
    name: str = ""


class OpposingUnitModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    unit_type: str
    position: tuple[float, float]
    hp: float = 0
    side: str = "blue"
    unit_id: str | None = None


class OwnUnitModel(BaseModel):
    unit_type: str
    alive: bool = True
    side: str | None = None
    unit_id: str | None = None


class CreateMatch(BaseModel):
    match_id: str | None = None
    own_side: str | None = None
    towers: list[TowerModel] | None = None


class TickRequest(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    time: float
    elixir: float = 0
    opposing_units: list[OpposingUnitModel] = []
    own_units: list[OwnUnitModel] = []
    towers: list[TowerModel] | None = None  # defaults to the match towers


def _get_registry(request: Request):
    """Retrieve the MatchRegistry from app state."""
    registry = getattr(request.app.state, "matches", None)
    if registry is None:
        raise HTTPException(503, "Match registry not available")
    return registry


def _get_match(request: Request, match_id: str):
    match = _get_registry(request).get(match_id)
    if match is None:
        raise HTTPException(404, f"Unknown match: {match_id}")
    return match


@router.get("/archetypes")
async def list_archetypes():
    """Registered troop archetypes with their threat weights and roles."""
    return {"archetypes": [cls.to_dict() for cls in all_types()]}


@router.get("/matches")
async def list_matches(request: Request):
    """List live matches and their current modes."""
    return {"matches": _get_registry(request).summary()}


@router.post("/matches")
async def create_match(body: CreateMatch, request: Request):
    """Start a controller for a new match."""
    registry = _get_registry(request)
    towers = None
    if body.towers:
        towers = parse_towers(t.model_dump() for t in body.towers)
    try:
        match = registry.create(body.match_id, body.own_side, towers)
    except KeyError:
        raise HTTPException(409, f"Match already exists: {body.match_id}")
    return {"match_id": match.match_id, "mode": match.controller.mode.value}


@router.get("/matches/{match_id}")
async def get_match(match_id: str, request: Request):
    """Controller telemetry, including recent transitions."""
    match = _get_match(request, match_id)
    return {"match_id": match_id, **match.controller.to_dict()}


@router.post("/matches/{match_id}/tick")
async def tick_match(match_id: str, body: TickRequest, request: Request):
    """Advance the match's controller by one tick."""
    registry = _get_registry(request)
    match = _get_match(request, match_id)
    obs = Observation.from_dict(
        body.model_dump(exclude_none=True),
        own_side=match.own_side,
        towers=match.towers,
    )
    try:
        registry.tick(match_id, obs)
    except KeyError:
        raise HTTPException(404, f"Unknown match: {match_id}")
    return {"match_id": match_id, **match.controller.to_dict()}


@router.delete("/matches/{match_id}")
async def delete_match(match_id: str, request: Request):
    if not _get_registry(request).remove(match_id):
        raise HTTPException(404, f"Unknown match: {match_id}")
    return {"status": "deleted", "match_id": match_id}
