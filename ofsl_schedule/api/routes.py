"""
API routes for the weekly league schedule.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from celery.result import AsyncResult
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from ofsl_schedule.models import Tier, FormatValidationResult
from ofsl_schedule.core.celery_app import celery_app
from ofsl_schedule.core.exceptions import (
    ScheduleError, ScheduleDatabaseError, TierNotFoundError,
    LeagueNotFoundError, FormatChangeError, PlacementError
)
from ofsl_schedule.core.logging_config import get_logger
from ofsl_schedule.services.formats import (
    GAME_FORMATS, get_game_format, team_count_for_format,
    positions_for_format, grid_columns_for_team_count, format_label,
    compatible_formats
)
from ofsl_schedule.services.schedule_service import ScheduleService
from ofsl_schedule.services.supabase_store import SupabaseScheduleStore
from ofsl_schedule.services.week_calculation import format_week_date
from ofsl_schedule.tasks.schedule_tasks import propagate_format_change_task

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["schedule"])


def get_schedule_service() -> ScheduleService:
    return ScheduleService(SupabaseScheduleStore())


class FormatResponse(BaseModel):
    """A game format with its layout."""
    id: str
    label: str
    team_count: int
    positions: List[str]
    grid_columns: str
    description: str = ""
    is_known: bool = True


class TeamSlotResponse(BaseModel):
    name: str
    ranking: Union[int, float, str]


class TierResponse(BaseModel):
    """Response model for a single tier."""
    id: int
    league_id: Optional[int] = None
    week_number: Optional[int] = None
    tier_number: int
    location: str
    time_slot: str
    court: str
    format: str
    format_label: str
    positions: List[str]
    grid_columns: str
    teams: Dict[str, Optional[TeamSlotResponse]]
    is_completed: bool
    no_games: bool
    is_playoff: bool


class ValidationResponse(BaseModel):
    is_valid: bool
    reason: Optional[str] = None
    teams_affected: List[str] = []
    positions_affected: List[str] = []


class CurrentWeekResponse(BaseModel):
    league_id: int
    current_week: int
    status: str
    week_date: str
    total_weeks: int
    playoff_start_week: Optional[int] = None
    is_playoff_week: bool


class WeekStatusResponse(BaseModel):
    league_id: int
    week_number: int
    status: str
    week_date: str


class FormatChangeRequest(BaseModel):
    format: str
    apply_to_future_weeks: bool = False


class FormatChangeResponse(BaseModel):
    success: bool
    message: str
    tier: TierResponse
    future_weeks: Optional[Dict[str, Any]] = None


class AssignTeamRequest(BaseModel):
    position: str
    name: str
    ranking: int = 0


class MoveTeamRequest(BaseModel):
    from_tier_id: int
    from_position: str
    to_tier_id: int
    to_position: str


def format_response(format_id: str) -> FormatResponse:
    game_format = get_game_format(format_id)
    team_count = team_count_for_format(format_id)
    return FormatResponse(
        id=format_id,
        label=format_label(format_id),
        team_count=team_count,
        positions=positions_for_format(format_id),
        grid_columns=grid_columns_for_team_count(team_count),
        description=game_format.description if game_format else "",
        is_known=game_format is not None
    )


def tier_response(tier: Tier) -> TierResponse:
    team_count = team_count_for_format(tier.format)
    teams = {}
    for position in tier.teams:
        occupied = tier.team_at(position)
        teams[position] = TeamSlotResponse(name=occupied.name, ranking=occupied.ranking) if occupied else None

    return TierResponse(
        id=tier.id,
        league_id=tier.league_id,
        week_number=tier.week_number,
        tier_number=tier.tier_number,
        location=tier.location,
        time_slot=tier.time_slot,
        court=tier.court,
        format=tier.format,
        format_label=format_label(tier.format),
        positions=positions_for_format(tier.format),
        grid_columns=grid_columns_for_team_count(team_count),
        teams=teams,
        is_completed=tier.is_completed,
        no_games=tier.no_games,
        is_playoff=tier.is_playoff
    )


def validation_response(result: FormatValidationResult) -> ValidationResponse:
    return ValidationResponse(
        is_valid=result.is_valid,
        reason=result.reason,
        teams_affected=list(result.teams_affected),
        positions_affected=list(result.positions_affected)
    )


def raise_http_error(error: Exception):
    """Translate a service error into the matching HTTPException."""
    if isinstance(error, (TierNotFoundError, LeagueNotFoundError)):
        raise HTTPException(status_code=404, detail=str(error))
    if isinstance(error, (FormatChangeError, PlacementError)):
        raise HTTPException(status_code=409, detail=str(error))
    if isinstance(error, ScheduleDatabaseError):
        raise HTTPException(status_code=502, detail=str(error))
    raise HTTPException(status_code=500, detail=f"Schedule operation failed: {str(error)}")


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "timestamp": datetime.now().isoformat()}


@router.get("/formats", response_model=List[FormatResponse])
async def list_formats():
    """All game formats in display order."""
    return [format_response(f.id) for f in GAME_FORMATS]


@router.get("/formats/{format_id}")
async def get_format(format_id: str):
    """
    A single format. Unknown ids still answer with the default capacity so
    legacy tiers keep rendering.
    """
    response = format_response(format_id)
    return {
        "format": response,
        "compatible_formats": [f.id for f in compatible_formats(format_id)]
    }


@router.get("/leagues/{league_id}/current-week", response_model=CurrentWeekResponse)
def get_current_week(league_id: int, service: ScheduleService = Depends(get_schedule_service)):
    """Week the schedule should open on for this league."""
    try:
        info = service.current_week(league_id)
    except ScheduleError as e:
        raise_http_error(e)

    navigation = info["navigation"]
    week = info["current_week"]
    return CurrentWeekResponse(
        league_id=league_id,
        current_week=week,
        status=info["status"].value,
        week_date=format_week_date(week, info["league"].start_date),
        total_weeks=navigation.total_weeks,
        playoff_start_week=navigation.playoff_start_week,
        is_playoff_week=navigation.is_playoff_week(week)
    )


@router.get("/leagues/{league_id}/weeks/{week_number}/status", response_model=WeekStatusResponse)
def get_week_status(league_id: int, week_number: int, service: ScheduleService = Depends(get_schedule_service)):
    try:
        status = service.week_status(league_id, week_number)
        league = service.store.get_league(league_id)
    except ScheduleError as e:
        raise_http_error(e)

    return WeekStatusResponse(
        league_id=league_id,
        week_number=week_number,
        status=status.value,
        week_date=format_week_date(week_number, league.start_date if league else None)
    )


@router.get("/leagues/{league_id}/weeks/{week_number}/tiers", response_model=List[TierResponse])
def get_week_tiers(league_id: int, week_number: int, service: ScheduleService = Depends(get_schedule_service)):
    try:
        tiers = service.week_schedule(league_id, week_number)
    except ScheduleError as e:
        raise_http_error(e)

    return [tier_response(tier) for tier in tiers]


@router.post("/tiers/{tier_id}/format/validate", response_model=ValidationResponse)
def validate_tier_format(
    tier_id: int,
    request: FormatChangeRequest,
    service: ScheduleService = Depends(get_schedule_service)
):
    """Check a format change without applying it."""
    try:
        result = service.preview_format_change(tier_id, request.format)
    except ScheduleError as e:
        raise_http_error(e)

    return validation_response(result)


@router.put("/tiers/{tier_id}/format", response_model=FormatChangeResponse)
def change_tier_format(
    tier_id: int,
    request: FormatChangeRequest,
    service: ScheduleService = Depends(get_schedule_service)
):
    """
    Change a tier's format.

    This endpoint:
    1. Loads the tier
    2. Refuses the change if it would drop teams
    3. Repacks the teams into the new format's positions
    4. Optionally repeats the change on the same tier in later weeks
    """
    try:
        tier = service.change_tier_format(tier_id, request.format)

        future_weeks = None
        if request.apply_to_future_weeks and tier.league_id is not None and tier.week_number is not None:
            summary = service.apply_format_to_future_weeks(
                tier.league_id, tier.tier_number, tier.week_number, request.format
            )
            future_weeks = summary.as_dict()
    except ScheduleError as e:
        raise_http_error(e)

    return FormatChangeResponse(
        success=True,
        message=f"Tier {tier.tier_number} changed to {format_label(request.format)}",
        tier=tier_response(tier),
        future_weeks=future_weeks
    )


@router.post("/tiers/{tier_id}/format/async")
def change_tier_format_async(
    tier_id: int,
    request: FormatChangeRequest,
    service: ScheduleService = Depends(get_schedule_service)
):
    """
    Change a tier's format now and queue the later weeks as a background task.

    The tier itself is saved before the task is queued, so a queueing failure
    still answers 200 with the updated tier, no task ID and a ``task_error``.

    Returns:
        dict: Updated tier and the task ID for polling
    """
    try:
        tier = service.get_tier(tier_id)
    except ScheduleError as e:
        raise_http_error(e)

    if tier.league_id is None or tier.week_number is None:
        raise HTTPException(status_code=422, detail="Tier is not attached to a league week")

    try:
        tier = service.change_tier_format(tier_id, request.format)
    except ScheduleError as e:
        raise_http_error(e)

    try:
        task = propagate_format_change_task.delay(
            tier.league_id, tier.tier_number, tier.week_number, request.format
        )
    except Exception as e:
        logger.error(f"Failed to queue format propagation for tier {tier_id}: {e}")
        return {
            "task_id": None,
            "status": "NOT_QUEUED",
            "message": "Format changed for this week; later weeks were not updated",
            "task_error": str(e),
            "tier": tier_response(tier)
        }

    return {
        "task_id": task.id,
        "status": "PENDING",
        "message": "Format propagation started",
        "tier": tier_response(tier)
    }


@router.get("/tasks/{task_id}")
async def get_task_status(task_id: str):
    """
    Get status of a background schedule task.

    Args:
        task_id: Celery task ID

    Returns:
        dict: Task status and result (if complete)
    """
    try:
        task_result = AsyncResult(task_id, app=celery_app)

        if task_result.state == "PENDING":
            response = {
                "task_id": task_id,
                "status": "PENDING",
                "message": "Task is waiting to start..."
            }
        elif task_result.state == "PROGRESS":
            response = {
                "task_id": task_id,
                "status": "PROGRESS",
                "message": task_result.info.get("status", "Processing...")
            }
        elif task_result.state == "SUCCESS":
            response = {
                "task_id": task_id,
                "status": "SUCCESS",
                "result": task_result.result
            }
        elif task_result.state == "FAILURE":
            response = {
                "task_id": task_id,
                "status": "FAILURE",
                "message": str(task_result.info)
            }
        else:
            response = {
                "task_id": task_id,
                "status": task_result.state,
                "message": f"Task state: {task_result.state}"
            }

        return response
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {str(e)}")


@router.post("/tiers/{tier_id}/teams", response_model=TierResponse)
def assign_team(
    tier_id: int,
    request: AssignTeamRequest,
    service: ScheduleService = Depends(get_schedule_service)
):
    try:
        tier = service.assign_team(tier_id, request.position.upper(), request.name, request.ranking)
    except ScheduleError as e:
        raise_http_error(e)

    return tier_response(tier)


@router.delete("/tiers/{tier_id}/teams/{position}", response_model=TierResponse)
def remove_team(tier_id: int, position: str, service: ScheduleService = Depends(get_schedule_service)):
    try:
        tier = service.remove_team(tier_id, position.upper())
    except ScheduleError as e:
        raise_http_error(e)

    return tier_response(tier)


@router.post("/teams/move")
def move_team(request: MoveTeamRequest, service: ScheduleService = Depends(get_schedule_service)):
    """Move a team between positions, within a tier or across tiers."""
    try:
        tiers = service.move_team(
            request.from_tier_id,
            request.from_position.upper(),
            request.to_tier_id,
            request.to_position.upper()
        )
    except ScheduleError as e:
        raise_http_error(e)

    return {
        "success": True,
        "source": tier_response(tiers["source"]),
        "target": tier_response(tiers["target"])
    }
