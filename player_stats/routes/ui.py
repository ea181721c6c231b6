"""UI Routes - Renders Jinja templates for the browsable, editable roster."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from starlette.responses import Response

from player_stats.dependencies import get_player_service
from player_stats.models.fields import Position
from player_stats.models.players import PlayerRead
from player_stats.services.errors import (
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from player_stats.services.player_service import PlayerFields, PlayerService
from player_stats.services.roster_filter import (
    ALL,
    FilterSpec,
    filter_roster,
    nation_options,
    position_options,
    summarize_roster,
)

router = APIRouter(prefix="/roster", tags=["roster-ui"])

# Flash-style notifications after a redirect
SUCCESS_MESSAGES = {
    "created": "Player created successfully.",
    "updated": "Player updated successfully.",
    "deleted": "Player deleted successfully.",
}

DEFAULT_FORM = {"name": "", "position": Position.ST.value, "rating": 75, "club": "", "nation": ""}


def _render_form(
    request: Request,
    *,
    player_id: Optional[int],
    form: dict,
    error: Optional[str] = None,
    status_code: int = 200,
) -> Response:
    return request.app.state.templates.TemplateResponse(
        request,
        "roster/form.html",
        {
            "player_id": player_id,
            "form": form,
            "positions": list(Position),
            "error": error,
        },
        status_code=status_code,
    )


def _render_error(request: Request, status_code: int, message: str) -> Response:
    return request.app.state.templates.TemplateResponse(
        request,
        "roster/error.html",
        {"status_code": status_code, "message": message},
        status_code=status_code,
    )


def _form_from_player(player: PlayerRead) -> dict:
    return player.model_dump(exclude={"id"})


@router.get("", response_class=HTMLResponse)
async def roster_index(
    request: Request,
    q: Optional[str] = Query(None, description="Search name or club"),
    position: Optional[str] = Query(None),
    min_rating: Optional[str] = Query(None),
    nation: Optional[str] = Query(None),
    success: Optional[str] = Query(None),
    service: PlayerService = Depends(get_player_service),
):
    """Render the roster with stats cards, filters and the filtered table."""
    try:
        roster = await service.list()
    except PersistenceError:
        return _render_error(request, 500, "Failed to fetch players")

    spec = FilterSpec.from_params(
        q=q, position=position, min_rating=min_rating, nation=nation
    )
    visible = filter_roster(roster, spec)

    return request.app.state.templates.TemplateResponse(
        request,
        "roster/index.html",
        {
            "players": visible,
            "summary": summarize_roster(roster, visible),
            "spec": spec,
            "all_value": ALL,
            "positions": position_options(roster),
            "nations": nation_options(roster),
            "success": SUCCESS_MESSAGES.get(success or ""),
        },
    )


@router.get("/new", response_class=HTMLResponse)
async def new_player_form(request: Request):
    return _render_form(request, player_id=None, form=dict(DEFAULT_FORM))


@router.post("/new", response_class=HTMLResponse)
async def create_player(
    request: Request,
    name: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    club: Optional[str] = Form(None),
    nation: Optional[str] = Form(None),
    service: PlayerService = Depends(get_player_service),
):
    fields = PlayerFields(
        name=name, position=position, rating=rating, club=club, nation=nation
    )
    try:
        await service.create(fields)
    except ValidationError as exc:
        return _render_form(
            request,
            player_id=None,
            form=fields.__dict__,
            error=str(exc),
            status_code=400,
        )
    except PersistenceError:
        return _render_error(request, 500, "Failed to create player")
    return RedirectResponse(url="/roster?success=created", status_code=303)


@router.get("/{player_id}/edit", response_class=HTMLResponse)
async def edit_player_form(
    request: Request,
    player_id: int,
    service: PlayerService = Depends(get_player_service),
):
    try:
        player = await service.get(player_id)
    except NotFoundError:
        return _render_error(request, 404, "Player not found")
    except PersistenceError:
        return _render_error(request, 500, "Failed to fetch player")
    return _render_form(request, player_id=player_id, form=_form_from_player(player))


@router.post("/{player_id}/edit", response_class=HTMLResponse)
async def update_player(
    request: Request,
    player_id: int,
    name: Optional[str] = Form(None),
    position: Optional[str] = Form(None),
    rating: Optional[str] = Form(None),
    club: Optional[str] = Form(None),
    nation: Optional[str] = Form(None),
    service: PlayerService = Depends(get_player_service),
):
    fields = PlayerFields(
        name=name, position=position, rating=rating, club=club, nation=nation
    )
    try:
        await service.update(player_id, fields)
    except ValidationError as exc:
        return _render_form(
            request,
            player_id=player_id,
            form=fields.__dict__,
            error=str(exc),
            status_code=400,
        )
    except NotFoundError:
        return _render_error(request, 404, "Player not found")
    except PersistenceError:
        return _render_error(request, 500, "Failed to update player")
    return RedirectResponse(url="/roster?success=updated", status_code=303)


@router.post("/{player_id}/delete")
async def delete_player(
    request: Request,
    player_id: int,
    service: PlayerService = Depends(get_player_service),
):
    try:
        await service.remove(player_id)
    except NotFoundError:
        return _render_error(request, 404, "Player not found")
    except PersistenceError:
        return _render_error(request, 500, "Failed to delete player")
    return RedirectResponse(url="/roster?success=deleted", status_code=303)
