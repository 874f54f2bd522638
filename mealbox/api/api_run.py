from contextlib import asynccontextmanager
from datetime import date as _date
from threading import Lock
from typing import Dict, Optional
import logging

from fastapi import FastAPI, Query, HTTPException, Response

from mealbox.domain.MealItem import MealItem
from mealbox.events.web_observers import start as start_event_observers, get_events as get_web_events
from mealbox.infra.Dish_Repository import reading_from_dishes
from mealbox.infra.Profile_Repository import reading_profile
from mealbox.infra.Schedule_Repository import ScheduleRepository
from mealbox.infra.pdf_utils import generate_pdf_for_box
from mealbox.logic.box.assembler import find_week
from mealbox.logic.planning.session import PlanSession, SessionClosedError, EntryNotFoundError
from mealbox.utilities.validators import PlanOpenInput, DurationInput, EntryRefInput, CommitInput

# Routers
from mealbox.api.api_ai import router as ai_router

# Logging
logger = logging.getLogger("mealbox_app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Register event bus subscribers for web notices when the app starts."""
    start_event_observers()
    logger.info("Web observers for plan events started")
    yield


# Initialize FastAPI app
app = FastAPI(title="Meal Box Planner API", lifespan=lifespan)
app.include_router(ai_router)

# One live plan session per user (process-local)
_sessions: Dict[str, PlanSession] = {}
_sessions_lock = Lock()


# -------------------- Helpers --------------------
def _build_session(user_id: str) -> PlanSession:
    dishes = reading_from_dishes()
    profile = reading_profile(user_id)
    session = PlanSession(dishes, profile)
    logger.info("New box session for %s (%d dishes, profile=%s)", user_id, len(dishes), profile is not None)
    return session


def _new_session(user_id: str) -> PlanSession:
    with _sessions_lock:
        session = _sessions[user_id] = _build_session(user_id)
    return session


def _get_session(user_id: str, create: bool = False) -> PlanSession:
    """Look up the user's session, creating it in the same lock hold when `create` is set."""
    with _sessions_lock:
        session = _sessions.get(user_id)
        if session is None and create:
            session = _sessions[user_id] = _build_session(user_id)
    if session is None:
        raise HTTPException(status_code=404, detail="No box session for this user; load /api/box first")
    return session


def reset_sessions():
    with _sessions_lock:
        _sessions.clear()


# -------------------- BOX --------------------
@app.get("/api/box")
def get_box(user_id: str = Query(..., min_length=1), refresh: bool = Query(default=False)):
    """Return the 4 weekly boxes; they are assembled once per session unless refresh is requested."""
    session = _new_session(user_id) if refresh else _get_session(user_id, create=True)
    return {"user_id": user_id, "boxes": [b.to_dict() for b in session.boxes]}


@app.get("/api/box/{week}/day/{day}")
def get_box_day(week: int, day: int, user_id: str = Query(..., min_length=1)):
    session = _get_session(user_id, create=True)
    box = find_week(session.boxes, week)
    day_plan = box.find_day(day) if box else None
    if day_plan is None:
        raise HTTPException(status_code=404, detail=f"No box day {day} for week {week}")
    return {
        "week": week,
        "day": day,
        "label": day_plan.label,
        "total_calories": day_plan.total_calories(),
        "items": [MealItem.box(m).to_dict() for m in day_plan.meals],
    }


@app.get("/api/box/{week}/pdf")
def export_box_pdf(week: int, user_id: str = Query(..., min_length=1)):
    session = _get_session(user_id, create=True)
    box = find_week(session.boxes, week)
    if box is None:
        raise HTTPException(status_code=404, detail=f"No box for week {week}")
    pdf_bytes = generate_pdf_for_box(box)
    filename = f"box_semaine_{week}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# -------------------- PLAN --------------------
@app.post("/api/plan")
def open_plan(payload: PlanOpenInput):
    session = _get_session(payload.user_id, create=True)
    if find_week(session.boxes, payload.week) is None:
        raise HTTPException(status_code=404, detail="The catalog is empty; no box to plan")
    session.open(payload.week, payload.duration)
    return session.to_dict()


@app.post("/api/plan/duration")
def change_duration(payload: DurationInput):
    session = _get_session(payload.user_id)
    try:
        session.change_duration(payload.duration)
    except SessionClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return session.to_dict()


@app.post("/api/plan/toggle")
def toggle_entry(payload: EntryRefInput):
    session = _get_session(payload.user_id)
    try:
        session.toggle(payload.entry_id, payload.day_index)
    except SessionClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return session.to_dict()


@app.post("/api/plan/swap")
def swap_plan_entry(payload: EntryRefInput):
    session = _get_session(payload.user_id)
    try:
        entry = session.swap(payload.entry_id, payload.day_index)
    except SessionClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except EntryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return entry.to_dict()


@app.post("/api/plan/commit")
def commit(payload: CommitInput):
    session = _get_session(payload.user_id)
    start = payload.start_date or _date.today()
    try:
        report = session.commit(ScheduleRepository(payload.user_id), start)
    except SessionClosedError as e:
        raise HTTPException(status_code=409, detail=str(e))
    result = report.to_dict()
    result["start_date"] = start.isoformat()
    return result


@app.delete("/api/plan")
def discard_plan(user_id: str = Query(..., min_length=1)):
    session = _get_session(user_id)
    session.discard()
    return session.to_dict()


# -------------------- SCHEDULE / EVENTS --------------------
@app.get("/api/schedule")
def get_schedule(user_id: str = Query(..., min_length=1),
                 start: Optional[_date] = Query(default=None),
                 end: Optional[_date] = Query(default=None)):
    meals = ScheduleRepository(user_id).list_meals(start, end)
    items = [MealItem.scheduled(m).to_dict() for m in meals]
    return {"user_id": user_id, "count": len(items), "items": items}


@app.get("/api/events")
def events(since: Optional[int] = Query(default=None), user_id: Optional[str] = Query(default=None)):
    return get_web_events(since, user_id)
