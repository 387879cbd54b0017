# tests/test_dashboard.py
import uuid
from datetime import datetime, timezone

import pytest
from fastapi import HTTPException

from pitchcraft.controllers import dashboard_controller
from pitchcraft.controllers.dashboard_controller import (
    EMPTY_MESSAGE,
    DashboardView,
    format_date,
    get_dashboard,
    get_pitch,
)
from pitchcraft.core.exceptions import PersistenceError
from pitchcraft.db.pitch_store import save_pitch
from pitchcraft.schemas.pitch import DashboardState


def test_format_date():
    assert format_date(datetime(2025, 3, 5, 18, 30, tzinfo=timezone.utc)) == "Mar 5, 2025"
    assert format_date(datetime(2024, 12, 31)) == "Dec 31, 2024"
    assert format_date(None) == "N/A"


async def test_view_starts_loading_and_loads_empty(db, session):
    view = DashboardView(session)
    assert view.state == DashboardState.loading

    assert await view.load(db) == DashboardState.loaded
    read = view.read()
    assert read.count == 0
    assert read.pitches == []
    assert read.empty_message == EMPTY_MESSAGE


async def test_loaded_list_has_summaries(db, session, idea, generated):
    await save_pitch(session.uid, idea, generated, db)
    await save_pitch(session.uid, idea.model_copy(update={"tone": "fun"}), generated, db)

    read = await get_dashboard(session, db)
    assert read.state == DashboardState.loaded
    assert read.count == 2
    assert read.empty_message is None
    assert sorted(p.tone for p in read.pitches) == ["formal", "fun"]
    assert all(p.pitch_name == "Acme" for p in read.pitches)
    assert all(p.created_label != "N/A" for p in read.pitches)


async def test_store_failure_is_errored_not_empty(db, session, monkeypatch):
    async def _unavailable(user_id, db):
        raise PersistenceError("Could not load your saved pitches.")

    monkeypatch.setattr(dashboard_controller, "get_pitches_by_user", _unavailable)

    view = DashboardView(session)
    assert await view.load(db) == DashboardState.errored
    assert view.error == "Could not load your saved pitches."
    assert view.read().empty_message is None

    with pytest.raises(HTTPException) as exc:
        await get_dashboard(session, db)
    assert exc.value.status_code == 503


async def test_get_pitch_for_owner(db, session, idea, generated):
    pitch_id = await save_pitch(session.uid, idea, generated, db)
    pitch = await get_pitch(session, pitch_id, db)
    assert pitch.id == pitch_id


async def test_get_pitch_unknown_or_foreign_is_not_found(db, session, other_user, idea, generated):
    with pytest.raises(HTTPException) as exc:
        await get_pitch(session, uuid.uuid4(), db)
    assert exc.value.status_code == 404

    theirs = await save_pitch(other_user.id, idea, generated, db)
    with pytest.raises(HTTPException) as exc:
        await get_pitch(session, theirs, db)
    assert exc.value.status_code == 404


async def test_summary_falls_back_to_untitled(db, session, idea, generated):
    pitch_id = await save_pitch(session.uid, idea, generated, db)
    pitch = await get_pitch(session, pitch_id, db)
    pitch.pitch_name = ""
    assert dashboard_controller.summarize(pitch).pitch_name == "Untitled Pitch"
