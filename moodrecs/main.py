"""HTTP preview surface for the recommendation engine."""

from typing import Any

import uvicorn
from fastapi import FastAPI, HTTPException
from pydantic import AliasChoices, BaseModel, Field

from moodrecs import __version__
from moodrecs.config import config
from moodrecs.core import (
    STATE_PROFILES,
    ContentItem,
    ContentType,
    Focus,
    RecommendationRequest,
    UserPreferences,
    UserState,
    generate_recommendations,
)
from moodrecs.core.profiles import FOCUS_MULTIPLIERS
from moodrecs.logging import get_logger, setup_logging
from moodrecs.providers import MissingIdentifierError, ProviderKind, normalize

setup_logging(config.log_level)
logger = get_logger(__name__)

app = FastAPI(
    title="Mood Recs",
    version=__version__,
)


class CandidatePayload(BaseModel):
    """One normalized content item in a candidate pool."""

    id: str
    content_type: ContentType = Field(
        validation_alias=AliasChoices("content_type", "type"),
    )
    title: str = "Untitled"
    source: str = "unknown"
    tags: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    # Missing numeric attributes take ContentItem defaults
    intensity: float | None = None
    cognitive_load: float | None = None
    novelty: float | None = None
    duration_min: float | None = None
    popularity: float | None = None
    rating: float | None = None
    link: str | None = None
    description: str | None = None
    image_url: str | None = None


class PreferencesPayload(BaseModel):
    """Static preference lists of the requester."""

    user_id: str = ""
    liked_tags: list[str] = Field(default_factory=list)
    disliked_tags: list[str] = Field(default_factory=list)
    liked_genres: list[str] = Field(default_factory=list)
    disliked_genres: list[str] = Field(default_factory=list)
    intensity_tolerance: float | None = None
    novelty_tolerance: float | None = None


class RecommendationPayload(BaseModel):
    """Request body for ``POST /recommendations``."""

    user_id: str = ""
    state: str
    focus: str
    time_available_min: int
    energy_level: int
    no_heavy: bool = False
    top_n: int | None = Field(default=None, ge=1, le=100)
    preferences: PreferencesPayload = Field(default_factory=PreferencesPayload)
    candidates: list[CandidatePayload] = Field(default_factory=list)


def _parse_state(value: str) -> UserState:
    try:
        return UserState(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown state: {value}")


def _parse_focus(value: str) -> Focus:
    try:
        return Focus(value)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown focus: {value}")


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint."""
    return {"ok": True}


@app.post("/recommendations")
async def recommendations(payload: RecommendationPayload) -> dict:
    """Rank a caller-supplied candidate pool for one state/focus request."""
    # Bad body values are 422; unknown path parameters (_parse_state) are 404
    try:
        state = UserState(payload.state)
        focus = Focus(payload.focus)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    request = RecommendationRequest(
        state=state,
        focus=focus,
        time_available_min=payload.time_available_min,
        energy_level=payload.energy_level,
        user_id=payload.user_id,
        no_heavy=payload.no_heavy,
    )
    prefs = UserPreferences.from_dict(payload.preferences.model_dump())
    pool = [ContentItem.from_dict(candidate.model_dump()) for candidate in payload.candidates]

    result = generate_recommendations(request, pool, prefs, top_n=payload.top_n)
    return result.to_dict()


@app.post("/normalize/{provider_kind}")
async def normalize_record(provider_kind: str, record: dict[str, Any]) -> dict:
    """Normalize one raw provider record into a content item."""
    try:
        kind = ProviderKind(provider_kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown provider kind: {provider_kind}")

    try:
        item = normalize(record, kind)
    except MissingIdentifierError as e:
        raise HTTPException(status_code=422, detail=str(e))
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"Invalid record: {str(e)[:200]}")

    return item.to_dict()


@app.get("/profiles/{state}")
async def get_profile(state: str) -> dict:
    """Return the static profile of one user state."""
    return STATE_PROFILES[_parse_state(state)].to_dict()


@app.get("/focus-multipliers/{focus}")
async def get_focus_multipliers(focus: str) -> dict:
    """Return the content-type multipliers applied under one focus."""
    row = FOCUS_MULTIPLIERS.get(_parse_focus(focus), {})
    return {content_type.value: row.get(content_type, 1.0) for content_type in ContentType}


def main() -> None:
    """Run the API server."""
    logger.info(f"Starting FastAPI server on {config.host}:{config.port}")
    uvicorn.run(
        "moodrecs.main:app",
        host=config.host,
        port=config.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
