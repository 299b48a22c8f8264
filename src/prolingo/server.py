import logging
import time
from contextlib import asynccontextmanager
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field, field_validator

from prolingo.application.config import resolve_config
from prolingo.application.pronunciation import score_pronunciation
from prolingo.application.review import (
    due_items,
    prioritize,
    review_stats,
    schedule_next_review,
)
from prolingo.consts import VERSION
from prolingo.domain.constants import MAX_QUALITY, MIN_QUALITY
from prolingo.domain.exceptions import InvalidQualityError
from prolingo.domain.review.models import ReviewItem

# Setup logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("prolingo.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info(f"ProLingo Server v{VERSION} starting up...")
    yield
    # Shutdown
    logger.info("ProLingo Server shutting down...")


app = FastAPI(
    title="ProLingo Server",
    description="Stateless spaced-repetition API for the ProLingo apps.",
    version=VERSION,
    lifespan=lifespan,
)


class HealthResponse(BaseModel):
    status: str
    version: str
    uptime_seconds: float


start_time = time.time()


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Simple health check to verify server is reachable.
    """
    return HealthResponse(status="ok", version=VERSION, uptime_seconds=time.time() - start_time)


@app.get("/version")
async def get_version():
    return {"version": VERSION}


# ---------- Review models ----------


def _as_utc(value: datetime | None) -> datetime | None:
    # Naive timestamps from clients are taken as UTC.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class ReviewItemModel(BaseModel):
    id: str
    last_reviewed: datetime
    next_review: datetime
    ease_factor: float = Field(gt=0)
    interval: int = Field(ge=0)
    consecutive_correct: int = Field(ge=0)

    @field_validator("last_reviewed", "next_review")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return _as_utc(v)

    def to_domain(self) -> ReviewItem:
        return ReviewItem(**self.model_dump())

    @classmethod
    def from_domain(cls, item: ReviewItem) -> "ReviewItemModel":
        return cls(
            id=item.id,
            last_reviewed=item.last_reviewed,
            next_review=item.next_review,
            ease_factor=item.ease_factor,
            interval=item.interval,
            consecutive_correct=item.consecutive_correct,
        )


class ScheduleRequest(BaseModel):
    item: ReviewItemModel
    remembered: bool
    quality: int = Field(ge=MIN_QUALITY, le=MAX_QUALITY)
    now: datetime | None = None  # Defaults to server time

    @field_validator("now")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class ItemsRequest(BaseModel):
    items: list[ReviewItemModel]
    now: datetime | None = None

    @field_validator("now")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        return _as_utc(v)


class StatsResponse(BaseModel):
    due_count: int
    mastered_count: int
    upcoming_count: int
    average_ease_factor: float
    total_items: int
    mastery_percentage: float


class PronunciationRequest(BaseModel):
    recognized: str
    target: str


class PronunciationResponse(BaseModel):
    success: bool
    accuracy: float


# ---------- Review endpoints ----------


@app.post("/reviews/schedule", response_model=ReviewItemModel)
async def schedule_review(req: ScheduleRequest):
    """
    Compute the next state of an item after a review.
    """
    config = resolve_config()
    try:
        updated = schedule_next_review(
            req.item.to_domain(),
            req.remembered,
            req.quality,
            now=req.now,
            params=config.scheduler_params(),
        )
    except InvalidQualityError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e
    except Exception as e:
        logger.error(f"Scheduling failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e)) from e

    return ReviewItemModel.from_domain(updated)


@app.post("/reviews/prioritize", response_model=list[ReviewItemModel])
async def prioritize_reviews(req: ItemsRequest):
    """Order items for presentation: overdue, then harder, then shorter interval."""
    ordered = prioritize([i.to_domain() for i in req.items], now=req.now)
    return [ReviewItemModel.from_domain(i) for i in ordered]


@app.post("/reviews/due", response_model=list[ReviewItemModel])
async def due_reviews(req: ItemsRequest):
    due = due_items([i.to_domain() for i in req.items], now=req.now)
    return [ReviewItemModel.from_domain(i) for i in due]


@app.post("/reviews/stats", response_model=StatsResponse)
async def reviews_stats(req: ItemsRequest):
    config = resolve_config()
    stats = review_stats(
        [i.to_domain() for i in req.items], now=req.now, params=config.scheduler_params()
    )
    return StatsResponse(**asdict(stats))


# ---------- Speech practice ----------


@app.post("/pronunciation/score", response_model=PronunciationResponse)
async def pronunciation_score(req: PronunciationRequest):
    config = resolve_config()
    result = score_pronunciation(req.recognized, req.target, config.pronunciation_threshold)
    return PronunciationResponse(success=result.success, accuracy=result.accuracy)
