import logging
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException

import packages.config as config
from services.gamification.medals import catalog
from services.gamification.pipeline import load_activities, process_user_data, to_dict
from services.gamification.ranks import RANK_LADDER

from ..cache import get_or_set, payload_key
from ..schemas import (
    GamificationRequest,
    MedalCatalogResponse,
    RanksResponse,
    UserDataResponse,
)


router = APIRouter()

logger = logging.getLogger("fitness.api")


@router.post("/gamification", response_model=UserDataResponse)
def gamification(body: GamificationRequest):
    if len(body.activities) > config.MAX_ACTIVITIES:
        logger.warning("gamification payload rejected activities=%d", len(body.activities))
        raise HTTPException(
            status_code=413,
            detail=f"Too many activities: {len(body.activities)} > {config.MAX_ACTIVITIES}",
        )

    payload = body.model_dump()
    # The heatmap window moves with the calendar day.
    today = datetime.now(timezone.utc).date().isoformat()
    cache_key = payload_key("gamification", payload)

    def compute():
        activities = load_activities(payload["activities"])
        result = process_user_data(payload["athlete"], activities)
        return UserDataResponse.model_validate(to_dict(result))

    return get_or_set(cache_key, config.RESULT_CACHE_SECONDS, today, compute, config.RESULT_CACHE_MAX_ENTRIES)


@router.get("/ranks", response_model=RanksResponse)
def ranks():
    return {"ranks": [{"name": r.name, "emoji": r.emoji, "min_hours": r.min_hours, "tier": r.tier} for r in RANK_LADDER]}


@router.get("/medals/catalog", response_model=MedalCatalogResponse)
def medal_catalog():
    return {"medals": catalog()}
