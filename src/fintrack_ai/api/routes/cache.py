import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack_ai.api.dependencies import get_service
from fintrack_ai.logger import get_logger
from fintrack_ai.manager import CategorizerService

logger = get_logger(__name__)

router = APIRouter(prefix="/cache")


@router.post("/invalidate")
async def invalidate_cache(
    service: Annotated[CategorizerService, Depends(get_service)],
) -> dict[str, str | int]:
    cleared = await asyncio.to_thread(service.invalidate_cache)
    logger.info("[CACHE] Invalidation requested, %s entries cleared.", cleared)
    return {"status": "cleared", "cleared": cleared}


@router.post("/invalidate/{category_type}")
async def invalidate_category_type(
    category_type: str,
    service: Annotated[CategorizerService, Depends(get_service)],
) -> dict[str, str | int]:
    removed = await asyncio.to_thread(service.invalidate_category_type_cache, category_type)
    return {"status": "cleared", "category_type": category_type, "cleared": removed}


@router.post("/fix-zakat")
async def fix_zakat(
    service: Annotated[CategorizerService, Depends(get_service)],
) -> dict[str, str | int]:
    removed = await asyncio.to_thread(service.fix_zakat_categorizations)
    return {"status": "fixed", "cleared": removed}


@router.post("/preload")
async def preload_cache(
    service: Annotated[CategorizerService, Depends(get_service)],
) -> dict[str, str | int]:
    added = await asyncio.to_thread(service.preload_common_categories)
    return {"status": "preloaded", "added": added}
