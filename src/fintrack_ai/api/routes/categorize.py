import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from fintrack_ai.api.dependencies import get_category_repository, get_service
from fintrack_ai.api.schemas import BatchCategorizeRequest, CategorizeRequest, CategorizeResponse
from fintrack_ai.manager import CategorizerService
from fintrack_ai.models import Category
from fintrack_ai.storage.categories import CategoryRepository

router = APIRouter()


@router.post("/categorize", response_model=CategorizeResponse)
async def categorize_description(
    req: CategorizeRequest,
    service: Annotated[CategorizerService, Depends(get_service)],
) -> CategorizeResponse:
    category, source = await asyncio.to_thread(service.categorize_detailed, req.description, req.user_id)
    return CategorizeResponse(id=category.id, name=category.name, icon=category.icon, source=source)


@router.post("/categorize/batch")
async def categorize_batch(
    req: BatchCategorizeRequest,
    service: Annotated[CategorizerService, Depends(get_service)],
) -> dict[str, Category]:
    return await asyncio.to_thread(service.batch_categorize_transactions, req.descriptions, req.user_id)


@router.get("/categories")
async def get_categories(
    categories: Annotated[CategoryRepository | None, Depends(get_category_repository)],
) -> list[str]:
    if categories is None:
        return []
    return categories.names()
