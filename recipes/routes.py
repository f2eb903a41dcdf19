"""
Recipe API routes.

Route prefix: /recipes
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status

from api.dependencies import get_recipe_service
from auth.dependencies import RequestContext, require_user
from recipes.schemas import (
    RecipeCreate,
    RecipeCreated,
    RecipeDeleted,
    RecipeOut,
    RecipeUpdate,
    RecipeUpdated,
)
from recipes.service import RecipeService

router = APIRouter(tags=["recipes"])


@router.get("", response_model=List[RecipeOut])
async def list_recipes(
    recipes: RecipeService = Depends(get_recipe_service),
) -> List[Dict[str, Any]]:
    return await recipes.list()


@router.get("/{recipe_id}", response_model=RecipeOut)
async def get_recipe(
    recipe_id: str,
    recipes: RecipeService = Depends(get_recipe_service),
) -> Dict[str, Any]:
    return await recipes.get_by_id(recipe_id)


@router.post("", response_model=RecipeCreated, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    payload: RecipeCreate,
    ctx: RequestContext = Depends(require_user),
    recipes: RecipeService = Depends(get_recipe_service),
) -> Dict[str, Any]:
    return {"createdRecipe": await recipes.create(payload, ctx.user_id)}


@router.put("/{recipe_id}", response_model=RecipeUpdated)
async def update_recipe(
    recipe_id: str,
    payload: RecipeUpdate,
    ctx: RequestContext = Depends(require_user),
    recipes: RecipeService = Depends(get_recipe_service),
) -> Dict[str, Any]:
    return {"updatedRecipe": await recipes.update(recipe_id, payload, ctx.user_id)}


@router.delete("/{recipe_id}", response_model=RecipeDeleted)
async def delete_recipe(
    recipe_id: str,
    ctx: RequestContext = Depends(require_user),
    recipes: RecipeService = Depends(get_recipe_service),
) -> Dict[str, Any]:
    deleted = await recipes.delete(recipe_id, ctx.user_id)
    return {"message": "Recipe deleted", "deletedRecipe": deleted}
