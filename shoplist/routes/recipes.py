"""
Shoplist Backend: Recipe Route Handlers
========================================

What:  CRUD endpoints under /recipes, same contract as /shopping-list.

Endpoints:
    GET    /recipes        → 200, all recipes
    POST   /recipes        → 201, created recipe
    PUT    /recipes/{id}   → 204
    DELETE /recipes/{id}   → 204
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from shoplist.dependencies import get_recipes
from shoplist.schemas.common import ErrorResponse
from shoplist.schemas.recipe import Recipe, RecipeCreate, RecipeUpdate
from shoplist.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["Recipes"])


@router.get("", response_model=List[Recipe], summary="List recipes")
@router.get("/", response_model=List[Recipe], include_in_schema=False)
async def list_recipes(
    recipes: RecipeService = Depends(get_recipes),
) -> List[Recipe]:
    return recipes.list_all()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Recipe,
    responses={
        400: {"description": "Missing or invalid `name` / `ingredients`", "model": ErrorResponse},
    },
    summary="Create a recipe",
)
@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=Recipe,
    include_in_schema=False,
)
async def create_recipe(
    recipe: RecipeCreate,
    recipes: RecipeService = Depends(get_recipes),
) -> Recipe:
    return recipes.create(recipe)


@router.put(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Body `id` does not match path, or invalid field", "model": ErrorResponse},
        404: {"description": "Recipe not found", "model": ErrorResponse},
    },
    summary="Update fields of a recipe",
)
async def update_recipe(
    recipe_id: str,
    changes: RecipeUpdate,
    recipes: RecipeService = Depends(get_recipes),
) -> Response:
    recipes.update(recipe_id, changes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{recipe_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Recipe not found", "model": ErrorResponse}},
    summary="Delete a recipe",
)
async def delete_recipe(
    recipe_id: str,
    recipes: RecipeService = Depends(get_recipes),
) -> Response:
    recipes.delete(recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
