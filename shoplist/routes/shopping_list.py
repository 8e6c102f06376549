"""
Shoplist Backend: Shopping List Route Handlers
===============================================

What:  CRUD endpoints under /shopping-list.
How:   FastAPI validates bodies into input records; handlers delegate to the
       app's ShoppingListService. Errors are raised, never caught here: the
       global exception handlers in main.py map them to 400/404.

Endpoints:
    GET    /shopping-list        → 200, all items
    POST   /shopping-list        → 201, created item
    PUT    /shopping-list/{id}   → 204
    DELETE /shopping-list/{id}   → 204

    GET and POST also accept a trailing slash.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Response, status

from shoplist.dependencies import get_shopping_list
from shoplist.schemas.common import ErrorResponse
from shoplist.schemas.shopping_list import (
    ShoppingListItem,
    ShoppingListItemCreate,
    ShoppingListItemUpdate,
)
from shoplist.services.shopping_list_service import ShoppingListService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/shopping-list", tags=["Shopping List"])


@router.get(
    "",
    response_model=List[ShoppingListItem],
    response_model_exclude_none=True,
    summary="List shopping-list items",
)
@router.get(
    "/",
    response_model=List[ShoppingListItem],
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def list_items(
    shopping_list: ShoppingListService = Depends(get_shopping_list),
) -> List[ShoppingListItem]:
    return shopping_list.list_all()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ShoppingListItem,
    response_model_exclude_none=True,
    responses={
        400: {"description": "Missing or invalid `name`", "model": ErrorResponse},
    },
    summary="Add an item to the shopping list",
)
@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    response_model=ShoppingListItem,
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def create_item(
    item: ShoppingListItemCreate,
    shopping_list: ShoppingListService = Depends(get_shopping_list),
) -> ShoppingListItem:
    """
    Create a shopping-list item.

    `checked` defaults to false; `dueDate` is omitted from the response when
    not supplied.
    """
    return shopping_list.create(item)


@router.put(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Body `id` does not match path, or invalid field", "model": ErrorResponse},
        404: {"description": "Item not found", "model": ErrorResponse},
    },
    summary="Update fields of a shopping-list item",
)
async def update_item(
    item_id: str,
    changes: ShoppingListItemUpdate,
    shopping_list: ShoppingListService = Depends(get_shopping_list),
) -> Response:
    """
    Apply a partial update. Fields absent from the body keep their values.
    """
    shopping_list.update(item_id, changes)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Item not found", "model": ErrorResponse}},
    summary="Remove a shopping-list item",
)
async def delete_item(
    item_id: str,
    shopping_list: ShoppingListService = Depends(get_shopping_list),
) -> Response:
    shopping_list.delete(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
