"""
Shoplist Backend: Shopping List Schemas
========================================

What:  Pydantic models for shopping-list items and the inputs that create or
       modify them.
How:   The wire format uses camelCase (`dueDate`); Python code uses snake_case
       (`due_date`). Aliases bridge the two, and `populate_by_name` lets
       services build entities from plain field names.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ShoppingListItem(BaseModel):
    """
    What:  A stored shopping-list entry.
    Who:   Returned by GET /shopping-list (array) and POST /shopping-list.
    """
    id: str = Field(description="Unique item identifier, assigned at creation")
    name: str = Field(description="What to buy")
    due_date: Optional[str] = Field(
        default=None,
        alias="dueDate",
        description="Optional date by which the item is needed",
    )
    checked: bool = Field(default=False, description="Whether the item has been bought")

    model_config = ConfigDict(populate_by_name=True)


class ShoppingListItemCreate(BaseModel):
    """Body of POST /shopping-list. Only `name` is required."""
    name: str
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    checked: bool = False

    model_config = ConfigDict(populate_by_name=True)


class ShoppingListItemUpdate(BaseModel):
    """
    Body of PUT /shopping-list/{id}.

    Every field is optional; only the fields present in the body are applied.
    `id`, when present, must equal the path ID. `name` and `checked` cannot be
    cleared, so an explicit null is rejected. `dueDate` may be set to null.
    """
    id: Optional[str] = None
    name: Optional[str] = None
    due_date: Optional[str] = Field(default=None, alias="dueDate")
    checked: Optional[bool] = None

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("name", "checked")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"`{info.field_name}` may not be null")
        return v
