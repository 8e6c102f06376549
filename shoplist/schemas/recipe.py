"""
Shoplist Backend: Recipe Schemas
=================================

What:  Pydantic models for recipes and their create/update inputs.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Recipe(BaseModel):
    """
    What:  A stored recipe with its ordered ingredient list.
    Who:   Returned by GET /recipes (array) and POST /recipes.
    """
    id: str = Field(description="Unique recipe identifier, assigned at creation")
    name: str = Field(description="Recipe title")
    ingredients: List[str] = Field(description="Ingredients in preparation order")


class RecipeCreate(BaseModel):
    """Body of POST /recipes. `ingredients` must be an array (it may be empty)."""
    name: str
    ingredients: List[str]


class RecipeUpdate(BaseModel):
    """Body of PUT /recipes/{id}; a partial recipe with an optional matching `id`."""
    id: Optional[str] = None
    name: Optional[str] = None
    ingredients: Optional[List[str]] = None

    @field_validator("name", "ingredients")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"`{info.field_name}` may not be null")
        return v
