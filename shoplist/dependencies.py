"""
Shoplist Backend: Request Dependencies
=======================================

What:  FastAPI dependencies handing the app-owned collections to route handlers.
How:   create_app() stores one collection per resource on `app.state`; these
       getters read them back from the request's app. Tests get isolation by
       building a fresh app, or override them via `app.dependency_overrides`.
"""

from fastapi import Request

from shoplist.services.recipe_service import RecipeService
from shoplist.services.shopping_list_service import ShoppingListService


def get_shopping_list(request: Request) -> ShoppingListService:
    """Return the shopping-list collection owned by the current app."""
    return request.app.state.shopping_list


def get_recipes(request: Request) -> RecipeService:
    """Return the recipe collection owned by the current app."""
    return request.app.state.recipes
