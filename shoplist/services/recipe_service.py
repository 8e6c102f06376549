"""
Shoplist Backend: Recipe Service
=================================

What:  The recipe collection. Each recipe owns its ingredient list; there is no
       link between recipes and shopping-list items.
Who:   Backs the /recipes routes.
"""

from shoplist.schemas.recipe import Recipe, RecipeCreate, RecipeUpdate
from shoplist.services.collection import InMemoryCollection


class RecipeService(InMemoryCollection[Recipe, RecipeCreate, RecipeUpdate]):
    """In-memory, insertion-ordered store of recipes."""

    resource = "recipe"
    entity_model = Recipe
    create_model = RecipeCreate
    update_model = RecipeUpdate
