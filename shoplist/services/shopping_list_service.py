"""
Shoplist Backend: Shopping List Service
========================================

What:  The shopping-list collection (items with name, optional due date and a
       checked flag).
Who:   Backs the /shopping-list routes.
"""

from shoplist.schemas.shopping_list import (
    ShoppingListItem,
    ShoppingListItemCreate,
    ShoppingListItemUpdate,
)
from shoplist.services.collection import InMemoryCollection


class ShoppingListService(
    InMemoryCollection[ShoppingListItem, ShoppingListItemCreate, ShoppingListItemUpdate]
):
    """In-memory, insertion-ordered store of shopping-list items."""

    resource = "shopping list item"
    entity_model = ShoppingListItem
    create_model = ShoppingListItemCreate
    update_model = ShoppingListItemUpdate
