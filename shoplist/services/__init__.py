# Services package init
"""
Shoplist Backend: Services Layer
=================================

What:  In-memory collections implementing the CRUD contract, independent of HTTP.
How:   One generic InMemoryCollection, specialised per resource type. Route
       handlers receive the app's instances through FastAPI dependencies
       (see shoplist.dependencies).

Service Inventory:
    - InMemoryCollection: Ordered store with list/create/update/delete
    - ShoppingListService: Shopping-list items
    - RecipeService: Recipes with ingredient lists
"""
