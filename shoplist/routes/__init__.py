# Routes package init
"""
Shoplist Backend: API Routes Package
=====================================

Route Inventory:
    - shopping_list.py:  GET/POST /shopping-list, PUT/DELETE /shopping-list/{id}
    - recipes.py:        GET/POST /recipes, PUT/DELETE /recipes/{id}
    - pages.py:          GET / (landing page)

Routes stay thin: extract path/body, call the collection, pick the status code.
"""
