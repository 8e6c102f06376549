"""
Shoplist Backend: Application Package
======================================

What: In-memory shopping-list and recipe REST service built on FastAPI.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Services (In-Memory Collections)│  ← CRUD contract, ID generation
    ├─────────────────────────────────────┤
    │          Schemas (Data)             │  ← Pydantic entities & inputs
    └─────────────────────────────────────┘

    Collections are owned by the app instance (``app.state``), so a fresh
    ``create_app()`` always starts with empty collections.
"""

__version__ = "1.0.0"
