"""
Shop API Backend: Application Package Initializer
==================================================

What: Marks the `shop_api` directory as a Python package.
Who:  Imported by uvicorn (`uvicorn shop_api.main:app`), pytest, and the
      `shop-api` console script.

Architecture Note:
    The backend is a thin layered REST service over two tables:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │   Services (procedure call shapes)  │  ← products, users, uploads
    ├─────────────────────────────────────┤
    │     Schemas (documentation shapes)  │  ← Pydantic models for /api-ui
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← pooled async SQLAlchemy engine
    └─────────────────────────────────────┘

    There is no business logic between the layers: every endpoint becomes
    one parameterized stored-procedure call or one plain SELECT.
"""

__version__ = "1.0.0"
