"""
MindfulSpace Backend — Application Package Initializer
======================================================

What: Marks the `app` directory as a Python package.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend is layered:

    ┌─────────────────────────────────────┐
    │   Routes (API Layer) + Auth Guard   │  ← HTTP concerns, bearer token check
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, ownership, aggregation
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy engine + sessions
    └─────────────────────────────────────┘

    Routes translate HTTP into service calls; services receive an AsyncSession
    per call and the caller's identity, and never touch request objects.
"""

__version__ = "1.0.0"
