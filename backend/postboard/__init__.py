"""
Postboard Backend — Application Package Initializer
===================================================

What: Marks the `postboard` directory as a Python package.
Why:  Enables module imports like `from postboard.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    This backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │      Auth (tokens, passwords,       │  ← Who is calling, may they mutate?
    │      auth gate, ownership)          │
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Validation, persistence, views
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
