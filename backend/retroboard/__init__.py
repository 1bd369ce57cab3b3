"""
RetroBoard Backend — Application Package Initializer
=====================================================

What: Marks the `retroboard` directory as a Python package.
Why:  Enables module imports like `from retroboard.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by Alembic, pytest, and uvicorn.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, transaction scope
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Presence checks, persistence ops
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Explicit Database store object
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
