"""
StudentInfo API — Application Package Initializer
==================================================

What: Marks the `studentinfo` directory as a Python package.
Who:  Imported by uvicorn (`studentinfo.main:app`), Alembic, and pytest.

Architecture Note:
    The backend is split into thin layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← envelopes and status codes
    ├─────────────────────────────────────┤
    │       Services (Data Access)        │  ← parameterized statements
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
