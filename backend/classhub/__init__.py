"""
ClassHub Backend — Application Package Initializer
===================================================

What:  Marks the `classhub` directory as a Python package.
Who:   Imported by uvicorn (`classhub.main:app`), Alembic and pytest.

Architecture Note:
    Every route is an ordered chain of steps; each step either raises
    (short-circuiting the chain) or hands its result to the next one:

    ┌─────────────────────────────────────┐
    │      Routes + Dependencies          │  ← path ids, identity, authorization
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← linking classrooms, rosters, history
    ├─────────────────────────────────────┤
    │          Store (Data Access)        │  ← generic get / find / save / delete
    ├─────────────────────────────────────┤
    │       Models & Schemas (Data)       │  ← SQLAlchemy ORM + Pydantic
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← one async session per request
    └─────────────────────────────────────┘

    The session commits once the whole chain succeeds and rolls back
    otherwise, so a classroom and its teacher/student links are written
    together or not at all.
"""

__version__ = "1.0.0"
