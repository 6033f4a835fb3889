"""
StudyMate Backend — Application Package Initializer
====================================================

What: Marks the `studymate` directory as a Python package.
Why:  Enables module imports like `from studymate.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    This backend follows a thin layered architecture:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │     Repositories (Storage Access)   │  ← One MongoDB operation per call
    ├─────────────────────────────────────┤
    │        Schemas (API Contracts)      │  ← Pydantic response models
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async PyMongo client
    └─────────────────────────────────────┘

    Routes never touch collections directly; they receive a repository
    through FastAPI's dependency injection and translate its results
    (or exceptions) into HTTP responses.
"""

__version__ = "1.0.0"
