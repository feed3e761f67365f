"""
LivDaily Backend — Application Package
=======================================

What: REST API behind the LivDaily wellness app (journaling, sleep, grounding,
      daily rhythms, mindfulness content and AI-generated copy).
Who:  Imported by uvicorn (`livdaily.main:app`), Alembic and pytest.

Layering:
    ┌─────────────────────────────────────┐
    │   Routes (HTTP, session gate)       │
    ├─────────────────────────────────────┤
    │   Services (ownership, gating)      │
    ├─────────────────────────────────────┤
    │   Models & Schemas                  │
    ├─────────────────────────────────────┤
    │   Database (async SQLAlchemy)       │
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
