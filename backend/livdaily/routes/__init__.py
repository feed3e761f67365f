"""
LivDaily Backend — API Routes Package
=======================================

Route Inventory:
    - auth.py:         /v1/auth/anonymous, /api/auth/*
    - journal.py:      /api/journal
    - grounding.py:    /api/grounding
    - sleep.py:        /api/sleep, /api/sleep/stats
    - rhythms.py:      /api/rhythms, /api/rhythms/phase
    - movement.py:     /api/movement, /api/movement/stats
    - nutrition.py:    /api/nutrition/tasks
    - user.py:         /api/user/profile, /api/user/patterns
    - mindfulness.py:  /api/mindfulness/*
    - motivation.py:   /api/motivation/*
    - admin.py:        /api/admin/*  (role == admin)
    - ai.py:           /api/ai/*
    - health.py:       /health

Routes stay thin: resolve the session, validate the body, call one service
method, return its DTO.
"""

from livdaily.schemas.common import ErrorResponse

# Shared OpenAPI docs for routes that load a user-owned record by ID
OWNED_RECORD_ERRORS = {
    401: {"description": "Missing or invalid session", "model": ErrorResponse},
    403: {"description": "Record belongs to another user", "model": ErrorResponse},
    404: {"description": "Record not found", "model": ErrorResponse},
}
