# Routes package init
"""
VRCX Companion API — API Routes Package
========================================

Route Inventory:
    Legacy surface (API_PROFILE=legacy|all):
    - health.py:     GET  /healthz
    - notes.py:      GET  /api/notes, POST /api/notes
    - favorites.py:  GET  /api/favorites/worlds, GET /api/favorites/avatars
    - feed.py:       GET  /api/feed/recent

    Versioned surface (API_PROFILE=v1|all):
    - health.py:     GET  /health
    - users.py:      GET  /v1/ping, GET /v1/users

Design Principle:
    Routes are THIN: read query/body, call one service method, shape the
    response. All SQL lives in services/.
"""
