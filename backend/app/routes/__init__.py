# Routes package init
"""
MindfulSpace Backend — API Routes Package
===========================================

Route Inventory:
    - auth.py:      POST /api/register, /api/signup, /api/login, /api/logout
    - users.py:     GET/PUT /api/profile, GET /api/users
    - journal.py:   /api/journal, /api/journal/public, /api/journal/{id}
    - wellness.py:  /api/mood, /api/gratitude
    - social.py:    /api/friend-request, /api/friends/*, /api/support
    - stats.py:     /api/stats, /api/achievements, /api/achievements/check
    - health.py:    GET /health, /api/health

Routes stay thin: read the request, resolve the caller with
`require_identity`, call one service method, return its result. Business
rules and ownership scoping live in the services.
"""
