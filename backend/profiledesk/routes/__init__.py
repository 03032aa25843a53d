# Routes package init
"""
ProfileDesk Backend — API Routes Package
=========================================

Route Inventory:
    - auth.py:     POST /signup, POST /login, GET /me
    - profiles.py: POST /api/users, GET /api/users, GET /api/users/{id},
                   GET /api/users/{id}/image
    - members.py:  POST /users, GET /users, GET /users/{id}, PUT /users/{id},
                   POST /users/bulk, GET /search
    - health.py:   GET /, GET /health

Routes stay thin: pull values out of the request, call a service, pick the
status code. Business rules live in services.
"""
