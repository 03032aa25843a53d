# Middleware package init
"""
ProfileDesk Backend — Middleware Package
=========================================

Middleware Chain:
    Request → [Request ID] → [Access Log] → [CORS] → Route Handler

    - Request ID runs first so every log line of the request, including
      the access line, can carry the same correlation id
    - The access log measures duration around everything downstream
"""
