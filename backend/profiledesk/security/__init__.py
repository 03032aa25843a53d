# Security package init
"""
ProfileDesk Backend — Security Layer
=====================================

    - tokens.py:    TokenIssuer (JWT issue / verify) and the TokenClaims type
    - passwords.py: one-way password hashing via passlib
    - auth.py:      the Auth Gate dependency guarding protected routes
"""
