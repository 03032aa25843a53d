# Services package init
"""
ProfileDesk Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).
How:   Services take an AsyncSession plus plain values, raise exceptions
       from profiledesk.exceptions and return response schemas.

Service Inventory:
    - AccountService: signup, login and /me lookups
    - ImageService:   upload MIME / size checks and bounded buffering
    - ProfileService: profile ingest, metadata reads and image fetch
    - MemberService:  member directory CRUD, search and bulk insert
"""
