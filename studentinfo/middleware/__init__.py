# Middleware package init
"""
StudentInfo API — Middleware Package
=====================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain:
    Request → [Request ID] → [Access Logging] → [CORS] → Route Handler

    - Request ID runs first so every later log line can carry the ID.
    - Access logging measures duration and records the final status code.
"""
