# Middleware package init
"""
Daily Diet Backend — Middleware Package
========================================

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log method, path, status and duration with that ID

Session checks are not middleware: they are FastAPI dependencies
(dailydiet.dependencies) attached to the /meals routes only.
"""
