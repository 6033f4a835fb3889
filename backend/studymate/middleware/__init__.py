# Middleware package init
"""
StudyMate Backend — Middleware Package
========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

    1. Request ID: Generate correlation ID for logging and error bodies
    2. Logging: Log method, path, status and duration with that ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)
"""
