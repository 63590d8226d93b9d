# Middleware package init
"""
FormBuilder Backend - Middleware Package
=========================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (outermost first):
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route Handler

    - Request ID comes first so every later log line can carry it.
    - Logging sees the final status code and total duration.
    - CORS answers preflight OPTIONS requests for the configured origin.

Authentication is not middleware: it is the `authenticate_account`
dependency (formbuilder.dependencies), attached only to the routes that
need it.
"""
