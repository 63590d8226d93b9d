# Routes package init
"""
FormBuilder Backend - API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - accounts.py:  POST /register, POST /login
    - forms.py:     form CRUD (bearer), GET /response/getForms/{id} (public)
    - responses.py: POST /addFormResponse/{id} (public)
    - health.py:    GET  /health

Routes stay thin: read the request, call a service, return its result.
Business rules and storage access live in formbuilder.services.
"""
