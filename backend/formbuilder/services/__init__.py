# Services package init
"""
FormBuilder Backend - Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - AccountService:  registration and login
    - FormService:     form CRUD, ownership checks, response listing
    - ResponseService: public submissions

Each service is stateless and exposed as a module-level singleton; the
request's AsyncSession is passed into every call.
"""
