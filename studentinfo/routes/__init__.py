# Routes package init
"""
StudentInfo API — API Routes Package
=====================================

What:  HTTP route handlers that accept requests and return JSON envelopes.

Route Inventory:
    - students.py:  POST   /api/addstudent        (create)
                    GET    /api/studentlist       (list, offset/limit pagination)
                    GET    /api/getbyid/{id}      (detail)
                    PATCH  /api/update/{id}       (edit name, class, is_active)
                    DELETE /api/delete/{id}       (delete)
    - health.py:    GET    /health                (service health check)

Routes stay thin: parse the request, call StudentService, shape the
envelope. Failures are raised as application exceptions and turned into
error envelopes by the handlers registered in main.py.
"""
