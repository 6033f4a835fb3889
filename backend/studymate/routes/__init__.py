# Routes package init
"""
StudyMate Backend — API Routes Package
========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - health.py:            GET  /                    (status message)
                            GET  /health              (database ping) 
    - partners.py:          GET  /partners            (filter by subject, sort by experience)
                            GET  /partners/{id}
                            POST /partners
                            PATCH /partners/{id}/increase-count
                            PATCH /partners/{id}/decrease-count
    - partner_requests.py:  POST   /partner-requests
                            GET    /partner-requests?email=
                            PATCH  /partner-requests/{id}
                            DELETE /partner-requests/{id}

Design Principle:
    Routes are THIN — they extract request data, call one repository method,
    and shape the response. Error translation happens in the global exception
    handlers registered in main.py.
"""
