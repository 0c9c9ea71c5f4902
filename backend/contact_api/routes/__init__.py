# Routes package init
"""
Contact API — API Routes Package
==================================

Route Inventory:
    - contacts.py: /contacts               (create, list)
                   /contacts/{id}          (get, delete)
                   /contacts/photo         (upload photo)
                   /contacts/image(s)/{f}  (serve photo bytes)
    - health.py:   GET /health             (service health check)

Routes stay THIN: they extract request data, call a service, and set the
status code, headers, and media type. Business logic lives in services.
"""
