# Routes package init
"""
Shop API Backend: API Routes Package
=====================================

Route Inventory:
    - products.py: GET/POST   /api/products
                   PUT/DELETE /api/products/{product_id}
    - users.py:    GET/POST   /api/users
                   GET        /api/users/{email}/{password}
    - uploads.py:  POST       /upload
                   GET        /uploads/{filename}
    - health.py:   GET        /health

Routes are thin: unpack the request, call a service, choose the status code.
"""
