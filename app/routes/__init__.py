# Routes package init
"""
Catalog API — API Routes Package
==================================

Route Inventory:
    - products.py: GET  /api/products          (paginated list)
                   GET  /api/products/{id}     (single product)
                   POST /api/products          (create, X-API-Key when configured)
    - health.py:   GET  /health                (service health check)

Routes stay thin: extract request data, call a service, return an envelope
from app.responses. Errors are raised, never formatted here.
"""
