# Services package init
"""
Catalog API — Services Layer
==============================

What:  Business logic between routes (HTTP) and the database.
How:   Services take an AsyncSession per call and return ORM objects or
       paginators; they raise application exceptions, never HTTP responses.

Service Inventory:
    - ProductService: product listing (paginated), lookup and creation
"""
