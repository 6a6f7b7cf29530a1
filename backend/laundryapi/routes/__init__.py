"""
Laundry API Backend: API Routes Package
=========================================

What:  HTTP route handlers, one module per resource.

Route Inventory ({prefix} defaults to /api/v1):
    - auth.py:          POST {prefix}/auth/register, {prefix}/auth/login
    - users.py:         {prefix}/profile, /users/{id}, /admin/users, /owner/users/{id}
    - products.py:      {prefix}/products[/{id}]
    - customers.py:     {prefix}/customers[/{id}]
    - transactions.py:  {prefix}/transactions[/{id}]
    - health.py:        GET /health

Routes are thin: they declare the role guard, parse the body, and hand the
session to a service. Errors are raised by services and rendered by the
handlers in main.py.
"""
