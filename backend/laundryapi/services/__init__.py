"""
Laundry API Backend: Services Layer
=====================================

What:  Business rules between the routes (HTTP) and the repositories (SQL).
How:   Each service takes a session per call, invokes repository
       functions, classifies store errors into application exceptions, and
       projects rows into response schemas.

Service Inventory:
    - AuthService:        registration, login
    - UserService:        profile, user administration, owner seeding
    - ProductService:     product price list
    - CustomerService:    customer book
    - TransactionService: sale recording, denormalized transaction view
    - store_errors:       IntegrityError classification shared by all
"""
