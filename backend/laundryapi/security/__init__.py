"""
Laundry API Backend: Security Package
=======================================

What:  Credential handling and route access control.

Modules:
    - credentials.py: bcrypt password hashing, signed session tokens
    - access.py:      bearer-token guard, role guards, permission policy table
"""
