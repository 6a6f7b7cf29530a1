"""
Laundry API Backend: Pydantic Request/Response Schemas
=======================================================

What:  The API contract. Request bodies are validated against these models;
       responses are projected into them before serialization.
Why:   Rows from the store never reach the client directly. Each response
       shape is an explicit model, so the password hash cannot leak and the
       nested transaction view is typed end to end.

Naming:
    Python attributes are snake_case; JSON keys are camelCase
    (created_at → createdAt, phone_number → phoneNumber) through the
    CamelModel alias generator. Request bodies accept either spelling.
"""
