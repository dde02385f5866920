"""
Pydantic schema definitions for API payloads.

Schemas are separated from storage so that the API representation is
decoupled from persistence.
"""
