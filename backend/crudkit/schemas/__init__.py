"""Pydantic Schemas — DTOs and form types bound from request bodies.

Invariants:
    - Every DTO and form type derives from RestDto (schemas/base.py)
    - Schemas validate at the system boundary; models are persistence only
"""
