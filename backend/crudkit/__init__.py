"""crudkit — generic REST resource controllers over FastAPI and SQLAlchemy.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""

__version__ = "1.0.0"
