"""ORM Models — SQLAlchemy declarative models for all exposed entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - All models imported here so string-based relationship() references
      resolve before any query runs
"""

from crudkit.models.user import User  # noqa: F401
from crudkit.models.user_group import UserGroup, user_group_members  # noqa: F401
from crudkit.models.date_dimension import DateDimension  # noqa: F401
