"""ORM Models — SQLAlchemy declarative models for the tables the admin console reads.

Invariants:
    - All models inherit from Base (db/base.py)
    - The admin console writes only admin_actions; every other table is owned
      by the product application

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from admin_console.models.user import User  # noqa: F401
from admin_console.models.auth_session import AuthSession  # noqa: F401
from admin_console.models.project import Project  # noqa: F401
from admin_console.models.source_image import SourceImage  # noqa: F401
from admin_console.models.generation import Generation  # noqa: F401
from admin_console.models.admin_action import AdminAction  # noqa: F401
