"""
Database boundary package.

Importing this package registers every ORM model with Base.metadata.
"""

from archmen.boundary.db.base import Base
from archmen.boundary.db import models  # noqa: F401

__all__ = ["Base"]
