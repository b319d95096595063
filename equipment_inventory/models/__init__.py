# Alembic autogenerate needs every model imported here
from .base import Base
from .equipment import Equipment

__all__ = ["Base", "Equipment"]
