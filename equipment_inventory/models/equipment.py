from __future__ import annotations

import uuid

from sqlalchemy import CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from equipment_inventory.models.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Equipment(Base):
    __tablename__ = "equipments"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_equipments_quantity_non_negative"),
        CheckConstraint(
            "required_quantity >= 0", name="ck_equipments_required_quantity_non_negative"
        ),
    )

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)  # e.g. Basketball
    description = Column(Text, nullable=True)
    quantity = Column(Integer, nullable=False)
    # stocking target; shortage when quantity < required_quantity
    required_quantity = Column(Integer, nullable=False, default=0, server_default="0")
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now()
    )
