import enum

from sqlalchemy import Column, Integer, String, Text, Enum
from database import Base


class RequirementKind(str, enum.Enum):
    STREAK = "streak"
    TOTAL_ENTRIES = "total_entries"


class Achievement(Base):
    """Catalog definition. Reference data, read-only at runtime."""

    __tablename__ = "achievements"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(50), nullable=True)
    requirement_type = Column(
        Enum(RequirementKind, name="requirement_kind", native_enum=False,
             values_callable=lambda kinds: [k.value for k in kinds]),
        nullable=False,
    )
    requirement_value = Column(Integer, nullable=False)
