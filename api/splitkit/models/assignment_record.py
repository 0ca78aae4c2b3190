from sqlalchemy import JSON, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from splitkit.models.base import Base, TimestampMixin


class AssignmentRecord(TimestampMixin, Base):
    """One persisted assignment table: test name -> variant name, under ``key``."""

    __tablename__ = "splitkit_assignment_records"

    key: Mapped[str] = mapped_column(String(255), primary_key=True)
    values: Mapped[dict] = mapped_column(JSON().with_variant(JSONB, "postgresql"), nullable=False, default=dict)
