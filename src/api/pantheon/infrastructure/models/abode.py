"""SQLAlchemy ORM model for the abodes table."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class AbodeModel(Base, TimestampMixin):
    """ORM model for abodes table."""

    __tablename__ = "abodes"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    coordinates: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AbodeModel(id={self.id}, name={self.name})>"
