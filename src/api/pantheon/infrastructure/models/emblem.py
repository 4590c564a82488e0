"""SQLAlchemy ORM model for the emblems table."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class EmblemModel(Base, TimestampMixin):
    """ORM model for emblems table."""

    __tablename__ = "emblems"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<EmblemModel(id={self.id}, name={self.name})>"
