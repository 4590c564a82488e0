"""SQLAlchemy ORM models for the gods table and god/emblem associations."""

from sqlalchemy import JSON, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GodModel(Base, TimestampMixin):
    """ORM model for gods table.

    Domains are stored inline as a JSON list. Relations live in
    ``god_relations`` and emblem associations in ``god_emblems``.

    ``version`` is SQLAlchemy's version counter: every UPDATE is issued
    with ``WHERE version = <value read>`` and raises StaleDataError when
    another transaction got there first.

    Foreign Key Constraint:
    - abode_id references abodes.id with SET NULL delete
    """

    __tablename__ = "gods"

    id: Mapped[str] = mapped_column(String(26), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    domains: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    abode_id: Mapped[str | None] = mapped_column(
        String(26),
        ForeignKey("abodes.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GodModel(id={self.id}, name={self.name}, version={self.version})>"


class GodEmblemModel(Base):
    """ORM model for the god_emblems association table.

    ``seq`` is monotonically increasing and gives the association order.
    """

    __tablename__ = "god_emblems"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    god_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("gods.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    emblem_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("emblems.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (UniqueConstraint("god_id", "emblem_id"),)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<GodEmblemModel(god_id={self.god_id}, emblem_id={self.emblem_id})>"
