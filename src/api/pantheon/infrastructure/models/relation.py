"""SQLAlchemy ORM model for the god_relations edge table."""

from sqlalchemy import CheckConstraint, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GodRelationModel(Base, TimestampMixin):
    """ORM model for god_relations table.

    One row per relation:
    - kind "parent": relative_id is a parent of god_id (so god_id is a
      child of relative_id)
    - kind "sibling": undirected, stored with god_id < relative_id

    The unique constraint makes inserts idempotent; the check constraint
    forbids self-relations.
    """

    __tablename__ = "god_relations"

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    god_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("gods.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    relative_id: Mapped[str] = mapped_column(
        String(26),
        ForeignKey("gods.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    kind: Mapped[str] = mapped_column(String(16), nullable=False)

    __table_args__ = (
        UniqueConstraint("god_id", "relative_id", "kind"),
        CheckConstraint("god_id <> relative_id", name="ck_god_relations_not_self"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GodRelationModel(god_id={self.god_id}, "
            f"relative_id={self.relative_id}, kind={self.kind})>"
        )
