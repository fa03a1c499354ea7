"""Command ORM — persists the how-to / line / platform triple.

Invariants:
    - id is an autoincrement integer primary key, assigned by the store on flush
    - how_to, line, platform are non-nullable
    - line and how_to are unique across the table; platform is not

Design Decisions:
    - Unique constraints at the store level: the repository pre-check can race
      under concurrent creates, the constraint cannot
"""

from sqlalchemy import Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from commander.core.domain_types import HOW_TO_MAX_LENGTH
from commander.db.base import Base


class Command(Base):
    """A shell command and the task it accomplishes on a platform."""
    __tablename__ = "commands"
    __table_args__ = (
        UniqueConstraint("line", name="uq_commands_line"),
        UniqueConstraint("how_to", name="uq_commands_how_to"),
    )

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    how_to: Mapped[str] = mapped_column(
        String(HOW_TO_MAX_LENGTH), nullable=False,
    )
    line: Mapped[str] = mapped_column(Text, nullable=False)
    platform: Mapped[str] = mapped_column(Text, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<Command id={self.id} line={self.line!r} platform={self.platform!r}>"
