from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leaderboard.models.base import Base, TimestampMixin


class Game(TimestampMixin, Base):
    __tablename__ = "games"
    __table_args__ = (Index("ix_games_display_order", "display_order", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))
    subtitle: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    overlay_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    type: Mapped[str] = mapped_column(String(20))
    display_order: Mapped[int] = mapped_column(default=0)
    hidden: Mapped[bool] = mapped_column(default=False)

    # Champion cache, derived from the highest Score row for this game
    current_high_score: Mapped[int] = mapped_column(BigInteger, default=0)
    top_scorer_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    top_score_date: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    scores: Mapped[list["Score"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


from leaderboard.models.score import Score  # noqa: E402
