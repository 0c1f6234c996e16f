from datetime import datetime

from sqlalchemy import BigInteger, DateTime, ForeignKey, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from leaderboard.models.base import Base, utcnow


class Score(Base):
    __tablename__ = "scores"
    __table_args__ = (Index("ix_scores_game_score", "game_id", "score"),)

    id: Mapped[int] = mapped_column(primary_key=True)
    game_id: Mapped[int] = mapped_column(
        ForeignKey("games.id", ondelete="CASCADE"), index=True
    )
    player_name: Mapped[str] = mapped_column(String(100))
    score: Mapped[int] = mapped_column(BigInteger)
    phone_number: Mapped[str] = mapped_column(String(20))
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    latitude: Mapped[float]
    longitude: Mapped[float]
    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )

    game: Mapped["Game"] = relationship(back_populates="scores")


from leaderboard.models.game import Game  # noqa: E402, F811
