import re
from datetime import datetime
from typing import Annotated

from pydantic import Field, PositiveInt, StringConstraints, field_validator

from leaderboard.schemas.base import CamelModel

PHONE_PATTERN = re.compile(r"^\+?[1-9]\d{1,14}$")

# Largest value the BIGINT score columns hold
MAX_SCORE = 2**63 - 1

PlayerName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]


class ScoreCreate(CamelModel):
    game_id: PositiveInt
    player_name: PlayerName
    score: int = Field(ge=0, le=MAX_SCORE)
    phone_number: str
    image_url: str | None = Field(None, max_length=500)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    submitted_at: datetime | None = None

    @field_validator("phone_number")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        value = value.strip()
        if not PHONE_PATTERN.match(value):
            raise ValueError("Invalid phone number")
        return value


class ScoreResponse(CamelModel):
    id: int
    game_id: int
    player_name: str
    score: int
    phone_number: str
    image_url: str | None = None
    latitude: float
    longitude: float
    submitted_at: datetime
