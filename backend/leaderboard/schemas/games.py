from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, PositiveInt, StringConstraints, model_validator

from leaderboard.schemas.base import CamelModel, reject_explicit_nulls

GameName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
GameType = Literal["arcade", "pinball"]


class GameCreate(CamelModel):
    name: GameName
    type: GameType
    subtitle: str | None = Field(None, max_length=200)
    image_url: str | None = Field(None, max_length=500)
    overlay_image_url: str | None = Field(None, max_length=500)
    hidden: bool = False


class GameUpdate(CamelModel):
    name: GameName | None = None
    type: GameType | None = None
    subtitle: str | None = Field(None, max_length=200)
    image_url: str | None = Field(None, max_length=500)
    overlay_image_url: str | None = Field(None, max_length=500)
    display_order: int | None = None
    hidden: bool | None = None

    @model_validator(mode="after")
    def _check_nulls(self) -> "GameUpdate":
        reject_explicit_nulls(self, {"subtitle", "image_url", "overlay_image_url"})
        return self


class GameResponse(CamelModel):
    id: int
    name: str
    subtitle: str | None = None
    image_url: str | None = None
    overlay_image_url: str | None = None
    type: str
    display_order: int
    hidden: bool
    current_high_score: int
    top_scorer_name: str | None = None
    top_score_date: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class GameOrder(CamelModel):
    id: PositiveInt
    display_order: int


class ReorderRequest(CamelModel):
    game_orders: list[GameOrder]


class ReorderResponse(CamelModel):
    message: str
    updated: int
