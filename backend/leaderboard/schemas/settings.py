from datetime import datetime
from typing import Annotated, Literal

from pydantic import Field, StringConstraints, model_validator

from leaderboard.schemas.base import CamelModel, reject_explicit_nulls

ViewSize = Literal["small", "normal", "large", "extra-large"]
FontStyle = Literal["normal", "bold", "italic"]
NonEmpty = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]

# Fields that may be cleared with an explicit null
NULLABLE_SETTINGS = {
    "logo_url",
    "animated_logo_url",
    "address",
    "phone",
    "hours",
    "custom_background_color",
    "theme_presets",
    "name_font",
    "leaderboard_font",
}


class ThemeConfig(CamelModel):
    primary: NonEmpty
    variant: Literal["professional", "tint", "vibrant"]
    appearance: Literal["light", "dark", "system"]
    radius: float = Field(ge=0, le=2)


class ThemePresetConfig(ThemeConfig):
    name: NonEmpty


class VenueSettingsResponse(CamelModel):
    name: str
    leaderboard_name: str
    logo_url: str | None = None
    animated_logo_url: str | None = None
    logo_background_color: str
    hide_logo_border_shadow: bool
    address: str | None = None
    phone: str | None = None
    hours: str | None = None
    custom_background_color: str | None = None
    background_override: bool

    theme: ThemeConfig
    theme_presets: list[ThemePresetConfig] | None = None

    subtitle_bold: bool
    subtitle_all_caps: bool
    subtitle_white: bool
    game_subtitle_white: bool
    game_subtitle_bold: bool
    game_subtitle_italic: bool
    name_font: str | None = None
    name_font_size: int
    name_font_style: str
    leaderboard_font: str | None = None
    leaderboard_font_size: int
    leaderboard_font_style: str
    titlebox_spacing: int
    game_spacing: int

    single_view_speed: int
    single_view_animations: bool
    single_view_hide_header: bool
    single_view_size: str

    scroll_view_speed: int
    scroll_view_spacing: int
    scroll_view_animations: bool
    scroll_view_sticky_header: bool
    scroll_view_lazy_load: bool
    scroll_view_size: str

    grid_view_scroll_direction: str
    grid_view_speed: int
    grid_view_columns: int
    grid_view_spacing: int
    grid_view_animations: bool
    grid_view_hide_header: bool
    grid_view_sticky_header: bool
    grid_view_scrolling: bool
    grid_view_size: str

    updated_at: datetime | None = None


class VenueSettingsUpdate(CamelModel):
    """Partial update. Only keys present in the request body are applied.

    Boolean flags also accept the legacy ``"true"``/``"false"`` strings.
    """

    name: NonEmpty | None = None
    leaderboard_name: NonEmpty | None = None
    logo_url: str | None = Field(None, max_length=500)
    animated_logo_url: str | None = Field(None, max_length=500)
    logo_background_color: str | None = Field(None, max_length=50)
    hide_logo_border_shadow: bool | None = None
    address: str | None = Field(None, max_length=500)
    phone: str | None = Field(None, max_length=50)
    hours: str | None = Field(None, max_length=500)
    custom_background_color: str | None = Field(None, max_length=50)
    background_override: bool | None = None

    theme: ThemeConfig | None = None
    theme_presets: list[ThemePresetConfig] | None = None

    subtitle_bold: bool | None = None
    subtitle_all_caps: bool | None = None
    subtitle_white: bool | None = None
    game_subtitle_white: bool | None = None
    game_subtitle_bold: bool | None = None
    game_subtitle_italic: bool | None = None
    name_font: str | None = Field(None, max_length=200)
    name_font_size: int | None = Field(None, ge=6, le=200)
    name_font_style: FontStyle | None = None
    leaderboard_font: str | None = Field(None, max_length=200)
    leaderboard_font_size: int | None = Field(None, ge=6, le=200)
    leaderboard_font_style: FontStyle | None = None
    titlebox_spacing: int | None = Field(None, ge=0, le=500)
    game_spacing: int | None = Field(None, ge=0, le=500)

    single_view_speed: int | None = Field(None, ge=1, le=600)
    single_view_animations: bool | None = None
    single_view_hide_header: bool | None = None
    single_view_size: ViewSize | None = None

    scroll_view_speed: int | None = Field(None, ge=1, le=1000)
    scroll_view_spacing: int | None = Field(None, ge=0, le=2000)
    scroll_view_animations: bool | None = None
    scroll_view_sticky_header: bool | None = None
    scroll_view_lazy_load: bool | None = None
    scroll_view_size: ViewSize | None = None

    grid_view_scroll_direction: Literal["up", "down"] | None = None
    grid_view_speed: int | None = Field(None, ge=1, le=1000)
    grid_view_columns: int | None = Field(None, ge=1, le=6)
    grid_view_spacing: int | None = Field(None, ge=0, le=500)
    grid_view_animations: bool | None = None
    grid_view_hide_header: bool | None = None
    grid_view_sticky_header: bool | None = None
    grid_view_scrolling: bool | None = None
    grid_view_size: ViewSize | None = None

    @model_validator(mode="after")
    def _check_nulls(self) -> "VenueSettingsUpdate":
        reject_explicit_nulls(self, NULLABLE_SETTINGS)
        return self

    def changes(self) -> dict:
        """Column values for every field present in the request."""
        return self.model_dump(exclude_unset=True)


class UploadResponse(CamelModel):
    url: str
