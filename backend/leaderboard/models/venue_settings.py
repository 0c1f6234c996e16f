from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from leaderboard.models.base import Base, TimestampMixin

VENUE_SETTINGS_ID = 1


class VenueSettings(TimestampMixin, Base):
    """Singleton row holding venue branding, theme and display configuration."""

    __tablename__ = "venue_settings"

    id: Mapped[int] = mapped_column(primary_key=True, default=VENUE_SETTINGS_ID)

    # Branding
    name: Mapped[str] = mapped_column(String(200))
    leaderboard_name: Mapped[str] = mapped_column(String(200), default="THE LEADERBOARD")
    logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    animated_logo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    logo_background_color: Mapped[str] = mapped_column(String(50), default="transparent")
    hide_logo_border_shadow: Mapped[bool] = mapped_column(default=False)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    hours: Mapped[str | None] = mapped_column(String(500), nullable=True)
    custom_background_color: Mapped[str | None] = mapped_column(String(50), nullable=True)
    background_override: Mapped[bool] = mapped_column(default=False)

    # Theme (JSON)
    theme: Mapped[dict] = mapped_column(JSON)
    theme_presets: Mapped[list | None] = mapped_column(JSON, nullable=True)

    # Typography
    subtitle_bold: Mapped[bool] = mapped_column(default=False)
    subtitle_all_caps: Mapped[bool] = mapped_column(default=False)
    subtitle_white: Mapped[bool] = mapped_column(default=False)
    game_subtitle_white: Mapped[bool] = mapped_column(default=False)
    game_subtitle_bold: Mapped[bool] = mapped_column(default=False)
    game_subtitle_italic: Mapped[bool] = mapped_column(default=False)
    name_font: Mapped[str | None] = mapped_column(String(200), nullable=True)
    name_font_size: Mapped[int] = mapped_column(default=30)
    name_font_style: Mapped[str] = mapped_column(String(20), default="normal")
    leaderboard_font: Mapped[str | None] = mapped_column(String(200), nullable=True)
    leaderboard_font_size: Mapped[int] = mapped_column(default=30)
    leaderboard_font_style: Mapped[str] = mapped_column(String(20), default="normal")
    titlebox_spacing: Mapped[int] = mapped_column(default=20)
    game_spacing: Mapped[int] = mapped_column(default=30)

    # Single view
    single_view_speed: Mapped[int] = mapped_column(default=6)
    single_view_animations: Mapped[bool] = mapped_column(default=False)
    single_view_hide_header: Mapped[bool] = mapped_column(default=False)
    single_view_size: Mapped[str] = mapped_column(String(20), default="extra-large")

    # Scroll view
    scroll_view_speed: Mapped[int] = mapped_column(default=50)
    scroll_view_spacing: Mapped[int] = mapped_column(default=200)
    scroll_view_animations: Mapped[bool] = mapped_column(default=False)
    scroll_view_sticky_header: Mapped[bool] = mapped_column(default=True)
    scroll_view_lazy_load: Mapped[bool] = mapped_column(default=False)
    scroll_view_size: Mapped[str] = mapped_column(String(20), default="extra-large")

    # Grid view
    grid_view_scroll_direction: Mapped[str] = mapped_column(String(10), default="up")
    grid_view_speed: Mapped[int] = mapped_column(default=75)
    grid_view_columns: Mapped[int] = mapped_column(default=3)
    grid_view_spacing: Mapped[int] = mapped_column(default=25)
    grid_view_animations: Mapped[bool] = mapped_column(default=False)
    grid_view_hide_header: Mapped[bool] = mapped_column(default=False)
    grid_view_sticky_header: Mapped[bool] = mapped_column(default=True)
    grid_view_scrolling: Mapped[bool] = mapped_column(default=False)
    grid_view_size: Mapped[str] = mapped_column(String(20), default="normal")
