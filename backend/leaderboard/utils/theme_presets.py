from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ThemePreset:
    name: str
    primary: str  # CSS hsl() colour
    variant: str  # "professional", "tint", "vibrant"
    appearance: str  # "light", "dark", "system"
    radius: float

    def as_theme(self) -> dict:
        """Theme dict without the preset name, as stored on the venue."""
        data = asdict(self)
        data.pop("name")
        return data


THEME_PRESETS: list[ThemePreset] = [
    ThemePreset("Classic Arcade Purple", "hsl(280, 100%, 50%)", "vibrant", "dark", 0.75),
    ThemePreset("Retro Green", "hsl(142, 71%, 45%)", "vibrant", "dark", 0.5),
    ThemePreset("Neon Blue", "hsl(215, 100%, 50%)", "vibrant", "dark", 0.75),
    ThemePreset("Classic Red", "hsl(0, 100%, 60%)", "vibrant", "dark", 0.5),
    ThemePreset("Golden", "hsl(48, 100%, 50%)", "vibrant", "dark", 0.6),
    ThemePreset("Teal Dream", "hsl(180, 100%, 37%)", "vibrant", "dark", 0.8),
    ThemePreset("Hot Pink", "hsl(330, 100%, 55%)", "vibrant", "dark", 0.75),
    ThemePreset("Sunset Orange", "hsl(25, 100%, 55%)", "vibrant", "dark", 0.6),
    ThemePreset("Midnight Steel", "hsl(220, 15%, 55%)", "professional", "dark", 0.3),
    ThemePreset("Daylight", "hsl(200, 90%, 45%)", "tint", "light", 0.5),
]

DEFAULT_PRESET = THEME_PRESETS[0]
DEFAULT_LEADERBOARD_NAME = "THE LEADERBOARD"


def default_theme() -> dict:
    return DEFAULT_PRESET.as_theme()


def default_theme_presets() -> list[dict]:
    return [asdict(p) for p in THEME_PRESETS]
