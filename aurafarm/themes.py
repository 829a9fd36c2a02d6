from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import field_validator

from aurafarm.core.levels import check_palette


class Theme(BaseModel):
    """Named color set used to draw the dashboard."""

    model_config = ConfigDict(frozen=True)

    name: str
    levels: tuple[str, str, str, str, str]
    border: str
    title: str
    text: str

    @field_validator("levels", mode="before")
    @classmethod
    def check_levels(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            check_palette(value)
        return value


THEMES: tuple[Theme, ...] = (
    Theme(
        name="GitHub (Green)",
        levels=("#ebedf0", "#9be9a8", "#40c463", "#30a14e", "#216e39"),
        border="bright_black",
        title="blue",
        text="white",
    ),
    Theme(
        name="Ocean (Blue)",
        levels=("#ebedf0", "#79b8ff", "#2188ff", "#005cc5", "#032f62"),
        border="blue",
        title="cyan",
        text="cyan",
    ),
    Theme(
        name="Dracula (Purple)",
        levels=("#282a36", "#44475a", "#6272a4", "#bd93f9", "#ff79c6"),
        border="magenta",
        title="magenta",
        text="magenta",
    ),
    Theme(
        name="Fire (Red)",
        levels=("#ebedf0", "#ff9b9b", "#ff4b4b", "#c50000", "#800000"),
        border="red",
        title="red",
        text="red",
    ),
    Theme(
        name="Halloween (Orange)",
        levels=("#ebedf0", "#ffee4a", "#ffc501", "#fe9600", "#03001c"),
        border="yellow",
        title="yellow",
        text="yellow",
    ),
    Theme(
        name="Catppuccin Mocha",
        levels=("#313244", "#45475a", "#89b4fa", "#b4befe", "#cba6f7"),
        border="#cba6f7",
        title="#cba6f7",
        text="#cdd6f4",
    ),
    Theme(
        name="Tokyo Night",
        levels=("#1a1b26", "#414868", "#7aa2f7", "#bb9af7", "#7dcfff"),
        border="#7aa2f7",
        title="#7aa2f7",
        text="#c0caf5",
    ),
)


def theme_at(index: int) -> Theme:
    """Return the theme for a cycling index, wrapping around the table."""

    return THEMES[index % len(THEMES)]


def next_theme_index(index: int) -> int:
    return (index + 1) % len(THEMES)
