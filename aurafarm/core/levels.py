from collections.abc import Sequence


PALETTE_SIZE = 5


class PaletteError(ValueError):
    """Raised when a level palette does not hold exactly five colors."""


def level_of(count: int) -> int:
    """Map daily contribution count to a heatmap level in range 0..4."""

    if count <= 0:
        return 0
    if count <= 3:
        return 1
    if count <= 6:
        return 2
    if count <= 9:
        return 3
    return 4


def check_palette(palette: Sequence[str]) -> None:
    if len(palette) != PALETTE_SIZE:
        raise PaletteError(
            f"level palette must have {PALETTE_SIZE} colors, got {len(palette)}"
        )


def color_for(count: int, palette: Sequence[str]) -> str:
    """Return the palette color for a daily count."""

    check_palette(palette)
    return palette[level_of(count)]
