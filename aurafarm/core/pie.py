import math
from collections.abc import Sequence
from itertools import accumulate

from aurafarm.schemas import PixelCell
from aurafarm.schemas import RankedLanguage


FULL_TURN = 2 * math.pi
EMPTY_CELL = PixelCell(occupied=False, slice_color=None)


def slice_boundaries(ranked: Sequence[RankedLanguage]) -> list[float]:
    """Return the angle at which each slice ends, in input order."""

    total = sum(language.percent_of_total for language in ranked)
    if total <= 0:
        return []
    return [
        cumulative / total * FULL_TURN
        for cumulative in accumulate(language.percent_of_total for language in ranked)
    ]


def angle_from_top(x: float, y: float) -> float:
    """Clockwise angle of a point in screen coordinates, 0 pointing up."""

    return (math.atan2(y, x) + math.pi / 2) % FULL_TURN


def slice_index(angle: float, boundaries: Sequence[float]) -> int:
    for index, boundary in enumerate(boundaries):
        if boundary >= angle:
            return index
    return len(boundaries) - 1


def rasterize_pie(ranked: Sequence[RankedLanguage], radius: int) -> list[list[PixelCell]]:
    """Rasterize ranked percentages into a `2*radius` by `4*radius` cell grid.

    Columns are doubled because terminal cells are about twice as tall as they
    are wide. Each cell is sampled at its center; cells outside the unit circle
    stay empty.
    """

    if radius < 0:
        raise ValueError("radius must not be negative")

    rows = 2 * radius
    columns = 4 * radius
    boundaries = slice_boundaries(ranked)
    if not boundaries:
        return [[EMPTY_CELL] * columns for _ in range(rows)]

    grid: list[list[PixelCell]] = []
    for row in range(rows):
        y = (row + 0.5 - radius) / radius
        line: list[PixelCell] = []
        for column in range(columns):
            x = (column + 0.5 - 2 * radius) / (2 * radius)
            if math.hypot(x, y) > 1.0:
                line.append(EMPTY_CELL)
                continue
            index = slice_index(angle_from_top(x, y), boundaries)
            line.append(PixelCell(occupied=True, slice_color=ranked[index].color))
        grid.append(line)
    return grid


def pie_rows(grid: Sequence[Sequence[PixelCell]]) -> list[list[str | None]]:
    """Flatten a cell grid into per-cell colors, `None` for empty cells."""

    return [[cell.slice_color if cell.occupied else None for cell in row] for row in grid]
