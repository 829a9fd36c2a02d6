"""Rich renderables for the terminal dashboard."""

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from aurafarm.core.calendar import label_line
from aurafarm.schemas import DashboardPayload
from aurafarm.themes import Theme


CELL_GLYPH = "■"
PIE_GLYPH = "█"


def render_header(payload: DashboardPayload, theme: Theme) -> Text:
    text = Text()
    text.append(payload.name or payload.username, style=f"bold {theme.title}")
    text.append(f"\n@{payload.username}\n\n")
    for label, value in (
        ("Repositories: ", payload.repositories),
        ("Followers:    ", payload.followers),
        ("Contributions:", payload.total_contributions),
    ):
        text.append(label)
        text.append(f" {value}\n", style=theme.text)
    text.append("\nStreak: ")
    text.append(f"{payload.streak.current} days", style=theme.text)
    text.append(" (Max: ")
    text.append(str(payload.streak.longest), style=theme.text)
    text.append(")")
    return text


def render_calendar(payload: DashboardPayload, theme: Theme) -> Panel:
    text = Text(label_line(payload.month_labels, payload.visible_weeks), style="dim")
    for row in payload.level_rows:
        text.append("\n")
        for level in row:
            if level is None:
                text.append("  ")
            else:
                text.append(f"{CELL_GLYPH} ", style=theme.levels[level])

    footer = Table.grid(expand=True)
    footer.add_column()
    footer.add_column(justify="right")
    footer.add_row(
        Text(f"Showing last {payload.visible_weeks} weeks", style="dim"),
        Text(f"Theme: {payload.theme}", style=theme.text),
    )
    return Panel(
        Group(text, Text(), footer),
        title="Contribution Graph",
        border_style=theme.border,
        expand=False,
    )


def render_languages(payload: DashboardPayload, theme: Theme) -> Panel:
    table = Table.grid(padding=(0, 1))
    table.add_column()
    table.add_column()
    table.add_column(justify="right")
    for language in payload.languages:
        table.add_row(
            Text(PIE_GLYPH, style=language.color),
            language.name,
            f"{language.percent_of_total:.1f}%",
        )

    pie = Text()
    for index, row in enumerate(payload.pie_rows):
        if index:
            pie.append("\n")
        for color in row:
            if color is None:
                pie.append(" ")
            else:
                pie.append(PIE_GLYPH, style=color)

    if payload.languages:
        body = Group(pie, Text(), table)
    else:
        body = Group(Text("No language data", style="dim"))
    return Panel(body, title="Languages", border_style=theme.border, expand=False)


def render_dashboard(payload: DashboardPayload, theme: Theme) -> Group:
    """Compose the full dashboard for one frame."""

    top = Table.grid(padding=(0, 2))
    top.add_column()
    top.add_column()
    top.add_row(render_header(payload, theme), render_languages(payload, theme))
    return Group(top, render_calendar(payload, theme))
