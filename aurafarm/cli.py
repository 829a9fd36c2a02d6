import argparse
import logging
import sys
from collections.abc import Sequence
from datetime import date
from datetime import datetime
from datetime import UTC

from rich.console import Console
from sqlalchemy.orm import sessionmaker

from aurafarm.core.observability import configure_logging
from aurafarm.db import get_engine
from aurafarm.render import render_dashboard
from aurafarm.services.dashboard_service import GitHubAPIError
from aurafarm.services.dashboard_service import InvalidGitHubTokenError
from aurafarm.services.dashboard_service import build_dashboard
from aurafarm.services.dashboard_service import load_local_stats
from aurafarm.services.mock_data import build_mock_stats
from aurafarm.settings import Settings
from aurafarm.themes import theme_at


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="aurafarm",
        description="Show your GitHub activity as a terminal dashboard.",
    )
    parser.add_argument("--mock", action="store_true", help="use generated data")
    parser.add_argument("--theme", type=int, default=0, help="theme index")
    parser.add_argument(
        "--columns", type=int, default=None, help="override terminal width"
    )
    parser.add_argument("--radius", type=int, default=None, help="pie chart radius")
    return parser


def main(argv: Sequence[str] | None = None, console: Console | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings()
    configure_logging(settings)
    console = console or Console()
    today = date.today()

    if args.mock:
        stats = build_mock_stats(today)
    else:
        db = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)()
        try:
            stats = load_local_stats(settings, db, datetime.now(UTC))
        except InvalidGitHubTokenError:
            console.print("[red]Error:[/red] GitHub token is invalid")
            return 1
        except GitHubAPIError as exc:
            logger.debug("GitHub request failed", exc_info=True)
            message = str(exc) or "GitHub API request failed"
            console.print(f"[red]Error:[/red] {message}")
            return 1
        finally:
            db.close()

    try:
        payload = build_dashboard(
            stats,
            columns=console.width if args.columns is None else args.columns,
            theme_index=args.theme,
            today=today,
            settings=settings,
            radius=args.radius,
        )
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        return 1

    console.print(render_dashboard(payload, theme_at(args.theme)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
