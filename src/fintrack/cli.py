"""Flask CLI commands for FinTrack."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import click

from .services.periods import REPORT_PERIODS, THIS_MONTH


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("fintrack-seed")
    @click.option("--demo", is_flag=True, default=False, help="Create the demo user and sample data")
    def fintrack_seed(demo: bool) -> None:
        """Seed application data (demo)."""

        if not demo:
            click.echo("No action specified. Use --demo to seed demo data.")
            return

        # Import here to avoid circular imports at module import time
        from .extensions import get_repositories
        from .services.admin_tasks import DEMO_EMAIL, run_demo_seed

        click.echo("Seeding demo data...")
        summary = run_demo_seed(get_repositories(), today=date.today())
        click.echo(
            f"Demo user {DEMO_EMAIL}: {summary.categories} categories, "
            f"{summary.transactions} transactions, {summary.budgets} budgets, "
            f"{summary.savings_goals} savings goals."
        )

    @app.cli.command("fintrack-export")
    @click.option("--email", required=True, help="Account whose transactions are exported")
    @click.option(
        "--period",
        type=click.Choice(REPORT_PERIODS),
        default=THIS_MONTH,
        show_default=True,
    )
    @click.option(
        "--output",
        type=click.Path(dir_okay=False, path_type=Path),
        required=True,
        help="CSV file to write",
    )
    def fintrack_export(email: str, period: str, output: Path) -> None:
        """Export one user's report transactions as CSV."""

        from .extensions import get_repositories
        from .services.admin_tasks import UnknownUserError, run_export

        try:
            path, rows = run_export(
                get_repositories(),
                email=email,
                period=period,
                output_path=output,
                today=date.today(),
            )
        except UnknownUserError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(f"Export written: {path} ({rows} rows)")
