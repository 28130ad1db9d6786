# cli.py
"""
Flask CLI commands for the academy backend.
"""

import json
from datetime import datetime

import click
from flask.cli import with_appcontext

from academy.extensions import db
from academy.exceptions import CandidateSuggestionError


@click.command("init-db")
@with_appcontext
def init_database():
    """Create all database tables."""
    from academy import models  # noqa: F401 - registers the tables

    try:
        db.create_all()
        click.echo("Database tables created.")
    except Exception as e:
        click.echo(f"Error creating tables: {str(e)}", err=True)
        raise


@click.command("suggest-candidates")
@click.argument("batch_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON payload")
@click.option("--today", help="Reference date for overdue fees (YYYY-MM-DD)")
@with_appcontext
def suggest_candidates(batch_id, as_json, today):
    """
    Suggest candidates for a batch.

    Example usage:
        flask suggest-candidates 12
        flask suggest-candidates 12 --today 2025-02-01 --json
    """
    from academy.services.candidate_service import CandidateSuggestionService

    reference_date = None
    if today:
        try:
            reference_date = datetime.strptime(today, '%Y-%m-%d').date()
        except ValueError:
            raise click.BadParameter("expected YYYY-MM-DD", param_hint="--today")

    try:
        payload = CandidateSuggestionService.suggest_candidates(batch_id, today=reference_date)
    except CandidateSuggestionError as e:
        click.echo(f"Error: {e.message}", err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(payload, indent=2, ensure_ascii=False))
        return

    batch = payload['batch']
    click.echo(f"Batch {batch['id']}: {batch['title']} [{batch['software']}] "
               f"{batch['startDate']} -> {batch['endDate']}")
    click.echo("-" * 100)
    click.echo(f"{'ID':<6} {'Name':<30} {'Status':<16} {'Details':<46}")
    click.echo("-" * 100)

    for candidate in payload['candidates']:
        click.echo(f"{candidate['studentId']:<6} {candidate['name'][:30]:<30} "
                   f"{candidate['status']:<16} {candidate['statusMessage'][:46]:<46}")

    summary = payload['summary']
    click.echo("-" * 100)
    click.echo(f"Total: {payload['totalCount']} | available {summary['available']}, "
               f"no orientation {summary['noOrientation']}, busy {summary['busy']}, "
               f"pending fees {summary['pendingFees']}, fees overdue {summary['feesOverdue']}")


def register_cli_commands(app):
    """Register all CLI commands with the Flask app."""
    app.cli.add_command(init_database)
    app.cli.add_command(suggest_candidates)
