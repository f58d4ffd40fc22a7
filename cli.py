#!/usr/bin/env python3
"""
CLI for the print backoffice lineage service.

Usage:
    python cli.py init-db
    python cli.py serve --port 8000
    python cli.py tree work-order 3f0c...e21
    python cli.py search "ACME" --limit 5
    python cli.py transitions order READY

Commands:
    init-db      Create the database tables
    serve        Start the API server
    tree         Print the lineage tree of a document
    search       Search every document type
    transitions  Show the statuses a document can move to
"""
import json
import logging

import click

from backoffice import __version__
from backoffice.config import get_config

# Configure logging
logging.basicConfig(
    level=get_config().log_level,
    format=get_config().log_format
)
logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
def cli():
    """Print backoffice - order timeline tools.

    Inspect the Quote -> Order -> Work Order -> Expense Order lineage
    and the status machine of each document type.
    """
    pass


@cli.command('init-db')
def init_db_command():
    """Create all tables in the configured database."""
    from backoffice.models import init_db

    init_db()
    click.echo(click.style(f"Database ready: {get_config().database_url}", fg='green'))


@cli.command()
@click.option('--port', type=int, default=8000, help='Server port')
@click.option('--host', default='0.0.0.0', help='Server host')
@click.option('--reload', is_flag=True, help='Enable auto-reload')
def serve(port: int, host: str, reload: bool):
    """Start the API server.

    Runs the FastAPI application with uvicorn.

    Example:
        python cli.py serve --port 8000 --reload
    """
    import uvicorn

    click.echo(click.style('Print Backoffice - Order Timeline API', fg='cyan', bold=True))
    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press CTRL+C to stop\n")

    uvicorn.run(
        "backoffice.main:app",
        host=host,
        port=port,
        reload=reload
    )


@cli.command()
@click.argument('entity_type')
@click.argument('entity_id')
@click.option('--json', 'as_json', is_flag=True, help='Print the raw tree as JSON')
def tree(entity_type: str, entity_id: str, as_json: bool):
    """Print the lineage tree of a document.

    ENTITY_TYPE is one of quote, order, work-order, expense-order.
    """
    from backoffice.models import SessionLocal
    from backoffice.domain.services import OrderTimelineService
    from backoffice.domain.exceptions import EntityNotFoundError

    with SessionLocal() as db:
        try:
            order_tree = OrderTimelineService(db).get_order_tree(entity_type, entity_id)
        except EntityNotFoundError as e:
            click.echo(click.style(e.message, fg='red'), err=True)
            raise SystemExit(1)

    if as_json:
        click.echo(json.dumps(order_tree.to_dict(), indent=2))
        return

    children = {}
    for edge in order_tree.edges:
        children.setdefault(edge.source, []).append(edge.target)

    def render(node_id: str, depth: int):
        node = order_tree.node(node_id)
        marker = click.style(' <', fg='yellow', bold=True) if node_id == order_tree.focused_id else ''
        total = f"  {node.total:,.2f}" if node.total is not None else ''
        click.echo(f"{'  ' * depth}[{node.type.value}] {node.number}  {node.status}{total}{marker}")
        for child_id in children.get(node_id, []):
            render(child_id, depth + 1)

    click.echo(click.style(f"Client: {order_tree.nodes[0].client_name}", fg='cyan'))
    render(order_tree.root_id, 0)


@cli.command()
@click.argument('term')
@click.option('--limit', type=int, default=None, help='Max results per document type')
def search(term: str, limit: int):
    """Search quotes, orders, work orders and expense orders."""
    from backoffice.models import SessionLocal
    from backoffice.domain.services import TimelineSearchService

    results = TimelineSearchService(SessionLocal).search(term, limit)
    groups = [
        ('Quotes', results.quotes),
        ('Orders', results.orders),
        ('Work orders', results.work_orders),
        ('Expense orders', results.expense_orders),
    ]
    for title, rows in groups:
        click.echo(click.style(f"{title} ({len(rows)})", fg='cyan', bold=True))
        for row in rows:
            click.echo(f"  {row.number:<15} {row.status:<20} {row.client_name:<30} {row.entity_type.value}/{row.id}")


@cli.command()
@click.argument('document_type', type=click.Choice(['quote', 'order', 'work-order', 'expense-order']))
@click.argument('status')
def transitions(document_type: str, status: str):
    """Show the statuses a document in STATUS can move to."""
    from backoffice.domain.status_transitions import transition_table_for

    table = transition_table_for(document_type)
    allowed = sorted(s.value for s in table.valid_next_statuses(status.upper()))
    if not allowed:
        click.echo(f"{status.upper()}: no transitions (terminal or unknown status)")
        return
    click.echo(f"{status.upper()} -> {', '.join(allowed)}")


if __name__ == '__main__':
    cli()
