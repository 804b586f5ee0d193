import logging
from typing import List, Optional

import typer
from kubernetes import config as kube_config
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from projectquota.config import load_config
from projectquota.errors import AdmissionError, ParseError, QuotaError
from projectquota.limits import LimitSet
from projectquota.store import KubernetesStore
from projectquota.usage import audit
from projectquota.validation import Operation, validate

app = typer.Typer(
    name="projectquota",
    help="Check namespace resource quotas against their project quota.",
    no_args_is_help=True,
    add_completion=False,
)
console = Console()


def _setup(config_file, context, verbose):
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
    config = load_config(config_file)
    kube_config.load_kube_config(context=context or config["kube_context"] or None)
    return KubernetesStore(config=config)


def parse_limits(values):
    if not values:
        return None
    limit = {}
    for value in values:
        key, sep, quantity = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"expected KEY=VALUE, got {value!r}")
        limit[key] = quantity
    try:
        return LimitSet.from_limit(limit)
    except ParseError as exc:
        raise typer.BadParameter(str(exc))


@app.command()
def check(
    project_id: str = typer.Argument(..., help="Project id, <cluster>:<project>"),
    namespace: Optional[str] = typer.Option(None, "--namespace", "-n"),
    update: bool = typer.Option(False, "--update", help="Validate an update of an existing namespace"),
    limit: Optional[List[str]] = typer.Option(None, "--limit", "-l", help="Requested quota limit, KEY=VALUE"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to a config file"),
    context: Optional[str] = typer.Option(None, "--context", help="kubeconfig context"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Check whether a namespace quota fits in its project."""
    requested = parse_limits(limit)
    store = _setup(config_file, context, verbose)
    op = Operation.UPDATE if update else Operation.CREATE

    try:
        validate(op, project_id, requested, namespace, store=store)
    except AdmissionError as exc:
        field, message = exc.as_field_error()
        if field:
            console.print(f"[bold red]{exc.kind} on {field}: {escape(message)}")
        else:
            console.print(f"[bold red]{exc.kind}: {escape(message)}")
        raise typer.Exit(1)
    except QuotaError as exc:
        console.print(f"[bold red]{escape(str(exc))}")
        raise typer.Exit(1)
    console.print("[bold green]Quota fits")


@app.command()
def usage(
    project_ids: List[str] = typer.Argument(..., help="Project ids, <cluster>:<project>"),
    config_file: Optional[str] = typer.Option(None, "--config", help="Path to a config file"),
    context: Optional[str] = typer.Option(None, "--context", help="kubeconfig context"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Show committed namespace quota against each project's cap."""
    store = _setup(config_file, context, verbose)
    for project_id, rows in audit(store, project_ids).items():
        table = Table(title=project_id)
        table.add_column("Resource")
        table.add_column("Used", justify="right")
        table.add_column("Cap", justify="right")
        table.add_column("Available", justify="right")
        for row in rows:
            style = "red" if row.available.value < 0 else None
            table.add_row(
                row.resource, str(row.used), str(row.cap), str(row.available),
                style=style,
            )
        console.print(table)
