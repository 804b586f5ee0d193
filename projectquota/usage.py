from dataclasses import dataclass

from rich.console import Console
from rich.markup import escape

from projectquota.errors import QuotaError
from projectquota.limits import LimitSet
from projectquota.quantity import Quantity

console = Console()


@dataclass
class UsageRow:
    resource: str
    used: Quantity
    cap: Quantity
    available: Quantity


def used_limit(namespaces):
    return LimitSet.sum(
        ns.resource_quota for ns in namespaces if ns.resource_quota is not None
    )


def project_usage(store, project_id):
    """Committed quota against cap for every resource the project caps."""
    project = store.fetch_project(project_id)
    if project.resource_quota is None:
        return []
    used = used_limit(store.list_namespaces(project_id))
    rows = []
    for key in sorted(project.resource_quota):
        cap = project.resource_quota[key]
        rows.append(UsageRow(key, used.get(key), cap, cap - used.get(key)))
    return rows


def audit(store, project_ids):
    results = {}
    for project_id in project_ids:
        try:
            results[project_id] = project_usage(store, project_id)
        except QuotaError as exc:
            console.print(f"[bold red]Error reading project '{project_id}': {escape(str(exc))}")
            continue
    return results
