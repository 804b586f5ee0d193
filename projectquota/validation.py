"""Admission-time quota validation for namespace create and update.

Each call reads the project and its namespaces fresh from the store and holds
no state between calls. Two concurrent admissions into the same project can
each pass on their own and still overrun the cap together; callers that need
a hard guarantee must serialize admissions per project.
"""

import enum
import logging

from projectquota.errors import QuotaExceededError
from projectquota.fit import fits

log = logging.getLogger(__name__)


class Operation(enum.Enum):
    CREATE = "create"
    UPDATE = "update"


def resolve_candidate(project, requested_limit):
    if requested_limit is not None:
        return requested_limit
    return project.namespace_default_quota


def sibling_limits(namespaces, op, namespace_id):
    limits = []
    for namespace in namespaces:
        if op is Operation.UPDATE and namespace.name == namespace_id:
            continue
        if namespace.resource_quota is None:
            continue
        limits.append(namespace.resource_quota)
    return limits


def validate(op, project_id, requested_limit=None, namespace_id=None, *, store):
    """Reject a namespace quota that would push its project over cap.

    ``requested_limit`` is the LimitSet on the request; when it is None the
    project's default namespace quota is checked instead. On update the
    namespace's own stored quota is left out of the sibling sum.

    Raises QuotaExceededError when the quota does not fit and DependencyError
    when the project or its namespaces cannot be read.
    """
    project = store.fetch_project(project_id)
    cap = project.resource_quota
    if cap is None:
        log.debug("Project %s has no quota, skipping check", project_id)
        return

    candidate = resolve_candidate(project, requested_limit)
    if candidate is None:
        log.debug("No quota to check for namespace %s", namespace_id)
        return

    siblings = sibling_limits(store.list_namespaces(project_id), op, namespace_id)
    ok, detail = fits(candidate, siblings, cap)
    if not ok:
        raise QuotaExceededError(detail)
