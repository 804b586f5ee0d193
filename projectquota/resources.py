import json
import logging
from dataclasses import dataclass
from typing import Optional

from projectquota.errors import DependencyError
from projectquota.limits import LimitSet

log = logging.getLogger(__name__)


def quota_limits(quota, owner):
    """LimitSet of a stored ``{"limit": {...}}`` quota, None when unset.

    Raises DependencyError when the stored object does not have that shape.
    """
    if quota is None:
        return None
    if not isinstance(quota, dict):
        raise DependencyError(f"{owner} has a resource quota that is not an object")
    limit = quota.get("limit")
    if limit is not None and not isinstance(limit, dict):
        raise DependencyError(f"{owner} has a resource quota limit that is not an object")
    return LimitSet.from_quota(quota)


@dataclass(frozen=True)
class Project:
    id: str
    resource_quota: Optional[LimitSet] = None
    namespace_default_quota: Optional[LimitSet] = None

    @classmethod
    def from_custom_object(cls, project_id, obj):
        """Build from a ``management.cattle.io/v3`` Project custom object."""
        spec = obj.get("spec") or {}
        owner = f"Project {project_id}"
        return cls(
            id=project_id,
            resource_quota=quota_limits(spec.get("resourceQuota"), owner),
            namespace_default_quota=quota_limits(
                spec.get("namespaceDefaultResourceQuota"), owner
            ),
        )


@dataclass(frozen=True)
class Namespace:
    name: str
    project_id: Optional[str] = None
    resource_quota: Optional[LimitSet] = None

    @classmethod
    def from_v1_namespace(cls, namespace, config):
        annotations = namespace.metadata.annotations or {}
        project_id = annotations.get(config["annotations"]["project_id"])
        raw_quota = annotations.get(config["annotations"]["resource_quota"])
        owner = f"Namespace {namespace.metadata.name}"
        quota = None
        if raw_quota:
            try:
                decoded = json.loads(raw_quota)
            except json.JSONDecodeError as exc:
                raise DependencyError(
                    f"{owner} has an unreadable resource quota annotation: {exc}"
                ) from exc
            quota = quota_limits(decoded, owner)
        return cls(
            name=namespace.metadata.name,
            project_id=project_id,
            resource_quota=quota,
        )


def is_system_namespace(namespace, config):
    annotations = namespace.metadata.annotations or {}
    return annotations.get(config["annotations"]["system_namespace"]) == "true"


def split_project_id(project_id):
    cluster, _, name = project_id.rpartition(":")
    return cluster, name
