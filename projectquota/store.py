import logging

from kubernetes import client
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from projectquota.config import load_config
from projectquota.errors import DependencyError, NotFoundError
from projectquota.resources import (
    Namespace,
    Project,
    is_system_namespace,
    split_project_id,
)

log = logging.getLogger(__name__)


class MemoryStore:
    """Projects and namespaces held in process."""

    def __init__(self, projects=(), namespaces=()):
        self.projects = {project.id: project for project in projects}
        self.namespaces = list(namespaces)

    def fetch_project(self, project_id):
        try:
            return self.projects[project_id]
        except KeyError:
            raise NotFoundError(f"Project {project_id} not found") from None

    def list_namespaces(self, project_id):
        return [ns for ns in self.namespaces if ns.project_id == project_id]


class KubernetesStore:
    """Reads projects and namespaces from a cluster.

    Projects are custom objects namespaced by their cluster id, so project ids
    take the form ``<cluster>:<project>``. System namespaces are hidden from
    namespace listings.
    """

    def __init__(self, api_client=None, config=None):
        self.config = config or load_config()
        self.api_client = api_client

    def fetch_project(self, project_id):
        cluster, name = split_project_id(project_id)
        if not cluster:
            raise NotFoundError(f"Project {project_id} not found")

        api = client.CustomObjectsApi(self.api_client)
        try:
            obj = api.get_namespaced_custom_object(
                self.config["project_group"],
                self.config["project_version"],
                cluster,
                self.config["project_plural"],
                name,
            )
        except ApiException as exc:
            if exc.status == 404:
                raise NotFoundError(f"Project {project_id} not found") from exc
            raise DependencyError(
                f"Failed to fetch project {project_id}: {exc.reason}"
            ) from exc
        except HTTPError as exc:
            raise DependencyError(
                f"Failed to fetch project {project_id}: {exc}"
            ) from exc
        return Project.from_custom_object(project_id, obj)

    def list_namespaces(self, project_id):
        _, name = split_project_id(project_id)
        selector = f"{self.config['labels']['project_id']}={name}"

        api = client.CoreV1Api(self.api_client)
        try:
            response = api.list_namespace(label_selector=selector)
        except ApiException as exc:
            raise DependencyError(
                f"Failed to list namespaces of project {project_id}: {exc.reason}"
            ) from exc
        except HTTPError as exc:
            raise DependencyError(
                f"Failed to list namespaces of project {project_id}: {exc}"
            ) from exc

        namespaces = []
        for item in response.items:
            if is_system_namespace(item, self.config):
                log.debug("Skipping system namespace %s", item.metadata.name)
                continue
            namespace = Namespace.from_v1_namespace(item, self.config)
            if namespace.project_id != project_id:
                continue
            namespaces.append(namespace)
        return namespaces
