import inspect
import json
import os

from kubernetes import client
import pytest

from projectquota.limits import LimitSet
from projectquota.resources import Namespace, Project
from projectquota.store import MemoryStore


class Response:
    def __init__(self, filename):
        with open(filename) as file:
            self.data = file.read()


def get_response(api, _file, _class):
    api_client = api().api_client
    # newer clients take the response text and content type instead
    params = inspect.signature(api_client.deserialize).parameters
    if "content_type" in params:
        response = Response(_file)
        if "response_text" in params:
            return api_client.deserialize(response.data, _class, "application/json")
        return api_client.deserialize(response, _class, "application/json")
    return api_client.deserialize(Response(_file), _class)


def data_directory(test_name):
    current_directory = os.path.dirname(__file__)
    return os.path.join(current_directory, "data", test_name, "cluster")


@pytest.fixture(scope="function")
def namespace_list(request):
    return get_response(
        client.CoreV1Api,
        os.path.join(data_directory(request.param), "namespaces_api_response.json"),
        "V1NamespaceList",
    )


@pytest.fixture(scope="function")
def project_object(request):
    path = os.path.join(data_directory(request.param), "project_api_response.json")
    with open(path) as f:
        return json.load(f)


@pytest.fixture(scope="function")
def store():
    project = Project(
        id="c-abc12:p-xyz34",
        resource_quota=LimitSet({"cpu": "4"}),
    )
    namespaces = [
        Namespace("ns-1", "c-abc12:p-xyz34", LimitSet({"cpu": "1"})),
        Namespace("ns-2", "c-abc12:p-xyz34", LimitSet({"cpu": "1"})),
        Namespace("ns-3", "c-abc12:p-xyz34"),
        Namespace("elsewhere", "c-abc12:p-other", LimitSet({"cpu": "8"})),
    ]
    return MemoryStore([project], namespaces)
