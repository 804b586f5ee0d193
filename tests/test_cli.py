from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from projectquota.cli import app
from projectquota.errors import ParseError
from projectquota.limits import LimitSet
from projectquota.resources import Project

runner = CliRunner()


@pytest.fixture(autouse=True)
def kube_config():
    with patch("projectquota.cli.kube_config.load_kube_config") as mocked:
        yield mocked


@pytest.fixture
def cluster(store):
    with patch("projectquota.cli.KubernetesStore", return_value=store):
        yield store


def test_check_fits(cluster, kube_config):
    result = runner.invoke(
        app, ["check", "c-abc12:p-xyz34", "-n", "ns-4", "-l", "cpu=2"]
    )
    assert result.exit_code == 0
    assert "Quota fits" in result.output
    kube_config.assert_called_once_with(context=None)


def test_check_exceeds(cluster):
    result = runner.invoke(app, ["check", "c-abc12:p-xyz34", "--limit", "cpu=2.5"])
    assert result.exit_code == 1
    assert "MaxLimitExceeded" in result.output
    assert "resourceQuota" in result.output


def test_check_update_excludes_own_quota(cluster):
    result = runner.invoke(
        app, ["check", "c-abc12:p-xyz34", "-n", "ns-1", "--update", "-l", "cpu=3"]
    )
    assert result.exit_code == 0


def test_check_missing_project(cluster):
    result = runner.invoke(app, ["check", "c-abc12:p-none", "-l", "cpu=1"])
    assert result.exit_code == 1
    assert "NotFound" in result.output


@pytest.mark.parametrize("limit", ["cpu", "cpu=lots", "=1"])
def test_check_rejects_malformed_limit(cluster, limit):
    result = runner.invoke(app, ["check", "c-abc12:p-xyz34", "-l", limit])
    assert result.exit_code == 2


def test_check_uses_context(cluster, kube_config):
    runner.invoke(app, ["check", "c-abc12:p-xyz34", "--context", "prod"])
    kube_config.assert_called_once_with(context="prod")


def test_usage(cluster):
    result = runner.invoke(app, ["usage", "c-abc12:p-xyz34"])
    assert result.exit_code == 0
    assert "cpu" in result.output


def test_check_reports_malformed_stored_quantity():
    store = MagicMock()
    store.fetch_project.return_value = Project(
        id="c:p", resource_quota=LimitSet({"cpu": "4"})
    )
    store.list_namespaces.side_effect = ParseError("lots", key="cpu")

    with patch("projectquota.cli.KubernetesStore", return_value=store):
        result = runner.invoke(app, ["check", "c:p", "-l", "cpu=1"])

    assert result.exit_code == 1
    assert "Invalid quantity for cpu: 'lots'" in result.output
