# tests/test_openshift_manager.py
"""Argument vectors built by OpenShiftManager."""

import pytest
from conftest import RecordingExecutor, fail, ok
from openshiftmcp.executor import CommandResult
from openshiftmcp.openshift_manager import OpenShiftManager, describe_failure


@pytest.fixture
def recorder():
    return RecordingExecutor()


@pytest.fixture
def manager(recorder):
    return OpenShiftManager(recorder)


class TestGetResources:
    async def test_namespaced_json(self, manager, recorder):
        await manager.get_resources("pods", "dev", output="json", label_selector="app=web")
        assert recorder.args_list() == [["get", "pods", "-n", "dev", "-o", "json", "-l", "app=web"]]

    async def test_all_namespaces_wins_over_namespace(self, manager, recorder):
        await manager.get_resources("pods", "dev", all_namespaces=True)
        assert recorder.args_list() == [["get", "pods", "--all-namespaces"]]

    async def test_name_and_context(self, manager, recorder):
        await manager.get_resources("route", "dev", "web", context="prod", field_selector="x=y")
        call = recorder.calls[0]
        assert call["args"] == ["get", "route", "web", "-n", "dev", "--field-selector", "x=y"]
        assert call["context"] == "prod"


class TestCreateResource:
    async def test_manifest_goes_to_stdin(self, manager, recorder):
        await manager.create_resource(manifest="kind: ConfigMap\n", dry_run=True)
        call = recorder.calls[0]
        assert call["args"] == ["create", "-f", "-", "--dry-run=client"]
        assert call["input"] == "kind: ConfigMap\n"

    async def test_filename(self, manager, recorder):
        await manager.create_resource(filename="app.yaml")
        assert recorder.calls[0]["args"] == ["create", "-f", "app.yaml"]
        assert recorder.calls[0]["input"] is None

    async def test_type_name_and_flags(self, manager, recorder):
        await manager.create_resource(
            "deploymentconfig", "web", "dev", image="nginx:latest", replicas=2, display_name=None
        )
        assert recorder.args_list() == [[
            "create", "deploymentconfig", "web", "-n", "dev",
            "--image", "nginx:latest", "--replicas", "2",
        ]]


class TestDeleteResource:
    async def test_flags(self, manager, recorder):
        await manager.delete_resource(
            "pod", "web", namespace="dev", force=True, grace_period_seconds=0,
            wait=True, timeout="30s", ignore_not_found=True,
        )
        assert recorder.args_list() == [[
            "delete", "pod", "web", "-n", "dev", "--force", "--grace-period", "0",
            "--timeout", "30s", "--wait", "--ignore-not-found",
        ]]

    async def test_selector_across_namespaces(self, manager, recorder):
        await manager.delete_resource("pods", label_selector="app=old", all_namespaces=True, dry_run=True)
        assert recorder.args_list() == [[
            "delete", "pods", "--all-namespaces", "-l", "app=old", "--dry-run=client",
        ]]

    async def test_manifest(self, manager, recorder):
        await manager.delete_resource(manifest="kind: Pod\n", namespace="dev")
        assert recorder.calls[0]["args"] == ["delete", "-f", "-", "-n", "dev"]
        assert recorder.calls[0]["input"] == "kind: Pod\n"

    async def test_all_and_cascade(self, manager, recorder):
        await manager.delete_resource("pods", namespace="dev", all_resources=True, cascade="orphan")
        assert recorder.args_list() == [["delete", "pods", "-n", "dev", "--all", "--cascade", "orphan"]]


class TestApplyResource:
    async def test_manifest_with_namespace(self, manager, recorder):
        await manager.apply_resource(manifest="kind: Pod\n", namespace="dev", server_side=True, field_manager="mcp")
        call = recorder.calls[0]
        assert call["args"] == ["apply", "-n", "dev", "-f", "-", "--server-side", "--field-manager", "mcp"]
        assert call["input"] == "kind: Pod\n"

    async def test_kustomize_and_prune(self, manager, recorder):
        await manager.apply_resource(kustomize_dir="overlays/dev", prune=True, selector="app=web", validate=False)
        assert recorder.args_list() == [[
            "apply", "-k", "overlays/dev", "--validate=false", "--prune", "-l", "app=web",
        ]]

    async def test_timeout_only_with_wait(self, manager, recorder):
        await manager.apply_resource(filename="a.yaml", timeout="30s")
        await manager.apply_resource(filename="a.yaml", wait=True, timeout="30s")
        assert recorder.args_list() == [
            ["apply", "-f", "a.yaml"],
            ["apply", "-f", "a.yaml", "--wait", "--timeout", "30s"],
        ]


async def test_scale_resource(manager, recorder):
    await manager.scale_resource("deployment", "web", 3, namespace="dev")
    assert recorder.args_list() == [["scale", "deployment", "web", "--replicas=3", "-n", "dev"]]


async def test_get_logs(manager, recorder):
    await manager.get_logs(
        "pod", "web", namespace="dev", container="app", previous=True,
        since="5m", tail=100, timestamps=True, timeout=1234,
    )
    call = recorder.calls[0]
    assert call["args"] == [
        "logs", "pod/web", "-n", "dev", "-c", "app", "-p",
        "--since", "5m", "--tail", "100", "--timestamps",
    ]
    assert call["timeout"] == 1234


async def test_check_cli(manager, recorder):
    recorder.respond(["version"], ok({"clientVersion": {"gitVersion": "v4.15.0"}}))
    assert await manager.check_cli() is True
    assert recorder.calls[0]["args"] == ["version", "--client"]

    recorder.respond(["version"], CommandResult.failure("Failed to execute command: not found"))
    assert await manager.check_cli() is False


def test_command_line():
    assert OpenShiftManager.command_line(["get", "pods"], "prod") == "oc --context prod get pods"
    assert OpenShiftManager.command_line(["get", "pods"]) == "oc get pods"


def test_describe_failure_uses_result_command():
    result = CommandResult.failure("boom", stderr="boom\n", return_code=1, command="oc get pods")
    assert describe_failure(result) == {
        "error": "boom",
        "stderr": "boom\n",
        "command": "oc get pods",
        "timed_out": False,
    }


def test_describe_failure_falls_back_to_args():
    result = fail("forbidden")
    info = describe_failure(result, ["get", "nodes"], "prod")
    assert info["command"] == "oc --context prod get nodes"
    assert info["stderr"] == "forbidden"
