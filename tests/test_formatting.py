# tests/test_formatting.py
import pytest

from openshiftmcp.formatting import (
    container_names,
    extract_items,
    parse_table,
    replica_counts,
    resource_status,
    simplify_item,
    summarize_events,
    summarize_resource,
    truncate_lines,
)


def test_extract_items():
    assert extract_items({"kind": "List", "items": [{"a": 1}]}) == [{"a": 1}]
    assert extract_items({"kind": "Pod"}) == [{"kind": "Pod"}]
    assert extract_items({}) == []
    assert extract_items([1, 2]) == [1, 2]
    assert extract_items("text") == []


class TestResourceStatus:
    def test_no_status(self):
        assert resource_status({"kind": "Pod"}) == "Unknown"

    def test_pod_phase(self):
        assert resource_status({"kind": "Pod", "status": {"phase": "Running"}}) == "Running"

    def test_workloads_report_ready_count(self):
        item = {"kind": "Deployment", "status": {"replicas": 3, "readyReplicas": 2}}
        assert resource_status(item) == "2/3 ready"
        assert resource_status({"kind": "StatefulSet", "status": {"replicas": 1}}) == "0/1 ready"

    def test_service_type(self):
        item = {"kind": "Service", "spec": {"type": "NodePort"}, "status": {"loadBalancer": {}}}
        assert resource_status(item) == "NodePort"

    def test_route_host(self):
        item = {
            "kind": "Route",
            "spec": {"host": "spec.example.com"},
            "status": {"ingress": [{"host": "web.apps.example.com"}]},
        }
        assert resource_status(item) == "web.apps.example.com"
        item["status"] = {"ingress": []}
        assert resource_status(item) == "spec.example.com"

    def test_build_config(self):
        assert resource_status({"kind": "BuildConfig", "status": {"lastVersion": 4}}) == "Build 4"
        assert resource_status({"kind": "BuildConfig", "status": {"lastVersion": 0}}) == "No builds"

    def test_fallback(self):
        assert resource_status({"kind": "Foo", "status": {"state": "Ready"}}) == "Ready"
        assert resource_status({"kind": "Foo", "status": {"other": 1}}) == "Active"


def test_simplify_item_defaults():
    assert simplify_item({}, "pods") == {
        "name": "unknown",
        "namespace": "N/A",
        "kind": "pods",
        "status": "Unknown",
        "createdAt": "unknown",
    }


def test_replica_counts():
    item = {"spec": {"replicas": 3}, "status": {"readyReplicas": 2, "availableReplicas": 1}}
    assert replica_counts(item) == (3, 2, 1)
    assert replica_counts({}) == (0, 0, 0)


def test_container_names():
    pod = {"kind": "Pod", "spec": {"containers": [{"name": "app"}, {"name": "sidecar"}]}}
    assert container_names(pod) == ["app", "sidecar"]
    deployment = {"kind": "Deployment", "spec": {"template": {"spec": {"containers": [{"name": "web"}]}}}}
    assert container_names(deployment) == ["web"]
    assert container_names({"kind": "Deployment"}) == []


def test_summarize_pod():
    pod = {
        "kind": "Pod",
        "metadata": {"name": "web-1", "namespace": "dev", "labels": {"app": "web"}},
        "spec": {"nodeName": "worker-0"},
        "status": {
            "phase": "Running",
            "podIP": "10.0.0.5",
            "containerStatuses": [
                {"name": "app", "ready": True, "restartCount": 2, "state": {"running": {}}},
            ],
        },
    }
    summary = summarize_resource(pod)
    assert summary["phase"] == "Running"
    assert summary["node"] == "worker-0"
    assert summary["containers"] == [{"name": "app", "ready": True, "restarts": 2, "state": "running"}]
    assert summary["labels"] == {"app": "web"}


def test_summarize_secret_hides_values():
    secret = {"kind": "Secret", "metadata": {"name": "creds"}, "data": {"password": "aHVudGVyMg==", "user": "YQ=="}}
    summary = summarize_resource(secret)
    assert summary["keys"] == ["password", "user"]
    assert "aHVudGVyMg==" not in str(summary)


def test_summarize_service():
    svc = {
        "kind": "Service",
        "metadata": {"name": "web"},
        "spec": {"clusterIP": "172.30.0.10", "ports": [{"port": 80, "targetPort": 8080}], "selector": {"app": "web"}},
    }
    summary = summarize_resource(svc)
    assert summary["type"] == "ClusterIP"
    assert summary["ports"] == ["80/TCP -> 8080"]


def test_summarize_events_newest_first():
    events = {"items": [
        {"reason": "Pulled", "lastTimestamp": "2024-01-01T00:00:01Z"},
        {"reason": "BackOff", "type": "Warning", "lastTimestamp": "2024-01-01T00:00:03Z", "count": 5},
        {"reason": "Created", "lastTimestamp": "2024-01-01T00:00:02Z"},
    ]}
    summary = summarize_events(events, limit=2)
    assert [e["reason"] for e in summary] == ["BackOff", "Created"]
    assert summary[0]["type"] == "Warning"
    assert summary[0]["count"] == 5
    assert summary[1]["type"] == "Normal"


def test_parse_table_keeps_empty_cells():
    text = (
        "NAME          SHORTNAMES   APIVERSION   NAMESPACED   KIND\n"
        "bindings                   v1           true         Binding\n"
        "pods          po           v1           true         Pod\n"
    )
    rows = parse_table(text)
    assert rows[0]["NAME"] == "bindings"
    assert rows[0]["SHORTNAMES"] == ""
    assert rows[0]["APIVERSION"] == "v1"
    assert rows[1] == {"NAME": "pods", "SHORTNAMES": "po", "APIVERSION": "v1", "NAMESPACED": "true", "KIND": "Pod"}
    assert parse_table("") == []


def test_truncate_lines():
    text = "\n".join(f"line {i}" for i in range(5))
    assert truncate_lines(text, None) == (text, 5, False)
    assert truncate_lines(text, 10) == (text, 5, False)
    assert truncate_lines(text, 2) == ("line 3\nline 4", 5, True)


def test_truncate_lines_zero_keeps_nothing():
    assert truncate_lines("a\nb\nc", 0) == ("", 3, True)
    assert truncate_lines("", 0) == ("", 0, False)


def test_truncate_lines_rejects_negative():
    with pytest.raises(ValueError):
        truncate_lines("a\nb\nc", -1)
