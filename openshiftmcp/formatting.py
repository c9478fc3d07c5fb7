"""
Compact formatting of oc output for tool results.

oc returns full Kubernetes objects; agents mostly need name, kind and a
one-line status. These helpers reduce objects and text tables to small dicts.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

_COLUMN_START = re.compile(r"\S+")


def extract_items(data: Any) -> List[Dict[str, Any]]:
    """Return the objects in a List response, a bare list, or a single object."""
    if isinstance(data, dict):
        if isinstance(data.get("items"), list):
            return data["items"]
        return [data] if data else []
    if isinstance(data, list):
        return data
    return []


def resource_status(item: Dict[str, Any]) -> str:
    """One-line status for a resource, chosen by kind."""
    status = item.get("status")
    if not status:
        return "Unknown"

    kind = item.get("kind")
    spec = item.get("spec") or {}

    if kind in ("Pod", "Project", "Build", "Namespace", "PersistentVolumeClaim"):
        return status.get("phase") or "Unknown"
    if kind in ("Deployment", "DeploymentConfig", "StatefulSet", "ReplicaSet"):
        return f"{status.get('readyReplicas') or 0}/{status.get('replicas') or 0} ready"
    if kind == "Service":
        return spec.get("type") or "ClusterIP"
    if kind == "Route":
        ingress = status.get("ingress") or []
        host = ingress[0].get("host") if ingress else None
        return host or spec.get("host") or "No host"
    if kind == "BuildConfig":
        last = status.get("lastVersion")
        return f"Build {last}" if last else "No builds"
    return status.get("phase") or status.get("state") or "Active"


def simplify_item(item: Dict[str, Any], default_kind: str = "unknown") -> Dict[str, Any]:
    metadata = item.get("metadata") or {}
    return {
        "name": metadata.get("name", "unknown"),
        "namespace": metadata.get("namespace", "N/A"),
        "kind": item.get("kind", default_kind),
        "status": resource_status(item),
        "createdAt": metadata.get("creationTimestamp", "unknown"),
    }


def replica_counts(data: Any) -> Tuple[int, int, int]:
    """(desired, ready, available) replicas for a scalable resource."""
    items = extract_items(data)
    if not items:
        return 0, 0, 0
    item = items[0]
    spec = item.get("spec") or {}
    status = item.get("status") or {}
    return (
        spec.get("replicas") or 0,
        status.get("readyReplicas") or 0,
        status.get("availableReplicas") or 0,
    )


def container_names(resource: Dict[str, Any]) -> List[str]:
    """Container names of a pod or of a workload's pod template."""
    spec = resource.get("spec") or {}
    if resource.get("kind") != "Pod":
        spec = ((spec.get("template") or {}).get("spec")) or {}
    return [c.get("name") for c in spec.get("containers") or [] if c.get("name")]


def summarize_resource(resource: Dict[str, Any], resource_type: str = "") -> Dict[str, Any]:
    """Short human-oriented summary of one object (used by oc_describe)."""
    metadata = resource.get("metadata") or {}
    spec = resource.get("spec") or {}
    status = resource.get("status") or {}
    kind = resource.get("kind") or resource_type

    summary: Dict[str, Any] = {
        "name": metadata.get("name", "Unknown"),
        "namespace": metadata.get("namespace", "N/A"),
        "kind": kind,
        "created": metadata.get("creationTimestamp", "Unknown"),
        "labels": metadata.get("labels") or {},
    }

    if kind == "Pod":
        summary["phase"] = status.get("phase", "Unknown")
        summary["node"] = spec.get("nodeName") or status.get("hostIP") or "Not assigned"
        summary["podIP"] = status.get("podIP") or "Not assigned"
        summary["containers"] = [
            {
                "name": cs.get("name"),
                "ready": cs.get("ready", False),
                "restarts": cs.get("restartCount", 0),
                "state": next(iter(cs.get("state") or {}), "unknown"),
            }
            for cs in status.get("containerStatuses") or []
        ]
    elif kind in ("Deployment", "DeploymentConfig", "StatefulSet"):
        desired, ready, available = replica_counts(resource)
        summary["replicas"] = {"desired": desired, "ready": ready, "available": available}
        summary["strategy"] = (spec.get("strategy") or {}).get("type", "Unknown")
        summary["containers"] = container_names(resource)
        summary["conditions"] = [
            {"type": c.get("type"), "status": c.get("status"), "reason": c.get("reason", "N/A")}
            for c in status.get("conditions") or []
        ]
    elif kind == "Service":
        summary["type"] = spec.get("type", "ClusterIP")
        summary["clusterIP"] = spec.get("clusterIP", "None")
        summary["ports"] = [
            f"{p.get('port')}/{p.get('protocol', 'TCP')} -> {p.get('targetPort')}"
            for p in spec.get("ports") or []
        ]
        summary["selector"] = spec.get("selector") or {}
    elif kind == "Route":
        summary["host"] = spec.get("host", "Not set")
        summary["tls"] = (spec.get("tls") or {}).get("termination", "none")
        summary["to"] = (spec.get("to") or {}).get("name")
        summary["path"] = spec.get("path", "/")
    elif kind in ("ConfigMap", "Secret"):
        # secret values are never echoed back
        summary["keys"] = sorted((resource.get("data") or {}).keys())
        if kind == "Secret":
            summary["type"] = resource.get("type", "Opaque")
    elif kind == "PersistentVolumeClaim":
        summary["phase"] = status.get("phase", "Unknown")
        summary["capacity"] = (status.get("capacity") or {}).get("storage", "Unknown")
        summary["storageClass"] = spec.get("storageClassName", "default")
        summary["accessModes"] = spec.get("accessModes") or []
    else:
        summary["status"] = resource_status(resource)

    return summary


def summarize_events(data: Any, limit: int = 10) -> List[Dict[str, Any]]:
    """Most recent events first, reduced to the fields that matter."""
    events = extract_items(data)
    events = sorted(
        events,
        key=lambda e: e.get("lastTimestamp") or e.get("eventTime") or "",
        reverse=True,
    )
    return [
        {
            "type": e.get("type", "Normal"),
            "reason": e.get("reason", ""),
            "message": e.get("message", ""),
            "count": e.get("count", 1),
            "lastSeen": e.get("lastTimestamp") or e.get("eventTime") or "",
        }
        for e in events[:limit]
    ]


def parse_table(text: str) -> List[Dict[str, str]]:
    """
    Parse oc's column-aligned table output into dicts keyed by header.

    Columns are sliced at the header offsets, so empty cells (for example a
    missing SHORTNAMES entry in `oc api-resources`) stay empty.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if not lines:
        return []

    header = lines[0]
    columns = [(m.group(0), m.start()) for m in _COLUMN_START.finditer(header)]
    rows = []
    for line in lines[1:]:
        row = {}
        for i, (name, start) in enumerate(columns):
            end = columns[i + 1][1] if i + 1 < len(columns) else None
            row[name] = line[start:end].strip() if start < len(line) else ""
        rows.append(row)
    return rows


def truncate_lines(text: str, max_lines: Optional[int]) -> Tuple[str, int, bool]:
    """Keep the last max_lines lines. Returns (text, total_lines, truncated)."""
    if max_lines is not None and max_lines < 0:
        raise ValueError(f"max_lines must be 0 or greater, got {max_lines}")
    lines = text.splitlines()
    total = len(lines)
    if max_lines is None or total <= max_lines:
        return text, total, False
    if max_lines == 0:
        return "", total, True
    return "\n".join(lines[-max_lines:]), total, True
