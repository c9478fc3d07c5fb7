"""MCP Resources: cluster info and project list."""

import json
import logging
from typing import Any, Dict, List

try:
    from ..mcp_instance import mcp
    from ..context_manager import get_manager
    from ..formatting import extract_items, resource_status
    from ..openshift_manager import OpenShiftManager
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp.formatting import extract_items, resource_status
    from openshiftmcp.openshift_manager import OpenShiftManager

logger = logging.getLogger(__name__)

SYSTEM_PREFIXES = ("openshift", "kube-")
SYSTEM_NAMESPACES = ("default", "olm")


def _node_roles(labels: Dict[str, str]) -> List[str]:
    roles = [
        key.split("/", 1)[1]
        for key in labels
        if key.startswith("node-role.kubernetes.io/")
    ]
    return sorted(roles) or ["worker"]


def is_system_namespace(name: str) -> bool:
    return name.startswith(SYSTEM_PREFIXES) or name in SYSTEM_NAMESPACES


# ============================================================================
# Resource implementations (testable functions)
# ============================================================================

async def _cluster_info_impl(manager: OpenShiftManager) -> Dict[str, Any]:
    """
    Implementation: summarize the cluster the current context points at.

    Each section is read independently; a failed read is reported under
    "errors" instead of failing the whole resource.
    """
    info: Dict[str, Any] = {}
    errors: Dict[str, str] = {}

    version = await manager.execute_command(["version", "-o", "json"])
    if version.is_json and isinstance(version.data, dict):
        info["version"] = {
            "client": (version.data.get("clientVersion") or {}).get("gitVersion"),
            "server": (version.data.get("serverVersion") or {}).get("gitVersion"),
            "openshift": version.data.get("openshiftVersion"),
        }
    else:
        errors["version"] = version.error or "unexpected output"

    current = await manager.execute_command(["config", "current-context"])
    if current.success:
        info["current_context"] = current.text
    else:
        errors["current_context"] = current.error

    nodes = await manager.execute_command(["get", "nodes", "-o", "json"])
    if nodes.success:
        items = extract_items(nodes.data)
        ready = 0
        roles: Dict[str, int] = {}
        for node in items:
            conditions = (node.get("status") or {}).get("conditions") or []
            if any(c.get("type") == "Ready" and c.get("status") == "True" for c in conditions):
                ready += 1
            for role in _node_roles((node.get("metadata") or {}).get("labels") or {}):
                roles[role] = roles.get(role, 0) + 1
        info["nodes"] = {"total": len(items), "ready": ready, "roles": roles}
    else:
        errors["nodes"] = nodes.error

    namespaces = await manager.execute_command(["get", "namespaces", "-o", "json"])
    if namespaces.success:
        names = [(ns.get("metadata") or {}).get("name", "") for ns in extract_items(namespaces.data)]
        system = [n for n in names if is_system_namespace(n)]
        info["namespaces"] = {"total": len(names), "system": len(system), "user": len(names) - len(system)}
    else:
        errors["namespaces"] = namespaces.error

    if errors:
        info["errors"] = errors
    return info


async def _projects_impl(manager: OpenShiftManager) -> Dict[str, Any]:
    """Implementation: list projects, user projects first."""
    result = await manager.execute_command(["get", "projects", "-o", "json"])
    if not result.success:
        # plain Kubernetes clusters have no Project API
        result = await manager.execute_command(["get", "namespaces", "-o", "json"])
    if not result.success:
        return {"error": result.error, "command": result.command}

    projects = []
    for item in extract_items(result.data):
        metadata = item.get("metadata") or {}
        annotations = metadata.get("annotations") or {}
        name = metadata.get("name", "unknown")
        projects.append({
            "name": name,
            "display_name": annotations.get("openshift.io/display-name") or None,
            "status": resource_status(item),
            "system": is_system_namespace(name),
            "createdAt": metadata.get("creationTimestamp"),
        })
    projects.sort(key=lambda p: (p["system"], p["name"]))
    return {"total": len(projects), "projects": projects}


# ============================================================================
# MCP resource registrations
# ============================================================================

@mcp.resource("openshift://cluster-info")
async def cluster_info_resource() -> str:
    """Cluster version, current context, node and namespace counts."""
    try:
        return json.dumps(await _cluster_info_impl(get_manager()), indent=2)
    except Exception as e:
        logger.error(f"Error in cluster_info_resource: {e}")
        return json.dumps({"error": str(e)})


@mcp.resource("openshift://projects")
async def projects_resource() -> str:
    """Projects visible to the current user."""
    try:
        return json.dumps(await _projects_impl(get_manager()), indent=2)
    except Exception as e:
        logger.error(f"Error in projects_resource: {e}")
        return json.dumps({"error": str(e)})
