"""Read-only tools: oc_get, oc_describe, oc_explain, oc_api_resources, oc_status."""

import logging
from typing import Any, Dict, List, Optional

try:
    from ..mcp_instance import mcp
    from ..context_manager import get_manager
    from ..errors import InvalidParamError, MissingParamError, handle_tool_errors
    from ..formatting import (
        extract_items, parse_table, simplify_item, summarize_events, summarize_resource,
    )
    from ..logging_config import with_request_id
    from ..openshift_manager import describe_failure
    from ..validation import (
        ensure_valid, validate_label_selector, validate_namespace, validate_resource_name,
        validate_resource_type,
    )
    from .. import __version__
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp.errors import InvalidParamError, MissingParamError, handle_tool_errors
    from openshiftmcp.formatting import (
        extract_items, parse_table, simplify_item, summarize_events, summarize_resource,
    )
    from openshiftmcp.logging_config import with_request_id
    from openshiftmcp.openshift_manager import describe_failure
    from openshiftmcp.validation import (
        ensure_valid, validate_label_selector, validate_namespace, validate_resource_name,
        validate_resource_type,
    )
    from openshiftmcp import __version__

logger = logging.getLogger(__name__)

GET_OUTPUTS = ["json", "yaml", "wide", "name"]
DESCRIBE_OUTPUTS = ["text", "yaml", "json", "human-readable"]
API_RESOURCE_OUTPUTS = ["table", "wide", "name"]
STATUS_EVENT_LIMIT = 5


def _check_choice(param: str, value: str, choices: List[str]) -> None:
    if value not in choices:
        raise InvalidParamError(param, f"'{value}' is not supported", valid_values=choices)


# ============================================================================
# oc_get
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_get(
    resource_type: str,
    name: Optional[str] = None,
    namespace: str = "default",
    context: str = "",
    output: str = "json",
    all_namespaces: bool = False,
    label_selector: Optional[str] = None,
    field_selector: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Get OpenShift resources like pods, deploymentconfigs, routes, projects, etc.

    Args:
        resource_type: Type of resource (e.g. pods, deploymentconfigs, routes)
        name: Resource name; omit to list every resource of the type
        namespace: Project to query
        context: kubeconfig context to use (empty = current)
        output: json (simplified items), yaml, wide or name
        all_namespaces: List across all namespaces
        label_selector: Filter by label selector, e.g. app=nginx
        field_selector: Filter by field selector
    """
    if not resource_type:
        raise MissingParamError("resource_type", "oc_get")
    ensure_valid(validate_resource_type(resource_type), "resource_type")
    if name:
        ensure_valid(validate_resource_name(name), "name")
    ensure_valid(validate_label_selector(label_selector), "label_selector")
    if not all_namespaces:
        ensure_valid(validate_namespace(namespace), "namespace")
    _check_choice("output", output, GET_OUTPUTS)

    manager = get_manager()
    result = await manager.get_resources(
        resource_type,
        namespace,
        name,
        context=context or None,
        output=output,
        label_selector=label_selector,
        field_selector=field_selector,
        all_namespaces=all_namespaces,
    )
    if not result.success:
        return describe_failure(result)

    command = result.command
    if output == "json" and not isinstance(result.data, str):
        items = [simplify_item(item, resource_type) for item in extract_items(result.data)]
        return {"command": command, "count": len(items), "items": items}

    return {"command": command, "output": result.text}


# ============================================================================
# oc_describe
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_describe(
    resource_type: str,
    name: str,
    namespace: str = "default",
    context: str = "",
    output: str = "text",
) -> Dict[str, Any]:
    """
    Describe a resource.

    Args:
        resource_type: Type of resource
        name: Resource name
        namespace: Project of the resource
        context: kubeconfig context to use (empty = current)
        output: text (oc describe), yaml, json, or human-readable summary
    """
    if not resource_type:
        raise MissingParamError("resource_type", "oc_describe")
    if not name:
        raise MissingParamError("name", "oc_describe")
    ensure_valid(validate_resource_type(resource_type), "resource_type")
    ensure_valid(validate_resource_name(name), "name")
    ensure_valid(validate_namespace(namespace), "namespace")
    _check_choice("output", output, DESCRIBE_OUTPUTS)

    ctx = context or None
    if output == "text":
        args = ["describe", resource_type, name, "-n", namespace]
    else:
        fmt = "yaml" if output == "yaml" else "json"
        args = ["get", resource_type, name, "-n", namespace, "-o", fmt]

    manager = get_manager()
    result = await manager.execute_command(args, context=ctx)
    if not result.success:
        return describe_failure(result)

    response: Dict[str, Any] = {
        "command": result.command,
        "resource": f"{resource_type}/{name}",
        "namespace": namespace,
        "format": output,
    }
    if output == "human-readable":
        if not isinstance(result.data, dict):
            return {
                "error": "Could not parse resource JSON for a human-readable summary",
                "command": response["command"],
            }
        response["summary"] = summarize_resource(result.data, resource_type)
    elif output == "json" and result.is_json:
        response["data"] = result.data
    else:
        response["output"] = result.text
    return response


# ============================================================================
# oc_explain
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_explain(
    resource: str,
    field: Optional[str] = None,
    api_version: Optional[str] = None,
    recursive: bool = False,
    context: str = "",
) -> Dict[str, Any]:
    """
    Show the documentation of a resource type or one of its fields.

    Args:
        resource: Resource type, e.g. pods or deployment
        field: Dotted field path, e.g. spec.containers
        api_version: API version of the resource, e.g. apps/v1
        recursive: Print all nested fields
        context: kubeconfig context to use (empty = current)
    """
    if not resource:
        raise MissingParamError("resource", "oc_explain")
    ensure_valid(validate_resource_type(resource.strip()), "resource")

    path = resource.strip()
    if field:
        path = f"{path}.{field.strip('.')}"
    args = ["explain", path]
    if api_version:
        args.extend(["--api-version", api_version])
    if recursive:
        args.append("--recursive")

    ctx = context or None
    manager = get_manager()
    result = await manager.execute_command(args, context=ctx)
    if not result.success:
        return describe_failure(result)
    return {"command": result.command, "resource": path, "explanation": result.text}


# ============================================================================
# oc_api_resources
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_api_resources(
    api_group: Optional[str] = None,
    namespaced: Optional[bool] = None,
    verbs: Optional[List[str]] = None,
    output: str = "table",
    context: str = "",
) -> Dict[str, Any]:
    """
    List the API resources the cluster supports.

    Args:
        api_group: Limit to one API group (use "" for the core group)
        namespaced: True for namespaced resources only, False for cluster-scoped only
        verbs: Only resources supporting all of these verbs, e.g. ["list", "get"]
        output: table (parsed into rows), wide (parsed, with verbs) or name
        context: kubeconfig context to use (empty = current)
    """
    _check_choice("output", output, API_RESOURCE_OUTPUTS)

    args = ["api-resources"]
    if api_group is not None:
        args.extend(["--api-group", api_group])
    if namespaced is not None:
        args.extend(["--namespaced", str(namespaced).lower()])
    if verbs:
        args.extend(["--verbs", ",".join(verbs)])
    if output != "table":
        args.extend(["-o", output])

    ctx = context or None
    manager = get_manager()
    result = await manager.execute_command(args, context=ctx)
    if not result.success:
        return describe_failure(result)

    command = result.command
    if output == "name":
        names = [line.strip() for line in result.text.splitlines() if line.strip()]
        return {"command": command, "count": len(names), "resources": names}

    rows = parse_table(result.text)
    resources = []
    for row in rows:
        entry: Dict[str, Any] = {
            "name": row.get("NAME", ""),
            "shortNames": [s for s in row.get("SHORTNAMES", "").split(",") if s],
            "apiVersion": row.get("APIVERSION", ""),
            "namespaced": row.get("NAMESPACED", "").lower() == "true",
            "kind": row.get("KIND", ""),
        }
        if "VERBS" in row:
            entry["verbs"] = row["VERBS"].strip("[]").split()
        resources.append(entry)
    return {"command": command, "count": len(resources), "resources": resources}


# ============================================================================
# oc_status
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_status(
    resource_type: str,
    name: str,
    namespace: str = "default",
    context: str = "",
    detailed: bool = False,
) -> Dict[str, Any]:
    """
    Status of one resource together with its most recent events.

    Args:
        resource_type: Type of resource
        name: Resource name
        namespace: Project of the resource
        context: kubeconfig context to use (empty = current)
        detailed: Also include the full `oc describe` output
    """
    if not resource_type:
        raise MissingParamError("resource_type", "oc_status")
    if not name:
        raise MissingParamError("name", "oc_status")
    ensure_valid(validate_resource_type(resource_type), "resource_type")
    ensure_valid(validate_resource_name(name), "name")
    ensure_valid(validate_namespace(namespace), "namespace")

    ctx = context or None
    manager = get_manager()

    get_args = ["get", resource_type, name, "-n", namespace, "-o", "json"]
    result = await manager.execute_command(get_args, context=ctx)
    if not result.success:
        return describe_failure(result)

    response: Dict[str, Any] = {
        "command": result.command,
        "resource": f"{resource_type}/{name}",
        "namespace": namespace,
    }
    if isinstance(result.data, dict):
        response["summary"] = summarize_resource(result.data, resource_type)

    events_args = [
        "get", "events", "-n", namespace,
        "--field-selector", f"involvedObject.name={name}",
        "--sort-by=.lastTimestamp",
        "-o", "json",
    ]
    events = await manager.execute_command(events_args, context=ctx)
    if events.success:
        response["events"] = summarize_events(events.data, limit=STATUS_EVENT_LIMIT)
    else:
        # events are best effort; the resource itself was found
        logger.warning(f"Could not read events for {resource_type}/{name}: {events.error}")
        response["events"] = []
        response["events_error"] = events.error

    if detailed:
        describe_args = ["describe", resource_type, name, "-n", namespace]
        described = await manager.execute_command(describe_args, context=ctx)
        response["description"] = described.text if described.success else described.error

    return response
