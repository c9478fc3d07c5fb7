"""Log retrieval tool: oc_logs."""

import asyncio
import logging
from typing import Any, Dict, List, Optional

try:
    from ..mcp_instance import mcp
    from ..config import settings
    from ..context_manager import get_manager
    from ..errors import InvalidParamError, MissingParamError, ToolError, handle_tool_errors
    from ..formatting import container_names, extract_items, truncate_lines
    from ..logging_config import with_request_id
    from ..openshift_manager import OpenShiftManager, describe_failure
    from ..validation import (
        ensure_valid, validate_label_selector, validate_namespace, validate_resource_name,
        validate_rfc3339, validate_since,
    )
    from .. import __version__
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.config import settings
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp.errors import InvalidParamError, MissingParamError, ToolError, handle_tool_errors
    from openshiftmcp.formatting import container_names, extract_items, truncate_lines
    from openshiftmcp.logging_config import with_request_id
    from openshiftmcp.openshift_manager import OpenShiftManager, describe_failure
    from openshiftmcp.validation import (
        ensure_valid, validate_label_selector, validate_namespace, validate_resource_name,
        validate_rfc3339, validate_since,
    )
    from openshiftmcp import __version__

logger = logging.getLogger(__name__)

LOG_RESOURCE_TYPES = ["pod", "deploymentconfig", "deployment", "build", "buildconfig", "job"]
MAX_LOG_REQUESTS_LIMIT = 20


async def run_in_batches(requests: List[Dict[str, Any]], fetch, batch_size: int) -> List[Dict[str, Any]]:
    """
    Run fetch(request) for every request, batch_size at a time.

    Requests within a batch run concurrently; results keep the input order.
    """
    results: List[Dict[str, Any]] = []
    for start in range(0, len(requests), batch_size):
        batch = requests[start:start + batch_size]
        results.extend(await asyncio.gather(*(fetch(request) for request in batch)))
    return results


async def _find_targets(
    manager: OpenShiftManager,
    resource_type: str,
    name: Optional[str],
    namespace: str,
    context: Optional[str],
    selector: Optional[str],
    container: Optional[str],
    all_containers: bool,
) -> List[Dict[str, Any]]:
    """Expand the request into one {resource_type, name, container} per log stream."""
    if selector:
        result = await manager.get_resources("pods", namespace, context=context, output="json", label_selector=selector)
        if not result.success:
            raise ToolError(f"Could not list pods for selector {selector}: {result.error}")
        pods = extract_items(result.data)
        if not pods:
            raise ToolError(
                f"No pods found matching selector: {selector}",
                recovery_hint=f"Check the labels with `oc get pods -n {namespace} --show-labels`",
            )
        return [
            {"resource_type": "pod", "name": pod["metadata"]["name"], "container": container}
            for pod in pods
        ]

    result = await manager.get_resources(resource_type, namespace, name, context=context, output="json")
    if not result.success:
        raise ToolError(
            f"{resource_type}/{name} not found in {namespace}: {result.error}",
            recovery_hint=f"List candidates with `oc get {resource_type} -n {namespace}`",
        )
    containers = container_names(result.data) if isinstance(result.data, dict) else []

    if container:
        if containers and container not in containers:
            raise InvalidParamError("container", f"no container '{container}'", valid_values=containers)
        return [{"resource_type": resource_type, "name": name, "container": container}]

    if len(containers) > 1 and resource_type == "pod":
        if not all_containers:
            raise InvalidParamError(
                "container",
                f"pod {name} has {len(containers)} containers; choose one or set all_containers",
                valid_values=containers,
            )
        return [{"resource_type": "pod", "name": name, "container": c} for c in containers]

    return [{"resource_type": resource_type, "name": name, "container": None}]


@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_logs(
    name: Optional[str] = None,
    resource_type: str = "pod",
    namespace: str = "default",
    context: str = "",
    container: Optional[str] = None,
    all_containers: bool = False,
    selector: Optional[str] = None,
    follow: bool = False,
    previous: bool = False,
    since: Optional[str] = None,
    since_time: Optional[str] = None,
    tail: Optional[int] = None,
    timestamps: bool = False,
    limit_bytes: Optional[int] = None,
    max_log_requests: Optional[int] = None,
    max_lines: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Fetch logs from a pod, workload or build, from every container of a pod,
    or from every pod matching a label selector.

    Multi-container and selector requests issue one oc logs call per stream,
    max_log_requests of them at a time.

    Args:
        name: Resource name (omit when using selector)
        resource_type: pod, deploymentconfig, deployment, build, buildconfig or job
        namespace: Project of the resource
        context: kubeconfig context to use (empty = current)
        container: Container to read
        all_containers: Read every container of the pod separately
        selector: Label selector choosing pods
        follow: Stream logs until the command timeout; the lines received by
            then are returned with timed_out set on the stream
        previous: Logs of the previous container instance
        since: Relative start, e.g. "5m"
        since_time: Absolute RFC3339 start
        tail: Number of most recent lines (-1 for all)
        timestamps: Prefix each line with its timestamp
        limit_bytes: Maximum bytes per stream
        max_log_requests: Concurrent log requests (1-20)
        max_lines: Keep only the last max_lines lines of each stream in the reply
    """
    if not name and not selector:
        raise MissingParamError("name", "oc_logs")
    if resource_type not in LOG_RESOURCE_TYPES:
        raise InvalidParamError("resource_type", f"'{resource_type}' has no logs", valid_values=LOG_RESOURCE_TYPES)
    if name:
        ensure_valid(validate_resource_name(name), "name")
    ensure_valid(validate_namespace(namespace), "namespace")
    ensure_valid(validate_label_selector(selector), "selector")
    ensure_valid(validate_since(since), "since")
    ensure_valid(validate_rfc3339(since_time), "since_time")
    if previous and follow:
        raise InvalidParamError("previous", "previous containers cannot be followed")
    if since and since_time:
        raise InvalidParamError("since_time", "use either since or since_time")
    if (all_containers or selector) and resource_type != "pod":
        raise InvalidParamError("resource_type", "all_containers and selector only work with pods", valid_values=["pod"])
    if tail is not None and tail < -1:
        raise InvalidParamError("tail", "must be -1 or greater")
    if limit_bytes is not None and limit_bytes <= 0:
        raise InvalidParamError("limit_bytes", "must be positive")
    if max_lines is not None and max_lines < 0:
        raise InvalidParamError("max_lines", "must be 0 or greater")

    batch_size = max_log_requests if max_log_requests is not None else settings.max_log_requests
    if not 1 <= batch_size <= MAX_LOG_REQUESTS_LIMIT:
        raise InvalidParamError("max_log_requests", f"must be between 1 and {MAX_LOG_REQUESTS_LIMIT}")

    ctx = context or None
    manager = get_manager()
    targets = await _find_targets(
        manager, resource_type, name, namespace, ctx, selector, container, all_containers,
    )
    timeout = None if follow else settings.logs_timeout

    async def fetch(target: Dict[str, Any]) -> Dict[str, Any]:
        result = await manager.get_logs(
            target["resource_type"],
            target["name"],
            namespace=namespace,
            context=ctx,
            container=target["container"],
            follow=follow,
            previous=previous,
            since=since,
            since_time=since_time,
            tail=tail,
            timestamps=timestamps,
            limit_bytes=limit_bytes,
            timeout=timeout,
        )
        source = f"{target['resource_type']}/{target['name']}"
        if target["container"]:
            source = f"{source}[{target['container']}]"
        if result.success:
            logs = result.text
        elif follow and result.timed_out:
            # a followed stream only ends at the timeout
            logs = (result.partial_stdout or "").strip()
        else:
            logger.warning(f"Log request for {source} failed: {result.error}")
            return {"source": source, "success": False, **describe_failure(result)}
        text, total, truncated = truncate_lines(logs, max_lines)
        stream = {
            "source": source,
            "success": True,
            "command": result.command,
            "lines": total,
            "truncated": truncated or result.timed_out,
            "logs": text,
        }
        if result.timed_out:
            stream["timed_out"] = True
        return stream

    logger.debug(f"Fetching {len(targets)} log stream(s), {batch_size} at a time")
    streams = await run_in_batches(targets, fetch, batch_size)
    failed = sum(1 for stream in streams if not stream["success"])
    response: Dict[str, Any] = {
        "namespace": namespace,
        "streams": streams,
        "succeeded": len(streams) - failed,
        "failed": failed,
    }
    if failed == len(streams):
        response["error"] = streams[0]["error"] if len(streams) == 1 else "All log requests failed"
    return response
