"""Mutating tools: oc_create, oc_apply, oc_delete, oc_patch, oc_scale, oc_expose."""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

try:
    from ..mcp_instance import mcp
    from ..context_manager import get_manager
    from ..errors import (
        ConfirmationRequiredError, InvalidParamError, MissingParamError, handle_tool_errors,
    )
    from ..formatting import extract_items, replica_counts, simplify_item
    from ..logging_config import with_request_id
    from ..openshift_manager import OpenShiftManager, describe_failure
    from ..validation import (
        ensure_valid, validate_file_path, validate_hostname, validate_label_selector,
        validate_manifest_content, validate_namespace, validate_port, validate_resource_name,
        validate_resource_type, validate_timeout, validate_url,
    )
    from .. import __version__
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp.errors import (
        ConfirmationRequiredError, InvalidParamError, MissingParamError, handle_tool_errors,
    )
    from openshiftmcp.formatting import extract_items, replica_counts, simplify_item
    from openshiftmcp.logging_config import with_request_id
    from openshiftmcp.openshift_manager import OpenShiftManager, describe_failure
    from openshiftmcp.validation import (
        ensure_valid, validate_file_path, validate_hostname, validate_label_selector,
        validate_manifest_content, validate_namespace, validate_port, validate_resource_name,
        validate_resource_type, validate_timeout, validate_url,
    )
    from openshiftmcp import __version__

logger = logging.getLogger(__name__)

# "deployment.apps/web created", "route.route.openshift.io "web" deleted"
_ACTION_LINE = re.compile(r'^(?P<resource>\S+?)(?:/(?P<name>\S+)| "(?P<quoted>[^"]+)")\s+(?P<action>.+)$')

CREATE_TYPES = ["project", "deploymentconfig", "route", "service"]
CRITICAL_DELETE_TYPES = frozenset({
    "namespace", "namespaces", "ns",
    "node", "nodes", "no",
    "clusterrole", "clusterroles",
    "persistentvolume", "persistentvolumes", "pv",
})
MAX_UNCONFIRMED_DELETES = 10
SYSTEM_NAMESPACES = frozenset({
    "kube-system", "kube-public", "openshift", "openshift-monitoring", "openshift-operators",
})
CASCADE_MODES = ["background", "foreground", "orphan"]
PATCH_TYPES = ["strategic", "merge", "json"]
PATCH_SUBRESOURCES = ["status", "scale"]
CLUSTER_SCOPED_TYPES = frozenset({
    "node", "nodes", "persistentvolume", "persistentvolumes", "pv",
    "clusterrole", "clusterroles", "clusterrolebinding", "clusterrolebindings",
    "namespace", "namespaces", "ns",
})
SCALABLE_TYPES = ["deployment", "deploymentconfig", "replicaset", "statefulset"]
ROUTE_TYPES = ["edge", "passthrough", "reencrypt", "http"]
INSECURE_POLICIES = ["None", "Allow", "Redirect"]


def parse_action_lines(text: str) -> List[Dict[str, str]]:
    """Turn `oc apply/create/delete` output lines into {resource, name, action} dicts."""
    parsed = []
    for line in text.splitlines():
        match = _ACTION_LINE.match(line.strip())
        if not match:
            continue
        parsed.append({
            "resource": match.group("resource"),
            "name": match.group("name") or match.group("quoted"),
            "action": match.group("action").strip(),
        })
    return parsed


def _mutation_response(result, **extra: Any) -> Dict[str, Any]:
    response: Dict[str, Any] = {"command": result.command, "output": result.text}
    response["resources"] = parse_action_lines(result.text)
    response.update(extra)
    return response


# ============================================================================
# oc_create
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_create(
    resource_type: Optional[str] = None,
    name: Optional[str] = None,
    namespace: str = "default",
    context: str = "",
    manifest: Optional[str] = None,
    filename: Optional[str] = None,
    display_name: Optional[str] = None,
    description: Optional[str] = None,
    image: Optional[str] = None,
    replicas: Optional[int] = None,
    service: Optional[str] = None,
    hostname: Optional[str] = None,
    tcp: Optional[List[str]] = None,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """
    Create resources from a manifest or file, or create a project,
    deploymentconfig, edge route or ClusterIP service by name.

    Args:
        resource_type: project, deploymentconfig, route or service (omit with manifest/filename)
        name: Name of the resource to create
        namespace: Target project (ignored for project creation)
        context: kubeconfig context to use (empty = current)
        manifest: YAML or JSON manifest content
        filename: Path to a manifest file
        display_name: Project display name
        description: Project description
        image: Container image for a deploymentconfig
        replicas: Replica count for a deploymentconfig
        service: Service a route points at
        hostname: Route hostname
        tcp: Service port mappings as "port:targetPort"
        dry_run: Validate without persisting (client side)
    """
    ctx = context or None
    manager = get_manager()

    if manifest:
        warnings = ensure_valid(validate_manifest_content(manifest), "manifest")
        result = await manager.create_resource(context=ctx, manifest=manifest, dry_run=dry_run)
        if not result.success:
            return describe_failure(result)
        return _mutation_response(result, warnings=warnings)

    if filename:
        ensure_valid(validate_file_path(filename), "filename")
        result = await manager.create_resource(context=ctx, filename=filename, dry_run=dry_run)
        if not result.success:
            return describe_failure(result)
        return _mutation_response(result)

    if not resource_type:
        raise MissingParamError("resource_type", "oc_create")
    if resource_type not in CREATE_TYPES:
        raise InvalidParamError(
            "resource_type",
            f"'{resource_type}' needs a manifest or filename",
            valid_values=CREATE_TYPES,
        )
    if not name:
        raise MissingParamError("name", "oc_create")
    ensure_valid(validate_resource_name(name), "name")
    if resource_type != "project":
        ensure_valid(validate_namespace(namespace), "namespace")

    if resource_type == "project":
        if dry_run:
            raise InvalidParamError("dry_run", "oc new-project has no dry-run mode")
        args = ["new-project", name]
        if display_name:
            args.extend(["--display-name", display_name])
        if description:
            args.extend(["--description", description])
        result = await manager.execute_command(args, context=ctx)

    elif resource_type == "deploymentconfig":
        if not image:
            raise MissingParamError("image", "oc_create")
        result = await manager.create_resource(
            "deploymentconfig", name, namespace,
            context=ctx, dry_run=dry_run, image=image, replicas=replicas,
        )

    elif resource_type == "route":
        if not service:
            raise MissingParamError("service", "oc_create")
        ensure_valid(validate_hostname(hostname), "hostname")
        args = ["create", "route", "edge", name, f"--service={service}", "-n", namespace]
        if hostname:
            args.append(f"--hostname={hostname}")
        if dry_run:
            args.append("--dry-run=client")
        result = await manager.execute_command(args, context=ctx)

    else:
        args = ["create", "service", "clusterip", name, "-n", namespace]
        for mapping in tcp or []:
            args.append(f"--tcp={mapping}")
        if dry_run:
            args.append("--dry-run=client")
        result = await manager.execute_command(args, context=ctx)

    if not result.success:
        return describe_failure(result)
    return _mutation_response(result, dry_run=dry_run)


# ============================================================================
# oc_apply
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_apply(
    manifest: Optional[str] = None,
    filename: Optional[str] = None,
    url: Optional[str] = None,
    kustomize_dir: Optional[str] = None,
    namespace: Optional[str] = None,
    context: str = "",
    dry_run: bool = False,
    force: bool = False,
    validate: bool = True,
    wait: bool = False,
    timeout: Optional[str] = None,
    prune: bool = False,
    selector: Optional[str] = None,
    recursive: bool = False,
    server_side: bool = False,
    field_manager: Optional[str] = None,
    overwrite: bool = False,
) -> Dict[str, Any]:
    """
    Apply configuration from a manifest, file, URL or kustomize directory.

    Args:
        manifest: YAML or JSON manifest content (sent on stdin)
        filename: Path to a manifest file or directory
        url: URL of a manifest
        kustomize_dir: Directory containing a kustomization
        namespace: Target project
        context: kubeconfig context to use (empty = current)
        dry_run: Client-side dry run
        force: Delete and re-create resources when a patch fails
        validate: Validate the input against the schema
        wait: Wait for resources to be applied
        timeout: Wait timeout, e.g. "60s"
        prune: Delete resources not present in the input (requires selector)
        selector: Label selector used with prune
        recursive: Process directories recursively
        server_side: Use server-side apply
        field_manager: Field manager name for server-side apply
        overwrite: Overwrite conflicting fields
    """
    sources = [s for s in (manifest, filename, url, kustomize_dir) if s]
    if not sources:
        raise MissingParamError("manifest", "oc_apply")
    if len(sources) > 1:
        raise InvalidParamError("manifest", "give exactly one of manifest, filename, url or kustomize_dir")

    warnings: List[str] = []
    if manifest:
        warnings = ensure_valid(validate_manifest_content(manifest), "manifest")
    if filename:
        ensure_valid(validate_file_path(filename), "filename")
    if kustomize_dir:
        ensure_valid(validate_file_path(kustomize_dir, "Kustomize directory"), "kustomize_dir")
    if url:
        ensure_valid(validate_url(url), "url")
    if namespace:
        ensure_valid(validate_namespace(namespace), "namespace")
    ensure_valid(validate_timeout(timeout), "timeout")
    ensure_valid(validate_label_selector(selector), "selector")
    if prune and not selector:
        raise MissingParamError("selector", "oc_apply with prune")

    manager = get_manager()
    result = await manager.apply_resource(
        manifest=manifest,
        filename=filename or url,
        kustomize_dir=kustomize_dir,
        namespace=namespace,
        context=context or None,
        dry_run=dry_run,
        force=force,
        validate=validate,
        wait=wait,
        timeout=timeout,
        prune=prune,
        selector=selector,
        recursive=recursive,
        server_side=server_side,
        field_manager=field_manager,
        overwrite=overwrite,
    )
    if not result.success:
        return describe_failure(result)
    return _mutation_response(result, dry_run=dry_run, warnings=warnings)


# ============================================================================
# oc_delete
# ============================================================================
def _target(item: Dict[str, Any], default_kind: Optional[str] = None) -> Dict[str, Optional[str]]:
    metadata = item.get("metadata") or {}
    return {
        "kind": str(item.get("kind") or default_kind or "Unknown"),
        "name": metadata.get("name"),
        "namespace": metadata.get("namespace"),
    }


def manifest_targets(manifest: str) -> List[Dict[str, Optional[str]]]:
    """kind/name/namespace of every object in a manifest, List items expanded."""
    return [
        _target(item)
        for doc in yaml.safe_load_all(manifest)
        for item in extract_items(doc)
        if isinstance(item, dict)
    ]


async def discover_delete_targets(
    manager: OpenShiftManager,
    resource_type: Optional[str],
    namespace: str,
    context: Optional[str],
    *,
    manifest: Optional[str] = None,
    source: Optional[str] = None,
    label_selector: Optional[str] = None,
    field_selector: Optional[str] = None,
    all_namespaces: bool = False,
    recursive: bool = False,
) -> Optional[List[Dict[str, Optional[str]]]]:
    """
    List what a delete would remove, without removing it.

    Manifests are read locally; files, URLs and selectors are resolved with
    oc get. Returns None when the targets cannot be determined, in which
    case the delete itself reports the real error.
    """
    if manifest:
        try:
            return manifest_targets(manifest)
        except yaml.YAMLError as e:
            logger.warning(f"Could not read manifest kinds before delete: {e}")
            return None

    if source:
        args = ["get", "-f", source]
        if recursive:
            args.append("--recursive")
        if all_namespaces:
            args.append("--all-namespaces")
        else:
            args.extend(["-n", namespace])
        args.extend(["-o", "json"])
        result = await manager.execute_command(args, context=context)
    elif resource_type and (label_selector or field_selector):
        result = await manager.get_resources(
            resource_type,
            namespace,
            context=context,
            output="json",
            label_selector=label_selector,
            field_selector=field_selector,
            all_namespaces=all_namespaces,
        )
    else:
        return None

    if not result.is_json:
        logger.warning(f"Could not list delete targets: {result.error or 'unexpected output'}")
        return None
    return [_target(item, resource_type) for item in extract_items(result.data) if isinstance(item, dict)]


def delete_confirmation_reasons(
    resource_type: Optional[str],
    all_resources: bool,
    all_namespaces: bool,
    targets: Optional[List[Dict[str, Optional[str]]]] = None,
) -> List[str]:
    """Why a delete needs confirm=True; empty when it does not."""
    reasons = []
    if all_resources:
        reasons.append("deletes every resource of the type")
    if all_namespaces:
        reasons.append("spans all namespaces")
    if resource_type and resource_type.lower() in CRITICAL_DELETE_TYPES:
        reasons.append(f"'{resource_type}' is a critical resource type")
    elif targets:
        critical = sorted({t["kind"] for t in targets if t["kind"].lower() in CRITICAL_DELETE_TYPES})
        reasons.extend(f"'{kind}' is a critical resource type" for kind in critical)
    if targets and len(targets) > MAX_UNCONFIRMED_DELETES:
        reasons.append(f"matches {len(targets)} resources (more than {MAX_UNCONFIRMED_DELETES})")
    return reasons


@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_delete(
    resource_type: Optional[str] = None,
    name: Optional[str] = None,
    namespace: str = "default",
    context: str = "",
    manifest: Optional[str] = None,
    filename: Optional[str] = None,
    url: Optional[str] = None,
    label_selector: Optional[str] = None,
    field_selector: Optional[str] = None,
    all_namespaces: bool = False,
    all_resources: bool = False,
    force: bool = False,
    grace_period_seconds: Optional[int] = None,
    cascade: Optional[str] = None,
    wait: bool = False,
    timeout: Optional[str] = None,
    ignore404: bool = False,
    recursive: bool = False,
    dry_run: bool = False,
    confirm: bool = False,
) -> Dict[str, Any]:
    """
    Delete resources by name, selector, manifest, file or URL.

    Deleting every resource of a type, deleting across all namespaces,
    deleting a critical type (namespace, node, clusterrole, persistentvolume)
    or matching more than 10 resources requires confirm=True unless dry_run
    is set. Manifest kinds are read locally; selectors, files and URLs are
    resolved with oc get before anything is deleted.

    Args:
        resource_type: Type of resource to delete
        name: Resource name
        namespace: Project of the resources
        context: kubeconfig context to use (empty = current)
        manifest: Manifest describing the resources to delete
        filename: Manifest file or directory
        url: URL of a manifest
        label_selector: Delete resources matching this label selector
        field_selector: Delete resources matching this field selector
        all_namespaces: Apply the selection in every namespace
        all_resources: Delete all resources of resource_type
        force: Immediate removal, bypassing graceful deletion
        grace_period_seconds: Seconds given to the resource to terminate
        cascade: background, foreground or orphan
        wait: Wait for finalizers before returning
        timeout: How long to wait, e.g. "60s"
        ignore404: Treat "not found" as success
        recursive: Process directories recursively
        dry_run: Client-side dry run
        confirm: Acknowledge a wide or critical deletion
    """
    by_source = manifest or filename or url
    if not by_source:
        if not resource_type:
            raise MissingParamError("resource_type", "oc_delete")
        ensure_valid(validate_resource_type(resource_type), "resource_type")
        if not (name or label_selector or field_selector or all_resources):
            raise MissingParamError("name", "oc_delete")
    if name:
        ensure_valid(validate_resource_name(name), "name")
    if manifest:
        ensure_valid(validate_manifest_content(manifest), "manifest")
    if filename:
        ensure_valid(validate_file_path(filename), "filename")
    if url:
        ensure_valid(validate_url(url), "url")
    if not all_namespaces:
        ensure_valid(validate_namespace(namespace), "namespace")
    ensure_valid(validate_label_selector(label_selector), "label_selector")
    ensure_valid(validate_timeout(timeout), "timeout")
    if cascade and cascade not in CASCADE_MODES:
        raise InvalidParamError("cascade", f"'{cascade}' is not supported", valid_values=CASCADE_MODES)
    if grace_period_seconds is not None and grace_period_seconds < 0:
        raise InvalidParamError("grace_period_seconds", "must be 0 or greater")

    ctx = context or None
    manager = get_manager()
    reasons = delete_confirmation_reasons(resource_type, all_resources, all_namespaces)
    if not reasons and not confirm and not dry_run:
        targets = await discover_delete_targets(
            manager,
            None if by_source else resource_type,
            namespace,
            ctx,
            manifest=manifest,
            source=filename or url,
            label_selector=None if by_source else label_selector,
            field_selector=None if by_source else field_selector,
            all_namespaces=all_namespaces,
            recursive=recursive,
        )
        reasons = delete_confirmation_reasons(resource_type, all_resources, all_namespaces, targets)
    if reasons and not confirm and not dry_run:
        raise ConfirmationRequiredError("oc_delete", reasons)

    warnings = []
    if namespace in SYSTEM_NAMESPACES and not all_namespaces:
        warnings.append(f"'{namespace}' is a system namespace")
    if force:
        warnings.append("force deletion bypasses graceful termination")

    result = await manager.delete_resource(
        None if by_source else resource_type,
        None if by_source else name,
        namespace=namespace,
        context=ctx,
        manifest=manifest,
        filename=filename or url,
        label_selector=label_selector,
        field_selector=field_selector,
        all_namespaces=all_namespaces,
        all_resources=all_resources,
        force=force,
        grace_period_seconds=grace_period_seconds,
        cascade=cascade,
        wait=wait,
        timeout=timeout,
        ignore_not_found=ignore404,
        recursive=recursive,
        dry_run=dry_run,
    )
    if not result.success:
        return describe_failure(result)

    for warning in warnings:
        logger.warning(f"oc_delete: {warning}")
    return _mutation_response(result, dry_run=dry_run, warnings=warnings)


# ============================================================================
# oc_patch
# ============================================================================
def load_patch(patch: str, patch_type: str) -> Any:
    """Parse a JSON or YAML patch and check its shape against the patch type."""
    try:
        data = json.loads(patch)
    except ValueError:
        try:
            data = yaml.safe_load(patch)
        except yaml.YAMLError as e:
            raise InvalidParamError("patch", f"not valid JSON or YAML: {e}")

    if patch_type == "json":
        if not isinstance(data, list) or not data:
            raise InvalidParamError("patch", "a json patch must be a non-empty list of operations")
        for op in data:
            if not isinstance(op, dict) or "op" not in op or "path" not in op:
                raise InvalidParamError("patch", "each json patch operation needs 'op' and 'path'")
    elif not isinstance(data, dict) or not data:
        raise InvalidParamError("patch", f"a {patch_type} patch must be a non-empty object")
    return data


@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_patch(
    resource_type: str,
    name: str,
    patch: str,
    namespace: str = "default",
    context: str = "",
    patch_type: str = "strategic",
    subresource: Optional[str] = None,
    dry_run: bool = False,
    field_manager: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Patch a resource with a strategic merge, JSON merge or JSON patch.

    Args:
        resource_type: Type of resource
        name: Resource name
        patch: Patch document as JSON or YAML
        namespace: Project of the resource (ignored for cluster-scoped types)
        context: kubeconfig context to use (empty = current)
        patch_type: strategic, merge or json
        subresource: status or scale
        dry_run: Client-side dry run
        field_manager: Name of the manager owning the patched fields
    """
    if not resource_type:
        raise MissingParamError("resource_type", "oc_patch")
    if not name:
        raise MissingParamError("name", "oc_patch")
    if not patch:
        raise MissingParamError("patch", "oc_patch")
    ensure_valid(validate_resource_type(resource_type), "resource_type")
    ensure_valid(validate_resource_name(name), "name")
    if patch_type not in PATCH_TYPES:
        raise InvalidParamError("patch_type", f"'{patch_type}' is not supported", valid_values=PATCH_TYPES)
    if subresource and subresource not in PATCH_SUBRESOURCES:
        raise InvalidParamError(
            "subresource", f"'{subresource}' is not supported", valid_values=PATCH_SUBRESOURCES,
        )
    data = load_patch(patch, patch_type)

    args = ["patch", resource_type, name]
    if resource_type.lower() not in CLUSTER_SCOPED_TYPES:
        ensure_valid(validate_namespace(namespace), "namespace")
        args.extend(["-n", namespace])
    args.extend(["--type", patch_type, "-p", json.dumps(data)])
    if subresource:
        args.extend(["--subresource", subresource])
    if dry_run:
        args.append("--dry-run=client")
    if field_manager:
        args.extend(["--field-manager", field_manager])
    args.extend(["-o", "json"])

    manager = get_manager()
    result = await manager.execute_command(args, context=context or None)
    if not result.success:
        return describe_failure(result)

    response: Dict[str, Any] = {"command": result.command, "dry_run": dry_run}
    if isinstance(result.data, dict) and result.data:
        response["resource"] = simplify_item(result.data, resource_type)
    else:
        response["output"] = result.text
    return response


# ============================================================================
# oc_scale
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_scale(
    name: str,
    replicas: int,
    resource_type: str = "deployment",
    namespace: str = "default",
    context: str = "",
) -> Dict[str, Any]:
    """
    Scale a deployment, deploymentconfig, replicaset or statefulset.

    Args:
        name: Resource name
        replicas: Desired replica count
        resource_type: deployment, deploymentconfig, replicaset or statefulset
        namespace: Project of the resource
        context: kubeconfig context to use (empty = current)
    """
    if not name:
        raise MissingParamError("name", "oc_scale")
    ensure_valid(validate_resource_name(name), "name")
    ensure_valid(validate_namespace(namespace), "namespace")
    if resource_type not in SCALABLE_TYPES:
        raise InvalidParamError("resource_type", f"'{resource_type}' cannot be scaled", valid_values=SCALABLE_TYPES)
    if replicas < 0:
        raise InvalidParamError("replicas", "must be 0 or greater")

    ctx = context or None
    manager = get_manager()

    current = await manager.get_resources(resource_type, namespace, name, context=ctx, output="json")
    if not current.success:
        return describe_failure(current)
    previous, _, _ = replica_counts(current.data)

    result = await manager.scale_resource(resource_type, name, replicas, namespace=namespace, context=ctx)
    if not result.success:
        return describe_failure(result)

    if replicas > previous:
        action = "scaled_up"
    elif replicas < previous:
        action = "scaled_down"
    else:
        action = "unchanged"

    response: Dict[str, Any] = {
        "command": result.command,
        "resource": f"{resource_type}/{name}",
        "namespace": namespace,
        "previous_replicas": previous,
        "replicas": replicas,
        "action": action,
    }
    updated = await manager.get_resources(resource_type, namespace, name, context=ctx, output="json")
    if updated.success:
        _, ready, available = replica_counts(updated.data)
        response["ready_replicas"] = ready
        response["available_replicas"] = available
    return response


# ============================================================================
# oc_expose
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_expose(
    name: str,
    resource_type: str = "service",
    namespace: str = "default",
    context: str = "",
    route_type: str = "edge",
    route_name: Optional[str] = None,
    port: Optional[str] = None,
    hostname: Optional[str] = None,
    path: Optional[str] = None,
    insecure_policy: Optional[str] = None,
    certificate: Optional[str] = None,
    key: Optional[str] = None,
    ca_certificate: Optional[str] = None,
    destination_ca_certificate: Optional[str] = None,
    dry_run: bool = False,
) -> Dict[str, Any]:
    """
    Expose a service as a route (edge, passthrough, reencrypt or plain http).

    With route_type=http any exposable resource is accepted and `oc expose`
    is used; TLS route types need a service.

    Args:
        name: Name of the resource to expose
        resource_type: service (or, for http, any type oc expose accepts)
        namespace: Project of the resource
        context: kubeconfig context to use (empty = current)
        route_type: edge, passthrough, reencrypt or http
        route_name: Name of the route (defaults to name)
        port: Target port number or name
        hostname: Route hostname
        path: Path the route serves, must start with "/"
        insecure_policy: None, Allow or Redirect for plain-HTTP traffic on TLS routes
        certificate: Path to the PEM certificate
        key: Path to the PEM private key
        ca_certificate: Path to the CA certificate chain
        destination_ca_certificate: Path to the backend CA certificate (reencrypt)
        dry_run: Client-side dry run
    """
    if not name:
        raise MissingParamError("name", "oc_expose")
    ensure_valid(validate_resource_name(name), "name")
    ensure_valid(validate_namespace(namespace), "namespace")
    route_name = route_name or name
    ensure_valid(validate_resource_name(route_name), "route_name")
    if route_type not in ROUTE_TYPES:
        raise InvalidParamError("route_type", f"'{route_type}' is not supported", valid_values=ROUTE_TYPES)
    ensure_valid(validate_hostname(hostname), "hostname")
    ensure_valid(validate_port(port), "port")
    if path and not path.startswith("/"):
        raise InvalidParamError("path", "must start with '/'")
    if path and route_type == "passthrough":
        raise InvalidParamError("path", "passthrough routes cannot be path based")
    if insecure_policy and insecure_policy not in INSECURE_POLICIES:
        raise InvalidParamError("insecure_policy", f"'{insecure_policy}' is not supported", valid_values=INSECURE_POLICIES)

    tls_files = {
        "certificate": certificate,
        "key": key,
        "ca_certificate": ca_certificate,
        "destination_ca_certificate": destination_ca_certificate,
    }
    for param, value in tls_files.items():
        if value:
            ensure_valid(validate_file_path(value, param), param)
            if not Path(value).is_file():
                raise InvalidParamError(param, f"file not found: {value}")
    if (certificate or key) and not (certificate and key):
        raise InvalidParamError("certificate", "certificate and key must be given together")

    if route_type == "http":
        args = ["expose", resource_type, name, "-n", namespace]
        if resource_type in ("service", "svc"):
            args.extend(["--name", route_name])
        if port:
            args.extend(["--port", str(port)])
        if hostname:
            args.extend(["--hostname", hostname])
        if path:
            args.extend(["--path", path])
    else:
        if resource_type not in ("service", "svc"):
            raise InvalidParamError("resource_type", f"{route_type} routes expose a service", valid_values=["service"])
        args = ["create", "route", route_type, route_name, "-n", namespace, "--service", name]
        if port:
            args.extend(["--port", str(port)])
        if hostname:
            args.extend(["--hostname", hostname])
        if path:
            args.extend(["--path", path])
        if insecure_policy:
            args.extend(["--insecure-policy", insecure_policy])
        if certificate:
            args.extend(["--cert", certificate, "--key", key])
        if ca_certificate:
            args.extend(["--ca-cert", ca_certificate])
        if destination_ca_certificate:
            args.extend(["--dest-ca-cert", destination_ca_certificate])
    if dry_run:
        args.append("--dry-run=client")

    ctx = context or None
    manager = get_manager()
    result = await manager.execute_command(args, context=ctx)
    if not result.success:
        return describe_failure(result)

    response = _mutation_response(result, dry_run=dry_run, route=route_name)
    exposes_route = route_type != "http" or resource_type in ("service", "svc")
    if exposes_route and not dry_run:
        route = await manager.get_resources("route", namespace, route_name, context=ctx, output="json")
        if route.success and isinstance(route.data, dict):
            host = (route.data.get("spec") or {}).get("host")
            if host:
                scheme = "http" if route_type == "http" else "https"
                response["host"] = host
                response["url"] = f"{scheme}://{host}{path or ''}"
    return response
