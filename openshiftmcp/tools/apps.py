"""Application tools: oc_new_app, oc_install_operator."""

import logging
import re
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import yaml

try:
    from ..mcp_instance import mcp
    from ..context_manager import get_manager
    from ..errors import InvalidParamError, MissingParamError, ToolError, handle_tool_errors
    from ..logging_config import with_request_id
    from ..openshift_manager import OpenShiftManager, describe_failure
    from ..validation import (
        ensure_valid, validate_git_url, validate_hostname, validate_key_value_pairs,
        validate_namespace, validate_resource_name,
    )
    from .. import __version__
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp.errors import InvalidParamError, MissingParamError, ToolError, handle_tool_errors
    from openshiftmcp.logging_config import with_request_id
    from openshiftmcp.openshift_manager import OpenShiftManager, describe_failure
    from openshiftmcp.validation import (
        ensure_valid, validate_git_url, validate_hostname, validate_key_value_pairs,
        validate_namespace, validate_resource_name,
    )
    from openshiftmcp import __version__

logger = logging.getLogger(__name__)

BUILD_STRATEGIES = ["source", "docker"]
INSTALL_PLAN_APPROVALS = ["Automatic", "Manual"]
SUBSCRIPTION_CRD = "subscriptions.operators.coreos.com"


def app_name_from_repo(git_url: str) -> str:
    """Derive a DNS-1123 application name from a repository URL."""
    repo = urlparse(git_url).path.rstrip("/").rsplit("/", 1)[-1]
    if repo.endswith(".git"):
        repo = repo[:-4]
    name = re.sub(r"[^a-z0-9-]", "-", repo.lower()).strip("-")
    return name[:63].rstrip("-") or "app"


async def ensure_namespace(manager: OpenShiftManager, namespace: str, context: Optional[str]) -> bool:
    """Create namespace unless it exists. Returns True if it was created."""
    existing = await manager.execute_command(["get", "namespace", namespace], context=context)
    if existing.success:
        return False
    created = await manager.execute_command(["create", "namespace", namespace], context=context)
    if not created.success:
        raise ToolError(
            f"Could not create namespace {namespace}: {created.error}",
            recovery_hint="Create the namespace manually or check your permissions",
        )
    logger.info(f"Created namespace {namespace}")
    return True


# ============================================================================
# oc_new_app
# ============================================================================
@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_new_app(
    git_repo: str,
    app_name: Optional[str] = None,
    namespace: str = "default",
    context: str = "",
    builder_image: Optional[str] = None,
    strategy: Optional[str] = None,
    git_ref: Optional[str] = None,
    context_dir: Optional[str] = None,
    env: Optional[List[str]] = None,
    labels: Optional[List[str]] = None,
    create_namespace: bool = True,
    expose_route: bool = True,
    route_hostname: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build and deploy an application from a Git repository (S2I or Docker build).

    Args:
        git_repo: Git repository URL
        app_name: Application name (derived from the repository when omitted)
        namespace: Target project
        context: kubeconfig context to use (empty = current)
        builder_image: S2I builder image, e.g. python:3.11 (builder~repo)
        strategy: source or docker
        git_ref: Branch, tag or commit to build
        context_dir: Directory inside the repository to build from
        env: Environment variables as KEY=VALUE
        labels: Labels as KEY=VALUE
        create_namespace: Create the namespace if it is missing
        expose_route: Create an edge route for the application
        route_hostname: Hostname for the route
    """
    if not git_repo:
        raise MissingParamError("git_repo", "oc_new_app")
    warnings = list(ensure_valid(validate_git_url(git_repo), "git_repo"))
    name = app_name or app_name_from_repo(git_repo)
    ensure_valid(validate_resource_name(name), "app_name")
    ensure_valid(validate_namespace(namespace), "namespace")
    ensure_valid(validate_hostname(route_hostname), "route_hostname")
    warnings.extend(ensure_valid(validate_key_value_pairs(env, "environment variable"), "env"))
    warnings.extend(ensure_valid(validate_key_value_pairs(labels, "label"), "labels"))
    if strategy and strategy not in BUILD_STRATEGIES:
        raise InvalidParamError("strategy", f"'{strategy}' is not supported", valid_values=BUILD_STRATEGIES)

    ctx = context or None
    manager = get_manager()
    namespace_created = False
    if create_namespace:
        namespace_created = await ensure_namespace(manager, namespace, ctx)

    source = f"{git_repo}#{git_ref}" if git_ref else git_repo
    if builder_image:
        source = f"{builder_image}~{source}"
    args = ["new-app", source, "--name", name, "-n", namespace]
    if strategy:
        args.append(f"--strategy={strategy}")
    if context_dir:
        args.append(f"--context-dir={context_dir}")
    for pair in env or []:
        args.extend(["-e", pair])
    for pair in labels or []:
        args.extend(["-l", pair])

    result = await manager.execute_command(args, context=ctx)
    if not result.success:
        return describe_failure(result)

    response: Dict[str, Any] = {
        "command": result.command,
        "app_name": name,
        "namespace": namespace,
        "namespace_created": namespace_created,
        "output": result.text,
        "warnings": warnings,
    }

    if expose_route:
        route_args = ["create", "route", "edge", f"{name}-route", "-n", namespace, "--service", name]
        if route_hostname:
            route_args.extend(["--hostname", route_hostname])
        route = await manager.execute_command(route_args, context=ctx)
        if route.success:
            host = await manager.execute_command(
                ["get", "route", f"{name}-route", "-n", namespace, "-o", "jsonpath={.spec.host}"],
                context=ctx,
            )
            response["route"] = f"{name}-route"
            if host.success and host.text:
                response["url"] = f"https://{host.text}"
        else:
            # the app itself was created; report the route failure alongside it
            response["route_error"] = route.error

    return response


# ============================================================================
# oc_install_operator
# ============================================================================
def operator_manifests(
    operator_name: str,
    namespace: str,
    channel: str,
    catalog_source: str,
    catalog_namespace: str,
    install_plan_approval: str,
    version: Optional[str] = None,
) -> Dict[str, str]:
    """OperatorGroup and Subscription YAML for an OLM install."""
    operator_group = {
        "apiVersion": "operators.coreos.com/v1",
        "kind": "OperatorGroup",
        "metadata": {"name": f"{operator_name}-operator-group", "namespace": namespace},
        "spec": {"targetNamespaces": [namespace]},
    }
    subscription_spec: Dict[str, Any] = {
        "channel": channel,
        "name": operator_name,
        "source": catalog_source,
        "sourceNamespace": catalog_namespace,
        "installPlanApproval": install_plan_approval,
    }
    if version:
        subscription_spec["startingCSV"] = f"{operator_name}.v{version.lstrip('v')}"
    subscription = {
        "apiVersion": "operators.coreos.com/v1alpha1",
        "kind": "Subscription",
        "metadata": {"name": f"{operator_name}-subscription", "namespace": namespace},
        "spec": subscription_spec,
    }
    return {
        "operator_group": yaml.safe_dump(operator_group, sort_keys=False),
        "subscription": yaml.safe_dump(subscription, sort_keys=False),
    }


@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_install_operator(
    operator_name: str,
    namespace: str = "default",
    context: str = "",
    channel: str = "stable",
    version: Optional[str] = None,
    catalog_source: str = "redhat-operators",
    catalog_namespace: str = "openshift-marketplace",
    install_plan_approval: str = "Automatic",
    create_namespace: bool = True,
) -> Dict[str, Any]:
    """
    Install an operator through the Operator Lifecycle Manager.

    Applies an OperatorGroup targeting the namespace and a Subscription to
    the operator package in the given catalog.

    Args:
        operator_name: Package name in the catalog
        namespace: Namespace the operator watches and runs in
        context: kubeconfig context to use (empty = current)
        channel: Update channel
        version: Starting version (latest in the channel when omitted)
        catalog_source: CatalogSource holding the package
        catalog_namespace: Namespace of the CatalogSource
        install_plan_approval: Automatic or Manual
        create_namespace: Create the namespace if it is missing
    """
    if not operator_name:
        raise MissingParamError("operator_name", "oc_install_operator")
    ensure_valid(validate_resource_name(operator_name), "operator_name")
    ensure_valid(validate_namespace(namespace), "namespace")
    if install_plan_approval not in INSTALL_PLAN_APPROVALS:
        raise InvalidParamError(
            "install_plan_approval",
            f"'{install_plan_approval}' is not supported",
            valid_values=INSTALL_PLAN_APPROVALS,
        )

    ctx = context or None
    manager = get_manager()

    olm = await manager.execute_command(["get", "crd", SUBSCRIPTION_CRD], context=ctx)
    if not olm.success:
        return {
            "error": "Operator Lifecycle Manager (OLM) not found on cluster",
            "recovery_hint": "Install OLM first; only OLM installs are supported",
            "command": olm.command,
        }

    namespace_created = False
    if create_namespace:
        namespace_created = await ensure_namespace(manager, namespace, ctx)

    manifests = operator_manifests(
        operator_name, namespace, channel, catalog_source, catalog_namespace,
        install_plan_approval, version,
    )

    group = await manager.apply_resource(manifest=manifests["operator_group"], namespace=namespace, context=ctx)
    if not group.success and "already exists" not in (group.error or ""):
        return describe_failure(group)

    subscription = await manager.apply_resource(manifest=manifests["subscription"], namespace=namespace, context=ctx)
    if not subscription.success:
        return describe_failure(subscription)

    logger.info(f"Subscribed {namespace} to operator {operator_name} ({channel})")
    return {
        "command": subscription.command,
        "operator": operator_name,
        "namespace": namespace,
        "namespace_created": namespace_created,
        "channel": channel,
        "catalog_source": catalog_source,
        "install_plan_approval": install_plan_approval,
        "subscription": f"{operator_name}-subscription",
        "operator_group": f"{operator_name}-operator-group",
        "output": "\n".join(filter(None, [group.text, subscription.text])),
    }
