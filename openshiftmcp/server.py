"""
OpenShiftMCP Server - the OpenShift CLI over the Model Context Protocol

NOTE: stdout is the stdio transport; all logging goes to stderr.

Every tool validates its parameters, runs `oc` through one shared
subprocess executor and returns a compact dict. Cluster and session state
live in oc's own kubeconfig; the server keeps none.

15 Tools:
- oc_get: Get resources (simplified items for JSON output)
- oc_describe: Describe a resource (text, yaml, json or human-readable summary)
- oc_explain: Documentation for a resource type or field
- oc_api_resources: List the API resources the cluster supports
- oc_status: Resource status with recent events
- oc_create: Create from manifest/file, or a project, deploymentconfig, route or service
- oc_apply: Apply a manifest, file, URL or kustomize directory
- oc_delete: Delete resources, with confirmation for wide or critical deletions
- oc_patch: Strategic, merge or JSON patch
- oc_scale: Scale a workload and report the change
- oc_expose: Expose a service as a route
- oc_logs: Logs from a resource, every container, or a label selector
- oc_login: Token or password login
- oc_new_app: Build and deploy from a Git repository
- oc_install_operator: Install an operator through OLM

Resources: openshift://cluster-info, openshift://projects
Prompts: troubleshoot_pod
"""

import asyncio
import logging

# ============================================================================
# Step 1: Import shared MCP instance (must be first)
# ============================================================================
try:
    from .mcp_instance import mcp
    from .config import settings
    from .context_manager import get_manager
    from . import __version__
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.config import settings
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp import __version__

logger = logging.getLogger(__name__)

# ============================================================================
# Step 2: Import tool modules (registration happens on import)
# ============================================================================
try:
    from .tools.query import (  # noqa: F401
        oc_get, oc_describe, oc_explain, oc_api_resources, oc_status,
    )
    from .tools.mutate import (  # noqa: F401
        oc_create, oc_apply, oc_delete, oc_patch, oc_scale, oc_expose,
    )
    from .tools.logs import oc_logs  # noqa: F401
    from .tools.session import oc_login  # noqa: F401
    from .tools.apps import oc_new_app, oc_install_operator  # noqa: F401
    from .tools.resources import cluster_info_resource, projects_resource  # noqa: F401
    from .tools.prompts import troubleshoot_pod  # noqa: F401
except ImportError:
    from openshiftmcp.tools.query import (  # noqa: F401
        oc_get, oc_describe, oc_explain, oc_api_resources, oc_status,
    )
    from openshiftmcp.tools.mutate import (  # noqa: F401
        oc_create, oc_apply, oc_delete, oc_patch, oc_scale, oc_expose,
    )
    from openshiftmcp.tools.logs import oc_logs  # noqa: F401
    from openshiftmcp.tools.session import oc_login  # noqa: F401
    from openshiftmcp.tools.apps import oc_new_app, oc_install_operator  # noqa: F401
    from openshiftmcp.tools.resources import cluster_info_resource, projects_resource  # noqa: F401
    from openshiftmcp.tools.prompts import troubleshoot_pod  # noqa: F401

logger.info(f"OpenShiftMCP {__version__} initialized (oc binary: {settings.oc_binary})")


# ============================================================================
# Step 3: Entry point
# ============================================================================
def main():
    """Run the MCP server."""
    import argparse

    parser = argparse.ArgumentParser(description="OpenShiftMCP Server")
    parser.add_argument(
        "--transport", "-t",
        choices=["stdio", "sse", "http"],
        default=settings.transport,
        help="Transport type: stdio (default), sse or http"
    )
    parser.add_argument(
        "--port", "-p",
        type=int,
        default=settings.port,
        help=f"Port for sse/http transports (default: {settings.port})"
    )
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host for sse/http transports (default: {settings.host})"
    )
    parser.add_argument(
        "--skip-cli-check",
        action="store_true",
        help="Do not run `oc version --client` at startup"
    )
    args = parser.parse_args()

    logger.info("Starting OpenShiftMCP server...")
    logger.info(f"Transport: {args.transport}")

    if not args.skip_cli_check:
        # runs on its own loop; the executor keeps no loop-bound state
        if not asyncio.run(get_manager().check_cli()):
            logger.warning(f"'{settings.oc_binary}' is not usable; every tool call will fail until it is installed")

    try:
        if args.transport == "stdio":
            mcp.run(transport="stdio")
        else:
            logger.info(f"{args.transport.upper()} server at http://{args.host}:{args.port}")
            mcp.run(transport=args.transport, host=args.host, port=args.port)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Server error: {e}")
        raise


if __name__ == "__main__":
    main()
