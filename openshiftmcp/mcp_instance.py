"""
Shared FastMCP instance for OpenShiftMCP.

This module provides the single FastMCP instance that all tool modules
register their @mcp.tool decorators against. It sits at the bottom of the
import hierarchy to break circular imports:

    mcp_instance  (this module -- zero business-logic imports)
        <- context_manager  (OpenShiftManager lifecycle)
            <- tools/*  (tool definitions import mcp + context_manager)
                <- server.py  (composition root wires everything together)
"""

import logging
import sys

from fastmcp import FastMCP

try:
    from .config import settings
    from .logging_config import LOG_FORMAT, StructuredFormatter
except ImportError:
    from openshiftmcp.config import settings
    from openshiftmcp.logging_config import LOG_FORMAT, StructuredFormatter

# stdout carries the MCP stdio transport, so logs go to stderr
logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format=LOG_FORMAT,
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

if settings.structured_logs:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(StructuredFormatter())
    package_logger = logging.getLogger('openshiftmcp')
    package_logger.addHandler(handler)
    package_logger.propagate = False

mcp = FastMCP(
    "OpenShiftMCP",
    instructions=(
        "Tools for inspecting and managing OpenShift clusters through the oc CLI. "
        "Every tool accepts an optional 'context' naming the kubeconfig context to use."
    ),
)
