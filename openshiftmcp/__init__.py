"""OpenShift MCP - expose the OpenShift CLI (oc) to agents over MCP."""

__version__ = "1.0.0"
