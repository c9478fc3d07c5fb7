"""Cluster session tool: oc_login."""

import logging
from typing import Any, Dict, Optional

try:
    from ..mcp_instance import mcp
    from ..context_manager import get_manager
    from ..errors import InvalidParamError, MissingParamError, handle_tool_errors
    from ..logging_config import with_request_id
    from ..openshift_manager import describe_failure
    from ..validation import ensure_valid, validate_file_path, validate_namespace, validate_url
    from .. import __version__
except ImportError:
    from openshiftmcp.mcp_instance import mcp
    from openshiftmcp.context_manager import get_manager
    from openshiftmcp.errors import InvalidParamError, MissingParamError, handle_tool_errors
    from openshiftmcp.logging_config import with_request_id
    from openshiftmcp.openshift_manager import describe_failure
    from openshiftmcp.validation import ensure_valid, validate_file_path, validate_namespace, validate_url
    from openshiftmcp import __version__

logger = logging.getLogger(__name__)

AUTH_METHODS = ["token", "password"]
LOGIN_TIMEOUT_RANGE = (5, 300)  # seconds
FOLLOWUP_TIMEOUT_MS = 10000


@mcp.tool(version=__version__)
@with_request_id
@handle_tool_errors
async def oc_login(
    server: str,
    auth_method: str = "token",
    token: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
    namespace: Optional[str] = None,
    insecure_skip_tls_verify: bool = False,
    certificate_authority: Optional[str] = None,
    timeout: int = 30,
    context: str = "",
) -> Dict[str, Any]:
    """
    Log in to an OpenShift cluster with a token or a username and password.

    Credentials never appear in the returned command line.

    Args:
        server: API server URL, e.g. https://api.cluster.example.com:6443
        auth_method: token or password
        token: Bearer token (auth_method=token)
        username: User name (auth_method=password)
        password: Password (auth_method=password)
        namespace: Project to switch to after logging in
        insecure_skip_tls_verify: Skip server certificate verification
        certificate_authority: Path to a CA bundle for the server
        timeout: Login timeout in seconds (5-300)
        context: kubeconfig context to use (empty = current)
    """
    if not server:
        raise MissingParamError("server", "oc_login")
    ensure_valid(validate_url(server), "server")
    if auth_method not in AUTH_METHODS:
        raise InvalidParamError("auth_method", f"'{auth_method}' is not supported", valid_values=AUTH_METHODS)
    if auth_method == "token" and not token:
        raise MissingParamError("token", "oc_login")
    if auth_method == "password":
        if not username:
            raise MissingParamError("username", "oc_login")
        if not password:
            raise MissingParamError("password", "oc_login")
    low, high = LOGIN_TIMEOUT_RANGE
    if not low <= timeout <= high:
        raise InvalidParamError("timeout", f"must be between {low} and {high} seconds")
    if certificate_authority:
        ensure_valid(validate_file_path(certificate_authority, "Certificate authority"), "certificate_authority")
    if insecure_skip_tls_verify and certificate_authority:
        raise InvalidParamError("insecure_skip_tls_verify", "cannot be combined with certificate_authority")
    if namespace:
        ensure_valid(validate_namespace(namespace), "namespace")

    args = ["login", server]
    if auth_method == "token":
        args.extend(["--token", token])
    else:
        args.extend(["--username", username, "--password", password])
    if insecure_skip_tls_verify:
        args.append("--insecure-skip-tls-verify=true")
    if certificate_authority:
        args.extend(["--certificate-authority", certificate_authority])

    ctx = context or None
    manager = get_manager()
    result = await manager.execute_command(args, context=ctx, timeout=timeout * 1000)
    if not result.success:
        logger.warning(f"Login to {server} failed: {result.error}")
        return describe_failure(result)

    response: Dict[str, Any] = {
        "command": result.command,
        "server": server,
        "auth_method": auth_method,
        "output": result.text,
    }

    if namespace:
        switched = await manager.execute_command(
            ["config", "set-context", "--current", "--namespace", namespace],
            timeout=FOLLOWUP_TIMEOUT_MS,
        )
        if switched.success:
            response["namespace"] = namespace
        else:
            response["namespace_error"] = switched.error

    whoami = await manager.execute_command(["whoami"], timeout=FOLLOWUP_TIMEOUT_MS)
    current = await manager.execute_command(["config", "current-context"], timeout=FOLLOWUP_TIMEOUT_MS)
    response["user"] = whoami.text if whoami.success else None
    response["current_context"] = current.text if current.success else None
    logger.info(f"Logged in to {server} as {response['user'] or 'unknown user'}")
    return response
