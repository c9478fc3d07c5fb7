"""
Lifecycle of the shared OpenShiftManager.

One manager (and one executor) serves every tool call for the life of the
process. Tools fetch it with get_manager(); tests swap it with set_manager().
"""

import logging
from typing import Optional

try:
    from .config import settings
    from .openshift_manager import OpenShiftManager
    from .subprocess_executor import OpenShiftExecutor
except ImportError:
    from openshiftmcp.config import settings
    from openshiftmcp.openshift_manager import OpenShiftManager
    from openshiftmcp.subprocess_executor import OpenShiftExecutor

logger = logging.getLogger(__name__)

_manager: Optional[OpenShiftManager] = None


def build_manager() -> OpenShiftManager:
    """Construct a manager from the current settings."""
    executor = OpenShiftExecutor(
        command=settings.oc_binary,
        base_args=settings.oc_base_args,
        max_output_bytes=settings.max_output_bytes,
        kill_grace_seconds=settings.kill_grace_seconds,
        default_timeout=settings.command_timeout,
    )
    logger.debug(f"Built executor for {settings.oc_binary} (timeout {settings.command_timeout}ms)")
    return OpenShiftManager(executor)


def get_manager() -> OpenShiftManager:
    """Return the process-wide manager, creating it on first use."""
    global _manager
    if _manager is None:
        _manager = build_manager()
    return _manager


def set_manager(manager: Optional[OpenShiftManager]) -> None:
    """Replace the process-wide manager (None resets to lazy construction)."""
    global _manager
    _manager = manager
