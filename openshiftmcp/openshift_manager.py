"""
OpenShift Manager
Builds oc argument vectors for common operations and hands them to the executor.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from .executor import CommandResult
from .subprocess_executor import OpenShiftExecutor, format_command

logger = logging.getLogger(__name__)

CLI_CHECK_TIMEOUT_MS = 5000

# keys of create_resource() that are not forwarded as --flags
_CREATE_RESERVED = frozenset({"resource_type", "name", "namespace", "context", "dry_run"})


class OpenShiftManager:
    """High-level oc operations over a single shared executor."""

    def __init__(self, executor: OpenShiftExecutor):
        self.executor = executor

    async def execute_command(
        self,
        args: Sequence[str],
        context: Optional[str] = None,
        timeout: Optional[int] = None,
        input: Optional[str] = None,
    ) -> CommandResult:
        return await self.executor.execute_command(args, context=context, timeout=timeout, input=input)

    @staticmethod
    def command_line(args: Sequence[str], context: Optional[str] = None) -> str:
        """The oc invocation for args, as it would be typed (secrets masked)."""
        final_args = ["--context", context, *args] if context else list(args)
        return format_command(final_args)

    async def get_resources(
        self,
        resource_type: str,
        namespace: Optional[str] = None,
        name: Optional[str] = None,
        *,
        context: Optional[str] = None,
        output: Optional[str] = None,
        label_selector: Optional[str] = None,
        field_selector: Optional[str] = None,
        all_namespaces: bool = False,
    ) -> CommandResult:
        """oc get TYPE [NAME] with namespace, output and selector flags."""
        args = ["get", resource_type]
        if name:
            args.append(name)
        if all_namespaces:
            args.append("--all-namespaces")
        elif namespace:
            args.extend(["-n", namespace])
        if output:
            args.extend(["-o", output])
        if label_selector:
            args.extend(["-l", label_selector])
        if field_selector:
            args.extend(["--field-selector", field_selector])
        return await self.execute_command(args, context=context)

    async def create_resource(
        self,
        resource_type: Optional[str] = None,
        name: Optional[str] = None,
        namespace: Optional[str] = None,
        *,
        context: Optional[str] = None,
        manifest: Optional[str] = None,
        filename: Optional[str] = None,
        dry_run: bool = False,
        **flags: Any,
    ) -> CommandResult:
        """
        Create resources from a manifest (sent on stdin), a file, or a type/name pair.

        Extra keyword arguments become `--key value` flags, with underscores
        turned into dashes (e.g. display_name -> --display-name).
        """
        args = ["create"]
        if manifest:
            args.extend(["-f", "-"])
        elif filename:
            args.extend(["-f", filename])
        elif resource_type:
            args.append(resource_type)
            if name:
                args.append(name)
            if namespace:
                args.extend(["-n", namespace])
            for key, value in flags.items():
                if key in _CREATE_RESERVED or value is None:
                    continue
                args.extend([f"--{key.replace('_', '-')}", str(value)])

        if dry_run:
            args.append("--dry-run=client")

        return await self.execute_command(args, context=context, input=manifest or None)

    async def delete_resource(
        self,
        resource_type: Optional[str] = None,
        name: Optional[str] = None,
        *,
        namespace: Optional[str] = None,
        context: Optional[str] = None,
        manifest: Optional[str] = None,
        filename: Optional[str] = None,
        label_selector: Optional[str] = None,
        field_selector: Optional[str] = None,
        all_namespaces: bool = False,
        all_resources: bool = False,
        force: bool = False,
        grace_period_seconds: Optional[int] = None,
        cascade: Optional[str] = None,
        wait: bool = False,
        timeout: Optional[str] = None,
        ignore_not_found: bool = False,
        recursive: bool = False,
        dry_run: bool = False,
    ) -> CommandResult:
        """
        oc delete by type/name, selector, manifest (stdin) or file/URL.

        `filename` may be a local path, a directory (with recursive) or a URL.
        """
        args = ["delete"]
        if manifest:
            args.extend(["-f", "-"])
        elif filename:
            args.extend(["-f", filename])
        else:
            if resource_type:
                args.append(resource_type)
            if name:
                args.append(name)

        if all_namespaces:
            args.append("--all-namespaces")
        elif namespace:
            args.extend(["-n", namespace])
        if label_selector:
            args.extend(["-l", label_selector])
        if field_selector:
            args.extend(["--field-selector", field_selector])
        if all_resources:
            args.append("--all")
        if force:
            args.append("--force")
        if grace_period_seconds is not None:
            args.extend(["--grace-period", str(grace_period_seconds)])
        if timeout:
            args.extend(["--timeout", timeout])
        if wait:
            args.append("--wait")
        if cascade:
            args.extend(["--cascade", cascade])
        if dry_run:
            args.append("--dry-run=client")
        if recursive:
            args.append("-R")
        if ignore_not_found:
            args.append("--ignore-not-found")

        return await self.execute_command(args, context=context, input=manifest or None)

    async def apply_resource(
        self,
        *,
        manifest: Optional[str] = None,
        filename: Optional[str] = None,
        kustomize_dir: Optional[str] = None,
        namespace: Optional[str] = None,
        context: Optional[str] = None,
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
    ) -> CommandResult:
        """oc apply from a manifest (stdin), a file/URL, or a kustomize directory."""
        args = ["apply"]
        if namespace:
            args.extend(["-n", namespace])

        if manifest:
            args.extend(["-f", "-"])
        elif kustomize_dir:
            args.extend(["-k", kustomize_dir])
        elif filename:
            args.extend(["-f", filename])

        if dry_run:
            args.append("--dry-run=client")
        if force:
            args.append("--force")
        if not validate:
            args.append("--validate=false")
        if wait:
            args.append("--wait")
            if timeout:
                args.extend(["--timeout", timeout])
        if prune:
            args.append("--prune")
            if selector:
                args.extend(["-l", selector])
        if recursive:
            args.append("-R")
        if server_side:
            args.append("--server-side")
            if field_manager:
                args.extend(["--field-manager", field_manager])
        if overwrite:
            args.append("--overwrite")

        return await self.execute_command(args, context=context, input=manifest or None)

    async def scale_resource(
        self,
        resource_type: str,
        name: str,
        replicas: int,
        *,
        namespace: Optional[str] = None,
        context: Optional[str] = None,
    ) -> CommandResult:
        args = ["scale", resource_type, name, f"--replicas={replicas}"]
        if namespace:
            args.extend(["-n", namespace])
        return await self.execute_command(args, context=context)

    async def get_logs(
        self,
        resource_type: str,
        name: str,
        *,
        namespace: Optional[str] = None,
        context: Optional[str] = None,
        container: Optional[str] = None,
        all_containers: bool = False,
        follow: bool = False,
        previous: bool = False,
        since: Optional[str] = None,
        since_time: Optional[str] = None,
        tail: Optional[int] = None,
        timestamps: bool = False,
        limit_bytes: Optional[int] = None,
        timeout: Optional[int] = None,
    ) -> CommandResult:
        args = ["logs", f"{resource_type}/{name}"]
        if namespace:
            args.extend(["-n", namespace])
        if container:
            args.extend(["-c", container])
        elif all_containers:
            args.append("--all-containers")
        if follow:
            args.append("-f")
        if previous:
            args.append("-p")
        if since:
            args.extend(["--since", since])
        elif since_time:
            args.extend(["--since-time", since_time])
        if tail is not None:
            args.extend(["--tail", str(tail)])
        if timestamps:
            args.append("--timestamps")
        if limit_bytes is not None:
            args.extend(["--limit-bytes", str(limit_bytes)])
        return await self.execute_command(args, context=context, timeout=timeout)

    async def check_cli(self) -> bool:
        """Return True if `oc version --client` runs successfully."""
        result = await self.execute_command(["version", "--client"], timeout=CLI_CHECK_TIMEOUT_MS)
        if not result.success:
            logger.warning(f"oc CLI check failed: {result.error}")
        return result.success


def describe_failure(result: CommandResult, args: Optional[List[str]] = None, context: Optional[str] = None) -> Dict[str, Any]:
    """Tool-facing dict for a failed command."""
    command = result.command
    if command is None and args is not None:
        command = OpenShiftManager.command_line(args, context)
    return {
        "error": result.error,
        "stderr": result.stderr or "",
        "command": command,
        "timed_out": result.timed_out,
    }
