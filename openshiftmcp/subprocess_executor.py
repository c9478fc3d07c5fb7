# openshiftmcp/subprocess_executor.py
"""
Subprocess Executor
Runs the oc CLI via asyncio subprocesses, one process per call.

There is no session, pooling or retry here: each call spawns oc, feeds its
stdin, collects stdout/stderr and resolves to exactly one CommandResult.
Cluster/session state lives in oc's own kubeconfig on disk.
"""

import asyncio
import logging
import os
import shlex
import signal
import time
from typing import List, Optional, Sequence

from .config import MAX_OUTPUT_BYTES
from .executor import CommandResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_MS = 30000
READ_CHUNK_SIZE = 64 * 1024

_SECRET_FLAGS = ("--token", "--password")


class OutputLimitExceeded(Exception):
    """Raised when stdout grows past the executor's buffer cap."""

    def __init__(self, size: int):
        super().__init__(f"stdout reached {size} bytes")
        self.size = size


def format_command(args: Sequence[str], program: str = "oc") -> str:
    """Render an argument vector as a shell-quoted line with credentials masked."""
    masked: List[str] = []
    hide_next = False
    for arg in args:
        if hide_next:
            masked.append("****")
            hide_next = False
            continue
        flag, sep, _ = arg.partition("=")
        if flag in _SECRET_FLAGS:
            if sep:
                masked.append(f"{flag}=****")
            else:
                masked.append(arg)
                hide_next = True
            continue
        masked.append(arg)
    return shlex.join([program, *masked])


class OpenShiftExecutor:
    """Executes oc commands via subprocess - stateless only."""

    def __init__(
        self,
        command: str = "oc",
        base_args: Optional[Sequence[str]] = None,
        max_output_bytes: int = MAX_OUTPUT_BYTES,
        kill_grace_seconds: float = 5.0,
        default_timeout: int = DEFAULT_TIMEOUT_MS,
    ):
        self.command = command
        self.base_args = list(base_args or [])
        self.max_output_bytes = max_output_bytes
        self.kill_grace_seconds = kill_grace_seconds
        self.default_timeout = default_timeout

    async def execute_command(
        self,
        args: Sequence[str],
        context: Optional[str] = None,
        timeout: Optional[int] = None,
        input: Optional[str] = None,
    ) -> CommandResult:
        """
        Run `oc [--context CONTEXT] ARGS...` and return its result.

        Args:
            args: Argument vector for oc; never passed through a shell
            context: kubeconfig context to select for this call only
            timeout: Limit in milliseconds (None = executor default, <= 0 disables)
            input: Text written to the process's stdin before it is closed

        Cancelling the awaiting task terminates the process and re-raises
        CancelledError. On timeout the stdout read so far is kept in
        partial_stdout.
        """
        final_args = ["--context", context, *args] if context else list(args)
        timeout_ms = self.default_timeout if timeout is None else timeout
        timeout_seconds = timeout_ms / 1000 if timeout_ms and timeout_ms > 0 else None
        cmd_str = format_command(final_args, self.command)
        logger.debug(f"Executing: {cmd_str}")

        try:
            proc = await asyncio.create_subprocess_exec(
                self.command,
                *self.base_args,
                *final_args,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env=dict(os.environ),
                start_new_session=True,
            )
        except OSError as e:
            logger.warning(f"Failed to spawn {self.command}: {e}")
            return CommandResult.failure(f"Failed to execute command: {e}", command=cmd_str)

        stdout = bytearray()
        stderr = bytearray()
        started = time.monotonic()

        try:
            returncode = await asyncio.wait_for(
                self._communicate(proc, input, stdout, stderr),
                timeout=timeout_seconds,
            )
        except asyncio.TimeoutError:
            await self._terminate(proc, stderr)
            logger.warning(f"Command timed out after {timeout_ms}ms: {cmd_str}")
            return CommandResult.failure(
                f"Command timed out after {timeout_ms}ms",
                stderr=_decode(stderr),
                return_code=proc.returncode,
                timed_out=True,
                command=cmd_str,
                partial_stdout=_decode(stdout),
            )
        except OutputLimitExceeded as e:
            await self._terminate(proc, stderr)
            logger.warning(f"Output exceeded {self.max_output_bytes} bytes ({e.size} read): {cmd_str}")
            return CommandResult.failure(
                f"Output buffer exceeded maximum size ({self.max_output_bytes} bytes)",
                stderr=_decode(stderr),
                return_code=proc.returncode,
                buffer_exceeded=True,
                command=cmd_str,
            )
        except asyncio.CancelledError:
            await self._terminate(proc, stderr)
            logger.info(f"Command cancelled: {cmd_str}")
            raise

        elapsed_ms = (time.monotonic() - started) * 1000
        logger.debug(f"Command exited with {returncode} in {elapsed_ms:.0f}ms: {cmd_str}")

        if returncode == 0:
            return CommandResult.from_stdout(_decode(stdout), command=cmd_str)

        err = _decode(stderr)
        return CommandResult.failure(
            err.strip() or f"Command failed with exit code {returncode}",
            stderr=err,
            return_code=returncode,
            command=cmd_str,
        )

    async def _communicate(
        self,
        proc: asyncio.subprocess.Process,
        input: Optional[str],
        stdout: bytearray,
        stderr: bytearray,
    ) -> int:
        """Feed stdin and drain both output pipes, then reap the process."""
        tasks = [
            asyncio.ensure_future(self._feed_stdin(proc.stdin, input)),
            asyncio.ensure_future(self._read_stream(proc.stdout, stdout, self.max_output_bytes)),
            asyncio.ensure_future(self._read_stream(proc.stderr, stderr)),
        ]
        try:
            await asyncio.gather(*tasks)
        finally:
            # A StreamReader allows one reader at a time; make sure ours are
            # gone before _terminate drains the pipes again.
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
        return await proc.wait()

    @staticmethod
    async def _feed_stdin(stdin: asyncio.StreamWriter, input: Optional[str]) -> None:
        try:
            if input:
                stdin.write(input.encode("utf-8"))
                await stdin.drain()
        except (BrokenPipeError, ConnectionResetError) as e:
            # oc exited without reading all of its input; its exit status says why
            logger.debug(f"stdin closed early: {e}")
        finally:
            stdin.close()

    @staticmethod
    async def _read_stream(
        stream: asyncio.StreamReader,
        buffer: Optional[bytearray],
        limit: Optional[int] = None,
    ) -> None:
        """Read until EOF into buffer (or discard when buffer is None)."""
        while True:
            chunk = await stream.read(READ_CHUNK_SIZE)
            if not chunk:
                return
            if buffer is None:
                continue
            buffer.extend(chunk)
            if limit is not None and len(buffer) > limit:
                raise OutputLimitExceeded(len(buffer))

    async def _terminate(self, proc: asyncio.subprocess.Process, stderr: bytearray) -> None:
        """
        SIGTERM the process group, escalate to SIGKILL after the grace period,
        and reap it.

        oc runs in its own session and the whole group is signalled, so helpers
        it started (credential plugins, port-forwards) stop with it. Each reap
        attempt is bounded by the grace period.
        """
        _signal_group(proc, signal.SIGTERM)
        if await self._reap(proc, stderr, self.kill_grace_seconds):
            return

        if proc.returncode is None:
            logger.warning(f"oc process {proc.pid} ignored SIGTERM, killing it")
        else:
            logger.warning(f"oc process {proc.pid} exited but its pipes are still open, killing its process group")
        _signal_group(proc, signal.SIGKILL)
        if not await self._reap(proc, stderr, self.kill_grace_seconds):
            logger.error(f"Gave up reaping oc process {proc.pid}: pipes still open after SIGKILL")

    async def _reap(self, proc: asyncio.subprocess.Process, stderr: bytearray, timeout: float) -> bool:
        """Drain both pipes and wait for exit; False if that took longer than timeout."""
        # Pipes must be drained or a paused transport can keep wait() pending
        try:
            await asyncio.wait_for(
                asyncio.gather(
                    proc.wait(),
                    self._read_stream(proc.stdout, None),
                    self._read_stream(proc.stderr, stderr),
                ),
                timeout,
            )
        except asyncio.TimeoutError:
            return False
        return True


def _signal_group(proc: asyncio.subprocess.Process, sig: int) -> None:
    try:
        os.killpg(proc.pid, sig)
    except ProcessLookupError:
        pass


def _decode(data: bytearray) -> str:
    return bytes(data).decode("utf-8", errors="replace")
