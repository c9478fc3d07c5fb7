"""Shared fixtures: a fake oc script and a recording executor."""

import json
import sys
from dataclasses import replace
from typing import Any, List, Optional, Sequence

import pytest

from openshiftmcp.context_manager import set_manager
from openshiftmcp.executor import CommandResult
from openshiftmcp.openshift_manager import OpenShiftManager
from openshiftmcp.subprocess_executor import OpenShiftExecutor, format_command

# Behaviour is chosen by the first argument after an optional --context pair.
FAKE_OC = r'''
import json
import os
import signal
import sys
import time

args = sys.argv[1:]
context = None
if args[:1] == ["--context"]:
    context, args = args[1], args[2:]
cmd, rest = args[0], args[1:]

if cmd == "json":
    print(json.dumps({"args": sys.argv[1:], "context": context}))
elif cmd == "text":
    print("hello")
elif cmd == "empty":
    pass
elif cmd == "fail":
    sys.stderr.write("boom\n")
    sys.exit(1)
elif cmd == "exit":
    sys.exit(int(rest[0]))
elif cmd == "cat":
    sys.stdout.write(sys.stdin.read())
elif cmd == "flood":
    chunk = b"x" * 65536
    for _ in range(int(rest[0]) // len(chunk) + 1):
        sys.stdout.buffer.write(chunk)
    sys.stdout.flush()
elif cmd in ("sleep", "stubborn"):
    if cmd == "stubborn":
        signal.signal(signal.SIGTERM, signal.SIG_IGN)
    with open(rest[1], "w") as f:
        f.write(str(os.getpid()))
    sys.stderr.write("started\n")
    sys.stderr.flush()
    time.sleep(float(rest[0]))
    print("finished")
elif cmd == "flood-hold":
    with open(rest[2], "w") as f:
        f.write(str(os.getpid()))
    sys.stdout.buffer.write(b"x" * int(rest[0]))
    sys.stdout.flush()
    time.sleep(float(rest[1]))
elif cmd == "tick":
    for i in range(int(rest[0])):
        print("line %d" % i, flush=True)
    time.sleep(float(rest[1]))
elif cmd in ("spawn-helper", "orphan-helper"):
    # the helper inherits stdout/stderr, like an exec credential plugin
    import subprocess
    helper = subprocess.Popen([sys.executable, "-c", "import time; time.sleep(%s)" % rest[0]])
    with open(rest[2], "w") as f:
        f.write(str(helper.pid))
    with open(rest[1], "w") as f:
        f.write(str(os.getpid()))
    if cmd == "spawn-helper":
        time.sleep(float(rest[0]))
elif cmd == "echo-id":
    time.sleep(float(rest[1]))
    print(json.dumps({"id": rest[0]}))
else:
    sys.stderr.write("unknown command " + cmd + "\n")
    sys.exit(2)
'''


@pytest.fixture(scope="session")
def fake_oc_script(tmp_path_factory):
    path = tmp_path_factory.mktemp("bin") / "fake_oc.py"
    path.write_text(FAKE_OC)
    return str(path)


@pytest.fixture
def executor(fake_oc_script):
    """Real subprocess executor running the fake oc script."""
    return OpenShiftExecutor(
        command=sys.executable,
        base_args=[fake_oc_script],
        kill_grace_seconds=1.0,
    )


def ok(data: Any = "") -> CommandResult:
    """Successful result whose stdout was data (dicts are JSON-encoded)."""
    stdout = data if isinstance(data, str) else json.dumps(data)
    return CommandResult.from_stdout(stdout)


def fail(message: str, return_code: int = 1) -> CommandResult:
    return CommandResult.failure(message, stderr=message, return_code=return_code)


class RecordingExecutor(OpenShiftExecutor):
    """Executor that records calls and answers from canned results."""

    def __init__(self):
        super().__init__()
        self.calls: List[dict] = []
        self._rules: List[tuple] = []

    def respond(self, prefix: Sequence[str], result: CommandResult) -> None:
        """Answer commands starting with prefix; later rules win."""
        self._rules.append((list(prefix), result))

    def args_list(self) -> List[List[str]]:
        return [call["args"] for call in self.calls]

    async def execute_command(
        self,
        args: Sequence[str],
        context: Optional[str] = None,
        timeout: Optional[int] = None,
        input: Optional[str] = None,
    ) -> CommandResult:
        args = list(args)
        final_args = ["--context", context, *args] if context else args
        self.calls.append({"args": args, "context": context, "timeout": timeout, "input": input})
        command = format_command(final_args)
        for prefix, result in reversed(self._rules):
            if args[:len(prefix)] == prefix:
                return replace(result, command=command)
        return CommandResult.from_stdout("", command=command)


@pytest.fixture
def fake_oc():
    """Install a RecordingExecutor as the process-wide manager's executor."""
    recorder = RecordingExecutor()
    set_manager(OpenShiftManager(recorder))
    yield recorder
    set_manager(None)
