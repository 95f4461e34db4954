# src/fixer1132/tasks/steps.py

"""
Step kinds.

- CommandStep: run an executable with arguments at the caller's privilege level.
- ElevatedScriptStep: write a shell script to a private temp file and run it
  through `osascript ... with administrator privileges` (interactive prompt).
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
import uuid
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..core.ports import ProcessLauncher
from .task_models import LaunchFailure, ProcessResult

logger = logging.getLogger(__name__)

ADMIN_FAILURE_MESSAGE = "Admin authorization was canceled or failed."


def shell_quote(value: str) -> str:
    """POSIX single-quote a value for /bin/sh-compatible shells."""
    return "'" + value.replace("'", "'\\''") + "'"


def applescript_string(value: str) -> str:
    """Render a Python string as an AppleScript string literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


@contextlib.contextmanager
def temp_script(
    contents: str,
    *,
    directory: str | Path | None = None,
    prefix: str = "spoof-mac-",
    suffix: str = ".zsh",
) -> Iterator[Path]:
    """
    Write `contents` to an owner-only executable file and remove it on exit.

    The file is fully written and chmod'ed under a temporary name first, then
    renamed into place, so the final path never holds a partial script.
    """
    base = Path(directory) if directory is not None else Path(tempfile.gettempdir())
    final_path = base / f"{prefix}{uuid.uuid4()}{suffix}"

    # mkstemp creates the file 0o600, readable by the owner only.
    fd, tmp_name = tempfile.mkstemp(dir=str(base), prefix=".tmp-", suffix=suffix)
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(contents)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, 0o700)
        os.replace(tmp_path, final_path)
        logger.debug("Wrote temp script %s", final_path)
        yield final_path
    finally:
        for p in (tmp_path, final_path):
            with contextlib.suppress(FileNotFoundError):
                p.unlink()


@dataclass(slots=True, frozen=True)
class CommandStep:
    executable: str
    args: Sequence[str] = field(default_factory=tuple)

    def describe(self) -> str:
        return self.executable

    def execute(self, launcher: ProcessLauncher) -> ProcessResult:
        return launcher.run(self.executable, list(self.args))

    def failure_message(self, result: ProcessResult) -> str:
        return f"Command failed with exit code {result.returncode}."


@dataclass(slots=True, frozen=True)
class ElevatedScriptStep:
    script: str
    osascript_path: str = "/usr/bin/osascript"
    shell_path: str = "/bin/zsh"
    temp_dir: Path | None = None

    def describe(self) -> str:
        return f"{self.shell_path} <script> (administrator privileges)"

    def build_args(self, script_path: Path) -> list[str]:
        command = f"{self.shell_path} {shell_quote(str(script_path))}"
        apple_script = f"do shell script {applescript_string(command)} with administrator privileges"
        return ["-e", apple_script]

    def execute(self, launcher: ProcessLauncher) -> ProcessResult:
        with contextlib.ExitStack() as stack:
            try:
                script_path = stack.enter_context(temp_script(self.script, directory=self.temp_dir))
            except OSError as e:
                raise LaunchFailure(f"Could not write temporary script: {e.strerror or e}") from e
            return launcher.run(self.osascript_path, self.build_args(script_path))

    def failure_message(self, result: ProcessResult) -> str:
        return ADMIN_FAILURE_MESSAGE
