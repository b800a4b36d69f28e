"""External process invocation for the shell passthrough routes.

Commands are run through the shell with caller input interpolated as-is.
"""

import subprocess

from probe_fixtures.core.logging_utils import log_command


class CommandRunner:
    """Runs shell command lines for the diagnostic routes."""

    def run(self, command: str) -> str:
        """Run command, capture and return stdout verbatim.

        A non-zero exit still returns the captured output (logged at WARNING).
        OSError from a failed launch propagates.
        """
        out = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            text=True,
            check=False,
        )
        log_command(command, out.returncode, output_bytes=len(out.stdout or ""))
        return out.stdout or ""

    def spawn(self, command: str) -> int:
        """Run command with this process's stdout/stderr inherited. Returns the exit code."""
        out = subprocess.run(command, shell=True, check=False)
        log_command(command, out.returncode)
        return out.returncode
