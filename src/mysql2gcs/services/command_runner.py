"""Subprocess execution service for mysql2gcs."""

import subprocess
from typing import List, Optional

from mysql2gcs.errors import BackupError
from mysql2gcs.errors_catalog import actionable_error


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger):
        self.logger = logger

    def run(
        self,
        cmd: List[str],
        display_cmd: Optional[List[str]] = None,
    ) -> subprocess.CompletedProcess:
        """Run ``cmd`` to completion and capture stdout/stderr as bytes.

        A non-zero exit status is logged and returned, never raised.

        ``display_cmd`` replaces ``cmd`` in log lines and error messages so
        that credentials passed as arguments never reach the log.
        """
        cmd_str = " ".join(display_cmd or cmd)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(cmd, capture_output=True)
        except OSError as exc:
            raise BackupError(actionable_error("dump_command_not_found", binary=cmd[0])) from exc
        except Exception as exc:
            raise BackupError(f"Failed to execute command: {cmd_str}. {exc}") from exc

        if result.returncode == 0:
            return result

        self.logger.warning("Command failed (%s): %s", result.returncode, cmd_str)
        return result
