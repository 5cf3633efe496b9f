"""mysqldump execution service for mysql2gcs."""

from datetime import datetime, timezone
from typing import Callable, List, Optional

from mysql2gcs.models import DEFAULT_DUMP_BINARY, SqlConfig, SqlDump


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Dumper:
    """Runs mysqldump for one database and captures its output in memory."""

    PASSWORD_MASK = "****"

    def __init__(
        self,
        config: SqlConfig,
        command_runner,
        logger,
        dump_binary: str = DEFAULT_DUMP_BINARY,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.config = config
        self.command_runner = command_runner
        self.logger = logger
        self.dump_binary = dump_binary
        self.clock = clock or _utcnow

    def build_args(self) -> List[str]:
        return [
            f"-h{self.config.host}",
            f"-P{self.config.port}",
            f"-u{self.config.user}",
            f"-p{self.config.password}",
            self.config.database,
        ]

    def build_command(self) -> List[str]:
        return [self.dump_binary, *self.build_args()]

    def build_display_command(self) -> List[str]:
        password_arg = f"-p{self.config.password}"
        return [
            f"-p{self.PASSWORD_MASK}" if arg == password_arg else arg
            for arg in self.build_command()
        ]

    def exec(self) -> SqlDump:
        result = self.command_runner.run(
            self.build_command(),
            display_cmd=self.build_display_command(),
        )
        timestamp = self.clock()

        stderr = ""
        if result.returncode != 0:
            try:
                stderr = (result.stderr or b"").decode("utf-8").strip()
                self.logger.error("Error executing mysqldump: %s", stderr)
            except UnicodeDecodeError as exc:
                self.logger.error("Error executing mysqldump (stderr is not UTF-8): %s", exc)

        sql = result.stdout or b""
        self.logger.debug("Captured %s byte(s) of dump output at %s", len(sql), timestamp.isoformat())

        return SqlDump(
            timestamp=timestamp,
            sql=sql,
            returncode=result.returncode,
            stderr=stderr,
        )
