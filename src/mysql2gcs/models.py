"""Shared domain models for mysql2gcs."""

from dataclasses import dataclass, field
from datetime import datetime

from .errors import BackupError
from .errors_catalog import actionable_error

DEFAULT_DUMP_BINARY = "/usr/bin/mysqldump"


@dataclass(frozen=True)
class SqlConfig:
    """Connection parameters handed to the dump utility."""

    host: str
    port: str
    database: str
    user: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class StorageTarget:
    """Bucket and bearer credential for the upload."""

    bucket: str
    oauth_token: str = field(repr=False)


@dataclass(frozen=True)
class BackupConfig:
    """Everything a single backup run needs, assembled once at startup."""

    sql: SqlConfig
    storage: StorageTarget
    dump_binary: str = DEFAULT_DUMP_BINARY


@dataclass(frozen=True)
class SqlDump:
    """Captured dump output and the instant the dump command completed."""

    timestamp: datetime
    sql: bytes = field(repr=False)
    returncode: int = 0
    stderr: str = ""

    @property
    def partial(self) -> bool:
        return self.returncode != 0

    @property
    def object_name(self) -> str:
        return f"{int(self.timestamp.timestamp())}.sql"

    def to_text(self) -> str:
        try:
            return self.sql.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise BackupError(actionable_error("dump_not_utf8", reason=str(exc))) from exc


@dataclass(frozen=True)
class UploadResult:
    object_name: str
    status_code: int
    size: int
    partial: bool = False
