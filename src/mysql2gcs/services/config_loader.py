"""Environment configuration loader for mysql2gcs."""

import os
from typing import Mapping, Optional

from mysql2gcs.errors import BackupError
from mysql2gcs.errors_catalog import actionable_error
from mysql2gcs.models import DEFAULT_DUMP_BINARY, BackupConfig, SqlConfig, StorageTarget


class ConfigLoader:
    """Builds a BackupConfig from process environment variables."""

    REQUIRED_KEYS = (
        "MYSQL_HOST",
        "MYSQL_PORT",
        "MYSQL_DATABASE",
        "MYSQL_USER",
        "MYSQL_PASSWORD",
        "GCS_BUCKET",
        "GCS_OAUTH_TOKEN",
    )
    DUMP_BINARY_KEY = "MYSQLDUMP_PATH"

    def load(self, environ: Optional[Mapping[str, str]] = None) -> BackupConfig:
        env = os.environ if environ is None else environ

        missing = [key for key in self.REQUIRED_KEYS if key not in env]
        if missing:
            raise BackupError(actionable_error("missing_environment", names=", ".join(missing)))

        empty = [key for key in self.REQUIRED_KEYS if not env[key]]
        if empty:
            raise BackupError(actionable_error("empty_environment", names=", ".join(empty)))

        return BackupConfig(
            sql=SqlConfig(
                host=env["MYSQL_HOST"],
                port=env["MYSQL_PORT"],
                database=env["MYSQL_DATABASE"],
                user=env["MYSQL_USER"],
                password=env["MYSQL_PASSWORD"],
            ),
            storage=StorageTarget(
                bucket=env["GCS_BUCKET"],
                oauth_token=env["GCS_OAUTH_TOKEN"],
            ),
            dump_binary=env.get(self.DUMP_BINARY_KEY) or DEFAULT_DUMP_BINARY,
        )
