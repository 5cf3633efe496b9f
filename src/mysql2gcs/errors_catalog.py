"""Actionable error catalog for mysql2gcs."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "missing_environment": {
        "what": "Missing required environment variable(s): {names}.",
        "next": "Export every MYSQL_* and GCS_* variable before running the backup.",
    },
    "empty_environment": {
        "what": "Required environment variable(s) set but empty: {names}.",
        "next": "Give every MYSQL_* and GCS_* variable a non-empty value; "
        "an empty MYSQL_PASSWORD makes mysqldump prompt for one.",
    },
    "dump_command_not_found": {
        "what": "Dump command could not be started: {binary}.",
        "next": "Install mysqldump or point MYSQLDUMP_PATH to an executable binary.",
    },
    "dump_failed": {
        "what": "mysqldump exited with status {returncode}.",
        "next": "Check the MySQL connection settings and the diagnostic output above.",
    },
    "dump_not_utf8": {
        "what": "Dump output is not valid UTF-8: {reason}",
        "next": "Set `default-character-set=utf8mb4` in the `[mysqldump]` section of my.cnf, "
        "or point MYSQLDUMP_PATH to a wrapper script that passes it.",
    },
    "upload_failed": {
        "what": "Could not send sql dump to storage: {reason}",
        "next": "Check network access to www.googleapis.com and retry.",
    },
    "upload_rejected": {
        "what": "Storage rejected the upload of {name} with HTTP {status_code}.",
        "next": "Verify GCS_BUCKET exists and GCS_OAUTH_TOKEN is valid and not expired.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what} Suggested action: {next_step}"
