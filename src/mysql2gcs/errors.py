"""Domain errors for mysql2gcs."""


class BackupError(RuntimeError):
    """Raised when the backup cannot continue safely."""
