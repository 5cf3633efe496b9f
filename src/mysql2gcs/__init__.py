"""
mysql2gcs - Dump a MySQL database and upload it to Google Cloud Storage
"""

__version__ = "0.1.0"

from .core import MysqlBackup
from .errors import BackupError

__all__ = ["MysqlBackup", "BackupError"]
