import logging

import click
from rich.logging import RichHandler

from .core import MysqlBackup
from .errors import BackupError
from .services.config_loader import ConfigLoader

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True, show_level=False, show_path=False)],
)


@click.command()
@click.option("--verbose", is_flag=True, default=False, help="Enable verbose logging")
@click.option("--log-file", type=click.Path(), help="Path to log file")
@click.option(
    "--fail-on-dump-error",
    is_flag=True,
    default=False,
    help="Abort instead of uploading a partial dump when mysqldump exits with an error.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Validate the environment and print the dump command and upload target only.",
)
def main(verbose, log_file, fail_on_dump_error, dry_run):
    """Dump a MySQL database and upload it to Google Cloud Storage.

    Connection and storage settings are read from MYSQL_HOST, MYSQL_PORT,
    MYSQL_DATABASE, MYSQL_USER, MYSQL_PASSWORD, GCS_BUCKET and GCS_OAUTH_TOKEN.
    """
    logger = logging.getLogger("mysql2gcs")

    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)

    try:
        config = ConfigLoader().load()
    except BackupError as exc:
        raise click.ClickException(str(exc)) from exc

    backup = MysqlBackup(
        config=config,
        fail_on_dump_error=fail_on_dump_error,
        dry_run=dry_run,
    )
    raise SystemExit(backup.run())


if __name__ == "__main__":
    main()
