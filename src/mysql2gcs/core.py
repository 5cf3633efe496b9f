import logging
import subprocess

import requests
from rich.console import Console
from rich.markup import escape

from .errors import BackupError
from .errors_catalog import actionable_error
from .models import BackupConfig, UploadResult
from .services.command_runner import CommandRunner
from .services.dumper import Dumper
from .services.gcs_client import GcsClient

console = Console()
logger = logging.getLogger("mysql2gcs")


class MysqlBackup:
    def __init__(
        self,
        config: BackupConfig,
        fail_on_dump_error: bool = False,
        dry_run: bool = False,
        requests_module=requests,
    ):
        self.config = config
        self.fail_on_dump_error = fail_on_dump_error
        self.dry_run = dry_run

        self.command_runner = CommandRunner(logger=logger)
        self.dumper = Dumper(
            config=config.sql,
            command_runner=self.command_runner,
            logger=logger,
            dump_binary=config.dump_binary,
        )
        self.gcs_client = GcsClient(
            target=config.storage,
            logger=logger,
            requests_module=requests_module,
        )

    def print_plan(self):
        display_cmd = subprocess.list2cmdline(self.dumper.build_display_command())
        console.print("[bold blue]Dry run: nothing will be executed.[/bold blue]")
        console.print(f"Dump command: {escape(display_cmd)}")
        console.print(
            f"Upload target: {escape(self.gcs_client.build_upload_endpoint())}"
            "?uploadType=media&name=<epoch>.sql"
        )

    def backup(self) -> UploadResult:
        console.print(f"[blue]Dumping database '{escape(self.config.sql.database)}'...[/blue]")
        dump = self.dumper.exec()

        if dump.partial:
            message = actionable_error("dump_failed", returncode=str(dump.returncode))
            if self.fail_on_dump_error:
                raise BackupError(message)
            console.print(
                "[yellow]Warning:[/yellow] mysqldump did not exit cleanly; "
                "uploading the captured output as a partial dump."
            )
            logger.warning("%s Uploading partial dump as %s.", message, dump.object_name)

        console.print(f"[blue]Uploading {escape(dump.object_name)} to bucket '{escape(self.config.storage.bucket)}'...[/blue]")
        return self.gcs_client.send(dump)

    def run(self) -> int:
        try:
            if self.dry_run:
                self.print_plan()
                return 0

            logger.info("Starting mysql2gcs backup...")
            result = self.backup()
            if result.partial:
                console.print(f"[yellow]Finished with a partial dump: {escape(result.object_name)}[/yellow]")
            else:
                console.print(f"[green]Finished: {escape(result.object_name)}[/green]")
            logger.info("Uploaded %s (%s bytes)", result.object_name, result.size)
            return 0

        except KeyboardInterrupt:
            console.print("[bold red]Operation cancelled by user.[/bold red]")
            logger.info("Operation cancelled by user")
            return 1
        except BackupError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
            logger.error(str(exc))
            return 1
        except Exception as exc:
            console.print(f"[bold red]Unexpected error:[/bold red] {escape(str(exc))}")
            logger.exception("Unexpected error")
            return 1
