"""Google Cloud Storage media upload client for mysql2gcs."""

from typing import Dict, Optional
from urllib.parse import quote, urlencode

import requests

from mysql2gcs.errors import BackupError
from mysql2gcs.errors_catalog import actionable_error
from mysql2gcs.models import SqlDump, StorageTarget, UploadResult


class GcsClient:
    """Uploads a dump as a single object with the JSON API media upload."""

    STORAGE_HOST = "https://www.googleapis.com"
    CONTENT_TYPE = "text/plain; charset=utf-8"
    ERROR_BODY_LIMIT = 500

    def __init__(
        self,
        target: StorageTarget,
        logger,
        requests_module=requests,
        timeout: Optional[float] = None,
    ):
        self.target = target
        self.logger = logger
        self.requests = requests_module
        self.timeout = timeout

    def build_upload_endpoint(self) -> str:
        return f"{self.STORAGE_HOST}/upload/storage/v1/b/{quote(self.target.bucket, safe='')}/o"

    def build_storage_uri(self, dump: SqlDump) -> str:
        query = urlencode({"uploadType": "media", "name": dump.object_name})
        return f"{self.build_upload_endpoint()}?{query}"

    def build_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.target.oauth_token}",
            "Content-Type": self.CONTENT_TYPE,
        }

    def send(self, dump: SqlDump) -> UploadResult:
        dump.to_text()
        body = dump.sql
        uri = self.build_storage_uri(dump)
        self.logger.info("Uploading %s byte(s) to %s", len(body), uri)

        try:
            response = self.requests.post(
                uri,
                headers=self.build_headers(),
                data=body,
                timeout=self.timeout,
            )
        except self.requests.RequestException as exc:
            raise BackupError(actionable_error("upload_failed", reason=str(exc))) from exc

        if not 200 <= response.status_code < 300:
            detail = (response.text or "").strip()[: self.ERROR_BODY_LIMIT]
            message = actionable_error(
                "upload_rejected",
                name=dump.object_name,
                status_code=str(response.status_code),
            )
            if detail:
                message = f"{message}\n{detail}"
            raise BackupError(message)

        self.logger.debug("Storage responded with HTTP %s", response.status_code)
        return UploadResult(
            object_name=dump.object_name,
            status_code=response.status_code,
            size=len(body),
            partial=dump.partial,
        )
