from datetime import datetime, timezone

import pytest

from mysql2gcs.errors import BackupError
from mysql2gcs.models import SqlDump, StorageTarget
from mysql2gcs.services.gcs_client import GcsClient


class DummyLogger:
    def info(self, *_args, **_kwargs):
        return None

    def debug(self, *_args, **_kwargs):
        return None


class FakeResponse:
    def __init__(self, status_code=200, text="{}"):
        self.status_code = status_code
        self.text = text


class FakeRequestsModule:
    class RequestException(Exception):
        pass

    def __init__(self, response=None, error=None):
        self.response = response or FakeResponse()
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append({"url": url, **kwargs})
        if self.error:
            raise self.error
        return self.response


def _dump(sql=b"SELECT 1;", returncode=0) -> SqlDump:
    return SqlDump(
        timestamp=datetime.fromtimestamp(1700000000, tz=timezone.utc),
        sql=sql,
        returncode=returncode,
    )


def _client(requests_module) -> GcsClient:
    return GcsClient(
        target=StorageTarget(bucket="b1", oauth_token="tok"),
        logger=DummyLogger(),
        requests_module=requests_module,
    )


def test_build_storage_uri_matches_media_upload_endpoint():
    client = _client(FakeRequestsModule())

    assert (
        client.build_storage_uri(_dump())
        == "https://www.googleapis.com/upload/storage/v1/b/b1/o?uploadType=media&name=1700000000.sql"
    )


def test_build_headers_carries_bearer_token():
    client = _client(FakeRequestsModule())

    assert client.build_headers()["Authorization"] == "Bearer tok"


def test_send_posts_dump_text_once():
    requests_module = FakeRequestsModule()
    client = _client(requests_module)

    result = client.send(_dump(sql="INSERT INTO t VALUES ('ação');".encode("utf-8")))

    assert len(requests_module.calls) == 1
    call = requests_module.calls[0]
    assert call["url"].endswith("name=1700000000.sql")
    assert call["headers"]["Authorization"] == "Bearer tok"
    assert call["data"] == "INSERT INTO t VALUES ('ação');".encode("utf-8")
    assert call["timeout"] is None
    assert result.object_name == "1700000000.sql"
    assert result.status_code == 200
    assert result.partial is False


def test_send_marks_result_partial_for_failed_dump():
    client = _client(FakeRequestsModule())

    result = client.send(_dump(sql=b"", returncode=2))

    assert result.partial is True
    assert result.size == 0


def test_send_rejects_invalid_utf8_before_request():
    requests_module = FakeRequestsModule()
    client = _client(requests_module)

    with pytest.raises(BackupError, match="not valid UTF-8"):
        client.send(_dump(sql=b"INSERT \xff\xfe"))

    assert requests_module.calls == []


def test_send_wraps_transport_errors():
    requests_module = FakeRequestsModule(
        error=FakeRequestsModule.RequestException("connection refused")
    )
    client = _client(requests_module)

    with pytest.raises(BackupError, match="connection refused"):
        client.send(_dump())


@pytest.mark.parametrize("status_code", [401, 403, 404, 500, 503])
def test_send_treats_error_status_as_failure(status_code):
    requests_module = FakeRequestsModule(
        response=FakeResponse(status_code=status_code, text='{"error": "denied"}')
    )
    client = _client(requests_module)

    with pytest.raises(BackupError) as exc_info:
        client.send(_dump())

    message = str(exc_info.value)
    assert f"HTTP {status_code}" in message
    assert '"denied"' in message


def test_send_posts_captured_bytes_without_copying():
    requests_module = FakeRequestsModule()
    client = _client(requests_module)
    dump = _dump(sql="SELECT 'ü';".encode("utf-8"))

    client.send(dump)

    assert requests_module.calls[0]["data"] is dump.sql


def test_build_upload_endpoint_quotes_bucket():
    client = GcsClient(
        target=StorageTarget(bucket="my bucket/x", oauth_token="tok"),
        logger=DummyLogger(),
        requests_module=FakeRequestsModule(),
    )

    assert client.build_upload_endpoint() == "https://www.googleapis.com/upload/storage/v1/b/my%20bucket%2Fx/o"
