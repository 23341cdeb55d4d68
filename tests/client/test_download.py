"""Tests for JiraClient.download."""

import httpx
import pytest

from jira_rest_client.client.exceptions import (
    JiraHTTPError,
    JiraIOError,
    JiraNetworkError,
    JiraNotFoundError,
)

ATTACHMENT_URL = "https://jira.example.com/secure/attachment/10001/report.pdf"


class FakeSink:
    """In-memory download destination that counts closes."""

    def __init__(self, fail_on_write: bool = False):
        self.name = "fake-sink"
        self.data = b""
        self.close_count = 0
        self.fail_on_write = fail_on_write

    def write(self, chunk: bytes) -> int:
        if self.fail_on_write:
            raise OSError("No space left on device")
        self.data += chunk
        return len(chunk)

    def close(self) -> None:
        if self.close_count:
            raise AssertionError("sink closed twice")
        self.close_count += 1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


@pytest.fixture
def fake_sink(monkeypatch):
    """Replace the download destination with a FakeSink."""

    def _install(**kwargs):
        sink = FakeSink(**kwargs)
        monkeypatch.setattr("jira_rest_client.client.api.open_sink", lambda path: sink)
        return sink

    return _install


class TestDownload:
    """Tests for streamed download."""

    def test_writes_body(self, make_client, tmp_path):
        client, handler = make_client((200, "PDF-BYTES"))

        assert client.download(ATTACHMENT_URL, tmp_path, "report.pdf") is True

        assert (tmp_path / "report.pdf").read_bytes() == b"PDF-BYTES"
        request = handler.requests[0]
        assert request.method == "GET"
        assert str(request.url) == ATTACHMENT_URL
        assert request.headers["Authorization"].startswith("Basic ")

    def test_filename_url_decoded(self, make_client, tmp_path):
        client, _ = make_client((200, "data"))

        client.download(ATTACHMENT_URL, str(tmp_path), "Q3%20report.pdf")

        assert (tmp_path / "Q3 report.pdf").read_text() == "data"

    def test_overwrites_existing_file(self, make_client, tmp_path):
        (tmp_path / "report.pdf").write_text("old contents that are longer")
        client, _ = make_client((200, "new"))

        client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert (tmp_path / "report.pdf").read_text() == "new"

    def test_force_account_id_header_on_v3(self, make_client, tmp_path):
        client, handler = make_client((200, "data"))
        client.set_rest_api_v3()

        client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert handler.requests[0].headers["x-atlassian-force-account-id"] == "true"

    def test_no_force_account_id_header_on_v2(self, make_client, tmp_path):
        client, handler = make_client((200, "data"))

        client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert "x-atlassian-force-account-id" not in handler.requests[0].headers

    def test_not_found_body_not_written(self, make_client, tmp_path):
        client, _ = make_client((404, '{"errorMessages":["gone"]}'))

        with pytest.raises(JiraNotFoundError) as exc_info:
            client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert exc_info.value.body == '{"errorMessages":["gone"]}'
        assert (tmp_path / "report.pdf").read_bytes() == b""

    def test_missing_out_dir(self, make_client, tmp_path):
        client, handler = make_client((200, "data"))

        with pytest.raises(JiraIOError):
            client.download(ATTACHMENT_URL, tmp_path / "nope", "report.pdf")

        assert handler.requests == []

    def test_broken_body_with_204_is_benign(self, make_client, tmp_path, broken_response):
        client, _ = make_client(broken_response(204))
        assert client.download(ATTACHMENT_URL, tmp_path, "report.pdf") is True

    def test_broken_body_with_200_fails(self, make_client, tmp_path, broken_response):
        client, _ = make_client(broken_response(200))

        with pytest.raises(JiraNetworkError) as exc_info:
            client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert exc_info.value.status_code == 200

    def test_unreadable_client_certificate(self, make_client, tmp_path):
        client, handler = make_client(ssl_cert=str(tmp_path / "missing.pem"))

        with pytest.raises(JiraNetworkError) as exc_info:
            client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert exc_info.value.status_code == 0
        assert "TLS setup failed" in exc_info.value.message
        assert handler.requests == []


class TestDownloadSinkLifecycle:
    """The destination is closed exactly once on every path."""

    def test_success(self, make_client, tmp_path, fake_sink):
        sink = fake_sink()
        client, _ = make_client((200, "chunk"))

        client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert sink.data == b"chunk"
        assert sink.close_count == 1

    def test_http_error(self, make_client, tmp_path, fake_sink):
        sink = fake_sink()
        client, _ = make_client((500, "boom"))

        with pytest.raises(JiraHTTPError):
            client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert sink.data == b""
        assert sink.close_count == 1

    def test_network_error(self, make_client, tmp_path, fake_sink):
        sink = fake_sink()
        client, _ = make_client(httpx.ConnectError("Connection refused"))

        with pytest.raises(JiraNetworkError):
            client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert sink.close_count == 1

    def test_write_error(self, make_client, tmp_path, fake_sink):
        sink = fake_sink(fail_on_write=True)
        client, _ = make_client((200, "chunk"))

        with pytest.raises(JiraIOError) as exc_info:
            client.download(ATTACHMENT_URL, tmp_path, "report.pdf")

        assert exc_info.value.path == "fake-sink"
        assert sink.close_count == 1
