import os
from unittest.mock import MagicMock

import pytest
import requests

from javafetch import utils
from javafetch.exceptions import DownloadOrExtractFailure, HTTPError

pytestmark = pytest.mark.unit


def _json_response(payload, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    return response


class TestFetchJson:
    def test_returns_decoded_body(self):
        session = MagicMock()
        response = _json_response({"available_releases": [8, 11]})
        session.get.return_value = response

        data = utils.fetch_json(session, "https://api.example.com/x", params={"a": 1})

        assert data == {"available_releases": [8, 11]}
        _, kwargs = session.get.call_args
        assert kwargs["params"] == {"a": 1}
        assert kwargs["timeout"] == 30
        response.close.assert_called_once()

    def test_non_2xx_raises_with_status(self):
        session = MagicMock()
        session.get.return_value = _json_response(None, status_code=404)

        with pytest.raises(HTTPError) as exc_info:
            utils.fetch_json(session, "https://api.example.com/x")

        assert exc_info.value.status_code == 404
        assert exc_info.value.endpoint == "https://api.example.com/x"

    def test_transport_error_has_no_status(self):
        session = MagicMock()
        session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(HTTPError) as exc_info:
            utils.fetch_json(session, "https://api.example.com/x")

        assert exc_info.value.status_code is None
        assert "refused" in str(exc_info.value)

    def test_invalid_json(self):
        session = MagicMock()
        response = _json_response(None)
        response.json.side_effect = ValueError("Expecting value")
        session.get.return_value = response

        with pytest.raises(HTTPError, match="Invalid JSON"):
            utils.fetch_json(session, "https://api.example.com/x")


class TestDownloadFile:
    def test_streams_to_target(self, tmp_path, download_response):
        session = MagicMock()
        session.get.return_value = download_response(b"archive-bytes")

        path = utils.download_file(
            session, "https://cdn.example.com/jdk/OpenJDK11.tar.gz?x=1", str(tmp_path)
        )

        assert path == str(tmp_path / "OpenJDK11.tar.gz")
        assert (tmp_path / "OpenJDK11.tar.gz").read_bytes() == b"archive-bytes"
        assert os.listdir(tmp_path) == ["OpenJDK11.tar.gz"]

    def test_http_error_leaves_nothing_behind(self, tmp_path, download_response):
        session = MagicMock()
        session.get.return_value = download_response(b"", status_code=503)

        with pytest.raises(DownloadOrExtractFailure) as exc_info:
            utils.download_file(session, "https://cdn.example.com/jdk.zip", str(tmp_path))

        assert exc_info.value.url == "https://cdn.example.com/jdk.zip"
        assert os.listdir(tmp_path) == []

    def test_interrupted_body_removes_temp_file(self, tmp_path):
        session = MagicMock()
        response = MagicMock()

        def chunks(chunk_size):
            yield b"partial"
            raise requests.exceptions.ChunkedEncodingError("connection reset")

        response.iter_content.side_effect = chunks
        session.get.return_value = response

        with pytest.raises(DownloadOrExtractFailure, match="Network error"):
            utils.download_file(session, "https://cdn.example.com/jdk.zip", str(tmp_path))

        assert os.listdir(tmp_path) == []


def test_filename_from_url():
    assert utils.filename_from_url("https://x.example.com/a/b/jdk.tar.gz") == "jdk.tar.gz"
    assert utils.filename_from_url("https://x.example.com/") == "archive"


def test_create_session_sets_user_agent_and_retries():
    session = utils.create_session()

    assert session.headers["User-Agent"].startswith("javafetch/")
    adapter = session.get_adapter("https://api.adoptopenjdk.net")
    assert adapter.max_retries.total == 3
    assert 404 not in adapter.max_retries.status_forcelist
