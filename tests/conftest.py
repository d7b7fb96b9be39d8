import io
import tarfile
import time
import zipfile
from pathlib import Path
from unittest.mock import MagicMock

import platformdirs
import pytest
import requests

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock fetch_json or pass a mocked session."
)


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    """Register the markers used across the suite."""
    config.addinivalue_line("markers", "unit: fast isolated unit test")
    config.addinivalue_line(
        "markers", "core_install: covers the resolve/download/cache pipeline"
    )


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point every platformdirs location and runner variable at a temporary tree.

    Clears the CI runner variables so tests never append to a real GITHUB_ENV file or use
    a real tool cache, and patches javafetch.config_utils.CONFIG_FILE into the temp config dir.
    """
    base = tmp_path_factory.mktemp("javafetch")
    cache_dir = base / "cache"
    config_dir = base / "config"
    log_dir = base / "log"

    for path in (cache_dir, config_dir, log_dir):
        path.mkdir(parents=True, exist_ok=True)

    for var in (
        "GITHUB_ENV",
        "GITHUB_PATH",
        "GITHUB_OUTPUT",
        "RUNNER_TOOL_CACHE",
        "RUNNER_TEMP",
        "JAVAFETCH_TOOL_CACHE",
        "JAVAFETCH_TEMP",
    ):
        monkeypatch.delenv(var, raising=False)

    monkeypatch.setattr(
        platformdirs, "user_cache_dir", lambda *_args, **_kwargs: str(cache_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    monkeypatch.setattr(
        platformdirs, "user_log_dir", lambda *_args, **_kwargs: str(log_dir)
    )

    import javafetch.config_utils as config_utils

    monkeypatch.setattr(config_utils, "CONFIG_DIR", str(config_dir))
    monkeypatch.setattr(
        config_utils,
        "CONFIG_FILE",
        str(Path(config_dir) / "javafetch.yaml"),
    )


def pytest_runtest_setup():
    """Prevent real network requests during tests by replacing HTTP entry points."""
    requests.get = _block_network
    requests.post = _block_network
    requests.head = _block_network
    requests.Session.request = _block_network


@pytest.fixture(autouse=True)
def _mock_time_sleep(monkeypatch):
    """Make time.sleep instant for all tests to prevent retry delays."""
    monkeypatch.setattr(time, "sleep", lambda *_args, **_kwargs: None)


# =============================================================================
# Shared helpers
# =============================================================================


def make_jdk_tarball(path: Path, top_dir: str = "jdk-11.0.2+9") -> Path:
    """Write a small tar.gz laid out like a vendor JDK archive."""
    with tarfile.open(path, "w:gz") as tar:
        for name, content in (
            (f"{top_dir}/bin/java", b"#!/bin/sh\necho java\n"),
            (f"{top_dir}/release", b'JAVA_VERSION="11.0.2"\n'),
        ):
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(content))
    return path


def make_jdk_zip(path: Path, top_dir: str = "jdk-11.0.2+9") -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr(f"{top_dir}/bin/java.exe", b"MZ")
        zf.writestr(f"{top_dir}/release", b'JAVA_VERSION="11.0.2"\n')
    return path


def mock_download_response(payload: bytes, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.iter_content.return_value = [payload]
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} error"
        )
    return response


def populate_tool_cache(root: Path, tool_name: str, version: str, arch: str) -> Path:
    """Create a completed tool cache entry with a bin directory."""
    entry = root / tool_name / version / arch
    (entry / "bin").mkdir(parents=True)
    (root / tool_name / version / f"{arch}.complete").write_text("")
    return entry


@pytest.fixture
def tool_cache_root(tmp_path) -> Path:
    root = tmp_path / "tool-cache"
    root.mkdir()
    return root


@pytest.fixture
def work_root(tmp_path) -> str:
    path = tmp_path / "work"
    path.mkdir()
    return str(path)


@pytest.fixture
def jdk_tarball():
    return make_jdk_tarball


@pytest.fixture
def jdk_zip():
    return make_jdk_zip


@pytest.fixture
def download_response():
    return mock_download_response


@pytest.fixture
def cached_install():
    return populate_tool_cache
