import os
import tempfile

import pytest

from javafetch import config_utils
from javafetch.exceptions import ConfigurationError

pytestmark = pytest.mark.unit


def test_defaults_without_file_or_env():
    config = config_utils.load_config(environ={})

    assert config["DISTRIBUTOR"] == "adopt"
    assert config["JAVA_PACKAGE"] == "jdk"
    assert config["ARCHITECTURE"] is None
    assert config["TEMP_DIR"] == tempfile.gettempdir()
    assert config["TOOL_CACHE_DIR"].endswith("tool-cache")


def test_default_file_location_is_read():
    with open(config_utils.CONFIG_FILE, "w", encoding="utf-8") as f:
        f.write("DISTRIBUTOR: zulu\njava_package: jre\n")

    config = config_utils.load_config(environ={})

    assert config["DISTRIBUTOR"] == "zulu"
    assert config["JAVA_PACKAGE"] == "jre"


def test_explicit_file_and_unknown_keys(tmp_path, mocker):
    config_file = tmp_path / "custom.yaml"
    config_file.write_text(
        "TOOL_CACHE_DIR: ~/toolcache\nARCHITECTURE: aarch64\nFAVOURITE_COLOUR: blue\n"
    )
    warning = mocker.patch("javafetch.config_utils.logger.warning")

    config = config_utils.load_config(str(config_file), environ={})

    assert config["TOOL_CACHE_DIR"] == os.path.expanduser("~/toolcache")
    assert config["ARCHITECTURE"] == "aarch64"
    assert "FAVOURITE_COLOUR" not in config
    warning.assert_called_once()


def test_environment_overrides_file(tmp_path):
    config_file = tmp_path / "custom.yaml"
    config_file.write_text("TOOL_CACHE_DIR: /from/file\nTEMP_DIR: /from/file/tmp\n")

    config = config_utils.load_config(
        str(config_file),
        environ={"RUNNER_TOOL_CACHE": "/runner/cache", "RUNNER_TEMP": "/runner/tmp"},
    )

    assert config["TOOL_CACHE_DIR"] == "/runner/cache"
    assert config["TEMP_DIR"] == "/runner/tmp"


def test_javafetch_variables_win_over_runner_variables():
    config = config_utils.load_config(
        environ={
            "RUNNER_TOOL_CACHE": "/runner/cache",
            "JAVAFETCH_TOOL_CACHE": "/own/cache",
        }
    )

    assert config["TOOL_CACHE_DIR"] == "/own/cache"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        config_utils.load_config(str(tmp_path / "missing.yaml"), environ={})


def test_invalid_yaml(tmp_path):
    config_file = tmp_path / "bad.yaml"
    config_file.write_text("DISTRIBUTOR: [unclosed\n")

    with pytest.raises(ConfigurationError, match="Failed to load"):
        config_utils.read_config_file(str(config_file))


def test_non_mapping_yaml(tmp_path):
    config_file = tmp_path / "list.yaml"
    config_file.write_text("- adopt\n- zulu\n")

    with pytest.raises(ConfigurationError, match="mapping"):
        config_utils.read_config_file(str(config_file))


def test_empty_file_is_empty_mapping(tmp_path):
    config_file = tmp_path / "empty.yaml"
    config_file.write_text("")

    assert config_utils.read_config_file(str(config_file)) == {}
