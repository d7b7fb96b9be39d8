import os

import pytest

from javafetch.environment import (
    add_path,
    apply_installation,
    export_variable,
    set_output,
)
from javafetch.install.interfaces import InstallationResult

pytestmark = pytest.mark.unit


def _read_commands(path):
    """Parse `name<<delim` blocks written to a runner command file."""
    lines = path.read_text(encoding="utf-8").splitlines()
    values = {}
    i = 0
    while i < len(lines):
        name, delimiter = lines[i].split("<<", 1)
        end = lines.index(delimiter, i + 1)
        values[name] = "\n".join(lines[i + 1 : end])
        i = end + 1
    return values


def test_export_variable_without_runner_files():
    environ = {}

    export_variable("JAVA_HOME", "/opt/java", environ)

    assert environ == {"JAVA_HOME": "/opt/java"}


def test_export_variable_appends_to_env_file(tmp_path):
    env_file = tmp_path / "env"
    environ = {"GITHUB_ENV": str(env_file)}

    export_variable("JAVA_HOME", "/opt/java", environ)
    export_variable("MULTI", "a\nb", environ)

    assert _read_commands(env_file) == {"JAVA_HOME": "/opt/java", "MULTI": "a\nb"}
    assert environ["JAVA_HOME"] == "/opt/java"


def test_add_path_prepends():
    environ = {"PATH": "/usr/bin"}

    add_path("/opt/java/bin", environ)

    assert environ["PATH"] == f"/opt/java/bin{os.pathsep}/usr/bin"


def test_add_path_writes_path_file(tmp_path):
    path_file = tmp_path / "path"
    environ = {"GITHUB_PATH": str(path_file)}

    add_path("/opt/java/bin", environ)

    assert path_file.read_text(encoding="utf-8") == "/opt/java/bin\n"
    assert environ["PATH"] == "/opt/java/bin"


def test_set_output_without_output_file_logs(mocker):
    info = mocker.patch("javafetch.environment.logger.info")

    set_output("version", "11.0.2", {})

    info.assert_called_once_with("version=11.0.2")


def test_apply_installation(tmp_path):
    env_file = tmp_path / "env"
    path_file = tmp_path / "path"
    output_file = tmp_path / "output"
    environ = {
        "GITHUB_ENV": str(env_file),
        "GITHUB_PATH": str(path_file),
        "GITHUB_OUTPUT": str(output_file),
        "PATH": "/usr/bin",
    }
    install_path = str(tmp_path / "Java_AdoptOpenJDK_jdk" / "11.0.2" / "x64")

    apply_installation(InstallationResult(install_path, "11.0.2"), environ)

    bin_dir = os.path.join(install_path, "bin")
    assert environ["JAVA_HOME"] == install_path
    assert environ["PATH"].split(os.pathsep)[0] == bin_dir
    assert _read_commands(env_file) == {"JAVA_HOME": install_path}
    assert path_file.read_text(encoding="utf-8") == f"{bin_dir}\n"
    assert _read_commands(output_file) == {"path": install_path, "version": "11.0.2"}
