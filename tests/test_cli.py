import sys

import pytest

from helmify.cli import main, print_version, read_flags

MANIFEST = """apiVersion: v1
kind: ConfigMap
metadata:
  name: app-config
data:
  key: value
"""


class _Tty:
    def isatty(self):
        return True

    def read(self):
        return ""


def test_defaults():
    config = read_flags([])
    assert config.chart_name == ""
    assert config.cert_manager_version == "v1.12.2"
    assert config.cert_manager_install_crd is True
    assert config.files == []
    assert config.crd is False


def test_files_recursive_and_chart_path():
    config = read_flags(["-f", "a", "-f", "b", "-r", "deploy/charts/mychart"])
    assert config.files == ["a", "b"]
    assert config.files_recursively is True
    assert config.chart_name == "mychart"
    assert config.chart_dir == "deploy/charts"


def test_plain_chart_name_uses_current_dir():
    config = read_flags(["mychart"])
    assert config.chart_name == "mychart"
    assert config.chart_dir == "."


def test_bool_flag_with_explicit_value_and_double_dash():
    config = read_flags(["-cert-manager-install-crd=false", "--crd-dir", "-preserve-ns", "-v", "-vv"])
    assert config.cert_manager_install_crd is False
    assert config.crd is True
    assert config.preserve_ns is True
    assert config.verbose is True
    assert config.very_verbose is True


def test_string_flag_with_equals():
    config = read_flags(["-cert-manager-version=v1.0.0", "-f=dir"])
    assert config.cert_manager_version == "v1.0.0"
    assert config.files == ["dir"]


def test_flags_after_chart_name_are_not_parsed():
    config = read_flags(["mychart", "-r"])
    assert config.files_recursively is False
    assert config.chart_name == "mychart"


@pytest.mark.parametrize(
    "argv",
    [["-unknown"], ["-f"], ["-r=maybe"], ["---x"]],
)
def test_bad_flags_exit_with_status_two(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        read_flags(argv)
    assert exc.value.code == 2
    assert "Usage of helmify:" in capsys.readouterr().err


def test_help_prints_usage(capsys):
    with pytest.raises(SystemExit) as exc:
        read_flags(["-help"])
    assert exc.value.code == 0
    out = capsys.readouterr().out
    assert out.startswith("Helmify parses kubernetes resources from std.in")
    assert "-cert-manager-version string" in out
    assert '(default "v1.12.2")' in out


def test_version_flag(capsys):
    with pytest.raises(SystemExit) as exc:
        read_flags(["-version"])
    assert exc.value.code == 0
    assert "Version:    development" in capsys.readouterr().out


def test_print_version(capsys):
    print_version()
    out = capsys.readouterr().out
    assert out.splitlines() == ["Version:    development", "Build Time: not set", "Git Commit: not set"]


def test_main_without_input_fails(monkeypatch, tmp_path):
    monkeypatch.setattr(sys, "stdin", _Tty())
    assert main([str(tmp_path / "mychart")]) == 1
    assert not (tmp_path / "mychart").exists()


def test_main_from_file_creates_chart(tmp_path):
    manifest = tmp_path / "app.yaml"
    manifest.write_text(MANIFEST)
    assert main(["-f", str(manifest), str(tmp_path / "mychart")]) == 0
    chart = tmp_path / "mychart" / "Chart.yaml"
    assert "name: mychart" in chart.read_text()
    assert (tmp_path / "mychart" / "values.yaml").exists()


def test_main_invalid_chart_name_fails(tmp_path):
    manifest = tmp_path / "app.yaml"
    manifest.write_text(MANIFEST)
    assert main(["-f", str(manifest), str(tmp_path / "my_chart123")]) == 1