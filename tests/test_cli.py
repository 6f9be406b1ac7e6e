import io
import json
import sys
from unittest.mock import patch

import pytest
import yaml

from gokazi.cli import build_parser, main


class FakeProcess:
    def __init__(self, pid, name):
        self.pid = pid
        self._name = name
        self.killed = False

    def name(self):
        return self._name

    def exe(self):
        return "/usr/bin/" + self._name

    def cwd(self):
        return "/"

    def cmdline(self):
        return [self._name]

    def is_running(self):
        return not self.killed

    def kill(self):
        self.killed = True

    def wait(self, timeout=None):
        return 0


CONFIG = """\
version: "1.0"
tasks:
  web:
    name: app
    description: web server
    args: [serve]
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "gokazi.yaml"
    path.write_text(CONFIG)
    return str(path)


def test_version(capsys):
    assert main(["version"]) == 0
    assert capsys.readouterr().out.strip() == "latest"


def test_config_prints_yaml(capsys, config_file):
    assert main(["config", "-c", config_file]) == 0
    printed = yaml.safe_load(capsys.readouterr().out)
    assert printed["version"] == "1.0"
    assert printed["tasks"]["web"]["name"] == "app"
    assert printed["tasks"]["web"]["args"] == ["serve"]


def test_config_from_stdin(capsys, monkeypatch):
    monkeypatch.setattr(sys, "stdin", io.StringIO(CONFIG))
    assert main(["config", "-c", "-"]) == 0
    printed = yaml.safe_load(capsys.readouterr().out)
    assert printed["tasks"]["web"]["description"] == "web server"


def test_config_merges_comma_separated_sources(capsys, tmp_path, config_file):
    extra = tmp_path / "extra.yaml"
    extra.write_text("tasks:\n  db:\n    name: db\n")
    assert main(["config", "-c", f"{config_file},{extra}"]) == 0
    printed = yaml.safe_load(capsys.readouterr().out)
    assert set(printed["tasks"]) == {"web", "db"}


def test_invalid_version_fails(capsys, tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text('version: "0.1"\n')
    assert main(["config", "-c", str(path)]) == 1
    err = capsys.readouterr().err
    assert "Ups, something went wrong" in err
    assert "missing or invalid config version" in err


def test_debug_logs_sources(capsys, config_file):
    assert main(["--debug", "config", "-c", config_file]) == 0
    assert "reading config from file: " + config_file in capsys.readouterr().err


def test_list_prints_json(capsys, config_file):
    processes = [FakeProcess(21, "app")]
    with patch("gokazi.manager.psutil.process_iter", return_value=processes):
        assert main(["list", "-c", config_file]) == 0
    printed = json.loads(capsys.readouterr().out)
    assert printed["web"]["running"] is True
    assert printed["web"]["pid"] == 21
    assert printed["web"]["config"]["name"] == "app"


def test_stop_kills_task(config_file):
    process = FakeProcess(21, "app")
    with patch("gokazi.manager.psutil.process_iter", return_value=[process]):
        assert main(["stop", "-c", config_file, "web"]) == 0
    assert process.killed is True


def test_stop_unknown_task_fails(capsys, config_file):
    with patch("gokazi.manager.psutil.process_iter", return_value=[]):
        assert main(["stop", "-c", config_file, "nope"]) == 1
    assert "task not found" in capsys.readouterr().err


def test_stop_requires_an_id():
    with pytest.raises(SystemExit) as info:
        build_parser().parse_args(["stop"])
    assert info.value.code == 2


def test_parser_defaults():
    args = build_parser().parse_args(["list"])
    assert args.debug is False
    assert args.config is None
    assert args.command == "list"