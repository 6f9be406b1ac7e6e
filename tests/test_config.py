import pytest

from gokazi.config import VERSION, Config, Task


def test_version_constant():
    assert VERSION == "1.0"
    assert Config(version=VERSION).version == "1.0"


def test_expand_path_uses_environment(monkeypatch):
    monkeypatch.setenv("GOKAZI_TEST_BASE", "/opt/tools")
    task = Task(name="x", path="$GOKAZI_TEST_BASE/bin")
    assert task.expand_path() == "/opt/tools/bin"
    braced = Task(name="x", path="${GOKAZI_TEST_BASE}/bin")
    assert braced.expand_path() == task.expand_path()


def test_expand_path_cleans():
    assert Task(path="/a/b/../c/").expand_path() == "/a/c"
    assert Task(path="//srv").expand_path() == "/srv"


def test_empty_fields_expand_to_empty():
    task = Task(name="x")
    assert task.expand_path() == ""
    assert task.expand_cwd() == ""
    assert task.expand_args() == []


def test_unset_variable_expands_to_empty(monkeypatch):
    monkeypatch.delenv("GOKAZI_TEST_UNSET", raising=False)
    task = Task(args=["x$GOKAZI_TEST_UNSET", "${GOKAZI_TEST_UNSET}y"])
    assert task.expand_args() == ["x", "y"]


def test_lone_dollar_is_kept():
    assert Task(args=["a$ b"]).expand_args() == ["a$ b"]


def test_expand_cwd(monkeypatch):
    monkeypatch.setenv("GOKAZI_TEST_DIR", "/work")
    assert Task(cwd="$GOKAZI_TEST_DIR/./project").expand_cwd() == "/work/project"


def test_match_name_only():
    task = Task(name="node")
    assert task.match("node", "/any", "/where", ["x"])
    assert not task.match("python", "/any", "/where", ["x"])


def test_match_path_and_cwd():
    task = Task(name="node", path="/usr/bin", cwd="/srv/app")
    assert task.match("node", "/usr/bin", "/srv/app", [])
    assert not task.match("node", "/usr/local/bin", "/srv/app", [])
    assert not task.match("node", "/usr/bin", "/tmp", [])


def test_match_args_must_all_be_present():
    task = Task(name="node", args=["server.js", "--port"])
    assert task.match("node", "", "", ["--port", "server.js", "--extra"])
    assert not task.match("node", "", "", ["server.js"])


def test_str_full():
    task = Task(name="node", path="/usr/bin", args=["a", "b"], cwd="/tmp")
    assert str(task) == "/usr/bin/node a b in /tmp"


def test_str_name_only():
    assert str(Task(name="node")) == "node"


def test_task_dict_round_trip():
    task = Task(name="n", description="d", path="/p", cwd="/c", args=["1", "2"])
    data = task.to_dict()
    assert set(data) == {"name", "description", "path", "cwd", "args"}
    assert Task(**data) == task


def test_config_to_dict():
    task = Task(name="n", args=["a"])
    cfg = Config(version=VERSION, tasks={"web": task})
    data = cfg.to_dict()
    assert data["version"] == VERSION
    assert data["tasks"]["web"] == task.to_dict()


@pytest.mark.parametrize("args", [[], ["a"], ["a", "b", "c"]])
def test_to_dict_args_copy(args):
    task = Task(name="n", args=args)
    data = task.to_dict()
    data["args"].append("extra")
    assert task.args == args