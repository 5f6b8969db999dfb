# -*- coding: utf-8 -
#
# This file is part of powd released under the MIT license.
# See the NOTICE for more information.

import json
import os

import pytest

from powd import __version__
from powd.app import Application, run


@pytest.fixture
def app_env(clean_env, tmp_path):
    host_root = tmp_path / "Hosts"
    host_root.mkdir()
    clean_env.setenv("POW_HOST_ROOT", str(host_root))
    clean_env.setenv("POW_LOG_ROOT", str(tmp_path / "logs"))
    return host_root


def no_config(tmp_path):
    return ["--config", str(tmp_path / "missing")]


def test_print_config(app_env, tmp_path, capsys):
    status = Application().run(no_config(tmp_path) + ["--print-config"])
    out, _ = capsys.readouterr()
    assert status == 0
    assert "POW_DOMAINS='dev'" in out.splitlines()
    assert "POW_HOST_ROOT='%s'" % app_env in out.splitlines()


def test_print_config_is_default(app_env, tmp_path, capsys):
    assert Application().run(no_config(tmp_path)) == 0
    out, _ = capsys.readouterr()
    assert "POW_WORKERS='2'" in out


def test_json(app_env, tmp_path, capsys):
    assert Application().run(no_config(tmp_path) + ["--json"]) == 0
    out, _ = capsys.readouterr()
    data = json.loads(out)
    assert data["domains"] == ["dev"]
    assert data["host_root"] == str(app_env)


def test_user_config_is_applied(app_env, tmp_path, capsys):
    script = tmp_path / "powconfig"
    script.write_text("export POW_DOMAINS=test,dev\n")
    assert Application().run(["--config", str(script), "--json"]) == 0
    out, _ = capsys.readouterr()
    assert json.loads(out)["domains"] == ["test", "dev"]


def test_lookup(app_env, tmp_path, capsys):
    (app_env / "myapp").mkdir()
    status = Application().run(no_config(tmp_path) + ["--lookup", "www.myapp.dev"])
    out, _ = capsys.readouterr()
    assert status == 0
    assert out.strip() == "dev %s" % os.path.join(str(app_env), "myapp")


def test_lookup_no_match(app_env, tmp_path, capsys):
    status = Application().run(no_config(tmp_path) + ["--lookup", "nothing.dev"])
    _, err = capsys.readouterr()
    assert status == 1
    assert "no match for nothing.dev" in err


def test_config_error(app_env, tmp_path, capsys):
    script = tmp_path / "powconfig"
    script.write_text("export POW_WORKERS=lots\n")
    status = Application().run(["--config", str(script)])
    _, err = capsys.readouterr()
    assert status == 1
    assert err.startswith("Error: Invalid value for workers")


def test_config_load_error(app_env, tmp_path, capsys):
    script = tmp_path / "powconfig"
    script.write_text("exit 1\n")
    status = Application().run(["--config", str(script)])
    _, err = capsys.readouterr()
    assert status == 1
    assert "Failed to load user configuration" in err


def test_version(capsys):
    with pytest.raises(SystemExit):
        Application(prog="powd").run(["--version"])
    out, _ = capsys.readouterr()
    assert __version__ in out


def test_run_exits_with_status(app_env, tmp_path, monkeypatch):
    monkeypatch.setattr("sys.argv", ["powd"] + no_config(tmp_path))
    with pytest.raises(SystemExit) as exc_info:
        run()
    assert exc_info.value.code == 0
