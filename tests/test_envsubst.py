"""Tests for the envsubst command line tool."""

import pytest
from click.testing import CliRunner
from envsubst.config.settings import appsettings
from envsubst.envsubst import (
    __version__,
    main,
    resolver_build,
    template_process,
)
from envsubst.models.dataModel import Restrictions


@pytest.fixture
def runner():
    return CliRunner()


def test_version_output(runner):
    result = runner.invoke(main, ["-V"])
    assert result.exit_code == 0
    assert "envsubst" in result.output.lower()
    assert __version__ in result.output


def test_help_output(runner):
    result = runner.invoke(main, ["--help"])
    assert result.exit_code == 0
    assert "--no-unset" in result.output


def test_expand_stdin_with_var(runner):
    result = runner.invoke(
        main, ["--var", "NAME=World"], input="Hello ${NAME}!"
    )
    assert result.exit_code == 0
    assert result.output == "Hello World!"


def test_var_overrides_environment(runner, monkeypatch):
    monkeypatch.setenv("ENVSUBST_CLI_NAME", "env")
    result = runner.invoke(
        main, ["--var", "ENVSUBST_CLI_NAME=cli"], input="${ENVSUBST_CLI_NAME}"
    )
    assert result.output == "cli"


def test_reads_environment(runner, monkeypatch):
    monkeypatch.setenv("ENVSUBST_CLI_NAME", "env")
    result = runner.invoke(main, [], input="${ENVSUBST_CLI_NAME^^}")
    assert result.exit_code == 0
    assert result.output == "ENV"


def test_no_environ(runner, monkeypatch):
    monkeypatch.setenv("ENVSUBST_CLI_NAME", "env")
    result = runner.invoke(
        main, ["--no-environ"], input="${ENVSUBST_CLI_NAME:-none}"
    )
    assert result.output == "none"


def test_var_value_may_contain_equals(runner):
    result = runner.invoke(
        main, ["--no-environ", "--var", "OPTS=a=b"], input="${OPTS}"
    )
    assert result.output == "a=b"


def test_malformed_var_is_usage_error(runner):
    result = runner.invoke(main, ["--var", "novalue"], input="")
    assert result.exit_code == 2


def test_parse_error_exits_nonzero(runner):
    result = runner.invoke(main, [], input="${VAR")
    assert result.exit_code == 1
    assert "missing closing brace" in result.output


def test_no_unset_flag(runner):
    result = runner.invoke(
        main, ["--no-environ", "--no-unset"], input="${ENVSUBST_CLI_UNSET}"
    )
    assert result.exit_code == 1
    assert "strict mode" in result.output


def test_no_unset_from_settings(runner, monkeypatch):
    monkeypatch.setattr(appsettings, "no_unset", True)
    result = runner.invoke(main, ["--no-environ"], input="${ENVSUBST_CLI_UNSET}")
    assert result.exit_code == 1


def test_input_and_output_files(runner, tmp_path):
    source = tmp_path / "app.tpl"
    target = tmp_path / "app.out"
    source.write_text("replicas: ${REPLICAS:-1}\n")
    result = runner.invoke(
        main,
        ["--no-environ", "-i", str(source), "-o", str(target), "--var", "REPLICAS=3"],
    )
    assert result.exit_code == 0
    assert target.read_text() == "replicas: 3\n"


def test_input_size_limit(runner, monkeypatch):
    monkeypatch.setattr(appsettings, "max_input_size", 4)
    result = runner.invoke(main, ["--no-environ"], input="too long")
    assert result.exit_code == 1
    assert "maximum size" in result.output


def test_template_process_success():
    result = template_process(
        "${A:-x}", resolver_build({}, use_environ=False), Restrictions()
    )
    assert result.success
    assert result.text == "x"
    assert result.exit_code == 0


def test_template_process_failure():
    result = template_process(
        "${A:?needed}", resolver_build({}, use_environ=False), Restrictions()
    )
    assert not result.success
    assert "needed" in result.error
    assert result.exit_code == 1
