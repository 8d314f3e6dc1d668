"""CLI parser and command behaviour tests."""

from __future__ import annotations

import pytest

from apireadme import cli
from apireadme.cli import _build_parser
from tests._fixtures.project_builder import ProjectBuilder

SOURCE = """
/** Greets someone. */
export function greet(name: string): string {
  return `hello ${name}`;
}
"""


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli, "configure_logging", lambda **kwargs: None)


@pytest.fixture
def project(project_builder: ProjectBuilder) -> ProjectBuilder:
    project_builder.write({"src/greet.ts": SOURCE})
    project_builder.tsconfig(["src"])
    project_builder.readme()
    return project_builder


def test_cli_accepts_verbose_before_and_after_command() -> None:
    parser = _build_parser()
    assert parser.parse_args(["--verbose", "update"]).verbose is True
    assert parser.parse_args(["update", "--verbose"]).verbose is True


def test_cli_defaults_to_current_directory() -> None:
    args = _build_parser().parse_args(["update"])
    assert args.path == "."
    assert args.dry_run is False
    assert args.check is False


def test_cli_rejects_dry_run_with_check() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args(["update", "--dry-run", "--check"])


def test_update_writes_readme(project: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["update", str(project.path())])

    assert "README updated at" in capsys.readouterr().out
    assert "`greet(name)`" in project.read()

    cli.main(["update", str(project.path())])
    assert "README already up to date" in capsys.readouterr().out


def test_check_fails_when_out_of_date(project: ProjectBuilder) -> None:
    before = project.read()

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["update", "--check", str(project.path())])

    assert excinfo.value.code == 1
    assert project.read() == before


def test_dry_run_prints_diff(project: ProjectBuilder, capsys: pytest.CaptureFixture[str]) -> None:
    cli.main(["update", "--dry-run", str(project.path())])

    out = capsys.readouterr().out
    assert "README changes (dry-run):" in out
    assert "+| greet    | `greet(name)` | Greets someone. |" in out


def test_syntax_error_exits_with_status_one(project: ProjectBuilder) -> None:
    project.write({"src/bad.ts": "export function (\n"})

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["update", str(project.path())])

    assert excinfo.value.code == 1
