"""Tests for apireadme.orchestrator."""

from __future__ import annotations

import pytest

from apireadme.extractor import SourceSyntaxError
from apireadme.orchestrator import Orchestrator
from apireadme.postproc.markers import TOKEN_END, TOKEN_START
from tests._fixtures.project_builder import ProjectBuilder

MATH = """
/**
 * Adds two numbers.
 *
 * @param a - first
 * @param b - second
 */
export function add(a: number, b: number): number {
  return a + b;
}

/** Options for math helpers. */
export interface MathOptions {
  precise: boolean;
}

export function undocumented(): void {}
"""

FORMAT = """
/** Formats a value. */
export function format(value: unknown, ...rest: unknown[]): string {
  return String(value);
}

/** Output style. */
export type Style = "short" | "long";
"""

EXPECTED_REGION = "\n".join(
    [
        TOKEN_START,
        "",
        "| Category | Type Name   | Description               |",
        "| -------- | ----------- | ------------------------- |",
        "| format   | Style       | Output style.             |",
        "| math     | MathOptions | Options for math helpers. |",
        "",
        "| Category | Function                 | Description       |",
        "| -------- | ------------------------ | ----------------- |",
        "| format   | `format(value, ...rest)` | Formats a value.  |",
        "| math     | `add(a, b)`              | Adds two numbers. |",
        "",
        TOKEN_END,
    ]
)


@pytest.fixture
def project(project_builder: ProjectBuilder) -> ProjectBuilder:
    project_builder.write({"src/math.ts": MATH, "src/format.ts": FORMAT})
    project_builder.tsconfig(["src"])
    project_builder.readme("\nold content\n")
    return project_builder


def test_run_update_rewrites_region(project: ProjectBuilder) -> None:
    outcome = Orchestrator().run_update(project.path())

    assert outcome.changed is True
    assert outcome.written is True
    assert "+| math     | MathOptions | Options for math helpers. |" in outcome.diff
    readme = project.read()
    assert readme == f"# package\n\nIntro.\n\n{EXPECTED_REGION}\n\n## License\n"


def test_run_update_reports_undocumented_exports(project: ProjectBuilder) -> None:
    outcome = Orchestrator().run_update(project.path())

    assert [str(diagnostic) for diagnostic in outcome.diagnostics] == [
        "WARN src/math.ts: `undocumented()` is exported but undocumented"
    ]
    assert "undocumented" not in project.read()


def test_run_update_is_idempotent(project: ProjectBuilder) -> None:
    orchestrator = Orchestrator()
    orchestrator.run_update(project.path())
    first = project.read()

    second = orchestrator.run_update(project.path())

    assert second.changed is False
    assert second.written is False
    assert second.diff == ""
    assert project.read() == first


def test_dry_run_does_not_write(project: ProjectBuilder) -> None:
    before = project.read()

    outcome = Orchestrator().run_update(project.path(), dry_run=True)

    assert outcome.changed is True
    assert outcome.written is False
    assert "-old content" in outcome.diff
    assert project.read() == before


def test_empty_catalog_clears_region(project_builder: ProjectBuilder) -> None:
    project_builder.readme("\nstale\n")

    outcome = Orchestrator().run_update(project_builder.path())

    assert outcome.written is True
    assert f"{TOKEN_START}\n\n\n\n{TOKEN_END}" in project_builder.read()
    assert Orchestrator().run_update(project_builder.path()).changed is False


def test_missing_markers_is_a_silent_no_op(project: ProjectBuilder) -> None:
    readme = project.path() / "README.md"
    readme.write_text("# package\n\nNo API section.\n", encoding="utf-8")

    outcome = Orchestrator().run_update(project.path())

    assert outcome.changed is False
    assert readme.read_text(encoding="utf-8") == "# package\n\nNo API section.\n"


def test_syntax_error_aborts_without_writing(project: ProjectBuilder) -> None:
    project.write({"src/broken.ts": "export function broken(a: number {\n"})
    before = project.read()

    with pytest.raises(SourceSyntaxError):
        Orchestrator().run_update(project.path())

    assert project.read() == before


def test_config_include_overrides_tsconfig(project: ProjectBuilder) -> None:
    project.write({".apireadme.yml": "include:\n  - src/format.ts\n"})

    Orchestrator().run_update(project.path())

    readme = project.read()
    assert "`format(value, ...rest)`" in readme
    assert "MathOptions" not in readme


def test_line_endings_outside_region_are_preserved(project: ProjectBuilder) -> None:
    readme = project.path() / "README.md"
    readme.write_bytes(f"# package\r\n\r\n{TOKEN_START}\r\nold\r\n{TOKEN_END}\r\nEnd\r\n".encode("utf-8"))

    Orchestrator().run_update(project.path())

    content = readme.read_bytes().decode("utf-8")
    assert content.startswith("# package\r\n\r\n" + TOKEN_START + "\n\n| Category")
    assert content.endswith(TOKEN_END + "\r\nEnd\r\n")


def test_missing_readme_raises(project_builder: ProjectBuilder) -> None:
    with pytest.raises(FileNotFoundError):
        Orchestrator().run_update(project_builder.path())
