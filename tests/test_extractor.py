"""Tests for the tree-sitter declaration extractor."""

from __future__ import annotations

from pathlib import Path

import pytest

from apireadme.extractor import (
    DeclarationExtractor,
    SourceSyntaxError,
    UnsupportedParameterError,
)
from apireadme.models import ExportKind, SourceFile


def _source(name: str = "src/math.ts") -> SourceFile:
    return SourceFile(path=Path(name), display_path=name, category=Path(name).stem)


def _extract(text: str, name: str = "src/math.ts"):  # type: ignore[no-untyped-def]
    return DeclarationExtractor().extract(_source(name), text)


def test_extracts_functions_interfaces_and_type_aliases() -> None:
    declarations = _extract(
        """
export function add(a: number, b: number): number {
  return a + b;
}

export interface Options {
  precise: boolean;
}

export type Mode = "fast" | "slow";
"""
    )

    assert [(d.name, d.kind, d.identifier) for d in declarations] == [
        ("add", ExportKind.FUNCTION, "`add(a, b)`"),
        ("Options", ExportKind.TYPE, "Options"),
        ("Mode", ExportKind.TYPE, "Mode"),
    ]
    assert {d.category for d in declarations} == {"math"}
    assert {d.source for d in declarations} == {"src/math.ts"}


def test_ignores_other_statements_and_default_exports() -> None:
    declarations = _extract(
        """
function internal(): void {}

export const value = 1;

export class Widget {}

export enum Color {
  Red,
}

export { internal };

export default function main(): void {}
"""
    )
    assert declarations == []


def test_renders_parameter_shapes() -> None:
    declarations = _extract(
        """
export function f(a: string, [b, c]: string[] = [], ...rest: number[]): void {}

export function g({ x, y }: Point, z?: number, w = 3): void {}

export async function h(...[first]: string[]): Promise<void> {}
"""
    )
    assert [d.identifier for d in declarations] == [
        "`f(a, [], ...rest)`",
        "`g({}, z, w)`",
        "`h(...[])`",
    ]


def test_property_injection_parameter_is_an_error() -> None:
    with pytest.raises(UnsupportedParameterError):
        _extract("export function make(private value: string): void {}\n")


def test_member_expression_parameter_is_an_error() -> None:
    with pytest.raises(UnsupportedParameterError):
        _extract("export function assign(this.value): void {}\n")


def test_syntax_error_is_fatal() -> None:
    with pytest.raises(SourceSyntaxError) as excinfo:
        _extract("export function broken(a: number {\n")
    assert excinfo.value.path == "src/math.ts"
    assert excinfo.value.line >= 1


def test_collects_comments_between_statements() -> None:
    declarations = _extract(
        """
/** Belongs to a. */
function a(): void {}
export function b(): void {}

/**
 * Documented.
 */
// eslint-disable-next-line
export function c(): void {}
"""
    )
    by_name = {d.name: d for d in declarations}
    assert by_name["b"].leading_comments == ()
    assert by_name["c"].leading_comments == (
        "/**\n * Documented.\n */",
        "// eslint-disable-next-line",
    )


def test_tsx_files_use_the_tsx_grammar() -> None:
    declarations = _extract(
        """
/** Renders a badge. */
export function Badge(props: BadgeProps) {
  return <span>{props.label}</span>;
}
""",
        name="src/Badge.tsx",
    )
    assert [d.identifier for d in declarations] == ["`Badge(props)`"]
    assert declarations[0].category == "Badge"


def test_ambient_interfaces_and_type_aliases_are_types() -> None:
    declarations = _extract(
        """
/** Ambient options. */
export declare interface Options {
  precise: boolean;
}

export declare type Mode = "fast" | "slow";

export declare function load(name: string): Options;
"""
    )

    assert [(d.name, d.kind, d.identifier) for d in declarations] == [
        ("Options", ExportKind.TYPE, "Options"),
        ("Mode", ExportKind.TYPE, "Mode"),
    ]
    assert declarations[0].leading_comments == ("/** Ambient options. */",)


def test_recent_typescript_syntax_parses() -> None:
    declarations = _extract(
        """
class Counter {
  accessor count = 0;
}

const defaults = { mode: "fast" } satisfies Settings;

export function tick(counter: Counter): void {
  counter.count += 1;
}
"""
    )
    assert [d.identifier for d in declarations] == ["`tick(counter)`"]
