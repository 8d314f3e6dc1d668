"""Pipeline orchestration for README API table updates."""

from __future__ import annotations

import difflib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from .catalog import BuildResult, CatalogBuilder
from .config import ApiReadmeConfig, load_config, load_include_patterns
from .logging import get_logger
from .models import Diagnostic
from .postproc.markers import MarkerManager
from .postproc.table import render_catalog
from .source_locator import SourceLocator


@dataclass
class UpdateOutcome:
    """Result of a README update operation."""

    path: Path
    changed: bool
    written: bool
    diff: str
    dry_run: bool
    diagnostics: List[Diagnostic] = field(default_factory=list)


def read_document(path: Path) -> str:
    """Read a UTF-8 document without translating line endings."""
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()


def write_document(path: Path, content: str) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)


class Orchestrator:
    """Coordinates locate → extract → resolve → catalog → render → merge."""

    def __init__(
        self,
        locator: SourceLocator | None = None,
        catalog_builder: CatalogBuilder | None = None,
        marker_manager: MarkerManager | None = None,
    ) -> None:
        self.locator = locator or SourceLocator()
        self.catalog_builder = catalog_builder or CatalogBuilder()
        self.marker_manager = marker_manager or MarkerManager()
        self.logger = get_logger("orchestrator")

    def run_update(self, path: str | Path, *, dry_run: bool = False) -> UpdateOutcome:
        """Synchronise the README API tables for the project at `path`."""
        project_path = Path(path).expanduser().resolve()
        config = load_config(project_path)
        readme_path = config.readme_path
        if not readme_path.exists():
            raise FileNotFoundError(f"{config.readme} not found in {project_path}")

        self.logger.info("Starting update run for %s", project_path)
        result = self.build_catalog(config)
        for diagnostic in result.diagnostics:
            self.logger.warning("%s", diagnostic, extra={"diagnostic": diagnostic})

        body = render_catalog(result.catalog)
        original = read_document(readme_path)
        if not self.marker_manager.has_region(original):
            self.logger.debug("No API region markers found in %s", readme_path.name)
        updated = self.marker_manager.apply(original, body)

        if updated == original:
            self.logger.info("README already up to date; skipping write")
            return UpdateOutcome(
                path=readme_path,
                changed=False,
                written=False,
                diff="",
                dry_run=dry_run,
                diagnostics=result.diagnostics,
            )

        diff_text = self._render_diff(original, updated, readme_path.name)
        if dry_run:
            self.logger.info("Dry-run completed; README changes not written")
            return UpdateOutcome(
                path=readme_path,
                changed=True,
                written=False,
                diff=diff_text,
                dry_run=True,
                diagnostics=result.diagnostics,
            )

        write_document(readme_path, updated)
        self.logger.info("README updated at %s", readme_path)
        return UpdateOutcome(
            path=readme_path,
            changed=True,
            written=True,
            diff=diff_text,
            dry_run=False,
            diagnostics=result.diagnostics,
        )

    def build_catalog(self, config: ApiReadmeConfig) -> BuildResult:
        """Locate sources for `config` and build their catalog."""
        patterns = config.include or load_include_patterns(config.tsconfig_path)
        self.logger.debug("Using %d include patterns", len(patterns))
        source_files = self.locator.locate(config.root, patterns)
        return self.catalog_builder.build(source_files)

    @staticmethod
    def _render_diff(original: str, updated: str, name: str) -> str:
        diff = difflib.unified_diff(
            original.splitlines(keepends=True),
            updated.splitlines(keepends=True),
            fromfile=f"{name} (original)",
            tofile=f"{name} (updated)",
        )
        return "".join(diff)


__all__ = ["Orchestrator", "UpdateOutcome", "read_document", "write_document"]
