"""Build the types/functions catalog from located source files."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List

from .comments import DocCommentResolver
from .extractor import DeclarationExtractor
from .logging import get_logger
from .models import Catalog, Diagnostic, DocumentedEntry, SourceFile

UNDOCUMENTED_MESSAGE = "is exported but undocumented"


def _read_source(path: Path) -> str:
    return path.read_text(encoding="utf-8")


@dataclass
class BuildResult:
    """Catalog plus the diagnostics collected while building it."""

    catalog: Catalog
    diagnostics: List[Diagnostic] = field(default_factory=list)


class CatalogBuilder:
    """Runs extraction and comment resolution over every source file."""

    def __init__(
        self,
        extractor: DeclarationExtractor | None = None,
        resolver: DocCommentResolver | None = None,
        read: Callable[[Path], str] = _read_source,
    ) -> None:
        self.extractor = extractor or DeclarationExtractor()
        self.resolver = resolver or DocCommentResolver()
        self._read = read
        self.logger = get_logger("catalog")

    def build(self, source_files: Iterable[SourceFile]) -> BuildResult:
        """Return the catalog for `source_files`; extraction errors propagate."""
        result = BuildResult(catalog=Catalog())
        for source_file in source_files:
            self.logger.debug("Processing %s", source_file.display_path)
            text = self._read(source_file.path)
            for declaration in self.extractor.extract(source_file, text):
                description = self.resolver.resolve(declaration)
                if description is None:
                    result.diagnostics.append(
                        Diagnostic(
                            path=declaration.source,
                            identifier=declaration.identifier,
                            message=UNDOCUMENTED_MESSAGE,
                        )
                    )
                    continue
                entry = DocumentedEntry(
                    category=declaration.category,
                    identifier=declaration.identifier,
                    description=description,
                )
                result.catalog.add(entry, declaration.kind)
        self.logger.debug(
            "Catalog holds %d types and %d functions",
            len(result.catalog.types),
            len(result.catalog.functions),
        )
        return result


__all__ = ["BuildResult", "CatalogBuilder", "UNDOCUMENTED_MESSAGE"]
