"""Core data models shared across apireadme components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class DeclarationKind(str, Enum):
    """Shape of the declaration wrapped by an export statement."""

    FUNCTION = "function"
    INTERFACE = "interface"
    TYPE_ALIAS = "type_alias"
    OTHER = "other"


class ExportKind(str, Enum):
    """Catalog bucket an export is filed under."""

    FUNCTION = "function"
    TYPE = "type"


class ParameterShape(str, Enum):
    """Pattern shapes a function parameter can take."""

    IDENTIFIER = "identifier"
    DEFAULT_VALUED = "default_valued"
    ARRAY_PATTERN = "array_pattern"
    OBJECT_PATTERN = "object_pattern"
    REST = "rest"
    PROPERTY_INJECTION = "property_injection"
    MEMBER_ACCESS = "member_access"


@dataclass(frozen=True)
class SourceFile:
    """A source file scheduled for extraction."""

    path: Path
    display_path: str
    category: str

    @classmethod
    def from_path(cls, path: Path, root: Optional[Path] = None) -> "SourceFile":
        display = path
        if root is not None:
            try:
                display = path.relative_to(root)
            except ValueError:
                display = path
        return cls(path=path, display_path=display.as_posix(), category=path.stem)


@dataclass
class ExportedDeclaration:
    """One named top-level export found in a source file."""

    name: str
    kind: ExportKind
    category: str
    identifier: str
    source: str
    leading_comments: Tuple[str, ...] = ()


@dataclass(frozen=True)
class DocumentedEntry:
    """Catalog row: category, display identifier and one-line description."""

    category: str
    identifier: str
    description: str

    def as_row(self) -> Tuple[str, str, str]:
        return (self.category, self.identifier, self.description)

    def sort_key(self) -> Tuple[str, str]:
        return (self.category, self.identifier)


@dataclass
class Catalog:
    """Documented exports split into the types and functions tables."""

    types: List[DocumentedEntry] = field(default_factory=list)
    functions: List[DocumentedEntry] = field(default_factory=list)

    def add(self, entry: DocumentedEntry, kind: ExportKind) -> None:
        if kind is ExportKind.FUNCTION:
            self.functions.append(entry)
        else:
            self.types.append(entry)

    def sorted_types(self) -> List[DocumentedEntry]:
        return sorted(self.types, key=DocumentedEntry.sort_key)

    def sorted_functions(self) -> List[DocumentedEntry]:
        return sorted(self.functions, key=DocumentedEntry.sort_key)

    def is_empty(self) -> bool:
        return not self.types and not self.functions


@dataclass(frozen=True)
class Diagnostic:
    """Advisory message emitted while building the catalog."""

    path: str
    identifier: str
    message: str
    level: str = "warning"

    def __str__(self) -> str:
        prefix = "WARN" if self.level == "warning" else self.level.upper()
        return f"{prefix} {self.path}: {self.identifier} {self.message}"
