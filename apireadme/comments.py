"""Resolve export descriptions from their leading TSDoc comments."""

from __future__ import annotations

from typing import Optional, Sequence

from .logging import get_logger
from .models import ExportedDeclaration
from .tsdoc import TSDocParser, render_doc_node


def extract_brief(summary: str) -> str:
    """Return the first paragraph of `summary` on a single line."""
    new_paragraph = summary.find("\n\n")
    brief = summary[:new_paragraph] if new_paragraph > 0 else summary
    return brief.strip().replace("\n", " ")


def find_last_block_comment(comments: Optional[Sequence[str]]) -> Optional[str]:
    """Return the block comment closest to the declaration, if any."""
    if comments:
        for comment in reversed(comments):
            if comment.startswith("/*"):
                return comment
    return None


class DocCommentResolver:
    """Turns a declaration's leading comments into a one-line description."""

    def __init__(self, parser: TSDocParser | None = None) -> None:
        self.parser = parser or TSDocParser()
        self.logger = get_logger("comments")

    def resolve(self, declaration: ExportedDeclaration) -> Optional[str]:
        """Return the brief description, or None when no block comment precedes the export."""
        comment = find_last_block_comment(declaration.leading_comments)
        if comment is None:
            return None

        context = self.parser.parse_string(comment)
        for message in context.log:
            self.logger.debug(
                "%s: %s: %s", declaration.source, declaration.identifier, message.text
            )
        summary = render_doc_node(context.doc_comment.summary_section)
        return extract_brief(summary)


__all__ = ["DocCommentResolver", "extract_brief", "find_last_block_comment"]
