"""Minimal TSDoc parser producing a documentation node tree.

Comments are parsed into a tree of `DocNode` objects. Every piece of literal
text lives in a `DocExcerpt` leaf, so the original prose of any section can be
recovered with `render_doc_node`, which concatenates excerpts in depth-first
pre-order. Only the structure needed to separate the summary from tagged
sections is modelled: paragraphs, soft breaks, code spans, inline tags
(`{@link ...}`), block tags and modifier tags.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional, Sequence

MODIFIER_TAGS = frozenset(
    {
        "@alpha",
        "@beta",
        "@eventProperty",
        "@experimental",
        "@internal",
        "@override",
        "@packageDocumentation",
        "@public",
        "@readonly",
        "@sealed",
        "@virtual",
    }
)

# A tag name must end at whitespace or end of line; "@scope/pkg" stays text.
_TAG_NAME = re.compile(r"@[A-Za-z][A-Za-z0-9]*(?=\s|$)")
_INLINE_TAG = re.compile(r"(@[A-Za-z][A-Za-z0-9]*)(\s*)(.*)", re.DOTALL)
_PARAM_NAME = re.compile(r"(\s*)([^\s]+)(\s*-?\s*)(.*)", re.DOTALL)


class DocNode:
    """Base node of the documentation tree."""

    kind = "Node"

    def get_child_nodes(self) -> Sequence["DocNode"]:
        return ()

    @property
    def excerpt(self) -> Optional[str]:
        return None


class DocExcerpt(DocNode):
    """Leaf holding a slice of literal comment text."""

    kind = "Excerpt"

    def __init__(self, excerpt_kind: str, content: str) -> None:
        self.excerpt_kind = excerpt_kind
        self.content = content

    @property
    def excerpt(self) -> Optional[str]:
        return self.content

    def __repr__(self) -> str:
        return f"DocExcerpt({self.excerpt_kind!r}, {self.content!r})"


class _ExcerptContainer(DocNode):
    def __init__(self, excerpts: Sequence[DocExcerpt]) -> None:
        self._excerpts = list(excerpts)

    def get_child_nodes(self) -> Sequence[DocNode]:
        return self._excerpts


class DocPlainText(_ExcerptContainer):
    kind = "PlainText"

    def __init__(self, text: str) -> None:
        super().__init__([DocExcerpt("PlainText", text)])
        self.text = text


class DocSoftBreak(_ExcerptContainer):
    kind = "SoftBreak"

    def __init__(self) -> None:
        super().__init__([DocExcerpt("SoftBreak", "\n")])


class DocCodeSpan(_ExcerptContainer):
    kind = "CodeSpan"

    def __init__(self, code: str) -> None:
        super().__init__(
            [
                DocExcerpt("CodeSpan_OpeningDelimiter", "`"),
                DocExcerpt("CodeSpan_Code", code),
                DocExcerpt("CodeSpan_ClosingDelimiter", "`"),
            ]
        )
        self.code = code


class DocInlineTag(_ExcerptContainer):
    kind = "InlineTag"

    def __init__(self, tag_name: str, spacing: str, content: str) -> None:
        excerpts = [DocExcerpt("InlineTag_OpeningDelimiter", "{"), DocExcerpt("InlineTag_TagName", tag_name)]
        if spacing:
            excerpts.append(DocExcerpt("Spacing", spacing))
        if content:
            excerpts.append(DocExcerpt("InlineTag_TagContent", content))
        excerpts.append(DocExcerpt("InlineTag_ClosingDelimiter", "}"))
        super().__init__(excerpts)
        self.tag_name = tag_name
        self.content = content


class DocBlockTag(_ExcerptContainer):
    kind = "BlockTag"

    def __init__(self, tag_name: str) -> None:
        super().__init__([DocExcerpt("BlockTag", tag_name)])
        self.tag_name = tag_name


class DocParagraph(DocNode):
    kind = "Paragraph"

    def __init__(self) -> None:
        self.nodes: List[DocNode] = []

    def get_child_nodes(self) -> Sequence[DocNode]:
        return self.nodes

    def is_empty(self) -> bool:
        return not self.nodes


class DocSection(DocNode):
    kind = "Section"

    def __init__(self) -> None:
        self.nodes: List[DocParagraph] = []

    def get_child_nodes(self) -> Sequence[DocNode]:
        return self.nodes


class DocBlock(DocNode):
    """A block tag together with the section of content that follows it."""

    kind = "Block"

    def __init__(self, block_tag: DocBlockTag) -> None:
        self.block_tag = block_tag
        self.content = DocSection()

    @property
    def tag_name(self) -> str:
        return self.block_tag.tag_name

    def get_child_nodes(self) -> Sequence[DocNode]:
        return [self.block_tag, self.content]


class DocParamBlock(DocBlock):
    kind = "ParamBlock"

    def __init__(self, block_tag: DocBlockTag, parameter_name: str) -> None:
        super().__init__(block_tag)
        self.parameter_name = parameter_name


class DocComment(DocNode):
    kind = "Comment"

    def __init__(self) -> None:
        self.summary_section = DocSection()
        self.blocks: List[DocBlock] = []
        self.modifier_tags: List[DocBlockTag] = []

    def get_child_nodes(self) -> Sequence[DocNode]:
        return [self.summary_section, *self.blocks, *self.modifier_tags]


@dataclass
class ParserMessage:
    """Problem reported while parsing a comment."""

    message_id: str
    text: str


@dataclass
class ParserContext:
    """Result of parsing one comment."""

    doc_comment: DocComment
    log: List[ParserMessage] = field(default_factory=list)


def render_doc_node(node: Optional[DocNode]) -> str:
    """Concatenate the excerpt text of `node` and its descendants in pre-order."""
    if node is None:
        return ""
    content: List[str] = []
    stack: List[DocNode] = [node]
    while stack:
        current = stack.pop()
        excerpt = current.excerpt
        if excerpt is not None:
            content.append(excerpt)
        stack.extend(reversed(current.get_child_nodes()))
    return "".join(content)


class _Token(NamedTuple):
    kind: str
    text: str
    extra: str = ""
    spacing: str = ""


class TSDocParser:
    """Parses `/** ... */` comments into `DocComment` trees."""

    def parse_string(self, text: str) -> ParserContext:
        doc_comment = DocComment()
        context = ParserContext(doc_comment=doc_comment)
        lines = self._extract_lines(text, context)
        if lines is None:
            return context

        builder = _SectionBuilder(doc_comment)
        for line in lines:
            if not line:
                builder.paragraph_break()
                continue
            for token in _tokenize(line):
                builder.push(token)
            builder.soft_break()
        return context

    @staticmethod
    def _extract_lines(text: str, context: ParserContext) -> Optional[List[str]]:
        if not text.startswith("/**"):
            context.log.append(ParserMessage("tsdoc-comment-missing-opening-delimiter", 'Expecting a "/**" comment'))
            return None
        if len(text) < 5 or not text.endswith("*/"):
            context.log.append(ParserMessage("tsdoc-comment-missing-closing-delimiter", 'Expecting a "*/" delimiter'))
            return None

        lines: List[str] = []
        for index, raw in enumerate(text[3:-2].split("\n")):
            line = raw.strip()
            if index > 0 and line.startswith("*"):
                line = line[1:].strip()
            lines.append(line)

        while lines and not lines[0]:
            lines.pop(0)
        while lines and not lines[-1]:
            lines.pop()
        return lines


class _SectionBuilder:
    def __init__(self, doc_comment: DocComment) -> None:
        self._comment = doc_comment
        self._section = doc_comment.summary_section
        self._paragraph: Optional[DocParagraph] = None
        self._pending_param = False

    def _current_paragraph(self) -> DocParagraph:
        if self._paragraph is None:
            self._paragraph = DocParagraph()
            self._section.nodes.append(self._paragraph)
        return self._paragraph

    def push(self, token: _Token) -> None:
        if token.kind == "tag":
            self._start_tag(token.text)
            return
        if self._pending_param and token.kind == "text":
            self._pending_param = False
            self._assign_param_name(token.text)
            return
        self._pending_param = False
        if token.kind == "text":
            self._current_paragraph().nodes.append(DocPlainText(token.text))
        elif token.kind == "code":
            self._current_paragraph().nodes.append(DocCodeSpan(token.text))
        elif token.kind == "inline":
            self._current_paragraph().nodes.append(DocInlineTag(token.extra, token.spacing, token.text))

    def soft_break(self) -> None:
        self._pending_param = False
        self._current_paragraph().nodes.append(DocSoftBreak())

    def paragraph_break(self) -> None:
        self.soft_break()
        self._paragraph = None

    def _start_tag(self, tag_name: str) -> None:
        block_tag = DocBlockTag(tag_name)
        if tag_name in MODIFIER_TAGS:
            self._comment.modifier_tags.append(block_tag)
            return
        block: DocBlock
        if tag_name == "@param" or tag_name == "@typeParam":
            block = DocParamBlock(block_tag, parameter_name="")
            self._pending_param = True
        else:
            block = DocBlock(block_tag)
        self._comment.blocks.append(block)
        self._section = block.content
        self._paragraph = None

    def _assign_param_name(self, text: str) -> None:
        block = self._comment.blocks[-1]
        match = _PARAM_NAME.match(text)
        if not isinstance(block, DocParamBlock) or match is None:
            self._current_paragraph().nodes.append(DocPlainText(text))
            return
        block.parameter_name = match.group(2)
        remainder = match.group(4)
        if remainder:
            self._current_paragraph().nodes.append(DocPlainText(remainder))


def _tokenize(line: str) -> List[_Token]:
    tokens: List[_Token] = []
    buffer: List[str] = []

    def flush() -> None:
        if buffer:
            tokens.append(_Token("text", "".join(buffer)))
            buffer.clear()

    index = 0
    while index < len(line):
        char = line[index]
        if char == "`":
            end = line.find("`", index + 1)
            if end != -1:
                flush()
                tokens.append(_Token("code", line[index + 1 : end]))
                index = end + 1
                continue
        elif char == "{" and line.startswith("{@", index):
            end = line.find("}", index)
            match = _INLINE_TAG.fullmatch(line, index + 1, end) if end != -1 else None
            if match is not None:
                flush()
                tokens.append(_Token("inline", match.group(3), extra=match.group(1), spacing=match.group(2)))
                index = end + 1
                continue
        elif char == "@" and (index == 0 or line[index - 1].isspace()):
            match = _TAG_NAME.match(line, index)
            if match is not None:
                flush()
                tokens.append(_Token("tag", match.group(0)))
                index = match.end()
                continue
        buffer.append(char)
        index += 1
    flush()
    return tokens


__all__ = [
    "DocBlock",
    "DocBlockTag",
    "DocCodeSpan",
    "DocComment",
    "DocExcerpt",
    "DocInlineTag",
    "DocNode",
    "DocParagraph",
    "DocParamBlock",
    "DocPlainText",
    "DocSection",
    "DocSoftBreak",
    "MODIFIER_TAGS",
    "ParserContext",
    "ParserMessage",
    "TSDocParser",
    "render_doc_node",
]
