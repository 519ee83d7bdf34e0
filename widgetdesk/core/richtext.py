"""Rich-text note bodies.

A note body is a tree of tagged nodes rooted at a ``doc``. Plain-text and
HTML projections are both folds over that tree (``fold_document``), so the
traversal rules live in one place.
"""

import html
import math
from typing import Annotated, Any, Callable, List, Literal, Optional, TypeVar, Union

from loguru import logger
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

WORDS_PER_MINUTE = 200

BlockType = Literal[
    "paragraph", "heading", "bulletList", "orderedList", "listItem", "blockquote"
]

# Blocks that end a line in the plain-text projection
LINE_BLOCKS = frozenset({"paragraph", "heading"})

_BLOCK_TAGS = {
    "paragraph": "p",
    "bulletList": "ul",
    "orderedList": "ol",
    "listItem": "li",
    "blockquote": "blockquote",
}

_MARK_TAGS = {
    "bold": "strong",
    "italic": "em",
    "underline": "u",
    "code": "code",
}


class Mark(BaseModel):
    type: str


class TextNode(BaseModel):
    type: Literal["text"] = "text"
    text: str = ""
    marks: List[Mark] = Field(default_factory=list)


class BlockAttrs(BaseModel):
    level: Optional[int] = None


class BlockNode(BaseModel):
    type: BlockType
    content: List["Node"] = Field(default_factory=list)
    attrs: Optional[BlockAttrs] = None


class UnknownNode(BaseModel):
    """A node type this module has no rendering for; its children still count."""

    model_config = ConfigDict(extra="allow")

    type: str
    content: List["Node"] = Field(default_factory=list)


Node = Annotated[
    Union[TextNode, BlockNode, UnknownNode], Field(union_mode="left_to_right")
]


class Document(BaseModel):
    type: Literal["doc"] = "doc"
    content: List[Node] = Field(default_factory=list)


BlockNode.model_rebuild()
UnknownNode.model_rebuild()
Document.model_rebuild()

T = TypeVar("T")


def fold_document(
    document: Document,
    on_text: Callable[[TextNode], T],
    on_branch: Callable[[Union[BlockNode, UnknownNode], List[T]], T],
) -> List[T]:
    """Fold every top-level node of ``document`` bottom-up."""

    def fold(node) -> T:
        if isinstance(node, TextNode):
            return on_text(node)
        return on_branch(node, [fold(child) for child in node.content])

    return [fold(node) for node in document.content]


def to_plain_text(document: Document) -> str:
    """Concatenated text with a newline after each paragraph and heading."""

    def on_branch(node, parts: List[str]) -> str:
        text = "".join(parts)
        if node.type in LINE_BLOCKS:
            text += "\n"
        return text

    return "".join(fold_document(document, lambda node: node.text, on_branch)).strip()


def _heading_level(node: BlockNode) -> int:
    level = node.attrs.level if node.attrs and node.attrs.level else 1
    return min(max(level, 1), 6)


def _render_text(node: TextNode) -> str:
    text = html.escape(node.text)
    for mark in node.marks:
        tag = _MARK_TAGS.get(mark.type)
        if tag:
            text = f"<{tag}>{text}</{tag}>"
    return text


def _render_branch(node, parts: List[str]) -> str:
    inner = "".join(parts)
    if node.type == "heading":
        level = _heading_level(node)
        return f"<h{level}>{inner}</h{level}>"
    tag = _BLOCK_TAGS.get(node.type)
    if tag is None:
        return inner
    return f"<{tag}>{inner}</{tag}>"


def to_html(document: Document) -> str:
    """HTML markup for ``document``; text is escaped."""
    return "".join(fold_document(document, _render_text, _render_branch))


def empty_document() -> Document:
    """A document holding one empty paragraph, the body of a new note."""
    return document_from_text("")


def document_from_text(text: str) -> Document:
    """One paragraph per line of ``text``."""
    lines = text.splitlines() or [""]
    return Document(
        content=[
            BlockNode(type="paragraph", content=[TextNode(text=line)]) for line in lines
        ]
    )


def parse_document(raw: Any) -> Document:
    """Validate a stored/submitted body, degrading to an empty document."""
    if isinstance(raw, Document):
        return raw
    if not raw:
        return Document()
    try:
        return Document.model_validate(raw)
    except PydanticValidationError as e:
        logger.warning(f"Malformed rich-text document, rendering as empty: {e}")
        return Document()


def count_words(text: str) -> int:
    return len(text.split())


def reading_time(word_count: int) -> int:
    """Minutes to read ``word_count`` words, rounded up."""
    if word_count <= 0:
        return 0
    return math.ceil(word_count / WORDS_PER_MINUTE)
