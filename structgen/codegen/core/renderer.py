"""
Generic line-oriented renderer used by language generators.

A renderer walks the type graph in model order and emits source text
through a small set of primitives (lines, indented blocks, descriptions).
Language renderers subclass it and expose overridable hooks; the
generated text is built from "sourcelike" fragments: strings, Name
handles, nested sequences of those, or None.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple, Union

from ...logging_config import get_logger
from .naming import Name, NameTable
from .schema import PropertyDeclaration, RecordType, TypeGraph

logger = get_logger(__name__)

Sourcelike = Union[str, Name, Sequence["Sourcelike"], None]


@dataclass(frozen=True)
class RenderContext:
    """Read-only state shared by every hook during one render pass."""

    graph: TypeGraph
    names: NameTable

    def records(self) -> Iterator[Tuple[RecordType, Name]]:
        """Records with their display names, in model order."""
        for record in self.graph:
            yield record, self.names.record_name(record)


def serialize(source: Sourcelike) -> str:
    """Flatten a sourcelike into a string, resolving Name handles."""
    if source is None:
        return ""
    if isinstance(source, str):
        return source
    if isinstance(source, Name):
        return source.value
    return "".join(serialize(part) for part in source)


def intersperse(elements: Sequence[Sourcelike], separator: Sourcelike) -> List[Sourcelike]:
    """Place separator between consecutive elements."""
    result: List[Sourcelike] = []
    for i, element in enumerate(elements):
        if i != 0:
            result.append(separator)
        result.append(element)
    return result


class Renderer(ABC):
    """Base class for all line-emitting renderers."""

    def __init__(self, context: RenderContext, indent_unit: str = "    "):
        self.context = context
        self.indent_unit = indent_unit
        self._lines: List[str] = []
        self._indent_level = 0

    # Emission primitives

    def emit_line(self, *parts: Sourcelike) -> None:
        """Emit one line at the current indentation. No parts emits a blank line."""
        text = serialize(parts)
        if text:
            self._lines.append(self.indent_unit * self._indent_level + text)
        else:
            self._lines.append("")

    def indent(self, emitter: Callable[[], None]) -> None:
        """Run emitter one indentation level deeper."""
        self._indent_level += 1
        try:
            emitter()
        finally:
            self._indent_level -= 1

    def emit_block(self, emitter: Callable[[], None], open_line: Sourcelike = "{",
                   close_line: Sourcelike = "}") -> None:
        """Emit an opening line, an indented body and a closing line."""
        self.emit_line(open_line)
        self.indent(emitter)
        self.emit_line(close_line)

    def emit_comment_lines(self, lines: Sequence[str], line_start: str = "// ",
                           before_comment: Optional[str] = None,
                           after_comment: Optional[str] = None) -> None:
        """Emit lines as a comment block."""
        if before_comment is not None:
            self.emit_line(before_comment)
        for line in lines:
            self.emit_line(line_start.rstrip() if not line else line_start + line)
        if after_comment is not None:
            self.emit_line(after_comment)

    def emit_description(self, description: Optional[List[str]]) -> None:
        """Emit a description comment. Languages override the comment style."""
        if description:
            self.emit_comment_lines(description)

    def ensure_blank_line(self) -> None:
        """Emit a blank line unless the output is empty or already ends with one."""
        if self._lines and self._lines[-1] != "":
            self.emit_line()

    # Traversal

    def for_each_record(self, f: Callable[[RecordType, Name], None],
                        blank_lines: bool = True) -> None:
        """Call f for every record in model order."""
        for i, (record, name) in enumerate(self.context.records()):
            if blank_lines and i != 0:
                self.ensure_blank_line()
            logger.debug("Rendering record %s", record.key)
            f(record, name)

    def for_each_property(self, record: RecordType,
                          f: Callable[[Name, str, PropertyDeclaration], None]) -> None:
        """Call f(display name, schema name, property) in declaration order."""
        for prop in record.properties:
            f(self.context.names.property_name(prop), prop.name, prop)

    def record_for_key(self, key: str) -> RecordType:
        return self.context.graph.get(key)

    # Entry point

    @abstractmethod
    def emit_source_structure(self) -> None:
        """Emit the whole output. Implemented per language."""
        pass

    def render(self) -> List[str]:
        """Run a render pass and return the emitted lines."""
        self._lines = []
        self._indent_level = 0
        self.emit_source_structure()
        while self._lines and self._lines[-1] == "":
            self._lines.pop()
        logger.debug("Rendered %d lines", len(self._lines))
        return list(self._lines)


def description_lines(text: Optional[str]) -> Optional[List[str]]:
    """Split a description into lines, None when empty."""
    if not text:
        return None
    lines = [line.rstrip() for line in text.strip().splitlines()]
    return lines or None
