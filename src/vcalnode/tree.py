"""Generic property tree built from ``BEGIN``/``END`` scoped content lines."""
from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Iterable, Iterator, List, Optional, Tuple

from .contentline import ContentLine, decode_line, unfold_lines
from .errors import DecodeError

logger = logging.getLogger(__name__)

BEGIN = "BEGIN"
END = "END"


@dataclass(frozen=True)
class Node:
    name: str
    value: str = ""
    params: Tuple[Tuple[str, str], ...] = ()   # (name, value) pairs, source order
    children: Tuple[Node, ...] = ()
    is_block: bool = False

    def param(self, name: str) -> Optional[str]:
        for key, value in self.params:
            if key == name:
                return value
        return None

    def child_by_name(self, name: str) -> Optional[Node]:
        for child in self.children:
            if child.name == name:
                return child
        return None

    def children_by_name(self, name: str) -> List[Node]:
        return [child for child in self.children if child.name == name]

    def walk(self) -> Iterator[Node]:
        """Yield every descendant depth-first, pre-order, in source order."""
        for child in self.children:
            yield child
            yield from child.walk()

    def dig_property(self, name: str) -> Tuple[str, bool]:
        for node in self.walk():
            if node.name == name:
                return node.value, True
        return "", False

    def dig_properties(self, name: str) -> Tuple[List[str], bool]:
        values = [node.value for node in self.walk() if node.name == name]
        return values, bool(values)


class _Scope:
    def __init__(self, name: str) -> None:
        self.name = name
        self.children: List[_Scope | Node] = []

    def freeze(self) -> Node:
        return Node(
            name=self.name,
            children=tuple(c.freeze() if isinstance(c, _Scope) else c for c in self.children),
            is_block=True,
        )


def build_tree(lines: Iterable[ContentLine], strict: bool = False) -> Node:
    """Assemble decoded lines into a tree rooted at an unnamed node.

    A mismatched ``END`` closes the innermost open block anyway and is logged;
    with ``strict`` it raises instead. Unclosed blocks always raise.
    """
    root = _Scope("")
    stack = [root]

    for number, line in enumerate(lines, start=1):
        if line.name == BEGIN:
            scope = _Scope(line.raw_value.strip())
            stack[-1].children.append(scope)
            stack.append(scope)
        elif line.name == END:
            block = line.raw_value.strip()
            if len(stack) == 1:
                raise DecodeError(f"END:{block} without matching BEGIN", line_number=number, block=block)
            scope = stack.pop()
            if scope.name != block:
                if strict:
                    raise DecodeError(
                        f"END:{block} closes BEGIN:{scope.name}", line_number=number, block=scope.name
                    )
                logger.warning("END:%s closes BEGIN:%s (line %d); continuing", block, scope.name, number)
        else:
            leaf = Node(name=line.name, value=line.value, params=tuple(line.params.items()))
            stack[-1].children.append(leaf)

    if len(stack) > 1:
        open_names = ", ".join(scope.name for scope in stack[1:])
        raise DecodeError(f"Unterminated block(s): {open_names}", block=stack[-1].name)

    return root.freeze()


def parse_tree(text: str, strict: bool = False) -> Node:
    lines = [decode_line(line, number) for number, line in enumerate(unfold_lines(text), start=1)]
    tree = build_tree(lines, strict=strict)
    logger.debug("Parsed %d content lines into %d top-level nodes", len(lines), len(tree.children))
    return tree


def parse_calendar(text: str, strict: bool = False) -> Node:
    """Parse calendar text, returning the block itself for single-block input.

    ``parse_calendar(vevent_text).child_by_name("SUMMARY")`` reads the event's
    properties directly. Any other shape returns the unnamed root.
    """
    root = parse_tree(text, strict=strict)
    if len(root.children) == 1 and root.children[0].is_block:
        return root.children[0]
    return root
