from __future__ import annotations

"""
Scaffold Template Data Models.

Provides the node type produced by the template parser and consumed by the
scaffolder.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------

@dataclass
class TemplateNode:
    """
    One entry of a scaffold template.

    Attributes:
        name: Entry name without any trailing separator.
        is_dir: Whether the entry is a directory.
        depth: Indentation level (0 for top-level entries).
        line_number: 1-based template line the entry came from.
        children: Ordered child entries.
    """
    name: str
    is_dir: bool
    depth: int
    line_number: int = 0
    children: List["TemplateNode"] = field(default_factory=list)

    def describe(self) -> str:
        """Compact textual form, e.g. 'src(dir)->[main.rs(file)]'."""
        kind = "dir" if self.is_dir else "file"
        if not self.children:
            return f"{self.name}({kind})"
        inner = ", ".join(child.describe() for child in self.children)
        return f"{self.name}({kind})->[{inner}]"


Forest = List[TemplateNode]


def iter_forest(forest: Forest) -> Iterator[Tuple[Tuple[str, ...], TemplateNode]]:
    """
    Walk a forest depth-first, parents before children.

    Yields:
        Tuple[Tuple[str, ...], TemplateNode]: (Path segments, node).
    """
    stack: List[Tuple[Tuple[str, ...], TemplateNode]] = [((n.name,), n) for n in reversed(forest)]
    while stack:
        segments, node = stack.pop()
        yield segments, node
        for child in reversed(node.children):
            stack.append((segments + (child.name,), child))
