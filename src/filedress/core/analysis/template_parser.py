from __future__ import annotations

"""
Scaffold Template Parser.

Turns indentation-based template text into a validated forest of
TemplateNodes. Parsing is pure: it never touches the filesystem, and on the
first malformed line it raises ParseError without returning any partial tree.

Template syntax:
    my_app/
        src/
            main.rs
        tests/

- Depth is the leading indentation divided by the indent width; a remainder
  is an error. Box-drawing characters from `tree` output count as
  indentation, and a tab counts as one full level.
- A trailing '/' (or '\\') marks a directory; anything else is a file. A file
  entry that receives children is promoted to a directory.
- Depth may decrease by any amount but increase by at most one level.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from filedress.domain.constants import DEFAULT_INDENT
from filedress.domain.errors import ParseError
from filedress.domain.tree_models import Forest, TemplateNode, iter_forest

logger = logging.getLogger(__name__)

# Box-drawing glyphs emitted by `tree`, plus the no-break space it pads with.
_TREE_DRAWING_CHARS = "\u2502\u251c\u2514\u2500\u00a0"
_DIR_SEPARATORS = ("/", "\\")

# `tree` prints its root as "." and closes with "N directories, M files".
_TREE_ROOT_LINE = "."
_TREE_REPORT_LINE = re.compile(r"^\d+ director(?:y|ies)(?:, \d+ files?)?$")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def parse_template(lines: Iterable[str], indent: int = DEFAULT_INDENT) -> Forest:
    """
    Parse template lines into a forest of nodes.

    Output pasted from `tree` is accepted as-is: its leading '.' root line is
    dropped (its children become top-level entries) and its trailing
    'N directories, M files' report is ignored.

    Args:
        lines: Template text lines (terminators optional).
        indent: Spaces per depth level.

    Returns:
        Forest: Top-level nodes in template order.

    Raises:
        ParseError: On bad indentation, an illegal depth jump or an invalid name.
    """
    if indent < 1:
        raise ParseError(f"Indent width must be 1 or greater (got {indent}).")

    forest: Forest = []
    stack: List[TemplateNode] = []
    root_offset = 0
    seen_entry = False

    for line_number, raw in enumerate(lines, start=1):
        stripped = raw.strip()
        if not seen_entry and stripped == _TREE_ROOT_LINE:
            root_offset = 1
            seen_entry = True
            continue
        if _TREE_REPORT_LINE.match(stripped):
            continue

        parsed = parse_line(raw, indent, line_number)
        if parsed is None:
            continue
        seen_entry = True
        depth, name, is_dir = parsed
        depth -= root_offset

        max_depth = stack[-1].depth + 1 if stack else 0
        if depth < 0 or depth > max_depth:
            raise ParseError(
                f"Entry '{name}' is at depth {depth} but the deepest allowed depth here is {max_depth}; "
                f"entries may only be nested one level deeper than the previous entry.",
                line_number=line_number,
            )

        while stack and stack[-1].depth >= depth:
            stack.pop()

        node = TemplateNode(name=name, is_dir=is_dir, depth=depth, line_number=line_number)
        if stack:
            parent = stack[-1]
            if not parent.is_dir:
                logger.debug(f"Promoting '{parent.name}' (line {parent.line_number}) to a directory")
                parent.is_dir = True
            parent.children.append(node)
        else:
            forest.append(node)
        stack.append(node)

    logger.debug(f"Parsed template: {count_nodes(forest)} entries")
    return forest


def parse_template_text(text: str, indent: int = DEFAULT_INDENT) -> Forest:
    """Convenience wrapper parsing a whole template string."""
    return parse_template(text.splitlines(), indent)


def parse_line(raw: str, indent: int, line_number: int = 0) -> Optional[Tuple[int, str, bool]]:
    """
    Parse one template line.

    Args:
        raw: Raw line.
        indent: Spaces per depth level.
        line_number: Line number used in error messages.

    Returns:
        Optional[Tuple[int, str, bool]]: (Depth, name, is_dir), or None for
                                         blank lines.

    Raises:
        ParseError: If indentation is not a multiple of the width or the
                    name is invalid.
    """
    line = raw.rstrip("\r\n")
    if not line.strip():
        return None

    width = 0
    pos = 0
    while pos < len(line) and (line[pos] in " \t" or line[pos] in _TREE_DRAWING_CHARS):
        width += indent if line[pos] == "\t" else 1
        pos += 1

    if width % indent:
        raise ParseError(
            f"Indentation of {width} is not a multiple of the indent width {indent}.",
            line_number=line_number,
        )

    entry = line[pos:].strip()
    is_dir = entry.endswith(_DIR_SEPARATORS)
    name = entry.rstrip("/\\").strip()
    _validate_name(name, entry, line_number)

    return width // indent, name, is_dir


def count_nodes(forest: Forest) -> int:
    return sum(1 for _ in iter_forest(forest))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _validate_name(name: str, entry: str, line_number: int) -> None:
    """Reject names that are empty, absolute, or escape their parent."""
    if not name:
        raise ParseError(f"Entry '{entry}' has no name.", line_number=line_number)

    normalized = name.replace("\\", "/")
    if normalized.startswith("/") or (len(normalized) > 1 and normalized[1] == ":"):
        raise ParseError(f"Entry '{name}' must be a relative name.", line_number=line_number)

    if any(part in (".", "..") for part in normalized.split("/")):
        raise ParseError(f"Entry '{name}' must not contain '.' or '..' segments.", line_number=line_number)
