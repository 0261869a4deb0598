from __future__ import annotations

"""
Unit tests for the Scaffold Template Parser.

Verifies depth computation, directory markers, tree-drawing input and the
line-numbered errors raised for malformed templates.
"""

import pytest

from filedress.core.analysis.template_parser import (
    count_nodes,
    parse_line,
    parse_template_text,
)
from filedress.domain.errors import ParseError

EXAMPLE = (
    "my_app/\n"
    "    src/\n"
    "        main.rs\n"
    "    tests/\n"
)


def test_example_template_structure() -> None:
    forest = parse_template_text(EXAMPLE, indent=4)

    assert len(forest) == 1
    assert forest[0].describe() == "my_app(dir)->[src(dir)->[main.rs(file)], tests(dir)]"
    assert count_nodes(forest) == 4


def test_blank_lines_are_ignored_but_counted() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_template_text("a/\n\n\n            b\n")
    assert excinfo.value.line_number == 4


def test_depth_jump_names_the_line() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_template_text("root/\n        too_deep.txt\n")

    assert excinfo.value.line_number == 2
    assert "line 2" in str(excinfo.value)


def test_first_entry_must_be_top_level() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_template_text("    nested/\n")
    assert excinfo.value.line_number == 1


def test_indent_remainder_is_an_error() -> None:
    with pytest.raises(ParseError) as excinfo:
        parse_template_text("a/\n  b\n", indent=4)
    assert excinfo.value.line_number == 2


def test_custom_indent_width() -> None:
    forest = parse_template_text("a/\n  b/\n    c.txt\n", indent=2)
    assert forest[0].describe() == "a(dir)->[b(dir)->[c.txt(file)]]"


def test_tab_counts_as_one_level() -> None:
    forest = parse_template_text("a/\n\tb.txt\n", indent=4)
    assert forest[0].describe() == "a(dir)->[b.txt(file)]"


def test_tree_output_is_accepted() -> None:
    text = (
        "my_app/\n"
        "├── src/\n"
        "│   └── main.rs\n"
        "└── tests/\n"
    )
    forest = parse_template_text(text, indent=4)
    assert forest[0].describe() == "my_app(dir)->[src(dir)->[main.rs(file)], tests(dir)]"


def test_pasted_tree_output_drops_root_and_report() -> None:
    text = (
        ".\n"
        "├── src\n"
        "│   └── main.rs\n"
        "└── README.md\n"
        "\n"
        "1 directory, 2 files\n"
    )
    forest = parse_template_text(text, indent=4)

    assert [n.describe() for n in forest] == ["src(dir)->[main.rs(file)]", "README.md(file)"]
    assert count_nodes(forest) == 3


def test_dot_after_first_entry_is_still_rejected() -> None:
    with pytest.raises(ParseError):
        parse_template_text("app/\n.\n", indent=4)


def test_file_with_children_is_promoted() -> None:
    forest = parse_template_text("pkg\n    mod.rs\n")

    assert forest[0].is_dir is True
    assert forest[0].children[0].is_dir is False


def test_dedent_by_several_levels() -> None:
    forest = parse_template_text("a/\n    b/\n        c.txt\nd.txt\n")

    assert [n.name for n in forest] == ["a", "d.txt"]


def test_backslash_marks_directory() -> None:
    assert parse_line("docs\\", 4) == (0, "docs", True)


@pytest.mark.parametrize("entry", ["../escape/", "a/../b", "/absolute", "C:\\windows", "./"])
def test_unsafe_names_are_rejected(entry: str) -> None:
    with pytest.raises(ParseError):
        parse_template_text(entry + "\n")


def test_invalid_indent_width() -> None:
    with pytest.raises(ParseError):
        parse_template_text("a\n", indent=0)
