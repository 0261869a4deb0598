from __future__ import annotations

"""
Unit tests for the Domain Data Models.

Verifies the result factories, status tallies, and the template node helpers.
"""

from filedress.domain.pipeline_models import (
    ItemResult,
    ItemStatus,
    TransformOutcome,
    TransformResult,
    create_error_result,
    create_success_result,
    tally_items,
)
from filedress.domain.tree_models import TemplateNode, iter_forest


def test_tally_counts_every_status() -> None:
    items = [
        ItemResult("/a", ItemStatus.CHANGED),
        ItemResult("/b", ItemStatus.CHANGED),
        ItemResult("/c", ItemStatus.FAILED, "boom"),
    ]
    counts = tally_items(items)

    assert counts["changed"] == 2
    assert counts["failed"] == 1
    assert counts["skipped"] == 0
    assert set(counts) == {s.value for s in ItemStatus}


def test_success_result_merges_summary_extra() -> None:
    items = [ItemResult("/a", ItemStatus.SKIPPED, "skipped-noop")]
    result = create_success_result("add", "/root", items, dry_run=True, summary_extra={"files_found": 1})

    assert result.ok is True
    assert result.error == ""
    assert result.dry_run is True
    assert result.summary["skipped"] == 1
    assert result.summary["files_found"] == 1


def test_error_result_defaults() -> None:
    result = create_error_result("Cannot read directory", "copy", "/root")

    assert result.ok is False
    assert result.items == []
    assert result.summary["failed"] == 0


def test_transform_result_changed_flag() -> None:
    assert TransformResult("x", TransformOutcome.CHANGED, "added").changed is True
    assert TransformResult("x", TransformOutcome.SKIPPED_NOOP).changed is False
    assert TransformOutcome.SKIPPED_UNSUPPORTED.value == "skipped-unsupported-extension"


def test_template_node_describe_and_walk() -> None:
    leaf = TemplateNode("main.rs", is_dir=False, depth=2)
    src = TemplateNode("src", is_dir=True, depth=1, children=[leaf])
    root = TemplateNode("my_app", is_dir=True, depth=0, children=[src])

    assert root.describe() == "my_app(dir)->[src(dir)->[main.rs(file)]]"
    assert [segments for segments, _ in iter_forest([root])] == [
        ("my_app",),
        ("my_app", "src"),
        ("my_app", "src", "main.rs"),
    ]
