from __future__ import annotations

import pytest

from webdeploy_sass.pipeline.memory import MemoryBuildContext, MemoryDependencyGraph, MemoryTarget


def test_target_name_is_basename():
    assert MemoryTarget("styles/theme/app.scss").target_name == "app.scss"


def test_content_requires_loading():
    target = MemoryTarget("a.scss", data=b"a {}")

    with pytest.raises(RuntimeError):
        _ = target.content

    assert target.load_content() == b"a {}"
    assert target.content == b"a {}"
    assert target.is_loaded


def test_resolve_output_target_replaces_sources():
    source = MemoryTarget("styles/app.scss", data=b"x")
    context = MemoryBuildContext([source])

    output = context.resolve_output_target("styles/app.css", [source])
    output.write(b"body{}")

    assert context.paths == ["styles/app.css"]
    assert context.get("styles/app.css").data == b"body{}"


def test_resolve_output_target_without_path_removes():
    source = MemoryTarget("a.scss")
    context = MemoryBuildContext([source])

    assert context.resolve_output_target(None, [source]) is None
    assert context.paths == []


def test_remove_targets_can_sever_edges():
    keep = MemoryTarget("keep.scss")
    drop = MemoryTarget("drop.scss")
    context = MemoryBuildContext([keep, drop])
    context.graph.add_edge("main.scss", "keep.scss")
    context.graph.add_edge("main.scss", "drop.scss")

    context.remove_targets([drop], sever_graph_edges=True)

    assert context.paths == ["keep.scss"]
    assert context.graph.edges == {("main.scss", "keep.scss")}


def test_remove_targets_without_severing_keeps_edges():
    drop = MemoryTarget("drop.scss")
    context = MemoryBuildContext([drop])
    context.graph.add_edge("main.scss", "drop.scss")

    context.remove_targets([drop], sever_graph_edges=False)

    assert context.graph.has_node("drop.scss")


def test_graph_dependencies_of():
    graph = MemoryDependencyGraph()
    graph.add_edge("a", "b")
    graph.add_edge("a", "c")
    graph.add_edge("b", "c")

    assert graph.dependencies_of("a") == {"b", "c"}
