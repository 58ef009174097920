import json

import pytest

from core.exceptions import DanglingEdgeError, GraphInvariantError, GraphLoadError
from core.runtime.graph_info import build_and_validate, load_and_validate
from graph.builder import build_conversation_graph, resolve_root
from graph.conversation_graph import ConversationGraph
from graph.graph_builder import GraphBuilder
from graph.preprocess import normalize_raw_to_graphdef
from graph.validator import validate_graph


def test_normalize_reads_answers_and_keywords(sample_config):
    graph_def = normalize_raw_to_graphdef(sample_config)

    assert list(graph_def.nodes) == ["welcome", "weather", "bye"]
    assert graph_def.nodes["welcome"].root is True
    assert graph_def.nodes["weather"].answers == ["It is sunny."]
    assert [(e.source, e.target, e.keywords) for e in graph_def.edges] == [
        ("welcome", "weather", ["weather", "rain"]),
        ("welcome", "bye", ["bye"]),
        ("weather", "welcome", ["back"]),
    ]


def test_normalize_keeps_extra_fields_as_attrs():
    graph_def = normalize_raw_to_graphdef({"a": {"answers": "hi", "description": "entry"}})
    assert graph_def.nodes["a"].answers == ["hi"]
    assert graph_def.nodes["a"].attrs == {"description": "entry"}


def test_plain_string_successor_has_no_keywords():
    graph_def = normalize_raw_to_graphdef({"a": {"answers": ["x"], "next_nodes": ["b"]}, "b": {"answers": ["y"]}})
    assert graph_def.edges[0].keywords == []


@pytest.mark.parametrize("raw", [{}, [], "nope", {"a": "not an object"}])
def test_normalize_rejects_bad_shapes(raw):
    with pytest.raises(GraphLoadError):
        normalize_raw_to_graphdef(raw)


def test_build_wires_edge_handles(sample_config):
    g = build_conversation_graph(normalize_raw_to_graphdef(sample_config))

    welcome = g.node("welcome")
    weather = g.node("weather")
    assert g.root is welcome
    assert [g.child_node(e).id for e in g.child_edges(welcome)] == ["weather", "bye"]
    assert [g.parent_node(e).id for e in g.incoming_edges(welcome)] == ["weather"]
    assert weather.incoming_edges == [0]
    assert g.node("bye").is_terminal


def test_dangling_edge_is_rejected():
    raw = {"a": {"answers": ["x"], "next_nodes": [{"name": "ghost", "keywords": ["boo"]}]}}
    with pytest.raises(DanglingEdgeError):
        build_conversation_graph(normalize_raw_to_graphdef(raw))


def test_root_defaults_to_first_node_without_incoming_edges():
    raw = {
        "b": {"answers": ["b"], "next_nodes": [{"name": "c", "keywords": ["c"]}]},
        "a": {"answers": ["a"], "next_nodes": [{"name": "b", "keywords": ["b"]}]},
        "c": {"answers": ["c"]},
    }
    assert resolve_root(normalize_raw_to_graphdef(raw)) == "a"


def test_root_defaults_to_first_node_in_a_cycle():
    raw = {
        "x": {"answers": ["x"], "next_nodes": [{"name": "y", "keywords": ["y"]}]},
        "y": {"answers": ["y"], "next_nodes": [{"name": "x", "keywords": ["x"]}]},
    }
    assert resolve_root(normalize_raw_to_graphdef(raw)) == "x"


def test_two_flagged_roots_is_an_error():
    raw = {"a": {"root": True, "answers": ["a"]}, "b": {"root": True, "answers": ["b"]}}
    with pytest.raises(GraphLoadError):
        resolve_root(normalize_raw_to_graphdef(raw))


def test_validator_accepts_sample(sample_config):
    report = validate_graph(build_conversation_graph(normalize_raw_to_graphdef(sample_config)))
    assert report.ok
    assert report.root == "welcome"
    assert report.terminal_nodes == ["bye"]
    assert report.unreachable_nodes == []


def test_validator_flags_reachable_node_without_answers():
    g = ConversationGraph()
    g.add_node("root", answers=["hi"])
    g.add_node("mute")
    g.add_edge("root", "mute", keywords=["go"])
    g.set_root("root")

    report = validate_graph(g)
    assert not report.ok
    assert report.nodes_without_answers == ["mute"]


def test_validator_only_warns_for_unreachable_nodes():
    g = ConversationGraph()
    g.add_node("root", answers=["hi"])
    g.add_node("island")
    g.add_node("linked", answers=["x"])
    g.add_edge("root", "linked")
    g.set_root("root")

    report = validate_graph(g)
    assert report.ok
    assert report.unreachable_nodes == ["island"]
    assert report.edges_without_keywords == [0]
    assert len(report.warnings) == 3


def test_validator_requires_root():
    g = ConversationGraph()
    g.add_node("a", answers=["a"])
    report = validate_graph(g)
    assert not report.ok
    assert report.errors


def test_graph_builder_roundtrip(tmp_path, sample_config):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(sample_config), encoding="utf-8")

    gb = GraphBuilder()
    assert gb.load_from_json(str(path))
    assert gb.build_graph()

    info = gb.export_graph_info()
    assert info["graph_stats"] == {"nodes": 3, "edges": 3, "keywords": 4, "root": "welcome", "valid": True}
    assert gb.get_successors("welcome") == ["weather", "bye"]
    assert gb.get_predecessors("welcome") == ["weather"]
    assert gb.get_successors("missing") == []
    assert gb.get_node_info("weather")["next_nodes"] == [{"name": "welcome", "keywords": ["back"]}]


def test_graph_builder_reports_missing_and_broken_files(tmp_path):
    gb = GraphBuilder()
    assert not gb.load_from_json(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert not gb.load_from_json(str(broken))


def test_load_and_validate(tmp_path, sample_config):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(sample_config), encoding="utf-8")

    info = load_and_validate(str(path))
    assert info.root == "welcome"
    assert len(info.graph) == 3


def test_load_and_validate_raises_on_invariant_errors():
    raw = {"a": {"answers": ["a"], "next_nodes": [{"name": "b", "keywords": ["b"]}]}, "b": {"answers": []}}
    with pytest.raises(GraphInvariantError):
        build_and_validate(raw)


def test_load_and_validate_raises_on_missing_file(tmp_path):
    with pytest.raises(GraphLoadError):
        load_and_validate(str(tmp_path / "nope.json"))


def test_bundled_sample_graph_is_valid():
    from core.config import DEFAULT_CONFIG_PATH

    info = load_and_validate(DEFAULT_CONFIG_PATH)
    assert info.root == "greeting"
    assert info.report.unreachable_nodes == []


def test_networkx_view_keeps_parallel_edges():
    g = ConversationGraph()
    g.add_node("a", answers=["a"])
    g.add_node("b", answers=["b"])
    g.add_edge("a", "b", keywords=["one"])
    g.add_edge("a", "b", keywords=["two"])
    g.set_root("a")

    nxg = g.to_networkx()
    assert nxg.number_of_edges("a", "b") == 2


def test_load_and_validate_wraps_undecodable_file(tmp_path):
    path = tmp_path / "graph.json"
    path.write_bytes(b"\xff\xfe{}")
    with pytest.raises(GraphLoadError):
        load_and_validate(str(path))


def test_load_and_validate_wraps_directory_path(tmp_path):
    with pytest.raises(GraphLoadError):
        load_and_validate(str(tmp_path))


def test_single_string_successor_is_one_edge():
    raw = {
        "a": {"answers": ["a"], "next_nodes": "bb"},
        "bb": {"answers": ["bb"]},
        "b": {"answers": ["b"]},
    }
    graph_def = normalize_raw_to_graphdef(raw)
    assert [(e.source, e.target) for e in graph_def.edges] == [("a", "bb")]


def test_single_edge_object_successor():
    raw = {
        "a": {"answers": ["a"], "next_nodes": {"name": "b", "keywords": ["go"]}},
        "b": {"answers": ["b"]},
    }
    graph_def = normalize_raw_to_graphdef(raw)
    assert [(e.target, e.keywords) for e in graph_def.edges] == [("b", ["go"])]


def test_successors_of_wrong_type_are_rejected():
    with pytest.raises(GraphLoadError):
        normalize_raw_to_graphdef({"a": {"answers": ["a"], "next_nodes": 5}})


@pytest.mark.parametrize("flag", ["false", "true", 1, 0, None])
def test_root_flag_must_be_boolean(flag):
    with pytest.raises(GraphLoadError):
        normalize_raw_to_graphdef({"a": {"answers": ["a"], "root": flag}})
