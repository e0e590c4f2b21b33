import io
import json
import sys

import pytest

from trafficplanner.cli import (
    format_route_json,
    format_route_text,
    main,
    mode_name,
    mode_name_cn,
    plan_single,
    plan_tour,
)
from trafficplanner.network import parse_nodes
from trafficplanner.routing import RoutePath, TransportMode, find_shortest_path

NODES = """\
Alpha,landmark,AlphaTower,30.0,110.0
Alpha,airport,AlphaAirport,30.1,110.1
Alpha,hsr,AlphaStation,30.05,110.05
Beta,landmark,BetaTower,30.0,120.0
Beta,airport,BetaAirport,30.1,120.1
Beta,hsr,BetaStation,30.05,120.05
"""


@pytest.fixture
def network():
    return parse_nodes(NODES.splitlines(keepends=True))


def reader(*tokens):
    remaining = iter(tokens)

    def read():
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read


class Output:
    def __init__(self):
        self.parts = []

    def __call__(self, text):
        self.parts.append(text)

    @property
    def text(self):
        return "".join(self.parts)


def test_mode_names():
    assert mode_name(TransportMode.DRIVING) == "driving"
    assert mode_name(TransportMode.HIGH_SPEED_RAIL) == "high_speed_rail"
    assert mode_name(TransportMode.FLIGHT) == "flight"
    assert mode_name(TransportMode.BUS) == "bus"
    assert mode_name("teleport") == "unknown"


def test_mode_names_cn():
    assert mode_name_cn(TransportMode.DRIVING) == "驾车"
    assert mode_name_cn(TransportMode.FLIGHT) == "飞机"
    assert mode_name_cn("teleport") == "未知"


def test_text_without_route(network):
    assert format_route_text(network, None) == "\n> 未能找到有效路径。\n"
    assert format_route_text(network, RoutePath()) == "\n> 未能找到有效路径。\n"


def test_json_without_route(network):
    assert format_route_json(network, None) == '{"error": "No route found."}\n'


def test_text_lists_every_hop(network):
    path = find_shortest_path(network, 0, 3, 1.0, 0.0)
    text = format_route_text(network, path)
    assert "--- 规划结果 ---" in text
    assert "  AlphaTower --(驾车)--> AlphaAirport" in text
    assert "  AlphaAirport --(飞机)--> BetaAirport" in text
    assert f"距离 {path.total_distance:.1f}km" in text


def test_json_is_valid_and_matches_route(network):
    path = find_shortest_path(network, 0, 3, 1.0, 0.0)
    document = json.loads(format_route_json(network, path))
    route = document["route"]
    assert [s["from"] for s in route["segments"]] == [
        network.nodes[s.from_node_id].name for s in path.segments
    ]
    assert [s["mode"] for s in route["segments"]] == [mode_name(s.mode) for s in path.segments]
    assert route["total_time_hours"] == round(path.total_time, 2)
    assert route["total_cost_yuan"] == round(path.total_cost, 2)


def test_json_of_empty_route_parses(network):
    document = json.loads(format_route_json(network, RoutePath()))
    assert document["route"]["segments"] == []
    assert document["route"]["total_distance_km"] == 0


def test_plan_single_finds_route(network):
    out = Output()
    path = plan_single(network, reader("AlphaTower", "BetaTower", "0", "1"), out)
    assert [s.mode for s in path.segments] == [TransportMode.BUS]
    assert "--- JSON格式输出 ---" in out.text
    assert '"mode": "bus"' in out.text


def test_plan_single_unknown_name(network):
    out = Output()
    assert plan_single(network, reader("Nowhere", "BetaTower"), out) is None
    assert out.text.endswith("错误: 未找到输入的地标名称。\n")


def test_plan_single_bad_weight(network):
    out = Output()
    assert plan_single(network, reader("AlphaTower", "BetaTower", "fast", "1"), out) is None
    assert "错误: 权重必须是数字。" in out.text


def test_plan_tour_skips_unknown_names(network):
    out = Output()
    path = plan_tour(
        network, reader("AlphaTower", "Nowhere", "BetaTower", "done", "1", "0"), out
    )
    assert "未找到地标: Nowhere" in out.text
    assert path.segments[0].from_node_id == network.find_node_id("AlphaTower")
    assert path.segments[-1].to_node_id == network.find_node_id("AlphaTower")


def test_plan_tour_needs_two_landmarks(network):
    out = Output()
    assert plan_tour(network, reader("AlphaTower", "done"), out) is None
    assert out.text.endswith("错误: TSP需要至少2个地标。\n")


def test_plan_tour_stops_asking_at_limit(network):
    out = Output()
    tokens = ["AlphaTower"] * 10 + ["1", "0"]
    assert plan_tour(network, reader(*tokens), out) is None
    assert "地标 11" not in out.text
    assert "> 未能找到有效路径。" in out.text


@pytest.fixture
def nodes_file(tmp_path):
    path = tmp_path / "nodes.csv"
    path.write_text(NODES, encoding="utf-8")
    return str(path)


def run_main(monkeypatch, capsys, argv, stdin_text):
    monkeypatch.setattr(sys, "stdin", io.StringIO(stdin_text))
    status = main(argv)
    return status, capsys.readouterr().out


def test_main_exits_on_choice_three(monkeypatch, capsys, nodes_file):
    status, out = run_main(monkeypatch, capsys, ["--nodes", nodes_file], "3\n")
    assert status == 0
    assert out.endswith("感谢使用！\n")


def test_main_rejects_invalid_choice(monkeypatch, capsys, nodes_file):
    _, out = run_main(monkeypatch, capsys, ["--nodes", nodes_file], "abc\n7\n3\n")
    assert out.count("无效输入，请输入1-3之间的数字。") == 2


def test_main_plans_a_route(monkeypatch, capsys, nodes_file):
    _, out = run_main(
        monkeypatch, capsys, ["--nodes", nodes_file], "1\nAlphaTower BetaTower\n1\n0\n3\n"
    )
    assert "AlphaAirport --(飞机)--> BetaAirport" in out
    assert "感谢使用！" in out


def test_main_stops_at_end_of_input(monkeypatch, capsys, nodes_file):
    status, out = run_main(monkeypatch, capsys, ["--nodes", nodes_file], "")
    assert status == 0
    assert "交通网络路径规划系统" in out
    assert "感谢使用！" not in out