"""Interactive command for planning routes and tours."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Callable, Iterator, Optional, TextIO

from .network import DEFAULT_NODES_PATH, Network, load_network
from .routing import (
    MAX_TOUR_NODES,
    RoutePath,
    TransportMode,
    find_shortest_path,
    solve_tsp,
)

Reader = Callable[[], str]
Writer = Callable[[str], None]

_MODE_NAMES = {
    TransportMode.DRIVING: "driving",
    TransportMode.HIGH_SPEED_RAIL: "high_speed_rail",
    TransportMode.FLIGHT: "flight",
    TransportMode.BUS: "bus",
}

_MODE_NAMES_CN = {
    TransportMode.DRIVING: "驾车",
    TransportMode.HIGH_SPEED_RAIL: "高铁",
    TransportMode.FLIGHT: "飞机",
    TransportMode.BUS: "公交",
}

_MENU = (
    "\n========== 交通网络路径规划系统 ==========\n"
    "1. 单点路径规划\n"
    "2. 多点旅行规划 (TSP)\n"
    "3. 退出\n"
    "请选择功能: "
)


def mode_name(mode: TransportMode) -> str:
    """Return the machine-readable name of a transport mode."""
    return _MODE_NAMES.get(mode, "unknown")


def mode_name_cn(mode: TransportMode) -> str:
    """Return the Chinese display name of a transport mode."""
    return _MODE_NAMES_CN.get(mode, "未知")


def format_route_text(network: Network, path: Optional[RoutePath]) -> str:
    """Describe a route for people to read."""
    if path is None or path.segment_count == 0:
        return "\n> 未能找到有效路径。\n"
    names = [node.name for node in network.nodes]
    lines = ["", "--- 规划结果 ---"]
    lines.extend(
        f"  {names[s.from_node_id]} --({mode_name_cn(s.mode)})--> {names[s.to_node_id]}"
        for s in path.segments
    )
    lines.append(
        f"--- 总计: 距离 {path.total_distance:.1f}km, 时间 {path.total_time:.2f}h, "
        f"成本 {path.total_cost:.2f}元 ---"
    )
    return "\n".join(lines) + "\n"


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


def format_route_json(network: Network, path: Optional[RoutePath]) -> str:
    """Describe a route as a JSON document."""
    if path is None:
        return '{"error": "No route found."}\n'
    names = [node.name for node in network.nodes]
    lines = ["{", '  "route": {', '    "segments": [']
    last = path.segment_count - 1
    for index, segment in enumerate(path.segments):
        lines += [
            "      {",
            f'        "from": {_quote(names[segment.from_node_id])},',
            f'        "to": {_quote(names[segment.to_node_id])},',
            f'        "mode": "{mode_name(segment.mode)}",',
            f'        "distance_km": {segment.distance_km:.2f},',
            f'        "time_hours": {segment.time_hours:.2f},',
            f'        "cost_yuan": {segment.cost_yuan:.2f}',
            "      }" + ("," if index < last else ""),
        ]
    lines += [
        "    ],",
        f'    "total_time_hours": {path.total_time:.2f},',
        f'    "total_cost_yuan": {path.total_cost:.2f},',
        f'    "total_distance_km": {path.total_distance:.2f}',
        "  }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def _write_route(network: Network, path: Optional[RoutePath], write: Writer) -> None:
    write(format_route_text(network, path))
    write("\n--- JSON格式输出 ---\n")
    write(format_route_json(network, path))


def _read_weights(read: Reader, write: Writer) -> Optional[tuple[float, float]]:
    write("请输入时间权重 (0.0-1.0): ")
    time_text = read()
    write("请输入成本权重 (0.0-1.0): ")
    cost_text = read()
    try:
        return float(time_text), float(cost_text)
    except ValueError:
        write("错误: 权重必须是数字。\n")
        return None


def plan_single(network: Network, read: Reader, write: Writer) -> Optional[RoutePath]:
    """Ask for two landmarks and weights, then show the best route between them."""
    write("请输入起点地标: ")
    start_name = read()
    write("请输入终点地标: ")
    end_name = read()

    start = network.find_node_id(start_name)
    end = network.find_node_id(end_name)
    if start is None or end is None:
        write("错误: 未找到输入的地标名称。\n")
        return None

    weights = _read_weights(read, write)
    if weights is None:
        return None

    path = find_shortest_path(network, start, end, *weights)
    _write_route(network, path, write)
    return path


def plan_tour(network: Network, read: Reader, write: Writer) -> Optional[RoutePath]:
    """Ask for landmarks to visit and weights, then show the best round tour."""
    write("请输入要经过的地标列表 (起点为第一个, 输入 'done' 结束):\n")
    stops: list[int] = []
    while len(stops) < MAX_TOUR_NODES:
        write(f"地标 {len(stops) + 1}: ")
        name = read()
        if name == "done":
            break
        node_id = network.find_node_id(name)
        if node_id is None:
            write(f"未找到地标: {name}\n")
        else:
            stops.append(node_id)

    if len(stops) < 2:
        write("错误: TSP需要至少2个地标。\n")
        return None

    weights = _read_weights(read, write)
    if weights is None:
        return None

    write("\n正在计算TSP路径，请稍候...\n")
    path = solve_tsp(network, stops, *weights)
    _write_route(network, path, write)
    return path


class _TokenReader:
    """Hands out whitespace-separated words from a text stream."""

    def __init__(self, stream: TextIO) -> None:
        self._tokens = self._words(stream)

    @staticmethod
    def _words(stream: TextIO) -> Iterator[str]:
        for line in stream:
            yield from line.split()

    def __call__(self) -> str:
        try:
            return next(self._tokens)
        except StopIteration:
            raise EOFError from None


def _write(text: str) -> None:
    print(text, end="", flush=True)


def _parse_choice(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Run the interactive planner menu."""
    parser = argparse.ArgumentParser(
        prog="trafficplanner", description="Plan routes through a transport network."
    )
    parser.add_argument(
        "--nodes",
        default=DEFAULT_NODES_PATH,
        help="CSV file of city,node_type,node_name,lat,lon (built-in data if missing)",
    )
    args = parser.parse_args(argv)
    network = load_network(args.nodes)

    if sys.platform == "win32":
        reconfigure = getattr(sys.stdout, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")

    read = _TokenReader(sys.stdin)
    try:
        while True:
            _write(_MENU)
            choice = _parse_choice(read())
            if choice == 1:
                plan_single(network, read, _write)
            elif choice == 2:
                plan_tour(network, read, _write)
            elif choice == 3:
                _write("感谢使用！\n")
                break
            else:
                _write("无效输入，请输入1-3之间的数字。\n")
    except EOFError:
        pass
    return 0


if __name__ == "__main__":
    raise SystemExit(main())