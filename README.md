# trafficplanner

Plan journeys across a network of cities. Each city has a landmark and may
also have an airport and a high-speed rail station. Routes combine driving,
bus, high-speed rail and flights. The planner picks a route by a weighted
blend of travel time and cost.

## Installation

```
pip install .
```

For the tests:

```
pip install .[test]
pytest
```

## Interactive use

```
trafficplanner
```

Option:

- `--nodes PATH`: the CSV file to read the network from. The default is
  `data/nodes.csv`. If the file cannot be opened, the program uses a built-in
  table of 50 Chinese cities.

The program shows a menu and reads answers from standard input as words
separated by whitespace. Node names therefore cannot contain spaces.

1. Single route planning. Enter a start node name and an end node name, for
   example `故宫` and `外滩`. Then enter a time weight and a cost weight, each
   between 0.0 and 1.0.
2. Multi-stop tour (TSP). Enter up to 10 node names. The first one is the
   start. Finish the list with `done`. Unknown names are reported and
   skipped. At least two stops are needed. The planner then finds the
   cheapest round trip that visits every stop and comes back to the start.
3. Exit.

Each result is printed twice: once as a readable summary and once as JSON.
If no route is found, the program says so. The program also ends when
standard input runs out.

## Network file

Each line of the CSV file has this form:

```
city,node_type,node_name,latitude,longitude
```

`node_type` is one of `landmark`, `airport`, `hsr` or `railway`.
`railway` means the same as `hsr`.

The following lines are skipped:

- blank lines
- lines starting with `#`
- malformed lines
- lines with an unknown node type

Node ids are given in file order. City ids are given in the order in which
each city first appears. For each city, the first landmark, airport and
station become its representative nodes.

## Routing rules

| Mode | Where it runs | Speed | Cost |
|------|---------------|-------|------|
| Flight | Between airports of different cities | 800 km/h | 0.6 yuan/km |
| High-speed rail | Between stations of different cities | 250 km/h | 0.4 yuan/km |
| Driving | Between landmarks of different cities, or between nodes of different kinds in the same city | 60 km/h | 0.8 yuan/km |
| Bus | Same places as driving | 40 km/h | 0.2 yuan/km |

A bus trip longer than 300 km costs 1.5 times the normal fare. Hops shorter
than 0.1 km are ignored.

## Library use

```python
from trafficplanner.network import builtin_network, load_network
from trafficplanner.routing import find_shortest_path, solve_tsp

net = builtin_network()          # or load_network("data/nodes.csv")
start = net.find_node_id("故宫")
end = net.find_node_id("外滩")

path = find_shortest_path(net, start, end, 0.5, 0.5)
if path is not None:
    for seg in path.segments:
        print(net.nodes[seg.from_node_id].name, seg.mode.name,
              net.nodes[seg.to_node_id].name)
    print(path.total_distance, path.total_time, path.total_cost)

stops = [net.find_node_id(n) for n in ("故宫", "外滩", "西湖")]
tour = solve_tsp(net, stops, 0.5, 0.5)
```

### `trafficplanner.network`

- `Network` holds `nodes` (a list of `Node`) and `cities` (a list of
  `CityMeta`).
  - `find_node_id(name)` returns the id of the first node with that name, or
    `None`.
  - `find_city_id(name)` returns the id of the city with that name, or `None`.
- `parse_nodes(lines)` builds a `Network` from CSV lines.
- `load_network(path)` reads the network from a file. It falls back to
  `builtin_network()` if the file cannot be opened.

### `trafficplanner.routing`

- `find_shortest_path(network, start_node_id, end_node_id, time_weight, cost_weight)`
  returns a `RoutePath`. It returns `None` when a node id is out of range or
  the end cannot be reached.
- `solve_tsp(network, node_ids, time_weight, cost_weight)` returns the
  cheapest round tour as a `RoutePath`.
  - It returns `None` for fewer than two nodes or when no tour exists.
  - It raises `ValueError` for more than 10 nodes.
- `travel_info(distance_km, mode, from_node, to_node)` returns the
  `TravelInfo` (time and cost) of one hop. It returns `None` if the mode
  cannot link the two nodes.
- `RoutePath` has these members:
  - `segments`: a list of `PathSegment`.
  - `segment_count`, `total_time`, `total_cost` and `total_distance`.
  - `prepend(other)`, which puts the hops of another route in front.

### `trafficplanner.geo`

- `calculate_distance(lat1, lon1, lat2, lon2)` returns the great-circle
  distance in kilometres.

### `trafficplanner.cli`

- `format_route_text(network, path)` returns the readable summary.
- `format_route_json(network, path)` returns the JSON text.
- `main(argv=None)` runs the interactive menu.