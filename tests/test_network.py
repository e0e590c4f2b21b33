import pytest

from trafficplanner.network import (
    CityMeta,
    Network,
    Node,
    NodeType,
    builtin_network,
    load_network,
    parse_nodes,
)

SAMPLE = [
    "# city,node_type,node_name,lat,lon\n",
    "\n",
    "北京,landmark,故宫,39.9163,116.3972\n",
    "北京 , airport , 首都国际机场 , 40.0801 , 116.5845\n",
    "上海,railway,上海虹桥站,31.1946,121.3267\r\n",
    "上海,landmark,外滩,31.2393,121.4839\n",
    "北京,hsr,北京南站,39.8652,116.3786\n",
    "北京,landmark,天安门,39.9087,116.3975\n",
    "上海,harbour,码头,31.0,121.0\n",
    "broken line without enough fields\n",
]


@pytest.fixture
def sample():
    return parse_nodes(SAMPLE)


def test_parse_skips_comments_blank_unknown_and_broken(sample):
    assert [node.name for node in sample.nodes] == [
        "故宫", "首都国际机场", "上海虹桥站", "外滩", "北京南站", "天安门",
    ]


def test_node_ids_match_positions(sample):
    assert [node.id for node in sample.nodes] == list(range(len(sample.nodes)))


def test_cities_in_order_of_first_appearance(sample):
    assert [city.city_name for city in sample.cities] == ["北京", "上海"]
    assert [city.city_id for city in sample.cities] == [0, 1]


def test_whitespace_is_trimmed(sample):
    airport = sample.nodes[1]
    assert airport == Node(1, 0, NodeType.AIRPORT, "首都国际机场", 40.0801, 116.5845)


def test_railway_alias_and_carriage_return(sample):
    station = sample.nodes[2]
    assert station.kind is NodeType.HSR_STATION
    assert station.longitude == 121.3267


def test_first_node_of_each_kind_represents_city(sample):
    assert sample.cities[0] == CityMeta(0, "北京", 0, 1, 4)
    assert sample.cities[1] == CityMeta(1, "上海", 3, None, 2)


def test_node_city_ids_refer_to_cities(sample):
    for node in sample.nodes:
        assert sample.cities[node.city_id].city_name in {"北京", "上海"}
    assert sample.nodes[5].city_id == 0


def test_find_node_and_city(sample):
    assert sample.find_node_id("外滩") == 3
    assert sample.find_node_id("nowhere") is None
    assert sample.find_city_id("上海") == 1
    assert sample.find_city_id("nowhere") is None


def test_latitude_with_trailing_garbage_is_rejected():
    network = parse_nodes(["A,landmark,X,12.5abc,100.0\n"])
    assert network.nodes == []


def test_longitude_with_trailing_garbage_is_accepted():
    network = parse_nodes(["A,landmark,X,12.5,100.25 extra\n"])
    assert network.nodes[0].longitude == 100.25


def test_empty_text_field_is_rejected():
    network = parse_nodes(["A,  ,X,1,2\n", "A,landmark,,1,2\n"])
    assert network.nodes == []


def test_overlong_city_name_is_rejected():
    network = parse_nodes(["C" * 60 + ",landmark,X,1,2\n", "C" * 49 + ",landmark,Y,1,2\n"])
    assert [node.name for node in network.nodes] == ["Y"]


def test_type_name_is_case_sensitive():
    network = parse_nodes(["A,Landmark,X,1,2\n"])
    assert network.cities == []


def test_empty_network():
    network = Network()
    assert network.find_node_id("故宫") is None
    assert network.find_city_id("北京") is None


def test_builtin_first_entries():
    network = builtin_network()
    assert network.cities[0].city_name == "北京"
    assert network.nodes[0] == Node(0, 0, NodeType.LANDMARK, "故宫", 39.9163, 116.3972)
    assert network.find_node_id("故宫") == 0


def test_builtin_counts_are_consistent():
    network = builtin_network()
    expected = sum(
        1
        + (city.airport_node_id is not None)
        + (city.hsr_node_id is not None)
        for city in network.cities
    )
    assert len(network.nodes) == expected
    assert all(city.landmark_node_id is not None for city in network.cities)


def test_builtin_cities_without_facilities():
    network = builtin_network()
    lishui = network.cities[network.find_city_id("丽水")]
    assert lishui.airport_node_id is None
    assert lishui.hsr_node_id is None
    suzhou = network.cities[network.find_city_id("苏州")]
    assert suzhou.airport_node_id is None
    assert network.nodes[suzhou.hsr_node_id].name == "苏州站"


def test_builtin_node_kinds_match_city_meta():
    network = builtin_network()
    for city in network.cities:
        assert network.nodes[city.landmark_node_id].kind is NodeType.LANDMARK
        if city.airport_node_id is not None:
            assert network.nodes[city.airport_node_id].kind is NodeType.AIRPORT
        if city.hsr_node_id is not None:
            assert network.nodes[city.hsr_node_id].kind is NodeType.HSR_STATION


def test_load_network_from_file(tmp_path):
    path = tmp_path / "nodes.csv"
    path.write_text("".join(SAMPLE), encoding="utf-8")
    network = load_network(str(path))
    assert [city.city_name for city in network.cities] == ["北京", "上海"]
    assert network.find_node_id("天安门") == 5


def test_load_network_falls_back_to_builtin(tmp_path):
    network = load_network(str(tmp_path / "missing.csv"))
    assert network == builtin_network()