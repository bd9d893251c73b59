"""
Channel Contribution Tests
Hop attribution, channel widths and wire span histograms
"""

import pytest

from device.tile_grid import create_device_graph
from scraper.interconnect.channel import (
    ChannelContribution,
    ChannelContributionAnalyzer,
    connection_channel,
    is_adjacent_tiles,
    node_direction,
)
from scraper.interconnect.errors import InvariantViolation
from scraper.interconnect.junction_types import Channel, GlobalRouteDir
from scraper.interconnect.region import Region


@pytest.fixture
def analyzer():
    return ChannelContributionAnalyzer()


def referred_counts(hop_map):
    counts = {}
    for targets in hop_map.values():
        for wire in targets:
            counts[wire] = counts.get(wire, 0) + 1
    return counts


class TestHelpers:

    def test_adjacency(self, device_graph):
        home = device_graph.get_tile("INT_L_X10Y20")
        assert is_adjacent_tiles(home, device_graph.get_tile("INT_R_X11Y20"))
        assert is_adjacent_tiles(home, device_graph.get_tile("INT_L_X10Y21"))
        assert not is_adjacent_tiles(home, device_graph.get_tile("INT_R_X11Y21"))
        assert not is_adjacent_tiles(home, device_graph.get_tile("INT_L_X12Y20"))
        assert not is_adjacent_tiles(home, device_graph.get_tile("CLBLL_L_X10Y20"))

    def test_connection_channel(self, device_graph):
        home = device_graph.get_wire("INT_L_X10Y20", "EE2BEG0")
        assert connection_channel(home, device_graph.get_wire("INT_R_X11Y20", "EE2A0")) == Channel.HORIZONTAL
        assert connection_channel(home, device_graph.get_wire("INT_L_X10Y21", "NN5A2")) == Channel.VERTICAL
        assert connection_channel(home, device_graph.get_wire("CLBLL_L_X10Y20", "CLBLL_L_A5")) == Channel.LOCAL

    def test_node_direction(self, junction):
        assert node_direction(junction("EE2BEG0").node) == GlobalRouteDir.EE
        assert node_direction(junction("NN5END1").node) == GlobalRouteDir.NN
        assert node_direction(junction("GFAN0").node) == GlobalRouteDir.LOCAL


class TestNodeWireSets:

    def test_ee2_node(self, analyzer, junction):
        sets = analyzer.node_wire_sets(junction("EE2BEG0").node)
        assert sets.driving_wire is junction("EE2BEG0")
        assert [w.name for w in sets.output_wires] == ["EE2END0"]
        assert [w.name for w in sets.intermediate_wires] == ["EE2A0"]

    def test_non_switchbox_members_are_not_intermediate(self, analyzer, junction):
        sets = analyzer.node_wire_sets(junction("IMUX_L5").node)
        assert [w.name for w in sets.output_wires] == ["CLBLL_L_A5"]
        assert sets.intermediate_wires == []


class TestChannelContribution:

    def test_horizontal_node(self, analyzer, junction):
        assert analyzer.channel_contribution(junction("EE2BEG0").node) == ChannelContribution(2, 0)

    def test_vertical_node(self, analyzer, junction):
        info = analyzer.channel_contribution(junction("NN5BEG2").node)
        assert info == ChannelContribution(0, 5)
        assert info.to_dict() == {'Hz': 0, 'Vt': 5, 'length': 5}

    def test_contribution_matches_hop_map(self, analyzer, region):
        for junction in region.junctions:
            info = analyzer.channel_contribution(junction.node)
            hop_map = analyzer.adjacent_wire_graph(junction.node)
            assert info.length == sum(len(targets) for targets in hop_map.values())

    def test_node_without_adjacent_switchboxes(self, analyzer, junction):
        # NE6 members sit diagonally apart
        assert analyzer.channel_contribution(junction("NE6BEG0").node).length == 0
        assert analyzer.channel_contribution(junction("GFAN0").node).length == 0

    def test_wires_are_referred_at_most_once(self, analyzer, region):
        for junction in region.junctions:
            counts = referred_counts(analyzer.adjacent_wire_graph(junction.node))
            assert all(count == 1 for count in counts.values())

    def test_last_referrer_is_kept(self, analyzer, device_builder):
        b = device_builder()
        b.node(("INT_L_X0Y0", "D"), ("INT_L_X1Y0", "W1"), ("INT_L_X0Y1", "W2"), ("INT_L_X1Y1", "T"))
        graph = create_device_graph(b.device_model())
        node = graph.get_wire("INT_L_X0Y0", "D").node

        hop_map = analyzer.adjacent_wire_graph(node)
        assert set(referred_counts(hop_map).values()) == {1}
        # W1 is reached from D and from T; only the later referrer T keeps it
        w1, w2, t = (graph.get_wire(tile, name) for tile, name in
                     (("INT_L_X1Y0", "W1"), ("INT_L_X0Y1", "W2"), ("INT_L_X1Y1", "T")))
        assert hop_map[node.driving_wire] == {w2}
        assert hop_map[w2] == {t}
        assert hop_map[t] == {w1}
        assert hop_map[w1] == set()
        assert analyzer.channel_contribution(node) == ChannelContribution(1, 2)


class TestChannelWidths:

    def test_sample_region(self, analyzer, region):
        widths = analyzer.channel_widths(region)
        assert (widths.horizontal, widths.vertical) == (4, 5)
        assert widths.to_dict() == {'Hz': 4, 'Vt': 5}
        assert widths.region_name == region.name

    def test_unpaired_bidirectional_group_raises(self, analyzer, device_builder):
        b = device_builder()
        b.pip("INT_L_X0Y0", "LH0", "LV0", bidirectional=True)
        b.node(("INT_L_X0Y0", "LH0"), ("INT_L_X1Y0", "LH1"))
        b.node(("INT_L_X0Y0", "LV0"), ("INT_L_X0Y1", "LV1"))
        graph = create_device_graph(b.device_model())
        region = Region(graph.get_tile("INT_L_X0Y0"))

        with pytest.raises(InvariantViolation, match="INT_L_X0Y0"):
            analyzer.channel_widths(region)

    def test_local_bidirectional_pair_is_skipped(self, analyzer, device_builder):
        b = device_builder()
        b.pip("INT_L_X0Y0", "LH0", "LH12", bidirectional=True)
        graph = create_device_graph(b.device_model())
        widths = analyzer.channel_widths(Region(graph.get_tile("INT_L_X0Y0")))
        assert (widths.horizontal, widths.vertical) == (0, 0)


class TestWireSpanHistogram:

    def test_sample_histogram(self, region):
        histogram = ChannelContributionAnalyzer.wire_span_histogram([region])
        assert histogram == {
            region.name: {
                (2, 0): 1,
                (2, 3): 1,
                (0, 5): 1,
                (0, -5): 1,
                (0, -9): 1,
                (-2, 0): 1,
            }
        }
