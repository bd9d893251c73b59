# channel.py
"""
Channel Contribution Analyzer
Attributes the length of a node to horizontal and vertical routing channels

A wire cannot be asked which way it runs, so the direction of each hop is
recreated from which wires of the node sit in adjacent switchbox tiles.
Tile coordinates are switchbox positions, so only wires in switchbox tiles
are considered and hops are counted in switchboxes spanned.
"""

from collections import Counter, defaultdict, deque
from dataclasses import dataclass, field
from re import Pattern
from typing import Dict, Iterable, List, Set, Tuple

from configs.scraper_settings import SWITCHBOX_TILE_PATTERN
from device.tile_grid import RoutingNode, RoutingTile, RoutingWire
from scraper.interconnect.errors import InvariantViolation
from scraper.interconnect.external import direction_between, same_coordinates
from scraper.interconnect.junction_types import Channel, GlobalRouteDir
from scraper.interconnect.region import Region


@dataclass
class NodeWireSets:
    """
    A node's members split by role
    """
    driving_wire: RoutingWire
    output_wires: List[RoutingWire] = field(default_factory=list)
    intermediate_wires: List[RoutingWire] = field(default_factory=list)


@dataclass(frozen=True)
class ChannelContribution:
    horizontal: int
    vertical: int

    @property
    def length(self) -> int:
        return self.horizontal + self.vertical

    def to_dict(self) -> Dict[str, int]:
        return {'Hz': self.horizontal, 'Vt': self.vertical, 'length': self.length}


@dataclass(frozen=True)
class ChannelWidths:
    region_name: str
    horizontal: int
    vertical: int

    def to_dict(self) -> Dict[str, int]:
        return {'Hz': self.horizontal, 'Vt': self.vertical}


def is_adjacent_tiles(t1: RoutingTile, t2: RoutingTile) -> bool:
    """
    One step apart on exactly one axis
    """
    dx = abs(t1.x - t2.x)
    dy = abs(t1.y - t2.y)
    return (dx == 1 and dy == 0) or (dx == 0 and dy == 1)


def connection_channel(w1: RoutingWire, w2: RoutingWire) -> Channel:
    if same_coordinates(w1.tile, w2.tile):
        return Channel.LOCAL
    if w1.tile.y == w2.tile.y:
        return Channel.HORIZONTAL
    return Channel.VERTICAL


def node_direction(node: RoutingNode) -> GlobalRouteDir:
    """
    Direction from the driving wire to the first output wire of the node
    """
    if len(node.wires) < 2:
        return GlobalRouteDir.LOCAL
    return direction_between(node.wires[0].tile, node.wires[1].tile)


class ChannelContributionAnalyzer:
    """
    Channel usage of nodes and channel width estimates of regions

    Usage:
        analyzer = ChannelContributionAnalyzer()
        info = analyzer.channel_contribution(wire.node)
        widths = analyzer.channel_widths(region)
    """

    def __init__(self, switchbox_pattern: Pattern = SWITCHBOX_TILE_PATTERN):
        self.switchbox_pattern = switchbox_pattern

    def is_switchbox_tile(self, tile: RoutingTile) -> bool:
        return self.switchbox_pattern.search(tile.name) is not None

    def node_wire_sets(self, node: RoutingNode) -> NodeWireSets:
        """
        Split the node into its driving wire, output wires and intermediate wires

        Output wires are the start wires of downhill PIPs outside the tile of
        the driving wire; FAN_BOUNCE style nodes also have downhill PIPs inside
        it. Intermediate wires are restricted to switchbox tiles.
        """
        driving = node.driving_wire

        outputs: List[RoutingWire] = []
        for pip in node.all_downhill_pips:
            if pip.start_wire.tile is not driving.tile and pip.start_wire not in outputs:
                outputs.append(pip.start_wire)

        intermediates = [
            w for w in node.wires[1:]
            if w not in outputs and self.is_switchbox_tile(w.tile)
        ]
        return NodeWireSets(driving, outputs, intermediates)

    def adjacent_wire_graph(self, node: RoutingNode) -> Dict[RoutingWire, Set[RoutingWire]]:
        """
        Ordered map of each wire to its forward adjacent wires

        Starting at the driving wire, wires in adjacent switchbox tiles are
        linked once (never in both directions). Afterwards a wire referred to
        by several wires keeps only the last of them in exploration order.
        """
        wire_sets = self.node_wire_sets(node)
        in_switchboxes = [w for w in node.wires if self.is_switchbox_tile(w.tile)]
        # output wires are considered last
        candidates = [w for w in in_switchboxes if w not in wire_sets.output_wires]
        candidates += [w for w in in_switchboxes if w in wire_sets.output_wires]

        hop_map: Dict[RoutingWire, Set[RoutingWire]] = {}
        pending = deque([wire_sets.driving_wire])

        while pending:
            w1 = pending.popleft()
            if w1 in hop_map:
                continue
            hop_map[w1] = set()
            for w2 in candidates:
                if w2 is w1 or not is_adjacent_tiles(w1.tile, w2.tile):
                    continue
                if w2 in hop_map and w1 in hop_map[w2]:
                    continue
                hop_map[w1].add(w2)
                if w2 not in hop_map:
                    pending.appendleft(w2)

        self._keep_closest_referrers(hop_map)
        return hop_map

    @staticmethod
    def _keep_closest_referrers(hop_map: Dict[RoutingWire, Set[RoutingWire]]):
        for wire in hop_map:
            referring = [w2 for w2, targets in hop_map.items() if wire in targets]
            if len(referring) <= 1:
                continue

            # hops only join adjacent tiles, so all referrers are equally close;
            # the latest one in exploration order is kept
            closest = referring[-1]

            for w2 in referring:
                if w2 is not closest:
                    hop_map[w2].discard(wire)

    def channel_contribution(self, node: RoutingNode) -> ChannelContribution:
        """
        Count the horizontal and vertical hops of a node
        """
        counts = Counter()
        for w1, adjacent in self.adjacent_wire_graph(node).items():
            for w2 in adjacent:
                counts[connection_channel(w1, w2)] += 1
        return ChannelContribution(counts[Channel.HORIZONTAL], counts[Channel.VERTICAL])

    def channel_widths(self, region: Region) -> ChannelWidths:
        """
        Estimate the horizontal and vertical channel width of a region

        Every non-bidirectional output junction contributes its node. A
        bidirectional wire shows up as two junctions, so bidirectional
        junctions are grouped by (length, direction) and one wire of each
        pair is counted.

        Raises:
            InvariantViolation: on an unpaired or diagonal bidirectional group
        """
        hz = 0
        vt = 0

        for junction in region.out_junctions:
            info = self.channel_contribution(junction.node)
            hz += info.horizontal
            vt += info.vertical

        bidir_groups: Dict[Tuple[int, GlobalRouteDir], List[RoutingWire]] = defaultdict(list)
        for junction in region.bidir_junctions:
            length = self.channel_contribution(junction.node).length
            bidir_groups[(length, node_direction(junction.node))].append(junction)

        for (length, direction), wires in bidir_groups.items():
            if len(wires) % 2 != 0:
                raise InvariantViolation(
                    f"Non-pair of bidirectional wires ({len(wires)}) with length {length} "
                    f"and direction {direction.value}; is the wire crossing some IP?",
                    junction=wires[0].name,
                    region=region.name,
                )
            pairs = len(wires) // 2
            if direction == GlobalRouteDir.LOCAL:
                continue
            if direction.is_diagonal:
                raise InvariantViolation(
                    f"Diagonal bidirectional wire ({direction.value})",
                    junction=wires[0].name,
                    region=region.name,
                )
            if direction in (GlobalRouteDir.NN, GlobalRouteDir.SS):
                vt += pairs * length
            else:
                hz += pairs * length

        return ChannelWidths(region.name, hz, vt)

    @staticmethod
    def wire_span_histogram(regions: Iterable[Region]) -> Dict[str, Dict[Tuple[int, int], int]]:
        """
        Per region, the number of routing junctions spanning each (dx, dy)
        """
        histogram = {}
        for region in regions:
            spans = Counter()
            for junction in region.routing_junctions:
                span = region.resolver.wire_span(junction)
                if span is not None:
                    spans[span] += 1
            histogram[region.name] = dict(spans)
        return histogram


__all__ = [
    'NodeWireSets',
    'ChannelContribution',
    'ChannelWidths',
    'ChannelContributionAnalyzer',
    'is_adjacent_tiles',
    'connection_channel',
    'node_direction',
]
