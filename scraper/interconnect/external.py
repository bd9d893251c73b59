# external.py
"""
External Connectivity Resolver
Follows a junction's node out of its home switchbox

A junction either drives a node (its far end is where the node's downhill
PIPs land) or is driven by one (its far end is the node's driving wire).
Everything is decided from tile coordinates and node membership only.
"""

from typing import Dict, List, Optional, Sequence, Tuple

from configs.scraper_settings import MULTIDROP_LONG_WIRES
from device.tile_grid import RoutingTile, RoutingWire
from scraper.interconnect.junction_types import GlobalRouteDir


def direction_between(from_tile: RoutingTile, to_tile: RoutingTile) -> GlobalRouteDir:
    """
    Compass direction of `to_tile` as seen from `from_tile`
    """
    dx = to_tile.x - from_tile.x
    dy = to_tile.y - from_tile.y

    if dx == 0 and dy == 0:
        return GlobalRouteDir.LOCAL
    if dx == 0:
        return GlobalRouteDir.NN if dy > 0 else GlobalRouteDir.SS
    if dy == 0:
        return GlobalRouteDir.EE if dx > 0 else GlobalRouteDir.WW
    if dx < 0:
        return GlobalRouteDir.NW if dy > 0 else GlobalRouteDir.SW
    return GlobalRouteDir.NE if dy > 0 else GlobalRouteDir.SE


def same_coordinates(t1: RoutingTile, t2: RoutingTile) -> bool:
    """
    Tiles sharing coordinates, ie. a switchbox and its adjacent CLB
    """
    return t1.x == t2.x and t1.y == t2.y


class ExternalConnectivityResolver:
    """
    Resolves where the node of a junction leaves its home tile

    Ambiguous fan-outs are resolved to the furthest tile. Each ambiguous
    junction is recorded once in `diagnostics`, in the order first seen;
    resolving the same junction again adds nothing.

    Usage:
        resolver = ExternalConnectivityResolver(tile)
        tile = resolver.external_tile(wire)
        length = resolver.wire_length(wire)
    """

    def __init__(self, home_tile: RoutingTile,
                 region_name: Optional[str] = None,
                 multidrop_long_wires: Sequence[str] = MULTIDROP_LONG_WIRES,
                 verbose: bool = False):
        self.home_tile = home_tile
        self.region_name = region_name or home_tile.name
        self.multidrop_long_wires = tuple(multidrop_long_wires)
        self.verbose = verbose
        self._diagnostics: Dict[str, None] = {}

    @property
    def diagnostics(self) -> List[str]:
        return list(self._diagnostics)

    def _diagnose(self, message: str):
        message = f"{self.region_name}: {message}"
        if message in self._diagnostics:
            return
        self._diagnostics[message] = None
        if self.verbose:
            print(f"  ! {message}")

    # ========================================================================
    # External tile
    # ========================================================================

    def external_tile(self, junction: RoutingWire) -> Optional[RoutingTile]:
        """
        Tile reached by following the junction's node out of the home tile

        Returns:
            The external tile, or None when the node stays inside the home
            tile coordinates (fan / bounce wires, co-located pseudo tiles)
        """
        node = junction.node
        if node is None:
            return None

        if junction is node.driving_wire:
            candidates: List[RoutingTile] = []
            for pip in node.all_downhill_pips:
                if not same_coordinates(pip.tile, self.home_tile) and pip.tile not in candidates:
                    candidates.append(pip.tile)

            if not candidates:
                return None
            tile = candidates[0]
            if len(candidates) > 1:
                tile = max(candidates, key=self.home_tile.manhattan_distance)
                others = ", ".join(
                    f"{t.name}@{self.home_tile.manhattan_distance(t)}" for t in candidates if t is not tile
                )
                self._diagnose(
                    f"{junction.name} fans out to {len(candidates)} tiles; "
                    f"selected furthest {tile.name}@{self.home_tile.manhattan_distance(tile)} over {others}"
                )
        else:
            tile = node.driving_wire.tile

        if same_coordinates(tile, self.home_tile):
            return None
        return tile

    def wire_length(self, junction: RoutingWire) -> Optional[int]:
        tile = self.external_tile(junction)
        if tile is None:
            return None
        return self.home_tile.manhattan_distance(tile)

    def wire_span(self, junction: RoutingWire) -> Optional[Tuple[int, int]]:
        """
        Signed (dx, dy) from the home tile to the external tile
        """
        tile = self.external_tile(junction)
        if tile is None:
            return None
        return (tile.x - self.home_tile.x, tile.y - self.home_tile.y)

    def wire_direction(self, junction: RoutingWire) -> GlobalRouteDir:
        tile = self.external_tile(junction)
        if tile is None:
            return GlobalRouteDir.LOCAL
        return direction_between(self.home_tile, tile)

    # ========================================================================
    # External wires
    # ========================================================================

    def is_multidrop_long_wire(self, junction: RoutingWire) -> bool:
        return any(marker in junction.name for marker in self.multidrop_long_wires)

    def external_wire_terminations(self, junction: RoutingWire) -> List[RoutingWire]:
        """
        Wires at the far end of the junction's node

        For a driving junction these are the start wires of the node's
        downhill PIPs outside the home tile, ie. the inputs of the switchbox
        the node ends in. A driven junction is terminated by the node's
        driving wire, except the middle taps of multidrop long wires, which
        can be driven from either end of the wire.
        """
        node = junction.node
        if node is None:
            return []

        if junction is node.driving_wire:
            wires: List[RoutingWire] = []
            for pip in node.all_downhill_pips:
                wire = pip.start_wire
                if not same_coordinates(wire.tile, self.home_tile) and wire not in wires:
                    wires.append(wire)
            return wires

        if self.is_multidrop_long_wire(junction):
            # both ends of the long wire are the first two members of the node
            return list(node.wires[:2])

        return [node.driving_wire]

    def furthest_external_wire(self, junction: RoutingWire) -> Optional[RoutingWire]:
        """
        Downhill start wire outside the home tile furthest away from it
        """
        node = junction.node
        if node is None:
            return None

        furthest = None
        for pip in node.all_downhill_pips:
            wire = pip.start_wire
            if same_coordinates(wire.tile, self.home_tile):
                continue
            if furthest is None or (self.home_tile.manhattan_distance(wire.tile)
                                    > self.home_tile.manhattan_distance(furthest.tile)):
                furthest = wire
        return furthest


__all__ = [
    'ExternalConnectivityResolver',
    'direction_between',
    'same_coordinates',
]
