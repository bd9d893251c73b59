# tile_grid.py
"""
Tile Grid and Routing Graph
Links the validated device records into a read-only routing graph

Every record becomes exactly one object, so tiles, wires, PIPs and nodes
are compared by identity.
"""

from functools import cached_property
from typing import Dict, List, Optional, Tuple
from device.device_model import DeviceModel


class RoutingTile:
    """
    A tile of the device with its wires and PIPs
    """
    def __init__(self, name: str, tile_type: str, x: int, y: int, col: int, row: int) -> None:
        self.name = name
        self.type = tile_type
        self.x = x
        self.y = y
        self.col = col
        self.row = row
        self.wires: Dict[str, "RoutingWire"] = {}
        self.pips: List["RoutingPIP"] = []

    @property
    def coordinates(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def get_pips(self) -> List["RoutingPIP"]:
        """
        PIPs located in this tile
        """
        return self.pips

    def get_wire(self, wire_name: str) -> Optional["RoutingWire"]:
        return self.wires.get(wire_name)

    def manhattan_distance(self, other: "RoutingTile") -> int:
        """
        Distance in tile coordinates (switchbox hops)
        """
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __repr__(self) -> str:
        return f"RoutingTile(name:{self.name},x:{self.x},y:{self.y})"


class RoutingWire:
    """
    A wire of a tile; a PIP junction when it is an end of a PIP
    """
    def __init__(self, tile: RoutingTile, wire_id: int, name: str) -> None:
        self.tile = tile
        self.wire_id = wire_id
        self.name = name
        self.forward_pips: List["RoutingPIP"] = []
        self.backward_pips: List["RoutingPIP"] = []
        self.node: Optional["RoutingNode"] = None

    @property
    def is_driving_wire(self) -> bool:
        return self.node is not None and self.node.driving_wire is self

    def __repr__(self) -> str:
        return f"RoutingWire(tile:{self.tile.name},wire:{self.name})"


class RoutingPIP:
    """
    Routing Edge representing a PIP (programmable interconnect point)

    A bidirectional PIP is listed as a forward and as a backward PIP of both of its wires.
    """
    def __init__(self, tile: RoutingTile, start_wire: RoutingWire, end_wire: RoutingWire,
                 is_bidirectional: bool = False) -> None:
        self.tile = tile
        self.start_wire = start_wire
        self.end_wire = end_wire
        self.is_bidirectional = is_bidirectional

    def other_end(self, wire: RoutingWire) -> RoutingWire:
        """
        The wire of this PIP which is not `wire`
        """
        return self.start_wire if wire is self.end_wire else self.end_wire

    def __repr__(self) -> str:
        arrow = "<->" if self.is_bidirectional else "->"
        return f"RoutingPIP({self.tile.name}: {self.start_wire.name}{arrow}{self.end_wire.name})"


class RoutingNode:
    """
    Wires which are electrically the same signal

    `wires` is ordered: [driving wire, output wires, intermediate wires]
    """
    def __init__(self, node_id: Optional[int], wires: List[RoutingWire]) -> None:
        self.node_id = node_id
        self.wires = wires

    @property
    def driving_wire(self) -> RoutingWire:
        return self.wires[0]

    @cached_property
    def all_downhill_pips(self) -> List[RoutingPIP]:
        """
        PIPs starting at any wire of the node
        """
        return [pip for wire in self.wires for pip in wire.forward_pips if pip.start_wire is wire]

    @cached_property
    def all_uphill_pips(self) -> List[RoutingPIP]:
        """
        PIPs ending at any wire of the node
        """
        return [pip for wire in self.wires for pip in wire.backward_pips if pip.end_wire is wire]

    @cached_property
    def all_downhill_nodes(self) -> List["RoutingNode"]:
        """
        Nodes driven through the downhill PIPs, in PIP order
        """
        nodes = []
        for pip in self.all_downhill_pips:
            node = pip.end_wire.node
            if node is not None and node not in nodes:
                nodes.append(node)
        return nodes

    def __repr__(self) -> str:
        return f"RoutingNode(id:{self.node_id},driver:{self.driving_wire},wires:{len(self.wires)})"


class DeviceGraph:
    """
    Device-wide routing graph built from a DeviceModel
    """
    def __init__(self, device_model: DeviceModel) -> None:
        self.device_model = device_model
        self.tiles: Dict[str, RoutingTile] = {}
        self.nodes: List[RoutingNode] = []
        self._wires: Dict[Tuple[str, int], RoutingWire] = {}

    def build(self, verbose: bool = False):
        """
        Create the tile, wire, PIP and node objects and link them

        Args:
            verbose: Print progress messages
        """
        for tile in self.device_model.tiles.get_all_tiles():
            self.tiles[tile.name] = RoutingTile(tile.name, tile.type, tile.x, tile.y, tile.col, tile.row)

        for wire in self.device_model.wires.get_all_wires():
            tile = self.tiles.get(wire.tile)
            if tile is None:
                raise ValueError(f"inconsistancy between wire : {wire.name} and tiles, no tile {wire.tile}")
            routing_wire = RoutingWire(tile, wire.wireId, wire.name)
            self._wires[(wire.tile, wire.wireId)] = routing_wire
            tile.wires[wire.name] = routing_wire

        pip_count = 0
        for pip in self.device_model.pips.get_all_pips():
            tile = self.tiles.get(pip.tile)
            start = self._wires.get((pip.tile, pip.startWireId))
            end = self._wires.get((pip.tile, pip.endWireId))
            if tile is None or start is None or end is None:
                raise ValueError(f"inconsistancy between pip in {pip.tile} : {pip.startWireId}->{pip.endWireId}")
            routing_pip = RoutingPIP(tile, start, end, pip.isBidirectional)
            tile.pips.append(routing_pip)
            start.forward_pips.append(routing_pip)
            end.backward_pips.append(routing_pip)
            if routing_pip.is_bidirectional:
                end.forward_pips.append(routing_pip)
                start.backward_pips.append(routing_pip)
            pip_count += 1

        for node in self.device_model.nodes.get_all_nodes():
            members = []
            for ref in node.wires:
                wire = self._wires.get((ref.tile, ref.wireId))
                if wire is None:
                    raise ValueError(f"inconsistancy between node {node.nodeId} and wires : no wire {ref.wireId} in {ref.tile}")
                if wire.node is not None:
                    raise ValueError(f"{wire} belongs to nodes {wire.node.node_id} and {node.nodeId}")
                members.append(wire)
            routing_node = RoutingNode(node.nodeId, members)
            for wire in members:
                wire.node = routing_node
            self.nodes.append(routing_node)

        # a wire outside every node record is a node of its own
        for wire in self._wires.values():
            if wire.node is None:
                wire.node = RoutingNode(None, [wire])
                self.nodes.append(wire.node)

        if verbose:
            print(f"Completed: Built routing graph with {len(self.tiles)} tiles, "
                  f"{len(self._wires)} wires, {pip_count} PIPs, {len(self.nodes)} nodes")

    def get_tile(self, tile_name: str) -> Optional[RoutingTile]:
        """
        Get a tile by name
        """
        return self.tiles.get(tile_name)

    def get_wire(self, tile_name: str, wire_name: str) -> Optional[RoutingWire]:
        """
        Get a wire by tile name and wire name
        """
        tile = self.tiles.get(tile_name)
        if tile is None:
            return None
        return tile.get_wire(wire_name)

    def get_statistics(self) -> dict:
        """
        Get device graph statistics
        """
        total_pips = sum(len(t.pips) for t in self.tiles.values())
        return {
            'tiles': len(self.tiles),
            'total_wires': len(self._wires),
            'total_pips': total_pips,
            'total_nodes': len(self.nodes),
            'avg_pips_per_tile': total_pips / len(self.tiles) if self.tiles else 0,
        }


# ============================================================================
# Convenience function for creating device graph
# ============================================================================

def create_device_graph(device_model: DeviceModel,
                        build_immediately: bool = True,
                        verbose: bool = False) -> DeviceGraph:
    """
    Create and optionally build a device graph

    Args:
        device_model: Device model to link
        build_immediately: Build the graph immediately
        verbose: Print progress

    Returns:
        DeviceGraph instance
    """
    graph = DeviceGraph(device_model)

    if build_immediately:
        graph.build(verbose=verbose)

    return graph


# ============================================================================
# Module Exports
# ============================================================================

__all__ = [
    'RoutingTile',
    'RoutingWire',
    'RoutingPIP',
    'RoutingNode',
    'DeviceGraph',
    'create_device_graph'
]
