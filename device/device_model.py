# load json + builds DeviceModel Object

from pathlib import Path
from typing import List
from configs.raw_data_path import DATA_DIR,DEVICE_INFO_FILE,TILES_FILE,WIRES_FILE,PIPS_FILE,NODES_FILE
from configs.scraper_settings import SWITCHBOX_TILE_PATTERN
from device.util.json_loader import JsonLoader
from device.util.validators import DeviceInfo,Tile,PIP,Node,ListTiles,ListWires,ListPIPs,ListNodes

class DeviceModel:
    """
    Device Model

    Holds the validated records of one device dump. The model is passed
    explicitly to whoever needs it; nothing is loaded at import time.
    """
    def __init__(self,device_info:DeviceInfo,tiles:ListTiles,wires:ListWires,pips:ListPIPs,nodes:ListNodes):
        self.device_info = device_info
        self.tiles = tiles
        self.wires = wires
        self.pips = pips
        self.nodes = nodes

    @classmethod
    def from_directory(cls,data_dir:str | Path = DATA_DIR) -> "DeviceModel":
        """
        load every dump file of `data_dir`
        """
        data_dir = Path(data_dir)
        loader = JsonLoader()
        return cls(
            device_info=loader.load_device_info(data_dir / DEVICE_INFO_FILE),
            tiles=loader.load_tiles(data_dir / TILES_FILE),
            wires=loader.load_wires(data_dir / WIRES_FILE),
            pips=loader.load_pips(data_dir / PIPS_FILE),
            nodes=loader.load_nodes(data_dir / NODES_FILE),
        )

    def get_part_name(self) -> str:
        """
        return part name of the device
        """
        return self.device_info.part

    def is_valid_coordinate(self,col:int,row:int) -> bool:
        """
        check if the given coordinate is in dimension of device
        """
        return 0 <= col <= self.device_info.cols and 0 <= row <= self.device_info.rows

    def get_tile_by_name(self,name:str) -> Tile | None:
        """
        return Tile with name
        """
        return self.tiles.get_tile_by_name(name)

    def get_tile(self,col:int,row:int) -> Tile | None:
        """
        return tile by grid position
        """
        if self.is_valid_coordinate(col,row):
            return self.tiles.get_tile(col,row)
        return None

    def get_pips_of_tile(self,tile_name:str) -> List[PIP] | None:
        """
        return all programmable connections in tile
        """
        if self.tiles.is_there_tile_by_name(tile_name):
            return self.pips.get_pips_of_tile(tile_name)
        return None

    def get_node(self,node_id:int) -> Node | None:
        """
        return node by id
        """
        return self.nodes.get_node(node_id)

    def is_switchbox_tile(self,tile:Tile) -> bool:
        """
        checks if a tile is an interconnect switchbox (INT_L_/INT_R_)
        """
        return SWITCHBOX_TILE_PATTERN.search(tile.name) is not None

    def get_switchbox_tiles(self) -> List[Tile]:
        """
        return every switchbox tile of the device
        """
        return [tile for tile in self.tiles.get_all_tiles() if self.is_switchbox_tile(tile)]

    def validate_tile_references(self):
        """
        checks that every object that claims to belong to a tile actually points to a real tile.
        """
        tile_names = {tile.name for tile in self.tiles.get_all_tiles()}
        for wire in self.wires.get_all_wires():
            if wire.tile not in tile_names:
                raise ValueError(f"inconsistancy between wire : {wire.name} ({wire.wireId}) and tiles, no tile {wire.tile}")
        for pip in self.pips.get_all_pips():
            if pip.tile not in tile_names:
                raise ValueError(f"inconsistancy between pip : {pip.startWireId}->{pip.endWireId} and tiles, no tile {pip.tile}")

    def validate_pip_references(self):
        """
        checks that both wires of every PIP exist in the PIP's tile.
        """
        wire_keys = {(wire.tile,wire.wireId) for wire in self.wires.get_all_wires()}
        for pip in self.pips.get_all_pips():
            for wire_id in (pip.startWireId,pip.endWireId):
                if (pip.tile,wire_id) not in wire_keys:
                    raise ValueError(f"inconsistancy between pip in {pip.tile} : wire {wire_id} does not exist in the tile")

    def validate_node_references(self):
        """
        checks that node members exist and that no wire belongs to two nodes.
        """
        wire_keys = {(wire.tile,wire.wireId) for wire in self.wires.get_all_wires()}
        owner = {}
        for node in self.nodes.get_all_nodes():
            if not node.wires:
                raise ValueError(f"node {node.nodeId} has no wires")
            for ref in node.wires:
                key = (ref.tile,ref.wireId)
                if key not in wire_keys:
                    raise ValueError(f"inconsistancy between node {node.nodeId} and wires : no wire {ref.wireId} in {ref.tile}")
                if key in owner and owner[key] != node.nodeId:
                    raise ValueError(f"wire {ref.wireId} in {ref.tile} belongs to nodes {owner[key]} and {node.nodeId}")
                owner[key] = node.nodeId

    def validate(self):
        """
        run every consistency check
        """
        self.validate_tile_references()
        self.validate_pip_references()
        self.validate_node_references()
