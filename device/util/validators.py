#Model Validators

import re
from typing import List ,Tuple
from pydantic import BaseModel , RootModel , model_validator


TILE_COORDINATE_PATTERN = re.compile(r"_X(\d+)Y(\d+)$")


class DeviceInfo(BaseModel):
    """Model of DeviceInfo"""
    part:   str
    partName:   str
    familyType: str
    rows:   int
    cols:   int


class Tile(BaseModel):
    """
    Model of Tile

    `x`/`y` are the tile coordinates encoded in the tile name (INT_L_X16Y125),
    `col`/`row` the position in the device grid. Tiles whose name carries no
    coordinate suffix fall back to the grid position.
    """
    name:   str
    row:    int
    col:    int
    type:   str
    x:  int | None = None
    y:  int | None = None

    @model_validator(mode="after")
    def _fill_tile_coordinates(self):
        if self.x is None or self.y is None:
            match = TILE_COORDINATE_PATTERN.search(self.name)
            if match:
                self.x , self.y = int(match.group(1)) , int(match.group(2))
            else:
                self.x , self.y = self.col , self.row
        return self

    def get_coordinates(self) -> Tuple[int,int]:
        """
        return the tile's coordinate
        """
        return (self.x,self.y)


class ListTiles(RootModel[List[Tile]]):
    """
    List of Tiles
    """

    def __len__(self):
        return len(self.root)

    def get_tile(self,col:int,row:int) -> Tile | None:
        """
        return tile by (col,row)
        """
        return next((tile for tile in self.root if tile.col == col and tile.row == row),None)

    def get_tile_by_name(self,name:str) -> Tile | None:
        """
        return tile by name
        """
        return next((tile for tile in self.root if tile.name == name),None)

    def is_there_tile_by_name(self,name:str) -> bool:
        """
        check if there is a tile with the given name
        """
        return self.get_tile_by_name(name) is not None

    def get_all_tiles(self) -> List[Tile]:
        """
        return a falt list of all tiles
        """
        return self.root


class Wire(BaseModel):
    """
    Model of Wire

    A wire is identified by (tile, wireId); `name` is the wire name within the tile type.
    """
    tile: str
    wireId: int
    name: str


class ListWires(RootModel[List[Wire]]):
    """
    List of Wires
    """

    def get_all_wires(self) -> List[Wire]:
        """
        return all wires
        """
        return self.root


class PIP(BaseModel):
    """
    Model of PIP
    """
    tile:   str
    startWireId:    int
    endWireId:  int
    isBidirectional:    bool = False


class ListPIPs(RootModel[List[PIP]]):
    """
    List of PIPS
    """

    def get_all_pips(self) -> List[PIP]:
        """
        return all pips
        """
        return self.root

    def get_pips_of_tile(self,tile_name:str) -> List[PIP]:
        """
        return all programmable connections in tile
        """
        return [pip for pip in self.root if pip.tile == tile_name]


class WireRef(BaseModel):
    """
    Reference to a wire of a node
    """
    tile:   str
    wireId: int


class Node(BaseModel):
    """
    Model of Node

    `wires` is ordered: the driving wire first, then the output wires, then the intermediate wires.
    """
    nodeId: int
    wires:  List[WireRef]

    def get_driving_wire(self) -> WireRef:
        """
        return the wire driving the node
        """
        return self.wires[0]


class ListNodes(RootModel[List[Node]]):
    """
    List of Nodes
    """

    def get_all_nodes(self) -> List[Node]:
        """
        return all nodes
        """
        return self.root

    def get_node(self,node_id:int) -> Node | None:
        """
        return node by id
        """
        return next((node for node in self.root if node.nodeId == node_id),None)
