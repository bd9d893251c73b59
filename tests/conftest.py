"""Test configuration and fixtures for the switchbox scraper."""
import re

import pytest

from device.device_model import DeviceModel
from device.tile_grid import create_device_graph
from device.util.validators import (
    DeviceInfo, ListNodes, ListPIPs, ListTiles, ListWires, Node, PIP, Tile, Wire, WireRef,
)
from scraper.interconnect.region import Region

HOME = "INT_L_X10Y20"


class DeviceBuilder:
    """Accumulates device records by tile and wire name."""

    def __init__(self):
        self.tiles = {}
        self.wires = []
        self.pips = []
        self.nodes = []
        self._wire_ids = {}

    def tile(self, name):
        if name not in self.tiles:
            x, y = (int(v) for v in re.search(r"_X(\d+)Y(\d+)$", name).groups())
            self.tiles[name] = Tile(name=name, row=y, col=x, type=name.rsplit("_X", 1)[0])
        return name

    def wire(self, tile, name):
        self.tile(tile)
        key = (tile, name)
        if key not in self._wire_ids:
            self._wire_ids[key] = len(self._wire_ids)
            self.wires.append(Wire(tile=tile, wireId=self._wire_ids[key], name=name))
        return self._wire_ids[key]

    def pip(self, tile, start, end, bidirectional=False):
        self.pips.append(PIP(tile=tile,
                             startWireId=self.wire(tile, start),
                             endWireId=self.wire(tile, end),
                             isBidirectional=bidirectional))

    def node(self, *members):
        refs = [WireRef(tile=tile, wireId=self.wire(tile, name)) for tile, name in members]
        self.nodes.append(Node(nodeId=len(self.nodes), wires=refs))

    def device_model(self):
        info = DeviceInfo(part="xc7a35tcpg236-1", partName="xc7a35t", familyType="artix7", rows=40, cols=20)
        return DeviceModel(info, ListTiles(list(self.tiles.values())), ListWires(self.wires),
                           ListPIPs(self.pips), ListNodes(self.nodes))


def build_sample_device():
    """
    A switchbox at X10Y20 with:
    - a source (NN5END1) fanning out into sinks, a buffer and an internal junction
    - EE2 (length 2), NN5 (length 5) and a NE6 node landing in two tiles
    - a multidrop long wire tap (LV_L9) and a bidirectional LH pair
    - an IMUX node into the co-located CLB tile
    - a CLK pip and a VCC pip
    """
    b = DeviceBuilder()
    b.pip(HOME, "NN5END1", "EE2BEG0")
    b.pip(HOME, "NN5END1", "IMUX_L5")
    b.pip(HOME, "NN5END1", "GFAN0")
    b.pip(HOME, "NN5END1", "NE6BEG0")
    b.pip(HOME, "EE2END0", "IMUX_L5")
    b.pip(HOME, "EE2END0", "FAN_ALT0")
    b.pip(HOME, "WW2END3", "NN5BEG2")
    b.pip(HOME, "WW2END3", "GFAN0")
    b.pip(HOME, "FAN_ALT0", "BYP_BOUNCE0")
    b.pip(HOME, "GFAN0", "IMUX_L6")
    b.pip(HOME, "GFAN0", "BYP_ALT1")
    b.pip(HOME, "LV_L9", "BYP_ALT1")
    b.pip(HOME, "VCC_WIRE", "IMUX_L6")
    b.pip(HOME, "GCLK_L_B0", "CLK_L0")
    b.pip(HOME, "LH0", "LH12", bidirectional=True)

    # EE2: X10 -> X11 -> X12
    b.node((HOME, "EE2BEG0"), ("INT_L_X12Y20", "EE2END0"), ("INT_R_X11Y20", "EE2A0"))
    b.pip("INT_L_X12Y20", "EE2END0", "IMUX_L0")

    # NN5: Y20 -> Y25
    b.node((HOME, "NN5BEG2"), ("INT_L_X10Y25", "NN5END2"),
           ("INT_L_X10Y21", "NN5A2"), ("INT_L_X10Y22", "NN5B2"),
           ("INT_L_X10Y23", "NN5C2"), ("INT_L_X10Y24", "NN5D2"))
    b.pip("INT_L_X10Y25", "NN5END2", "IMUX_L1")

    # NE6 with downhill PIPs at distance 2 and 5
    b.node((HOME, "NE6BEG0"), ("INT_L_X12Y23", "NE6END0"), ("INT_R_X11Y21", "NE6A0"))
    b.pip("INT_R_X11Y21", "NE6A0", "IMUX_R2")
    b.pip("INT_L_X12Y23", "NE6END0", "IMUX_L3")

    # NN5END1 is driven from five tiles south
    b.node(("INT_L_X10Y15", "NN5BEG1"), (HOME, "NN5END1"))

    # long wire tapped in the middle
    b.node(("INT_L_X10Y11", "LV_L0"), ("INT_L_X10Y29", "LV_L18"), (HOME, "LV_L9"))

    # IMUX into the logic block pin
    b.node((HOME, "IMUX_L5"), ("CLBLL_L_X10Y20", "CLBLL_L_A5"))
    b.pip("CLBLL_L_X10Y20", "CLBLL_L_A5", "CLBLL_L_A")

    # bidirectional LH wires, both running east
    b.node((HOME, "LH0"), ("INT_L_X12Y20", "LH12"), ("INT_R_X11Y20", "LH1"))
    b.node(("INT_L_X8Y20", "LH0"), (HOME, "LH12"), ("INT_R_X9Y20", "LH1"))
    return b


@pytest.fixture
def device_builder():
    return DeviceBuilder


@pytest.fixture
def sample_builder():
    return build_sample_device()


@pytest.fixture
def device_model(sample_builder):
    return sample_builder.device_model()


@pytest.fixture
def device_graph(device_model):
    return create_device_graph(device_model)


@pytest.fixture
def home_tile(device_graph):
    return device_graph.get_tile(HOME)


@pytest.fixture
def region(home_tile):
    return Region(home_tile)


@pytest.fixture
def junction(region):
    """Look up a junction of the home region by name."""
    def lookup(name):
        wire = region.get_junction(name)
        assert wire is not None, f"{name} is not a junction of {region.name}"
        return wire
    return lookup


@pytest.fixture
def sample_data_dir(tmp_path, device_model):
    """The sample device written out as a JSON dump directory."""
    data_dir = tmp_path / "raw_device"
    data_dir.mkdir()
    (data_dir / "deviceInfo.json").write_text(device_model.device_info.model_dump_json())
    (data_dir / "tiles.json").write_text(device_model.tiles.model_dump_json())
    (data_dir / "wires.json").write_text(device_model.wires.model_dump_json())
    (data_dir / "pips.json").write_text(device_model.pips.model_dump_json())
    (data_dir / "nodes.json").write_text(device_model.nodes.model_dump_json())
    return data_dir
