# Naming conventions of 7-series interconnect wires

import re

# Long wires whose middle taps are driven from either end of the wire
MULTIDROP_LONG_WIRES = ("LV9", "LH6", "LV_L9")

SWITCHBOX_TILE_PATTERN = re.compile(r"INT_[LR]_")

BOUNCE_WIRE_PATTERN = re.compile(r"BOUNCE[0-9]")

# Two-letter compass prefixes of global routing wires
DIRECTION_PREFIXES = ("EE", "NN", "SS", "WW", "NE", "NW", "SE", "SW")

BEGIN_MARKER = "BEG"
END_MARKER = "END"

IMUX_MARKER = "IMUX"
LOGIC_OUTS_MARKER = "LOGIC_OUTS"
