# junction_types.py
"""
PIP Junction Types
Enumerations and value types shared by the interconnect engine
"""

from dataclasses import dataclass
from enum import Enum


# ============================================================================
# Junction Enumerations
# ============================================================================

class PJClass(Enum):
    """Electrical class of a PIP junction"""
    CLK = "CLK"
    ELEC = "ELEC"          # VCC / GND
    ROUTING = "ROUTING"


class PJType(Enum):
    """Structural role of a PIP junction"""
    SOURCE = "SOURCE"
    SINK = "SINK"
    BUF = "BUF"
    INTERNAL = "INTERNAL"
    UNCLASSIFIED = "UNCLASSIFIED"


class PJRoutingType(Enum):
    """Which fabric a junction routes to"""
    GLOBAL = "GLOBAL"
    CLB = "CLB"
    INTERNAL = "INTERNAL"
    UNCLASSIFIED = "UNCLASSIFIED"


class GlobalRouteDir(Enum):
    """
    Compass direction of a global routing wire

    LOCAL is inferred from coinciding tile coordinates, UNCLASSIFIED from a
    wire name without a direction prefix.
    """
    EE = "EE"
    WW = "WW"
    NN = "NN"
    SS = "SS"
    NE = "NE"
    NW = "NW"
    SE = "SE"
    SW = "SW"
    LOCAL = "LOCAL"
    UNCLASSIFIED = "UNCLASSIFIED"

    @property
    def is_rectilinear(self) -> bool:
        return self in (GlobalRouteDir.EE, GlobalRouteDir.WW, GlobalRouteDir.NN, GlobalRouteDir.SS)

    @property
    def is_diagonal(self) -> bool:
        return self in (GlobalRouteDir.NE, GlobalRouteDir.NW, GlobalRouteDir.SE, GlobalRouteDir.SW)

    def opposite(self) -> "GlobalRouteDir":
        return _OPPOSITE_DIRECTIONS.get(self, self)


_OPPOSITE_DIRECTIONS = {
    GlobalRouteDir.EE: GlobalRouteDir.WW,
    GlobalRouteDir.WW: GlobalRouteDir.EE,
    GlobalRouteDir.NN: GlobalRouteDir.SS,
    GlobalRouteDir.SS: GlobalRouteDir.NN,
    GlobalRouteDir.NE: GlobalRouteDir.SW,
    GlobalRouteDir.SW: GlobalRouteDir.NE,
    GlobalRouteDir.NW: GlobalRouteDir.SE,
    GlobalRouteDir.SE: GlobalRouteDir.NW,
}


class Channel(Enum):
    """Routing channel a wire hop runs in"""
    HORIZONTAL = "Hz"
    VERTICAL = "Vt"
    LOCAL = "Local"


# ============================================================================
# Value Types
# ============================================================================

@dataclass(frozen=True)
class JunctionProperty:
    """
    Classification of a single PIP junction
    """
    pj_class: PJClass
    pj_type: PJType
    routing_type: PJRoutingType

    def to_dict(self) -> dict:
        return {
            'class': self.pj_class.value,
            'type': self.pj_type.value,
            'routing_type': self.routing_type.value,
        }


@dataclass(frozen=True)
class ClusterKey:
    """
    Position of a junction in the switchbox inferred from its name
    """
    direction: GlobalRouteDir
    role: PJType

    def __str__(self) -> str:
        return f"{self.direction.value}:{self.role.value}"

    @classmethod
    def parse(cls, text: str) -> "ClusterKey":
        """
        Parse "EE:SINK" style keys
        """
        direction, sep, role = text.strip().partition(":")
        if not sep:
            raise ValueError(f"Invalid cluster key '{text}', expected DIRECTION:ROLE")
        try:
            return cls(GlobalRouteDir[direction.upper()], PJType[role.upper()])
        except KeyError:
            raise ValueError(f"Invalid cluster key '{text}'") from None


UNCLASSIFIED_CLUSTER = ClusterKey(GlobalRouteDir.UNCLASSIFIED, PJType.UNCLASSIFIED)


__all__ = [
    'PJClass',
    'PJType',
    'PJRoutingType',
    'GlobalRouteDir',
    'Channel',
    'JunctionProperty',
    'ClusterKey',
    'UNCLASSIFIED_CLUSTER',
]
