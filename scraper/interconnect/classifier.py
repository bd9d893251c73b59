# classifier.py
"""
PIP Junction Classifier
Labels a junction by electrical class and structural type
"""

from typing import Optional

from device.tile_grid import RoutingWire
from scraper.interconnect.errors import InvariantViolation
from scraper.interconnect.junction_types import (
    JunctionProperty,
    PJClass,
    PJRoutingType,
    PJType,
)


class JunctionClassifier:
    """
    Pure classification of PIP junctions

    Usage:
        classifier = JunctionClassifier(region_name="INT_L_X16Y125")
        prop = classifier.classify(wire)
    """

    def __init__(self, region_name: Optional[str] = None):
        self.region_name = region_name

    def classify(self, junction: RoutingWire) -> JunctionProperty:
        return JunctionProperty(
            self.junction_class(junction),
            self.junction_type(junction),
            self.routing_type(junction),
        )

    @staticmethod
    def junction_class(junction: RoutingWire) -> PJClass:
        name = junction.name
        if "CLK" in name:
            return PJClass.CLK
        if "VCC" in name or "GND" in name:
            return PJClass.ELEC
        return PJClass.ROUTING

    def junction_type(self, junction: RoutingWire) -> PJType:
        """
        Structural type from the number of forward (F) and backward (B) PIPs

        Raises:
            InvariantViolation: if (B, F) fits none of the four patterns
        """
        fw = len(junction.forward_pips)
        bk = len(junction.backward_pips)

        if bk == 1 and fw == 1:
            return PJType.BUF
        if fw == 0:
            return PJType.SINK
        if bk == 0:
            return PJType.SOURCE
        if fw > 1 and bk > 1:
            return PJType.INTERNAL
        raise InvariantViolation(
            f"Unclassifiable junction with {bk} backward and {fw} forward PIPs",
            junction=junction.name,
            region=self.region_name,
        )

    @staticmethod
    def routing_type(junction: RoutingWire) -> PJRoutingType:
        # CLB / INTERNAL routing types are not derived for switchbox junctions
        return PJRoutingType.GLOBAL


__all__ = ['JunctionClassifier']
