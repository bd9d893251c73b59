"""
Junction Classification Tests
"""

from types import SimpleNamespace

import pytest

from scraper.interconnect.classifier import JunctionClassifier
from scraper.interconnect.errors import InvariantViolation
from scraper.interconnect.junction_types import PJClass, PJRoutingType, PJType


def fake_junction(name, backward=0, forward=0):
    return SimpleNamespace(name=name, backward_pips=[object()] * backward, forward_pips=[object()] * forward)


class TestJunctionClass:

    @pytest.mark.parametrize("name,expected", [
        ("GCLK_L_B0", PJClass.CLK),
        ("VCC_WIRE", PJClass.ELEC),
        ("GND_WIRE", PJClass.ELEC),
        ("CLK_VCC", PJClass.CLK),
        ("EE2BEG0", PJClass.ROUTING),
        ("clk_lower", PJClass.ROUTING),
    ])
    def test_class_from_name(self, name, expected):
        assert JunctionClassifier.junction_class(fake_junction(name)) == expected


class TestJunctionType:

    @pytest.mark.parametrize("backward,forward,expected", [
        (1, 1, PJType.BUF),
        (3, 0, PJType.SINK),
        (0, 0, PJType.SINK),
        (0, 4, PJType.SOURCE),
        (2, 2, PJType.INTERNAL),
    ])
    def test_type_from_counts(self, backward, forward, expected):
        assert JunctionClassifier().junction_type(fake_junction("X", backward, forward)) == expected

    @pytest.mark.parametrize("backward,forward", [(2, 1), (1, 3)])
    def test_unrecognised_pattern_is_fatal(self, backward, forward):
        classifier = JunctionClassifier(region_name="INT_L_X0Y0")
        with pytest.raises(InvariantViolation) as info:
            classifier.junction_type(fake_junction("ODD0", backward, forward))
        assert info.value.junction == "ODD0"
        assert "INT_L_X0Y0" in str(info.value)

    def test_buffer_regardless_of_class(self):
        for name in ("GCLK_L_B0", "VCC_WIRE", "FAN_ALT0"):
            prop = JunctionClassifier().classify(fake_junction(name, 1, 1))
            assert prop.pj_type == PJType.BUF
            assert prop.routing_type == PJRoutingType.GLOBAL


class TestRegionClassification:

    def test_every_junction_classified(self, region):
        assert set(region.classification) == set(region.junctions)
        assert len(region.junctions) == 18

    def test_classification_is_deterministic(self, region):
        classifier = JunctionClassifier(region_name=region.name)
        for junction, prop in region.classification.items():
            assert classifier.classify(junction) == prop
            assert classifier.classify(junction) == classifier.classify(junction)

    def test_expected_types(self, region, junction):
        assert region.property_of(junction("NN5END1")).pj_type == PJType.SOURCE
        assert region.property_of(junction("EE2BEG0")).pj_type == PJType.SINK
        assert region.property_of(junction("FAN_ALT0")).pj_type == PJType.BUF
        assert region.property_of(junction("GFAN0")).pj_type == PJType.INTERNAL
        assert region.property_of(junction("LH0")).pj_type == PJType.BUF
        assert region.property_of(junction("VCC_WIRE")).pj_class == PJClass.ELEC
