# region.py
"""
Switchbox Region
One scraped switchbox: its PIP junctions, their classification, clusters
and external tiles

Everything is computed once in the constructor; a Region is read-only
afterwards.
"""

from types import MappingProxyType
from typing import FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple

from device.tile_grid import RoutingTile, RoutingWire
from scraper.interconnect.classifier import JunctionClassifier
from scraper.interconnect.clusterer import ClusterMapBuilder, JunctionClusterer
from scraper.interconnect.external import ExternalConnectivityResolver
from scraper.interconnect.junction_types import ClusterKey, JunctionProperty, PJClass


class Region:
    """
    A switchbox tile and the junctions instantiated by its PIPs

    Usage:
        region = Region(graph.get_tile("INT_L_X16Y125"))
        region.classification[wire].pj_type
        region.resolver.external_tile(wire)
    """

    def __init__(self, tile: RoutingTile,
                 classifier: Optional[JunctionClassifier] = None,
                 clusterer: Optional[JunctionClusterer] = None,
                 resolver: Optional[ExternalConnectivityResolver] = None,
                 verbose: bool = False):
        self.tile = tile
        self.name = tile.name
        self.classifier = classifier or JunctionClassifier(region_name=self.name)
        self.clusterer = clusterer or JunctionClusterer()
        self.resolver = resolver or ExternalConnectivityResolver(tile, region_name=self.name, verbose=verbose)

        self._gather_pip_junctions()

        classification = {}
        for junction in self.junctions:
            classification[junction] = self.classifier.classify(junction)
        self.classification: Mapping[RoutingWire, JunctionProperty] = MappingProxyType(classification)

        self.clusters: ClusterMapBuilder = self.clusterer.build(self.junctions, region_name=self.name)

        # ambiguous fan-outs are diagnosed here, once per region
        external_tiles = {}
        for junction in self.routing_junctions:
            external_tiles[junction] = self.resolver.external_tile(junction)
        self.external_tiles: Mapping[RoutingWire, Optional[RoutingTile]] = MappingProxyType(external_tiles)

        if verbose:
            self.print_pip_junctions()

    @property
    def x(self) -> int:
        return self.tile.x

    @property
    def y(self) -> int:
        return self.tile.y

    @property
    def coordinates(self) -> Tuple[int, int]:
        return self.tile.coordinates

    @property
    def diagnostics(self) -> List[str]:
        return self.resolver.diagnostics

    def _gather_pip_junctions(self):
        """
        Collect the start and end wires of every PIP in the tile

        A PIP is routable when either of its wires is of the ROUTING class;
        the wires of every other PIP are excluded junctions.
        """
        junctions: Set[RoutingWire] = set()
        inputs: Set[RoutingWire] = set()
        outputs: Set[RoutingWire] = set()
        bidirs: Set[RoutingWire] = set()
        excluded: Set[RoutingWire] = set()

        for pip in self.tile.get_pips():
            junctions.update((pip.start_wire, pip.end_wire))
            is_routing = (JunctionClassifier.junction_class(pip.start_wire) == PJClass.ROUTING
                          or JunctionClassifier.junction_class(pip.end_wire) == PJClass.ROUTING)
            if not is_routing:
                excluded.update((pip.start_wire, pip.end_wire))
            elif pip.is_bidirectional:
                bidirs.update((pip.start_wire, pip.end_wire))
            else:
                inputs.add(pip.start_wire)
                outputs.add(pip.end_wire)

        self.junctions: FrozenSet[RoutingWire] = frozenset(junctions)
        self.bidir_junctions: FrozenSet[RoutingWire] = frozenset(bidirs)
        self.in_junctions: FrozenSet[RoutingWire] = frozenset(inputs - bidirs)
        self.out_junctions: FrozenSet[RoutingWire] = frozenset(outputs - bidirs)
        self.excluded_junctions: FrozenSet[RoutingWire] = frozenset(excluded)
        self.routing_junctions: FrozenSet[RoutingWire] = self.in_junctions | self.out_junctions | self.bidir_junctions

    def property_of(self, junction: RoutingWire) -> JunctionProperty:
        return self.classification[junction]

    def cluster_of(self, junction: RoutingWire) -> ClusterKey:
        return self.clusters.cluster_of(junction)

    def junctions_of_class(self, classes: Iterable[PJClass]) -> Set[RoutingWire]:
        classes = set(classes)
        return {j for j, prop in self.classification.items() if prop.pj_class in classes}

    def get_junction(self, name: str) -> Optional[RoutingWire]:
        wire = self.tile.get_wire(name)
        if wire in self.junctions:
            return wire
        return None

    def print_pip_junctions(self):
        """
        Print the gathered junctions by category
        """
        def names(wires):
            return ", ".join(sorted(w.name for w in wires))

        print(f"Scraping switchbox: {self.name} (X{self.x}Y{self.y})")
        print(f"  Found # pipjunctions:\t{len(self.junctions)}")
        print(f"  Excluded #:\t\t{len(self.excluded_junctions)}")
        print(f"  Considering #:\t{len(self.routing_junctions)}")
        print(f"  Inputs: {names(self.in_junctions)}")
        print(f"  Outputs: {names(self.out_junctions)}")
        print(f"  Bidirs: {names(self.bidir_junctions)}")
        print(f"  Excluded: {names(self.excluded_junctions)}")

    def __repr__(self) -> str:
        return f"Region(name:{self.name},x:{self.x},y:{self.y},junctions:{len(self.junctions)})"


__all__ = ['Region']
