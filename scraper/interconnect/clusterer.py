# clusterer.py
"""
Junction Clusterer
Groups PIP junctions by the direction and role encoded in their names
"""

from collections import defaultdict
from typing import Dict, Iterable, Optional, Sequence, Set

from configs.scraper_settings import BEGIN_MARKER, DIRECTION_PREFIXES, END_MARKER
from device.tile_grid import RoutingWire
from scraper.interconnect.errors import InvariantViolation
from scraper.interconnect.junction_types import (
    ClusterKey,
    GlobalRouteDir,
    PJType,
    UNCLASSIFIED_CLUSTER,
)


class JunctionClusterer:
    """
    Maps a junction name to its ClusterKey

    EE2BEG3 -> (EE, SINK), NW4END1 -> (NW, SOURCE), BOUNCE1 -> UNCLASSIFIED
    """

    def __init__(self,
                 direction_prefixes: Sequence[str] = DIRECTION_PREFIXES,
                 begin_marker: str = BEGIN_MARKER,
                 end_marker: str = END_MARKER):
        self.direction_prefixes = tuple(direction_prefixes)
        self.begin_marker = begin_marker
        self.end_marker = end_marker

    def direction(self, name: str) -> GlobalRouteDir:
        for prefix in self.direction_prefixes:
            if name.startswith(prefix):
                return GlobalRouteDir(prefix)
        return GlobalRouteDir.UNCLASSIFIED

    def role(self, name: str) -> PJType:
        # a BEG wire is where the global wire is driven, ie. a sink of the switchbox
        if self.begin_marker in name:
            return PJType.SINK
        if self.end_marker in name:
            return PJType.SOURCE
        return PJType.UNCLASSIFIED

    def cluster_name(self, name: str) -> ClusterKey:
        direction = self.direction(name)
        if direction == GlobalRouteDir.UNCLASSIFIED:
            return UNCLASSIFIED_CLUSTER
        return ClusterKey(direction, self.role(name))

    def cluster(self, junction: RoutingWire) -> ClusterKey:
        return self.cluster_name(junction.name)

    def build(self, junctions: Iterable[RoutingWire], region_name: Optional[str] = None) -> "ClusterMapBuilder":
        """
        Cluster every junction into a new ClusterMapBuilder
        """
        builder = ClusterMapBuilder(region_name)
        for junction in junctions:
            builder.add(junction, self.cluster(junction))
        return builder


class ClusterMapBuilder:
    """
    Forward (key -> junctions) and reverse (junction -> key) cluster maps

    Both maps are only written through `add`, so every junction is in exactly
    one cluster.
    """

    def __init__(self, region_name: Optional[str] = None):
        self.region_name = region_name
        self._clusters: Dict[ClusterKey, Set[RoutingWire]] = defaultdict(set)
        self._reverse: Dict[RoutingWire, ClusterKey] = {}

    def add(self, junction: RoutingWire, key: ClusterKey):
        current = self._reverse.get(junction)
        if current is not None and current != key:
            raise InvariantViolation(
                f"Junction already clustered as {current}, cannot add to {key}",
                junction=junction.name,
                region=self.region_name,
            )
        self._clusters[key].add(junction)
        self._reverse[junction] = key

    def cluster_of(self, junction: RoutingWire) -> ClusterKey:
        try:
            return self._reverse[junction]
        except KeyError:
            raise InvariantViolation(
                "Junction has no cluster", junction=junction.name, region=self.region_name
            ) from None

    def __contains__(self, junction: RoutingWire) -> bool:
        return junction in self._reverse

    def __len__(self) -> int:
        return len(self._reverse)

    def keys(self) -> Set[ClusterKey]:
        return set(self._clusters)

    def members(self, key: ClusterKey) -> Set[RoutingWire]:
        return set(self._clusters.get(key, ()))

    def junctions(self) -> Set[RoutingWire]:
        return set(self._reverse)

    def without(self, keys: Iterable[ClusterKey]) -> "ClusterMapBuilder":
        """
        New builder with the given clusters and their junctions removed
        """
        excluded = set(keys)
        builder = ClusterMapBuilder(self.region_name)
        for junction, key in self._reverse.items():
            if key not in excluded:
                builder.add(junction, key)
        return builder

    def restricted_to(self, junctions: Iterable[RoutingWire]) -> "ClusterMapBuilder":
        """
        New builder holding only the given junctions
        """
        builder = ClusterMapBuilder(self.region_name)
        for junction in junctions:
            builder.add(junction, self.cluster_of(junction))
        return builder

    def as_dict(self) -> Dict[ClusterKey, Set[RoutingWire]]:
        """
        Copy of the forward map
        """
        return {key: set(members) for key, members in self._clusters.items() if members}


__all__ = [
    'JunctionClusterer',
    'ClusterMapBuilder',
]
