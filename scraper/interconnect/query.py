# query.py
"""
Cluster Query Engine
Filters a region's junctions by class and cluster and builds the directed
cluster connectivity graph

Results are freshly allocated per call and never write back to the Region.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Set

from device.tile_grid import RoutingWire
from scraper.interconnect.junction_types import ClusterKey, PJClass
from scraper.interconnect.region import Region


@dataclass(frozen=True)
class Query:
    """
    Which regions to look at and which junctions to keep

    An empty `regions` selects every region handed to the engine.
    """
    regions: FrozenSet[str] = frozenset()
    included_classes: FrozenSet[PJClass] = frozenset(PJClass)
    excluded_cluster_keys: FrozenSet[ClusterKey] = frozenset()

    @classmethod
    def create(cls, regions: Iterable[str] = (),
               included_classes: Iterable[PJClass] = tuple(PJClass),
               excluded_cluster_keys: Iterable[ClusterKey] = ()) -> "Query":
        return cls(frozenset(regions), frozenset(included_classes), frozenset(excluded_cluster_keys))


@dataclass
class QueryResult:
    """
    Filtered view of one region
    """
    region_name: str
    filtered_junctions: Set[RoutingWire] = field(default_factory=set)
    cluster_map: Dict[ClusterKey, Set[RoutingWire]] = field(default_factory=dict)
    cluster_graph: Dict[ClusterKey, Set[ClusterKey]] = field(default_factory=dict)

    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.cluster_graph.values())

    def get_statistics(self) -> Dict:
        return {
            'region': self.region_name,
            'junctions': len(self.filtered_junctions),
            'clusters': len(self.cluster_map),
            'cluster_edges': self.edge_count(),
        }


class QueryEngine:
    """
    Runs cluster queries against regions

    Usage:
        engine = QueryEngine()
        query = Query.create(excluded_cluster_keys=[UNCLASSIFIED_CLUSTER])
        result = engine.process_query(region, query)
    """

    def process_query(self, region: Region, query: Query) -> QueryResult:
        included = region.junctions_of_class(query.included_classes)
        clusters = region.clusters.restricted_to(included).without(query.excluded_cluster_keys)
        filtered = clusters.junctions()

        graph: Dict[ClusterKey, Set[ClusterKey]] = {key: set() for key in clusters.keys()}
        for junction in filtered:
            source_key = clusters.cluster_of(junction)
            for pip in junction.forward_pips:
                target = pip.other_end(junction) if pip.is_bidirectional else pip.end_wire
                if target not in filtered:
                    continue
                # every surviving junction is clustered, cluster_of raises otherwise
                graph[source_key].add(clusters.cluster_of(target))

        return QueryResult(
            region_name=region.name,
            filtered_junctions=filtered,
            cluster_map=clusters.as_dict(),
            cluster_graph=graph,
        )

    def run(self, regions: Iterable[Region], query: Query) -> Dict[str, QueryResult]:
        """
        Process the query for every region it names

        Raises:
            KeyError: if the query names a region which was not provided
        """
        by_name = {region.name: region for region in regions}
        names: List[str] = sorted(query.regions) if query.regions else list(by_name)
        missing = [name for name in names if name not in by_name]
        if missing:
            raise KeyError(f"Unknown region(s): {', '.join(missing)}")
        return {name: self.process_query(by_name[name], query) for name in names}


__all__ = [
    'Query',
    'QueryResult',
    'QueryEngine',
]
