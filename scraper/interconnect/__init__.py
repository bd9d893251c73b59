"""
Interconnect Analysis Module
Switchbox junction classification, external connectivity, clustering,
cluster queries and channel analysis
"""

from .junction_types import (
    PJClass,
    PJType,
    PJRoutingType,
    GlobalRouteDir,
    Channel,
    JunctionProperty,
    ClusterKey,
    UNCLASSIFIED_CLUSTER
)

from .errors import InvariantViolation

from .classifier import JunctionClassifier

from .external import (
    ExternalConnectivityResolver,
    direction_between
)

from .clusterer import (
    JunctionClusterer,
    ClusterMapBuilder
)

from .region import Region

from .query import (
    Query,
    QueryResult,
    QueryEngine
)

from .channel import (
    ChannelContribution,
    ChannelWidths,
    ChannelContributionAnalyzer,
    NodeWireSets,
    node_direction
)

__all__ = [
    # Types
    'PJClass',
    'PJType',
    'PJRoutingType',
    'GlobalRouteDir',
    'Channel',
    'JunctionProperty',
    'ClusterKey',
    'UNCLASSIFIED_CLUSTER',
    'InvariantViolation',

    # Classification and resolution
    'JunctionClassifier',
    'ExternalConnectivityResolver',
    'direction_between',
    'JunctionClusterer',
    'ClusterMapBuilder',
    'Region',

    # Queries
    'Query',
    'QueryResult',
    'QueryEngine',

    # Channel analysis
    'ChannelContribution',
    'ChannelWidths',
    'ChannelContributionAnalyzer',
    'NodeWireSets',
    'node_direction',
]
