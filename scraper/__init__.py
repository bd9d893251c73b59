"""
Switchbox Scraper

Extracts and classifies the routing topology of FPGA switchboxes.
"""

from .interconnect import (
    Region,
    Query,
    QueryEngine,
    ChannelContributionAnalyzer,
    InvariantViolation
)

__all__ = [
    'Region',
    'Query',
    'QueryEngine',
    'ChannelContributionAnalyzer',
    'InvariantViolation'
]
