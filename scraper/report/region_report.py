"""
Switchbox Report Generator

Turns scraped regions, query results and channel analyses into JSON
documents and a colored console summary.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from colorama import Fore, Style, init as colorama_init

from configs.scraper_settings import BOUNCE_WIRE_PATTERN, IMUX_MARKER, LOGIC_OUTS_MARKER
from device.tile_grid import RoutingWire
from scraper.interconnect.channel import ChannelContributionAnalyzer, ChannelWidths
from scraper.interconnect.query import QueryResult
from scraper.interconnect.region import Region

colorama_init()


# ============================================================================
# Formatting Utilities
# ============================================================================

class Colors:
    """Color palette for consistent theming"""
    PRIMARY = Fore.CYAN
    SUCCESS = Fore.GREEN
    WARNING = Fore.YELLOW
    ERROR = Fore.RED
    DIM = Style.DIM
    BRIGHT = Style.BRIGHT
    RESET = Style.RESET_ALL


def colorize(text: str, color: str = "") -> str:
    """Apply color to text if terminal supports it"""
    if sys.stdout.isatty():
        return f"{color}{text}{Style.RESET_ALL}"
    return text


def draw_header(title: str, width: int = 72) -> str:
    line = "=" * width
    return colorize(f"{line}\n{title.center(width)}\n{line}", Colors.PRIMARY + Colors.BRIGHT)


def format_metric(label: str, value, label_width: int = 30) -> str:
    """Format a key-value metric line"""
    return f"  {label:<{label_width}}  {value}"


def _wire_ref(wire: RoutingWire) -> Dict:
    return {'name': wire.name, 'x': wire.tile.x, 'y': wire.tile.y}


def _names(wires: Iterable[RoutingWire]) -> List[str]:
    return sorted(w.name for w in wires)


# ============================================================================
# Region Report Generator
# ============================================================================

class RegionReportGenerator:
    """
    Report generator for scraped switchboxes

    Usage:
        generator = RegionReportGenerator()
        data = generator.region_to_dict(region)
        generator.save_json(data, "out/INT_L_X16Y125.json")
    """

    def __init__(self, analyzer: Optional[ChannelContributionAnalyzer] = None):
        self.analyzer = analyzer or ChannelContributionAnalyzer()

    # ========================================================================
    # Structured data
    # ========================================================================

    def region_to_dict(self, region: Region) -> Dict:
        """
        Name, coordinates, junctions, classification and clusters of a region
        """
        clusters = region.clusters.as_dict()
        return {
            'name': region.name,
            'x': region.x,
            'y': region.y,
            'junctions': _names(region.junctions),
            'classification': {
                j.name: prop.to_dict()
                for j, prop in sorted(region.classification.items(), key=lambda item: item[0].name)
            },
            'clusters': {str(key): _names(members) for key, members in clusters.items()},
            'diagnostics': list(region.diagnostics),
        }

    def query_to_dict(self, result: QueryResult) -> Dict:
        return {
            'region': result.region_name,
            'filtered_junctions': _names(result.filtered_junctions),
            'clusters': {str(key): _names(members) for key, members in result.cluster_map.items()},
            'cluster_graph': {
                str(key): sorted(str(target) for target in targets)
                for key, targets in result.cluster_graph.items()
            },
        }

    def junction_connectivity(self, region: Region) -> Dict:
        """
        Forward and backward neighbours of every routing junction

        Neighbours outside the switchbox are resolved through the junction's
        node. IMUX and LOGIC_OUTS junctions are followed through the
        pseudo-interconnect to the logic block pin.
        """
        resolver = region.resolver
        junctions = []

        for pj in sorted(region.routing_junctions, key=lambda w: w.name):
            forward = []
            backward = []
            is_long_wire = False

            for pip in pj.forward_pips:
                forward.append(_wire_ref(pip.other_end(pj) if pip.is_bidirectional else pip.end_wire))
                if pip.is_bidirectional:
                    is_long_wire = True

            if not pj.forward_pips or BOUNCE_WIRE_PATTERN.search(pj.name):
                forward.extend(_wire_ref(w) for w in resolver.external_wire_terminations(pj))

            if pj.backward_pips:
                # bidirectional PIPs were counted as forward PIPs of both ends
                backward.extend(_wire_ref(pip.start_wire) for pip in pj.backward_pips if not pip.is_bidirectional)
            elif LOGIC_OUTS_MARKER not in pj.name:
                backward.extend(_wire_ref(w) for w in resolver.external_wire_terminations(pj))

            if is_long_wire:
                furthest = resolver.furthest_external_wire(pj)
                if furthest is not None:
                    forward.append(_wire_ref(furthest))

            if IMUX_MARKER in pj.name and pj.node.all_downhill_nodes:
                forward.append(_wire_ref(pj.node.all_downhill_nodes[0].driving_wire))

            if LOGIC_OUTS_MARKER in pj.name and pj.node.driving_wire.backward_pips:
                backward.append(_wire_ref(pj.node.driving_wire.backward_pips[0].start_wire))

            junctions.append({'name': pj.name, 'forward_pjs': forward, 'backwards_pjs': backward})

        return {'name': region.name, 'x': region.x, 'y': region.y, 'pip_junctions': junctions}

    def channel_report(self, regions: List[Region]) -> Dict:
        """
        Channel widths and wire span histogram per region
        """
        spans = self.analyzer.wire_span_histogram(regions)
        report = {}
        for region in regions:
            widths = self.analyzer.channel_widths(region)
            report[region.name] = {
                **widths.to_dict(),
                'spans': {f"{dx},{dy}": count for (dx, dy), count in sorted(spans[region.name].items())},
            }
        return report

    # ========================================================================
    # JSON
    # ========================================================================

    def generate_json(self, data: Dict) -> str:
        return json.dumps(data, indent=2, sort_keys=True)

    def save_json(self, data: Dict, filepath: str | Path) -> Path:
        """
        Write `data` as JSON, creating parent directories

        Returns:
            The written path
        """
        path = Path(filepath)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.generate_json(data))
        return path

    # ========================================================================
    # Console
    # ========================================================================

    def generate_text_summary(self, regions: List[Region],
                              query_results: Optional[Dict[str, QueryResult]] = None,
                              channel_widths: Optional[Dict[str, ChannelWidths]] = None) -> str:
        lines = [draw_header("Switchbox Scraper Summary")]

        for region in regions:
            lines.append(colorize(f"\n{region.name} (X{region.x}Y{region.y})", Colors.BRIGHT))
            lines.append(format_metric("PIP junctions", len(region.junctions)))
            lines.append(format_metric("Routing junctions", len(region.routing_junctions)))
            lines.append(format_metric("Inputs / outputs / bidirs",
                                       f"{len(region.in_junctions)} / {len(region.out_junctions)} / "
                                       f"{len(region.bidir_junctions)}"))
            lines.append(format_metric("Excluded junctions", len(region.excluded_junctions)))
            lines.append(format_metric("Clusters", len(region.clusters.keys())))

            if query_results and region.name in query_results:
                stats = query_results[region.name].get_statistics()
                lines.append(format_metric("Query junctions", stats['junctions']))
                lines.append(format_metric("Query clusters / edges",
                                           f"{stats['clusters']} / {stats['cluster_edges']}"))

            if channel_widths and region.name in channel_widths:
                widths = channel_widths[region.name]
                lines.append(format_metric("Channel width Hz / Vt",
                                           colorize(f"{widths.horizontal} / {widths.vertical}", Colors.SUCCESS)))

            for message in region.diagnostics:
                lines.append(colorize(f"  ! {message}", Colors.WARNING))

        return "\n".join(lines)


# ============================================================================
# Module Exports
# ============================================================================

__all__ = [
    'RegionReportGenerator',
    'Colors',
    'colorize',
]
