#!/usr/bin/env python3
"""Switchbox scraping workflows and reusable helpers."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from configs.raw_data_path import DATA_DIR
from device.device_model import DeviceModel
from device.tile_grid import DeviceGraph, create_device_graph
from scraper.interconnect import (
    ChannelContributionAnalyzer,
    ChannelWidths,
    ClusterKey,
    PJClass,
    Query,
    QueryEngine,
    QueryResult,
    Region,
)
from scraper.report import RegionReportGenerator


@dataclass
class ScrapeResult:
    """Regions scraped from one device and the files written for them."""

    regions: List[Region]
    query_results: Dict[str, QueryResult] = field(default_factory=dict)
    channel_widths: Dict[str, ChannelWidths] = field(default_factory=dict)
    saved_files: Dict[str, Path] = field(default_factory=dict)


def load_device_graph(data_dir: str | Path = DATA_DIR, verbose: bool = False) -> DeviceGraph:
    device = DeviceModel.from_directory(data_dir)
    device.validate()
    return create_device_graph(device, verbose=verbose)


def scrape_regions(graph: DeviceGraph, tile_names: List[str], verbose: bool = False) -> List[Region]:
    regions = []
    for name in tile_names:
        tile = graph.get_tile(name)
        if tile is None:
            raise ValueError(f"No tile named {name} in the device")
        regions.append(Region(tile, verbose=verbose))
    return regions


def parse_query(tile_names: List[str], classes: Optional[List[str]], excludes: Optional[List[str]]) -> Query:
    included = PJClass if not classes else [PJClass[c.upper()] for c in classes]
    excluded = [ClusterKey.parse(text) for text in excludes or ()]
    return Query.create(regions=tile_names, included_classes=included, excluded_cluster_keys=excluded)


def run_scrape(
    data_dir: str | Path,
    tile_names: List[str],
    *,
    query: Optional[Query] = None,
    channels: bool = False,
    connectivity: bool = False,
    output_dir: Optional[str | Path] = None,
    verbose: bool = False,
) -> ScrapeResult:
    graph = load_device_graph(data_dir, verbose=verbose)
    regions = scrape_regions(graph, tile_names, verbose=verbose)
    result = ScrapeResult(regions=regions)

    analyzer = ChannelContributionAnalyzer()
    report_gen = RegionReportGenerator(analyzer)

    if query is not None:
        result.query_results = QueryEngine().run(regions, query)
    if channels:
        result.channel_widths = {region.name: analyzer.channel_widths(region) for region in regions}

    if output_dir is not None:
        output_dir = Path(output_dir)
        title = "_".join(region.name for region in regions)
        result.saved_files["regions"] = report_gen.save_json(
            {region.name: report_gen.region_to_dict(region) for region in regions},
            output_dir / f"{title}_regions.json",
        )
        if result.query_results:
            result.saved_files["query"] = report_gen.save_json(
                {name: report_gen.query_to_dict(res) for name, res in result.query_results.items()},
                output_dir / f"{title}_query.json",
            )
        if channels:
            result.saved_files["channels"] = report_gen.save_json(
                report_gen.channel_report(regions), output_dir / f"{title}_channels.json"
            )
        if connectivity:
            result.saved_files["connectivity"] = report_gen.save_json(
                {region.name: report_gen.junction_connectivity(region) for region in regions},
                output_dir / f"{title}_nutdata.json",
            )

    return result


__all__ = [
    "load_device_graph",
    "scrape_regions",
    "parse_query",
    "run_scrape",
]


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(
        description="Scrape and classify FPGA switchbox topology",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_scraper.py --tiles INT_L_X16Y125
  python run_scraper.py --tiles INT_R_X41Y61 --classes ROUTING --exclude UNCLASSIFIED:UNCLASSIFIED
  python run_scraper.py --tiles INT_L_X16Y125 --channels --connectivity --output-dir out
        """,
    )

    parser.add_argument("--data-dir", default=str(DATA_DIR), help="Directory of the device JSON dump")
    parser.add_argument("--tiles", nargs="+", required=True, metavar="TILE", help="Switchbox tiles to scrape")
    parser.add_argument("--classes", nargs="+", metavar="CLASS", help="Junction classes to include (CLK ELEC ROUTING)")
    parser.add_argument("--exclude", nargs="+", metavar="DIR:ROLE", help="Cluster keys to exclude, ie. EE:SINK")
    parser.add_argument("--channels", action="store_true", help="Estimate channel widths")
    parser.add_argument("--connectivity", action="store_true", help="Write junction connectivity")
    parser.add_argument("--output-dir", metavar="PATH", help="Directory for JSON reports")
    parser.add_argument("--verbose", action="store_true", help="Print progress and junction lists")

    args = parser.parse_args(argv)

    try:
        query = parse_query(args.tiles, args.classes, args.exclude)
    except (KeyError, ValueError) as e:
        parser.error(f"invalid query: {e}")

    result = run_scrape(
        args.data_dir,
        args.tiles,
        query=query,
        channels=args.channels,
        connectivity=args.connectivity,
        output_dir=args.output_dir,
        verbose=args.verbose,
    )

    report_gen = RegionReportGenerator()
    print(report_gen.generate_text_summary(result.regions, result.query_results, result.channel_widths))
    if result.saved_files:
        print("\nWrote files:")
        for kind, path in result.saved_files.items():
            print(f"  {kind:13} {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
