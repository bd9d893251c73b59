"""
Report Generation

JSON export and console summaries of scraped switchboxes.
"""

from .region_report import (
    RegionReportGenerator,
    colorize
)

__all__ = [
    'RegionReportGenerator',
    'colorize'
]
