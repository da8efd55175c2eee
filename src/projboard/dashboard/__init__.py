"""Project collection state engine."""

from projboard.dashboard.bulk_delete import BulkDeleteCoordinator
from projboard.dashboard.controller import DashboardController
from projboard.dashboard.filters import filter_projects
from projboard.dashboard.pagination import PageSlice, clamp_page, page_count, page_numbers, paginate
from projboard.dashboard.selection import SelectionTracker
from projboard.dashboard.stats import aggregate_stats

__all__ = [
    "BulkDeleteCoordinator",
    "DashboardController",
    "PageSlice",
    "SelectionTracker",
    "aggregate_stats",
    "clamp_page",
    "filter_projects",
    "page_count",
    "page_numbers",
    "paginate",
]
