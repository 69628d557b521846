# ABOUTME: Core algorithms for daisykit: DAISY clock values and content splitting/pagination.
# ABOUTME: Exports the time codec and the splitter so formats and callers share one entry point.

from daisykit.core.splitter import (
    DEFAULT_ITEMS_PER_PAGE,
    DEFAULT_SPLIT_TAG,
    Page,
    PageUrls,
    Part,
    paginate,
    split_by_tag,
)
from daisykit.core.timecode import calculate_duration, format_time, format_time_iso, parse_time

__all__ = [
    "DEFAULT_ITEMS_PER_PAGE",
    "DEFAULT_SPLIT_TAG",
    "Page",
    "PageUrls",
    "Part",
    "calculate_duration",
    "format_time",
    "format_time_iso",
    "paginate",
    "parse_time",
    "split_by_tag",
]
