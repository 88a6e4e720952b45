"""
Listing glue: turns a TableState into the visible set of entities.

The selection core only ever sees the materialised ListingPage; how it is
produced (in-memory frame, remote service) is up to the provider.
"""

from .provider import DataFrameListingProvider, ListingPage, ListingProvider
from .query import format_filter_query, parse_filter_query, sort_by_from_sorters, sorters_from_sort_by

__all__ = [
    "DataFrameListingProvider",
    "ListingPage",
    "ListingProvider",
    "format_filter_query",
    "parse_filter_query",
    "sort_by_from_sorters",
    "sorters_from_sort_by",
]
