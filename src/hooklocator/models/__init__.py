"""Hook Locator data models."""

from hooklocator.models.detail import ContextLine, DetailRef, DetailView
from hooklocator.models.match import MatchRecord, ScanBudget, ScanFailure, SearchResult, identity_key
from hooklocator.models.result_page import ResultPage
from hooklocator.models.scan_root import PLUGIN, THEME, ScanRoot

__all__ = [
    "PLUGIN",
    "THEME",
    "ContextLine",
    "DetailRef",
    "DetailView",
    "MatchRecord",
    "ResultPage",
    "ScanBudget",
    "ScanFailure",
    "ScanRoot",
    "SearchResult",
    "identity_key",
]
