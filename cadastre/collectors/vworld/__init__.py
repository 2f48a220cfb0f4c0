"""
VWorld cadastral data collection module

Paginated parcel collector with separate components for:
- API client: VWorld Data API communication
- Models: Data structures (CadastralFeature, PageResult, CollectionOutcome)
- Parser: Response envelope and feature parsing
- Page fetcher: One page request, classified
- Preloaded: Static datasets used instead of the API
- Status: Progress reporting observers
- Collector: Main orchestrator class
"""

from .models import (
    CadastralFeature,
    FeatureCollection,
    PageStatus,
    PageResult,
    CollectionStatus,
    CollectionOutcome,
)
from .api_client import VWorldAPIClient
from .page_fetcher import PageFetcher
from .preloaded import PreloadedDatasets
from .status import StatusReporter, LoggingStatusReporter, NullStatusReporter
from .collector import RegionCollector

__all__ = [
    "CadastralFeature",
    "FeatureCollection",
    "PageStatus",
    "PageResult",
    "CollectionStatus",
    "CollectionOutcome",
    "VWorldAPIClient",
    "PageFetcher",
    "PreloadedDatasets",
    "StatusReporter",
    "LoggingStatusReporter",
    "NullStatusReporter",
    "RegionCollector",
]
