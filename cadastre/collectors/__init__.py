"""
Data collectors for Cadastre Collector

- RegionCollector: Cadastral parcels from the VWorld Data API
"""

from .vworld import RegionCollector, PageFetcher, VWorldAPIClient, PreloadedDatasets

__all__ = [
    "RegionCollector",
    "PageFetcher",
    "VWorldAPIClient",
    "PreloadedDatasets",
]
