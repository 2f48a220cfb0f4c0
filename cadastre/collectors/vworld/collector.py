"""
Region Collector

Assembles a region's cadastral parcels from the paginated VWorld API
"""

import time
from typing import Callable, List, Mapping, Optional
from loguru import logger

from .models import CadastralFeature, CollectionOutcome, FeatureCollection, PageStatus
from .page_fetcher import PageFetcher
from .status import LoggingStatusReporter, StatusReporter
from ...config import get_config, VWorldConfig
from ...exceptions import VWorldTransportError


class RegionCollector:
    """
    Collect every parcel of a region via chunked page requests

    Loads up to max_pages pages of page_size features, in order, pausing
    page_delay_s between requests. A page shorter than page_size is taken as
    the last one; the API gives no total count, so a full final page costs one
    extra request.

    Any API or transport error aborts the region and discards the pages
    already received.
    """

    def __init__(
        self,
        page_fetcher: Optional[PageFetcher] = None,
        preloaded: Optional[Mapping[str, FeatureCollection]] = None,
        status_reporter: Optional[StatusReporter] = None,
        config: Optional[VWorldConfig] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.config = config or get_config().vworld
        self.page_fetcher = page_fetcher or PageFetcher()
        self.preloaded = preloaded if preloaded is not None else {}
        self.status = status_reporter or LoggingStatusReporter()
        self.page_size = self.config.page_size
        self.max_pages = self.config.max_pages
        self.page_delay_s = self.config.page_delay_s
        self._sleep = sleep

    def collect_region(self, query: str) -> CollectionOutcome:
        """
        Fetch all cadastral parcels whose PNU starts with a region code

        Args:
            query: Legal district code prefix (e.g. "44790310")

        Returns:
            CollectionOutcome: collected / empty / failed
        """
        self.status.report("Loading cadastral map...")

        preloaded = self.preloaded.get(query)
        if preloaded is not None and len(preloaded):
            logger.info(f"Using preloaded dataset for {query} ({len(preloaded)} parcels)")
            self.status.report("Local dataset loaded")
            return CollectionOutcome.collected(preloaded)

        features: List[CadastralFeature] = []

        try:
            for page in range(1, self.max_pages + 1):
                if page > 1:
                    self._sleep(self.page_delay_s)

                self.status.report(f"Receiving page {page}...")
                result = self.page_fetcher.fetch(query, page, self.page_size)

                if result.status == PageStatus.OK:
                    features.extend(result.features)
                    if result.is_last_page:
                        break
                elif result.status == PageStatus.NOT_FOUND:
                    # No (more) data for this region: normal termination
                    break
                elif result.status == PageStatus.API_ERROR:
                    logger.error(f"VWorld API rejected region {query} on page {page}: {result.message}")
                    self.status.report_error(
                        f"API error: {result.message} "
                        f"(requesting domain {self.config.domain} must match the VWorld key settings)"
                    )
                    return CollectionOutcome.failed(result.message)
                else:
                    raise VWorldTransportError(result.message or "Transport error")
            else:
                logger.info(f"Page cap reached for {query}: {self.max_pages} pages x {self.page_size} features")
        except VWorldTransportError as e:
            logger.error(f"Fetch error for region {query}: {e}")
            self.status.report_error("Load failed: API authentication or network error.")
            return CollectionOutcome.failed(str(e))

        if not features:
            self.status.report("No cadastral data for this region (0 parcels).")
            return CollectionOutcome.empty()

        logger.info(f"Collected {len(features)} parcels for region {query}")
        self.status.report(f"Load complete ({len(features)} parcels)")
        return CollectionOutcome.collected(FeatureCollection(tuple(features)))
