"""
Single-page fetcher

Requests one page of a region and classifies the response into a PageResult
"""

from typing import Optional
from loguru import logger

from .api_client import VWorldAPIClient
from .models import PageResult
from .parser import VWorldResponseParser
from ...exceptions import VWorldTransportError

UNKNOWN_ERROR = "Unknown error"


class PageFetcher:
    """Fetches and classifies one page of cadastral features"""

    def __init__(self, api_client: Optional[VWorldAPIClient] = None):
        self.api_client = api_client or VWorldAPIClient()
        self.parser = VWorldResponseParser()

    def fetch(self, query: str, page_number: int, page_size: int) -> PageResult:
        """
        Fetch one page, single attempt

        Args:
            query: Region code prefix
            page_number: 1-based page number
            page_size: Features requested per page

        Returns:
            PageResult: ok / not_found / api_error / transport_error
        """
        try:
            data = self.api_client.get_features(query, page_number, page_size)
        except VWorldTransportError as e:
            logger.warning(f"Transport error on page {page_number}: {e}")
            return PageResult.transport_error(str(e))

        try:
            status, raw_features, error_text = self.parser.parse_envelope(data)
        except ValueError as e:
            logger.warning(f"Malformed response on page {page_number}: {e}")
            return PageResult.transport_error(f"Malformed response: {e}")

        if status == "OK" and raw_features is not None:
            try:
                features = self.parser.parse_features(raw_features)
            except ValueError as e:
                logger.warning(f"Malformed features on page {page_number}: {e}")
                return PageResult.transport_error(f"Malformed feature payload: {e}")

            is_last_page = len(features) < page_size
            if is_last_page:
                logger.debug(f"Last page reached ({len(features)} features)")
            return PageResult.ok(features, is_last_page)

        message = error_text or UNKNOWN_ERROR
        logger.warning(f"API Error on page {page_number}: {status} - {message}")

        if status == "NOT FOUND":
            return PageResult.not_found()

        return PageResult.api_error(message)
