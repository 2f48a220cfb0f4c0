"""
VWorld Data API client

Handles communication with the VWorld GetFeature endpoint. One request per
call: no retry and no caching at this layer.
"""

import requests
from typing import Dict, Any, Optional
from loguru import logger

from ...config import get_config, VWorldConfig
from ...exceptions import VWorldTransportError


class VWorldAPIClient:
    """Client for the VWorld Data API (cadastral layer)"""

    def __init__(self, config: Optional[VWorldConfig] = None):
        self.config = config or get_config().vworld
        self.url = self.config.url
        self.timeout = self.config.request_timeout

    def build_params(self, query: str, page: int, size: int) -> Dict[str, Any]:
        """
        Build GetFeature query parameters

        Wildcards (*, %) are not supported by the API; the region code is
        matched as a prefix of the parcel number.
        """
        return {
            "service": "data",
            "request": "GetFeature",
            "data": self.config.layer,
            "key": self.config.key,
            "domain": self.config.domain,
            "attrFilter": f"pnu:like:{query}",
            "geometry": "true",
            "format": "json",
            "size": size,
            "page": page,
        }

    def get_features(self, query: str, page: int, size: int) -> Dict[str, Any]:
        """
        Request one page of cadastral features

        Args:
            query: Region code prefix (e.g. "44790310")
            page: 1-based page number
            size: Features per page

        Returns:
            Parsed JSON response

        Raises:
            VWorldTransportError: On network failure, HTTP error or invalid JSON
        """
        headers = {"User-Agent": self.config.user_agent}
        params = self.build_params(query, page, size)

        logger.debug(f"[{self.config.layer}, Page {page}] Requesting...")

        try:
            response = requests.get(
                self.url,
                params=params,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as e:
            raise VWorldTransportError(f"VWorld API timeout after {self.timeout}s") from e
        except requests.exceptions.HTTPError as e:
            raise VWorldTransportError(f"VWorld API HTTP error {e.response.status_code}") from e
        except requests.exceptions.RequestException as e:
            raise VWorldTransportError(f"VWorld API request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise VWorldTransportError(f"VWorld API returned invalid JSON: {e}") from e
