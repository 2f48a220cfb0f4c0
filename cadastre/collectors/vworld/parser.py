"""
VWorld response parser

Parses the VWorld Data API envelope and its GeoJSON features into
CadastralFeature objects
"""

from typing import Any, Dict, List, Optional, Tuple
from .models import CadastralFeature


class VWorldResponseParser:
    """Parses VWorld Data API responses"""

    @staticmethod
    def parse_envelope(data: Dict[str, Any]) -> Tuple[Optional[str], Optional[List[Dict[str, Any]]], Optional[str]]:
        """
        Split a VWorld response into status, raw features and error text

        Response shape:
            {"response": {"status": "OK", "result": {"featureCollection": {"features": [...]}}}}
            {"response": {"status": "ERROR", "error": {"text": "..."}}}

        Args:
            data: JSON response from VWorld API

        Returns:
            Tuple of (status, features or None, error text or None)

        Raises:
            ValueError: If the body or its "response" member is not an object
        """
        if not isinstance(data, dict):
            raise ValueError(f"Response body is not an object: {type(data).__name__}")

        response = data.get("response")
        if not isinstance(response, dict):
            raise ValueError("Response has no \"response\" object")

        status = response.get("status")

        features = None
        result = response.get("result")
        if isinstance(result, dict):
            collection = result.get("featureCollection")
            if isinstance(collection, dict):
                features = collection.get("features")

        error_text = None
        error = response.get("error")
        if isinstance(error, dict):
            error_text = error.get("text")

        return status, features, error_text

    @staticmethod
    def parse_features(raw_features: List[Dict[str, Any]]) -> List[CadastralFeature]:
        """
        Convert GeoJSON feature dicts into CadastralFeature objects

        The feature id falls back to the parcel number (pnu) and then to the
        position in the list when the API omits it.

        Raises:
            ValueError: If features is not a list, or a feature is not a mapping
                with a geometry and mapping properties
        """
        if not isinstance(raw_features, list):
            raise ValueError(f"Features is not a list: {type(raw_features).__name__}")

        features = []
        for index, raw in enumerate(raw_features):
            if not isinstance(raw, dict):
                raise ValueError(f"Feature {index} is not an object: {type(raw).__name__}")

            geometry = raw.get("geometry")
            if not isinstance(geometry, dict):
                raise ValueError(f"Feature {index} has no geometry")

            properties = raw.get("properties") or {}
            if not isinstance(properties, dict):
                raise ValueError(f"Feature {index} properties is not an object: {type(properties).__name__}")

            feature_id = raw.get("id") or properties.get("pnu") or str(index)

            features.append(CadastralFeature(
                id=str(feature_id),
                geometry=geometry,
                properties=properties
            ))

        return features
