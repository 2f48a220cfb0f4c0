"""
VWorld cadastre data models

Data classes for parcels, page results and region outcomes
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field


@dataclass(frozen=True)
class CadastralFeature:
    """Represents one cadastral parcel (GeoJSON feature)"""
    id: str
    geometry: Dict[str, Any]
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def pnu(self) -> Optional[str]:
        """Parcel number (PNU) if present in the attributes"""
        value = self.properties.get("pnu")
        return str(value) if value is not None else None

    def polygon(self) -> List[List[List[float]]]:
        """
        Get rings used for measurement as [[[lon, lat], ...], ...]

        VWorld returns parcels as MultiPolygon; the first member polygon is
        used. Other geometry types give an empty polygon.
        """
        geom_type = self.geometry.get("type")
        coordinates = self.geometry.get("coordinates") or []
        if geom_type == "Polygon":
            return coordinates
        if geom_type == "MultiPolygon":
            return coordinates[0] if coordinates else []
        return []

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "Feature",
            "id": self.id,
            "geometry": self.geometry,
            "properties": self.properties,
        }


@dataclass(frozen=True)
class FeatureCollection:
    """Ordered collection of parcels"""
    features: Tuple[CadastralFeature, ...] = ()

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self):
        return iter(self.features)

    def to_geojson(self) -> Dict[str, Any]:
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.features],
        }

    @classmethod
    def from_geojson(cls, data: Dict[str, Any]) -> "FeatureCollection":
        # Local import: parser depends on this module
        from .parser import VWorldResponseParser
        if not isinstance(data, dict):
            raise ValueError(f"FeatureCollection must be an object, got {type(data).__name__}")
        return cls(tuple(VWorldResponseParser.parse_features(data.get("features") or [])))


class PageStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    API_ERROR = "api_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class PageResult:
    """Classified outcome of one page request"""
    status: PageStatus
    features: Tuple[CadastralFeature, ...] = ()
    is_last_page: bool = False
    message: Optional[str] = None

    @classmethod
    def ok(cls, features: Sequence[CadastralFeature], is_last_page: bool) -> "PageResult":
        return cls(PageStatus.OK, tuple(features), is_last_page)

    @classmethod
    def not_found(cls) -> "PageResult":
        return cls(PageStatus.NOT_FOUND, is_last_page=True)

    @classmethod
    def api_error(cls, message: str) -> "PageResult":
        return cls(PageStatus.API_ERROR, message=message)

    @classmethod
    def transport_error(cls, message: str) -> "PageResult":
        return cls(PageStatus.TRANSPORT_ERROR, message=message)


class CollectionStatus(str, Enum):
    COLLECTED = "collected"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class CollectionOutcome:
    """Terminal result of a region fetch"""
    status: CollectionStatus
    collection: Optional[FeatureCollection] = None
    reason: Optional[str] = None

    @classmethod
    def collected(cls, collection: FeatureCollection) -> "CollectionOutcome":
        if not len(collection):
            raise ValueError("A collected outcome needs at least one feature")
        return cls(CollectionStatus.COLLECTED, collection=collection)

    @classmethod
    def empty(cls) -> "CollectionOutcome":
        return cls(CollectionStatus.EMPTY)

    @classmethod
    def failed(cls, reason: str) -> "CollectionOutcome":
        return cls(CollectionStatus.FAILED, reason=reason)
