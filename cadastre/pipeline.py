"""
Parcel Measurement Pipeline

  1. Input: Region code (legal district prefix)
  2. Collect parcels (preloaded dataset or paginated VWorld API)
  3. Measure each parcel (haversine perimeter, shoelace area)
  4. Assemble region report JSON
"""

import json
import os
from typing import Optional
from loguru import logger

from .config import get_config, CollectorConfig
from .models import ParcelMeasurement, RegionReport
from .collectors import RegionCollector, PreloadedDatasets
from .collectors.vworld import CadastralFeature, CollectionStatus, FeatureCollection, StatusReporter
from .analysis.geometry_utils import calculate_area, calculate_perimeter, is_ring_closed, ring_bounds


class ParcelMeasurementPipeline:
    """
    Collect a region and measure every parcel in it

    Usage:
        pipeline = ParcelMeasurementPipeline()
        report = pipeline.run("44790310")
        pipeline.save(report, "output/44790310.json")
    """

    def __init__(
        self,
        config: Optional[CollectorConfig] = None,
        collector: Optional[RegionCollector] = None,
        status_reporter: Optional[StatusReporter] = None
    ):
        self.config = config or get_config()
        if collector is None:
            collector = RegionCollector(
                preloaded=PreloadedDatasets.from_directory(self.config.preloaded_dir),
                status_reporter=status_reporter,
                config=self.config.vworld
            )
        self.collector = collector

    def run(self, region_code: str) -> RegionReport:
        """Collect and measure one region"""
        logger.info(f"Loading cadastral data for region: {region_code}")
        outcome = self.collector.collect_region(region_code)

        if outcome.status == CollectionStatus.FAILED:
            logger.error(f"Failed to load region {region_code}: {outcome.reason}")
            return RegionReport(region_code=region_code, status="failed", reason=outcome.reason)

        if outcome.status == CollectionStatus.EMPTY:
            logger.warning(f"Region {region_code} has no parcels")
            return RegionReport(region_code=region_code, status="empty")

        return self.measure_collection(region_code, outcome.collection)

    def measure_collection(self, region_code: str, collection: FeatureCollection) -> RegionReport:
        """Measure every parcel of an already collected region"""
        parcels = [self.measure_feature(feature) for feature in collection]

        report = RegionReport(
            region_code=region_code,
            status="collected",
            parcel_count=len(parcels),
            total_area_sqm=sum(p.area_sqm for p in parcels),
            total_perimeter_m=sum(p.perimeter_m for p in parcels),
            parcels=parcels
        )
        logger.info(f"Measured {report.parcel_count} parcels: "
                    f"{report.total_area_sqm:.2f} sqm, {report.total_perimeter_m:.2f} m")
        return report

    @staticmethod
    def measure_feature(feature: CadastralFeature) -> ParcelMeasurement:
        """Perimeter and area of one parcel's outer ring"""
        polygon = feature.polygon()
        outer = polygon[0] if polygon else []

        perimeter = calculate_perimeter(polygon)
        area = calculate_area(polygon)
        logger.debug(f"Parcel {feature.id}: perimeter {perimeter:.2f}m, area {area:.2f}m²")

        return ParcelMeasurement(
            feature_id=feature.id,
            pnu=feature.pnu,
            area_sqm=area,
            perimeter_m=perimeter,
            ring_closed=is_ring_closed(outer),
            bbox=list(ring_bounds(outer)) if outer else [],
            properties=feature.properties
        )

    def save(self, report: RegionReport, output_path: str) -> str:
        """Save region report to JSON file"""
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(report.model_dump(), f, indent=2, ensure_ascii=False)

        logger.info(f"Saved region report to {output_path}")
        return output_path
