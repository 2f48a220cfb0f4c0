"""
Preloaded region datasets

Static FeatureCollections keyed by region code, consulted before any
network request
"""

import json
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional
from loguru import logger

from .models import FeatureCollection

DATASET_SUFFIXES = (".geojson", ".json")


class PreloadedDatasets(Mapping[str, FeatureCollection]):
    """Read-only lookup from region code to a precomputed collection"""

    def __init__(self, datasets: Optional[Mapping[str, FeatureCollection]] = None):
        self._datasets: Dict[str, FeatureCollection] = dict(datasets or {})

    def __getitem__(self, region_code: str) -> FeatureCollection:
        return self._datasets[region_code]

    def __iter__(self) -> Iterator[str]:
        return iter(self._datasets)

    def __len__(self) -> int:
        return len(self._datasets)

    @classmethod
    def from_directory(cls, directory: Optional[str]) -> "PreloadedDatasets":
        """
        Load every <region_code>.geojson / <region_code>.json in a directory

        Files that cannot be read or are not FeatureCollections are skipped
        with a warning.
        """
        if not directory:
            return cls()

        dataset_dir = Path(directory)
        if not dataset_dir.is_dir():
            logger.debug(f"No preloaded dataset directory at {dataset_dir}")
            return cls()

        datasets = {}
        for path in sorted(dataset_dir.iterdir()):
            if path.suffix.lower() not in DATASET_SUFFIXES:
                continue
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
                    logger.warning(f"Skipping {path.name}: not a FeatureCollection")
                    continue
                datasets[path.stem] = FeatureCollection.from_geojson(data)
                logger.info(f"Loaded preloaded dataset {path.stem}: {len(datasets[path.stem])} parcels")
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load preloaded dataset {path.name}: {e}")

        return cls(datasets)
