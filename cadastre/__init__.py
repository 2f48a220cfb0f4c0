"""
Cadastre Collector

Paginated cadastral parcel collection from the VWorld Data API and
per-parcel perimeter/area measurement.
"""

__version__ = "1.0.0"
