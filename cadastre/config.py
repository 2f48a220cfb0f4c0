"""
Configuration settings for Cadastre Collector
"""

from dataclasses import dataclass, field
from typing import Optional
import os


@dataclass
class VWorldConfig:
    """VWorld Data API endpoint and pagination settings"""
    # VWorld Data API v2 (GetFeature)
    url: str = "https://api.vworld.kr/req/data"
    layer: str = "LP_PA_CBND_BUBUN"  # Cadastral boundary layer

    # Key provisioning happens outside this tool
    key: str = field(default_factory=lambda: os.environ.get("VWORLD_KEY", ""))
    domain: str = field(default_factory=lambda: os.environ.get("VWORLD_DOMAIN", "localhost"))

    # Pagination
    page_size: int = 1000  # Features per page (VWorld API limit)
    max_pages: int = 20  # Maximum 20,000 parcels per region
    page_delay_s: float = 0.1  # Courtesy delay between page requests

    # Request settings
    request_timeout: int = 10

    # User agent for API requests
    user_agent: str = "CadastreCollector/1.0"


@dataclass
class StorageConfig:
    """Project state storage settings"""
    # Quick store mirrors a browser-style local store: small and size-limited
    quick_store_path: str = os.path.join(os.path.expanduser("~"), ".cadastre", "project_state.json")
    quick_store_max_bytes: int = 5 * 1024 * 1024

    # Suggested name for full project exports (no size limit)
    project_filename: str = "cadastre-project.json"


@dataclass
class CollectorConfig:
    """Top-level configuration"""
    vworld: VWorldConfig = field(default_factory=VWorldConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)

    # Directory of static <region_code>.geojson datasets used instead of the API
    preloaded_dir: Optional[str] = None

    # Output settings
    output_dir: str = "output"


# Global config instance
config = CollectorConfig()


def get_config() -> CollectorConfig:
    """Get global configuration"""
    return config


def validate_config(config: CollectorConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if not hasattr(config, 'vworld') or config.vworld is None:
        errors.append("vworld configuration is required but not set")
    else:
        if not config.vworld.url:
            errors.append("vworld.url is required but not set")
        if not config.vworld.layer:
            errors.append("vworld.layer is required but not set")
        if config.vworld.page_size is None or config.vworld.page_size <= 0:
            errors.append(f"vworld.page_size must be positive, got {config.vworld.page_size}")
        if config.vworld.max_pages is None or config.vworld.max_pages <= 0:
            errors.append(f"vworld.max_pages must be positive, got {config.vworld.max_pages}")
        if config.vworld.page_delay_s is None or config.vworld.page_delay_s < 0:
            errors.append(f"vworld.page_delay_s must not be negative, got {config.vworld.page_delay_s}")

    if not hasattr(config, 'storage') or config.storage is None:
        errors.append("storage configuration is required but not set")
    elif config.storage.quick_store_max_bytes <= 0:
        errors.append(f"storage.quick_store_max_bytes must be positive, got {config.storage.quick_store_max_bytes}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
