"""
Summary: Configuration exports for the Vaultify service.
Why: Give bootstrap code one import path for config objects and path helpers.
"""

from .config import AppConfig, CatalogConfig, PipelineConfig, StorageConfig
from .paths import default_config_path, default_scratch_dir

__all__ = [
    "AppConfig",
    "CatalogConfig",
    "PipelineConfig",
    "StorageConfig",
    "default_config_path",
    "default_scratch_dir",
]
