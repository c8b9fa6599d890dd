"""
Configuration module for the contractor tracker.
"""
from .settings import (
    MILEAGE_RATE,
    TrackerConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'MILEAGE_RATE',
    'TrackerConfig',
    'get_config',
    'load_config',
    'reload_config'
]
