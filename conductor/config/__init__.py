"""
Configuration module for conductor.

Provides timing/site settings and feature flags.
"""

from conductor.config.features import FeatureFlags, get_feature_flags, reload_feature_flags
from conductor.config.settings import SiteConfig, TimingConfig

__all__ = [
	'FeatureFlags',
	'SiteConfig',
	'TimingConfig',
	'get_feature_flags',
	'reload_feature_flags',
]
