"""
Feature Flags Configuration

Centralized feature flag management for optional runner behaviour.
"""

import logging
import os
from typing import Any

logger = logging.getLogger(__name__)


class FeatureFlags:
	"""
	Feature flag manager for optional functionality.

	Features can be enabled/disabled via environment variables:
	- CONDUCTOR_SCREENSHOT_ON_FAILURE=false
	- CONDUCTOR_WRITE_REPORTS=false
	"""

	def __init__(self):
		"""Initialize feature flags from environment variables."""
		self.screenshot_on_failure = self._get_flag('CONDUCTOR_SCREENSHOT_ON_FAILURE', default=True)
		self.write_reports = self._get_flag('CONDUCTOR_WRITE_REPORTS', default=True)

		self._log_enabled_features()

	def _get_flag(self, env_var: str, default: bool = False) -> bool:
		"""
		Get feature flag from environment variable.

		Args:
			env_var: Environment variable name
			default: Default value if not set

		Returns:
			True if enabled, False otherwise
		"""
		value = os.getenv(env_var, str(default)).lower()
		return value in ('true', '1', 'yes', 'on', 'enabled')

	def _log_enabled_features(self):
		enabled_features = []

		if self.screenshot_on_failure:
			enabled_features.append('ScreenshotOnFailure')
		if self.write_reports:
			enabled_features.append('WriteReports')

		if enabled_features:
			logger.debug(f"Enabled features: {', '.join(enabled_features)}")
		else:
			logger.debug('No optional features enabled')

	def to_dict(self) -> dict[str, Any]:
		"""Export feature flags as dictionary."""
		return {
			'screenshot_on_failure': self.screenshot_on_failure,
			'write_reports': self.write_reports,
		}


# Global feature flags instance
_feature_flags: FeatureFlags | None = None


def get_feature_flags() -> FeatureFlags:
	"""
	Get global feature flags instance.

	Returns:
		FeatureFlags instance
	"""
	global _feature_flags
	if _feature_flags is None:
		_feature_flags = FeatureFlags()
	return _feature_flags


def reload_feature_flags() -> FeatureFlags:
	"""Reload feature flags from environment (useful for testing)."""
	global _feature_flags
	_feature_flags = FeatureFlags()
	return _feature_flags
