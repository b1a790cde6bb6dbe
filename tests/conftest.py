"""
Pytest configuration and shared fixtures for all tests.
"""

import os

import pytest

from conductor.config.features import reload_feature_flags
from conductor.reporting.sink import ensure_artifact_dirs

BROWSER_TESTS_ENABLED = os.getenv('CONDUCTOR_BROWSER_TESTS', 'false').lower() == 'true'


def pytest_collection_modifyitems(config, items):
	"""Skip tests marked `browser` unless CONDUCTOR_BROWSER_TESTS=true."""
	if BROWSER_TESTS_ENABLED:
		return
	skip_browser = pytest.mark.skip(reason='Real-browser tests disabled (set CONDUCTOR_BROWSER_TESTS=true)')
	for item in items:
		if 'browser' in item.keywords:
			item.add_marker(skip_browser)


@pytest.fixture(scope='function')
def artifacts_dir(tmp_path):
	"""Fresh reports/ and screenshots/ directories for one test."""
	paths = ensure_artifact_dirs(tmp_path)
	yield paths


@pytest.fixture(autouse=True)
def _reset_feature_flags():
	"""Keep the global feature flags from leaking env changes between tests."""
	yield
	reload_feature_flags()
