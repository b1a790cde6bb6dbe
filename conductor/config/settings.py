"""
Runner configuration.

Timing and site settings, each loadable from environment variables.
"""

import logging
import os
from dataclasses import dataclass

from conductor.conversation.policy import PollPolicy

logger = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
	raw = os.getenv(name)
	if raw is None or raw == '':
		return default
	try:
		return float(raw)
	except ValueError:
		raise ValueError(f'{name} must be a number of seconds, got {raw!r}') from None


@dataclass
class TimingConfig:
	"""Timeouts and poll intervals, all in seconds."""

	# Wait for each expected prompt
	per_step_timeout: float = 30.0

	# Prompt polling tick
	poll_interval: float = 0.5

	# Progress signal polling tick
	progress_poll_interval: float = 3.0

	# Budget for a whole run (conversation plus progress wait)
	overall_deadline: float = 300.0

	# Pause after each submitted answer
	settle_delay: float = 1.0

	# Wait for a progress indicator to show up at all
	progress_start_timeout: float = 30.0

	@classmethod
	def from_env(cls) -> 'TimingConfig':
		"""
		Create configuration from environment variables.

		Environment variables:
		- CONDUCTOR_STEP_TIMEOUT (default: 30)
		- CONDUCTOR_POLL_INTERVAL (default: 0.5)
		- CONDUCTOR_PROGRESS_POLL_INTERVAL (default: 3)
		- CONDUCTOR_OVERALL_DEADLINE (default: 300)
		- CONDUCTOR_SETTLE_DELAY (default: 1)
		- CONDUCTOR_PROGRESS_START_TIMEOUT (default: 30)
		"""
		return cls(
			per_step_timeout=_env_float('CONDUCTOR_STEP_TIMEOUT', 30.0),
			poll_interval=_env_float('CONDUCTOR_POLL_INTERVAL', 0.5),
			progress_poll_interval=_env_float('CONDUCTOR_PROGRESS_POLL_INTERVAL', 3.0),
			overall_deadline=_env_float('CONDUCTOR_OVERALL_DEADLINE', 300.0),
			settle_delay=_env_float('CONDUCTOR_SETTLE_DELAY', 1.0),
			progress_start_timeout=_env_float('CONDUCTOR_PROGRESS_START_TIMEOUT', 30.0),
		)

	def prompt_policy(self) -> PollPolicy:
		return PollPolicy(interval=self.poll_interval, timeout=self.per_step_timeout)

	def progress_policy(self) -> PollPolicy:
		return PollPolicy(interval=self.progress_poll_interval, timeout=self.overall_deadline)


@dataclass
class SiteConfig:
	"""WordPress site under test."""

	base_url: str = 'http://localhost:8080'
	username: str = 'admin'
	password: str = 'password'
	artifacts_dir: str = 'tests'
	headless: bool = True

	@classmethod
	def from_env(cls) -> 'SiteConfig':
		"""
		Create configuration from environment variables.

		Environment variables:
		- WP_BASE_URL: WordPress URL (default: http://localhost:8080)
		- WP_USERNAME / WP_PASSWORD: admin credentials (default: admin/password)
		- CONDUCTOR_ARTIFACTS_DIR: root for reports/ and screenshots/ (default: tests)
		- HEADED: run the browser with a visible window when set
		"""
		return cls(
			base_url=os.getenv('WP_BASE_URL', 'http://localhost:8080').rstrip('/'),
			username=os.getenv('WP_USERNAME', 'admin'),
			password=os.getenv('WP_PASSWORD', 'password'),
			artifacts_dir=os.getenv('CONDUCTOR_ARTIFACTS_DIR', 'tests'),
			headless=not os.getenv('HEADED'),
		)

	def url(self, path: str) -> str:
		return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
