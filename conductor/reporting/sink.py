"""
Report sinks

Consumers of finished run results. The JSON sink writes one file per run
and stores a failure screenshot next to it when one was captured.
"""

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from conductor.conversation.models import RunResult

logger = logging.getLogger(__name__)

ARTIFACT_DIRS = ('reports', 'screenshots')


def ensure_artifact_dirs(root: str | Path) -> dict[str, Path]:
	"""Create the report and screenshot directories under `root`."""
	root = Path(root)
	paths = {}
	for name in ARTIFACT_DIRS:
		path = root / name
		if not path.exists():
			path.mkdir(parents=True, exist_ok=True)
			logger.info(f'📁 Created directory: {path}')
		paths[name] = path
	return paths


class ReportSink(ABC):
	"""Receives the structured result of every finished run."""

	@abstractmethod
	async def emit(self, result: RunResult, screenshot: bytes | None = None) -> None:
		...


class MemoryReportSink(ReportSink):
	"""Keeps results in memory."""

	def __init__(self):
		self.reports: list[dict] = []
		self.screenshots: dict[str, bytes] = {}

	async def emit(self, result: RunResult, screenshot: bytes | None = None) -> None:
		self.reports.append(result.to_report())
		if screenshot is not None:
			self.screenshots[result.session_id] = screenshot


class JsonReportSink(ReportSink):
	"""Writes `<workflow>-<session>.json` files into a reports directory."""

	def __init__(self, root: str | Path):
		self.paths = ensure_artifact_dirs(root)

	def report_path(self, result: RunResult) -> Path:
		return self.paths['reports'] / f'{_slug(result.workflow)}-{result.session_id}.json'

	async def emit(self, result: RunResult, screenshot: bytes | None = None) -> None:
		report = result.to_report()
		if screenshot is not None:
			screenshot_path = self.paths['screenshots'] / f'{_slug(result.workflow)}-failure-{result.session_id}.png'
			screenshot_path.write_bytes(screenshot)
			report['screenshot'] = str(screenshot_path)
			logger.info(f'📸 Failure screenshot saved: {screenshot_path}')

		path = self.report_path(result)
		path.write_text(json.dumps(report, indent=2), encoding='utf-8')
		logger.info(f'💾 Run report saved: {path}')


def _slug(name: str) -> str:
	return '-'.join(name.lower().split()) or 'workflow'
