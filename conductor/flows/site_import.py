"""
Site import flows

The plain Full Site Import (template import with dependency installation)
and the AI-powered variant (business interview, content generation, live
preview), both expressed on top of a DrivenSurface.
"""

import logging
import time
from pathlib import Path
from typing import Callable

from pydantic import BaseModel, Field

from conductor.config.settings import TimingConfig
from conductor.conversation.errors import ProgressFailedError
from conductor.conversation.models import FailureReason, ProgressState, ProgressStatus, RunResult
from conductor.conversation.poller import ProgressObserver, ProgressPoller
from conductor.conversation.session import WorkflowRunner
from conductor.flows.business import BusinessProfile, build_business_info_workflow
from conductor.surface.base import DrivenSurface, SignalSource
from conductor.surface.selectors import SurfaceSelectors

logger = logging.getLogger(__name__)

PREVIEW_SECTIONS = ('header', 'main', 'footer')


def require_start(
	signal: SignalSource,
	surface: DrivenSurface,
	started_selector: str,
	timeout: float,
	clock: Callable[[], float] = time.monotonic,
) -> SignalSource:
	"""
	Wrap `signal` so it fails with a timeout if no progress indicator shows
	up within `timeout` of the first sample.
	"""
	first_sample: float | None = None
	started = False

	async def sample() -> ProgressState:
		nonlocal first_sample, started
		state = await signal()
		if state.is_terminal or started:
			return state
		if await surface.is_visible(started_selector):
			started = True
			return state
		if first_sample is None:
			first_sample = clock()
		elif clock() - first_sample >= timeout:
			return ProgressState.failed(FailureReason.timeout(f'Progress indicator {started_selector} never appeared'))
		return state

	return sample


class PreviewReport(BaseModel):
	"""What the live preview showed."""

	missing_text: list[str] = Field(default_factory=list)
	missing_sections: list[str] = Field(default_factory=list)
	screenshot: str | None = None

	@property
	def ok(self) -> bool:
		return not self.missing_text and not self.missing_sections


class AISiteImportResult(BaseModel):
	run: RunResult
	preview: PreviewReport | None = None

	@property
	def ok(self) -> bool:
		return self.run.succeeded and self.preview is not None and self.preview.ok


class AISiteImportFlow:
	"""AI FSI: interview, generation progress, then preview verification."""

	def __init__(
		self,
		surface: DrivenSurface,
		runner: WorkflowRunner,
		selectors: SurfaceSelectors | None = None,
		screenshots_dir: str | Path | None = None,
	):
		self.surface = surface
		self.runner = runner
		self.timing: TimingConfig = runner.timing
		self.selectors = selectors or SurfaceSelectors()
		self.screenshots_dir = Path(screenshots_dir) if screenshots_dir else None

	async def start(self) -> None:
		await self.surface.click(self.selectors.start_ai_workflow)
		await self.surface.wait_for(self.selectors.conversation_container, timeout=15.0)
		logger.info('✅ AI FSI workflow started')

	async def restart(self) -> None:
		await self.surface.click(self.selectors.restart_ai_workflow)
		await self.surface.wait_for(self.selectors.conversation_container, timeout=15.0)
		logger.info('🔄 AI FSI workflow restarted')

	async def run(self, profile: BusinessProfile | None = None, observer: ProgressObserver | None = None) -> AISiteImportResult:
		"""Start the AI workflow, answer the interview and wait for generated content."""
		profile = profile or BusinessProfile()
		await self.start()

		signal = require_start(
			self.surface.progress_signal('generation'),
			self.surface,
			self.selectors.progress_for('generation').started,
			self.timing.progress_start_timeout,
		)
		run = await self.runner.run(build_business_info_workflow(profile), signal=signal, observer=observer)
		if not run.succeeded:
			return AISiteImportResult(run=run)

		preview = await self.verify_preview([profile.business_name, profile.email])
		if self.screenshots_dir is not None:
			preview.screenshot = await self.screenshot_preview(self.screenshots_dir / f'ai-fsi-{run.session_id}.png')
		return AISiteImportResult(run=run, preview=preview)

	async def verify_preview(self, expected_text: list[str], sections: tuple[str, ...] = PREVIEW_SECTIONS) -> PreviewReport:
		"""Check the preview iframe for generated text and page structure."""
		await self.surface.wait_for(self.selectors.preview_iframe, timeout=self.timing.progress_start_timeout)
		report = PreviewReport()
		async with self.surface.frame(self.selectors.preview_iframe) as preview:
			body = await preview.text_content('body')
			report.missing_text = [text for text in expected_text if text not in body]
			for section in sections:
				if not await preview.is_visible(section):
					report.missing_sections.append(section)

		if report.ok:
			logger.info('✅ Preview content validation passed')
		else:
			logger.warning(f'❌ Preview missing text {report.missing_text} and sections {report.missing_sections}')
		return report

	async def screenshot_preview(self, path: str | Path) -> str:
		path = Path(path)
		path.parent.mkdir(parents=True, exist_ok=True)
		await self.surface.screenshot(path=str(path), selector=self.selectors.preview_iframe)
		logger.info(f'📸 Preview screenshot saved: {path}')
		return str(path)


class ImportSummary(BaseModel):
	missing_dependencies: int = 0
	progress: ProgressState
	pages: int = 0
	templates: int = 0
	success_message: str | None = None

	@property
	def ok(self) -> bool:
		return self.progress.status is ProgressStatus.COMPLETE


class FullSiteImportFlow:
	"""Plain FSI: start import, satisfy dependencies, await import progress."""

	def __init__(self, surface: DrivenSurface, timing: TimingConfig | None = None, selectors: SurfaceSelectors | None = None):
		self.surface = surface
		self.timing = timing or TimingConfig()
		self.selectors = selectors or SurfaceSelectors()
		self.poller = ProgressPoller(self.timing.progress_policy())

	async def start(self, template_id: str) -> None:
		await self.surface.click(self.selectors.fsi_import_button.format(template_id=template_id))
		await self.surface.wait_for(self.selectors.fsi_modal, timeout=10.0)
		logger.info(f'✅ Started FSI import for template: {template_id}')

	async def handle_dependencies(self, timeout: float = 60.0) -> int:
		"""
		Install missing dependencies if the check reports any.

		Returns:
			Number of dependencies that were missing

		Raises:
			ProgressFailedError: installation failed or timed out
		"""
		logger.info('🔍 Checking dependencies...')
		await self.surface.wait_for(self.selectors.dependency_check_complete, timeout=30.0)
		missing = await self.surface.count(self.selectors.missing_dependency)
		if missing == 0:
			logger.info('✅ All dependencies are satisfied')
			return 0

		logger.info(f'⚠️  Found {missing} missing dependencies')
		await self.surface.click(self.selectors.install_dependencies)
		state = await self.poller.await_terminal(
			self.surface.progress_signal('dependencies'),
			poll_interval=self.timing.poll_interval,
			deadline=timeout,
		)
		if state.status is not ProgressStatus.COMPLETE:
			raise ProgressFailedError(state.reason)
		logger.info('✅ Dependencies installed successfully')
		return missing

	async def await_import(self, timeout: float | None = None, observer: ProgressObserver | None = None) -> ProgressState:
		logger.info('📊 Monitoring import progress...')
		return await self.poller.await_terminal(
			self.surface.progress_signal('import'),
			poll_interval=self.timing.progress_poll_interval,
			deadline=timeout if timeout is not None else self.timing.overall_deadline,
			observer=observer,
		)

	async def imported_counts(self) -> tuple[int, int]:
		pages = await self.surface.count(self.selectors.imported_page)
		templates = await self.surface.count(self.selectors.imported_template)
		return pages, templates

	async def run(self, template_id: str, observer: ProgressObserver | None = None) -> ImportSummary:
		await self.start(template_id)
		missing = await self.handle_dependencies()
		progress = await self.await_import(observer=observer)
		summary = ImportSummary(missing_dependencies=missing, progress=progress)
		if summary.ok:
			summary.pages, summary.templates = await self.imported_counts()
			summary.success_message = await self.surface.text_of(self.selectors.import_success_message)
			logger.info(f'✅ Import validation complete: {summary.pages} pages, {summary.templates} templates')
		return summary
