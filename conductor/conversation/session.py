"""
Workflow Session and Runner

A session owns one recorder and the current progress state for a single run
of a WorkflowSpec. The runner wires matcher, submitter, sequencer and poller
together, applies the overall deadline and hands the result to a report sink.
"""

import json
import logging
import time
from typing import Callable

from uuid_extensions import uuid7str

from conductor.config.features import FeatureFlags, get_feature_flags
from conductor.config.settings import TimingConfig
from conductor.conversation.errors import SurfaceError
from conductor.conversation.matcher import PromptMatcher
from conductor.conversation.models import (
	FailureKind,
	FailureReason,
	ProgressState,
	ProgressStatus,
	RunResult,
	SequencerState,
	WorkflowSpec,
)
from conductor.conversation.poller import ProgressObserver, ProgressPoller
from conductor.conversation.policy import PollPolicy
from conductor.conversation.recorder import ConversationRecorder
from conductor.conversation.sequencer import StepSequencer
from conductor.conversation.submitter import ResponseSubmitter
from conductor.reporting.sink import ReportSink
from conductor.surface.base import DrivenSurface, SignalSource

logger = logging.getLogger(__name__)


class WorkflowSession:
	"""State of one workflow run. Discarded once the run concludes."""

	def __init__(self, spec: WorkflowSpec, session_id: str | None = None, clock: Callable[[], float] = time.monotonic):
		self.session_id = session_id or uuid7str()
		self.spec = spec
		self.recorder = ConversationRecorder(clock=clock)
		self.progress = ProgressState.pending()
		self.started_at = clock()

	def observe(self, state: ProgressState) -> ProgressState:
		"""Apply an observed progress state; terminal states stick."""
		self.progress = self.progress.transition(state)
		return self.progress

	def __repr__(self) -> str:
		return f'WorkflowSession(id={self.session_id[:8]}..., workflow={self.spec.name}, progress={self.progress.status.value})'


class WorkflowRunner:
	"""
	Runs WorkflowSpecs against one driven surface.

	Sessions share nothing, so independent runners over independent surfaces
	can run concurrently.
	"""

	def __init__(
		self,
		surface: DrivenSurface,
		timing: TimingConfig | None = None,
		sink: ReportSink | None = None,
		feature_flags: FeatureFlags | None = None,
		clock: Callable[[], float] = time.monotonic,
	):
		"""
		Args:
			surface: Surface to drive
			timing: Timeouts and poll intervals (TimingConfig defaults if None)
			sink: Optional consumer of finished run results
			feature_flags: Flags controlling screenshots and reporting (global flags if None)
			clock: Monotonic clock (injectable for tests)
		"""
		self.surface = surface
		self.timing = timing or TimingConfig()
		self.sink = sink
		self.feature_flags = feature_flags or get_feature_flags()
		self._clock = clock

	async def run(
		self,
		spec: WorkflowSpec,
		signal: SignalSource | None = None,
		observer: ProgressObserver | None = None,
		session_id: str | None = None,
	) -> RunResult:
		"""
		Run the conversation, then optionally wait for `signal` to turn terminal.

		Args:
			spec: Steps to drive
			signal: Progress signal awaited after the last step (skipped if None)
			observer: Receives pending progress samples
			session_id: Explicit session id (generated if None)

		Returns:
			RunResult with final state, failure reason and the recorded history
		"""
		session = WorkflowSession(spec, session_id=session_id, clock=self._clock)
		deadline = PollPolicy(interval=self.timing.poll_interval, timeout=self.timing.overall_deadline).start(self._clock)
		logger.info(f'Started workflow session: {session.session_id[:8]}... ({spec.name})')

		sequencer = StepSequencer(
			spec,
			PromptMatcher(self.surface, self.timing.prompt_policy(), clock=self._clock),
			ResponseSubmitter(self.surface, settle_delay=self.timing.settle_delay),
			session.recorder,
			per_step_timeout=self.timing.per_step_timeout,
		)
		final_state = await sequencer.run(deadline)
		reason = sequencer.reason
		progress: ProgressState | None = None

		if final_state is SequencerState.COMPLETED and signal is not None:
			poller = ProgressPoller(self.timing.progress_policy(), clock=self._clock)
			try:
				observed = await poller.await_terminal(
					signal,
					poll_interval=self.timing.progress_poll_interval,
					deadline=deadline.remaining(),
					observer=observer,
				)
			except SurfaceError as e:
				logger.error(f'❌ Progress signal unreadable: {e}')
				observed = ProgressState.failed(FailureReason.surface_error(str(e)))
			progress = session.observe(observed)
			if progress.status is ProgressStatus.FAILED:
				reason = progress.reason
				final_state = SequencerState.TIMED_OUT if reason.kind is FailureKind.TIMEOUT else SequencerState.FAILED

		history = session.recorder.history()
		result = RunResult(
			session_id=session.session_id,
			workflow=spec.name,
			final_state=final_state,
			progress=progress,
			reason=reason,
			step_count=len(history),
			duration_ms=(self._clock() - session.started_at) * 1000,
			history=history,
		)
		await self._conclude(result)
		return result

	async def _conclude(self, result: RunResult) -> None:
		screenshot: bytes | None = None
		if result.succeeded:
			logger.info(f'✅ Workflow session {result.session_id[:8]}... finished in {result.duration_ms / 1000:.1f}s')
		else:
			logger.error(f'❌ Workflow session {result.session_id[:8]}... ended {result.final_state.value}: {result.reason}')
			logger.error(f"Conversation history: {json.dumps(result.to_report()['history'], indent=2)}")
			if self.feature_flags.screenshot_on_failure:
				try:
					screenshot = await self.surface.screenshot(full_page=True)
				except SurfaceError as e:
					logger.warning(f'Could not capture failure screenshot: {e}')
				except Exception as e:
					logger.error(f'Failure screenshot raised: {type(e).__name__}: {e}', exc_info=True)

		if self.sink is not None and self.feature_flags.write_reports:
			try:
				await self.sink.emit(result, screenshot)
			except Exception as e:
				logger.error(f'Report sink failed for session {result.session_id[:8]}...: {type(e).__name__}: {e}', exc_info=True)
