"""
Step Sequencer

Drives a WorkflowSpec one step at a time: wait for the expected prompt,
answer it, record both sides of the exchange.
"""

import logging

from conductor.conversation.errors import ElementNotFoundError, PromptTimeoutError, SurfaceError
from conductor.conversation.matcher import PromptMatcher
from conductor.conversation.models import FailureKind, FailureReason, SequencerState, StepKind, WorkflowSpec
from conductor.conversation.policy import Deadline
from conductor.conversation.recorder import ConversationRecorder
from conductor.conversation.submitter import ResponseSubmitter

logger = logging.getLogger(__name__)


class StepSequencer:
	"""
	State machine over a WorkflowSpec.

	not_started -> running(i) -> completed | failed | timed_out

	A failed step is never retried; callers re-run with a narrowed WorkflowSpec.
	"""

	def __init__(
		self,
		spec: WorkflowSpec,
		matcher: PromptMatcher,
		submitter: ResponseSubmitter,
		recorder: ConversationRecorder,
		per_step_timeout: float = 30.0,
	):
		self.spec = spec
		self.matcher = matcher
		self.submitter = submitter
		self.recorder = recorder
		self.per_step_timeout = per_step_timeout

		self.state = SequencerState.NOT_STARTED
		self.index = 0
		self.reason: FailureReason | None = None
		self.skipped: list[int] = []

	async def run(self, deadline: Deadline | None = None) -> SequencerState:
		"""
		Execute every step in order.

		Args:
			deadline: Overall deadline; each step's wait is capped by it

		Returns:
			Final sequencer state (reason available on `self.reason`)
		"""
		if self.state is not SequencerState.NOT_STARTED:
			raise RuntimeError(f'Sequencer already ran (state: {self.state.value})')

		self.state = SequencerState.RUNNING
		logger.info(f'🤖 Starting workflow "{self.spec.name}" ({len(self.spec)} steps)')

		for index, step in enumerate(self.spec):
			self.index = index
			timeout = self.per_step_timeout
			if deadline is not None:
				timeout = min(timeout, deadline.remaining())

			try:
				prompt = await self.matcher.await_prompt(step.expected_prompt_substring, timeout)
			except PromptTimeoutError as e:
				e.step_index = index
				if deadline is not None and deadline.expired():
					return self._finish(
						SequencerState.TIMED_OUT,
						FailureReason(kind=FailureKind.TIMEOUT, message='Overall deadline exceeded', step_index=index),
					)
				if step.optional:
					logger.info(f'⏭️  Optional step {index} skipped (no prompt containing "{step.expected_prompt_substring}")')
					self.skipped.append(index)
					continue
				logger.warning(f'❌ Step {index} failed: {e}')
				return self._finish(SequencerState.FAILED, FailureReason.prompt_timeout(index, step.expected_prompt_substring))
			except SurfaceError as e:
				return self._surface_failure(index, e)

			self.recorder.record_new(StepKind.PROMPT, prompt)
			try:
				await self.submitter.submit(step.answer)
			except ElementNotFoundError as e:
				logger.warning(f'❌ Step {index} answer could not be delivered: {e}')
				return self._finish(
					SequencerState.FAILED,
					FailureReason(kind=FailureKind.ELEMENT_NOT_FOUND, message=str(e), step_index=index),
				)
			except SurfaceError as e:
				return self._surface_failure(index, e)
			self.recorder.record_new(step.answer.step_kind, step.answer.value)

		self.index = len(self.spec)
		return self._finish(SequencerState.COMPLETED)

	def _surface_failure(self, index: int, error: SurfaceError) -> SequencerState:
		logger.error(f'❌ Step {index} aborted by surface error: {error}')
		return self._finish(SequencerState.FAILED, FailureReason.surface_error(str(error), step_index=index))

	def _finish(self, state: SequencerState, reason: FailureReason | None = None) -> SequencerState:
		self.state = state
		self.reason = reason
		if state is SequencerState.COMPLETED:
			logger.info(f'✅ Workflow "{self.spec.name}" completed ({len(self.recorder)} steps recorded)')
		return state
