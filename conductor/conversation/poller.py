"""
Progress Poller

Samples a tri-state completion signal until it turns terminal or the
deadline passes.
"""

import logging
import time
from typing import Awaitable, Callable

from conductor.conversation.models import FailureReason, ProgressState, ProgressStatus
from conductor.conversation.policy import PollPolicy
from conductor.surface.base import SignalSource

logger = logging.getLogger(__name__)

ProgressObserver = Callable[[ProgressState], Awaitable[None] | None]


class ProgressPoller:
	"""Waits for a progress signal to reach a terminal state."""

	def __init__(self, policy: PollPolicy | None = None, clock: Callable[[], float] = time.monotonic):
		self.policy = policy or PollPolicy(interval=3.0, timeout=300.0)
		self._clock = clock

	async def await_terminal(
		self,
		signal_source: SignalSource,
		poll_interval: float | None = None,
		deadline: float | None = None,
		observer: ProgressObserver | None = None,
	) -> ProgressState:
		"""
		Sample `signal_source` until it reports complete or failed.

		Args:
			signal_source: Capability returning the current ProgressState
			poll_interval: Seconds between samples (policy interval if None)
			deadline: Seconds from call start (policy timeout if None)
			observer: Called with every pending sample

		Returns:
			The observed terminal state, or failed(timeout) when the deadline
			passes while still pending
		"""
		policy = PollPolicy(
			interval=poll_interval if poll_interval is not None else self.policy.interval,
			timeout=deadline if deadline is not None else self.policy.timeout,
		)
		until = policy.start(self._clock)
		last_detail: str | None = None

		while True:
			state = await signal_source()
			if state.status is ProgressStatus.COMPLETE:
				logger.info('✅ Progress complete')
				return state
			if state.status is ProgressStatus.FAILED:
				logger.warning(f'❌ Progress failed: {state.reason}')
				return state

			if state.detail and state.detail != last_detail:
				logger.info(f'📈 Progress: {state.detail}')
				last_detail = state.detail
			if observer is not None:
				pending = observer(state)
				if pending is not None:
					await pending

			if until.expired():
				logger.warning(f'⏰ Progress still pending after {policy.timeout:.1f}s')
				return ProgressState.failed(FailureReason.timeout(f'Still pending after {policy.timeout:.1f}s'))
			await until.sleep(policy.interval)
