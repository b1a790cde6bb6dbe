"""
Tests for the Progress Poller.

Tests cover:
- Terminal states returned immediately
- Synthetic timeout distinct from surface-reported failure
- Terminal monotonicity and idempotent observation
- Observer notifications for pending samples
"""

import time

from conductor.conversation.models import FailureKind, FailureReason, ProgressState, ProgressStatus
from conductor.conversation.poller import ProgressPoller
from conductor.conversation.policy import PollPolicy


class TestProgressPollerTerminalStates:
	"""Tests for complete/failed outcomes."""

	async def test_complete_after_pending(self, sequence_signal):
		signal = sequence_signal(ProgressState.pending(), ProgressState.pending(), ProgressState.complete())
		poller = ProgressPoller(PollPolicy(interval=0.01, timeout=1.0))

		state = await poller.await_terminal(signal)

		assert state.status is ProgressStatus.COMPLETE
		assert signal.calls == 3

	async def test_terminal_returned_without_sleeping(self, sequence_signal):
		signal = sequence_signal(ProgressState.complete())
		poller = ProgressPoller(PollPolicy(interval=10.0, timeout=60.0))

		started = time.monotonic()
		state = await poller.await_terminal(signal)

		assert state.status is ProgressStatus.COMPLETE
		assert time.monotonic() - started < 1.0

	async def test_surface_reported_failure(self, sequence_signal):
		signal = sequence_signal(
			ProgressState.pending(),
			ProgressState.failed(FailureReason.surface_reported('Generation failed: quota exceeded')),
		)
		poller = ProgressPoller(PollPolicy(interval=0.01, timeout=1.0))

		state = await poller.await_terminal(signal)

		assert state.status is ProgressStatus.FAILED
		assert state.reason.kind is FailureKind.SURFACE_REPORTED_FAILURE
		assert 'quota exceeded' in state.reason.message

	async def test_deadline_yields_timeout(self, sequence_signal):
		"""Test a signal stuck on pending yields failed(timeout), not a surface failure"""
		signal = sequence_signal(ProgressState.pending())
		poller = ProgressPoller()

		state = await poller.await_terminal(signal, poll_interval=0.01, deadline=0.05)

		assert state.status is ProgressStatus.FAILED
		assert state.reason.kind is FailureKind.TIMEOUT

	async def test_never_blocks_past_deadline_plus_interval(self, sequence_signal):
		signal = sequence_signal(ProgressState.pending())
		poller = ProgressPoller()
		interval = 0.05
		deadline = 0.2

		started = time.monotonic()
		await poller.await_terminal(signal, poll_interval=interval, deadline=deadline)
		elapsed = time.monotonic() - started

		assert deadline <= elapsed < deadline + interval

	async def test_repeated_observation_is_idempotent(self, sequence_signal):
		"""Test a second call against an unchanged terminal signal returns the same state"""
		reason = FailureReason.surface_reported('boom')
		signal = sequence_signal(ProgressState.failed(reason))
		poller = ProgressPoller(PollPolicy(interval=0.01, timeout=1.0))

		first = await poller.await_terminal(signal)
		second = await poller.await_terminal(signal)

		assert first == second


class TestProgressStateTransitions:
	"""Tests for one-directional progress transitions."""

	def test_pending_to_complete(self):
		assert ProgressState.pending().transition(ProgressState.complete()).status is ProgressStatus.COMPLETE

	def test_terminal_states_stick(self):
		failed = ProgressState.failed(FailureReason.timeout())

		assert failed.transition(ProgressState.complete()) is failed
		assert failed.transition(ProgressState.pending()) is failed
		complete = ProgressState.complete()
		assert complete.transition(failed) is complete


class TestProgressObserver:
	"""Tests for the pending-sample observer callback."""

	async def test_observer_receives_every_pending_sample(self, sequence_signal):
		signal = sequence_signal(
			ProgressState.pending(),
			ProgressState.pending('1/3 steps completed'),
			ProgressState.pending('1/3 steps completed'),
			ProgressState.pending('2/3 steps completed'),
			ProgressState.complete(),
		)
		seen: list[str] = []
		poller = ProgressPoller(PollPolicy(interval=0.01, timeout=1.0))

		await poller.await_terminal(signal, observer=lambda state: seen.append(state.detail))

		assert seen == ['', '1/3 steps completed', '1/3 steps completed', '2/3 steps completed']

	async def test_async_observer_is_awaited(self, sequence_signal):
		signal = sequence_signal(ProgressState.pending('50%'), ProgressState.complete())
		seen: list[str] = []

		async def observer(state: ProgressState) -> None:
			seen.append(state.detail)

		poller = ProgressPoller(PollPolicy(interval=0.01, timeout=1.0))
		await poller.await_terminal(signal, observer=observer)

		assert seen == ['50%']
