"""
Prompt Matcher

Waits until the latest message emitted by the surface contains an expected
piece of text.
"""

import logging
import time
from typing import Callable

from conductor.conversation.errors import PromptTimeoutError
from conductor.conversation.policy import PollPolicy
from conductor.surface.base import DrivenSurface

logger = logging.getLogger(__name__)


class PromptMatcher:
	"""Polls a surface for a message containing an expected substring."""

	def __init__(self, surface: DrivenSurface, policy: PollPolicy | None = None, clock: Callable[[], float] = time.monotonic):
		"""
		Args:
			surface: Surface emitting messages
			policy: Poll interval and default timeout
			clock: Monotonic clock (injectable for tests)
		"""
		self.surface = surface
		self.policy = policy or PollPolicy()
		self._clock = clock

	@staticmethod
	def matches(message: str | None, expected_substring: str) -> bool:
		"""Plain, case-sensitive substring containment."""
		return message is not None and expected_substring in message

	async def await_prompt(self, expected_substring: str, timeout: float | None = None) -> str:
		"""
		Wait for the latest message to contain `expected_substring`.

		Only the most recent message is evaluated on each tick.

		Args:
			expected_substring: Text the prompt must contain
			timeout: Seconds from call start (policy timeout if None)

		Returns:
			The matching message text

		Raises:
			PromptTimeoutError: no match before the timeout
		"""
		policy = self.policy if timeout is None else self.policy.with_timeout(timeout)
		deadline = policy.start(self._clock)
		last_message: str | None = None
		ticks = 0

		while True:
			message = await self.surface.latest_message()
			ticks += 1
			if self.matches(message, expected_substring):
				logger.info(f'✅ Prompt received: {message[:100]}')
				return message
			if message != last_message:
				logger.debug(f'[PromptMatcher] Waiting for "{expected_substring}", latest: {(message or "")[:100]!r}')
				last_message = message
			if deadline.expired():
				logger.debug(f'[PromptMatcher] Gave up on "{expected_substring}" after {ticks} polls')
				raise PromptTimeoutError(expected_substring, policy.timeout, last_message)
			await deadline.sleep(policy.interval)
