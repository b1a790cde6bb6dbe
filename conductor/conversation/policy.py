"""
Polling policy shared by every bounded wait.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class PollPolicy:
	"""How often to sample and how long to keep trying."""

	interval: float = 0.5
	timeout: float = 30.0

	def __post_init__(self):
		if self.interval <= 0:
			raise ValueError('Poll interval must be positive')
		if self.timeout < 0:
			raise ValueError('Poll timeout must not be negative')

	def with_timeout(self, timeout: float) -> 'PollPolicy':
		return PollPolicy(interval=self.interval, timeout=max(0.0, timeout))

	def start(self, clock: Callable[[], float] = time.monotonic) -> 'Deadline':
		return Deadline(clock() + self.timeout, clock=clock)


class Deadline:
	"""Absolute point in monotonic time after which a wait gives up."""

	def __init__(self, at: float, clock: Callable[[], float] = time.monotonic):
		self.at = at
		self._clock = clock

	def remaining(self) -> float:
		return max(0.0, self.at - self._clock())

	def expired(self) -> bool:
		return self._clock() >= self.at

	async def sleep(self, interval: float) -> None:
		"""Sleep one poll tick, never past the deadline."""
		await asyncio.sleep(min(interval, self.remaining()))
