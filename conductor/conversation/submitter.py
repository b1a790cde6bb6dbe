"""
Response Submitter

Delivers a typed answer back to the driven surface.
"""

import asyncio
import logging

from conductor.conversation.models import Answer
from conductor.surface.base import DrivenSurface

logger = logging.getLogger(__name__)


class ResponseSubmitter:
	"""Submits free-text or choice answers and waits for the surface to settle."""

	def __init__(self, surface: DrivenSurface, settle_delay: float = 1.0):
		self.surface = surface
		self.settle_delay = settle_delay

	async def submit(self, answer: Answer) -> None:
		"""
		Deliver `answer` and wait the settle delay.

		Does not wait for the counterpart to reply; the next prompt match
		confirms that.

		Raises:
			ElementNotFoundError: input or choice control missing
		"""
		if answer.is_choice:
			await self.surface.activate_choice(answer.choice_label)
		else:
			await self.surface.submit_text(answer.text)

		if self.settle_delay > 0:
			await asyncio.sleep(self.settle_delay)
		logger.info(f'✅ User response sent: {answer.value[:100]}')
