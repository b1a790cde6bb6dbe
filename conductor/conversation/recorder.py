"""
Conversation Recorder

Append-only log of exchanged steps, used for post-hoc validation and
failure diagnostics.
"""

import logging
import time
from typing import Callable, Collection, Iterable

from conductor.conversation.errors import MissingStepError, ValidationMismatchError
from conductor.conversation.models import ConversationStep, ExpectedStep, StepKind

logger = logging.getLogger(__name__)


class ConversationRecorder:
	"""Records conversation steps in order of occurrence."""

	def __init__(self, clock: Callable[[], float] = time.monotonic):
		self._steps: list[ConversationStep] = []
		self._clock = clock

	def record(self, step: ConversationStep) -> ConversationStep:
		"""Append a step. Timestamps are clamped so they never go backwards."""
		if self._steps and step.timestamp < self._steps[-1].timestamp:
			step = step.model_copy(update={'timestamp': self._steps[-1].timestamp})
		self._steps.append(step)
		logger.debug(f'[Recorder] {step.kind.value}: {step.content[:100]}')
		return step

	def record_new(self, kind: StepKind, content: str) -> ConversationStep:
		return self.record(ConversationStep(kind=kind, content=content, timestamp=self._clock()))

	def history(self) -> tuple[ConversationStep, ...]:
		"""Read-only snapshot of the recorded steps."""
		return tuple(self._steps)

	def __len__(self) -> int:
		return len(self._steps)

	def validate(self, expected_steps: Iterable[ExpectedStep], only: Collection[StepKind] | None = None) -> None:
		"""
		Compare history against an expectation, index by index.

		Only `kind` is compared where an expected step leaves `content` unset.
		With `only`, steps of other kinds are dropped from history first.

		Raises:
			ValidationMismatchError: first index whose kind or content differs
			MissingStepError: history is shorter than the expectation
		"""
		history = self.history()
		if only is not None:
			history = tuple(step for step in history if step.kind in only)
		for index, expected in enumerate(expected_steps):
			if index >= len(history):
				raise MissingStepError(index, expected)
			actual = history[index]
			if actual.kind is not expected.kind:
				raise ValidationMismatchError(index, expected, actual)
			if expected.content is not None and actual.content != expected.content:
				raise ValidationMismatchError(index, expected, actual)
		logger.info(f'✅ Conversation flow validation passed ({len(history)} steps recorded)')
