"""
Conversation Primitives

Data model shared by the prompt matcher, response submitter, step sequencer,
progress poller and conversation recorder.
"""

import time
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class StepKind(str, Enum):
	"""Kinds of exchanges recorded in a conversation."""

	PROMPT = 'prompt'
	USER_TEXT = 'user_text'
	USER_CHOICE = 'user_choice'


class ConversationStep(BaseModel):
	"""One recorded exchange. Immutable once created."""

	model_config = ConfigDict(frozen=True)

	kind: StepKind = Field(..., description='Who produced the step and how')
	content: str = Field(..., description='Prompt text, typed answer, or selected choice label')
	timestamp: float = Field(default_factory=time.monotonic, description='Monotonic creation time')


class Answer(BaseModel):
	"""Either a literal text answer or a named choice label."""

	model_config = ConfigDict(frozen=True)

	text: str | None = Field(default=None, description='Literal text typed into the input')
	choice_label: str | None = Field(default=None, description='Exact visible label of the choice control')

	@model_validator(mode='after')
	def _exactly_one(self) -> 'Answer':
		if (self.text is None) == (self.choice_label is None):
			raise ValueError('Answer requires exactly one of "text" or "choice_label"')
		return self

	@classmethod
	def typed(cls, text: str) -> 'Answer':
		return cls(text=text)

	@classmethod
	def choice(cls, label: str) -> 'Answer':
		return cls(choice_label=label)

	@property
	def is_choice(self) -> bool:
		return self.choice_label is not None

	@property
	def value(self) -> str:
		return self.choice_label if self.is_choice else self.text  # type: ignore[return-value]

	@property
	def step_kind(self) -> StepKind:
		return StepKind.USER_CHOICE if self.is_choice else StepKind.USER_TEXT


class StepDefinition(BaseModel):
	"""Expected prompt and the answer to give once it appears."""

	model_config = ConfigDict(frozen=True)

	expected_prompt_substring: str = Field(..., min_length=1, description='Case-sensitive text the prompt must contain')
	answer: Answer = Field(..., description='Answer to submit when the prompt matches')
	optional: bool = Field(default=False, description='Skip instead of failing when the prompt never appears')


class WorkflowSpec(BaseModel):
	"""Ordered sequence of step definitions, fixed at construction."""

	model_config = ConfigDict(frozen=True)

	steps: tuple[StepDefinition, ...] = Field(default_factory=tuple)
	name: str = Field(default='workflow', description='Human readable workflow name used in logs and reports')

	def __len__(self) -> int:
		return len(self.steps)

	def __iter__(self):  # type: ignore[override]
		return iter(self.steps)

	def __getitem__(self, index: int) -> StepDefinition:
		return self.steps[index]


class FailureKind(str, Enum):
	"""Failure taxonomy for runs and progress waits."""

	PROMPT_TIMEOUT = 'prompt_timeout'
	ELEMENT_NOT_FOUND = 'element_not_found'
	SURFACE_REPORTED_FAILURE = 'surface_reported_failure'
	TIMEOUT = 'timeout'
	SURFACE_ERROR = 'surface_error'


class FailureReason(BaseModel):
	"""Typed failure outcome."""

	model_config = ConfigDict(frozen=True)

	kind: FailureKind
	message: str = ''
	step_index: int | None = None

	@classmethod
	def prompt_timeout(cls, step_index: int, expected: str) -> 'FailureReason':
		return cls(
			kind=FailureKind.PROMPT_TIMEOUT,
			message=f'Prompt containing "{expected}" never appeared',
			step_index=step_index,
		)

	@classmethod
	def timeout(cls, message: str = 'Deadline exceeded while pending') -> 'FailureReason':
		return cls(kind=FailureKind.TIMEOUT, message=message)

	@classmethod
	def surface_reported(cls, message: str) -> 'FailureReason':
		return cls(kind=FailureKind.SURFACE_REPORTED_FAILURE, message=message)

	@classmethod
	def surface_error(cls, message: str, step_index: int | None = None) -> 'FailureReason':
		return cls(kind=FailureKind.SURFACE_ERROR, message=message, step_index=step_index)

	def __str__(self) -> str:
		where = f' at step {self.step_index}' if self.step_index is not None else ''
		return f'{self.kind.value}{where}: {self.message}'


class ProgressStatus(str, Enum):
	PENDING = 'pending'
	COMPLETE = 'complete'
	FAILED = 'failed'


class ProgressState(BaseModel):
	"""Tri-state completion signal: pending, complete or failed(reason)."""

	model_config = ConfigDict(frozen=True)

	status: ProgressStatus = ProgressStatus.PENDING
	reason: FailureReason | None = None
	detail: str = Field(default='', description='Progress description while pending, e.g. "3/7 steps"')

	@model_validator(mode='after')
	def _reason_only_when_failed(self) -> 'ProgressState':
		if self.status is ProgressStatus.FAILED and self.reason is None:
			raise ValueError('A failed progress state requires a reason')
		if self.status is not ProgressStatus.FAILED and self.reason is not None:
			raise ValueError(f'A {self.status.value} progress state cannot carry a failure reason')
		return self

	@classmethod
	def pending(cls, detail: str = '') -> 'ProgressState':
		return cls(status=ProgressStatus.PENDING, detail=detail)

	@classmethod
	def complete(cls) -> 'ProgressState':
		return cls(status=ProgressStatus.COMPLETE)

	@classmethod
	def failed(cls, reason: FailureReason) -> 'ProgressState':
		return cls(status=ProgressStatus.FAILED, reason=reason)

	@property
	def is_terminal(self) -> bool:
		return self.status is not ProgressStatus.PENDING

	def transition(self, new_state: 'ProgressState') -> 'ProgressState':
		"""Return the state after observing `new_state`; terminal states never change."""
		if self.is_terminal:
			return self
		return new_state


class SequencerState(str, Enum):
	NOT_STARTED = 'not_started'
	RUNNING = 'running'
	COMPLETED = 'completed'
	FAILED = 'failed'
	TIMED_OUT = 'timed_out'


class ExpectedStep(BaseModel):
	"""Expectation used when validating recorded history. `content=None` matches any content."""

	kind: StepKind
	content: str | None = None


class RunResult(BaseModel):
	"""Outcome of one workflow run, handed to report sinks."""

	session_id: str
	workflow: str
	final_state: SequencerState
	progress: ProgressState | None = None
	reason: FailureReason | None = None
	step_count: int = 0
	duration_ms: float = 0.0
	history: tuple[ConversationStep, ...] = Field(default_factory=tuple)

	@property
	def succeeded(self) -> bool:
		if self.final_state is not SequencerState.COMPLETED:
			return False
		return self.progress is None or self.progress.status is ProgressStatus.COMPLETE

	def to_report(self) -> dict[str, Any]:
		"""Structured result consumed by report sinks."""
		return {
			'session_id': self.session_id,
			'workflow': self.workflow,
			'final_state': self.final_state.value,
			'progress': self.progress.status.value if self.progress else None,
			'reason': self.reason.model_dump(mode='json') if self.reason else None,
			'step_count': self.step_count,
			'duration_ms': round(self.duration_ms, 1),
			'history': [step.model_dump(mode='json') for step in self.history],
		}
