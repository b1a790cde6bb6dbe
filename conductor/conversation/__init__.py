"""
Conversation Components

Prompt matching, response submission, step sequencing, progress polling and
conversation recording for chat-style guided workflows.
"""

from conductor.conversation.errors import (
	ConductorError,
	ElementNotFoundError,
	MissingStepError,
	PromptTimeoutError,
	SurfaceError,
	ValidationMismatchError,
)
from conductor.conversation.matcher import PromptMatcher
from conductor.conversation.models import (
	Answer,
	ConversationStep,
	ExpectedStep,
	FailureKind,
	FailureReason,
	ProgressState,
	ProgressStatus,
	RunResult,
	SequencerState,
	StepDefinition,
	StepKind,
	WorkflowSpec,
)
from conductor.conversation.poller import ProgressPoller
from conductor.conversation.policy import Deadline, PollPolicy
from conductor.conversation.recorder import ConversationRecorder
from conductor.conversation.sequencer import StepSequencer
from conductor.conversation.submitter import ResponseSubmitter

__all__ = [
	'Answer',
	'ConductorError',
	'ConversationRecorder',
	'ConversationStep',
	'Deadline',
	'ElementNotFoundError',
	'ExpectedStep',
	'FailureKind',
	'FailureReason',
	'MissingStepError',
	'PollPolicy',
	'ProgressPoller',
	'ProgressState',
	'ProgressStatus',
	'PromptMatcher',
	'PromptTimeoutError',
	'ResponseSubmitter',
	'RunResult',
	'SequencerState',
	'StepDefinition',
	'StepKind',
	'StepSequencer',
	'SurfaceError',
	'ValidationMismatchError',
	'WorkflowSpec',
]
