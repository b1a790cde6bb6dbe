"""
Conductor - Guided Conversational Workflow Runner

Drives chat-style guided workflows (such as Templately's AI Full Site Import)
through a browser: wait for a prompt, answer it, repeat, then poll progress
until completion, failure or timeout.
"""

from conductor.conversation import (
	Answer,
	ConversationRecorder,
	ConversationStep,
	ExpectedStep,
	FailureKind,
	FailureReason,
	PollPolicy,
	ProgressPoller,
	ProgressState,
	PromptMatcher,
	ResponseSubmitter,
	RunResult,
	SequencerState,
	StepDefinition,
	StepKind,
	StepSequencer,
	WorkflowSpec,
)
from conductor.conversation.session import WorkflowRunner, WorkflowSession

__all__ = [
	'Answer',
	'ConversationRecorder',
	'ConversationStep',
	'ExpectedStep',
	'FailureKind',
	'FailureReason',
	'PollPolicy',
	'ProgressPoller',
	'ProgressState',
	'PromptMatcher',
	'ResponseSubmitter',
	'RunResult',
	'SequencerState',
	'StepDefinition',
	'StepKind',
	'StepSequencer',
	'WorkflowRunner',
	'WorkflowSession',
	'WorkflowSpec',
]
