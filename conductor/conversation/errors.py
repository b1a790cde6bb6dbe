"""
Exceptions raised by the conversation runner and the driven surfaces.
"""

from typing import Any


class ConductorError(Exception):
	"""Base class for runner errors."""


class SurfaceError(ConductorError):
	"""The driven surface could not perform an operation."""


class ElementNotFoundError(SurfaceError):
	"""Target input or control for a response could not be located."""

	def __init__(self, target: str, message: str | None = None):
		self.target = target
		super().__init__(message or f'Element not found: {target}')


class PromptTimeoutError(ConductorError, TimeoutError):
	"""No message containing the expected text appeared before the timeout."""

	def __init__(self, expected: str, timeout: float, last_message: str | None = None, step_index: int | None = None):
		self.expected = expected
		self.timeout = timeout
		self.last_message = last_message
		self.step_index = step_index
		super().__init__(f'No prompt containing "{expected}" within {timeout:.1f}s (last message: {last_message!r})')


class HistoryValidationError(ConductorError, AssertionError):
	"""Recorded conversation history does not match the expectation."""


class ValidationMismatchError(HistoryValidationError):
	def __init__(self, index: int, expected: Any, actual: Any):
		self.index = index
		self.expected = expected
		self.actual = actual
		super().__init__(f'Step {index} mismatch: expected {expected}, got {actual}')


class MissingStepError(HistoryValidationError):
	def __init__(self, index: int, expected: Any = None):
		self.index = index
		self.expected = expected
		super().__init__(f'Missing conversation step {index}: expected {expected}')


class ProgressFailedError(ConductorError):
	"""Raised by flows that require a completed progress signal."""

	def __init__(self, reason: Any):
		self.reason = reason
		super().__init__(f'Progress did not complete: {reason}')


class WaitTimeoutError(SurfaceError, TimeoutError):
	"""A surface element did not become visible in time."""

	def __init__(self, target: str, timeout: float):
		self.target = target
		self.timeout = timeout
		super().__init__(f'Timed out after {timeout:.1f}s waiting for {target}')
