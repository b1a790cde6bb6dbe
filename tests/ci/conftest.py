"""
Pytest configuration for runner tests.

Provides a scripted in-memory DrivenSurface, progress signal fakes, and
timing/feature fixtures small enough for fast tests.
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import pytest

from conductor.config.features import FeatureFlags
from conductor.config.settings import TimingConfig
from conductor.conversation.errors import ElementNotFoundError, WaitTimeoutError
from conductor.conversation.models import ProgressState
from conductor.conversation.session import WorkflowRunner
from conductor.reporting.sink import MemoryReportSink
from conductor.surface.base import DrivenSurface, FrameHandle, SignalSource


class FakeFrame(FrameHandle):
	def __init__(self, body: str, visible: set[str]):
		self.body = body
		self.visible = visible
		self.released = False

	async def text_content(self, selector: str = 'body') -> str:
		assert not self.released, 'frame used after release'
		return self.body

	async def is_visible(self, selector: str) -> bool:
		assert not self.released, 'frame used after release'
		return selector in self.visible


class ScriptedSurface(DrivenSurface):
	"""
	Emits `script[0]` first and the next prompt after every submitted answer.

	Submissions are recorded in `submitted` as (kind, value) tuples.
	"""

	def __init__(self, script: list[str] | None = None, choices: set[str] | None = None):
		self.script = list(script or [])
		self.position = 0
		self.messages: list[str] = self.script[:1]
		self.choices = choices if choices is not None else {'Yes', 'No', "Yes, Let's Do It!"}
		self.input_available = True
		self.submitted: list[tuple[str, str]] = []
		self.signals: dict[str, SignalSource] = {}
		self.visible: set[str] = set()
		self.counts: dict[str, int] = {}
		self.texts: dict[str, str] = {}
		self.attributes: dict[str, dict[str, str]] = {}
		self.clicked: list[str] = []
		self.filled: dict[str, str] = {}
		self.navigated: list[str] = []
		self.screenshots: list[dict[str, Any]] = []
		self.latest_calls = 0
		self.frame_body = ''
		self.frame_visible: set[str] = set()
		self.frames: list[FakeFrame] = []
		self.on_click: dict[str, set[str]] = {}
		# Raised by the matching capability when set
		self.message_error: Exception | None = None
		self.submit_error: Exception | None = None
		self.screenshot_error: Exception | None = None

	def _advance(self) -> None:
		self.position += 1
		if self.position < len(self.script):
			self.messages.append(self.script[self.position])

	async def latest_message(self) -> str | None:
		self.latest_calls += 1
		if self.message_error is not None:
			raise self.message_error
		return self.messages[-1] if self.messages else None

	async def submit_text(self, text: str) -> None:
		if not self.input_available:
			raise ElementNotFoundError('.ai-input-field')
		if self.submit_error is not None:
			raise self.submit_error
		self.submitted.append(('text', text))
		self._advance()

	async def activate_choice(self, label: str) -> None:
		if label not in self.choices:
			raise ElementNotFoundError(label)
		self.submitted.append(('choice', label))
		self._advance()

	def progress_signal(self, name: str = 'generation') -> SignalSource:
		return self.signals[name]

	async def screenshot(self, path: str | None = None, selector: str | None = None, full_page: bool = False) -> bytes:
		if self.screenshot_error is not None:
			raise self.screenshot_error
		self.screenshots.append({'path': path, 'selector': selector, 'full_page': full_page})
		return b'\x89PNG fake'

	async def navigate(self, url: str) -> None:
		self.navigated.append(url)

	async def click(self, selector: str) -> None:
		if selector not in self.visible and selector not in self.on_click:
			raise ElementNotFoundError(selector)
		self.clicked.append(selector)
		self.visible |= self.on_click.get(selector, set())

	async def fill(self, selector: str, value: str) -> None:
		self.filled[selector] = value

	async def is_visible(self, selector: str) -> bool:
		return selector in self.visible

	async def count(self, selector: str) -> int:
		return self.counts.get(selector, 0)

	async def text_of(self, selector: str) -> str | None:
		return self.texts.get(selector)

	async def attribute_of(self, selector: str, name: str) -> str | None:
		return self.attributes.get(selector, {}).get(name)

	async def wait_for(self, selector: str, timeout: float) -> None:
		if selector not in self.visible:
			raise WaitTimeoutError(selector, timeout)

	@asynccontextmanager
	async def frame(self, selector: str) -> AsyncIterator[FrameHandle]:
		handle = FakeFrame(self.frame_body, self.frame_visible)
		self.frames.append(handle)
		try:
			yield handle
		finally:
			handle.released = True


class SequenceSignal:
	"""Progress signal returning the given states in order, then repeating the last."""

	def __init__(self, *states: ProgressState):
		self.states = list(states)
		self.calls = 0

	async def __call__(self) -> ProgressState:
		state = self.states[min(self.calls, len(self.states) - 1)]
		self.calls += 1
		return state


@pytest.fixture(scope='function')
def fast_timing():
	"""Timing small enough that timeouts resolve in a fraction of a second."""
	return TimingConfig(
		per_step_timeout=0.2,
		poll_interval=0.01,
		progress_poll_interval=0.01,
		overall_deadline=5.0,
		settle_delay=0.0,
		progress_start_timeout=0.1,
	)


@pytest.fixture(scope='function')
def feature_flags(monkeypatch):
	"""Feature flags with every optional feature enabled."""
	monkeypatch.setenv('CONDUCTOR_SCREENSHOT_ON_FAILURE', 'true')
	monkeypatch.setenv('CONDUCTOR_WRITE_REPORTS', 'true')
	return FeatureFlags()


@pytest.fixture(scope='function')
def memory_sink():
	return MemoryReportSink()


@pytest.fixture(scope='function')
def make_runner(fast_timing, feature_flags, memory_sink):
	"""Build a WorkflowRunner over a surface with the fast test timing."""

	def _make(surface: DrivenSurface, **overrides) -> WorkflowRunner:
		return WorkflowRunner(
			surface,
			timing=overrides.pop('timing', fast_timing),
			sink=overrides.pop('sink', memory_sink),
			feature_flags=overrides.pop('feature_flags', feature_flags),
			**overrides,
		)

	return _make


@pytest.fixture(scope='function')
def scripted_surface():
	"""Factory for ScriptedSurface instances."""
	return ScriptedSurface


@pytest.fixture(scope='function')
def sequence_signal():
	"""Factory for SequenceSignal instances."""
	return SequenceSignal
