"""
Driven Surface abstraction

The runner never touches a page handle directly. Every component receives a
DrivenSurface and talks to the UI under test only through it.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from typing import Awaitable, Callable

from conductor.conversation.models import ProgressState

SignalSource = Callable[[], Awaitable[ProgressState]]


class FrameHandle(ABC):
	"""Scoped access to a nested document (e.g. a preview iframe)."""

	@abstractmethod
	async def text_content(self, selector: str = 'body') -> str:
		"""Text content of the first element matching `selector` inside the frame."""

	@abstractmethod
	async def is_visible(self, selector: str) -> bool:
		"""Whether an element matching `selector` is rendered inside the frame."""

	async def contains_text(self, text: str, selector: str = 'body') -> bool:
		return text in (await self.text_content(selector))


class DrivenSurface(ABC):
	"""Capabilities the conversation runner consumes from the UI under test."""

	# Conversation capabilities

	@abstractmethod
	async def latest_message(self) -> str | None:
		"""Text of the most recently emitted message, or None if nothing was emitted yet."""

	@abstractmethod
	async def submit_text(self, text: str) -> None:
		"""Write `text` into the designated input and submit it.

		Raises:
			ElementNotFoundError: input or submit control missing
		"""

	@abstractmethod
	async def activate_choice(self, label: str) -> None:
		"""Activate the control whose visible label equals `label` exactly.

		Raises:
			ElementNotFoundError: no control carries that label
		"""

	@abstractmethod
	def progress_signal(self, name: str = 'generation') -> SignalSource:
		"""Return a capability that samples the named tri-state progress signal."""

	@abstractmethod
	async def screenshot(self, path: str | None = None, selector: str | None = None, full_page: bool = False) -> bytes:
		"""Capture the page or the region covered by `selector`."""

	# Navigation capabilities

	@abstractmethod
	async def navigate(self, url: str) -> None:
		"""Load `url` in the current tab."""

	@abstractmethod
	async def click(self, selector: str) -> None:
		"""Click the first element matching `selector`.

		Raises:
			ElementNotFoundError: nothing matches
		"""

	@abstractmethod
	async def fill(self, selector: str, value: str) -> None:
		"""Replace the value of the input matching `selector`."""

	@abstractmethod
	async def is_visible(self, selector: str) -> bool:
		"""Whether an element matching `selector` is currently rendered."""

	@abstractmethod
	async def count(self, selector: str) -> int:
		"""Number of elements matching `selector`."""

	@abstractmethod
	async def text_of(self, selector: str) -> str | None:
		"""Text content of the first element matching `selector`."""

	@abstractmethod
	async def attribute_of(self, selector: str, name: str) -> str | None:
		"""Attribute `name` of the first element matching `selector`, None if either is missing."""

	@abstractmethod
	async def wait_for(self, selector: str, timeout: float) -> None:
		"""Wait until `selector` is visible.

		Raises:
			WaitTimeoutError: not visible before `timeout`
		"""

	@abstractmethod
	def frame(self, selector: str) -> AbstractAsyncContextManager[FrameHandle]:
		"""Scoped handle to the iframe matching `selector`, released when the block exits."""
