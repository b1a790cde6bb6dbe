"""
Browser Surface

DrivenSurface implementation backed by a browser_use BrowserSession. DOM
queries run as JavaScript through the session's CDP connection; navigation
goes through the session's event bus.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

from browser_use import BrowserSession
from browser_use.browser.events import NavigateToUrlEvent
from browser_use.browser.views import BrowserError

from conductor.conversation.errors import ElementNotFoundError, SurfaceError, WaitTimeoutError
from conductor.conversation.models import FailureReason, ProgressState
from conductor.conversation.policy import PollPolicy
from conductor.surface.base import DrivenSurface, FrameHandle, SignalSource
from conductor.surface.selectors import SurfaceSelectors

logger = logging.getLogger(__name__)

# Shared helpers injected ahead of every snippet
_JS_PRELUDE = """
const __visible = (el) => !!el && !!(el.offsetWidth || el.offsetHeight || el.getClientRects().length);
const __frameDoc = (sel) => {
	const frame = document.querySelector(sel);
	if (!frame) return null;
	try { return frame.contentDocument; } catch (e) { return null; }
};
"""


def _js(value: Any) -> str:
	return json.dumps(value)


class BrowserSurface(DrivenSurface):
	"""Drives the Templately admin UI in a browser_use session."""

	def __init__(
		self,
		browser_session: BrowserSession,
		selectors: SurfaceSelectors | None = None,
		wait_policy: PollPolicy | None = None,
	):
		"""
		Args:
			browser_session: Started browser session to drive
			selectors: Selector overrides (defaults match the plugin markup)
			wait_policy: Poll interval used by wait_for (timeout is per call)
		"""
		self.browser_session = browser_session
		self.selectors = selectors or SurfaceSelectors()
		self.wait_policy = wait_policy or PollPolicy(interval=0.25, timeout=30.0)

	async def evaluate(self, body: str) -> Any:
		"""Run a JavaScript function body in the page and return its value.

		Raises:
			SurfaceError: script threw or the CDP call failed
		"""
		expression = f'(async () => {{{_JS_PRELUDE}\n{body}\n}})()'
		cdp_session = await self.browser_session.get_or_create_cdp_session()
		try:
			result = await cdp_session.cdp_client.send.Runtime.evaluate(
				params={'expression': expression, 'returnByValue': True, 'awaitPromise': True},
				session_id=cdp_session.session_id,
			)
		except BrowserError as e:
			raise SurfaceError(e.message or str(e)) from e

		if result.get('exceptionDetails'):
			error_text = result['exceptionDetails'].get('text', 'Unknown error')
			raise SurfaceError(f'JavaScript execution error: {error_text}')
		return result.get('result', {}).get('value')

	# Conversation capabilities

	async def latest_message(self) -> str | None:
		return await self.evaluate(f"""
			const nodes = document.querySelectorAll({_js(self.selectors.message)});
			if (!nodes.length) return null;
			return nodes[nodes.length - 1].textContent;
		""")

	async def submit_text(self, text: str) -> None:
		outcome = await self.evaluate(f"""
			const input = document.querySelector({_js(self.selectors.input)});
			if (!input) return 'input';
			const proto = input.tagName === 'TEXTAREA' ? HTMLTextAreaElement.prototype : HTMLInputElement.prototype;
			const setter = Object.getOwnPropertyDescriptor(proto, 'value').set;
			input.focus();
			setter.call(input, {_js(text)});
			input.dispatchEvent(new Event('input', {{bubbles: true}}));
			input.dispatchEvent(new Event('change', {{bubbles: true}}));
			const submit = document.querySelector({_js(self.selectors.submit)});
			if (!submit) return 'submit';
			submit.click();
			return null;
		""")
		if outcome == 'input':
			raise ElementNotFoundError(self.selectors.input, 'Answer input not found')
		if outcome == 'submit':
			raise ElementNotFoundError(self.selectors.submit, 'Answer submit control not found')
		logger.debug(f'[BrowserSurface] Submitted text ({len(text)} chars)')

	async def activate_choice(self, label: str) -> None:
		clicked = await self.evaluate(f"""
			const wanted = {_js(label)};
			const match = Array.from(document.querySelectorAll({_js(self.selectors.choice)}))
				.find((el) => __visible(el) && el.textContent.trim() === wanted);
			if (!match) return false;
			match.click();
			return true;
		""")
		if not clicked:
			raise ElementNotFoundError(label, f'No choice labelled "{label}"')
		logger.debug(f'[BrowserSurface] Activated choice "{label}"')

	def progress_signal(self, name: str = 'generation') -> SignalSource:
		progress = self.selectors.progress_for(name)

		async def sample() -> ProgressState:
			raw = await self.evaluate(f"""
				const count = (sel) => sel ? document.querySelectorAll(sel).length : 0;
				const text = (sel) => {{
					const el = sel ? document.querySelector(sel) : null;
					return el && __visible(el) ? el.textContent.trim() : null;
				}};
				return {{
					complete: __visible(document.querySelector({_js(progress.complete)})),
					error: __visible(document.querySelector({_js(progress.error)})),
					message: text({_js(progress.error_message)}),
					steps: count({_js(progress.step)}),
					completed: count({_js(progress.step_completed)}),
					percentage: text({_js(progress.percentage)}),
				}};
			""")
			if raw['complete']:
				return ProgressState.complete()
			if raw['error']:
				return ProgressState.failed(FailureReason.surface_reported(raw['message'] or f'{name} failed'))
			detail = ''
			if raw['steps']:
				detail = f"{raw['completed']}/{raw['steps']} steps completed"
			elif raw['percentage']:
				detail = raw['percentage']
			return ProgressState.pending(detail)

		return sample

	async def screenshot(self, path: str | None = None, selector: str | None = None, full_page: bool = False) -> bytes:
		clip = None
		if selector is not None:
			clip = await self.evaluate(f"""
				const el = document.querySelector({_js(selector)});
				if (!el) return null;
				const rect = el.getBoundingClientRect();
				return {{x: rect.x + window.scrollX, y: rect.y + window.scrollY, width: rect.width, height: rect.height}};
			""")
			if clip is None:
				raise ElementNotFoundError(selector)
		try:
			return await self.browser_session.take_screenshot(path=path, full_page=full_page, format='png', clip=clip)
		except BrowserError as e:
			raise SurfaceError(e.message or str(e)) from e

	# Navigation capabilities

	async def navigate(self, url: str) -> None:
		event = self.browser_session.event_bus.dispatch(NavigateToUrlEvent(url=url))
		await event
		await event.event_result(raise_if_any=True, raise_if_none=False)
		logger.debug(f'[BrowserSurface] Navigated to {url}')

	async def click(self, selector: str) -> None:
		clicked = await self.evaluate(f"""
			const el = document.querySelector({_js(selector)});
			if (!el) return false;
			el.click();
			return true;
		""")
		if not clicked:
			raise ElementNotFoundError(selector)

	async def fill(self, selector: str, value: str) -> None:
		filled = await self.evaluate(f"""
			const el = document.querySelector({_js(selector)});
			if (!el) return false;
			el.focus();
			el.value = {_js(value)};
			el.dispatchEvent(new Event('input', {{bubbles: true}}));
			el.dispatchEvent(new Event('change', {{bubbles: true}}));
			return true;
		""")
		if not filled:
			raise ElementNotFoundError(selector)

	async def is_visible(self, selector: str) -> bool:
		return bool(await self.evaluate(f'return __visible(document.querySelector({_js(selector)}));'))

	async def count(self, selector: str) -> int:
		return int(await self.evaluate(f'return document.querySelectorAll({_js(selector)}).length;') or 0)

	async def text_of(self, selector: str) -> str | None:
		return await self.evaluate(f"""
			const el = document.querySelector({_js(selector)});
			return el ? el.textContent : null;
		""")

	async def attribute_of(self, selector: str, name: str) -> str | None:
		return await self.evaluate(f"""
			const el = document.querySelector({_js(selector)});
			return el ? el.getAttribute({_js(name)}) : null;
		""")

	async def wait_for(self, selector: str, timeout: float) -> None:
		deadline = self.wait_policy.with_timeout(timeout).start()
		while True:
			if await self.is_visible(selector):
				return
			if deadline.expired():
				raise WaitTimeoutError(selector, timeout)
			await deadline.sleep(self.wait_policy.interval)

	@asynccontextmanager
	async def frame(self, selector: str) -> AsyncIterator[FrameHandle]:
		accessible = await self.evaluate(f'return __frameDoc({_js(selector)}) !== null;')
		if not accessible:
			raise ElementNotFoundError(selector, f'Frame {selector} missing or not accessible')
		handle = BrowserFrameHandle(self, selector)
		try:
			yield handle
		finally:
			handle.release()


class BrowserFrameHandle(FrameHandle):
	"""Queries scoped to one iframe's document. Unusable once released."""

	def __init__(self, surface: BrowserSurface, frame_selector: str):
		self.surface = surface
		self.frame_selector = frame_selector
		self.released = False

	def release(self) -> None:
		self.released = True

	def _check(self) -> None:
		if self.released:
			raise SurfaceError(f'Frame handle for {self.frame_selector} used after release')

	async def text_content(self, selector: str = 'body') -> str:
		self._check()
		text = await self.surface.evaluate(f"""
			const doc = __frameDoc({_js(self.frame_selector)});
			if (!doc) return null;
			const el = doc.querySelector({_js(selector)});
			return el ? el.textContent : null;
		""")
		if text is None:
			raise ElementNotFoundError(selector, f'{selector} not found in frame {self.frame_selector}')
		return text

	async def is_visible(self, selector: str) -> bool:
		self._check()
		return bool(await self.surface.evaluate(f"""
			const doc = __frameDoc({_js(self.frame_selector)});
			return !!doc && __visible(doc.querySelector({_js(selector)}));
		"""))

