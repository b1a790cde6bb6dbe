"""
Driven Surfaces

The DrivenSurface contract and selector configuration. The browser_use
backed implementation lives in conductor.surface.browser.
"""

from conductor.surface.base import DrivenSurface, FrameHandle, SignalSource
from conductor.surface.selectors import ProgressSelectors, SurfaceSelectors

__all__ = [
	'DrivenSurface',
	'FrameHandle',
	'ProgressSelectors',
	'SignalSource',
	'SurfaceSelectors',
]
