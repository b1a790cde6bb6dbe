"""
Run the AI Full Site Import flow against a WordPress site.

Usage:
	python -m conductor.run_ai_fsi [scenario]

Scenario is one of the built-in business scenarios (technology, restaurant,
healthcare; default: technology). Site, timing and feature settings come from
the environment (see conductor.config).
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

load_dotenv(dotenv_path='.env.local', override=False)
load_dotenv(override=True)

debug_mode = os.getenv('CONDUCTOR_DEBUG', 'false').lower() == 'true'

logging.basicConfig(
	level=logging.DEBUG if debug_mode else logging.INFO,
	format='%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
	force=True,
)
logger = logging.getLogger(__name__)

logging.getLogger('browser_use').setLevel(logging.WARNING)
logging.getLogger('httpx').setLevel(logging.WARNING)

from browser_use import BrowserSession  # noqa: E402
from browser_use.browser.profile import BrowserProfile  # noqa: E402

from conductor.config import SiteConfig, TimingConfig, get_feature_flags  # noqa: E402
from conductor.conversation.session import WorkflowRunner  # noqa: E402
from conductor.flows import (  # noqa: E402
	BUSINESS_SCENARIOS,
	AISiteImportFlow,
	go_to_cloud_templates,
	login,
	open_templately,
	select_first_template,
)
from conductor.reporting import JsonReportSink  # noqa: E402
from conductor.surface.browser import BrowserSurface  # noqa: E402


async def main(scenario: str = 'technology') -> int:
	if scenario not in BUSINESS_SCENARIOS:
		logger.error(f"Unknown scenario {scenario!r}; choose from {', '.join(BUSINESS_SCENARIOS)}")
		return 2

	site = SiteConfig.from_env()
	timing = TimingConfig.from_env()
	flags = get_feature_flags()
	sink = JsonReportSink(site.artifacts_dir)

	browser_session = BrowserSession(
		browser_profile=BrowserProfile(
			headless=site.headless,
			user_data_dir=None,
			viewport={'width': 1280, 'height': 720},
		)
	)
	await browser_session.start()
	try:
		surface = BrowserSurface(browser_session)
		await login(surface, site)
		await open_templately(surface, site)
		await go_to_cloud_templates(surface)
		await select_first_template(surface)

		runner = WorkflowRunner(surface, timing=timing, sink=sink, feature_flags=flags)
		flow = AISiteImportFlow(surface, runner, screenshots_dir=sink.paths['screenshots'])
		result = await flow.run(BUSINESS_SCENARIOS[scenario])
	finally:
		await browser_session.kill()

	if result.ok:
		logger.info(f'🎉 AI FSI {scenario} scenario completed successfully')
		return 0
	logger.error(f'❌ AI FSI {scenario} scenario failed: {result.run.reason or result.preview}')
	return 1


def cli() -> None:
	sys.exit(asyncio.run(main(*sys.argv[1:2])))


if __name__ == '__main__':
	cli()
