"""
WordPress admin helpers used before a site import flow can start.
"""

import logging

from conductor.config.settings import SiteConfig
from conductor.surface.base import DrivenSurface
from conductor.surface.selectors import SurfaceSelectors

logger = logging.getLogger(__name__)


async def login(surface: DrivenSurface, site: SiteConfig, selectors: SurfaceSelectors | None = None) -> bool:
	"""
	Log into wp-admin unless already logged in.

	Returns:
		True if the login form was submitted, False if a session already existed
	"""
	selectors = selectors or SurfaceSelectors()
	await surface.navigate(site.url('/wp-admin'))

	if await surface.is_visible(selectors.admin_bar):
		logger.info('✅ Already logged into WordPress')
		return False

	logger.info('🔐 Logging into WordPress...')
	await surface.wait_for(selectors.login_form, timeout=10.0)
	await surface.fill(selectors.login_user, site.username)
	await surface.fill(selectors.login_password, site.password)
	await surface.click(selectors.login_submit)
	await surface.wait_for(selectors.admin_bar, timeout=10.0)
	logger.info('✅ Successfully logged into WordPress')
	return True


async def open_templately(surface: DrivenSurface, site: SiteConfig, selectors: SurfaceSelectors | None = None) -> None:
	selectors = selectors or SurfaceSelectors()
	await surface.navigate(site.url('/wp-admin/admin.php?page=templately'))
	await surface.wait_for(selectors.templately_admin_page, timeout=15.0)
	logger.info('✅ Navigated to Templately admin page')


async def go_to_cloud_templates(surface: DrivenSurface, selectors: SurfaceSelectors | None = None) -> None:
	"""Switch the Templately admin page to its cloud template library."""
	selectors = selectors or SurfaceSelectors()
	await surface.click(selectors.cloud_library_tab)
	await surface.wait_for(selectors.cloud_templates, timeout=10.0)
	logger.info('✅ Navigated to cloud templates')


async def select_first_template(surface: DrivenSurface, selectors: SurfaceSelectors | None = None) -> str:
	"""
	Open the first template in the cloud library.

	Returns:
		The template's `data-template-name`, or 'Unknown' when it has none
	"""
	selectors = selectors or SurfaceSelectors()
	name = await surface.attribute_of(selectors.template_item, 'data-template-name') or 'Unknown'
	await surface.click(selectors.template_item)
	logger.info(f'✅ Selected template: {name}')
	return name
