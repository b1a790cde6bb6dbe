"""
Templately site import flows built on the conversation runner.
"""

from conductor.flows.business import (
	BUSINESS_SCENARIOS,
	USER_STEP_KINDS,
	BusinessProfile,
	build_business_info_workflow,
	expected_user_steps,
)
from conductor.flows.site_import import (
	AISiteImportFlow,
	AISiteImportResult,
	FullSiteImportFlow,
	ImportSummary,
	PreviewReport,
	require_start,
)
from conductor.flows.wordpress import go_to_cloud_templates, login, open_templately, select_first_template

__all__ = [
	'AISiteImportFlow',
	'AISiteImportResult',
	'BUSINESS_SCENARIOS',
	'BusinessProfile',
	'FullSiteImportFlow',
	'ImportSummary',
	'PreviewReport',
	'USER_STEP_KINDS',
	'build_business_info_workflow',
	'expected_user_steps',
	'go_to_cloud_templates',
	'login',
	'open_templately',
	'require_start',
	'select_first_template',
]
