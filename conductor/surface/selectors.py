"""
CSS selectors for the Templately admin UI.

Defaults follow the plugin's markup; override any field to point the browser
surface at a different build of the UI.
"""

from pydantic import BaseModel, Field


class ProgressSelectors(BaseModel):
	"""Selectors making up one tri-state progress signal."""

	started: str = Field(..., description='Visible once the operation is in progress')
	complete: str = Field(..., description='Visible once the operation completed')
	error: str = Field(..., description='Visible once the operation failed')
	error_message: str = Field(..., description='Text explaining the failure')
	step: str | None = Field(default=None, description='Individual progress steps')
	step_completed: str | None = Field(default=None, description='Completed progress steps')
	percentage: str | None = Field(default=None, description='Numeric progress percentage')


class SurfaceSelectors(BaseModel):
	"""Every selector the browser surface relies on."""

	# AI conversation
	message: str = Field(default='.ai-message .message-content', description='Emitted AI messages; the last one is the latest')
	input: str = Field(
		default='.ai-input-field, .user-input, [placeholder*="answer"], [placeholder*="Type"]',
		description='Free-text answer input',
	)
	submit: str = Field(default='.submit-button, .send-button, button[type="submit"]', description='Answer submit control')
	choice: str = Field(default='button', description='Elements eligible as labelled choice controls')
	start_ai_workflow: str = Field(default='.build-with-ai-button, [data-action="start-ai-workflow"]')
	conversation_container: str = Field(default='.ai-conversation-container')
	restart_ai_workflow: str = Field(default='.restart-ai-workflow, .start-fresh-button')

	# Progress signals
	progress: dict[str, ProgressSelectors] = Field(
		default_factory=lambda: {
			'generation': ProgressSelectors(
				started='.ai-generation-progress',
				complete='.ai-generation-complete',
				error='.ai-generation-error',
				error_message='.ai-error-message',
				step='.progress-step',
				step_completed='.progress-step.completed',
			),
			'import': ProgressSelectors(
				started='.fsi-modal',
				complete='.import-complete',
				error='.import-error',
				error_message='.import-error-message',
				percentage='.import-progress-percentage',
			),
			'dependencies': ProgressSelectors(
				started='.install-dependencies-button',
				complete='.dependencies-installed',
				error='.dependency-error',
				error_message='.dependency-error-message',
			),
		}
	)

	# Full site import
	fsi_import_button: str = Field(default='[data-template-id="{template_id}"] .fsi-import-button')
	fsi_modal: str = Field(default='.fsi-modal')
	dependency_check_complete: str = Field(default='.dependency-check-complete')
	missing_dependency: str = Field(default='.missing-dependency')
	install_dependencies: str = Field(default='.install-dependencies-button')
	import_success_message: str = Field(default='.import-success-message')
	imported_page: str = Field(default='.imported-page-item')
	imported_template: str = Field(default='.imported-template-item')
	preview_iframe: str = Field(default='.fsi-preview-iframe')

	# WordPress admin
	login_form: str = Field(default='#loginform')
	login_user: str = Field(default='#user_login')
	login_password: str = Field(default='#user_pass')
	login_submit: str = Field(default='#wp-submit')
	admin_bar: str = Field(default='#wpadminbar')
	templately_admin_page: str = Field(default='.templately-admin-page')

	# Template library
	cloud_library_tab: str = Field(default='[data-tab="cloud-library"]')
	cloud_templates: str = Field(default='.templately-cloud-templates')
	template_item: str = Field(default='.template-item')

	def progress_for(self, name: str) -> ProgressSelectors:
		try:
			return self.progress[name]
		except KeyError:
			raise ValueError(f'Unknown progress signal: {name}') from None
