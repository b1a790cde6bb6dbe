"""
Business information conversation

The AI site builder interviews the user about their business before
generating content. This module turns a BusinessProfile into the matching
WorkflowSpec and the expected answers for history validation.
"""

from pydantic import BaseModel, Field

from conductor.conversation.models import Answer, ExpectedStep, StepDefinition, StepKind, WorkflowSpec

CONFIRM_GENERATION_LABEL = "Yes, Let's Do It!"


class BusinessProfile(BaseModel):
	"""Every answer the AI interview asks for, with defaults."""

	business_name: str = 'TechSolutions Pro'
	industry: str = 'Technology'
	description: str = (
		'We are a leading technology consulting company specializing in digital transformation, '
		'cloud solutions, and innovative software development. Our expert team helps businesses '
		'modernize their operations and achieve sustainable growth through cutting-edge technology solutions.'
	)
	email: str = 'contact@techsolutionspro.com'
	phone: str | None = Field(default='+1-555-123-4567', description='Optional; prompt may be skipped')
	address: str = '456 Tech Plaza, Suite 789, Innovation District, San Francisco, CA 94105, United States'
	hours: str | None = Field(
		default='Monday to Friday: 9:00 AM to 6:00 PM (PST), Saturday: 10:00 AM to 2:00 PM (PST), Sunday: Closed',
		description='Optional; prompt may be skipped',
	)
	replace_images: bool = False


def build_business_info_workflow(profile: BusinessProfile | None = None, name: str = 'ai-business-info') -> WorkflowSpec:
	"""Interview steps: typed answers (phone and hours optional), then the image and confirmation choices."""
	profile = profile or BusinessProfile()
	steps = [
		StepDefinition(expected_prompt_substring='business name', answer=Answer.typed(profile.business_name)),
		StepDefinition(expected_prompt_substring='type of business', answer=Answer.typed(profile.industry)),
		StepDefinition(expected_prompt_substring='describe your business', answer=Answer.typed(profile.description)),
		StepDefinition(expected_prompt_substring='email address', answer=Answer.typed(profile.email)),
		*_optional_step('contact number', profile.phone),
		StepDefinition(expected_prompt_substring='business address', answer=Answer.typed(profile.address)),
		*_optional_step('opening hours', profile.hours),
		StepDefinition(
			expected_prompt_substring='replace the current image',
			answer=Answer.choice('Yes' if profile.replace_images else 'No'),
		),
		StepDefinition(
			expected_prompt_substring='generate your website content',
			answer=Answer.choice(CONFIRM_GENERATION_LABEL),
		),
	]
	return WorkflowSpec(steps=tuple(steps), name=name)


def _optional_step(prompt: str, value: str | None) -> list[StepDefinition]:
	# Leaving an optional answer unset drops the step entirely
	if value is None:
		return []
	return [StepDefinition(expected_prompt_substring=prompt, answer=Answer.typed(value), optional=True)]


def expected_user_steps(profile: BusinessProfile | None = None, include_optional: bool = True) -> list[ExpectedStep]:
	"""Expected user-side history for a run of build_business_info_workflow."""
	spec = build_business_info_workflow(profile)
	return [
		ExpectedStep(kind=step.answer.step_kind, content=step.answer.value)
		for step in spec
		if include_optional or not step.optional
	]


USER_STEP_KINDS = (StepKind.USER_TEXT, StepKind.USER_CHOICE)


BUSINESS_SCENARIOS: dict[str, BusinessProfile] = {
	'technology': BusinessProfile(),
	'restaurant': BusinessProfile(
		business_name='Bella Vista Restaurant',
		industry='Restaurant',
		description=(
			'Bella Vista Restaurant offers an authentic Italian dining experience with fresh, locally-sourced '
			'ingredients and traditional recipes passed down through generations. Our warm atmosphere and '
			'exceptional service make every meal memorable.'
		),
		email='info@bellavista.com',
		phone='+1-555-987-6543',
		address='123 Main Street, Downtown District, New York, NY 10001, United States',
		hours='Tuesday to Sunday: 5:00 PM to 10:00 PM, Monday: Closed',
		replace_images=True,
	),
	'healthcare': BusinessProfile(
		business_name='Wellness Medical Center',
		industry='Healthcare',
		description=(
			'Wellness Medical Center provides comprehensive healthcare services with a focus on preventive '
			'care and patient wellness. Our experienced medical team offers personalized treatment plans and '
			'state-of-the-art medical technology.'
		),
		email='appointments@wellnessmedical.com',
		phone='+1-555-456-7890',
		address='789 Health Drive, Medical District, Chicago, IL 60601, United States',
		hours='Monday to Friday: 8:00 AM to 6:00 PM, Saturday: 9:00 AM to 2:00 PM, Sunday: Emergency only',
	),
}
