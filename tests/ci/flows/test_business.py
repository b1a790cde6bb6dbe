"""
Tests for the business information workflow.
"""

from conductor.conversation.models import StepKind
from conductor.flows.business import (
	BUSINESS_SCENARIOS,
	CONFIRM_GENERATION_LABEL,
	BusinessProfile,
	build_business_info_workflow,
	expected_user_steps,
)


class TestBuildBusinessInfoWorkflow:
	"""Tests for turning a BusinessProfile into steps."""

	def test_default_profile_has_nine_steps(self):
		spec = build_business_info_workflow()

		assert len(spec) == 9
		assert [step.expected_prompt_substring for step in spec] == [
			'business name',
			'type of business',
			'describe your business',
			'email address',
			'contact number',
			'business address',
			'opening hours',
			'replace the current image',
			'generate your website content',
		]

	def test_optional_steps(self):
		spec = build_business_info_workflow()

		assert [index for index, step in enumerate(spec) if step.optional] == [4, 6]

	def test_answers_come_from_profile(self):
		profile = BusinessProfile(business_name='Acme', email='hi@acme.test')
		spec = build_business_info_workflow(profile)

		assert spec[0].answer.text == 'Acme'
		assert spec[3].answer.text == 'hi@acme.test'

	def test_choice_steps(self):
		spec = build_business_info_workflow(BusinessProfile(replace_images=True))

		assert spec[7].answer.choice_label == 'Yes'
		assert spec[8].answer.choice_label == CONFIRM_GENERATION_LABEL
		assert build_business_info_workflow()[7].answer.choice_label == 'No'

	def test_unset_optional_answers_drop_steps(self):
		spec = build_business_info_workflow(BusinessProfile(phone=None, hours=None))

		assert len(spec) == 7
		assert 'contact number' not in [step.expected_prompt_substring for step in spec]
		assert 'opening hours' not in [step.expected_prompt_substring for step in spec]


class TestExpectedUserSteps:
	def test_default_expectation(self):
		expected = expected_user_steps()

		assert len(expected) == 9
		assert expected[0].kind is StepKind.USER_TEXT
		assert expected[0].content == 'TechSolutions Pro'
		assert expected[-1].kind is StepKind.USER_CHOICE
		assert expected[-1].content == CONFIRM_GENERATION_LABEL

	def test_without_optional(self):
		expected = expected_user_steps(include_optional=False)

		assert len(expected) == 7
		assert '+1-555-123-4567' not in [step.content for step in expected]


class TestBusinessScenarios:
	def test_built_in_scenarios(self):
		assert set(BUSINESS_SCENARIOS) == {'technology', 'restaurant', 'healthcare'}
		assert BUSINESS_SCENARIOS['restaurant'].business_name == 'Bella Vista Restaurant'
		assert BUSINESS_SCENARIOS['healthcare'].industry == 'Healthcare'

	def test_every_scenario_builds(self):
		for name, profile in BUSINESS_SCENARIOS.items():
			spec = build_business_info_workflow(profile, name=name)
			assert spec.name == name
			assert len(spec) == 9
