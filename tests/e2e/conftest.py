"""
Pytest configuration for real-browser tests.

Serves a minimal chat page that mimics the AI site builder's conversation
markup and starts a headless browser_use session against it.
"""

import pytest
from pytest_httpserver import HTTPServer

from browser_use.browser import BrowserSession
from browser_use.browser.profile import BrowserProfile

CHAT_PAGE = """<html><head><title>AI Builder</title></head><body>
<div class="ai-conversation-container">
	<div id="log"></div>
	<input type="text" class="ai-input-field" placeholder="Type your answer">
	<button class="send-button">Send</button>
	<div id="choices"></div>
</div>
<div class="ai-generation-progress" style="display:none">
	<div class="progress-step completed">Content</div>
	<div class="progress-step">Images</div>
</div>
<div class="ai-generation-complete" style="display:none">Your website is ready</div>
<script>
const prompts = [
	{text: 'Hi! What is your business name?'},
	{text: 'Would you like to replace the current image?', choices: ['Yes', 'No']},
];
let position = 0;
const log = document.getElementById('log');
const choices = document.getElementById('choices');

function say(who, text) {
	const msg = document.createElement('div');
	msg.className = who === 'ai' ? 'ai-message' : 'user-message';
	const content = document.createElement('div');
	content.className = 'message-content';
	content.textContent = text;
	msg.appendChild(content);
	log.appendChild(msg);
}

function ask() {
	choices.innerHTML = '';
	if (position >= prompts.length) {
		document.querySelector('.ai-generation-progress').style.display = 'block';
		setTimeout(() => {
			document.querySelector('.ai-generation-complete').style.display = 'block';
		}, 500);
		return;
	}
	const prompt = prompts[position];
	say('ai', prompt.text);
	(prompt.choices || []).forEach((label) => {
		const button = document.createElement('button');
		button.textContent = label;
		button.onclick = () => answer(label);
		choices.appendChild(button);
	});
}

function answer(value) {
	say('user', value);
	position += 1;
	setTimeout(ask, 200);
}

document.querySelector('.send-button').onclick = () => {
	const input = document.querySelector('.ai-input-field');
	if (!input.value) return;
	answer(input.value);
	input.value = '';
};
setTimeout(ask, 200);
</script>
</body></html>"""


@pytest.fixture(scope='session')
def http_server():
	"""Serve the fake AI builder page."""
	server = HTTPServer()
	server.start()
	server.expect_request('/chat').respond_with_data(CHAT_PAGE, content_type='text/html')
	yield server
	server.stop()


@pytest.fixture(scope='session')
def base_url(http_server):
	return f'http://{http_server.host}:{http_server.port}'


@pytest.fixture(scope='function')
async def live_browser_session():
	"""Headless browser session, killed after the test."""
	session = BrowserSession(
		browser_profile=BrowserProfile(
			headless=True,
			user_data_dir=None,
			keep_alive=True,
		)
	)
	await session.start()
	yield session
	await session.kill()
