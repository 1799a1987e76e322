"""Static HTML pages: landing page, OAuth result pages and the test console."""

from html import escape
from typing import Optional

INDEX_PAGE = """
<html>
  <head><title>Zoom Chat Bot</title></head>
  <body style="font-family: monospace; max-width: 800px; margin: 50px auto;">
    <h1>🤖 Zoom Chat Bot</h1>
    <p>The bot is running...</p>
    <ul>
      <li><a href="/health">Health check</a></li>
      <li><a href="/test">Test console</a></li>
    </ul>
  </body>
</html>
"""

OAUTH_FAILURE_PAGE = """
<h2>❌ Authorization failed</h2>
<p>Something went wrong during authorization, please try again.</p>
<p><a href="javascript:history.back()">Go back and retry</a></p>
"""


def oauth_success_page(state: Optional[str] = None) -> str:
    state_line = f"<p><small>state: {escape(state)}</small></p>" if state else ""
    return f"""
<h2>🎉 Zoom bot authorized!</h2>
<p>You have successfully authorized the Zoom chat bot.</p>
<p>You can now talk to the bot in Zoom Team Chat!</p>
<p><strong>Try sending:</strong> hello or help</p>
{state_line}
<br>
<p><em>You can close this page.</em></p>
"""


TEST_CONSOLE_PAGE = """
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>Zoom Bot Test Console</title>
  <style>
    body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Arial, sans-serif;
           max-width: 800px; margin: 40px auto; padding: 20px; background: #f5f5f5; }
    .container { background: white; padding: 30px; border-radius: 8px;
                 box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
    h1 { color: #2d8cff; border-bottom: 2px solid #2d8cff; padding-bottom: 10px; }
    .section { margin: 20px 0; padding: 15px; background: #f8f9fa; border-radius: 5px; }
    .button { background: #2d8cff; color: white; border: none; padding: 8px 16px;
              border-radius: 4px; cursor: pointer; margin: 5px; }
    .button:hover { background: #1e7ce8; }
    input, textarea { width: 100%; padding: 8px; margin: 5px 0; border: 1px solid #ddd;
                      border-radius: 4px; box-sizing: border-box; }
    .result { margin-top: 15px; padding: 10px; background: #e8f5e8; border-radius: 4px;
              border-left: 4px solid #28a745; }
    .error { background: #f8e8e8; border-left-color: #dc3545; }
  </style>
</head>
<body>
  <div class="container">
    <h1>🤖 Zoom Bot Test Console</h1>

    <div class="section">
      <h3>📊 System status</h3>
      <button class="button" onclick="checkHealth()">Check health</button>
      <div id="healthResult"></div>
    </div>

    <div class="section">
      <h3>📝 Test webhook</h3>
      <p>Simulate Zoom delivering a message to the bot (uses test JIDs, nothing is sent to Zoom):</p>
      <input type="text" id="testCommand" placeholder="Command, e.g. hello" value="hello">
      <input type="text" id="testUser" placeholder="User name" value="Test User">
      <input type="password" id="verificationToken" placeholder="Verification token (if configured)">
      <button class="button" onclick="testWebhook()">Test webhook</button>
      <div id="webhookResult"></div>
    </div>

    <div class="section">
      <h3>💬 Send a message</h3>
      <p>Send a message directly to a user:</p>
      <input type="text" id="toJid" placeholder="Target JID, e.g. user@xmpp.zoom.us">
      <textarea id="message" rows="3" placeholder="Message text"></textarea>
      <button class="button" onclick="testSendMessage()">Send message</button>
      <div id="sendResult"></div>
    </div>

    <div class="section">
      <h3>🔧 Quick command tests</h3>
      <button class="button" onclick="quickTest('hello')">hello</button>
      <button class="button" onclick="quickTest('help')">help</button>
      <button class="button" onclick="quickTest('time')">time</button>
      <button class="button" onclick="quickTest('ping')">ping</button>
      <button class="button" onclick="quickTest('info')">info</button>
    </div>
  </div>

  <script>
    function show(id, ok, title, body) {
      document.getElementById(id).innerHTML =
        '<div class="result' + (ok ? '' : ' error') + '"><strong>' + title + '</strong><pre>' +
        body + '</pre></div>';
    }

    async function checkHealth() {
      try {
        const response = await fetch('/health');
        show('healthResult', true, '✅ Status:', JSON.stringify(await response.json(), null, 2));
      } catch (error) {
        show('healthResult', false, '❌ Error:', error.message);
      }
    }

    async function testWebhook() {
      const headers = { 'Content-Type': 'application/json' };
      const token = document.getElementById('verificationToken').value;
      if (token) { headers['Authorization'] = token; }
      try {
        const response = await fetch('/webhook', {
          method: 'POST',
          headers: headers,
          body: JSON.stringify({
            event: 'bot_notification',
            payload: {
              cmd: document.getElementById('testCommand').value,
              userName: document.getElementById('testUser').value,
              userJid: 'test@xmpp.zoom.us',
              robotJid: 'bot@xmpp.zoom.us'
            }
          })
        });
        show('webhookResult', response.ok, '✅ Webhook response:',
             JSON.stringify(await response.json(), null, 2));
      } catch (error) {
        show('webhookResult', false, '❌ Error:', error.message);
      }
    }

    async function testSendMessage() {
      const toJid = document.getElementById('toJid').value;
      const message = document.getElementById('message').value;
      if (!toJid || !message) {
        alert('Please fill in the target JID and the message');
        return;
      }
      try {
        const response = await fetch('/test-send-message', {
          method: 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: JSON.stringify({ to_jid: toJid, message: message })
        });
        show('sendResult', response.ok, '✅ Send result:',
             JSON.stringify(await response.json(), null, 2));
      } catch (error) {
        show('sendResult', false, '❌ Error:', error.message);
      }
    }

    function quickTest(command) {
      document.getElementById('testCommand').value = command;
      testWebhook();
    }

    window.onload = checkHealth;
  </script>
</body>
</html>
"""
