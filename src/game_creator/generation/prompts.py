GAME_PROMPT_TEMPLATE = """\
You are an expert game developer. Create a complete, playable HTML5 game based on this description: "{description}"

CRITICAL REQUIREMENTS:
1. Generate ONLY the complete HTML code with embedded CSS and JavaScript
2. The game must be fully self-contained in a single HTML file
3. Use HTML5 Canvas or DOM elements for rendering
4. Include all game logic, controls, and UI
5. Make it visually appealing with colors and styling
6. Add score/lives display if relevant
7. Include clear instructions in the game
8. Make controls intuitive (arrow keys, WASD, mouse/touch)
9. DO NOT include any explanatory text before or after the code
10. DO NOT use markdown code blocks or backticks
11. Start directly with <!DOCTYPE html>

The game should be production-ready and fun to play immediately."""

WELCOME_MESSAGE = """\
👋 Hi! I'm your AI Game Creator. Describe any game you'd like to create, and I'll build it for you instantly!

Try something like:
• "Create a snake game with score tracking"
• "Make a space shooter with enemies"
• "Build a platformer with jumping mechanics\""""

STATUS_MESSAGE = "Creating your game..."

SUCCESS_MESSAGE_TEMPLATE = """\
🎮 **Game Created Successfully!**

I've generated your {subject}. The game is now playable in the window above!

**How to play:**
• Use arrow keys or WASD to control
• Follow the on-screen instructions
• Have fun!

Want to modify it? Just tell me what changes you'd like!"""

FAILURE_MESSAGE_TEMPLATE = """\
❌ Sorry, I encountered an error creating the game: {reason}

Please try again with a different prompt."""


def build_prompt(description: str) -> str:
    """Render a game description into the generation instruction.

    The description is embedded verbatim; ``str.replace`` is used instead of
    ``str.format`` so braces typed by the user never reach the formatter.
    """
    return GAME_PROMPT_TEMPLATE.replace("{description}", description)


def success_message(description: str) -> str:
    return SUCCESS_MESSAGE_TEMPLATE.format(subject=description.lower())


def failure_message(reason: str) -> str:
    return FAILURE_MESSAGE_TEMPLATE.format(reason=reason)
