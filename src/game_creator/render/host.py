from html import escape

SANDBOX_POLICY = "allow-scripts allow-same-origin"
CONTENT_SECURITY_POLICY = f"sandbox {SANDBOX_POLICY}"


class RenderHost:
    """Holds the document currently on display and the version it was loaded under.

    Data only flows in: the host is told what to show and never reports back.
    """

    def __init__(self) -> None:
        self.source: str | None = None
        self.version: int | None = None

    def load(self, source: str, version: int) -> bool:
        """Take a document for display. Returns True when a cold reload is needed."""
        if version == self.version:
            return False
        self.source = source
        self.version = version
        return True

    def markup(self) -> str:
        if self.source is None:
            return ""
        return render_frame(self.source, self.version)


def render_frame(source: str, version: int) -> str:
    """Embed a document inline in a sandboxed iframe keyed by version."""
    return (
        f'<iframe id="game-frame-{version}" data-version="{version}" '
        f'title="Game Preview" sandbox="{SANDBOX_POLICY}" '
        f'srcdoc="{escape(source, quote=True)}"></iframe>'
    )


def render_page(frame: str) -> str:
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Game Preview</title>
<style>
html, body {{ margin: 0; height: 100%; background: #030712; }}
iframe {{ border: 0; width: 100%; height: 100%; background: #fff; }}
</style>
</head>
<body>
{frame}
</body>
</html>
"""
