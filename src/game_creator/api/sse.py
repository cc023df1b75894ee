import json


def format_sse_event(event_type: str, data: str) -> dict:
    """Format an SSE event for sse-starlette's EventSourceResponse."""
    return {"event": event_type, "data": data}


def sse_status(message: str) -> dict:
    return format_sse_event("status", message)


def sse_entry(entry_json: str) -> dict:
    return format_sse_event("entry", entry_json)


def sse_artifact(data: dict) -> dict:
    return format_sse_event("artifact", json.dumps(data))


def sse_init(data: dict) -> dict:
    return format_sse_event("init", json.dumps(data))


def sse_done(data: dict) -> dict:
    return format_sse_event("done", json.dumps(data))
