import base64

LIKELY_CAUSE_HEADING = "# Likely Cause"


def parse_explanation(explanation: str) -> str:
    """Drop anything (e.g. a leaked JSON verdict) that precedes the '# Likely Cause' heading."""
    start = explanation.find(LIKELY_CAUSE_HEADING)
    if start != -1:
        return explanation[start:]
    return explanation


def to_data_uri(data: bytes, mime_type: str) -> str:
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def verdict_title(is_serious: bool) -> str:
    return "Medical Attention Recommended" if is_serious else "Likely Not Serious"
