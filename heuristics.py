"""Keyword fallback used when the model ignores the JSON/---/markdown layout."""

KEYWORDS = {
    "is_serious": ["serious", "severe"],
    "suggest_immediate_action": ["immediate", "emergency"],
}


def normalize_text(text):
    return (text or "").lower()


def classify(raw_text):
    """Return {"is_serious": bool, "suggest_immediate_action": bool} by substring containment."""
    text = normalize_text(raw_text)
    return {flag: any(k in text for k in words) for flag, words in KEYWORDS.items()}
