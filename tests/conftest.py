import pytest

from app import create_app
from llm_wrapper import SymptomAnalyzer, TextGenerationClient

WELL_FORMED = (
    '{"isSerious": true, "suggestImmediateAction": false}\n'
    "---\n"
    "# Likely Cause\nA viral chest infection.\n\n"
    "# What You Should Do\n- Rest and drink fluids\n\n"
    "# When to Seek Help\n- Shortness of breath\n"
)


class FakeClient(TextGenerationClient):
    """Returns a canned response (or raises) and records every call."""

    def __init__(self, response=WELL_FORMED, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def generate(self, prompt, attachments, config):
        self.calls.append({"prompt": prompt, "attachments": attachments, "config": config})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def analyzer(fake_client):
    return SymptomAnalyzer(fake_client)


@pytest.fixture
def client(analyzer):
    app = create_app(analyzer=analyzer)
    app.config["TESTING"] = True
    return app.test_client()
