"""
LLM wrapper for the symptom checker.

Provides:
- build_prompt: the single prompt sent upstream (JSON verdict, "---" line, markdown explanation)
- GeminiClient / OpenAIClient: TextGenerationClient implementations; build_client picks one
- split_response / parse_verdict / parse_response: delimiter protocol parsing with keyword fallback
- SymptomAnalyzer: one upstream call per analysis, errors surfaced as AnalysisError
"""

import base64
import json
import logging
import re
from typing import List, Optional, Tuple

from google import genai
from google.genai import types
from openai import OpenAI

import heuristics
from config import RAW_LOGGER, Settings
from errors import AnalysisError, ConfigurationError, ParseError
from pydantic_models import Attachment, GenerationConfig, SymptomAnalysisResult

logger = logging.getLogger(__name__)
raw_logger = logging.getLogger(RAW_LOGGER)

# A line holding only three dashes separates the JSON verdict from the markdown explanation.
# Trailing \r is allowed so CRLF responses split the same way.
DELIMITER_RE = re.compile(r"^[ \t]*---[ \t\r]*$", re.MULTILINE)
FENCE_RE = re.compile(r"```(?:json|JSON)?")

PROMPT_TEMPLATE = """
As a medical expert, analyze these symptoms concisely and determine if they indicate a potentially serious condition requiring immediate attention.

Symptoms: {symptoms}

First, determine:
1. If the condition is potentially serious (true/false)
2. If immediate medical attention is recommended (true/false)

Then, provide a brief explanation in this format:

# Likely Cause
[One clear sentence about the most likely cause]

# What You Should Do
- [One specific action recommendation]
- [Any immediate steps to take at home, if applicable]

# When to Seek Help
- [1-2 specific warning signs that would require medical attention]

Keep the explanation very concise and action-oriented. Use simple, clear language.

Your response must be split into two parts:
1. A JSON object with just the boolean flags:
{{
  "isSerious": boolean,
  "suggestImmediateAction": boolean
}}

2. The markdown formatted explanation as plain text.

Separate these with three dashes (---) on a line of their own.
"""


def build_prompt(symptoms: str) -> str:
    return PROMPT_TEMPLATE.format(symptoms=symptoms.strip()).strip()


class TextGenerationClient:
    """Anything that can turn a prompt (plus optional images) into text."""

    def generate(self, prompt: str, attachments: List[Attachment], config: GenerationConfig) -> str:
        raise NotImplementedError


class GeminiClient(TextGenerationClient):
    def __init__(self, api_key: str, model_name: str = "gemini-2.5-flash"):
        self.client = genai.Client(api_key=api_key)
        self.model_name = model_name

    def generate(self, prompt: str, attachments: List[Attachment], config: GenerationConfig) -> str:
        contents = [prompt] + [types.Part.from_bytes(data=a.data, mime_type=a.mime_type) for a in attachments]
        response = self.client.models.generate_content(
            model=self.model_name,
            contents=contents,
            config=types.GenerateContentConfig(
                temperature=config.temperature,
                top_p=config.top_p,
                top_k=config.top_k,
                max_output_tokens=config.max_output_tokens,
            ),
        )
        return response.text or ""


class OpenAIClient(TextGenerationClient):
    def __init__(self, api_key: str, model_name: str = "gpt-4o-mini"):
        self.client = OpenAI(api_key=api_key)
        self.model_name = model_name

    def generate(self, prompt: str, attachments: List[Attachment], config: GenerationConfig) -> str:
        if attachments:
            content = [{"type": "text", "text": prompt}]
            for a in attachments:
                b64 = base64.b64encode(a.data).decode("ascii")
                content.append({"type": "image_url", "image_url": {"url": f"data:{a.mime_type};base64,{b64}"}})
        else:
            content = prompt

        # chat completions has no top_k
        resp = self.client.chat.completions.create(
            model=self.model_name,
            messages=[{"role": "user", "content": content}],
            temperature=config.temperature,
            top_p=config.top_p,
            max_tokens=config.max_output_tokens,
        )
        return resp.choices[0].message.content or ""


def build_client(settings: Settings) -> TextGenerationClient:
    if settings.provider == "gemini":
        return GeminiClient(settings.api_key, settings.model_name)
    if settings.provider == "openai":
        return OpenAIClient(settings.api_key, settings.model_name)
    raise ConfigurationError(f"Unknown MODEL_PROVIDER: {settings.provider}")


def split_response(raw_text: str) -> Tuple[str, str]:
    """Split on the first "---" line into (json_segment, markdown_segment), both stripped."""
    m = DELIMITER_RE.search(raw_text)
    if m is None:
        raise ParseError("delimiter line '---' not found")
    return raw_text[:m.start()].strip(), raw_text[m.end():].strip()


def parse_verdict(json_segment: str) -> Tuple[bool, bool]:
    """Return (isSerious, suggestImmediateAction) from the JSON segment."""
    text = FENCE_RE.sub("", json_segment).replace("```", "").strip()
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"verdict is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ParseError(f"verdict must be a JSON object, got {type(parsed).__name__}")
    flags = []
    for key in ("isSerious", "suggestImmediateAction"):
        value = parsed.get(key)
        if not isinstance(value, bool):
            raise ParseError(f"verdict field {key!r} must be a boolean, got {value!r}")
        flags.append(value)
    return flags[0], flags[1]


def parse_response(raw_text: str) -> SymptomAnalysisResult:
    """
    Parse the JSON/---/markdown layout. If anything about it is off, fall back
    to the keyword heuristic over the whole text and use the text as explanation.
    """
    try:
        json_segment, markdown = split_response(raw_text)
        is_serious, immediate = parse_verdict(json_segment)
        if not markdown:
            raise ParseError("explanation segment is empty")
        return SymptomAnalysisResult(
            is_serious=is_serious,
            suggest_immediate_action=immediate,
            explanation=markdown,
        )
    except ParseError as e:
        logger.warning("Upstream response not in expected format, using keyword fallback: %s", e)
        flags = heuristics.classify(raw_text)
        return SymptomAnalysisResult(explanation=raw_text, **flags)


class SymptomAnalyzer:
    def __init__(self, client: TextGenerationClient, generation_config: Optional[GenerationConfig] = None):
        self.client = client
        self.generation_config = generation_config or GenerationConfig()

    def analyze(self, symptoms: str, photo: Optional[Attachment] = None) -> SymptomAnalysisResult:
        """
        One blocking round trip to the upstream model.
        Raises AnalysisError if the call fails or returns nothing.
        """
        prompt = build_prompt(symptoms)
        attachments = [photo] if photo is not None else []

        try:
            raw = self.client.generate(prompt, attachments, self.generation_config)
        except Exception as e:
            raw_logger.info("----UPSTREAM_ERROR----\n%s", e)
            logger.exception("Upstream generation failed")
            raise AnalysisError("Upstream model call failed") from e

        raw_logger.info("----CALL----\n%s", raw)
        if not raw or not raw.strip():
            raise AnalysisError("Upstream model returned an empty response")

        return parse_response(raw)
