class ConfigurationError(RuntimeError):
    """Missing or invalid configuration (e.g. no API key). Fatal at startup."""


class AnalysisError(RuntimeError):
    """The upstream model call failed or returned nothing usable."""


class ParseError(ValueError):
    """Upstream text did not follow the JSON/---/markdown layout.

    Only raised inside llm_wrapper; always resolved by the keyword fallback.
    """
