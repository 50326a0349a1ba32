# app.py — Flask backend
import logging
from typing import Optional

from flask import Flask, jsonify, request
from pydantic import ValidationError

from config import MAX_PHOTO_BYTES, configure_logging, load_settings
from errors import AnalysisError
from llm_wrapper import SymptomAnalyzer, build_client
from practitioners import find_practitioners
from pydantic_models import PractitionerQuery, SymptomAnalysisRequest

logger = logging.getLogger(__name__)

ANALYSIS_FAILED = "Analysis failed. Please try again later."


def _validation_message(e: ValidationError) -> str:
    return "; ".join(f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors())


def create_app(analyzer: Optional[SymptomAnalyzer] = None):
    """
    Build the Flask app. Without an injected analyzer the upstream client is
    built from the environment, and a missing API key raises ConfigurationError.
    """
    app = Flask(__name__)

    if analyzer is None:
        settings = load_settings()
        configure_logging(settings)
        analyzer = SymptomAnalyzer(build_client(settings))
        app.config["MODEL_PROVIDER"] = settings.provider
        logger.info("Symptom analyzer ready (provider=%s, model=%s)", settings.provider, settings.model_name)
    else:
        app.config["MODEL_PROVIDER"] = type(analyzer.client).__name__

    @app.route("/", methods=["GET"])
    def index():
        return ("Emerald Health Finder — POST /api/symptom-check with {'symptoms':'...'} "
                "or /api/practitioners with {'locationQuery':'...'}")

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "ok", "provider": app.config["MODEL_PROVIDER"]})

    @app.route("/api/symptom-check", methods=["POST"])
    def symptom_check():
        data = request.get_json(force=True, silent=True)
        if not isinstance(data, dict) or "symptoms" not in data:
            return jsonify({"error": "Please POST JSON with 'symptoms' field."}), 400

        try:
            req = SymptomAnalysisRequest.model_validate(data)
        except ValidationError as e:
            return jsonify({"error": _validation_message(e)}), 400

        photo = req.attachment()
        if photo is not None and len(photo.data) > MAX_PHOTO_BYTES:
            return jsonify({"error": "Photo is too large. Please upload an image smaller than 10MB."}), 413

        try:
            result = analyzer.analyze(req.symptoms, photo)
        except AnalysisError:
            logger.exception("Symptom analysis failed")
            return jsonify({"error": ANALYSIS_FAILED}), 502
        return jsonify(result.model_dump(by_alias=True))

    @app.route("/api/practitioners", methods=["GET", "POST"])
    def practitioners():
        if request.method == "POST":
            data = request.get_json(force=True, silent=True)
            if not isinstance(data, dict):
                data = {}
        else:
            data = {"locationQuery": request.args.get("locationQuery")}

        try:
            query = PractitionerQuery.model_validate(data)
        except ValidationError as e:
            return jsonify({"error": _validation_message(e)}), 400

        result = find_practitioners(query.location_query)
        return jsonify(result.model_dump(by_alias=True))

    return app


if __name__ == "__main__":
    app = create_app()
    app.run(host="0.0.0.0", port=5000)
