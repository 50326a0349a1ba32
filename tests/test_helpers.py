import pytest
from pydantic import ValidationError

from heuristics import classify
from pydantic_models import Attachment, SymptomAnalysisRequest, SymptomAnalysisResult
from render_utils import parse_explanation, to_data_uri, verdict_title


@pytest.mark.parametrize("text,serious,immediate", [
    ("Probably a SEVERE allergy", True, False),
    ("Not serious, but go to the emergency room if it spreads", True, True),
    ("Rest and fluids.", False, False),
    ("Seek immediate attention", False, True),
    (None, False, False),
])
def test_keyword_classify(text, serious, immediate):
    assert classify(text) == {"is_serious": serious, "suggest_immediate_action": immediate}


def test_parse_explanation_drops_leading_json():
    text = '{"isSerious": true}\n# Likely Cause\nMigraine.'
    assert parse_explanation(text) == "# Likely Cause\nMigraine."
    assert parse_explanation("Plain advice.") == "Plain advice."


def test_data_uri_round_trip_through_request_model():
    uri = to_data_uri(b"\xff\xd8jpeg", "image/jpeg")
    req = SymptomAnalysisRequest.model_validate({"symptoms": "swollen ankle", "photo": uri})
    assert req.attachment() == Attachment(mime_type="image/jpeg", data=b"\xff\xd8jpeg")


def test_request_without_photo_has_no_attachment():
    req = SymptomAnalysisRequest(symptoms="sore throat")
    assert req.photo is None
    assert req.attachment() is None


@pytest.mark.parametrize("photo", ["data:image/png;base64,@@@", "http://example.com/x.png"])
def test_bad_photo_is_a_validation_error(photo):
    with pytest.raises(ValidationError):
        SymptomAnalysisRequest.model_validate({"symptoms": "sore throat", "photo": photo})


def test_result_serializes_with_camel_case_keys():
    result = SymptomAnalysisResult(is_serious=False, suggest_immediate_action=True, explanation="x")
    assert result.model_dump(by_alias=True) == {
        "isSerious": False, "suggestImmediateAction": True, "explanation": "x",
    }


def test_verdict_titles():
    assert verdict_title(True) == "Medical Attention Recommended"
    assert verdict_title(False) == "Likely Not Serious"


def test_attachment_is_built_once_and_reused():
    req = SymptomAnalysisRequest.model_validate({"symptoms": "swollen ankle", "photo": to_data_uri(b"img", "image/png")})
    assert req.attachment() is req.attachment()
