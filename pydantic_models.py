import base64
import binascii
import re
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PrivateAttr, field_validator, model_validator

DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.+)$", re.DOTALL)


class Attachment(BaseModel):
    mime_type: str
    data: bytes

    @classmethod
    def from_data_uri(cls, uri: str) -> "Attachment":
        m = DATA_URI_RE.match(uri.strip())
        if not m:
            raise ValueError("photo must be a base64 data URI (data:<mime>;base64,...)")
        try:
            data = base64.b64decode(m.group("data"), validate=True)
        except binascii.Error as e:
            raise ValueError(f"photo is not valid base64: {e}") from e
        return cls(mime_type=m.group("mime"), data=data)


class SymptomAnalysisRequest(BaseModel):
    symptoms: str
    photo: Optional[str] = Field(default=None, validation_alias=AliasChoices("photo", "photoDataUri"))
    _attachment: Optional[Attachment] = PrivateAttr(default=None)

    @field_validator("symptoms")
    @classmethod
    def _symptoms_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("symptoms must not be empty")
        return v

    @field_validator("photo")
    @classmethod
    def _photo_blank_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @model_validator(mode="after")
    def _decode_photo(self) -> "SymptomAnalysisRequest":
        # decoded once here; attachment() hands out the same object
        if self.photo:
            self._attachment = Attachment.from_data_uri(self.photo)
        return self

    def attachment(self) -> Optional[Attachment]:
        return self._attachment


class SymptomAnalysisResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_serious: bool = Field(alias="isSerious")
    suggest_immediate_action: bool = Field(alias="suggestImmediateAction")
    explanation: str


class GenerationConfig(BaseModel):
    temperature: float = 0.9
    top_p: float = 0.95
    top_k: int = 64
    max_output_tokens: int = 8192


class PractitionerQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    location_query: Optional[str] = Field(default=None, alias="locationQuery")


class Practitioner(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    specialty: str
    address: str
    phone: str
    is_hospital: bool = Field(alias="isHospital")


class PractitionerResult(BaseModel):
    practitioners: List[Practitioner]
