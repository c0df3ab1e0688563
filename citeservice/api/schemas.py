"""Pydantic schemas for API request/response models."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ========== Request Schemas ==========


class RenderCitationsRequest(BaseModel):
    """Request model for /render-citations endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    publications_by_id: Dict[str, Optional[Dict[str, Any]]] = Field(
        ..., alias="publicationsById", description="CSL-JSON records by identifier"
    )
    style_xml: str = Field(..., alias="styleXml", description="CSL style definition")
    locale: Optional[str] = Field(
        None, description="Locale override (e.g. en-GB)"
    )
    html: str = Field(default="", description="Document markup to annotate")

    @field_validator("style_xml")
    @classmethod
    def style_must_not_be_empty(cls, v: str) -> str:
        """Validate style is not just whitespace."""
        if not v.strip():
            raise ValueError("styleXml cannot be empty or whitespace")
        return v

    @field_validator("locale")
    @classmethod
    def blank_locale_is_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return v.strip()


class RenderBibliographyRequest(BaseModel):
    """Request model for /render-bibliography endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    publications: Dict[str, Dict[str, Any]] = Field(
        ..., description="CSL-JSON records by identifier"
    )
    style_xml: str = Field(..., alias="styleXml", description="CSL style definition")

    @field_validator("style_xml")
    @classmethod
    def style_must_not_be_empty(cls, v: str) -> str:
        """Validate style is not just whitespace."""
        if not v.strip():
            raise ValueError("styleXml cannot be empty or whitespace")
        return v


# ========== Response Schemas ==========


class Section(BaseModel):
    """One addressable section of an annotated document."""

    model_config = ConfigDict(populate_by_name=True)

    paragraph_id: str = Field(..., alias="paragraphId", description="Section identifier")
    html: str = Field(..., description="Annotated inner markup")


class RenderCitationsResponse(BaseModel):
    """Response model for /render-citations endpoint."""

    sections: List[Section] = Field(
        default_factory=list, description="Sections in document order"
    )


class RenderBibliographyResponse(BaseModel):
    """Response model for /render-bibliography endpoint."""

    entries: List[str] = Field(
        default_factory=list, description="Rendered entries in style order"
    )


class HealthResponse(BaseModel):
    ok: bool = True


# ========== Error Schemas ==========


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(..., description="Error message")
    errors: Optional[List[Dict[str, Any]]] = Field(
        None, description="Validation errors, if any"
    )
