"""Citation rendering endpoint for annotating documents."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from citeservice.annotate.pipeline import AnnotationPipeline
from citeservice.api.dependencies import get_annotation_pipeline
from citeservice.api.schemas import (
    ErrorResponse,
    RenderCitationsRequest,
    RenderCitationsResponse,
    Section,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/render-citations", tags=["citations"])


@router.post(
    "",
    response_model=RenderCitationsResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def render_citations(
    request: RenderCitationsRequest,
    pipeline: AnnotationPipeline = Depends(get_annotation_pipeline),
) -> RenderCitationsResponse:
    """Annotate citation markers and return the document's sections.

    Markers with malformed or unknown identifiers are left unannotated;
    the rest of the document is still processed.

    Args:
        request: Catalog, style, optional locale and document markup
        pipeline: Annotation pipeline dependency

    Returns:
        Sections in document order with annotated inner markup

    Raises:
        HTTPException: If the citation engine fails
    """
    try:
        result = pipeline.annotate(
            document=request.html,
            records=request.publications_by_id,
            style_xml=request.style_xml,
            locale=request.locale,
        )
    except Exception as e:
        logger.exception("Error in /render-citations")
        raise HTTPException(
            status_code=500,
            detail=f"Citation rendering failed: {e}",
        ) from e

    return RenderCitationsResponse(
        sections=[
            Section(paragraph_id=section.paragraph_id, html=section.html)
            for section in result.sections
        ]
    )
