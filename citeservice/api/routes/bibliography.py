"""Bibliography rendering endpoint."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from citeservice.api.dependencies import get_bibliography_renderer
from citeservice.api.schemas import (
    ErrorResponse,
    RenderBibliographyRequest,
    RenderBibliographyResponse,
)
from citeservice.bibliography import BibliographyRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/render-bibliography", tags=["bibliography"])


@router.post(
    "",
    response_model=RenderBibliographyResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def render_bibliography(
    request: RenderBibliographyRequest,
    renderer: BibliographyRenderer = Depends(get_bibliography_renderer),
) -> RenderBibliographyResponse:
    """Render the full bibliography for the given publications.

    All-or-nothing: any engine error fails the request.
    """
    try:
        entries = renderer.render(request.publications, request.style_xml)
    except Exception as e:
        logger.exception("Error in /render-bibliography")
        raise HTTPException(
            status_code=500,
            detail=f"Bibliography rendering failed: {e}",
        ) from e

    return RenderBibliographyResponse(entries=entries)
