"""Citation annotation pipeline."""

from citeservice.annotate.clusters import (
    Annotation,
    MarkerOutcome,
    UnannotatedReason,
    apply_annotations,
    render_marker,
)
from citeservice.annotate.collector import collect_identifiers
from citeservice.annotate.markers import (
    CitationMarker,
    MarkerStatus,
    extract_markers,
    parse_ref_ids,
)
from citeservice.annotate.pipeline import AnnotationPipeline, AnnotationResult
from citeservice.annotate.sections import partition_sections
from citeservice.annotate.tooltip import compose_tooltip, tooltip_line

__all__ = [
    # Markers
    "CitationMarker",
    "MarkerStatus",
    "extract_markers",
    "parse_ref_ids",
    "collect_identifiers",
    # Rendering
    "Annotation",
    "MarkerOutcome",
    "UnannotatedReason",
    "apply_annotations",
    "render_marker",
    "compose_tooltip",
    "tooltip_line",
    # Sections
    "partition_sections",
    # Pipeline
    "AnnotationPipeline",
    "AnnotationResult",
]
