"""Section partitioning of annotated documents."""

from __future__ import annotations

from bs4 import BeautifulSoup

from citeservice.config import MarkupConfig
from citeservice.domain.section import SectionRecord


def partition_sections(soup: BeautifulSoup, markup: MarkupConfig) -> list[SectionRecord]:
    """Emit one record per section element with a non-empty identifier.

    Sections come out in document order. A nested section is emitted on
    its own and also stays inside its parent's markup.
    """
    sections = []
    for element in soup.find_all(markup.section_tag, attrs={markup.section_id_attr: True}):
        paragraph_id = element.get(markup.section_id_attr)
        if not paragraph_id:
            continue
        sections.append(
            SectionRecord(paragraph_id=paragraph_id, html=element.decode_contents())
        )
    return sections
