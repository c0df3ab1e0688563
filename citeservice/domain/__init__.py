"""Domain types for bibliographic records and annotated documents."""

from citeservice.domain.item import AuthorName, BibliographicItem
from citeservice.domain.catalog import Catalog
from citeservice.domain.section import SectionRecord

__all__ = [
    "AuthorName",
    "BibliographicItem",
    "Catalog",
    "SectionRecord",
]
