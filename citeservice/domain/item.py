"""Bibliographic item entity."""

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class AuthorName:
    family: str = ""
    given: str = ""
    literal: str = ""

    def label(self) -> str:
        """Family and given name joined with ', ', skipping blanks.

        Names without family or given parts (institutions) use `literal`.
        """
        return ", ".join(part for part in (self.family, self.given) if part) or self.literal


@dataclass(frozen=True, slots=True)
class BibliographicItem:
    """Read-only view of one catalog record.

    Only the fields the service itself reads are typed here; the full
    CSL-JSON record is handed to the style engine untouched.

    Attributes:
        id: Catalog identifier
        authors: Ordered author names (may be empty)
        year: Year of the first `issued` date part, if any
        title: Item title
    """

    id: str
    authors: tuple[AuthorName, ...] = field(default_factory=tuple)
    year: int | str | None = None
    title: str = ""

    @classmethod
    def from_csl(cls, item_id: str, data: dict) -> "BibliographicItem":
        """Create an item from a CSL-JSON record.

        Args:
            item_id: Catalog key of the record
            data: CSL-JSON record

        Returns:
            BibliographicItem instance
        """
        authors = tuple(
            AuthorName(
                family=str(name.get("family") or ""),
                given=str(name.get("given") or ""),
                literal=str(name.get("literal") or ""),
            )
            for name in data.get("author") or []
            if isinstance(name, dict)
        )

        return cls(
            id=item_id,
            authors=authors,
            year=_issued_year(data.get("issued")),
            title=data.get("title") or "",
        )


def _issued_year(issued) -> int | str | None:
    if not isinstance(issued, dict):
        return None
    parts = issued.get("date-parts")
    if not parts or not isinstance(parts, list):
        return None
    first = parts[0]
    if not first or not isinstance(first, list):
        return None
    return first[0]
