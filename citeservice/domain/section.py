"""Section record emitted for each addressable section of a document."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SectionRecord:
    paragraph_id: str
    html: str

    def to_dict(self) -> dict:
        return {"paragraphId": self.paragraph_id, "html": self.html}
