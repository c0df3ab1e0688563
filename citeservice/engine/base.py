"""Base citation style engine interface."""

from abc import ABC, abstractmethod
from typing import Callable, Optional, Sequence

from citeservice.errors import UnsupportedLocaleError

ItemRetriever = Callable[[str], Optional[dict]]


class CitationEngine(ABC):
    """Abstract base class for citation style engines.

    An engine instance belongs to exactly one request. Callers must load
    the complete item set with `load_items` before rendering anything,
    since numbering and disambiguation depend on every loaded item.
    """

    def __init__(
        self,
        retrieve_item: ItemRetriever,
        supported_locale_prefixes: Sequence[str] = ("en",),
    ):
        """Initialize engine.

        Args:
            retrieve_item: Callback returning an engine-ready record or None
            supported_locale_prefixes: Language prefixes the engine may load
        """
        self.retrieve_item = retrieve_item
        self.supported_locale_prefixes = tuple(supported_locale_prefixes)
        self.loaded_ids: list[str] = []

    def retrieve_locale(self, lang: str) -> str:
        """Check that a locale can be used and return its tag.

        Raises:
            UnsupportedLocaleError: If no supported prefix matches
        """
        if not any(lang.startswith(prefix) for prefix in self.supported_locale_prefixes):
            raise UnsupportedLocaleError(lang, self.supported_locale_prefixes)
        return lang

    @abstractmethod
    def load_items(self, item_ids: Sequence[str]) -> None:
        """Replace the engine's item set with `item_ids`, in order."""

    @abstractmethod
    def render_cluster(self, item_ids: Sequence[str]) -> str:
        """Render one citation cluster for already loaded items."""

    @abstractmethod
    def render_bibliography(self) -> list[str]:
        """Render one entry per loaded item, in style-defined order."""
