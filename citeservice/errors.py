"""Exception hierarchy for the citation service."""


class CiteServiceError(Exception):
    """Base class for all service errors."""


class CitationEngineError(CiteServiceError):
    """Fatal error raised by the citation style engine.

    Engine errors always abort the whole request.
    """


class UnsupportedLocaleError(CitationEngineError):
    """The style (or override) asks for a locale the service cannot load."""

    def __init__(self, locale: str, supported: tuple[str, ...]):
        self.locale = locale
        self.supported = supported
        allowed = ", ".join(f"{p}*" for p in supported) or "none"
        super().__init__(
            f'This CSL style requires locale "{locale}", '
            f"but only {allowed} locales are currently supported."
        )


class StyleDefinitionError(CitationEngineError):
    """The style XML could not be parsed."""


class EngineStateError(CitationEngineError):
    """An engine operation was called out of order."""
