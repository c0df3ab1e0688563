"""HTTP API for the citation service."""
