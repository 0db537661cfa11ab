"""Exceptions raised by the concept graph engine."""

from __future__ import annotations


class ConceptGraphError(Exception):
    """Base class for engine errors."""


class RootRequiredError(ConceptGraphError, ValueError):
    """A root-centred layout was requested without a root node id."""

    def __init__(self, strategy: str):
        super().__init__(f"Root node id is required for {strategy} layout")
        self.strategy = strategy
