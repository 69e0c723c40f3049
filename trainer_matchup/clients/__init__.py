"""External data clients used by the matchup engine."""

from .pokeapi import PokeAPIClient, PokeAPIClientError

__all__ = ["PokeAPIClient", "PokeAPIClientError"]
