"""PokeAPI-backed lookup source pinned to the Gen-3 (Emerald) ruleset."""

from __future__ import annotations

import re
import time
from typing import Any, Dict, List, Optional, Set

import requests

from ..data.moves import normalize_ability, normalize_move
from ..data.tables import normalize_species
from ..data.type_chart import type_effectiveness
from ..models import EvolutionEdge, LearnsetEntry, Move, Species

GENERATION = 3
VERSION_GROUP = "emerald"
NATIONAL_DEX_LIMIT = 386

# Version groups in release order; ``past_values`` entries name the group that
# changed a value, so the first entry after Emerald holds the Emerald value.
VERSION_GROUP_ORDER = [
    "red-blue", "yellow", "gold-silver", "crystal", "ruby-sapphire", "emerald",
    "firered-leafgreen", "colosseum", "xd", "diamond-pearl", "platinum",
    "heartgold-soulsilver", "black-white", "black-2-white-2", "x-y",
    "omega-ruby-alpha-sapphire", "sun-moon", "ultra-sun-ultra-moon",
    "lets-go-pikachu-lets-go-eevee", "sword-shield", "brilliant-diamond-and-shining-pearl",
    "legends-arceus", "scarlet-violet",
]

STAT_NAMES = {
    "hp": "hp",
    "attack": "atk",
    "defense": "def",
    "special-attack": "spa",
    "special-defense": "spd",
    "speed": "spe",
}

TRIGGER_METHODS = {
    "level-up": "LEVEL_UP",
    "use-item": "USE_ITEM",
    "trade": "TRADE",
}

ROMAN = {"i": 1, "ii": 2, "iii": 3, "iv": 4, "v": 5, "vi": 6, "vii": 7, "viii": 8, "ix": 9}


class PokeAPIClientError(RuntimeError):
    """Raised when the PokeAPI request fails."""


class PokeAPIClient:
    """Answers the static-table queries from pokeapi.co with in-memory caching.

    Values are recovered for Emerald: ``past_types`` and ``past_values`` undo
    later retyping and power changes, and anything introduced after
    Generation 3 resolves to ``None``.
    """

    BASE_URL = "https://pokeapi.co/api/v2"

    def __init__(
        self,
        *,
        session: Optional[requests.Session] = None,
        cache_ttl: int = 600,
        timeout: int = 10,
        user_agent: str = "trainer-matchup/0.1 (+https://github.com/)",
    ) -> None:
        self.session = session or requests.Session()
        self.cache_ttl = cache_ttl
        self.timeout = timeout
        self.user_agent = user_agent
        self._cache: Dict[str, tuple[float, Any]] = {}
        self._species_cache: Dict[str, Optional[Species]] = {}
        self._move_cache: Dict[str, Optional[Move]] = {}
        self._evolution_cache: Dict[str, List[EvolutionEdge]] = {}

    # ------------------------------------------------------------------
    # Lookup interface
    # ------------------------------------------------------------------
    def species(self, species_id: str) -> Optional[Species]:
        token = normalize_species(species_id)
        if token in self._species_cache:
            return self._species_cache[token]
        pokemon = self._gen3_pokemon(token)
        species = None
        if pokemon is not None:
            species = Species(
                id=token,
                base_stats={
                    STAT_NAMES[entry["stat"]["name"]]: int(entry["base_stat"])
                    for entry in pokemon.get("stats", [])
                    if entry.get("stat", {}).get("name") in STAT_NAMES
                },
                types=self._gen3_types(pokemon),
                abilities=tuple(
                    normalize_ability(slot["ability"]["name"])
                    for slot in pokemon.get("abilities", [])
                    if not slot.get("is_hidden")
                ),
            )
        self._species_cache[token] = species
        return species

    def move(self, token: str) -> Optional[Move]:
        key = normalize_move(token)
        if key in self._move_cache:
            return self._move_cache[key]
        payload = self._get_json(f"move/{self._slugify_token(key)}", allow_404=True)
        move = None
        if payload is not None and _generation_number(payload.get("generation")) <= GENERATION:
            values = {
                "power": payload.get("power"),
                "accuracy": payload.get("accuracy"),
                "pp": payload.get("pp"),
                "type": (payload.get("type") or {}).get("name"),
            }
            values.update(self._emerald_values(payload.get("past_values", [])))
            move = Move(
                token=key,
                power=int(values["power"] or 0),
                type=values["type"] or "normal",
                accuracy=int(values["accuracy"] or 100),
                pp=int(values["pp"] or 1),
            )
        self._move_cache[key] = move
        return move

    def learnset(self, species_id: str) -> List[LearnsetEntry]:
        entries = [
            LearnsetEntry(level=level, move=move)
            for move, method, level in self._emerald_moves(species_id)
            if method == "level-up"
        ]
        return sorted(entries, key=lambda entry: entry.level)

    def tm_moves(self, species_id: str, constraint: Optional[str] = None) -> Set[str]:
        # PokeAPI carries no progression data, so every constraint sees all TMs.
        return {move for move, method, _ in self._emerald_moves(species_id) if method == "machine"}

    def evolution_edges(self, species_id: str) -> List[EvolutionEdge]:
        token = normalize_species(species_id)
        if token not in self._evolution_cache:
            self._load_evolution_chain(token)
        return list(self._evolution_cache.get(token, []))

    def species_ids(self) -> List[str]:
        payload = self._get_json(f"pokemon-species?limit={NATIONAL_DEX_LIMIT}") or {}
        return [normalize_species(entry["name"]) for entry in payload.get("results", [])]

    def effectiveness(self, attack_type: str, defender_type: str) -> float:
        return type_effectiveness(attack_type, defender_type)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _gen3_pokemon(self, token: str) -> Optional[Dict[str, Any]]:
        species = self._get_json(f"pokemon-species/{self._slugify_token(token)}", allow_404=True)
        if species is None or _generation_number(species.get("generation")) > GENERATION:
            return None
        variety = next(
            (v["pokemon"]["name"] for v in species.get("varieties", []) if v.get("is_default")),
            species.get("name"),
        )
        return self._get_json(f"pokemon/{variety}", allow_404=True)

    @staticmethod
    def _gen3_types(pokemon: Dict[str, Any]) -> tuple[str, ...]:
        slots = pokemon.get("types", [])
        past = [
            entry for entry in pokemon.get("past_types", [])
            if _generation_number(entry.get("generation")) >= GENERATION
        ]
        if past:
            earliest = min(past, key=lambda entry: _generation_number(entry.get("generation")))
            slots = earliest.get("types", slots)
        ordered = sorted(slots, key=lambda slot: slot.get("slot", 0))
        return tuple(slot["type"]["name"] for slot in ordered)

    @staticmethod
    def _emerald_values(past_values: List[Dict[str, Any]]) -> Dict[str, Any]:
        emerald = VERSION_GROUP_ORDER.index(VERSION_GROUP)
        later = []
        for entry in past_values:
            group = (entry.get("version_group") or {}).get("name")
            if group in VERSION_GROUP_ORDER and VERSION_GROUP_ORDER.index(group) > emerald:
                later.append((VERSION_GROUP_ORDER.index(group), entry))
        if not later:
            return {}
        _, entry = min(later, key=lambda item: item[0])
        values: Dict[str, Any] = {
            key: entry[key] for key in ("power", "accuracy", "pp") if entry.get(key) is not None
        }
        if entry.get("type"):
            values["type"] = entry["type"]["name"]
        return values

    def _emerald_moves(self, species_id: str) -> List[tuple[str, str, int]]:
        pokemon = self._gen3_pokemon(normalize_species(species_id))
        if pokemon is None:
            return []
        found: List[tuple[str, str, int]] = []
        for slot in pokemon.get("moves", []):
            for detail in slot.get("version_group_details", []):
                if (detail.get("version_group") or {}).get("name") != VERSION_GROUP:
                    continue
                found.append(
                    (
                        normalize_move(slot["move"]["name"]),
                        (detail.get("move_learn_method") or {}).get("name", ""),
                        int(detail.get("level_learned_at") or 0),
                    )
                )
        return found

    def _load_evolution_chain(self, token: str) -> None:
        species = self._get_json(f"pokemon-species/{self._slugify_token(token)}", allow_404=True)
        url = ((species or {}).get("evolution_chain") or {}).get("url")
        if not url:
            self._evolution_cache[token] = []
            return
        chain = self._get_json(url.split("/api/v2/", 1)[-1]) or {}
        stack = [chain.get("chain") or {}]
        while stack:
            link = stack.pop()
            source = normalize_species((link.get("species") or {}).get("name", ""))
            edges: List[EvolutionEdge] = []
            for child in link.get("evolves_to", []):
                target_name = (child.get("species") or {}).get("name", "")
                edges.extend(_edges_for(target_name, child.get("evolution_details", [])))
                stack.append(child)
            self._evolution_cache[source] = edges
        self._evolution_cache.setdefault(token, [])

    def _get_json(self, endpoint: str, *, allow_404: bool = False) -> Optional[Dict[str, Any]]:
        url = self._build_url(endpoint)
        now = time.time()
        cached = self._cache.get(url)
        if cached and now - cached[0] < self.cache_ttl:
            return cached[1]

        try:
            response = self.session.get(
                url,
                timeout=self.timeout,
                headers={"User-Agent": self.user_agent},
            )
            if response.status_code == 404 and allow_404:
                return None
            response.raise_for_status()
        except requests.RequestException as exc:  # pragma: no cover - network
            raise PokeAPIClientError(str(exc)) from exc

        payload = response.json()
        self._cache[url] = (now, payload)
        return payload

    def _build_url(self, endpoint: str) -> str:
        endpoint = endpoint.lstrip("/")
        return f"{self.BASE_URL}/{endpoint}"

    @staticmethod
    def _slugify_token(token: str) -> str:
        slug = token.strip().lower().replace("_", "-")
        slug = re.sub(r"[^a-z0-9\-]", "", slug)
        return slug


def _edges_for(target_name: str, details: List[Dict[str, Any]]) -> List[EvolutionEdge]:
    target = normalize_species(target_name)
    edges: List[EvolutionEdge] = []
    for detail in details or [{}]:
        trigger = (detail.get("trigger") or {}).get("name", "")
        method = TRIGGER_METHODS.get(trigger, "OTHER")
        param: Optional[int | str] = None
        if method == "LEVEL_UP" and detail.get("min_level"):
            param = int(detail["min_level"])
        elif method == "LEVEL_UP" and detail.get("min_happiness"):
            method = "FRIENDSHIP"
        elif method == "USE_ITEM":
            param = (detail.get("item") or {}).get("name")
        edges.append(EvolutionEdge(method=method, param=param, target=target))
    return edges


def _generation_number(generation: Optional[Dict[str, Any]]) -> int:
    name = (generation or {}).get("name", "")
    numeral = name.rsplit("-", 1)[-1]
    return ROMAN.get(numeral, 0)
