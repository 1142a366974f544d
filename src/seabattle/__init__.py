"""Two-combatant sea battle: board model, shot resolution and a search/hunt opponent."""

__version__ = "0.1.0"
