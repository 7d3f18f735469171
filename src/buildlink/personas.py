"""Persona catalog, loaded from the bundled personas.json and validated on load."""

import json
import logging
from importlib import resources
from typing import Dict, List, Literal

from pydantic import BaseModel, Field

from .types import InvalidValue


class Persona(BaseModel):
    """A named bundle of recommended choices."""

    id: str = Field(min_length=1)
    display_name: str
    subtitle: str
    rarity: str
    risk: Literal["low", "medium", "high"]
    highlights: List[str] = Field(default_factory=list)


class PersonaMeta(BaseModel):
    version: str
    source: str
    philosophy: str


class PersonaDocument(BaseModel):
    meta: PersonaMeta
    personas: List[Persona]


class PersonaCatalog:
    """Read-only lookup of personas by id."""

    def __init__(self, personas):
        self._personas: Dict[str, Persona] = {}
        for persona in personas:
            if persona.id in self._personas:
                raise ValueError(f"Duplicate persona id: {persona.id}")
            self._personas[persona.id] = persona

    @classmethod
    def from_json(cls, text: str) -> "PersonaCatalog":
        """Validate a personas document and build a catalog from it."""
        document = PersonaDocument.model_validate(json.loads(text))
        logging.debug("Loaded %s personas (doc version %s)",
                      len(document.personas), document.meta.version)
        return cls(document.personas)

    @classmethod
    def bundled(cls) -> "PersonaCatalog":
        text = resources.files("buildlink").joinpath("data/personas.json").read_text(encoding="utf-8")
        return cls.from_json(text)

    def parse(self, raw):
        """Return ``raw`` if it names a known persona, else an ``InvalidValue``."""
        if isinstance(raw, str) and raw in self._personas:
            return raw
        return InvalidValue("Persona", raw)

    def get(self, persona_id):
        return self._personas.get(persona_id)

    def ids(self):
        return tuple(self._personas)
