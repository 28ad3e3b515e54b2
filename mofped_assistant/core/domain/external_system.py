"""Static facts about government systems the ministry points citizens to.

These are configuration data (see ``data/external_systems.json``), loaded once
at startup and injected into the response synthesizer. They are the only facts
a response may state without having retrieved them.
"""

import re

from pydantic import BaseModel, Field


class SystemContact(BaseModel):
    """Support channel for an external system."""

    title: str
    phone: str | None = None
    email: str | None = None
    note: str = ""


class SystemOption(BaseModel):
    """Follow-up option offered on a system's information card."""

    label: str
    action: str
    payload: str


class ExternalSystem(BaseModel):
    """A known external system (IFMS, EGP, URA...)."""

    key: str
    name: str
    aliases: list[str] = Field(..., min_length=1)
    portal_url: str
    description: str
    info_points: list[str] = Field(default_factory=list)
    contact: SystemContact | None = None
    options: list[SystemOption] = Field(default_factory=list, max_length=3)

    def mentioned_in(self, text: str) -> bool:
        """True if any alias appears in ``text`` as a whole word or phrase."""
        lowered = text.lower()
        return any(
            re.search(rf"(?<![a-z0-9]){re.escape(alias.lower())}(?![a-z0-9])", lowered)
            for alias in self.aliases
        )


class ExternalSystemCatalog(BaseModel):
    """Versioned table of external systems."""

    version: str
    systems: list[ExternalSystem]

    def find_mentioned(self, text: str) -> ExternalSystem | None:
        """Return the first system (in table order) mentioned in ``text``."""
        for system in self.systems:
            if system.mentioned_in(text):
                return system
        return None
