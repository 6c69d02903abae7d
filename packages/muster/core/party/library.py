"""Saved formations and remembered party configurations."""

from __future__ import annotations

from collections.abc import Iterable
import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from muster.core.config.loader import load_config, save_config
from muster.core.models.geometry import GridOffset

logger = logging.getLogger(__name__)


class SavedFormation(BaseModel):
    """A named per-agent offset table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    description: str = ""
    offsets: dict[str, GridOffset] = Field(default_factory=dict)

    def offset_for(self, agent_id: str, fallback: GridOffset) -> GridOffset:
        return self.offsets.get(agent_id, fallback)


class SavedPartyConfig(BaseModel):
    """Name and image remembered for one exact set of members."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    member_ids: tuple[str, ...]
    name: str
    image: str | None = None


def party_key(member_ids: Iterable[str]) -> str:
    """Order-independent key for a set of member ids."""
    return ",".join(sorted(set(member_ids)))


class PartyLibrary(BaseModel):
    """User-managed library of saved formations and party configurations.

    Example:
        >>> library = PartyLibrary()
        >>> library.save_formation("gate", {"a": GridOffset(dx=0, dy=0), "b": GridOffset(dx=2, dy=0)})
        >>> library.get_formation("gate").offsets["b"].dx
        2
    """

    model_config = ConfigDict(extra="ignore")

    formations: dict[str, SavedFormation] = Field(default_factory=dict)
    parties: dict[str, SavedPartyConfig] = Field(default_factory=dict)

    # Formations

    def save_formation(
        self,
        name: str,
        offsets: dict[str, GridOffset],
        description: str = "",
    ) -> SavedFormation:
        formation = SavedFormation(name=name, description=description, offsets=dict(offsets))
        self.formations[name] = formation
        logger.debug("Saved formation %s (%d offsets)", name, len(offsets))
        return formation

    def get_formation(self, name: str) -> SavedFormation | None:
        return self.formations.get(name)

    def delete_formation(self, name: str) -> bool:
        return self.formations.pop(name, None) is not None

    def list_formations(self) -> list[str]:
        return sorted(self.formations)

    # Party configs

    def remember_party(
        self,
        member_ids: Iterable[str],
        name: str,
        image: str | None = None,
    ) -> SavedPartyConfig:
        ids = tuple(sorted(set(member_ids)))
        config = SavedPartyConfig(member_ids=ids, name=name, image=image)
        self.parties[party_key(ids)] = config
        return config

    def party_config_for(self, member_ids: Iterable[str]) -> SavedPartyConfig | None:
        return self.parties.get(party_key(member_ids))

    def forget_party(self, member_ids: Iterable[str]) -> bool:
        return self.parties.pop(party_key(member_ids), None) is not None

    # Persistence

    @classmethod
    def load(cls, path: str | Path) -> PartyLibrary:
        """Load a library from JSON or YAML; a missing file yields an empty library."""
        path = Path(path)
        if not path.exists():
            logger.debug("No party library at %s, starting empty", path)
            return cls()
        return cls.model_validate(load_config(path))

    def save(self, path: str | Path) -> None:
        save_config(self.model_dump(mode="json"), path)
