"""Formation registry.

Provides registration, lookup and listing of formation presets by key.
"""

from __future__ import annotations

from muster.core.errors import FormationNotFoundError
from muster.core.formations.protocols import FormationPreset


class FormationRegistry:
    """Registry of formation presets keyed by ``handler_id``.

    Example:
        >>> registry = FormationRegistry()
        >>> registry.register(WedgeFormation())
        >>> registry.get("wedge").transform(0, 0, index=1, total=3)
        GridOffset(dx=0, dy=0)
    """

    def __init__(self) -> None:
        self._presets: dict[str, FormationPreset] = {}

    def register(self, preset: FormationPreset) -> None:
        """Register a preset, replacing any preset with the same key.

        Args:
            preset: Preset to register (must have handler_id).
        """
        self._presets[preset.handler_id] = preset

    def get(self, formation_key: str) -> FormationPreset:
        """Get a preset by key.

        Args:
            formation_key: The key to look up.

        Returns:
            The registered preset.

        Raises:
            FormationNotFoundError: If the key is not registered.
        """
        if formation_key in self._presets:
            return self._presets[formation_key]

        raise FormationNotFoundError(formation_key, available=self.list_formations())

    def has(self, formation_key: str) -> bool:
        """Check if a preset is registered."""
        return formation_key in self._presets

    def list_formations(self) -> list[str]:
        """List registered formation keys in registration order."""
        return list(self._presets.keys())

    def describe(self) -> list[tuple[str, str, str]]:
        """Return (key, name, description) for every registered preset."""
        return [(key, p.name, p.description) for key, p in self._presets.items()]
