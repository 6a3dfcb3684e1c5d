"""Effect registry with auto-discovery of the catalog modules."""

import importlib
import logging
import pkgutil
from typing import Dict, List, Optional

from app.effects.base import EffectSpec

logger = logging.getLogger(__name__)


class EffectRegistry:
    """Discovers and serves EffectSpecs.

    - Auto-discovers module-level EffectSpec instances in app/effects/catalog/
    - Effects are keyed by slug; a duplicate slug is a programming error
    """

    def __init__(self):
        self._effects: Dict[str, EffectSpec] = {}
        self._discovered = False

    def discover(self) -> None:
        """Scan app.effects.catalog for EffectSpec instances and register them."""
        if self._discovered:
            return
        import app.effects.catalog as catalog_pkg

        for _, modname, ispkg in pkgutil.iter_modules(
            catalog_pkg.__path__, prefix="app.effects.catalog."
        ):
            if ispkg:
                continue
            mod = importlib.import_module(modname)
            for obj in vars(mod).values():
                if isinstance(obj, EffectSpec):
                    self.register(obj)
        self._discovered = True
        logger.info("Registered %d effect(s): %s", len(self._effects), ", ".join(sorted(self._effects)))

    def register(self, spec: EffectSpec) -> None:
        existing = self._effects.get(spec.slug)
        if existing is not None and existing is not spec:
            raise ValueError(f"Effect '{spec.slug}' registered twice")
        self._effects[spec.slug] = spec

    def get(self, slug: str) -> Optional[EffectSpec]:
        return self._effects.get(slug)

    def list_effects(self) -> List[EffectSpec]:
        return [self._effects[slug] for slug in sorted(self._effects)]


# Global registry instance
registry = EffectRegistry()
