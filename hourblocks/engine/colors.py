"""Discipline color lookup for hourblocks."""

import logging
from typing import Callable, Dict, Optional

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DisciplineColors(BaseModel):
    """Palette used to render a discipline's rows and blocks."""

    bg: str
    text: str
    border: str
    bg_muted: str
    bg_light: str

    def for_record_mode(self) -> "DisciplineColors":
        """Record mode renders with the muted background."""
        return self.model_copy(update={"bg": self.bg_muted})


FALLBACK_COLORS = DisciplineColors(
    bg="hsl(0, 0%, 85%)",
    text="hsl(0, 0%, 20%)",
    border="hsl(0, 0%, 70%)",
    bg_muted="hsl(0, 0%, 35%)",
    bg_light="hsl(0, 0%, 97%)",
)


def palette_from_hue(hue: int) -> DisciplineColors:
    """Derive a full palette from a single hue (0-359)."""
    hue = int(hue) % 360
    return DisciplineColors(
        bg=f"hsl({hue}, 60%, 55%)",
        text=f"hsl({hue}, 60%, 18%)",
        border=f"hsl({hue}, 60%, 42%)",
        bg_muted=f"hsl({hue}, 30%, 32%)",
        bg_light=f"hsl({hue}, 50%, 94%)",
    )


class DisciplineColorCache:
    """Read-through cache of discipline palettes.

    Constructed once per session and passed by reference. ``loader`` returns
    the palette for a discipline id, or None if the discipline has none.
    """

    def __init__(self, loader: Callable[[str], Optional[DisciplineColors]]):
        self._loader = loader
        self._cache: Dict[str, DisciplineColors] = {}

    def get(self, discipline_id: Optional[str]) -> DisciplineColors:
        if not discipline_id:
            return FALLBACK_COLORS
        cached = self._cache.get(discipline_id)
        if cached is not None:
            return cached
        colors = self._loader(discipline_id)
        if colors is None:
            logger.debug(f"No colors for discipline {discipline_id}, using fallback")
            colors = FALLBACK_COLORS
        self._cache[discipline_id] = colors
        return colors

    def invalidate(self, discipline_id: Optional[str] = None) -> None:
        """Forget one discipline (or all of them) so the next read reloads."""
        if discipline_id is None:
            self._cache.clear()
        else:
            self._cache.pop(discipline_id, None)
