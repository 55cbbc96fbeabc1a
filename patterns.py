from __future__ import annotations

from typing import List, Sequence


def sequence_tags(palette: Sequence[str], count: int) -> List[str]:
    """Expand a cyclic palette into count tags (palette[i % len(palette)])."""
    if not palette or count <= 0:
        return []
    return [palette[i % len(palette)] for i in range(count)]
