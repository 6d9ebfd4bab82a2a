# map_scout/collector/assembler.py
"""
Final merge of per-script collector slots into the artifact list.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

from map_scout.collector.models import Artifact


def assemble_artifacts(slots: Sequence[Optional[Artifact]]) -> Tuple[Artifact, ...]:
    """
    Drop empty slots (scripts without a map locator) and keep the rest in slot order.

    Pure and synchronous; the returned tuple is what consumers see.
    """
    return tuple(artifact for artifact in slots if artifact is not None)


__all__ = ["assemble_artifacts"]
