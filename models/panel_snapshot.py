from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class LayerRow:
    """Raw values of one layer row as typed in the edit panel."""

    name: str
    H: Any
    W: Any
    C: Any
    color: str  # '#rrggbb'


@dataclass(frozen=True)
class LegendRow:
    type_name: str
    color: str  # '#rrggbb'


@dataclass(frozen=True)
class PanelSnapshot:
    """Everything the edit panel holds when the user presses "Update"."""

    layers: Tuple[LayerRow, ...] = ()
    legend: Tuple[LegendRow, ...] = ()
    settings: Dict[str, Any] = field(default_factory=dict)  # raw slider/checkbox values
