from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class Layer:
    """One stage of the network: spatial size H x W and channel count C."""

    name: str
    H: int
    W: int
    C: int
    color: Optional[int] = None  # explicit 0xRRGGBB, overrides the legend

    @property
    def dimension_text(self) -> str:
        return f"{self.H}x{self.W}x{self.C}"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Layer":
        color = data.get("color")
        return cls(
            name=str(data["name"]),
            H=int(data["H"]),
            W=int(data["W"]),
            C=int(data["C"]),
            color=None if color is None else int(color),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "H": self.H, "W": self.W, "C": self.C}
        if self.color is not None:
            data["color"] = self.color
        return data
