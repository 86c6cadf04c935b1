"""
Fonctions utilitaires pour la conversion de couleurs et la lecture des saisies.
"""
import math
import re
from typing import Optional, Tuple

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_HEX_COLOR = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")


def parse_leading_int(value) -> Optional[int]:
    """
    Lit l'entier en tête d'une saisie ("12", " 7px", "3.9" -> 3).

    Args:
        value: Texte saisi (ou nombre)

    Returns:
        L'entier lu, ou None si la saisie ne commence pas par un nombre
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return int(value) if math.isfinite(value) else None
    match = _INT_PREFIX.match(str(value))
    if match is None:
        return None
    return int(match.group(1))


def parse_leading_float(value) -> Optional[float]:
    """
    Lit le flottant en tête d'une saisie ("2.5", "1e1", ".5mm").

    Returns:
        Le flottant lu, ou None si la saisie ne commence pas par un nombre
    """
    if value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return None if math.isnan(number) else number
    match = _FLOAT_PREFIX.match(str(value))
    if match is None:
        return None
    return float(match.group(1))


def hex_to_int(color: str) -> int:
    """Convertit '#rrggbb' (ou '#rgb') en entier 0xRRGGBB."""
    match = _HEX_COLOR.match(str(color).strip())
    if match is None:
        raise ValueError(f"Invalid hex color: {color!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits, 16)


def int_to_hex(color: int) -> str:
    """Convertit un entier 0xRRGGBB en '#rrggbb'."""
    return f"#{int(color) & 0xFFFFFF:06x}"


def int_to_rgb(color: int) -> Tuple[int, int, int]:
    color = int(color) & 0xFFFFFF
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def int_to_rgba(color: int, alpha: float = 1.0) -> Tuple[float, float, float, float]:
    """Couleur 0xRRGGBB -> tuple RGBA flottant [0, 1] (format VisPy)."""
    r, g, b = int_to_rgb(color)
    return (r / 255.0, g / 255.0, b / 255.0, float(alpha))
