from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from config.constants import DEFAULT_FONT_FAMILY
from utils.helpers import int_to_hex


class LegendView(QFrame):
    """Overlay listing each layer type with its color swatch."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("legend")
        self.setStyleSheet(
            "#legend { background-color: rgba(255, 255, 255, 220);"
            " border: 1px solid #cccccc; border-radius: 6px; }"
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)

        self._layout = QVBoxLayout(self)
        self._layout.setContentsMargins(10, 8, 10, 8)
        self._layout.setSpacing(4)

        self._title = QLabel("Legend", self)
        title_font = self._title.font()
        title_font.setBold(True)
        self._title.setFont(title_font)
        self._layout.addWidget(self._title)

        self._rows: List[QWidget] = []
        self._entries: List[Tuple[str, int]] = []
        self._font_family = DEFAULT_FONT_FAMILY
        self.set_font_family(DEFAULT_FONT_FAMILY)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def set_entries(self, entries: Iterable[Tuple[str, int]]) -> None:
        """Rebuild the rows from (type name, 0xRRGGBB) pairs, keeping the title."""
        for row in self._rows:
            row.setParent(None)
        self._rows = []
        self._entries = []
        seen = set()
        for type_name, color in entries:
            if type_name in seen:
                continue
            seen.add(type_name)
            self._entries.append((type_name, int(color)))
            row = self._make_row(type_name, int(color))
            self._rows.append(row)
            self._layout.addWidget(row)
        self.adjustSize()

    def entries(self) -> List[Tuple[str, int]]:
        return list(self._entries)

    def set_font_family(self, family: str) -> None:
        self._font_family = str(family)
        font = QFont(self._font_family)
        self.setFont(font)
        title_font = QFont(font)
        title_font.setBold(True)
        self._title.setFont(title_font)
        for row in self._rows:
            row.setFont(font)
        self.adjustSize()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _make_row(self, type_name: str, color: int) -> QWidget:
        row = QWidget(self)
        layout = QHBoxLayout(row)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        swatch = QLabel(row)
        swatch.setFixedSize(14, 14)
        swatch.setStyleSheet(f"background-color: {int_to_hex(color)}; border: 1px solid #555555;")
        layout.addWidget(swatch)

        text = QLabel(type_name, row)
        layout.addWidget(text, 1)
        row.setFont(QFont(self._font_family))
        return row
