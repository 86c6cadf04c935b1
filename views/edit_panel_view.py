from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont
from PyQt6.QtWidgets import (
    QCheckBox,
    QColorDialog,
    QDialog,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QScrollArea,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from config.constants import PANEL_FONT_FAMILY, SLIDER_RANGES
from models.panel_snapshot import LayerRow, LegendRow, PanelSnapshot

# key -> (libellé, nombre de décimales affichées)
_SLIDERS = (
    ("label_distance", "Label distance", 1),
    ("gap", "Block gap", 1),
    ("label_font_size", "Font size", 0),
    ("block_opacity", "Block opacity", 2),
    ("height_multiplier", "Height multiplier", 1),
    ("width_multiplier", "Width multiplier", 1),
    ("channel_multiplier", "Channel multiplier", 1),
)


class EditPanelView(QDialog):
    """Floating panel to edit layers, legend types and visual settings."""

    update_requested = pyqtSignal(object)  # PanelSnapshot
    add_layer_requested = pyqtSignal()
    add_type_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Edit network")
        self.setModal(False)
        self.setMinimumSize(640, 560)
        panel_font = QFont(PANEL_FONT_FAMILY)
        panel_font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(panel_font)

        self._layer_rows: List[_LayerRow] = []
        self._legend_rows: List[_LegendRow] = []
        self._sliders: Dict[str, _SliderRow] = {}

        layout = QVBoxLayout(self)
        layout.setContentsMargins(12, 12, 12, 12)

        # --- Layers ---
        layers_box = QGroupBox("Layers (name, H, W, C, color)", self)
        layers_layout = QVBoxLayout(layers_box)
        self._layer_list, layer_scroll = self._make_scroll_list(layers_box)
        layers_layout.addWidget(layer_scroll, 1)
        self._add_layer_button = QPushButton("Add layer", layers_box)
        self._add_layer_button.clicked.connect(self.add_layer_requested)
        layers_layout.addWidget(self._add_layer_button, 0, alignment=Qt.AlignmentFlag.AlignLeft)
        layout.addWidget(layers_box, 3)

        # --- Legend ---
        legend_box = QGroupBox("Legend types", self)
        legend_layout = QVBoxLayout(legend_box)
        self._legend_list, legend_scroll = self._make_scroll_list(legend_box)
        legend_layout.addWidget(legend_scroll, 1)
        self._add_type_button = QPushButton("Add type", legend_box)
        self._add_type_button.clicked.connect(self.add_type_requested)
        legend_layout.addWidget(self._add_type_button, 0, alignment=Qt.AlignmentFlag.AlignLeft)
        layout.addWidget(legend_box, 2)

        # --- Settings ---
        settings_box = QGroupBox("Display", self)
        form = QFormLayout(settings_box)
        for key, title, decimals in _SLIDERS:
            minimum, maximum, step = SLIDER_RANGES[key]
            row = _SliderRow(minimum, maximum, step, decimals, parent=settings_box)
            self._sliders[key] = row
            form.addRow(QLabel(title), row)
        self._label_borders_checkbox = QCheckBox("Label borders", settings_box)
        form.addRow(self._label_borders_checkbox)
        layout.addWidget(settings_box, 0)

        # --- Actions ---
        buttons = QHBoxLayout()
        buttons.addStretch(1)
        self._close_button = QPushButton("Close", self)
        self._close_button.clicked.connect(self.hide)
        buttons.addWidget(self._close_button)
        self._update_button = QPushButton("Update", self)
        self._update_button.setDefault(True)
        self._update_button.clicked.connect(self._on_update_clicked)
        buttons.addWidget(self._update_button)
        layout.addLayout(buttons)

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    def set_layer_rows(self, rows: Iterable[Tuple[str, Any, Any, Any, str]]) -> None:
        """Replace the layer table with (name, H, W, C, '#rrggbb') rows."""
        self._clear_rows(self._layer_rows)
        for name, h, w, c, color in rows:
            self.add_layer_row(name, h, w, c, color)

    def add_layer_row(self, name: str, h: Any, w: Any, c: Any, color: str) -> None:
        row = _LayerRow(name, h, w, c, color, parent=self._layer_list.parentWidget())
        row.remove_requested.connect(lambda r=row: self._remove_row(self._layer_rows, r))
        self._layer_rows.append(row)
        self._layer_list.addWidget(row)

    def set_legend_rows(self, rows: Iterable[Tuple[str, str]]) -> None:
        """Replace the legend table with (type name, '#rrggbb') rows."""
        self._clear_rows(self._legend_rows)
        for type_name, color in rows:
            self.add_legend_row(type_name, color)

    def add_legend_row(self, type_name: str, color: str) -> None:
        row = _LegendRow(type_name, color, parent=self._legend_list.parentWidget())
        row.remove_requested.connect(lambda r=row: self._remove_row(self._legend_rows, r))
        self._legend_rows.append(row)
        self._legend_list.addWidget(row)

    def set_settings(self, settings: Mapping[str, Any]) -> None:
        """Seed sliders and the label-border checkbox from the current settings."""
        for key, row in self._sliders.items():
            if key in settings:
                row.set_value(settings[key])
        if "show_label_box" in settings:
            self._label_borders_checkbox.setChecked(bool(settings["show_label_box"]))

    def slider_text(self, key: str) -> str:
        return self._sliders[key].text()

    def snapshot(self) -> PanelSnapshot:
        """Collect the raw values currently typed in the panel."""
        settings: Dict[str, Any] = {key: row.value() for key, row in self._sliders.items()}
        settings["show_label_box"] = self._label_borders_checkbox.isChecked()
        return PanelSnapshot(
            layers=tuple(row.values() for row in self._layer_rows),
            legend=tuple(row.values() for row in self._legend_rows),
            settings=settings,
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _on_update_clicked(self) -> None:
        self.update_requested.emit(self.snapshot())

    def _make_scroll_list(self, parent: QWidget) -> Tuple[QVBoxLayout, QScrollArea]:
        scroll = QScrollArea(parent)
        scroll.setWidgetResizable(True)
        container = QWidget()
        list_layout = QVBoxLayout(container)
        list_layout.setAlignment(Qt.AlignmentFlag.AlignTop)
        list_layout.setContentsMargins(0, 0, 0, 0)
        scroll.setWidget(container)
        return list_layout, scroll

    @staticmethod
    def _clear_rows(rows: list) -> None:
        for row in rows:
            row.setParent(None)
        rows.clear()

    @staticmethod
    def _remove_row(rows: list, row: QWidget) -> None:
        if row in rows:
            rows.remove(row)
        row.setParent(None)
        row.deleteLater()


class _ColorButton(QPushButton):
    """Button showing a color; clicking opens a color dialog."""

    def __init__(self, color: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._color = QColor(color)
        if not self._color.isValid():
            self._color = QColor("#aaaaaa")
        self.setFixedWidth(44)
        self._apply_color_style()
        self.clicked.connect(self._on_pick_color)

    def color_name(self) -> str:
        return self._color.name()

    def _on_pick_color(self) -> None:
        picked = QColorDialog.getColor(self._color, self, "Color")
        if picked.isValid():
            self._color = picked
            self._apply_color_style()

    def _apply_color_style(self) -> None:
        self.setStyleSheet(f"background-color: {self._color.name()}; border: 1px solid #555;")
        self.setToolTip(self._color.name())


class _LayerRow(QWidget):
    remove_requested = pyqtSignal()

    def __init__(self, name: str, h: Any, w: Any, c: Any, color: str, parent: Optional[QWidget]) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._name_edit = QLineEdit(str(name), self)
        layout.addWidget(self._name_edit, 1)
        self._dim_edits = []
        for value in (h, w, c):
            edit = QLineEdit(str(value), self)
            edit.setFixedWidth(80)
            layout.addWidget(edit)
            self._dim_edits.append(edit)
        self._color_button = _ColorButton(color, self)
        layout.addWidget(self._color_button)
        remove = QPushButton("✕", self)
        remove.setFixedWidth(32)
        remove.clicked.connect(self.remove_requested)
        layout.addWidget(remove)

    def values(self) -> LayerRow:
        h, w, c = (edit.text() for edit in self._dim_edits)
        return LayerRow(
            name=self._name_edit.text(),
            H=h,
            W=w,
            C=c,
            color=self._color_button.color_name(),
        )


class _LegendRow(QWidget):
    remove_requested = pyqtSignal()

    def __init__(self, type_name: str, color: str, parent: Optional[QWidget]) -> None:
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._name_edit = QLineEdit(str(type_name), self)
        layout.addWidget(self._name_edit, 3)
        self._color_button = _ColorButton(color, self)
        layout.addWidget(self._color_button, 1)
        remove = QPushButton("✕", self)
        remove.setFixedWidth(32)
        remove.clicked.connect(self.remove_requested)
        layout.addWidget(remove)

    def values(self) -> LegendRow:
        return LegendRow(type_name=self._name_edit.text(), color=self._color_button.color_name())


class _SliderRow(QWidget):
    """Integer QSlider driving a float value, with its formatted readout."""

    def __init__(
        self, minimum: float, maximum: float, step: float, decimals: int, parent: Optional[QWidget]
    ) -> None:
        super().__init__(parent)
        self._minimum = float(minimum)
        self._step = float(step)
        self._decimals = int(decimals)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._slider = QSlider(Qt.Orientation.Horizontal, self)
        self._slider.setMinimum(0)
        self._slider.setMaximum(int(round((float(maximum) - self._minimum) / self._step)))
        self._slider.valueChanged.connect(self._refresh_label)
        layout.addWidget(self._slider, 1)
        self._label = QLabel(self)
        self._label.setFixedWidth(48)
        self._label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(self._label)
        self._refresh_label()

    def value(self) -> float:
        raw = self._minimum + self._slider.value() * self._step
        if self._decimals == 0:
            return int(round(raw))
        return round(raw, self._decimals + 1)

    def set_value(self, value: Any) -> None:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return
        self._slider.setValue(int(round((number - self._minimum) / self._step)))
        self._refresh_label()

    def text(self) -> str:
        return self._label.text()

    def _refresh_label(self, *_args) -> None:
        self._label.setText(f"{self.value():.{self._decimals}f}")
