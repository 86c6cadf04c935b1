import logging
from typing import Optional

from PyQt6.QtGui import QAction, QFont, QKeySequence
from PyQt6.QtWidgets import QComboBox, QFileDialog, QLabel, QMainWindow, QMessageBox, QToolBar

from config.constants import DEFAULT_FONT_FAMILY, FONT_FAMILIES
from controllers.network_controller import NetworkController
from models.color_map_model import ColorMapModel
from models.network_model import NetworkModel
from models.view_settings_model import ViewSettingsModel
from services.json_service import JsonService
from services.layout_service import LayoutService
from services.panel_service import PanelService
from services.snapshot_export import SnapshotExport
from views.edit_panel_view import EditPanelView
from views.network_view import NetworkView


class MasterController:
    """Coordinates models and the main window without embedding business logic."""

    def __init__(self, main_window: Optional[QMainWindow] = None, initial_path: Optional[str] = None) -> None:
        self.logger = logging.getLogger(__name__)
        self.main_window = main_window or QMainWindow()
        self.main_window.setWindowTitle("Layer Stack Viewer")
        self.main_window.resize(1280, 800)

        self.network_model = NetworkModel()
        self.color_map_model = ColorMapModel()
        self.view_settings_model = ViewSettingsModel()
        self.layout_service = LayoutService()
        self.panel_service = PanelService()
        self.json_service = JsonService()
        self.snapshot_export = SnapshotExport()

        self.network_view = NetworkView(self.main_window)
        self.main_window.setCentralWidget(self.network_view)
        self.edit_panel_view = EditPanelView(self.main_window)
        self._font_picker: Optional[QComboBox] = None

        self.network_controller = NetworkController(
            network_model=self.network_model,
            color_map_model=self.color_map_model,
            view_settings_model=self.view_settings_model,
            layout_service=self.layout_service,
            panel_service=self.panel_service,
            network_view=self.network_view,
            legend_view=self.network_view.legend_view,
            edit_panel_view=self.edit_panel_view,
            logger=self.logger,
        )

        self._build_menus()
        self._build_toolbar()
        # Police choisie avant la première construction: les labels naissent avec
        self._on_font_changed(DEFAULT_FONT_FAMILY)

        if initial_path:
            self.open_diagram(initial_path)
        else:
            self.network_controller.rebuild()

    def run(self) -> None:
        self.main_window.show()

    # ------------------------------------------------------------------ #
    # UI wiring
    # ------------------------------------------------------------------ #
    def _build_menus(self) -> None:
        """Create the File menu and wire its actions."""
        file_menu = self.main_window.menuBar().addMenu("&File")

        open_action = QAction("&Open diagram...", self.main_window)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open)
        file_menu.addAction(open_action)

        save_action = QAction("&Save diagram...", self.main_window)
        save_action.setShortcut(QKeySequence.StandardKey.Save)
        save_action.triggered.connect(self._on_save)
        file_menu.addAction(save_action)

        export_action = QAction("&Export PNG...", self.main_window)
        export_action.triggered.connect(self._on_export_png)
        file_menu.addAction(export_action)

        file_menu.addSeparator()
        quit_action = QAction("&Quit", self.main_window)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.main_window.close)
        file_menu.addAction(quit_action)

    def _build_toolbar(self) -> None:
        toolbar = QToolBar("Diagram", self.main_window)
        toolbar.setMovable(False)
        self.main_window.addToolBar(toolbar)

        edit_action = QAction("Edit", self.main_window)
        edit_action.triggered.connect(self.network_controller.open_edit_panel)
        toolbar.addAction(edit_action)
        toolbar.addSeparator()

        toolbar.addWidget(QLabel(" Font: ", toolbar))
        picker = QComboBox(toolbar)
        picker.addItems(FONT_FAMILIES)
        picker.setCurrentText(DEFAULT_FONT_FAMILY)
        picker.currentTextChanged.connect(self._on_font_changed)
        toolbar.addWidget(picker)
        self._font_picker = picker

    # ------------------------------------------------------------------ #
    # Handlers
    # ------------------------------------------------------------------ #
    def _on_font_changed(self, family: str) -> None:
        self.main_window.setFont(QFont(family))
        self.network_controller.set_font_family(family)

    def _on_open(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self.main_window, "Open diagram", "", "Diagram (*.json);;All files (*)"
        )
        if path:
            self.open_diagram(path)

    def open_diagram(self, path: str) -> bool:
        try:
            document = self.json_service.load(path)
        except (OSError, ValueError) as exc:
            # ValueError couvre JSONDecodeError, UnicodeDecodeError et DiagramFormatError
            self.logger.error("Chargement impossible (%s): %s", path, exc)
            QMessageBox.warning(self.main_window, "Open diagram", f"Cannot load {path}:\n{exc}")
            if self.network_controller.layout is None:
                self.network_controller.rebuild()
            return False
        self.network_controller.apply_diagram(document.layers, document.color_map, document.settings)
        if self._font_picker is not None:
            self._font_picker.blockSignals(True)
            self._font_picker.setCurrentText(self.view_settings_model.font_family)
            self._font_picker.blockSignals(False)
        self.main_window.setFont(QFont(self.view_settings_model.font_family))
        return True

    def _on_save(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self.main_window, "Save diagram", "network.json", "Diagram (*.json)"
        )
        if not path:
            return
        try:
            self.json_service.save(
                path,
                self.network_model.layers,
                self.color_map_model.as_dict(),
                self.view_settings_model,
            )
        except OSError as exc:
            self.logger.exception("Sauvegarde impossible: %s", path)
            QMessageBox.warning(self.main_window, "Save diagram", f"Cannot save {path}:\n{exc}")

    def _on_export_png(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self.main_window, "Export PNG", "network.png", "PNG image (*.png)"
        )
        if not path:
            return
        try:
            self.snapshot_export.save_png(path, self.network_view.snapshot())
        except (OSError, ValueError) as exc:
            self.logger.exception("Export PNG impossible: %s", path)
            QMessageBox.warning(self.main_window, "Export PNG", f"Cannot export {path}:\n{exc}")
