from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import QSignalBlocker, Qt, QUrl
from PySide6.QtGui import QDesktopServices, QIcon
from PySide6.QtWidgets import (
    QComboBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from sample_finder.config_service import ConfigService, apply_config
from sample_finder.library import get_packs_metadata
from sample_finder.models import Sample, SampleLibrary
from sample_finder.persistence import LibraryFormatError, load_library_json
from sample_finder.search import search
from sample_finder.ui.state import SAMPLE_TYPE_FILTERS, SearchState

ALL_PACKS_LABEL = "All packs"
TYPE_LABELS = {"any": "Any type", "loop": "Loops", "oneshot": "One-shots"}


def _spin(minimum: int, maximum: int, special: str) -> QSpinBox:
    # The minimum value renders as ``special`` and means "unset".
    box = QSpinBox()
    box.setRange(minimum, maximum)
    box.setSpecialValueText(special)
    return box


class SampleFinderWindow(QMainWindow):
    """Single-window search over a saved sample library."""

    def __init__(self, app_icon: Optional[QIcon] = None) -> None:
        super().__init__()
        self.setWindowTitle("Sample Finder")
        self.resize(900, 640)
        if app_icon is not None and not app_icon.isNull():
            self.setWindowIcon(app_icon)

        self.app_dir = Path(__file__).resolve().parents[2]
        self.config_service = ConfigService(app_dir=self.app_dir)
        self.config: dict[str, Any] = self.config_service.load_config()
        apply_config(self.config)
        self.state = SearchState.from_config(self.config)
        self.library: Optional[SampleLibrary] = None

        self._build_ui()
        self._wire_signals()
        self._apply_state_to_controls()
        if self.state.library_path:
            self.open_library(self.state.library_path, quiet=True)

    # ------------------------------------------------------------------
    # UI shell
    def _build_ui(self) -> None:
        root = QWidget()
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(14, 14, 14, 14)
        layout.setSpacing(10)

        top = QHBoxLayout()
        self.library_label = QLabel("No library loaded")
        self.open_btn = QPushButton("Open Library…")
        top.addWidget(self.library_label, 1)
        top.addWidget(self.open_btn)
        layout.addLayout(top)

        self.query_edit = QLineEdit()
        self.query_edit.setPlaceholderText("kick punchy -808")
        layout.addWidget(self.query_edit)

        form = QFormLayout()
        self.type_combo = QComboBox()
        for key in SAMPLE_TYPE_FILTERS:
            self.type_combo.addItem(TYPE_LABELS[key], key)
        self.tempo_spin = _spin(0, 999, "0")
        self.min_tempo_spin = _spin(-1, 999, "off")
        self.max_tempo_spin = _spin(-1, 999, "off")
        self.pack_combo = QComboBox()
        self.max_results_spin = _spin(-1, 10000, "default")
        form.addRow("Type", self.type_combo)
        form.addRow("Loop tempo", self.tempo_spin)
        form.addRow("Min tempo", self.min_tempo_spin)
        form.addRow("Max tempo", self.max_tempo_spin)
        form.addRow("Pack", self.pack_combo)
        form.addRow("Max results", self.max_results_spin)
        layout.addLayout(form)

        self.results_list = QListWidget()
        layout.addWidget(self.results_list, 1)

        self.statusBar().showMessage("Ready")

    def _wire_signals(self) -> None:
        self.open_btn.clicked.connect(self._browse_library)
        self.query_edit.textChanged.connect(self._on_controls_changed)
        self.type_combo.currentIndexChanged.connect(self._on_controls_changed)
        self.tempo_spin.valueChanged.connect(self._on_controls_changed)
        self.min_tempo_spin.valueChanged.connect(self._on_controls_changed)
        self.max_tempo_spin.valueChanged.connect(self._on_controls_changed)
        self.pack_combo.currentIndexChanged.connect(self._on_controls_changed)
        self.max_results_spin.valueChanged.connect(self._on_controls_changed)
        self.results_list.itemDoubleClicked.connect(self._open_sample)

    def _apply_state_to_controls(self) -> None:
        blockers = [
            QSignalBlocker(w)
            for w in (
                self.query_edit,
                self.type_combo,
                self.tempo_spin,
                self.min_tempo_spin,
                self.max_tempo_spin,
                self.max_results_spin,
            )
        ]
        self.query_edit.setText(self.state.query)
        self.type_combo.setCurrentIndex(max(0, self.type_combo.findData(self.state.sample_type)))
        self.tempo_spin.setValue(self.state.filter_tempo)
        self.min_tempo_spin.setValue(-1 if self.state.min_tempo is None else self.state.min_tempo)
        self.max_tempo_spin.setValue(-1 if self.state.max_tempo is None else self.state.max_tempo)
        self.max_results_spin.setValue(-1 if self.state.max_results is None else self.state.max_results)
        del blockers

    def _read_controls_into_state(self) -> None:
        self.state.query = self.query_edit.text()
        self.state.sample_type = str(self.type_combo.currentData() or "any")
        self.state.filter_tempo = self.tempo_spin.value()
        self.state.min_tempo = None if self.min_tempo_spin.value() < 0 else self.min_tempo_spin.value()
        self.state.max_tempo = None if self.max_tempo_spin.value() < 0 else self.max_tempo_spin.value()
        self.state.pack_id = str(self.pack_combo.currentData() or "")
        self.state.max_results = None if self.max_results_spin.value() < 0 else self.max_results_spin.value()

    # ------------------------------------------------------------------
    # Library loading
    def _browse_library(self) -> None:
        start_dir = str(Path(self.state.library_path).parent) if self.state.library_path else ""
        path, _ = QFileDialog.getOpenFileName(self, "Open Sample Library", start_dir, "Library (*.json)")
        if path:
            self.open_library(path)

    def open_library(self, path: str, quiet: bool = False) -> None:
        try:
            library = load_library_json(path)
        except (FileNotFoundError, LibraryFormatError) as exc:
            self.statusBar().showMessage(str(exc))
            if not quiet:
                QMessageBox.warning(self, "Sample Finder", str(exc))
            return
        self.library = library
        self.state.library_path = str(path)
        self.library_label.setText(f"{library.name} – {Path(path).name}")
        self._refresh_pack_combo()
        self._save_state()
        self.run_search()

    def _refresh_pack_combo(self) -> None:
        blocker = QSignalBlocker(self.pack_combo)
        self.pack_combo.clear()
        self.pack_combo.addItem(ALL_PACKS_LABEL, "")
        if self.library is not None:
            for info in get_packs_metadata(self.library):
                label = f"{info.name} ({info.num_samples or 0})"
                self.pack_combo.addItem(label, info.name)
        index = self.pack_combo.findData(self.state.pack_id)
        self.pack_combo.setCurrentIndex(index if index >= 0 else 0)
        del blocker

    # ------------------------------------------------------------------
    # Search
    def _on_controls_changed(self, *_args: Any) -> None:
        self._read_controls_into_state()
        self._save_state()
        self.run_search()

    def run_search(self) -> None:
        self.results_list.clear()
        if self.library is None:
            return
        result = search(
            self.library,
            self.state.to_params(),
            tempo_gate=self.config.get("tempo_gate"),
            default_max_results=self.config.get("default_max_results"),
        )
        for sample in result.samples:
            self.results_list.addItem(self._result_item(sample))
        self.statusBar().showMessage(f"{len(result)} result(s)")

    def _result_item(self, sample: Sample) -> QListWidgetItem:
        item = QListWidgetItem(f"{sample.name}    [{sample.sampletype}]")
        item.setToolTip(sample.path)
        item.setData(Qt.ItemDataRole.UserRole, sample.path)
        return item

    def _open_sample(self, item: QListWidgetItem) -> None:
        path = item.data(Qt.ItemDataRole.UserRole)
        if path:
            QDesktopServices.openUrl(QUrl.fromLocalFile(str(path)))

    def _save_state(self) -> None:
        try:
            self.config = self.config_service.update_config(self.state.to_config_updates())
        except (OSError, ValueError) as exc:
            self.statusBar().showMessage(f"Couldn't save settings: {exc}")
