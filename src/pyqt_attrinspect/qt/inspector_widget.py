"""
Attribute inspector widget.

A scrollable QWidget showing one inspected object. It owns the pipeline and
the Qt host, and turns user input into debounced redraws.
"""

from typing import Any, Optional
import logging

from PyQt6.QtCore import pyqtSignal
from PyQt6.QtWidgets import QFrame, QScrollArea, QVBoxLayout, QWidget

from pyqt_attrinspect.core.debounce_timer import DebounceTimer
from pyqt_attrinspect.pipeline.render_pipeline import InspectorRenderPipeline
from pyqt_attrinspect.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_attrinspect.qt.qsettings_store import QSettingsBoolStore
from pyqt_attrinspect.qt.qt_host import QtInspectorHost
from pyqt_attrinspect.state.settings_store import BoolSettingsStore

logger = logging.getLogger(__name__)


class AttributeInspectorWidget(QWidget):
    """
    Inspector for a single target object.

    Args:
        target: Object to inspect, or None for an empty inspector
        config: Inspector configuration (global config when None)
        settings_store: Foldout persistence (QSettings from config when None)
        parent: Parent widget

    Signals:
        rendered: Emitted after every redraw
        target_changed: Emitted after a redraw that wrote a value back or ran a button
    """

    rendered = pyqtSignal()
    target_changed = pyqtSignal()

    def __init__(self, target: Any = None, config: Optional[InspectorConfig] = None,
                 settings_store: Optional[BoolSettingsStore] = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._config = config or get_inspector_config()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setFrameShape(QFrame.Shape.NoFrame)
        self._content = QWidget()
        self._scroll.setWidget(self._content)
        layout.addWidget(self._scroll)

        self._host = QtInspectorHost(self._content, on_input=self.schedule_redraw)
        if settings_store is None:
            settings_store = QSettingsBoolStore(self._config)
        self._pipeline = InspectorRenderPipeline(self._host, settings_store, self._config)
        self._redraw = DebounceTimer(self._config.redraw_debounce_ms, self.refresh)

        if target is not None:
            self.set_target(target)

    @property
    def host(self) -> QtInspectorHost:
        return self._host

    @property
    def pipeline(self) -> InspectorRenderPipeline:
        return self._pipeline

    @property
    def target(self) -> Any:
        session = self._pipeline.session
        return session.target if session is not None else None

    def set_target(self, target: Any) -> None:
        """Inspect ``target``; None empties the inspector."""
        self._redraw.cancel()
        self._pipeline.on_session_end()
        if target is None:
            self._host.clear()
            return
        self._pipeline.on_session_start(target)
        self._redraw.force()

    def schedule_redraw(self) -> None:
        self._redraw.trigger()

    def refresh(self) -> None:
        """Redraw now, applying pending user input."""
        if self._pipeline.session is None:
            return
        changed = self._pipeline.render()
        self.rendered.emit()
        if changed:
            # Values drawn before a button ran may be stale.
            self.schedule_redraw()
            self.target_changed.emit()

    def closeEvent(self, event):
        self._redraw.cancel()
        self._pipeline.on_session_end()
        logger.debug("Inspector closed")
        super().closeEvent(event)
