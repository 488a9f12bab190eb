"""
Inspector render pipeline.

Orchestrates one redraw of an inspected object:

    serialized fields  -> ungrouped, box groups, foldout groups
                          (or the host's default inspector for plain objects)
    non-serialized     -> same classification, composite fields unfolded
    native properties  -> read-only, in discovery order
    buttons            -> invoked only when clicked

The section order is fixed. Each member is drawn through a DrawStrategy
handler; composite fields go through the RecursiveStructWalker, which is the
only path that writes values back.
"""

from enum import Enum
from typing import Any, Iterable, List, Optional
import logging

from pyqt_attrinspect.attributes.annotation_types import ReadOnly
from pyqt_attrinspect.classification.attribute_index import AttributeIndex
from pyqt_attrinspect.classification.property_classifier import PropertyClassifier, RenderPlan
from pyqt_attrinspect.core.performance_monitor import timer
from pyqt_attrinspect.core.ui_utils import button_label, member_label
from pyqt_attrinspect.exceptions import InspectorError, MemberAccessError
from pyqt_attrinspect.host.host_protocols import InspectorHost
from pyqt_attrinspect.inspector_constants import CONSTANTS
from pyqt_attrinspect.pipeline.inspector_session import InspectorSession, takes_no_arguments
from pyqt_attrinspect.protocols.inspector_config import InspectorConfig, get_inspector_config
from pyqt_attrinspect.reflection.member_discovery import MemberDiscovery
from pyqt_attrinspect.reflection.member_types import Member, MemberKind
from pyqt_attrinspect.services.enum_dispatch_service import EnumDispatchService
from pyqt_attrinspect.services.flag_context_manager import FlagContextManager
from pyqt_attrinspect.state.foldout_state_store import FoldoutKey
from pyqt_attrinspect.state.settings_store import BoolSettingsStore, InMemoryBoolStore
from pyqt_attrinspect.walker.recursive_struct_walker import RecursiveStructWalker

logger = logging.getLogger(__name__)


class DrawStrategy(Enum):
    """How a single member is drawn."""
    FIELD = "field"
    READ_ONLY = "read_only"
    NATIVE_PROPERTY = "native_property"
    BUTTON = "button"


class InspectorRenderPipeline(EnumDispatchService[DrawStrategy]):
    """
    Renders inspected objects into an InspectorHost, one redraw per render() call.

    Args:
        host: Draw primitives the render is issued to
        settings_store: Persistent foldout flags, shared by every session of this
            pipeline (in-memory when None)
        config: Inspector configuration (global config when None)
        attribute_index: Annotation queries (default index when None)

    Examples:
        >>> pipeline = InspectorRenderPipeline(RecordingHost())
        >>> pipeline.on_session_start(enemy)
        >>> pipeline.render()
        >>> pipeline.on_session_end()
    """

    def __init__(self, host: InspectorHost, settings_store: Optional[BoolSettingsStore] = None,
                 config: Optional[InspectorConfig] = None,
                 attribute_index: Optional[AttributeIndex] = None):
        super().__init__()
        if not isinstance(host, InspectorHost):
            raise TypeError(f"host must be an InspectorHost, got {type(host).__name__}")

        self._host = host
        self._settings = settings_store if settings_store is not None else InMemoryBoolStore()
        self._config = config or get_inspector_config()
        self._index = attribute_index or AttributeIndex()
        self._classifier = PropertyClassifier(self._index)
        self._session: Optional[InspectorSession] = None
        self._walker: Optional[RecursiveStructWalker] = None

        self._register_handlers({
            DrawStrategy.FIELD: self._draw_editable,
            DrawStrategy.READ_ONLY: self._draw_read_only,
            DrawStrategy.NATIVE_PROPERTY: self._draw_read_only,
            DrawStrategy.BUTTON: self._draw_button,
        })

    @property
    def host(self) -> InspectorHost:
        return self._host

    @property
    def session(self) -> Optional[InspectorSession]:
        return self._session

    @property
    def classifier(self) -> PropertyClassifier:
        return self._classifier

    # ==================== LIFECYCLE ====================

    def on_session_start(self, target: Any) -> InspectorSession:
        """Open a session for ``target``, closing any previous one."""
        if self._session is not None:
            self.on_session_end()
        self._session = InspectorSession(target, self._settings, self._config)
        self._walker = RecursiveStructWalker(self._host, self._session.foldouts, self._config, self._index)
        return self._session

    def on_session_end(self) -> None:
        """Close the current session and release its caches."""
        if self._session is None:
            return
        self._session.close()
        self._session = None
        self._walker = None

    # ==================== RENDER ====================

    def render(self, target: Any = None) -> bool:
        """
        Run one redraw.

        Args:
            target: Object to draw; defaults to the current session's target.
                A different object than the session's restarts the session.

        Returns:
            True if a value was written back or a button was invoked

        Raises:
            InspectorError: If there is neither a target nor an open session
        """
        if target is None:
            if self._session is None:
                raise InspectorError("render() needs a target or an open session")
            target = self._session.target
        if self._session is None or not self._session.is_for(target):
            self.on_session_start(target)

        with timer("Inspector render", target_type=type(target).__name__, log_args=True):
            with FlagContextManager.render_context(self._host):
                self._host.begin_redraw()
                try:
                    return self._render_sections(target)
                finally:
                    self._host.end_redraw()

    def _render_sections(self, target: Any) -> bool:
        session = self._session
        changed = False

        serialized = MemberDiscovery.serialized_fields(target)
        if self._uses_default_inspector(serialized):
            logger.debug(f"{type(target).__name__}: no inspector annotations, drawing default inspector")
            changed |= self._host.draw_default_inspector(target, serialized)
        else:
            changed |= self._draw_plan(target, self._classifier.classify(serialized, target))

        if session.non_serialized_fields:
            self._section_header(CONSTANTS.NON_SERIALIZED_FIELDS_TITLE)
            plan = self._classifier.classify(session.non_serialized_fields, target)
            changed |= self._draw_plan(target, plan)

        if session.native_properties:
            self._section_header(CONSTANTS.NATIVE_PROPERTIES_TITLE)
            changed |= self._draw_members(self._visible(session.native_properties, target), target)

        if session.buttons:
            self._section_header(CONSTANTS.BUTTONS_TITLE)
            changed |= self._draw_members(self._visible(session.buttons, target), target)

        return changed

    def _uses_default_inspector(self, serialized: List[Member]) -> bool:
        return not any(self._index.has_recognized_attribute(m) for m in serialized)

    def _visible(self, members: Iterable[Member], owner: Any) -> List[Member]:
        return [m for m in members if self._index.is_visible(m, owner)]

    def _section_header(self, title: str) -> None:
        if self._config.draw_section_headers:
            self._host.draw_section_header(title)

    # ==================== PLAN ====================

    def _draw_plan(self, target: Any, plan: RenderPlan) -> bool:
        """Draw ungrouped members, then box groups, then foldout groups."""
        changed = self._draw_members(plan.ungrouped, target)

        for group in plan.box_groups:
            self._host.begin_box_group(group.key)
            try:
                changed |= self._draw_members(group.members, target)
            finally:
                self._host.end_box_group()

        foldouts = self._session.foldouts
        for group in plan.foldout_groups:
            key = FoldoutKey.for_group(target, group.key)
            expanded = self._host.draw_foldout_header(foldouts.get(key), group.key)
            foldouts.set(key, expanded)
            if not expanded:
                continue
            with self._host.indented():
                changed |= self._draw_members(group.members, target)

        return changed

    def _draw_members(self, members: Iterable[Member], owner: Any) -> bool:
        changed = False
        for member in members:
            changed |= bool(self.dispatch(member, owner))
        return changed

    # ==================== DISPATCH ====================

    def _determine_strategy(self, member: Member, owner: Any) -> DrawStrategy:
        if member.kind is MemberKind.METHOD:
            return DrawStrategy.BUTTON
        if member.kind is MemberKind.PROPERTY:
            return DrawStrategy.NATIVE_PROPERTY
        if member.has_attribute(ReadOnly):
            return DrawStrategy.READ_ONLY
        return DrawStrategy.FIELD

    def _draw_editable(self, member: Member, owner: Any) -> bool:
        return self._walker.draw_composite(owner, member, root=self._session.target).changed

    def _draw_read_only(self, member: Member, owner: Any) -> bool:
        try:
            value = member.read(owner)
        except MemberAccessError as e:
            logger.debug(f"Skipping {member.dotted_path}: {e}")
            return False
        self._host.draw_read_only_field(member, value, member_label(member))
        return False

    def _draw_button(self, member: Member, owner: Any) -> bool:
        try:
            method = member.read(owner)
        except MemberAccessError as e:
            logger.debug(f"Skipping button {member.dotted_path}: {e}")
            return False

        label = button_label(member)
        if not takes_no_arguments(method):
            self._host.draw_button(owner, member, label, enabled=False)
            self._host.draw_help_box(CONSTANTS.BUTTON_ARGS_WARNING.format(name=member.name))
            return False

        if not self._host.draw_button(owner, member, label, enabled=True):
            return False

        logger.debug(f"Invoking {type(owner).__name__}.{member.name}()")
        try:
            method()
        except Exception:
            logger.exception(f"Button '{member.name}' on {type(owner).__name__} raised")
        return True
