"""
Enum-driven dispatch base for inspector services.

A service declares a closed strategy enum, registers one handler per enum
member, and implements _determine_strategy(). dispatch() selects the strategy
for its arguments and forwards the same arguments to the handler.

Users:
- PropertyClassifier (ClassificationPolicy): which bucket a member goes to
- InspectorRenderPipeline (DrawStrategy): how a member is drawn

Example:
    class Shape(Enum):
        LEAF = "leaf"
        NODE = "node"

    class Drawer(EnumDispatchService[Shape]):
        def __init__(self):
            super().__init__()
            self._register_handlers({
                Shape.LEAF: self._draw_leaf,
                Shape.NODE: self._draw_node,
            })

        def _determine_strategy(self, member, owner) -> Shape:
            return Shape.NODE if is_composite(member) else Shape.LEAF
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, Dict, Generic, List, TypeVar
import logging

logger = logging.getLogger(__name__)

StrategyEnum = TypeVar('StrategyEnum', bound=Enum)


class EnumDispatchService(ABC, Generic[StrategyEnum]):
    """Base for services dispatching on a closed strategy enum."""

    def __init__(self):
        self._handlers: Dict[StrategyEnum, Callable] = {}

    def _register_handlers(self, handlers: Dict[StrategyEnum, Callable]) -> None:
        """
        Install the handler table.

        Every member of the strategy enum must have a handler, so an enum
        member added later without a handler fails at construction time
        rather than on the first member that needs it.

        Raises:
            ValueError: If the table is empty or misses strategies
        """
        if not handlers:
            raise ValueError(f"{type(self).__name__}: handler table cannot be empty")

        enum_type = type(next(iter(handlers)))
        missing = [s for s in enum_type if s not in handlers]
        if missing:
            raise ValueError(f"{type(self).__name__}: no handler for {missing}")

        self._handlers = dict(handlers)
        logger.debug(f"{type(self).__name__}: {len(handlers)} {enum_type.__name__} handlers")

    @abstractmethod
    def _determine_strategy(self, *args, **kwargs) -> StrategyEnum:
        """Strategy for the given dispatch arguments."""
        pass

    def dispatch(self, *args, **kwargs) -> Any:
        """Run the handler of the strategy selected for these arguments."""
        strategy = self._determine_strategy(*args, **kwargs)
        try:
            handler = self._handlers[strategy]
        except KeyError:
            raise KeyError(
                f"{type(self).__name__}: {strategy} is not one of {list(self._handlers)}"
            ) from None
        return handler(*args, **kwargs)

    def get_registered_strategies(self) -> List[StrategyEnum]:
        return list(self._handlers)

    def has_strategy(self, strategy: StrategyEnum) -> bool:
        return strategy in self._handlers
