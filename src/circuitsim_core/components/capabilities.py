# src/circuitsim_core/components/capabilities.py
"""
Defines the capability architecture for CircuitSim Core components.

Consumers such as the netlist serializer never switch on concrete component
types. They ask a component for a capability (a `typing.Protocol`) and use
whatever implementation the component declares with `@provides`.

Key elements:
- ComponentCapability: A marker protocol for all capabilities.
- INetlistContributor: Renders a component as one line of netlist text.
- IExternalFileProvider: Writes data files a component refers to by name
  (file-driven sources) before the netlist is handed to a solver.
- @provides: Class decorator that registers a nested class as the
  implementation of a capability.
"""

import logging
from pathlib import Path
from typing import (
    List,
    Optional,
    Protocol,
    Sequence,
    Type,
    TypeVar,
    TYPE_CHECKING,
    runtime_checkable,
)

if TYPE_CHECKING:
    from .base import ComponentBase

logger = logging.getLogger(__name__)


@runtime_checkable
class ComponentCapability(Protocol):
    """Marker protocol for all component capabilities."""
    pass


TCapability = TypeVar("TCapability", bound=ComponentCapability)


@runtime_checkable
class INetlistContributor(ComponentCapability, Protocol):
    """
    Defines the capability of a component to describe itself as netlist text.
    """

    def to_netlist_line(
        self,
        component: "ComponentBase",
        node_names: Sequence[str],
    ) -> Optional[str]:
        """
        Renders the component.

        Args:
            component: The component instance being rendered.
            node_names: Rendered node names, one per terminal in declared order.

        Returns:
            A single line without trailing newline, or None if the component
            contributes nothing to the netlist (e.g. a ground reference).
        """
        ...


@runtime_checkable
class IExternalFileProvider(ComponentCapability, Protocol):
    """
    Defines the capability of a component to materialize the external data
    files its netlist line refers to.
    """

    def prepare_external_files(
        self,
        component: "ComponentBase",
        directory: Path,
    ) -> List[Path]:
        """Writes any required files into `directory` and returns their paths."""
        ...


def provides(capability_protocol: Type[ComponentCapability]):
    """
    A class decorator to register a class as an implementation for a capability.

    The decorator attaches `_implements_capability` to the decorated class;
    `ComponentBase.declare_capabilities` discovers it through the MRO.
    """

    def decorator(cls: Type) -> Type:
        if not issubclass(capability_protocol, ComponentCapability):
            raise TypeError(
                f"Decorator argument for @provides must be a ComponentCapability "
                f"Protocol, but got {capability_protocol}."
            )
        cls._implements_capability = capability_protocol
        logger.debug(
            f"Class '{cls.__name__}' registered as providing capability '{capability_protocol.__name__}'."
        )
        return cls

    return decorator
