# src/circuitsim_core/components/base.py

import logging
import inspect
import numbers
import re
import tokenize
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Sequence, Tuple, Type

import pint

from ..formatting import format_value, parse_bool
from ..pin import Pin
from ..units import Quantity, to_magnitude
from ..topology.exceptions import ArityError, UnknownTerminalError
from .capabilities import ComponentCapability, TCapability, INetlistContributor, provides
from .exceptions import ParameterValueError, RangeError


logger = logging.getLogger(__name__)

# Names end up as bare netlist tokens, so they may not contain separators.
_NAME_PATTERN = re.compile(r'^[^\s"=:]+$')


class _Required:
    def __repr__(self) -> str:
        return "REQUIRED"


# Sentinel default for parameters the caller must always supply.
REQUIRED: Any = _Required()


@dataclass(frozen=True)
class ParameterSpec:
    """
    One row of a component type's parameter table.

    Attributes:
        key: The wire-format key (e.g. 'R', 'Cj0'). It is also the Python
             keyword accepted by the component constructor.
        default: The documented default, or `REQUIRED`.
        unit: SI unit the value is stored in. Quantities and unit strings are
              converted to it at construction.
        kind: Stored Python type: float, int, bool or str.
        choices: Allowed values for string parameters.
        bounds: Inclusive numeric interval; violations raise `RangeError`.
        suffix: Unit literal appended to the rendered value (e.g. 'dBm').
    """
    key: str
    default: Any = REQUIRED
    unit: Optional[str] = None
    kind: type = float
    choices: Optional[Tuple[str, ...]] = None
    bounds: Optional[Tuple[float, float]] = None
    suffix: str = ""

    @property
    def required(self) -> bool:
        return self.default is REQUIRED

    def coerce(self, value: Any, component_name: str) -> Any:
        """Converts a user-supplied value to the stored representation, validating it."""
        try:
            result = self._convert(value)
        except (pint.PintError, ValueError, TypeError, AttributeError, tokenize.TokenError) as e:
            raise ParameterValueError(
                component=component_name,
                details=f"Cannot interpret {value!r} as a {self.kind.__name__}"
                        f"{f' in {self.unit}' if self.unit else ''}: {e}",
                parameter=self.key,
                value=value,
            ) from e

        if self.choices is not None and result not in self.choices:
            raise ParameterValueError(
                component=component_name,
                details=f"Value {result!r} is not one of the allowed values {list(self.choices)}.",
                parameter=self.key,
                value=value,
            )
        if self.bounds is not None:
            lower, upper = self.bounds
            if not lower <= result <= upper:
                raise RangeError(
                    component=component_name,
                    details=f"Parameter '{self.key}' must lie within [{lower}, {upper}].",
                    value=result,
                    lower=lower,
                    upper=upper,
                )
        return result

    def _convert(self, value: Any) -> Any:
        if self.kind is bool:
            if isinstance(value, str):
                return parse_bool(value)
            if not isinstance(value, (bool, numbers.Integral)):
                raise TypeError(f"expected a boolean, got {type(value).__name__}")
            return bool(value)
        if self.kind is str:
            if not isinstance(value, str):
                raise TypeError(f"expected a string, got {type(value).__name__}")
            if '"' in value:
                raise ValueError("double quotes cannot be written to a netlist")
            return value
        if isinstance(value, bool):
            raise TypeError("booleans are not numeric parameter values")
        if self.kind is int:
            if isinstance(value, str):
                return int(value.strip())
            if isinstance(value, numbers.Integral):
                return int(value)
            if isinstance(value, numbers.Real) and float(value).is_integer():
                return int(value)
            raise TypeError(f"expected an integer, got {value!r}")

        if isinstance(value, Quantity):
            return to_magnitude(value, self.unit)
        if isinstance(value, str):
            text = value.strip()
            if self.suffix and text.endswith(self.suffix):
                text = text[:-len(self.suffix)].strip()
            try:
                return float(text)
            except ValueError:
                return to_magnitude(text, self.unit)
        if isinstance(value, numbers.Real):
            return float(value)
        raise TypeError(f"expected a number or quantity, got {type(value).__name__}")

    def render(self, value: Any) -> str:
        text = format_value(value)
        return f"{text} {self.suffix}" if self.suffix else text


class ComponentBase(ABC):
    """
    The abstract base class for all circuit components in CircuitSim Core.

    A component is built standalone from a name and parameter values, then
    handed to exactly one `Circuit` with `Circuit.add`. Each concrete type
    declares, at class level, its wire tag, its terminals and its parameter
    table; behavior that consumers need (netlist rendering, external file
    preparation) is exposed through the capability system rather than through
    type checks.
    """
    component_type_str: ClassVar[str] = "BaseComponent"
    wire_tag: ClassVar[str] = ""
    positional_parameters: ClassVar[Tuple[str, ...]] = ()
    # Extra key/value pairs always written to the netlist line.
    fixed_properties: ClassVar[Tuple[Tuple[str, Any], ...]] = ()
    # False for types whose wire tag is shared or absent (Short, Open, Ground).
    parseable: ClassVar[bool] = True
    variable_arity: ClassVar[bool] = False
    # True for components whose single terminal is the ground reference.
    ground_reference: ClassVar[bool] = False

    def __init__(self, name: str, *args: Any, **parameters: Any):
        """
        Args:
            name: Component name, unique within the circuit it is added to.
            *args: Values for `positional_parameters`, in order.
            **parameters: Parameter values keyed by wire key. Numbers are taken
                          as SI magnitudes; pint quantities and unit strings
                          ("1 kohm") are converted.

        Raises:
            ParameterValueError: For an invalid name, an unknown keyword, a
                                 missing required parameter or a value that
                                 cannot be converted.
            RangeError: For a value outside its declared bounds.
        """
        if not isinstance(name, str) or not _NAME_PATTERN.match(name):
            raise ParameterValueError(
                component=str(name),
                details="Component names must be non-empty and may not contain whitespace, quotes, '=' or ':'.",
                parameter="name",
                value=name,
            )
        self.name: str = name
        self._owner: Optional[Any] = None
        self._capability_cache: Dict[Type[ComponentCapability], ComponentCapability] = {}
        self.parameters: Dict[str, Any] = self._bind_parameters(args, parameters)
        logger.debug(f"Initialized {type(self).__name__} '{self.name}'")

    # --- Parameters ---

    @classmethod
    def parameter_table(cls) -> Dict[str, ParameterSpec]:
        return {spec.key: spec for spec in cls.declare_parameters()}

    def _bind_parameters(self, args: Sequence[Any], keywords: Dict[str, Any]) -> Dict[str, Any]:
        table = self.parameter_table()
        if len(args) > len(self.positional_parameters):
            raise ParameterValueError(
                component=self.name,
                details=f"{type(self).__name__} takes at most {len(self.positional_parameters)} positional "
                        f"parameter value(s) {list(self.positional_parameters)}, but {len(args)} were given.",
            )
        supplied = dict(keywords)
        for key, value in zip(self.positional_parameters, args):
            if key in supplied:
                raise ParameterValueError(
                    component=self.name,
                    details="Parameter given both positionally and as a keyword.",
                    parameter=key,
                )
            supplied[key] = value

        unknown = [key for key in supplied if key not in table]
        if unknown:
            raise ParameterValueError(
                component=self.name,
                details=f"Unknown parameter(s) {unknown} for {type(self).__name__}. "
                        f"Declared parameters: {list(table)}",
                parameter=unknown[0],
                value=supplied[unknown[0]],
            )

        bound: Dict[str, Any] = {}
        for key, spec in table.items():
            if key in supplied:
                bound[key] = spec.coerce(supplied[key], self.name)
            elif spec.required:
                raise ParameterValueError(
                    component=self.name,
                    details=f"Parameter '{key}' is required for {type(self).__name__} and has no default.",
                    parameter=key,
                )
            else:
                bound[key] = spec.default
        return bound

    def get(self, key: str) -> Any:
        try:
            return self.parameters[key]
        except KeyError:
            raise ParameterValueError(
                component=self.name,
                details=f"{type(self).__name__} has no parameter '{key}'.",
                parameter=key,
            ) from None

    def set_parameter(self, key: str, value: Any) -> None:
        spec = self.parameter_table().get(key)
        if spec is None:
            raise ParameterValueError(
                component=self.name,
                details=f"{type(self).__name__} has no parameter '{key}'.",
                parameter=key,
                value=value,
            )
        self.parameters[key] = spec.coerce(value, self.name)

    def non_default_parameters(self) -> Dict[str, Any]:
        """Parameters that are required or differ from their documented default, in table order."""
        table = self.parameter_table()
        return {
            key: value for key, value in self.parameters.items()
            if table[key].required or value != table[key].default
        }

    def netlist_parameters(self) -> List[Tuple[str, str]]:
        """Rendered (key, value) pairs for the netlist line: fixed properties, then non-defaults."""
        table = self.parameter_table()
        pairs = [(key, format_value(value)) for key, value in self.fixed_properties]
        pairs.extend(
            (key, table[key].render(value)) for key, value in self.non_default_parameters().items()
        )
        return pairs

    @classmethod
    def from_netlist_parameters(cls, name: str, parameters: Dict[str, str]) -> "ComponentBase":
        """Rebuilds an instance from the raw key/value strings of a netlist line."""
        return cls(name, **parameters)

    # --- Terminals ---

    def terminals(self) -> List[str]:
        """Terminal names in declared order."""
        return list(type(self).declare_terminals())

    def terminal_count(self) -> int:
        return len(self.terminals())

    def pin(self, terminal: str) -> Pin:
        if terminal not in self.terminals():
            raise UnknownTerminalError(
                component=self.name,
                details=f"{type(self).__name__} does not declare a terminal named '{terminal}'.",
                terminal=terminal,
                available=self.terminals(),
            )
        return Pin(self, terminal)

    def __getitem__(self, terminal: str) -> Pin:
        return self.pin(terminal)

    @property
    def pins(self) -> List[Pin]:
        return [Pin(self, terminal) for terminal in self.terminals()]

    @property
    def owner(self) -> Optional[Any]:
        """The circuit this component was added to, if any."""
        return self._owner

    def connect(self, circuit: Any, *targets: Pin) -> None:
        """
        Connects this component's terminals, in declared order, to `targets`.

        Raises:
            ArityError: If the number of targets differs from the terminal count.
        """
        terminals = self.terminals()
        if len(targets) != len(terminals):
            raise ArityError(
                component=self.name,
                details=f"{type(self).__name__} terminals are {terminals}.",
                expected=len(terminals),
                actual=len(targets),
            )
        for terminal, target in zip(terminals, targets):
            circuit.connect(Pin(self, terminal), target)

    # --- Capabilities ---

    @provides(INetlistContributor)
    class NetlistContributor:
        """Default rendering: `Tag:Name node_1 ... node_k key="value" ...`."""
        def to_netlist_line(self, component: "ComponentBase", node_names: Sequence[str]) -> Optional[str]:
            fields = [f"{component.wire_tag}:{component.name}", *node_names]
            fields.extend(f'{key}="{value}"' for key, value in component.netlist_parameters())
            return " ".join(fields)

    @classmethod
    def declare_capabilities(cls) -> Dict[Type[ComponentCapability], Type]:
        """
        Discovers the capabilities map by walking the class hierarchy (MRO) for
        nested classes decorated with `@provides`. Implementations on a subclass
        take precedence over those inherited from a base.
        """
        discovered_capabilities = {}
        for base_class in cls.__mro__:
            for _, member_obj in inspect.getmembers(base_class):
                if hasattr(member_obj, '_implements_capability'):
                    protocol = member_obj._implements_capability
                    if protocol not in discovered_capabilities:
                        discovered_capabilities[protocol] = member_obj
        return discovered_capabilities

    def get_capability(self, capability_type: Type[TCapability]) -> Optional[TCapability]:
        """
        Queries the component instance for a capability.

        Returns:
            A cached instance of the implementation if supported, otherwise `None`.
        """
        if capability_type in self._capability_cache:
            return self._capability_cache[capability_type]

        impl_class = type(self).declare_capabilities().get(capability_type)
        if impl_class:
            instance = impl_class()
            self._capability_cache[capability_type] = instance
            return instance
        return None

    # --- Type-level contract ---

    @classmethod
    @abstractmethod
    def declare_parameters(cls) -> List[ParameterSpec]:
        """Declare the ordered parameter table of this component type."""
        pass

    @classmethod
    @abstractmethod
    def declare_terminals(cls) -> List[str]:
        """
        Declare the terminal names in wire order.

        Variable-arity types return an empty list here and override
        `terminals()` on the instance.
        """
        pass

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.name}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name='{self.name}', parameters={self.non_default_parameters()})"


# --- Global Component Registries and Decorator ---

COMPONENT_REGISTRY: Dict[str, Type[ComponentBase]] = {}
WIRE_TAG_REGISTRY: Dict[str, Type[ComponentBase]] = {}


def register_component(type_str: str):
    """
    A class decorator that validates a component class's type-level contract
    and registers it under `type_str` (and, if parseable, under its wire tag).
    """
    def decorator(cls: Type[ComponentBase]):
        if not issubclass(cls, ComponentBase):
            raise TypeError(f"Class {cls.__name__} must inherit from ComponentBase.")

        terminals = cls.declare_terminals()
        if not isinstance(terminals, list) or not all(isinstance(t, str) and t for t in terminals):
            raise TypeError(
                f"Component class '{cls.__name__}' violates API contract. "
                f"declare_terminals() must return a list of non-empty strings, but returned: {terminals}."
            )
        if len(set(terminals)) != len(terminals):
            raise TypeError(
                f"Component class '{cls.__name__}' violates API contract. "
                f"declare_terminals() must return unique names, but found duplicates in: {terminals}."
            )
        if not terminals and not cls.variable_arity:
            raise TypeError(
                f"Component class '{cls.__name__}' declares no terminals and is not marked variable_arity."
            )

        specs = cls.declare_parameters()
        if not isinstance(specs, list) or not all(isinstance(s, ParameterSpec) for s in specs):
            raise TypeError(
                f"Component class '{cls.__name__}' violates API contract. "
                f"declare_parameters() must return a List[ParameterSpec]."
            )
        keys = [s.key for s in specs]
        if len(set(keys)) != len(keys):
            raise TypeError(f"Component class '{cls.__name__}' declares duplicate parameter keys: {keys}.")
        missing_positional = [k for k in cls.positional_parameters if k not in keys]
        if missing_positional:
            raise TypeError(
                f"Component class '{cls.__name__}' lists undeclared positional parameters: {missing_positional}."
            )

        if type_str in COMPONENT_REGISTRY:
            logger.warning(f"Component type '{type_str}' is being redefined/overwritten.")
        cls.component_type_str = type_str
        COMPONENT_REGISTRY[type_str] = cls

        if cls.parseable and cls.wire_tag:
            if cls.wire_tag in WIRE_TAG_REGISTRY:
                logger.warning(f"Wire tag '{cls.wire_tag}' is being redefined/overwritten by {cls.__name__}.")
            WIRE_TAG_REGISTRY[cls.wire_tag] = cls
        logger.info(f"Registered component type '{type_str}' (tag '{cls.wire_tag}') -> {cls.__name__}")
        return cls
    return decorator
