"""
Function registry for function records.

Function records (`F,<memo>,<name>,<args...>`) call into a table of named
functions. The table is populated before evaluation and validated as entries
are registered; the interpreter only ever calls entries by name.

Default Functions
-----------------
- bearingToDegrees(bearing) -> azimuth in [0, 360)
- oppositeBearing(bearing) -> azimuth of the reverse direction
- adjustDegrees(bearing, delta) -> normalized bearing + delta
- feetToMeters(feet) -> meters
- clearDestinationPoints() -> empties the result sequence
- resetState() -> clears symbols, results and position
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, Optional, Sequence, Union

from common.exceptions import FunctionArgumentError, UnknownFunctionError
from common.units import feet_to_meters
from geospatial.bearings import opposite_bearing, parse_bearing
from geospatial.spherical import normalize_360
from traverse.context import TraverseContext


@dataclass(frozen=True)
class RegisteredFunction:
    """A registry entry.

    Attributes
    ----------
    name : str
        Name used by function records.
    func : callable
        The implementation. Takes ordered scalar/point arguments and
        returns a single scalar or point.
    needs_context : bool
        If True the running TraverseContext is passed as the first
        argument.
    signature : inspect.Signature, optional
        Signature record arguments are checked against; None for
        builtins that do not expose one.
    """
    name: str
    func: Callable[..., Any]
    needs_context: bool = False
    signature: Optional[inspect.Signature] = None

    def check_arguments(self, args: Sequence[Any]) -> None:
        """Raise FunctionArgumentError unless `args` fit the signature."""
        if self.signature is None:
            return
        bound = (None, *args) if self.needs_context else tuple(args)
        try:
            self.signature.bind(*bound)
        except TypeError as e:
            raise FunctionArgumentError(
                f"{self.name} cannot take {len(args)} argument(s): {e}"
            ) from None


class FunctionRegistry:
    """Name -> function table used by the interpreter."""

    def __init__(self):
        self._entries: Dict[str, RegisteredFunction] = {}

    def register(
        self,
        name: str,
        func: Callable[..., Any],
        *,
        needs_context: bool = False,
        replace: bool = False
    ) -> RegisteredFunction:
        """Add a function to the table.

        Parameters
        ----------
        name : str
            Name used in function records.
        func : callable
            Implementation.
        needs_context : bool
            Pass the running context as first argument.
        replace : bool
            Allow overwriting an existing entry.

        Returns
        -------
        RegisteredFunction
            The stored entry.

        Raises
        ------
        ValueError
            If the name is empty or already registered.
        TypeError
            If `func` is not callable, or cannot accept the context
            argument when `needs_context` is set.
        """
        if not isinstance(name, str) or not name.strip():
            raise ValueError(f"Function name must be a non-empty string, got {name!r}")
        if name in self._entries and not replace:
            raise ValueError(f"Function {name!r} is already registered")
        if not callable(func):
            raise TypeError(f"Function {name!r} is not callable: {func!r}")

        try:
            signature = inspect.signature(func)
        except ValueError:
            # Builtins without an introspectable signature
            signature = None

        if needs_context and signature is not None:
            try:
                signature.bind_partial(None)
            except TypeError as e:
                raise TypeError(
                    f"Function {name!r} must accept the traverse context as its first argument"
                ) from e

        entry = RegisteredFunction(
            name=name, func=func, needs_context=needs_context, signature=signature
        )
        self._entries[name] = entry
        return entry

    def call(self, name: str, args: Sequence[Any], context: TraverseContext) -> Any:
        """Invoke `name` with already-resolved arguments.

        Raises
        ------
        UnknownFunctionError
            If `name` is not registered.
        FunctionArgumentError
            If the arguments do not fit the function's signature.
        """
        entry = self._entries.get(name)
        if entry is None:
            raise UnknownFunctionError(name)
        entry.check_arguments(args)
        if entry.needs_context:
            return entry.func(context, *args)
        return entry.func(*args)

    def names(self) -> list:
        return sorted(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)


def adjust_degrees(bearing: Union[float, str], degrees: Union[float, str]) -> float:
    """Add a signed offset to a bearing and normalize to [0, 360)."""
    return normalize_360(float(bearing) + float(degrees))


def clear_destination_points(context: TraverseContext) -> None:
    """Empty the result sequence so the output starts at the current point."""
    context.clear_points()


def reset_state(context: TraverseContext) -> None:
    context.reset()


def default_registry() -> FunctionRegistry:
    """Build a fresh registry holding the standard traverse functions."""
    registry = FunctionRegistry()
    registry.register("bearingToDegrees", parse_bearing)
    registry.register("oppositeBearing", opposite_bearing)
    registry.register("adjustDegrees", adjust_degrees)
    registry.register("feetToMeters", feet_to_meters)
    registry.register("clearDestinationPoints", clear_destination_points, needs_context=True)
    registry.register("resetState", reset_state, needs_context=True)
    return registry
