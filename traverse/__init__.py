"""
Traverse Module for the Traverse Reconstruction System.

This module evaluates survey records (points, lines, curves, function
calls, variable bindings) into an ordered chain of points.
"""

from traverse.arcs import arc_delta, resolve_arc
from traverse.context import TraverseContext
from traverse.functions import FunctionRegistry, default_registry
from traverse.interpreter import (
    TraverseConfig,
    TraverseInterpreter,
    TraverseResult,
    evaluate_traverse,
)

__all__ = [
    "arc_delta",
    "resolve_arc",
    "TraverseContext",
    "FunctionRegistry",
    "default_registry",
    "TraverseConfig",
    "TraverseInterpreter",
    "TraverseResult",
    "evaluate_traverse",
]
