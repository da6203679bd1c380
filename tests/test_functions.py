"""Tests for traverse/functions.py: the function registry."""
import pytest

from common.exceptions import FunctionArgumentError, TraverseError, UnknownFunctionError
from common.types import GeoPoint
from traverse.context import TraverseContext
from traverse.functions import FunctionRegistry, adjust_degrees, default_registry


class TestRegistry:
    def test_defaults(self):
        registry = default_registry()
        for name in ("bearingToDegrees", "oppositeBearing", "adjustDegrees",
                     "feetToMeters", "clearDestinationPoints", "resetState"):
            assert name in registry
        assert len(registry) == 6

    def test_names_sorted(self):
        assert list(default_registry()) == sorted(default_registry().names())

    def test_registries_are_independent(self):
        a = default_registry()
        a.register("double", lambda x: 2 * float(x))
        assert "double" not in default_registry()

    def test_duplicate_rejected(self):
        registry = FunctionRegistry()
        registry.register("f", abs)
        with pytest.raises(ValueError):
            registry.register("f", abs)
        registry.register("f", round, replace=True)
        assert registry.call("f", (2.6,), TraverseContext()) == 3

    @pytest.mark.parametrize("name", ["", "   ", None])
    def test_empty_name_rejected(self, name):
        with pytest.raises(ValueError):
            FunctionRegistry().register(name, abs)

    def test_not_callable(self):
        with pytest.raises(TypeError):
            FunctionRegistry().register("f", 42)

    def test_context_function_needs_argument(self):
        with pytest.raises(TypeError):
            FunctionRegistry().register("f", lambda: None, needs_context=True)

    def test_unknown_name(self):
        with pytest.raises(UnknownFunctionError, match="missing"):
            FunctionRegistry().call("missing", (), TraverseContext())

    def test_wrong_argument_count(self):
        registry = default_registry()
        with pytest.raises(FunctionArgumentError, match="adjustDegrees"):
            registry.call("adjustDegrees", (10.0,), TraverseContext())
        with pytest.raises(TraverseError):
            registry.call("resetState", ("extra",), TraverseContext())

    def test_signature_recorded(self):
        entry = FunctionRegistry().register("f", lambda a, b=1: a)
        assert list(entry.signature.parameters) == ["a", "b"]
        entry.check_arguments((1,))
        entry.check_arguments((1, 2))
        with pytest.raises(FunctionArgumentError):
            entry.check_arguments((1, 2, 3))

    def test_context_is_passed(self):
        registry = FunctionRegistry()
        registry.register("here", lambda ctx: ctx.current_point, needs_context=True)
        context = TraverseContext()
        context.advance(GeoPoint(1.0, 2.0))
        assert registry.call("here", (), context) == GeoPoint(1.0, 2.0)


class TestDefaultFunctions:
    def setup_method(self):
        self.registry = default_registry()
        self.context = TraverseContext()

    def call(self, name, *args):
        return self.registry.call(name, args, self.context)

    def test_bearing_to_degrees(self):
        assert self.call("bearingToDegrees", "S45°0'0\"W") == pytest.approx(225.0)

    def test_opposite_bearing(self):
        assert self.call("oppositeBearing", "N10°0'0\"E") == pytest.approx(190.0)

    def test_feet_to_meters(self):
        assert self.call("feetToMeters", "100") == pytest.approx(30.48)

    @pytest.mark.parametrize("bearing,delta,expected", [
        (350, 20, 10.0),
        (10, -20, 350.0),
        ("225", "10", 235.0),
        (0, 360, 0.0),
    ])
    def test_adjust_degrees(self, bearing, delta, expected):
        assert adjust_degrees(bearing, delta) == pytest.approx(expected)

    def test_clear_destination_points(self):
        self.context.advance(GeoPoint(1.0, 1.0))
        self.context.advance(GeoPoint(2.0, 2.0))
        self.context.bind("x", 1.0)
        assert self.call("clearDestinationPoints") is None
        assert self.context.points == []
        assert self.context.current_point == GeoPoint(2.0, 2.0)
        assert self.context.previous_point == GeoPoint(1.0, 1.0)
        assert self.context.symbols == {"x": 1.0}

    def test_reset_state(self):
        self.context.advance(GeoPoint(1.0, 1.0))
        self.context.bind("x", 1.0)
        self.call("resetState")
        assert self.context.points == []
        assert self.context.symbols == {}
        assert self.context.current_point is None
        assert self.context.previous_point is None
