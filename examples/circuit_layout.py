"""Circuit Layout Example - A Line-Oriented Description Grammar.

Parses a chip layout description made of settings, counts and placed
shapes:

    ViaCost = 10
    Spacing = 8
    Boundary = (0,0) (7000,3000)
    #MetalLayers = 3
    RoutedShape M2 (694,482) (700,517)
    RoutedVia V1 (447,1411)
    Obstacle M3 (6985,0) (7000,168)

Demonstrates:
1. Building typed records with map()
2. Choosing between many record kinds with |
3. Unwrapping the Left/Right tags of a long alternation
4. Reporting a malformed line with source context

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import reduce
from typing import Any

from grammarengine import Grammar, Left, Literal, Right, Token, parse_to_end
from grammarengine.syntax import Failure


@dataclass(frozen=True, slots=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True, slots=True)
class Rect:
    top_left: Point
    bottom_right: Point


@dataclass(frozen=True, slots=True)
class Setting:
    """Numeric setting such as ViaCost, Spacing or #MetalLayers."""

    name: str
    value: int


@dataclass(frozen=True, slots=True)
class Boundary:
    rect: Rect


@dataclass(frozen=True, slots=True)
class Placement:
    """RoutedShape, RoutedVia or Obstacle on a layer."""

    kind: str
    layer: str
    shape: Rect | Point


@dataclass(frozen=True, slots=True)
class Layout:
    settings: dict[str, int]
    boundary: Rect | None
    placements: tuple[Placement, ...]


def _untag(value: Any) -> Any:
    """Strip the Left/Right tags added by a chain of | alternatives."""
    while isinstance(value, Left | Right):
        value = value.value
    return value


def choice(*grammars: Grammar[Any]) -> Grammar[Any]:
    """Ordered choice over any number of grammars, yielding the bare value."""
    return reduce(lambda left, right: left | right, grammars).map(_untag)


# =============================================================================
# GRAMMAR
# =============================================================================

integer = Token(r"\d+").map(int)
ws = -Token(r" *")
eol = -Token(r"\n|\Z")

point = (
    -Literal("(") * ws * integer * ws * -Literal(",") * ws * integer * ws * -Literal(")")
).map(lambda v: Point(*v))
rect = (point * ws * point).map(lambda v: Rect(*v))
layer = Token(r"[MV]\d+")


def setting(name: str) -> Grammar[Setting]:
    return (-Literal(name) * ws * -Literal("=") * ws * integer * ws * eol).map(
        lambda v: Setting(name, v[0])
    )


def placement(kind: str, shape: Grammar[Rect] | Grammar[Point]) -> Grammar[Placement]:
    return (-Literal(kind) * ws * layer * ws * shape * ws * eol).map(
        lambda v: Placement(kind, v[0], v[1])
    )


boundary = (-Literal("Boundary") * ws * -Literal("=") * ws * rect * ws * eol).map(
    lambda v: Boundary(v[0])
)

statement = choice(
    setting("ViaCost"),
    setting("Spacing"),
    boundary,
    setting("#MetalLayers"),
    setting("#RoutedShapes"),
    setting("#RoutedVias"),
    setting("#Obstacles"),
    placement("RoutedShape", rect),
    placement("RoutedVia", point),
    placement("Obstacle", rect),
)


def _build_layout(statements: tuple[Any, ...]) -> Layout:
    settings = {s.name: s.value for s in statements if isinstance(s, Setting)}
    boundaries = [s.rect for s in statements if isinstance(s, Boundary)]
    placements = tuple(s for s in statements if isinstance(s, Placement))
    return Layout(settings, boundaries[-1] if boundaries else None, placements)


layout = statement.many1().map(_build_layout)


# =============================================================================
# EXAMPLES
# =============================================================================

LAYOUT_SOURCE = (
    "ViaCost = 10\n"
    "Spacing = 8\n"
    "Boundary = (0,0) (7000,3000)\n"
    "#MetalLayers = 3\n"
    "#RoutedShapes = 3\n"
    "#RoutedVias = 1\n"
    "#Obstacles = 2\n"
    "RoutedShape M2 (694,482) (700,517)\n"
    "RoutedShape M3 (743,1704) (790,1746)\n"
    "RoutedShape M1 (8,523) (109,660)\n"
    "RoutedVia V1 (447,1411)\n"
    "Obstacle M3 (6985,0) (7000,168)\n"
    "Obstacle M1 (5157,1196) (5412,1295)"
)


def example_1_parse_layout() -> None:
    """Parse a complete layout description."""
    print("=" * 60)
    print("Example 1: Parse a Layout")
    print("=" * 60)

    result = parse_to_end(LAYOUT_SOURCE, layout).unwrap()

    print(f"Settings: {result.settings}")
    print(f"Boundary: {result.boundary}")
    for item in result.placements:
        print(f"  {item.kind:<12} {item.layer:<3} {item.shape}")

    declared = result.settings["#RoutedShapes"]
    actual = sum(1 for p in result.placements if p.kind == "RoutedShape")
    print(f"\nDeclared {declared} routed shapes, found {actual}")


def example_2_single_record() -> None:
    """Parse one record on its own."""
    print("\n" + "=" * 60)
    print("Example 2: Single Record")
    print("=" * 60)

    print(parse_to_end("RoutedShape M2 (694,482) (700,517)\n", statement).unwrap())


def example_3_malformed_input() -> None:
    """Show where a malformed layout stops parsing."""
    print("\n" + "=" * 60)
    print("Example 3: Malformed Input")
    print("=" * 60)

    source = "ViaCost = 10\nSpacing = 8\nBoundary = (0,0) (7000;3000)\n"
    result = parse_to_end(source, layout)

    if isinstance(result, Failure):
        print(result)
        print()
        print(result.format_with_context(context_lines=1))


if __name__ == "__main__":
    example_1_parse_layout()
    example_2_single_record()
    example_3_malformed_input()
