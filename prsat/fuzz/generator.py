"""Generic depth-biased generator over a set of node shapes."""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Shape(Generic[T]):
    """A node shape: how many children it takes and how to build it."""

    arity: int
    construct: Callable[[List[T]], T]


def make_generator(
    shapes: Dict[str, Shape[T]],
    include: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> Callable[[random.Random, int], T]:
    """Build ``gen(rng, depth)`` over ``shapes``.

    At depth 0 a random terminal (arity 0) shape is built. At depth d > 0 a
    random function shape is picked; one random child slot recurses at
    depth d - 1, so the requested depth is always reached, and every other
    slot recurses at a uniformly chosen depth in [0, d - 1].

    Args:
        shapes: shape name -> Shape.
        include: if given, only these shape names are used.
        exclude: shape names never used.

    Raises:
        ValueError: if no terminal shape survives ``include``/``exclude``.
    """
    allowed = set(shapes) if include is None else set(include) & set(shapes)
    if exclude is not None:
        allowed -= set(exclude)

    terminals = [name for name, shape in shapes.items() if shape.arity == 0 and name in allowed]
    functions = [name for name, shape in shapes.items() if shape.arity > 0 and name in allowed]

    if not terminals:
        raise ValueError(f"No accessible terminals in generator! shapes: {sorted(shapes)}")

    def gen(rng: random.Random, depth: int) -> T:
        if depth < 0:
            raise ValueError(f"Trying to generate a tree with depth {depth} < 0")
        if depth == 0 or not functions:
            return shapes[rng.choice(terminals)].construct([])

        shape = shapes[rng.choice(functions)]
        deepest_child = rng.randint(0, shape.arity - 1)
        children = []
        for child_index in range(shape.arity):
            child_depth = depth - 1 if child_index == deepest_child else rng.randint(0, depth - 1)
            children.append(gen(rng, child_depth))
        return shape.construct(children)

    return gen
