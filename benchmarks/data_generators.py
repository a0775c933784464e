"""
Test data generators for JSON benchmarks.

Creates object-rooted documents of different shapes:
- small and large records
- long mixed arrays
- deep nesting
- string content with backslash pairs
- decimal-heavy numeric tables
"""

import json
import random
import string
from typing import Any

_SEED = 1729
_BACKSLASH_PROBABILITY = 0.3


def generate_test_data(data_type: str) -> str:
    """Generates a JSON document of the named shape."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "decimal_heavy": _generate_decimal_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    rng = random.Random(_SEED)
    return json.dumps(generators[data_type](rng))


def _generate_small_object(rng: random.Random) -> dict[str, Any]:
    """A record well under 1KB."""
    return {
        "id": rng.randint(10_000, 99_999),
        "name": _random_string(rng, 12),
        "email": f"{_random_string(rng, 8)}@example.com",
        "active": rng.choice([True, False]),
        "balance": round(rng.uniform(0, 10_000), 2),
        "tags": [_random_string(rng, 5) for _ in range(3)],
        "manager": None,
    }


def _generate_large_object(rng: random.Random) -> dict[str, Any]:
    """Hundreds of records under one object, well over 10KB."""
    return {
        "generated_by": "tagjson benchmarks",
        "records": [_generate_small_object(rng) for _ in range(200)],
        "index": {
            _random_string(rng, 6): rng.randint(0, 1_000) for _ in range(100)
        },
    }


def _generate_mixed_array(rng: random.Random) -> dict[str, Any]:
    """One long array mixing every value kind."""
    makers = [
        lambda: rng.randint(-1_000, 1_000),
        lambda: round(rng.uniform(-100.0, 100.0), 3),
        lambda: _random_string(rng, rng.randint(5, 30)),
        lambda: rng.choice([True, False]),
        lambda: None,
        lambda: {"value": _random_string(rng, 10), "score": rng.random()},
    ]
    return {"items": [rng.choice(makers)() for _ in range(1_000)]}


def _generate_nested_structure(rng: random.Random) -> dict[str, Any]:
    """A tree eight levels deep with a fan-out of three."""

    def node(depth: int) -> dict[str, Any]:
        if depth == 0:
            return {"leaf": _random_string(rng, 10)}
        return {
            "level": depth,
            "children": [node(depth - 1) for _ in range(3)],
        }

    return node(8)


def _generate_string_heavy(rng: random.Random) -> dict[str, Any]:
    """Long strings where many characters need escaping."""

    def text() -> str:
        chars = []
        for _ in range(80):
            if rng.random() < _BACKSLASH_PROBABILITY:
                chars.append(rng.choice(['"', "\\", "\n", "\t", "/"]))
            else:
                chars.append(rng.choice(string.ascii_letters + " "))
        return "".join(chars)

    return {f"key_{i}": text() for i in range(300)}


def _generate_decimal_heavy(rng: random.Random) -> dict[str, Any]:
    """Rows of fractional and exponent numbers."""
    return {
        "rows": [
            [rng.uniform(-1e6, 1e6), rng.uniform(0, 1) * 1e-12, rng.random()]
            for _ in range(500)
        ]
    }


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))
