"""
Test data generators for parsing benchmarks.

Every generator is seeded so repeated runs parse identical documents.
Documents stay within the 64-bit integer range and below the default
nesting limit so every library under test accepts them.
"""

import json
import random
import string
from typing import Any

_SEED = 20240115
_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]
_ESCAPE_PROBABILITY = 0.25


def generate_test_data(data_type: str) -> str:
    """Generates a JSON document of the named shape."""
    generators = {
        "config_object": _generate_config_object,
        "numeric_array": _generate_numeric_array,
        "record_list": _generate_record_list,
        "deep_nesting": _generate_deep_nesting,
        "escaped_strings": _generate_escaped_strings,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return generators[data_type](random.Random(_SEED))


DATA_TYPES = (
    "config_object",
    "numeric_array",
    "record_list",
    "deep_nesting",
    "escaped_strings",
)


def _generate_config_object(rng: random.Random) -> str:
    """Generates a small settings document."""
    data = {
        "service": "inventory",
        "port": rng.randint(1024, 65535),
        "debug": False,
        "timeout_seconds": 2.5,
        "replicas": [f"node-{i}" for i in range(3)],
        "limits": {"max_items": 9223372036854775807, "min_items": -1},
        "owner": None,
    }
    return json.dumps(data)


def _generate_numeric_array(rng: random.Random) -> str:
    """Generates integers, negative numbers and exponent floats."""
    numbers: list[Any] = []
    for _ in range(2000):
        if rng.random() < 0.5:
            numbers.append(rng.randint(-(2**62), 2**62))
        else:
            numbers.append(rng.uniform(-1e12, 1e12))
    return json.dumps(numbers)


def _generate_record_list(rng: random.Random) -> str:
    """Generates a list of flat objects with mixed member kinds."""
    records = [
        {
            "id": i,
            "sku": _random_string(rng, 12),
            "price": round(rng.uniform(0.5, 500.0), 2),
            "in_stock": rng.choice([True, False]),
            "tags": [_random_string(rng, 5) for _ in range(rng.randint(0, 4))],
            "discontinued": None,
        }
        for i in range(300)
    ]
    return json.dumps(records)


def _generate_deep_nesting(rng: random.Random) -> str:
    """Generates alternating arrays and objects 100 levels deep."""
    node: Any = _random_string(rng, 8)
    for level in range(100):
        if level % 2:
            node = {"level": level, "child": node}
        else:
            node = [level, node]
    return json.dumps(node)


def _generate_escaped_strings(rng: random.Random) -> str:
    """Generates strings dense with escapes and non-ASCII text."""

    def escaped() -> str:
        chars = []
        for _ in range(60):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_ESCAPES))
            else:
                chars.append(rng.choice(string.ascii_letters + " "))
        return "".join(chars)

    members = [f'"key_{i}": "{escaped()}"' for i in range(100)]
    members.append('"unicode": "caf\\u00e9 \\ud83d\\ude00 \\u4e2d\\u6587"')
    members.append('"raw": "naïve façade"')
    return "{" + ", ".join(members) + "}"


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))
