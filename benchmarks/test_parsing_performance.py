"""
Parsing performance benchmarks comparing bourne against other libraries.

Each generated document is parsed by the standard library ``json``, orjson,
ujson and bourne. bourne results are converted to native Python data and
checked against the standard library before timing.
"""

import json
from collections.abc import Callable
from typing import Any

import orjson
import pytest
import ujson  # type: ignore[import-untyped]

import bourne
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_test_data

PARSERS: list[tuple[str, Callable[[Any], Any]]] = [
    ("stdlib_json", json.loads),
    ("orjson", orjson.loads),
    ("ujson", ujson.loads),
    ("bourne", bourne.loads),
]


@pytest.mark.parametrize("data_type", DATA_TYPES)
def test_bourne_matches_stdlib(data_type: str) -> None:
    """Validates the benchmark documents parse to the same data."""
    test_data = generate_test_data(data_type)
    assert bourne.loads(test_data).to_native() == json.loads(test_data)


class TestParsingBenchmarks:
    """Benchmarks for parsing speed across libraries."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("parser,parse_func", PARSERS)
    def test_parsing(
        self,
        benchmark: Any,
        data_type: str,
        parser: str,
        parse_func: Callable[[Any], Any],
    ) -> None:
        benchmark.group = data_type
        test_data = generate_test_data(data_type)

        if parser == "orjson":
            # orjson parses bytes without an extra decode
            result = benchmark(parse_func, test_data.encode("utf-8"))
        else:
            result = benchmark(parse_func, test_data)

        assert result is not None

    @pytest.mark.benchmark(group="value_access")
    def test_tree_traversal(self, benchmark: Any) -> None:
        """Benchmarks non-raising reads over a parsed record list."""
        tree = bourne.loads(generate_test_data("record_list"))

        def total_price() -> float:
            return sum(
                record["price"].as_float() or 0.0 for record in tree
            )

        assert benchmark(total_price) > 0
