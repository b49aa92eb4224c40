"""
Benchmark suite for bourne parsing performance.

Runs ``bourne.loads`` beside the standard library ``json``, orjson and ujson
on generated documents that stress numbers, strings and nesting.
"""
