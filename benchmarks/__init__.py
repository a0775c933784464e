"""
Benchmark suite for tagjson decoding and encoding performance.

Compares tagjson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Every generated document has an object root so all libraries accept it.
"""
