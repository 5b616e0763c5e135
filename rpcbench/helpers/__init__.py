"""Helper functions shared across the benchmark.

Submodules are imported directly (``from rpcbench.helpers.env import ...``)
so that config modules can depend on them without import cycles.
"""
