"""Global pytest configuration.

Registers `tests.sample_graphs` as a plugin so its graph fixtures are
available to every test module. Pytest imports the plugin itself, which keeps
assertion rewriting enabled for it.
"""

from __future__ import annotations

from importlib.util import find_spec

pytest_plugins: list[str] = []
if find_spec("tests.sample_graphs") is not None:
    pytest_plugins = ["tests.sample_graphs"]
