"""Fixtures shared by the example apps.

``example_app`` imports the ``app.py`` beside the requesting test module
under a per-directory module name. The import runs again for every test,
so each one gets its own ``App`` and its own ``SqliteQuery(":memory:")``.
"""

import importlib.util
from pathlib import Path

import pytest


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """The ``app`` object of the example this test belongs to."""
    app_path = Path(request.path).parent / "app.py"
    module_name = f"example_{app_path.parent.name}"
    spec = importlib.util.spec_from_file_location(module_name, app_path)
    assert spec is not None
    assert spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app
