import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.i18n`) works during pytest collection.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from infrastructure.events import clear_handlers
from infrastructure.services import get_settings, reset_localization_service


@pytest.fixture(autouse=True)
def reset_process_state():
    """Start every test with no handlers and no shared localization service."""
    clear_handlers()
    reset_localization_service()
    get_settings.cache_clear()
    yield
    clear_handlers()
    reset_localization_service()
    get_settings.cache_clear()
