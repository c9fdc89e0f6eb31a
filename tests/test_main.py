"""
Tests for the server entry point.
"""
import runpy
from pathlib import Path
from unittest.mock import MagicMock

import uvicorn

from shortlink_app import app_factory
from shortlink_app.config import settings

MAIN_PATH = Path(__file__).resolve().parent.parent / "main.py"


class TestMain:

    def test_serves_the_app_it_built(self, monkeypatch):
        """Test that running main.py builds the app once and hands that object to uvicorn"""
        app = object()
        create_app = MagicMock(return_value=app)
        run = MagicMock()
        monkeypatch.setattr(app_factory, "create_app", create_app)
        monkeypatch.setattr(uvicorn, "run", run)

        runpy.run_path(str(MAIN_PATH), run_name="__main__")

        create_app.assert_called_once_with(settings)
        run.assert_called_once_with(app, host=settings.host, port=settings.port)
