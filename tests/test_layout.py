"""Import layout tests."""

from pathlib import Path

import api.main
import complytrack
import config.settings


class TestTopLevelModules:
    """The api and config packages must be this project's, not a namesake."""

    def test_config_resolves_next_to_complytrack(self):
        root = Path(complytrack.__file__).resolve().parent.parent
        assert Path(config.settings.__file__).resolve().parent.parent == root

    def test_api_resolves_next_to_complytrack(self):
        root = Path(complytrack.__file__).resolve().parent.parent
        assert Path(api.main.__file__).resolve().parent.parent == root

    def test_settings_are_complytrack_settings(self):
        assert hasattr(config.settings.settings, "evidence_analyzer_url")
        assert api.main.app.title == "complytrack API"
