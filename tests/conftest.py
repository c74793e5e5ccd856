from pathlib import Path

import pytest


@pytest.fixture(autouse=True)
def isolate_home_config(tmp_path: Path, monkeypatch):
    """Point the config loader at an empty directory.

    Tests must not pick up a real ``~/.ollama_server/.ollama_config.json``
    from the machine running them.
    """
    config_dir = tmp_path / "ollama_server"
    config_dir.mkdir()
    monkeypatch.setattr(
        "ai_changelog.config.loader._get_config_directory", lambda: config_dir
    )
    yield config_dir
