# -*- coding: utf-8 -*-
"""Shared fixtures."""

# Standard
import os

# Third-Party
import pytest


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolated os.environ without chunkjson settings, cwd without a .env file."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("CHUNKJSON_")}
    monkeypatch.setattr(os, "environ", env)
    monkeypatch.chdir(tmp_path)
    return env
