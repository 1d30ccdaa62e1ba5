"""Tests for configuration loading."""

import pytest
from pydantic import ValidationError

from badgecount.config import Config

DATABASE_URL = "mongodb://localhost:27017/badgecount_test"


class TestDefaultLabel:
    def test_default(self):
        assert Config(database_url=DATABASE_URL, _env_file=None).default_label == "visitors"

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("BADGECOUNT_DEFAULT_LABEL", "views")
        assert Config(database_url=DATABASE_URL, _env_file=None).default_label == "views"

    @pytest.mark.parametrize("label", ["bad\x00label", "x" * 65])
    def test_invalid_label_rejected_at_startup(self, label):
        with pytest.raises(ValidationError):
            Config(database_url=DATABASE_URL, default_label=label, _env_file=None)
