import os

import pytest

from gocardless_payments.errors import InvalidRequestError
from gocardless_payments.utils import (
    flatten_query_params,
    format_path,
    load_dotenv,
    path_placeholders,
)


class TestFormatPath:
    def test_substitutes_placeholders(self):
        assert format_path("payments/:identity", {"identity": "PM1"}) == "payments/PM1"

    def test_encodes_reserved_characters(self):
        path = format_path("customers/:identity", {"identity": "a/b c?d"})
        assert path == "customers/a%2Fb%20c%3Fd"

    def test_unbound_placeholder_raises(self):
        with pytest.raises(InvalidRequestError, match="identity"):
            format_path("payments/:identity/actions/cancel", {})

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_value_is_unbound(self, value):
        with pytest.raises(InvalidRequestError, match="identity"):
            format_path("payments/:identity/actions/cancel", {"identity": value})

    def test_extra_params_are_ignored(self):
        assert format_path("payments", {"identity": "PM1"}) == "payments"

    def test_leading_slash_is_stripped(self):
        assert format_path("/events", {}) == "events"

    def test_placeholders_in_order(self):
        assert path_placeholders("a/:first/b/:second") == ("first", "second")
        assert path_placeholders("payments") == ()


class TestFlattenQueryParams:
    def test_drops_none(self):
        assert flatten_query_params({"status": None, "limit": 5}) == {"limit": "5"}

    def test_nested_mapping(self):
        flat = flatten_query_params(
            {"created_at": {"gt": "2026-01-01", "lte": None}}
        )
        assert flat == {"created_at[gt]": "2026-01-01"}

    def test_booleans_and_lists(self):
        flat = flatten_query_params({"include": ["payment", "mandate"], "active": False})
        assert flat == {"include": "payment,mandate", "active": "false"}

    def test_empty(self):
        assert flatten_query_params({}) == {}


class TestLoadDotenv:
    """Tests for .env loading."""

    def test_loads_values(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "# comment\n"
            "\n"
            "GC_TEST_TOKEN='secret'\n"
            "export GC_TEST_ENV=sandbox\n"
            "not a pair\n"
        )
        monkeypatch.setenv("GC_TEST_TOKEN", "")
        monkeypatch.delenv("GC_TEST_TOKEN")
        monkeypatch.setenv("GC_TEST_ENV", "")
        monkeypatch.delenv("GC_TEST_ENV")

        loaded = load_dotenv(str(env_file))

        assert loaded == env_file
        assert os.environ["GC_TEST_TOKEN"] == "secret"
        assert os.environ["GC_TEST_ENV"] == "sandbox"

    def test_does_not_override_environment(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("GC_TEST_TOKEN=from-file\n")
        monkeypatch.setenv("GC_TEST_TOKEN", "from-env")

        load_dotenv(str(env_file))

        assert os.environ["GC_TEST_TOKEN"] == "from-env"

    def test_searches_parent_directories(self, tmp_path, monkeypatch):
        (tmp_path / ".env").write_text("GC_TEST_PARENT=1\n")
        child = tmp_path / "a" / "b"
        child.mkdir(parents=True)
        monkeypatch.chdir(child)
        monkeypatch.setenv("GC_TEST_PARENT", "")
        monkeypatch.delenv("GC_TEST_PARENT")

        loaded = load_dotenv()

        assert loaded == (tmp_path / ".env").resolve()
        assert os.environ["GC_TEST_PARENT"] == "1"

    def test_missing_file(self, tmp_path):
        assert load_dotenv(str(tmp_path / "missing.env")) is None
