"""Unit tests for backend base URL resolution."""

import pytest

from roomdesk.clients import resolve, resolve_from_settings
from roomdesk.config.settings import BackendSettings


class TestResolve:
    """Tests for resolve()."""

    @pytest.mark.parametrize(
        "raw",
        [
            "",
            "   ",
            "YOUR_RENDER_BACKEND_URL",
            "https://YOUR_RENDER_BACKEND_URL.onrender.com",
            "PASTE_BACKEND_URL_HERE",
            "https://example.com/PASTE/",
        ],
    )
    def test_invalid_values(self, raw):
        """Empty values and template placeholders are invalid."""
        resolution = resolve(raw)

        assert resolution.valid is False
        assert "not configured" in resolution.status_message
        assert repr(raw) in resolution.status_message

    def test_strips_single_trailing_slash(self):
        """One trailing slash is removed."""
        resolution = resolve("https://myspace-backend.onrender.com/")

        assert resolution.valid is True
        assert resolution.base_url == "https://myspace-backend.onrender.com"

    def test_strips_only_one_slash(self):
        """Only the last slash goes; the remainder is kept exactly."""
        assert resolve("https://api.test//").base_url == "https://api.test/"
        assert resolve("https://api.test/v1///").base_url == "https://api.test/v1//"

    def test_value_without_slash_unchanged(self):
        """Values without a trailing slash pass through untouched."""
        resolution = resolve("http://localhost:4000")

        assert resolution.base_url == "http://localhost:4000"
        assert resolution.status_message == "Using backend http://localhost:4000"

    def test_resolution_is_immutable(self):
        """Resolutions cannot be modified after creation."""
        resolution = resolve("http://localhost:4000")

        with pytest.raises(Exception):
            resolution.valid = False


class TestResolveFromSettings:
    """Tests for resolve_from_settings()."""

    def test_uses_given_settings(self):
        """The given backend settings are resolved."""
        resolution = resolve_from_settings(BackendSettings(base_url="https://api.test/"))

        assert resolution.valid is True
        assert resolution.base_url == "https://api.test"

    def test_accepts_vite_variable_name(self, monkeypatch):
        """The web build's VITE_API_BASE_URL is honored too."""
        monkeypatch.delenv("API_BASE_URL", raising=False)
        monkeypatch.setenv("VITE_API_BASE_URL", "https://vite.test/")

        resolution = resolve_from_settings(BackendSettings())

        assert resolution.base_url == "https://vite.test"
