"""Unit tests for application settings configuration."""

from pathlib import Path

from static_cms.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_static_url_segment_is_normalised():
    settings = Settings(static_url_segment="/public/")
    assert settings.static_url_segment == "public"


def test_default_themes_dir_points_at_backend_templates():
    expected = Path(__file__).resolve().parents[2] / "templates"
    assert Path(Settings().themes_dir) == expected
