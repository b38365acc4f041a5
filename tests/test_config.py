import pytest

from bedrock_series.config import DEFAULT_SETTINGS, load_credentials, load_settings
from bedrock_series.llm.types import ConfigurationError
from bedrock_series.prompts import build_series_prompt


def test_missing_settings_file_returns_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "nope.yaml"))
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_settings_file_overrides_single_backend(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("region: eu-west-1\nbackends:\n  nova:\n    model_id: fake-nova\n", encoding="utf-8")

    settings = load_settings(str(path))

    assert settings["region"] == "eu-west-1"
    assert settings["backends"]["nova"]["model_id"] == "fake-nova"
    assert settings["backends"]["claude"] == DEFAULT_SETTINGS["backends"]["claude"]
    assert DEFAULT_SETTINGS["backends"]["nova"]["model_id"] == "us.amazon.nova-pro-v1:0"


def test_settings_file_with_unknown_backend_is_rejected(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text("backends:\n  gpt:\n    model_id: x\n", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="UnknownBackend"):
        load_settings(str(path))


def test_credentials_from_environment():
    creds = load_credentials(
        DEFAULT_SETTINGS,
        {"AWS_ACCESS_KEY_ID": "AKIA", "AWS_SECRET_ACCESS_KEY": "secret", "AWS_REGION": "us-east-2"},
    )
    assert creds.region == "us-east-2"
    assert creds.access_key_id == "AKIA"
    assert creds.api_key is None


def test_region_falls_back_to_settings():
    settings = dict(DEFAULT_SETTINGS, region="us-west-2")
    creds = load_credentials(settings, {"AWS_ACCESS_KEY_ID": "a", "AWS_SECRET_ACCESS_KEY": "b"})
    assert creds.region == "us-west-2"


def test_missing_secret_key_is_reported():
    with pytest.raises(ConfigurationError, match="AWS_SECRET_ACCESS_KEY missing"):
        load_credentials(DEFAULT_SETTINGS, {"AWS_ACCESS_KEY_ID": "a", "AWS_REGION": "us-east-2"})


def test_http_transport_needs_bearer_token():
    settings = dict(DEFAULT_SETTINGS, transport="http")
    with pytest.raises(ConfigurationError, match="AWS_BEARER_TOKEN_BEDROCK"):
        load_credentials(settings, {"AWS_REGION": "us-east-2"})

    creds = load_credentials(settings, {"AWS_REGION": "us-east-2", "AWS_BEARER_TOKEN_BEDROCK": "tok"})
    assert creds.api_key == "tok"


def test_series_prompt_template_keeps_unknown_placeholders():
    assert build_series_prompt("Ross", "Q: {input} {other}") == "Q: Ross {other}"
    assert '[{"series": "<name>"}]' in build_series_prompt("Ross")


def _write(tmp_path, text):
    path = tmp_path / "settings.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def test_empty_backend_entry_keeps_default_model_id(tmp_path):
    settings = load_settings(_write(tmp_path, "backends:\n  nova:\n    # model_id: x\n"))
    assert settings["backends"]["nova"] == {"model_id": "us.amazon.nova-pro-v1:0"}


def test_null_backends_keeps_all_defaults(tmp_path):
    settings = load_settings(_write(tmp_path, "backends: null\n"))
    assert settings["backends"] == DEFAULT_SETTINGS["backends"]


@pytest.mark.parametrize(
    "text, message",
    [
        ("backends: [nova, llama]\n", "backends must be a mapping"),
        ("backends:\n  nova: fake-id\n", "backends.nova must be a mapping"),
        ("backends:\n  nova:\n    model_id: 42\n", "model_id must be a string"),
        ("timeout_seconds: soon\n", "timeout_seconds"),
        ("timeout_seconds: 0\n", "timeout_seconds"),
        ("timeout_seconds: true\n", "timeout_seconds"),
        ("prompt_template: [a, b]\n", "prompt_template"),
    ],
)
def test_malformed_settings_raise_configuration_error(tmp_path, text, message):
    with pytest.raises(ConfigurationError, match=message):
        load_settings(_write(tmp_path, text))
