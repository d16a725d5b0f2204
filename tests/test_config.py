from sd_prompt_converter import config


def test_server_defaults(monkeypatch):
    monkeypatch.delenv("PROMPT_CONVERTER_HOST", raising=False)
    monkeypatch.delenv("PROMPT_CONVERTER_PORT", raising=False)
    assert config.get_server_name() == "127.0.0.1"
    assert config.get_server_port() == 7861


def test_server_from_environment(monkeypatch):
    monkeypatch.setenv("PROMPT_CONVERTER_HOST", " 0.0.0.0 ")
    monkeypatch.setenv("PROMPT_CONVERTER_PORT", "9000")
    assert config.get_server_name() == "0.0.0.0"
    assert config.get_server_port() == 9000


def test_malformed_port_falls_back(monkeypatch, caplog):
    monkeypatch.setenv("PROMPT_CONVERTER_PORT", "http")
    assert config.get_server_port() == 7861
    assert "PROMPT_CONVERTER_PORT" in caplog.text

    monkeypatch.setenv("PROMPT_CONVERTER_PORT", "70000")
    assert config.get_server_port() == 7861


def test_default_direction(monkeypatch):
    monkeypatch.delenv("PROMPT_CONVERTER_DIRECTION", raising=False)
    assert config.get_default_direction() == "A_TO_B"
    monkeypatch.setenv("PROMPT_CONVERTER_DIRECTION", "b_to_a")
    assert config.get_default_direction() == "B_TO_A"
    monkeypatch.setenv("PROMPT_CONVERTER_DIRECTION", "sideways")
    assert config.get_default_direction() == "A_TO_B"
