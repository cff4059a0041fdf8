"""Tests for docsonnet.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docsonnet.config import ConfigError, DecoderConfig, DocsonnetConfig, load_config


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, DocsonnetConfig)
    assert config.root == tmp_path.resolve()
    assert config.decoder == DecoderConfig(marker="#", max_depth=64)
    assert config.logging.verbose is False
    assert config.logging.log_file is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".docsonnet.yml"
    config_file.write_text(
        """
decoder:
  marker: "@"
  max_depth: 12
logging:
  verbose: true
  log_file: "logs/docsonnet.log"
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.decoder.marker == "@"
    assert config.decoder.max_depth == 12
    assert config.logging.verbose is True
    assert config.logging.log_file == tmp_path.resolve() / "logs" / "docsonnet.log"


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".docsonnet.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).decoder == DecoderConfig()


@pytest.mark.parametrize(
    "content",
    [
        "- just\n- a list\n",
        "decoder:\n  marker: ''\n",
        "decoder:\n  max_depth: 0\n",
        "decoder:\n  max_depth: deep\n",
        "decoder: [unclosed\n",
    ],
)
def test_load_config_rejects_invalid_content(tmp_path: Path, content: str) -> None:
    (tmp_path / ".docsonnet.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
