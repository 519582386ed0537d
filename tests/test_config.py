"""設定読み込みのユニットテスト"""

from pathlib import Path

import pytest
from k1s0_toggle import Context, ToggleConfig, ToggleError, ToggleErrorCodes, load_config
from pydantic import ValidationError


def test_load_minimal_config(tmp_path: Path) -> None:
    """最小設定ファイルの読み込み。"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("app_name: shop\n")
    config = load_config(config_file)
    assert config.app_name == "shop"
    assert config.environment == "default"
    assert config.log.level == "INFO"
    assert config.log.format == "json"


def test_load_with_env_override(tmp_path: Path) -> None:
    """環境別設定のマージ確認。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("app_name: shop\nlog:\n  level: INFO\n  format: text\n")
    env_file = tmp_path / "prod.yaml"
    env_file.write_text("environment: production\nlog:\n  level: WARNING\n")
    config = load_config(base_file, env_file)
    assert config.app_name == "shop"
    assert config.environment == "production"
    assert config.log.level == "WARNING"
    assert config.log.format == "text"


def test_load_env_not_exists(tmp_path: Path) -> None:
    """env_path が存在しない場合は base のみ使用。"""
    base_file = tmp_path / "base.yaml"
    base_file.write_text("app_name: fallback\n")
    config = load_config(base_file, tmp_path / "nonexistent.yaml")
    assert config.app_name == "fallback"


def test_load_file_not_found(tmp_path: Path) -> None:
    """存在しないファイルで READ_FILE_ERROR。"""
    with pytest.raises(ToggleError) as exc_info:
        load_config(tmp_path / "missing.yaml")
    assert exc_info.value.code == ToggleErrorCodes.READ_FILE


def test_load_invalid_yaml(tmp_path: Path) -> None:
    """不正 YAML で PARSE_YAML_ERROR。"""
    bad_file = tmp_path / "bad.yaml"
    bad_file.write_text("app_name: {invalid: yaml: content:\n")
    with pytest.raises(ToggleError) as exc_info:
        load_config(bad_file)
    assert exc_info.value.code == ToggleErrorCodes.PARSE_YAML


def test_load_non_mapping_root(tmp_path: Path) -> None:
    """ルートがマッピングでなければ PARSE_YAML_ERROR。"""
    list_file = tmp_path / "list.yaml"
    list_file.write_text("- a\n- b\n")
    with pytest.raises(ToggleError) as exc_info:
        load_config(list_file)
    assert exc_info.value.code == ToggleErrorCodes.PARSE_YAML


def test_load_validation_error(tmp_path: Path) -> None:
    """必須項目欠落で VALIDATION_ERROR。"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text("environment: prod\n")
    with pytest.raises(ToggleError) as exc_info:
        load_config(config_file)
    assert exc_info.value.code == ToggleErrorCodes.VALIDATION
    assert isinstance(exc_info.value.__cause__, ValidationError)


def test_invalid_log_format() -> None:
    """未対応のログ形式は ValidationError。"""
    with pytest.raises(ValidationError):
        ToggleConfig.model_validate({"app_name": "shop", "log": {"format": "xml"}})


def test_enrich_fills_missing_fields() -> None:
    """未設定の app_name と environment を補う。"""
    config = ToggleConfig(app_name="shop", environment="prod")
    original = Context(user_id="u1")
    enriched = config.enrich(original)
    assert enriched.app_name == "shop"
    assert enriched.environment == "prod"
    assert enriched.user_id == "u1"
    assert original.app_name is None


def test_enrich_keeps_caller_values() -> None:
    """呼び出し側の値は上書きしない。"""
    config = ToggleConfig(app_name="shop", environment="prod")
    enriched = config.enrich(Context(app_name="admin", environment="staging"))
    assert enriched.app_name == "admin"
    assert enriched.environment == "staging"
