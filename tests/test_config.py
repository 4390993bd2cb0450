"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from bomtracker.config.policies import Policies, load_policies
from bomtracker.config.settings import Settings


@pytest.fixture
def minimal_policy_dict() -> dict:
    return {
        "structure": {"max_part_quantity": 50, "traversal_order": "insertion"},
        "shell": {"success_message": "done", "echo_commands": True},
    }


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "config"
    directory.mkdir()
    (directory / "default.yaml").write_text(
        yaml.safe_dump(
            {
                "log_level": "info",
                "structure": {"max_part_quantity": 20},
                "shell": {"empty_marker": "NOTHING"},
            }
        ),
        encoding="utf-8",
    )
    (directory / "testing.yaml").write_text(
        yaml.safe_dump({"structure": {"max_part_quantity": 30}}),
        encoding="utf-8",
    )
    return directory


def test_load_policies_from_mapping(minimal_policy_dict: dict) -> None:
    policies = load_policies(minimal_policy_dict)

    assert isinstance(policies, Policies)
    assert policies.structure.max_part_quantity == 50
    assert policies.structure.traversal_order == "insertion"
    assert policies.shell.success_message == "done"
    assert policies.shell.component_marker == "COMPONENT"
    assert minimal_policy_dict["structure"]["max_part_quantity"] == 50


def test_load_policies_from_yaml(tmp_path: Path, minimal_policy_dict: dict) -> None:
    policy_file = tmp_path / "policies.yaml"
    policy_file.write_text(yaml.safe_dump(minimal_policy_dict), encoding="utf-8")

    policies = load_policies(policy_file)

    assert policies.shell.echo_commands is True


def test_load_policies_rejects_missing_and_non_mapping_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_policies(tmp_path / "missing.yaml")

    policy_file = tmp_path / "list.yaml"
    policy_file.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_policies(policy_file)


def test_load_policies_applies_environment_overrides(
    monkeypatch: pytest.MonkeyPatch, minimal_policy_dict: dict
) -> None:
    monkeypatch.setenv("BOMTRACKER_POLICY__STRUCTURE__MAX_PART_QUANTITY", "7")
    monkeypatch.setenv("BOMTRACKER_POLICY__SHELL__COMPONENT_MARKER", "LEAF")

    policies = load_policies(minimal_policy_dict)

    assert policies.structure.max_part_quantity == 7
    assert policies.shell.component_marker == "LEAF"


def test_environment_override_cannot_replace_scalar_with_mapping(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    monkeypatch.setenv("BOMTRACKER_POLICY__SHELL__SUCCESS_MESSAGE__NESTED", "x")

    with pytest.raises(ValueError):
        load_policies({"shell": {"success_message": "OK"}})


def test_policy_validation_rejects_bad_values() -> None:
    with pytest.raises(ValidationError):
        load_policies({"structure": {"max_part_quantity": 0}})
    with pytest.raises(ValidationError):
        load_policies({"structure": {"traversal_order": "random"}})


def test_settings_layer_yaml_files(tmp_path: Path, config_dir: Path) -> None:
    settings = Settings(
        config_dir=config_dir,
        environment="testing",
        paths={"logs_dir": tmp_path / "logs"},
    )

    assert settings.log_level == "INFO"
    assert settings.policies.structure.max_part_quantity == 30
    assert settings.policies.shell.empty_marker == "NOTHING"
    assert settings.log_file == tmp_path / "logs" / "bomtracker.log"
    assert (tmp_path / "logs").is_dir()


def test_settings_keyword_overrides_win(tmp_path: Path, config_dir: Path) -> None:
    settings = Settings(
        config_dir=config_dir,
        paths={"logs_dir": tmp_path / "logs"},
        structure={"max_part_quantity": 99},
        log_level="debug",
    )

    assert settings.policies.structure.max_part_quantity == 99
    assert settings.policies.shell.empty_marker == "NOTHING"
    assert settings.log_level == "DEBUG"


def test_settings_environment_variables(
    tmp_path: Path, config_dir: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("BOMTRACKER_SETTINGS__PATHS__LOGS_DIR", str(tmp_path / "env-logs"))
    monkeypatch.setenv("BOMTRACKER_LOG_LEVEL", "error")

    settings = Settings(config_dir=config_dir)

    assert settings.paths.logs_dir == tmp_path / "env-logs"
    assert settings.log_level == "ERROR"


def test_settings_skip_directory_creation(tmp_path: Path, config_dir: Path) -> None:
    Settings(
        config_dir=config_dir,
        paths={"logs_dir": tmp_path / "not-created"},
        create_dirs=False,
    )

    assert not (tmp_path / "not-created").exists()


def test_settings_reject_unknown_log_level(tmp_path: Path, config_dir: Path) -> None:
    with pytest.raises(ValidationError):
        Settings(
            config_dir=config_dir,
            paths={"logs_dir": tmp_path / "logs"},
            log_level="chatty",
        )
