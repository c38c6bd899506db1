"""Tests for YAML configuration loading and ignore matching."""

from __future__ import annotations

from pathlib import Path

import pytest

from stackguard.config import (
    DEFAULT_IGNORES,
    LintConfig,
    config_from_dict,
    find_config_file,
    load_config,
)
from stackguard.core.models import Severity
from stackguard.exceptions import ConfigError
from stackguard.rules.registry import default_registry

RULE_ID = "cdk-stack-termination-protection"


@pytest.fixture
def registry():
    return default_registry()


class TestLevelFor:
    """Tests for effective rule levels."""

    def test_recommended_defaults_to_error(self) -> None:
        assert LintConfig().level_for(RULE_ID) == Severity.ERROR

    def test_unrecommended_defaults_to_off(self) -> None:
        assert LintConfig().level_for("other-rule", recommended=False) is None

    def test_configured_level_wins(self) -> None:
        config = LintConfig(rule_levels={RULE_ID: Severity.WARNING})
        assert config.level_for(RULE_ID) == Severity.WARNING


class TestConfigFromDict:
    """Tests for configuration validation."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("off", None),
            ("warn", Severity.WARNING),
            ("error", Severity.ERROR),
            ("ERROR", Severity.ERROR),
            (0, None),
            (1, Severity.WARNING),
            (2, Severity.ERROR),
            (["warn"], Severity.WARNING),
            (False, None),
        ],
    )
    def test_levels(self, registry, value, expected) -> None:
        config = config_from_dict({"rules": {RULE_ID: value}}, registry)
        assert config.rule_levels[RULE_ID] == expected

    def test_none_is_defaults(self, registry) -> None:
        config = config_from_dict(None, registry)
        assert config.rule_levels == {}
        assert config.ignores == list(DEFAULT_IGNORES)

    def test_custom_ignores(self, registry) -> None:
        config = config_from_dict({"ignores": ["build/"]}, registry)
        assert config.ignores == ["build/"]

    def test_null_ignores_clears_defaults(self, registry) -> None:
        assert config_from_dict({"ignores": None}, registry).ignores == []

    @pytest.mark.parametrize("value", [True, "fatal", 3, [], {"level": "error"}])
    def test_invalid_level(self, registry, value) -> None:
        with pytest.raises(ConfigError):
            config_from_dict({"rules": {RULE_ID: value}}, registry)

    def test_options_rejected(self, registry) -> None:
        with pytest.raises(ConfigError, match="does not accept options"):
            config_from_dict({"rules": {RULE_ID: ["error", {"strict": True}]}}, registry)

    def test_unknown_rule(self, registry) -> None:
        with pytest.raises(ConfigError, match="Unknown rule"):
            config_from_dict({"rules": {"no-such-rule": "error"}}, registry)

    def test_unknown_key(self, registry) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration keys"):
            config_from_dict({"plugins": []}, registry)

    def test_not_a_mapping(self, registry) -> None:
        with pytest.raises(ConfigError, match="must be a mapping"):
            config_from_dict(["rules"], registry)

    def test_rules_not_a_mapping(self, registry) -> None:
        with pytest.raises(ConfigError):
            config_from_dict({"rules": ["error"]}, registry)

    def test_ignores_not_strings(self, registry) -> None:
        with pytest.raises(ConfigError):
            config_from_dict({"ignores": [1, 2]}, registry)


class TestLoadConfig:
    """Tests for reading configuration files."""

    def test_explicit_file(self, tmp_path: Path, registry) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text(f"rules:\n  {RULE_ID}: warn\nignores:\n  - vendor/\n")
        config = load_config(path, registry)
        assert config.rule_levels == {RULE_ID: Severity.WARNING}
        assert config.ignores == ["vendor/"]

    def test_discovered_in_cwd(
        self, tmp_path: Path, registry, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / ".stackguard.yaml").write_text(f"rules:\n  {RULE_ID}: off\n")
        monkeypatch.chdir(tmp_path)
        assert load_config(None, registry).level_for(RULE_ID) is None

    def test_no_file_gives_defaults(
        self, tmp_path: Path, registry, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        config = load_config(None, registry)
        assert config.rule_levels == {}

    def test_empty_file(self, tmp_path: Path, registry) -> None:
        path = tmp_path / "stackguard.yaml"
        path.write_text("")
        assert load_config(path, registry).rule_levels == {}

    def test_invalid_yaml(self, tmp_path: Path, registry) -> None:
        path = tmp_path / "stackguard.yaml"
        path.write_text("rules: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(path, registry)

    def test_missing_explicit_file(self, tmp_path: Path, registry) -> None:
        with pytest.raises(ConfigError, match="Cannot read config"):
            load_config(tmp_path / "absent.yaml", registry)

    def test_find_prefers_unhidden_name(self, tmp_path: Path) -> None:
        (tmp_path / "stackguard.yaml").write_text("")
        (tmp_path / ".stackguard.yaml").write_text("")
        found = find_config_file(tmp_path)
        assert found is not None and found.name == "stackguard.yaml"

    def test_find_none(self, tmp_path: Path) -> None:
        assert find_config_file(tmp_path) is None


class TestIsIgnored:
    """Tests for ignore pattern matching."""

    def test_directory_pattern(self) -> None:
        config = LintConfig()
        assert config.is_ignored(Path("node_modules/aws-cdk-lib/index.json"))
        assert config.is_ignored(Path("packages/api/cdk.out/tree.json"))

    def test_directory_pattern_does_not_match_file_name(self) -> None:
        assert not LintConfig().is_ignored(Path("dist"))

    def test_directory_pattern_needs_whole_segment(self) -> None:
        assert not LintConfig().is_ignored(Path("distribution/app.json"))

    def test_project_files_ignored_by_default(self) -> None:
        config = LintConfig()
        for name in ("package.json", "package-lock.json", "tsconfig.json",
                     "tsconfig.build.json", "cdk.json", "cdk.context.json"):
            assert config.is_ignored(Path(name))
            assert config.is_ignored(Path("packages/api") / name)
        assert not config.is_ignored(Path("lib/app-stack.json"))

    def test_nested_directory_pattern(self) -> None:
        config = LintConfig(ignores=["build/ast/"])
        assert config.is_ignored(Path("pkg/build/ast/app.json"))
        assert not config.is_ignored(Path("pkg/build/app.json"))

    def test_glob_on_name(self) -> None:
        config = LintConfig(ignores=["*.test.json"])
        assert config.is_ignored(Path("lib/stack.test.json"))
        assert not config.is_ignored(Path("lib/stack.json"))

    def test_glob_on_path(self) -> None:
        config = LintConfig(ignores=["generated/*"])
        assert config.is_ignored(Path("generated/app.json"))

    def test_no_ignores(self) -> None:
        assert not LintConfig(ignores=[]).is_ignored(Path("node_modules/x.json"))
