import pytest

from codepulse.category import Category
from codepulse.config import ScanConfig, config_from_mapping, load_config
from codepulse.errors import ConfigError


def test_defaults():
    config = ScanConfig()

    assert config.god_file_lines == 500
    assert config.near_empty_lines == 5
    assert config.secret_match_mode == "first"
    assert config.isolate_file_errors is True
    assert "*.svelte" in config.include
    assert config.exclude == ("node_modules",)
    assert config.weight(Category.SECURITY) == 15
    assert config.weight(Category.GOD_FILE) == 5
    assert config.weight(Category.PERFORMANCE) == 8
    assert config.weight(Category.NEAR_EMPTY) == 2
    assert config.weight(Category.SCAN_ERROR) == 0


def test_partial_weights_merge_with_defaults():
    config = config_from_mapping({"weights": {"security": 30}})

    assert config.weight(Category.SECURITY) == 30
    assert config.weight(Category.PERFORMANCE) == 8


def test_load_config_from_workspace_root(tmp_path):
    (tmp_path / ".codepulse.yaml").write_text(
        "include: '*.py'\nexclude: [node_modules, .venv]\nsecret_match_mode: all\nfile_timeout: 2.5\n",
        encoding="utf-8",
    )

    config = load_config(root=tmp_path)

    assert config.include == ("*.py",)
    assert config.exclude == ("node_modules", ".venv")
    assert config.secret_match_mode == "all"
    assert config.file_timeout == 2.5


def test_missing_default_file_uses_defaults(tmp_path):
    assert load_config(root=tmp_path) == ScanConfig()


def test_explicit_missing_file_is_an_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_empty_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")

    assert load_config(path) == ScanConfig()


@pytest.mark.parametrize(
    "data",
    [
        {"unknown_key": 1},
        {"god_file_lines": "many"},
        {"god_file_lines": True},
        {"secret_match_mode": "some"},
        {"weights": {"style": 3}},
        {"weights": {"security": -1}},
        {"scan_timeout": 0},
    ],
)
def test_invalid_values_raise(data):
    with pytest.raises(ConfigError):
        config_from_mapping(data)


def test_non_mapping_yaml_is_rejected(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(path)


def test_with_overrides_ignores_none():
    config = ScanConfig().with_overrides(fail_under=70, secret_match_mode=None)

    assert config.fail_under == 70
    assert config.secret_match_mode == "first"


@pytest.mark.parametrize("weights", [{"security": -1}, {"security": 1.5}, {"near_empty": True}])
def test_direct_construction_validates_weights(weights):
    with pytest.raises(ConfigError):
        ScanConfig(weights=weights)


def test_weights_are_read_only():
    config = ScanConfig(weights={"security": 20})

    with pytest.raises(TypeError):
        config.weights["security"] = 0
    assert config.weight(Category.SECURITY) == 20


def test_weights_survive_overrides():
    config = ScanConfig(weights={"performance": 1}).with_overrides(fail_under=40)

    assert config.weight(Category.PERFORMANCE) == 1
    assert config.fail_under == 40
