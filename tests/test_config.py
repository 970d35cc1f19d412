from pathlib import Path

import pytest

from clawstats.config import create_default_config, find_config_file, load_config
from clawstats.utils.paths import get_default_cache_path, parse_target


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    monkeypatch.delenv("CLAW_STATS_CACHE", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_config_file():
    config = load_config()
    assert config.github.token is None
    assert config.github.timeout == 30
    assert config.stats.sort == "stars"
    assert config.stats.goal == 25
    assert config.stats.include_forks is False
    assert config.cache.enabled is True
    assert config.cache.path == get_default_cache_path()


def test_load_config_file(tmp_path):
    (tmp_path / ".claw-stats.toml").write_text(
        """
[github]
token = "ghp_test"

[stats]
default_user = "octocat"
sort = "forks"
goal = 100

[cache]
path = "custom-cache.json"
enabled = false
""",
        encoding="utf-8",
    )

    config = load_config()
    assert config.github.token == "ghp_test"
    assert config.stats.default_user == "octocat"
    assert config.stats.sort == "forks"
    assert config.stats.goal == 100
    assert config.cache.path == Path("custom-cache.json")
    assert config.cache.enabled is False


def test_config_found_in_parent_directory(tmp_path, monkeypatch):
    (tmp_path / ".claw-stats.toml").write_text("[stats]\ngoal = 10\n", encoding="utf-8")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert find_config_file() == tmp_path / ".claw-stats.toml"
    assert load_config().stats.goal == 10


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    monkeypatch.setenv("CLAW_STATS_CACHE", str(tmp_path / "env-cache.json"))

    config = load_config()
    assert config.github.token == "env-token"
    assert config.cache.path == tmp_path / "env-cache.json"


def test_file_token_wins_over_environment(tmp_path, monkeypatch):
    (tmp_path / ".claw-stats.toml").write_text('[github]\ntoken = "file-token"\n', encoding="utf-8")
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")

    assert load_config().github.token == "file-token"


def test_invalid_sort_is_rejected(tmp_path):
    (tmp_path / ".claw-stats.toml").write_text('[stats]\nsort = "name"\n', encoding="utf-8")

    with pytest.raises(RuntimeError, match="stats.sort"):
        load_config()


def test_malformed_toml_is_rejected(tmp_path):
    (tmp_path / ".claw-stats.toml").write_text("[stats\ngoal = ", encoding="utf-8")

    with pytest.raises(RuntimeError, match="Error loading config"):
        load_config()


def test_create_default_config_round_trips(tmp_path):
    path = create_default_config()
    assert path == Path(".claw-stats.toml")

    config = load_config()
    assert config.stats.goal == 25
    assert config.stats.default_user is None
    assert config.cache.path == Path("~/.claw-stats-cache.json").expanduser()


def test_create_default_config_refuses_to_overwrite(tmp_path):
    create_default_config()
    with pytest.raises(FileExistsError):
        create_default_config()


@pytest.mark.parametrize(
    "target, expected",
    [
        ("octocat", ("octocat", None)),
        ("octocat/claw-git", ("octocat", "claw-git")),
        (" octocat ", ("octocat", None)),
    ],
)
def test_parse_target(target, expected):
    assert parse_target(target) == expected


@pytest.mark.parametrize("target", ["", "octocat/", "/claw-git", "a/b/c"])
def test_parse_target_rejects_bad_input(target):
    with pytest.raises(ValueError):
        parse_target(target)
