"""CLI command tests using Click CliRunner.

Strategy: patch get_components at each command module's import point with a
real store in tmp_path, and pin the reference instant.
"""

import json
import logging
from datetime import datetime
from unittest.mock import patch

import pytest
import structlog
from click.testing import CliRunner

from cli.config_models import MoodlogConfig
from cli.main import cli
from moods import AnalyticsEngine, MoodEntryStore
from moods.models import MoodEntry

NOW = datetime(2024, 6, 12, 15, 30)


@pytest.fixture(autouse=True)
def quiet_structlog():
    """Keep debug events off stdout while setup_logging is patched out."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.WARNING),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def components(tmp_path):
    config = MoodlogConfig.from_dict(
        {"paths": {"db_path": str(tmp_path / "moods.db"), "log_file": str(tmp_path / "moodlog.log")}}
    )
    return {
        "config": config,
        "user_id": "local",
        "store": MoodEntryStore(config.paths.db_path),
        "engine": AnalyticsEngine.from_config(config.analytics),
    }


@pytest.fixture(autouse=True)
def patch_components(components):
    targets = [
        "cli.commands.entries.get_components",
        "cli.commands.insights.get_components",
    ]
    patches = [patch(t, return_value=components) for t in targets]
    patches += [
        patch("cli.commands.entries.now", return_value=NOW),
        patch("cli.commands.insights.now", return_value=NOW),
        patch("cli.main.load_config_model", return_value=components["config"]),
        patch("cli.main.setup_logging"),
    ]
    for p in patches:
        p.start()
    yield components
    for p in reversed(patches):
        p.stop()


def _seed(store):
    for day, mood, content in [(12, "happy", "work was fine"), (11, "happy", "ok"), (9, "sad", "meh")]:
        store.save(MoodEntry(user_id="local", date=datetime(2024, 6, day, 9), mood=mood, content=content))


class TestEntryCommands:
    def test_add(self, runner, components):
        result = runner.invoke(cli, ["add", "happy", "Sunny walk", "--tags", "walk,outside"])
        assert result.exit_code == 0, result.output
        assert "Logged" in result.output

        entries = components["store"].list_entries("local")
        assert len(entries) == 1
        assert entries[0].tags == ("walk", "outside")
        assert entries[0].date == NOW.replace(microsecond=0)

    def test_add_with_date(self, runner, components):
        result = runner.invoke(cli, ["add", "CALM", "Quiet evening", "--date", "2024-06-01"])
        assert result.exit_code == 0, result.output
        entry = components["store"].list_entries("local")[0]
        assert entry.mood == "calm"
        assert entry.date == datetime(2024, 6, 1)

    def test_add_bad_date(self, runner):
        result = runner.invoke(cli, ["add", "happy", "x", "--date", "June first"])
        assert result.exit_code != 0
        assert "Invalid date" in result.output

    def test_add_invalid_mood(self, runner):
        result = runner.invoke(cli, ["add", "bored", "x"])
        assert result.exit_code != 0

    def test_add_opens_editor(self, runner, components):
        with patch("click.edit", return_value="From editor\n"):
            result = runner.invoke(cli, ["add", "grateful"])
        assert result.exit_code == 0, result.output
        assert components["store"].list_entries("local")[0].content == "From editor"

    def test_add_editor_cancelled(self, runner, components):
        with patch("click.edit", return_value=None):
            result = runner.invoke(cli, ["add", "grateful"])
        assert "cancelled" in result.output
        assert components["store"].count("local") == 0

    def test_list_empty(self, runner):
        result = runner.invoke(cli, ["list"])
        assert result.exit_code == 0
        assert "No entries found" in result.output

    def test_list(self, runner, components):
        _seed(components["store"])
        result = runner.invoke(cli, ["list", "-d", "2"])
        assert result.exit_code == 0
        assert "2024-06-12" in result.output
        assert "2024-06-09" not in result.output

    def test_delete(self, runner, components):
        _seed(components["store"])
        eid = components["store"].list_entries("local")[0].id
        result = runner.invoke(cli, ["delete", eid])
        assert result.exit_code == 0
        assert components["store"].count("local") == 2

    def test_delete_missing(self, runner):
        result = runner.invoke(cli, ["delete", "nope"])
        assert result.exit_code == 1
        assert "not found" in result.output


class TestInsightCommands:
    def test_dashboard_json(self, runner, components):
        _seed(components["store"])
        result = runner.invoke(cli, ["dashboard", "--json"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("{")
        data = json.loads(result.output)
        assert data["weekly_average_mood"]["label"] == "Good"
        assert data["most_frequent_mood"]["window"] == "month"
        assert data["streak"] == {"longest": 2, "current": 2}

    def test_dashboard_text(self, runner, components):
        _seed(components["store"])
        result = runner.invoke(cli, ["dashboard"])
        assert result.exit_code == 0, result.output
        assert "Good" in result.output
        assert "Happy" in result.output

    def test_insights_json(self, runner, components):
        _seed(components["store"])
        result = runner.invoke(cli, ["insights", "--json"])
        assert result.output.startswith("{"), result.output
        data = json.loads(result.output)
        assert data["recommendations"][0]["title"] == "Stress Management"
        assert len(data["weekly_mood_data"]) == 7

    def test_insights_text_empty(self, runner):
        result = runner.invoke(cli, ["insights"])
        assert result.exit_code == 0, result.output
        assert "No Data" in result.output
        assert "Goal Tracking" in result.output
        assert "Recommendations" in result.output


def test_config_error_exits(runner):
    with patch("cli.main.load_config_model", side_effect=ValueError("bad yaml")):
        result = runner.invoke(cli, ["list"])
    assert result.exit_code == 1
    assert "Config error" in result.output
