from click.testing import CliRunner

from booltmemo import main


def test_demo_walks_through_cache_lifecycle(monkeypatch):
    monkeypatch.delenv("BOOLTMEMO_LOG_LEVEL", raising=False)
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["demo", "--true-ttl", "0.5", "--false-ttl", "0.25", "--work-delay", "0"],
    )
    assert result.exit_code == 0, result.output
    lines = [line for line in result.output.splitlines() if " for " in line]
    calls = [line.rsplit("calls=", 1)[1].rstrip(")") for line in lines]
    assert calls == ["1", "1", "2", "2", "3", "4", "5"]
    assert ": True" in lines[0]
    assert ": False" in lines[2]
    assert result.output.strip().endswith("Cache cleared")


def test_check_config_warns_on_zero_ttl(monkeypatch):
    monkeypatch.setenv("BOOLTMEMO_TRUE_TTL_SECONDS", "0")
    monkeypatch.setenv("BOOLTMEMO_FALSE_TTL_SECONDS", "4")
    result = CliRunner().invoke(main, ["check-config"])
    assert result.exit_code == 0, result.output
    assert "true_ttl_seconds: 0" in result.output
    assert "janitor_interval_seconds: 1" in result.output
    assert "BOOLTMEMO_TRUE_TTL_SECONDS is 0" in result.output


def test_check_config_fails_on_invalid_value(monkeypatch):
    monkeypatch.setenv("BOOLTMEMO_FALSE_TTL_SECONDS", "soon")
    result = CliRunner().invoke(main, ["check-config"])
    assert result.exit_code == 1
    assert "BOOLTMEMO_FALSE_TTL_SECONDS must be a number" in result.output


def test_env_file_is_loaded(monkeypatch, tmp_path):
    # setenv first so the value load_dotenv writes is undone after the test
    monkeypatch.setenv("BOOLTMEMO_TRUE_TTL_SECONDS", "1")
    monkeypatch.delenv("BOOLTMEMO_TRUE_TTL_SECONDS")
    env_file = tmp_path / ".env"
    env_file.write_text("BOOLTMEMO_TRUE_TTL_SECONDS=42\n", encoding="utf-8")
    result = CliRunner().invoke(main, ["--env-file", str(env_file), "check-config"])
    assert result.exit_code == 0, result.output
    assert "true_ttl_seconds: 42" in result.output


def test_demo_treats_negative_ttl_as_zero(monkeypatch):
    monkeypatch.setenv("BOOLTMEMO_FALSE_TTL_SECONDS", "-1")
    result = CliRunner().invoke(main, ["demo", "--true-ttl", "0.2", "--work-delay", "0"])
    assert result.exit_code == 0, result.output
    assert "Waiting 0.000s..." in result.output
    lines = [line for line in result.output.splitlines() if " for 43 " in line]
    # false results are never cached, so both lookups of 43 call the predicate
    assert [line.rsplit("calls=", 1)[1].rstrip(")") for line in lines] == ["2", "3"]


def test_unknown_log_level_is_rejected(monkeypatch):
    monkeypatch.setenv("BOOLTMEMO_LOG_LEVEL", "BASIC_FORMAT")
    result = CliRunner().invoke(main, ["check-config"])
    assert result.exit_code == 1
    assert "BOOLTMEMO_LOG_LEVEL must be one of" in result.output
