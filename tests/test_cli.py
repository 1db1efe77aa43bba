import pytest

from pomodoro import cli, scheduler


def test_dry_run_prints_plan(capsys):
    assert cli.main(["run", "--dry-run", "-c", "2"]) == cli.EXIT_OK

    out = capsys.readouterr().out
    assert "Run with focus=25m, break-min=5m, cycles=2" in out
    assert "- Focus (session 1): 25:00" in out
    assert "- Break (session 1): 5:00" in out
    assert "- Focus (session 2): 25:00" in out


def test_options_map_to_session_config(monkeypatch):
    seen = []
    monkeypatch.setattr(scheduler, "run_session", seen.append)

    assert cli.main(["run", "-f", "50", "-b", "10", "-c", "6", "-l", "30", "-e", "3", "--fast"]) == cli.EXIT_OK

    assert seen == [
        scheduler.SessionConfig(
            focus_minutes=50,
            break_minutes=10,
            cycles=6,
            long_break_minutes=30,
            long_break_every=3,
            seconds_per_minute=1,
        )
    ]


def test_defaults(monkeypatch):
    seen = []
    monkeypatch.setattr(scheduler, "run_session", seen.append)

    cli.main(["run"])

    assert seen == [scheduler.SessionConfig()]


@pytest.mark.parametrize("argv", [["run", "-e", "0"], ["run", "--cycles", "-1"], ["run", "--focus", "-5"]])
def test_invalid_configuration_exits_with_usage_status(argv, capsys, monkeypatch):
    monkeypatch.setattr(scheduler, "run_session", lambda config: pytest.fail("should not run"))

    assert cli.main(argv) == cli.EXIT_INVALID_ARGS

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err.startswith("error: ")


def test_non_integer_option_is_rejected():
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["run", "--focus", "ten"])
    assert excinfo.value.code == 2


def test_command_is_required():
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["--version"])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.startswith("pomodoro ")


def test_keyboard_interrupt_is_reported(monkeypatch, capsys):
    def interrupted(config):
        raise KeyboardInterrupt

    monkeypatch.setattr(scheduler, "run_session", interrupted)

    assert cli.main(["run"]) == cli.EXIT_INTERRUPTED
    assert "Session interrupted" in capsys.readouterr().out


def test_short_run_end_to_end(capsys):
    assert cli.main(["run", "-f", "0", "-b", "0", "-c", "2"]) == cli.EXIT_OK

    out = capsys.readouterr().out
    assert out.count("=== Session") == 2
    assert "\rFocus: 0:00\n" in out
    assert "\rBreak: 0:00\n" in out
    assert out.rstrip().endswith("All sessions done. Nice work.")
