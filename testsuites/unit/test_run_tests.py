import sys

import pytest

from run_tests import TestRunner, build_parser

from .fakes import DummyConfig


RUN_SETTINGS = {"run.workers": 1, "run.retries": 0, "run.ci_retries": 2, "run.ci_workers": 1}


def run_config(ci: bool = False) -> DummyConfig:
    config = DummyConfig(RUN_SETTINGS)
    config.is_ci = ci
    return config


def test_defaults_build_minimal_command():
    runner = TestRunner(suite="ui", config=run_config())

    cmd = runner.build_pytest_command()

    assert cmd[:4] == [sys.executable, "-m", "pytest", "testsuites/ui_testing/tests"]
    assert "--alluredir" in cmd
    assert "-n" not in cmd
    assert "--reruns" not in cmd
    assert cmd[-1] == "-q"


def test_priorities_parallel_and_retries():
    runner = TestRunner(
        suite="all", priorities=["p1", "p3"], parallel=4, retries=1,
        allure_report=False, verbose=True, config=run_config(),
    )

    cmd = runner.build_pytest_command()

    assert "--priority=p1" in cmd and "--priority=p3" in cmd
    assert cmd[cmd.index("-n") + 1] == "4"
    assert cmd[cmd.index("--dist") + 1] == "loadgroup"
    assert cmd[cmd.index("--reruns") + 1] == "1"
    assert "--alluredir" not in cmd
    assert cmd[-1] == "-v"


def test_ci_defaults():
    runner = TestRunner(suite="api", config=run_config(ci=True))
    assert runner.retries == 2
    assert runner.parallel == 1


def test_browser_settings_exported_as_config_overrides():
    env = TestRunner(suite="ui", browser="firefox", headless=False, config=run_config()).build_env()
    assert env["UI_BROWSER"] == "firefox"
    assert env["UI_HEADLESS"] == "false"


def test_parser_accepts_unit_suite_and_priorities():
    args = build_parser().parse_args(["--suite", "unit", "--priority", "p1", "p2", "--no-allure"])
    assert args.suite == "unit"
    assert args.priority == ["p1", "p2"]
    assert args.no_allure is True

    with pytest.raises(SystemExit):
        build_parser().parse_args(["--suite", "smoke"])
