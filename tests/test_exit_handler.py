import pytest

from iacguard.exit_handler import ExitPolicy

ALL = frozenset({"high", "medium", "low", "info"})
SIMPLE_COUNTERS = {"HIGH": 1, "MEDIUM": 0, "LOW": 0, "INFO": 0}
COMPLEX_COUNTERS = {"HIGH": 2, "MEDIUM": 1, "LOW": 0, "INFO": 0}


@pytest.mark.parametrize(
    "counters, fail_on, expected",
    [
        (SIMPLE_COUNTERS, ALL, 50),
        (SIMPLE_COUNTERS, frozenset({"medium"}), 0),
        (COMPLEX_COUNTERS, frozenset({"medium"}), 40),
        (COMPLEX_COUNTERS, ALL, 50),
        ({"LOW": 3, "INFO": 1}, frozenset({"info", "low"}), 30),
        ({"LOW": 3, "INFO": 1}, frozenset({"info"}), 20),
        ({}, ALL, 0),
    ],
)
def test_results_exit_code(counters, fail_on, expected):
    policy = ExitPolicy(fail_on=fail_on)
    assert policy.results_exit_code(counters) == expected


@pytest.mark.parametrize(
    "arg, expected",
    [
        ("NONE", "none"),
        ("None", "none"),
        ("none", "none"),
        ("all", "all"),
        ("results", "results"),
        ("errors", "errors"),
    ],
)
def test_set_ignore(arg, expected):
    policy = ExitPolicy(ignore="none")
    policy.set_ignore(arg)
    assert policy.ignore == expected


def test_set_ignore_invalid_keeps_previous():
    policy = ExitPolicy(ignore="none")
    with pytest.raises(ValueError, match="unknown argument for --ignore-on-exit: invalid"):
        policy.set_ignore("invalid")
    assert policy.ignore == "none"


@pytest.mark.parametrize(
    "args, expected",
    [
        ([], ALL),
        (["HIGH"], frozenset({"high"})),
        (["HIGH", "Medium", "loW", "info"], ALL),
    ],
)
def test_set_fail_on(args, expected):
    policy = ExitPolicy(fail_on=frozenset())
    policy.set_fail_on(args)
    assert policy.fail_on == expected


def test_set_fail_on_invalid_keeps_previous():
    policy = ExitPolicy(fail_on=frozenset())
    with pytest.raises(ValueError, match="unknown argument for --fail-on: invalid"):
        policy.set_fail_on(["invalid"])
    assert policy.fail_on == frozenset()


@pytest.mark.parametrize(
    "ignore, expected",
    [("none", True), ("all", False), ("results", True), ("errors", False)],
)
def test_show_error(ignore, expected):
    policy = ExitPolicy(ignore=ignore)
    assert policy.show_error("errors") is expected


def test_show_error_for_results_kind():
    policy = ExitPolicy(ignore="results")
    assert policy.show_error("results") is False