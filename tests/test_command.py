from __future__ import annotations

import itertools

import pytest

from mozmillci.command import build_command, tokenize
from mozmillci.errors import ConfigurationError
from mozmillci.model import StepConfig


class TestBuildCommand:
    def test_minimal(self):
        config = StepConfig(tests="test1.js")
        assert build_command(config) == "mozmill -t test1.js"

    def test_everything_set(self):
        config = StepConfig(
            tests="t.js",
            wrapper="run.sh",
            logfile="out.log",
            port="4242",
            show_all=True,
            show_errors=True,
        )
        assert build_command(config) == "run.sh --logfile out.log --port=4242 -t t.js --showall --show-errors"

    def test_wrapper_replaces_mozmill(self):
        cmd = build_command(StepConfig(tests="t.js", wrapper="/opt/bin/wrap.sh"))
        assert cmd.startswith("/opt/bin/wrap.sh ")
        assert "mozmill" not in cmd

    def test_empty_tests_is_rejected(self):
        with pytest.raises(ConfigurationError) as exc:
            build_command(StepConfig(tests=""))
        assert exc.value.field == "tests"

    @pytest.mark.parametrize(
        "logfile,port,show_all,show_errors",
        list(itertools.product(["", "out.log"], ["", "24242"], [False, True], [False, True])),
    )
    def test_flag_order_is_fixed(self, logfile, port, show_all, show_errors):
        config = StepConfig(
            tests="suite/",
            logfile=logfile,
            port=port,
            show_all=show_all,
            show_errors=show_errors,
        )
        tokens = tokenize(build_command(config))

        expected = ["mozmill"]
        if logfile:
            expected += ["--logfile", logfile]
        if port:
            expected += [f"--port={port}"]
        expected += ["-t", "suite/"]
        if show_all:
            expected += ["--showall"]
        if show_errors:
            expected += ["--show-errors"]

        assert tokens == expected

    def test_values_are_not_quoted(self):
        cmd = build_command(StepConfig(tests="my tests/", logfile="a b.log"))
        assert cmd == "mozmill --logfile a b.log -t my tests/"


class TestTokenize:
    def test_splits_on_whitespace_runs(self):
        assert tokenize("mozmill   -t\tfoo.js \n") == ["mozmill", "-t", "foo.js"]

    def test_empty(self):
        assert tokenize("   ") == []

    def test_quoted_tests_stay_together(self):
        cmd = build_command(StepConfig(tests='"my tests/"'))
        assert tokenize(cmd) == ["mozmill", "-t", "my tests/"]

    def test_single_quotes(self):
        cmd = build_command(StepConfig(tests="t.js", logfile="'logs/run 1.log'"))
        assert tokenize(cmd) == ["mozmill", "--logfile", "logs/run 1.log", "-t", "t.js"]

    def test_quotes_inside_a_word(self):
        assert tokenize('--port="42"42 a"b c"d') == ["--port=4242", "ab cd"]

    def test_backslash_and_hash_are_literal(self):
        assert tokenize(r"C:\tests\a.js #1") == [r"C:\tests\a.js", "#1"]

    def test_unbalanced_quotes(self):
        with pytest.raises(ConfigurationError) as exc:
            tokenize('mozmill -t "my tests')
        assert exc.value.field == "command"
