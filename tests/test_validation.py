from __future__ import annotations

import pytest

from mozmillci.model import StepConfig
from mozmillci.validation import (
    DISPLAY_NAME,
    ERROR,
    FIELDS,
    OK,
    WARNING,
    check_logfile,
    check_port,
    check_tests,
    check_wrapper,
    has_errors,
    validate,
)


def test_display_name():
    assert DISPLAY_NAME == "Mozmill Test"


def test_fields_cover_persisted_configuration():
    assert [name for name, _type, _help in FIELDS] == ["tests", "wrapper", "logfile", "showall", "showerrors", "port"]


class TestCheckTests:
    @pytest.mark.parametrize("value", ["", "   "])
    def test_empty_is_error(self, value):
        assert check_tests(value).kind == ERROR

    def test_short_value_is_fine(self):
        assert check_tests("a").kind == OK


class TestCheckPort:
    def test_empty_ok(self):
        assert check_port("").kind == OK

    def test_number_ok(self):
        assert check_port("24242").kind == OK

    @pytest.mark.parametrize("value", ["abc", "0", "70000", "-1"])
    def test_invalid(self, value):
        assert check_port(value).kind == ERROR


class TestCheckLogfileAndWrapper:
    def test_logfile_with_space_warns(self):
        assert check_logfile("my log.txt").kind == WARNING

    def test_logfile_ok(self):
        assert check_logfile("out.log").kind == OK
        assert check_logfile("").kind == OK

    def test_wrapper_on_path(self):
        assert check_wrapper("sh").kind == OK

    def test_wrapper_in_workspace(self, tmp_path):
        (tmp_path / "run.sh").write_text("")
        assert check_wrapper("run.sh", workspace=tmp_path).kind == OK

    def test_wrapper_missing_warns(self, tmp_path):
        result = check_wrapper("definitely-not-here.sh", workspace=tmp_path)
        assert result.kind == WARNING
        assert "definitely-not-here.sh" in result.message

    def test_quoted_logfile_ok(self):
        assert check_logfile('"my log.txt"').kind == OK
        assert check_logfile("'my log.txt'").kind == OK

    def test_unbalanced_logfile_is_error(self):
        assert check_logfile('"my log.txt').kind == ERROR

    def test_quoted_wrapper_in_workspace(self, tmp_path):
        (tmp_path / "run tests.sh").write_text("")
        assert check_wrapper('"run tests.sh"', workspace=tmp_path).kind == OK

    def test_unquoted_wrapper_with_space_warns(self, tmp_path):
        (tmp_path / "run tests.sh").write_text("")
        assert check_wrapper("run tests.sh", workspace=tmp_path).kind == WARNING

    def test_empty_quoted_wrapper_is_error(self):
        assert check_wrapper('""').kind == ERROR

    def test_unbalanced_tests_is_error(self):
        assert check_tests("'suite/").kind == ERROR


class TestValidate:
    def test_valid_config(self):
        results = validate(StepConfig(tests="t.js", port="24242"))
        assert not has_errors(results)
        assert set(results) == {"tests", "wrapper", "logfile", "port"}

    def test_invalid_config(self):
        results = validate(StepConfig(tests="", port="x"))
        assert has_errors(results)
        assert results["tests"].kind == ERROR
        assert results["port"].kind == ERROR
