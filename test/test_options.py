"""Tests for command line parsing."""

import pytest

from packtest.options import RunOptions, parse_args


class TestParseArgs:

    def test_all_flags(self):
        options = parse_args(["-p", "/opt/packs/libcloud", "-x", "-j", "-v"])
        assert options == RunOptions(
            pack_path="/opt/packs/libcloud",
            skip_env_creation=True,
            tests_only=True,
            verbose=True,
        )

    def test_defaults(self):
        options = parse_args(["-p", "pack"])
        assert not options.skip_env_creation
        assert not options.tests_only
        assert not options.verbose
        assert not options.dry_run

    def test_long_options(self):
        options = parse_args(["--pack", "pack", "--just-tests", "--dry-run"])
        assert options.tests_only
        assert options.dry_run

    def test_missing_pack_path_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args([])
        assert exc_info.value.code == 2
        err = capsys.readouterr().err
        assert err.startswith("usage: packtest")
        assert "-p" in err

    def test_unknown_option_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-p", "pack", "-z"])
        assert exc_info.value.code == 2
        assert "usage:" in capsys.readouterr().err

    def test_option_without_value_exits_2(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["-p"])
        assert exc_info.value.code == 2
        assert "expected one argument" in capsys.readouterr().err
