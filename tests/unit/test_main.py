"""
Tests for the cargo-disassemble CLI: argument parsing, option merging with
the config file, and exit codes.
"""
import pytest
from unittest.mock import patch, MagicMock

from cargo_disassemble.engine import RunResult
from cargo_disassemble.errors import BuildError, InvalidPatternError
from cargo_disassemble.main import _build_parser, _strip_cargo_subcommand, build_run_options, run
from cargo_disassemble.parsing.diagnostics import Diagnostic
from cargo_disassemble.utils.config import ConfigManager


@pytest.fixture
def config(tmp_path):
    return ConfigManager(tmp_path / ".cargo-disassemble")


class TestArgParser:

    def test_no_arguments(self):
        args = _build_parser().parse_args([])
        assert args.function is None
        assert not args.everything
        assert args.features is None

    def test_function_pattern(self):
        args = _build_parser().parse_args(["main"])
        assert args.function == "main"

    def test_all_flags(self):
        args = _build_parser().parse_args([
            "foo", "--everything", "--release", "--intel", "--optimize",
            "--features", "serde std", "--all-features", "--no-default-features",
        ])
        assert args.everything and args.release and args.intel and args.optimize
        assert args.features == ["serde", "std"]
        assert args.all_features and args.no_default_features

    def test_color_choices(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["--color", "sometimes"])


class TestStripCargoSubcommand:

    def test_cargo_invocation(self):
        assert _strip_cargo_subcommand(["disassemble", "main"]) == ["main"]

    def test_direct_invocation(self):
        assert _strip_cargo_subcommand(["main"]) == ["main"]
        assert _strip_cargo_subcommand([]) == []


class TestBuildRunOptions:

    def test_cli_flags(self, config):
        args = _build_parser().parse_args(["foo", "--release", "--features", "a b"])
        options = build_run_options(args, config)
        assert options.function == "foo"
        assert options.build.release
        assert options.build.features == ["a", "b"]
        assert options.color == "auto"

    def test_config_supplies_defaults(self, config):
        config.set("intel", True)
        config.set("everything", True)
        config.set("color", "never")
        options = build_run_options(_build_parser().parse_args([]), config)
        assert options.build.intel
        assert options.everything
        assert options.color == "never"

    def test_cli_color_overrides_config(self, config):
        config.set("color", "never")
        options = build_run_options(_build_parser().parse_args(["--color", "always"]), config)
        assert options.color == "always"


class TestRun:

    def run_with(self, argv, result):
        with patch("cargo_disassemble.main.ConfigManager") as cfg_cls:
            cfg_cls.return_value.get.side_effect = lambda key, default=None: default
            with patch("cargo_disassemble.main.DisassembleEngine") as engine_cls:
                engine_cls.return_value.run.return_value = result
                code = run(argv)
        return code, engine_cls

    def test_success_exit_code(self):
        code, engine_cls = self.run_with(["main"], RunResult(ok=True, functions=1))
        assert code == 0
        options = engine_cls.call_args[0][0]
        assert options.function == "main"

    def test_cargo_subcommand_form(self):
        code, engine_cls = self.run_with(["disassemble", "--everything"], RunResult(ok=True))
        assert code == 0
        assert engine_cls.call_args[0][0].everything

    def test_fatal_error_exit_code(self):
        error = InvalidPatternError("(", "missing )")
        code, _ = self.run_with(["("], RunResult(ok=False, error=error))
        assert code == 1

    def test_build_error_reports_diagnostics(self):
        diag = Diagnostic(severity="error", message="mismatched types", code="E0308")
        error = BuildError("Build failed", diagnostics=[diag])
        with patch("cargo_disassemble.main.logger") as mock_logger:
            code, _ = self.run_with([], RunResult(ok=False, error=error))
        assert code == 1
        logged = [str(c.args[-1]) for c in mock_logger.error.call_args_list]
        assert any("mismatched types" in msg for msg in logged)

    def test_watch_interrupted(self):
        with patch("cargo_disassemble.main.ConfigManager") as cfg_cls:
            cfg_cls.return_value.get.side_effect = lambda key, default=None: default
            with patch("cargo_disassemble.main.DisassembleEngine") as engine_cls:
                engine_cls.return_value.watch.side_effect = KeyboardInterrupt
                assert run(["--watch"]) == 0
                engine_cls.return_value.run.assert_not_called()
