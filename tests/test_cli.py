"""
Tests for the casegen command line.
"""

import pytest
import yaml

from casegen import __version__
from casegen.cli import DSN_ENV, main, parse_args

from conftest import SMALL_VOLUMES


@pytest.fixture
def small_config_file(tmp_path):
    path = tmp_path / "small.yaml"
    path.write_text(yaml.safe_dump({"volumes": dict(SMALL_VOLUMES), "batch_size": 50}))
    return str(path)


class TestParseArgs:
    """Argument parsing."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv(DSN_ENV, raising=False)
        args = parse_args([])
        assert args.dsn is None
        assert args.seed is None
        assert not args.memory
        assert not args.skip_validation

    def test_dsn_from_environment(self, monkeypatch):
        monkeypatch.setenv(DSN_ENV, "postgresql://localhost/demo")
        assert parse_args([]).dsn == "postgresql://localhost/demo"

    def test_flags(self):
        args = parse_args(["--memory", "--seed", "123", "--org", "globex", "--skip-validation"])
        assert args.memory
        assert args.seed == 123
        assert args.org == "globex"
        assert args.skip_validation

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestMain:
    """End-to-end runs through main()."""

    def test_requires_dsn_or_memory(self, monkeypatch, capsys):
        monkeypatch.delenv(DSN_ENV, raising=False)
        assert main([]) == 1
        assert "--dsn" in capsys.readouterr().err

    def test_memory_run_validates(self, small_config_file, capsys):
        assert main(["--memory", "--config", small_config_file]) == 0
        out = capsys.readouterr().out
        assert "Validation: 8/8 checks passed" in out
        assert "Success!" in out

    def test_skip_validation(self, small_config_file, capsys):
        assert main(["--memory", "--config", small_config_file, "--skip-validation"]) == 0
        out = capsys.readouterr().out
        assert "Validation skipped." in out
        assert "Validation Suite" not in out

    def test_bad_config_key(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("colour: red\n")
        assert main(["--memory", "--config", str(path)]) == 1
        assert "Unknown configuration keys" in capsys.readouterr().err

    def test_bad_distribution(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"distributions": {"case_status": {"OPEN": 0, "CLOSED": 0}}}))
        assert main(["--memory", "--config", str(path)]) == 1
        assert "case_status" in capsys.readouterr().err
