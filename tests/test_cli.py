"""
Tests for the Latin command line.
"""

import pytest
from click.testing import CliRunner
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from latin_cli import latin
from core.logger import AuditLogger


@pytest.fixture
def audit_path(tmp_path):
    return tmp_path / "audit.jsonl"


@pytest.fixture
def config_path(tmp_path, audit_path):
    """Create a config file that keeps the audit log inside tmp_path."""
    path = tmp_path / "latin.yaml"
    path.write_text(f"""latin:
  line_separator: unix
  audit_log: {audit_path.as_posix()}
""", encoding="utf-8")
    return path


@pytest.fixture
def run(config_path):
    """Invoke the CLI with the temporary config."""
    runner = CliRunner()

    def invoke(*args, **kwargs):
        return runner.invoke(latin, ["--config", str(config_path), *map(str, args)], **kwargs)

    return invoke


class TestReadCommands:
    """Test exists, cat, lines and has-ext."""

    def test_exists(self, run, tmp_path):
        """exists exits 0 for files and 1 otherwise."""
        target = tmp_path / "a.txt"
        target.write_bytes(b"")

        assert run("exists", target).exit_code == 0
        assert run("exists", tmp_path).exit_code == 1
        assert run("exists", "--dir", tmp_path).exit_code == 0

    def test_cat(self, run, tmp_path):
        """cat prints the file verbatim."""
        target = tmp_path / "a.txt"
        target.write_bytes("héllo\n".encode("utf-8"))

        result = run("cat", target)

        assert result.exit_code == 0
        assert result.output == "héllo\n"

    def test_cat_invalid_utf8(self, run, tmp_path):
        """Strict cat fails on bad bytes; --lossy does not."""
        target = tmp_path / "bad.txt"
        target.write_bytes(b"x\xffy")

        assert run("cat", target).exit_code == 1

        lossy = run("cat", "--lossy", target)
        assert lossy.exit_code == 0
        assert lossy.output == "x�y"

    def test_cat_missing(self, run, tmp_path):
        """A missing file is reported as an error."""
        result = run("cat", tmp_path / "missing.txt")

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_lines(self, run, tmp_path):
        """lines prints each line; bad lines are reported and skipped."""
        target = tmp_path / "l.txt"
        target.write_bytes(b"one\n\xff\nthree\n")

        result = run("lines", "-n", target)

        assert result.exit_code == 1
        assert "1\tone" in result.output
        assert "3\tthree" in result.output
        assert "line 2" in result.output

    def test_has_ext(self, run):
        """has-ext reports the final extension."""
        assert run("has-ext", "a.tar.gz", "gz").exit_code == 0
        assert run("has-ext", "a", "gz").exit_code == 1


class TestWriteCommands:
    """Test write, append, cp and rm."""

    def test_write_and_append(self, run, tmp_path):
        """write overwrites, append adds."""
        target = tmp_path / "w.txt"

        assert run("write", target, "hello", "world").exit_code == 0
        assert target.read_bytes() == b"hello world"

        assert run("append", target, "!").exit_code == 0
        assert target.read_bytes() == b"hello world!"

    def test_write_lines_uses_config_separator(self, run, tmp_path):
        """--lines writes one TEXT per line with the configured terminator."""
        target = tmp_path / "w.txt"

        assert run("write", "--lines", target, "x", "y").exit_code == 0
        assert target.read_bytes() == b"x\ny\n"

        assert run("append", "--newline", target, "z").exit_code == 0
        assert target.read_bytes() == b"x\ny\nz\n"

    def test_write_missing_parent(self, run, tmp_path, audit_path):
        """A failed write exits 1 and is logged as failed."""
        result = run("write", tmp_path / "nope" / "w.txt", "data")

        assert result.exit_code == 1
        failed = AuditLogger(log_path=str(audit_path)).get_failed()
        assert len(failed) == 1

    def test_cp_and_rm(self, run, tmp_path, audit_path):
        """cp copies, rm removes, both are audited."""
        src = tmp_path / "src.txt"
        dst = tmp_path / "dst.txt"
        src.write_bytes(b"copy me")

        assert run("cp", src, dst).exit_code == 0
        assert dst.read_bytes() == b"copy me"

        assert run("rm", src).exit_code == 0
        assert not src.exists()

        entries = AuditLogger(log_path=str(audit_path)).get_recent()
        assert [e.status for e in entries] == ["executed", "executed"]
        assert entries[0].action_type == "delete"


class TestDirectoryCommands:
    """Test ls and rmdir."""

    @pytest.fixture
    def tree(self, tmp_path):
        root = tmp_path / "d"
        root.mkdir()
        (root / "a.txt").write_bytes(b"a")
        (root / "b").mkdir()
        (root / "b" / "c.txt").write_bytes(b"c")
        return root

    def test_ls(self, run, tree):
        """ls shows every child; --files and --dirs filter."""
        result = run("ls", tree)
        assert result.exit_code == 0
        assert "a.txt" in result.output
        assert "b" in result.output

        assert "c.txt" not in result.output

        files_only = run("ls", "--files", tree)
        assert files_only.exit_code == 0
        assert "a.txt" in files_only.output

        dirs_only = run("ls", "--dirs", tree)
        assert dirs_only.exit_code == 0
        assert "a.txt" not in dirs_only.output

    def test_ls_missing(self, run, tmp_path):
        """Listing a missing directory is an error."""
        assert run("ls", tmp_path / "missing").exit_code == 1

    def test_rmdir_confirms(self, run, tree):
        """rmdir asks first and does nothing when declined."""
        declined = run("rmdir", tree, input="n\n")

        assert declined.exit_code == 1
        assert tree.exists()

        accepted = run("rmdir", tree, input="y\n")

        assert accepted.exit_code == 0
        assert not tree.exists()

    def test_rmdir_yes(self, run, tree):
        """--yes skips the prompt."""
        assert run("rmdir", "--yes", tree).exit_code == 0
        assert not tree.exists()


class TestConfigAndAudit:
    """Test config and audit commands."""

    def test_config_show(self, run):
        """Current settings are listed."""
        result = run("config", "show")

        assert result.exit_code == 0
        assert "line_separator: unix" in result.output

    def test_config_set(self, run, config_path):
        """Valid values are saved; invalid ones are rejected."""
        assert run("config", "set", "line_separator", "windows").exit_code == 0
        assert "windows" in config_path.read_text(encoding="utf-8")

        assert run("config", "set", "line_separator", "mac").exit_code == 1
        assert run("config", "set", "colour", "blue").exit_code == 1

    def test_config_set_invalid_yaml(self, run, config_path):
        """A value that isn't valid YAML is reported, not raised."""
        before = config_path.read_text(encoding="utf-8")

        result = run("config", "set", "audit_log", "[x")

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error" in result.output
        assert config_path.read_text(encoding="utf-8") == before

    def test_config_set_empty_audit_log(self, run, tmp_path):
        """A null audit_log is rejected so later commands keep working."""
        assert run("config", "set", "audit_log", "~").exit_code == 1

        result = run("write", tmp_path / "x.txt", "x")

        assert result.exit_code == 0
        assert (tmp_path / "x.txt").read_bytes() == b"x"

    def test_string_flag_in_config_file(self, tmp_path):
        """A quoted 'no' flag stops the command before anything is written."""
        log = tmp_path / "a.jsonl"
        config = tmp_path / "bad.yaml"
        config.write_text(f"latin:\n  audit: 'no'\n  audit_log: {log.as_posix()}\n", encoding="utf-8")
        runner = CliRunner()

        result = runner.invoke(latin, ["--config", str(config), "write", str(tmp_path / "x.txt"), "x"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "audit" in result.output
        assert not log.exists()
        assert not (tmp_path / "x.txt").exists()

        repaired = runner.invoke(latin, ["--config", str(config), "config", "set", "audit", "false"])

        assert repaired.exit_code == 0
        assert runner.invoke(latin, ["--config", str(config), "write", str(tmp_path / "x.txt"), "x"]).exit_code == 0
        assert not log.exists()

    def test_audit(self, run, tmp_path):
        """The audit table lists recent actions."""
        assert "No audit entries" in run("audit").output

        run("write", tmp_path / "x.txt", "x")
        result = run("audit")

        assert result.exit_code == 0
        assert "executed" in result.output

    def test_audit_disabled(self, tmp_path):
        """With audit: false nothing is logged."""
        log = tmp_path / "off.jsonl"
        config = tmp_path / "off.yaml"
        config.write_text(f"latin:\n  audit: false\n  audit_log: {log.as_posix()}\n", encoding="utf-8")

        result = CliRunner().invoke(latin, ["--config", str(config), "write", str(tmp_path / "x.txt"), "x"])

        assert result.exit_code == 0
        assert not log.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
