"""Tests for the command-line interface"""
import json
from pathlib import Path

import pytest

from branchlet.cli import main, parse_args


@pytest.fixture
def in_repo(git_repo, isolated_global_config, monkeypatch):
    """Run the CLI from inside git_repo with no global settings."""
    monkeypatch.chdir(git_repo.working_dir)
    return Path(git_repo.working_dir)


class TestParseArgs:
    """Test argument parsing."""

    def test_create(self):
        args = parse_args(["create", "-n", "wt", "-s", "origin/main", "-b", "topic"])
        assert args.command == "create"
        assert (args.name, args.source, args.branch) == ("wt", "origin/main", "topic")

    def test_delete_name_and_path_exclusive(self):
        """Test -n and -p cannot be combined."""
        with pytest.raises(SystemExit):
            parse_args(["delete", "-n", "wt", "-p", "/tmp/wt"])

    def test_branches_remote_default(self):
        """Test --remote is tri-state so the setting can decide."""
        assert parse_args(["branches"]).remote is None
        assert parse_args(["branches", "--no-remote"]).remote is False

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("Branchlet v")


class TestMain:
    """Test the CLI end to end against a real repository."""

    def test_create_prints_path(self, in_repo, capsys):
        """Test create prints the new worktree path on stdout."""
        exit_code = main(["create", "-n", "wt", "-s", "main", "-b", "topic"])

        out = capsys.readouterr().out.strip()
        assert exit_code == 0
        assert out == str(in_repo.parent / "test_repo.worktree" / "wt")
        assert Path(out).is_dir()

    def test_missing_name(self, in_repo, capsys):
        """Test a missing --name is an error naming the flag."""
        exit_code = main(["create", "-s", "main"])

        err = capsys.readouterr().err
        assert exit_code == 1
        assert "Error:" in err
        assert "--name" in err

    def test_unknown_source(self, in_repo, capsys):
        """Test a nonexistent source branch fails cleanly."""
        assert main(["create", "-n", "wt", "-s", "nope"]) == 1
        assert "Source branch 'nope' does not exist" in capsys.readouterr().err

    def test_list_json(self, in_repo, capsys):
        """Test list emits path/branch/commit records."""
        main(["create", "-n", "wt", "-s", "main", "-b", "topic"])
        capsys.readouterr()

        assert main(["list", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert [set(entry) for entry in data] == [{"path", "branch", "commit"}] * 2
        assert data[0]["path"] == str(in_repo)
        assert data[0]["branch"] == "main"
        assert data[1]["branch"] == "topic"
        assert len(data[1]["commit"]) == 40

    def test_branches(self, in_repo, capsys):
        """Test the current branch is starred."""
        assert main(["branches"]) == 0
        assert "* main" in capsys.readouterr().out

    def test_delete(self, in_repo, capsys):
        """Test delete by name removes the worktree."""
        main(["create", "-n", "wt", "-s", "main", "-b", "topic"])
        path = Path(capsys.readouterr().out.strip())

        assert main(["delete", "-n", "wt"]) == 0
        assert not path.exists()

    def test_delete_requires_target(self, in_repo, capsys):
        """Test delete without -n or -p fails."""
        assert main(["delete"]) == 1
        assert "--name" in capsys.readouterr().err

    def test_post_create_failure_is_warning(self, in_repo, capsys):
        """Test a failing post-create command warns but still succeeds."""
        (in_repo / ".branchlet.json").write_text(json.dumps({"postCreateCmd": ["exit 5"]}))

        exit_code = main(["create", "-n", "wt", "-s", "main", "-b", "topic"])

        captured = capsys.readouterr()
        assert exit_code == 0
        assert "Warning: post-create command failed:" in captured.err
        assert "exit 5" in captured.err
        assert captured.out.strip().endswith("wt")

    def test_invalid_settings(self, in_repo, capsys):
        """Test a broken settings file is reported as an error."""
        (in_repo / ".branchlet.json").write_text("{oops")
        assert main(["list"]) == 1
        assert "Invalid configuration" in capsys.readouterr().err

    def test_outside_repository(self, temp_dir, isolated_global_config, monkeypatch, capsys):
        """Test running outside a repository exits with 1."""
        plain = temp_dir / "plain"
        plain.mkdir()
        monkeypatch.chdir(plain)
        monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(temp_dir))

        assert main(["list"]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_no_command(self, capsys):
        """Test running without a sub-command prints usage."""
        assert main([]) == 1
        assert "usage:" in capsys.readouterr().err
