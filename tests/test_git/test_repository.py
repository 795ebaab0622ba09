"""Tests for gitup.git.repository (output parsing and real repos)."""

from pathlib import Path

import pytest

from gitup.core.errors import NotARepositoryError
from gitup.core.models import Branch, RemoteRef
from gitup.git.repository import GitRepository, fetch_args

REF_CMD = ["git", "for-each-ref", "--format=%(refname) %(objectname)"]


class TestFetchArgs:

    def test_named_remotes(self):
        assert fetch_args(["origin", "upstream"]) == ["fetch", "--multiple", "origin", "upstream"]

    def test_prune_and_all(self):
        assert fetch_args(["origin"], all_remotes=True, prune=True) == [
            "fetch", "--multiple", "--prune", "--all",
        ]


class TestParsing:
    """GitRepository against canned git output."""

    def test_local_branches(self, fp, tmp_path):
        fp.register(
            REF_CMD + ["refs/heads/"],
            stdout="refs/heads/main aaa111\nrefs/heads/feature/login bbb222\n",
        )
        repo = GitRepository(tmp_path)
        assert repo.local_branches() == [
            Branch("main", "aaa111"),
            Branch("feature/login", "bbb222"),
        ]

    def test_remote_refs_skip_head(self, fp, tmp_path):
        fp.register(
            REF_CMD + ["refs/remotes/"],
            stdout=(
                "refs/remotes/origin/HEAD aaa111\n"
                "refs/remotes/origin/main aaa111\n"
                "refs/remotes/upstream/release/1.0 ccc333\n"
            ),
        )
        refs = GitRepository(tmp_path).remote_refs()
        assert refs == [
            RemoteRef("origin/main", "aaa111"),
            RemoteRef("upstream/release/1.0", "ccc333"),
        ]
        assert refs[1].remote == "upstream"
        assert refs[1].branch == "release/1.0"

    def test_config_get(self, fp, tmp_path):
        fp.register(["git", "config", "--get", "git-up.sort"], stdout="true\n")
        fp.register(["git", "config", "--get", "git-up.log-hook"], returncode=1)
        repo = GitRepository(tmp_path)
        assert repo.config_get("git-up.sort") == "true"
        assert repo.config_get("git-up.log-hook") is None

    def test_status_groups_changes(self, fp, tmp_path):
        fp.register(
            ["git", "diff-index", "-z", "--name-status", "HEAD"],
            stdout="A\0new.txt\0M\0lib/a b.py\0D\0old.txt\0T\0link\0",
        )
        status = GitRepository(tmp_path).status()
        assert status.added == ["new.txt"]
        assert status.changed == ["lib/a b.py", "link"]
        assert status.deleted == ["old.txt"]

    def test_status_without_head(self, fp, tmp_path):
        fp.register(["git", "diff-index", "-z", "--name-status", "HEAD"], returncode=128)
        assert GitRepository(tmp_path).status().paths() == []

    def test_short_status(self, fp, tmp_path):
        fp.register(
            ["git", "status", "--porcelain", "-z"],
            stdout=" M lib/a b.py\0R  renamed.txt\0original.txt\0?? scratch.txt\0",
        )
        assert GitRepository(tmp_path).short_status() == [
            "lib/a b.py",
            "renamed.txt",
            "scratch.txt",
        ]

    def test_merge_base(self, fp, tmp_path):
        fp.register(["git", "merge-base", "aaa", "bbb"], stdout="ccc\n")
        fp.register(["git", "merge-base", "aaa", "zzz"], returncode=1)
        repo = GitRepository(tmp_path)
        assert repo.merge_base("aaa", "bbb") == "ccc"
        assert repo.merge_base("aaa", "zzz") == ""

    def test_current_branch_detached(self, fp, tmp_path):
        fp.register(["git", "symbolic-ref", "-q", "--short", "HEAD"], returncode=1)
        assert GitRepository(tmp_path).current_branch() is None

    def test_version(self, mock_git_basic, tmp_path):
        assert GitRepository(tmp_path).version() == "2.43.0"

    def test_rebase_returns_combined_output(self, fp, tmp_path):
        fp.register(
            ["git", "rebase", "origin/main"],
            returncode=1,
            stdout="CONFLICT (content): Merge conflict in a.txt\n",
            stderr="error: could not apply abc123\n",
        )
        ok, output = GitRepository(tmp_path).rebase("origin/main")
        assert ok is False
        assert "CONFLICT" in output
        assert "could not apply" in output

    def test_fetch_reports_failure(self, fp, tmp_path):
        fp.register(["git", "fetch", "--multiple", "--prune", "origin"], returncode=1)
        assert GitRepository(tmp_path).fetch(["origin"], prune=True) is False

    def test_discover_outside_repo(self, fp, tmp_path):
        fp.register(["git", "rev-parse", "--show-toplevel"], returncode=128)
        with pytest.raises(NotARepositoryError):
            GitRepository.discover(tmp_path)


class TestUnlimitedTimeout:

    def test_restores_previous_timeout(self, tmp_path):
        repo = GitRepository(tmp_path, timeout=30)
        with repo.unlimited_timeout():
            assert repo.timeout is None
        assert repo.timeout == 30

    def test_restores_after_error(self, tmp_path):
        repo = GitRepository(tmp_path, timeout=30)
        with pytest.raises(RuntimeError):
            with repo.unlimited_timeout():
                raise RuntimeError("boom")
        assert repo.timeout == 30


class TestRealRepository:
    """GitRepository against an actual git repository."""

    def test_discover_from_subdir(self, git_workspace):
        subdir = git_workspace / "sub" / "dir"
        subdir.mkdir(parents=True)
        repo = GitRepository.discover(subdir)
        assert repo.path.resolve() == git_workspace.resolve()

    def test_branches_and_current(self, git_workspace):
        repo = GitRepository(git_workspace)
        branches = repo.local_branches()
        assert [b.name for b in branches] == ["main"]
        assert repo.current_branch() == "main"
        assert repo.remote_refs() == []

    def test_untracked_file_not_in_status(self, git_workspace):
        (git_workspace / "scratch.txt").write_text("notes")
        (git_workspace / "README.md").write_text("changed\n")
        repo = GitRepository(git_workspace)
        assert repo.status().changed == ["README.md"]
        assert set(repo.short_status()) == {"README.md", "scratch.txt"}

    def test_checkout_unknown_branch_keeps_position(self, git_workspace):
        repo = GitRepository(git_workspace)
        output = repo.checkout("does-not-exist")
        assert "does-not-exist" in output
        assert repo.current_branch() == "main"

    def test_version_is_parsed(self, git_workspace):
        assert GitRepository(git_workspace).version()
