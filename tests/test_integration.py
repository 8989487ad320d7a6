"""
End-to-end tests against real git repositories.

Tests cover:
- Cleaning a dirty clone with stale branches
- Idempotence on an already clean repository
- A batch with one failing repository
"""

import shutil

import pytest

from repo_janitor.core.locator import RepositoryLocator
from repo_janitor.core.runner import BatchRunner
from repo_janitor.core.sequencer import CleanupSequencer
from repo_janitor.models.cleanup import CleanupStatus, CleanupStep

pytestmark = pytest.mark.skipif(
    shutil.which("git") is None,
    reason="git executable not available"
)


def local_branches(git, repo):
    return git(repo, "branch", "--format=%(refname:short)").split()


class TestCleanupAgainstGit:
    """Tests running the full sequence on real working copies."""

    def test_cleans_dirty_repository(self, clone_repo, git):
        repo = clone_repo("project")
        git(repo, "checkout", "-b", "feature-x")
        (repo / "feature.txt").write_text("work in progress\n")
        git(repo, "add", "feature.txt")
        git(repo, "commit", "-m", "Unmerged work")
        git(repo, "branch", "feature-y")
        (repo / "README.md").write_text("local edit\n")
        (repo / "scratch").mkdir()
        (repo / "scratch" / "notes.txt").write_text("untracked\n")

        result = CleanupSequencer().run(repo)

        assert result.status == CleanupStatus.SUCCESS, result.output
        assert result.primary_branch == "main"
        assert sorted(result.deleted_branches) == ["feature-x", "feature-y"]
        assert local_branches(git, repo) == ["main"]
        assert (repo / "README.md").read_text() == "# Test Repository\n"
        assert not (repo / "scratch").exists()
        assert not (repo / "feature.txt").exists()

    def test_second_run_is_a_no_op(self, clone_repo, git):
        repo = clone_repo("project")
        git(repo, "branch", "stale")
        sequencer = CleanupSequencer()

        first = sequencer.run(repo)
        second = sequencer.run(repo)

        assert first.succeeded, first.output
        assert first.deleted_branches == ["stale"]
        assert second.succeeded, second.output
        assert second.deleted_branches == []

    def test_missing_primary_branch(self, clone_repo, git):
        repo = clone_repo("project")
        git(repo, "checkout", "-b", "feature-only")
        git(repo, "branch", "-D", "main")
        (repo / "untracked.txt").write_text("keep me\n")

        result = CleanupSequencer().run(repo)

        assert result.failed_step == CleanupStep.CHECKOUT
        assert result.error == "no master/main branch found"
        assert "feature-only" in result.output
        assert (repo / "untracked.txt").exists()
        assert local_branches(git, repo) == ["feature-only"]

    def test_batch_with_one_failure(self, clone_repo, git, temp_directory):
        clone_repo("team/one")
        clone_repo("team/two")
        orphan = temp_directory / "workspace" / "orphan"
        orphan.mkdir()
        git(orphan, "init")
        git(orphan, "symbolic-ref", "HEAD", "refs/heads/main")
        (orphan / "file.txt").write_text("content\n")
        git(orphan, "add", ".")
        git(orphan, "commit", "-m", "Local only")

        paths = RepositoryLocator().find_repositories(temp_directory / "workspace")
        report = BatchRunner().run(paths, root=temp_directory / "workspace")

        assert [p.name for p in paths] == ["orphan", "one", "two"]
        assert report.successful == 2
        assert report.failed == 1
        failure = report.failures[0]
        assert failure.repository_path == orphan
        assert failure.failed_step == CleanupStep.PULL
        assert failure.output
