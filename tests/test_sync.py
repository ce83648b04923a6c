import gw
from conftest import create_remote_branch, delete_remote_branch, git
from gwlib import sync


def _checkout_remote(project, origin_repo, name):
    create_remote_branch(origin_repo, name)
    git("fetch", "origin", cwd=project / ".store")
    return gw.checkout(str(project), name)


def test_nothing_to_prune(project, capsys):
    report = gw.sync_project(str(project))
    assert report.stale == []
    assert report.pruned == 0
    assert "nothing to prune" in capsys.readouterr().err
    assert (project / "main").is_dir()


def test_prunes_worktree_whose_remote_branch_is_gone(project, origin_repo, capsys):
    path = _checkout_remote(project, origin_repo, "feature-gone")
    delete_remote_branch(origin_repo, "feature-gone")

    report = gw.sync_project(str(project), force=True)

    assert [wt["branch"] for wt in report.stale] == ["feature-gone"]
    assert report.pruned == 1
    assert report.failed == 0
    assert not (project / "feature-gone").exists()
    assert path not in git("worktree", "list", cwd=project / ".store").stdout
    assert git("branch", "--list", "feature-gone", cwd=project / ".store").stdout == ""
    assert "pruned 1 worktree(s)" in capsys.readouterr().err


def test_keeps_worktrees_with_remote_branch(project, origin_repo):
    _checkout_remote(project, origin_repo, "feature-alive")
    report = gw.sync_project(str(project))
    assert report.stale == []
    assert (project / "feature-alive").is_dir()


def test_dry_run_reports_without_removing(project, origin_repo, capsys):
    _checkout_remote(project, origin_repo, "feature-old")
    delete_remote_branch(origin_repo, "feature-old")

    report = gw.sync_project(str(project), dry_run=True)

    assert report.dry_run
    assert [wt["branch"] for wt in report.stale] == ["feature-old"]
    assert report.pruned == 0
    assert (project / "feature-old").is_dir()
    err = capsys.readouterr().err
    assert "would prune:" in err
    assert "  feature-old" in err


def test_local_only_branch_counts_as_stale(project):
    gw.create(str(project), "scratch")
    report = gw.sync_project(str(project))
    assert report.pruned == 1
    assert not (project / "scratch").exists()
    assert git("branch", "--list", "scratch", cwd=project / ".store").stdout == ""


def test_head_worktree_is_never_pruned(project, monkeypatch):
    monkeypatch.setattr(sync, "remote_branch_exists", lambda name, cwd: False)
    gw.create(str(project), "other")

    report = gw.sync_project(str(project))

    assert [wt["branch"] for wt in report.stale] == ["other"]
    assert (project / "main").is_dir()


def test_failure_on_one_entry_does_not_stop_the_rest(project, capsys):
    gw.create(str(project), "dirty")
    (project / "dirty" / "notes.txt").write_text("uncommitted\n")
    gw.create(str(project), "clean")

    report = gw.sync_project(str(project))

    assert report.pruned == 1
    assert report.failed == 1
    assert (project / "dirty").is_dir()
    assert not (project / "clean").exists()
    err = capsys.readouterr().err
    assert "warning: could not remove 'dirty'" in err
    assert "pruned 1 worktree(s), 1 failed" in err


def test_fetch_failure_is_only_a_warning(project, capsys):
    git("remote", "set-url", "origin", str(project / "missing.git"), cwd=project / ".store")
    gw.create(str(project), "scratch")

    report = gw.sync_project(str(project))

    assert report.pruned == 1
    assert "warning: fetch failed" in capsys.readouterr().err
