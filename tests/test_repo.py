import subprocess

import pytest

from snake.cli.repo import Repo


@pytest.fixture
def recorded(monkeypatch):
    calls = []

    def fake_run(cmd, **kwargs):
        calls.append(cmd)
        return subprocess.CompletedProcess(cmd, 0)

    monkeypatch.setattr(subprocess, "run", fake_run)
    return calls


def test_path_uses_repository_name(tmp_path):
    repo = Repo("https://example.com/org/layout.git", home=tmp_path)
    assert repo.path() == tmp_path / "layout"


def test_path_without_git_suffix_is_rejected(tmp_path):
    repo = Repo("https://example.com/org/layout", home=tmp_path)
    with pytest.raises(ValueError):
        repo.path()


def test_clone_when_missing(tmp_path, recorded):
    url = "https://example.com/org/layout.git"
    repo = Repo(url, home=tmp_path)
    repo.clone()
    assert recorded == [["git", "clone", url, str(tmp_path / "layout")]]


def test_clone_pulls_when_present(tmp_path, recorded):
    repo = Repo("https://example.com/org/layout.git", home=tmp_path)
    repo.path().mkdir()
    repo.clone()
    assert recorded == [["git", "-C", str(tmp_path / "layout"), "pull", "origin"]]


def test_pull_failure_propagates(tmp_path, monkeypatch):
    def fake_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd)

    monkeypatch.setattr(subprocess, "run", fake_run)
    repo = Repo("https://example.com/org/layout.git", home=tmp_path)
    with pytest.raises(subprocess.CalledProcessError):
        repo.pull()


def test_copy_to_renames_module(tmp_path, recorded):
    home = tmp_path / "home"
    repo = Repo("https://example.com/org/layout.git", home=home)
    local = repo.path()
    (local / ".git").mkdir(parents=True)
    (local / ".git" / "HEAD").write_text("ref", encoding="utf-8")
    (local / "go.mod").write_text("module example.com/layout\n", encoding="utf-8")
    (local / "main.go").write_text('import "example.com/layout/internal"\n', encoding="utf-8")
    dst = tmp_path / "hello"
    repo.copy_to(dst, "hello", [".git"])
    assert (dst / "go.mod").read_text(encoding="utf-8") == "module hello\n"
    assert (dst / "main.go").read_text(encoding="utf-8") == 'import "hello/internal"\n'
    assert not (dst / ".git").exists()
    assert recorded[0][:3] == ["git", "-C", str(local)]