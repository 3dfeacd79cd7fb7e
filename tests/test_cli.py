"""
Tests for the command line interface.

The locator and working directory are injected through the click context
object, so no command touches the real home directory or a git binary.
"""

import pytest
from click.testing import CliRunner

from bibsync.cli import main as cli_main
from bibsync.cli.main import cli
from bibsync.config.locator import DefaultDirectory, RepositoryLocator
from bibsync.pipeline.retrieve import build_router
from bibsync.sources.dblp import DblpClient
from tests.conftest import SAMPLE_BIB
from tests.fakes import FakeHTTP, FakeResponse, FakeVersionControl


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def default_home(tmp_path):
    return tmp_path / "home-library"


def make_obj(tmp_path, default_home, vcs):
    locator = RepositoryLocator(
        DefaultDirectory(environ={"BIBSYNC_HOME": str(default_home)}),
        vcs_factory=lambda root: vcs,
    )
    return {"locator": locator, "cwd": tmp_path}


@pytest.fixture
def local_obj(tmp_path, default_home):
    """Context object for a store without a git remote."""
    return make_obj(tmp_path, default_home, FakeVersionControl(repository=False))


@pytest.fixture
def populated_store(tmp_path):
    root = tmp_path / ".bibsync"
    root.mkdir()
    (root / "references.bib").write_text(SAMPLE_BIB, encoding="utf-8")
    return root


class TestInit:
    def test_init_local(self, runner, tmp_path, local_obj):
        result = runner.invoke(cli, ["init", "--local"], obj=local_obj)

        assert result.exit_code == 0, result.output
        root = tmp_path / ".bibsync"
        assert "Store ready" in result.output
        assert (root / "config.yaml").exists()
        assert (root / "references.bib").exists()
        assert (root / ".gitignore").read_text() == "pdfs/\n.DS_Store\n"

    def test_init_default_directory(self, runner, default_home, local_obj):
        result = runner.invoke(cli, ["init"], obj=local_obj)

        assert result.exit_code == 0, result.output
        assert (default_home / "references.bib").exists()

    def test_init_with_remote(self, runner, tmp_path, default_home):
        vcs = FakeVersionControl(repository=False)
        obj = make_obj(tmp_path, default_home, vcs)

        result = runner.invoke(cli, ["init", "--local", "--git", "git@example.test:me/lib.git"], obj=obj)

        assert result.exit_code == 0, result.output
        assert "Remote: git@example.test:me/lib.git" in result.output
        assert ("bind_remote", "git@example.test:me/lib.git") in vcs.calls
        assert vcs.operations[-2:] == ["status", "pull_rebase"]

    def test_init_git_failure_is_reported(self, runner, tmp_path, default_home):
        vcs = FakeVersionControl(repository=False, fail_on={"pull_rebase"})
        obj = make_obj(tmp_path, default_home, vcs)

        result = runner.invoke(cli, ["init", "--local", "--git", "git@example.test:me/lib.git"], obj=obj)

        assert result.exit_code == 1
        assert "git pull_rebase failed" in result.output


class TestSync:
    def test_sync_without_remote(self, runner, populated_store, local_obj):
        result = runner.invoke(cli, ["sync"], obj=local_obj)

        assert result.exit_code == 0
        assert "nothing to sync" in result.output

    def test_sync_with_remote(self, runner, tmp_path, default_home, populated_store):
        vcs = FakeVersionControl(dirty=True, remote_url="git@example.test:me/lib.git")
        obj = make_obj(tmp_path, default_home, vcs)

        result = runner.invoke(cli, ["sync"], obj=obj)

        assert result.exit_code == 0, result.output
        assert "Synced." in result.output
        assert vcs.operations[-5:] == ["status", "stage_all", "commit", "pull_rebase", "push"]


class TestList:
    def test_lists_entries(self, runner, populated_store, local_obj):
        result = runner.invoke(cli, ["list"], obj=local_obj)

        assert result.exit_code == 0
        assert "Communication in the Presence of Noise" in result.output
        assert "A Study of Transformers" in result.output
        assert "Shannon, Claude E." in result.output

    def test_found_from_subdirectory(self, runner, tmp_path, default_home, populated_store):
        nested = tmp_path / "chapters" / "intro"
        nested.mkdir(parents=True)
        obj = make_obj(nested, default_home, FakeVersionControl(repository=False))

        result = runner.invoke(cli, ["list"], obj=obj)

        assert "Unpublished Notes" in result.output


class TestRemove:
    def test_remove_forced(self, runner, populated_store, local_obj):
        result = runner.invoke(cli, ["rm", "--force", "Unpublished"], obj=local_obj, input="1\n")

        assert result.exit_code == 0, result.output
        assert "Removed Unpublished Notes" in result.output
        assert "notes2020" not in (populated_store / "references.bib").read_text()

    def test_remove_declined(self, runner, populated_store, local_obj):
        result = runner.invoke(cli, ["rm", "Unpublished"], obj=local_obj, input="1\nn\n")

        assert result.exit_code == 0
        assert "notes2020" in (populated_store / "references.bib").read_text()

    def test_remove_no_match(self, runner, populated_store, local_obj):
        result = runner.invoke(cli, ["rm", "--force", "quantum gravity"], obj=local_obj)

        assert result.exit_code == 1
        assert "No entry found" in result.output

    def test_remove_syncs_when_bound(self, runner, tmp_path, default_home, populated_store):
        vcs = FakeVersionControl(dirty=True, remote_url="git@example.test:me/lib.git")
        obj = make_obj(tmp_path, default_home, vcs)

        result = runner.invoke(cli, ["rm", "--force", "10.1109/JRPROC.1949.232969"], obj=obj, input="1\n")

        assert result.exit_code == 0, result.output
        assert "push" in vcs.operations


class TestIndex:
    def test_index_adds_selected_entry(self, runner, monkeypatch, populated_store, local_obj):
        def fake_client(settings):
            dblp = settings.sources.dblp
            payload = {
                "result": {
                    "hits": {
                        "hit": [
                            {
                                "info": {
                                    "authors": {"author": {"text": "Ashish Vaswani"}},
                                    "title": "Attention is All you Need.",
                                    "venue": "NIPS",
                                    "year": "2017",
                                    "key": "conf/nips/VaswaniSPUJGKP17",
                                }
                            }
                        ]
                    }
                }
            }
            bib_url = dblp.bib_url_template.format(key="conf/nips/VaswaniSPUJGKP17")
            http = FakeHTTP(
                {
                    dblp.search_url: FakeResponse(json_data=payload),
                    bib_url: "@inproceedings{DBLP:conf/nips/VaswaniSPUJGKP17, title = {Attention is All you Need}}",
                }
            )
            return DblpClient(settings, http=http)

        monkeypatch.setattr(cli_main, "DblpClient", fake_client)

        result = runner.invoke(cli, ["index", "attention", "is", "all"], obj=local_obj, input="1\n")

        assert result.exit_code == 0, result.output
        assert "Added Attention is All you Need" in result.output
        assert "DBLP:conf/nips/VaswaniSPUJGKP17" in (populated_store / "references.bib").read_text()

    def test_index_without_hits(self, runner, monkeypatch, populated_store, local_obj):
        def fake_client(settings):
            payload = {"result": {"hits": {"@total": "0"}}}
            return DblpClient(settings, http=FakeHTTP({settings.sources.dblp.search_url: FakeResponse(json_data=payload)}))

        monkeypatch.setattr(cli_main, "DblpClient", fake_client)

        result = runner.invoke(cli, ["index", "nothing"], obj=local_obj)

        assert result.exit_code == 1
        assert "No articles found for: nothing" in result.output


class TestPdfs:
    def test_pdfs_summary(self, runner, monkeypatch, populated_store, local_obj):
        http = FakeHTTP(
            {
                "https://arxiv.org/pdf/2207.02820.pdf": b"%PDF-arxiv",
                "https://sci-hub.ru/10.1109/JRPROC.1949.232969": "<html>captcha</html>",
            }
        )
        monkeypatch.setattr(cli_main, "build_router", lambda settings, pdf_dir: build_router(settings, pdf_dir, http))

        result = runner.invoke(cli, ["pdfs"], obj=local_obj)

        assert result.exit_code == 0, result.output
        assert "Downloaded: 1, Cached: 0, Failed: 2" in result.output
        assert (populated_store / "pdfs" / "10.48550--ARXIV.2207.02820.pdf").read_bytes() == b"%PDF-arxiv"

    def test_pdfs_second_run_uses_cache(self, runner, monkeypatch, populated_store, local_obj):
        pdf_dir = populated_store / "pdfs"
        pdf_dir.mkdir()
        (pdf_dir / "10.48550--ARXIV.2207.02820.pdf").write_bytes(b"%PDF")
        (pdf_dir / "10.1109--JRPROC.1949.232969.pdf").write_bytes(b"%PDF")
        http = FakeHTTP()
        monkeypatch.setattr(cli_main, "build_router", lambda settings, pdf_dir: build_router(settings, pdf_dir, http))

        result = runner.invoke(cli, ["pdfs"], obj=local_obj)

        assert "Downloaded: 0, Cached: 2, Failed: 1" in result.output
        assert http.requests == []
