"""
Shared pytest fixtures for the bibsync test suite.
"""

import pytest

from bibsync.config.settings import Settings
from bibsync.core.models import Repository
from tests.fakes import FakeHTTP, FakeVersionControl


SAMPLE_BIB = """@article{DBLP:journals/pieee/Shannon49,
  author    = {Claude E. Shannon},
  title     = {Communication in the Presence of Noise},
  journal   = {Proc. {IRE}},
  volume    = {37},
  number    = {1},
  pages     = {10--21},
  year      = {1949},
  doi       = {10.1109/JRPROC.1949.232969}
}

@article{DBLP:journals/corr/abs-2207-02820,
  author    = {Jane Doe and John Smith},
  title     = {A {Study} of Transformers},
  journal   = {CoRR},
  year      = {2022},
  doi       = {10.48550/ARXIV.2207.02820}
}

@misc{notes2020,
  author    = {Ann Author},
  title     = {Unpublished Notes},
  year      = {2020}
}
"""


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def store_root(tmp_path):
    root = tmp_path / ".bibsync"
    root.mkdir()
    return root


@pytest.fixture
def bib_file(store_root):
    path = store_root / "references.bib"
    path.write_text(SAMPLE_BIB, encoding="utf-8")
    return path


@pytest.fixture
def remote_repository(store_root):
    return Repository(root=store_root, remote="git@example.test:me/library.git")


@pytest.fixture
def fake_vcs():
    return FakeVersionControl()


@pytest.fixture
def fake_http():
    return FakeHTTP()
