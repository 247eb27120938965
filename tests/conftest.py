import pytest

from repomedic.audit import AuditEngine, build_rules
from repomedic.audit.types import FileEntry
from repomedic.config import AuditSettings

# Fake credentials are assembled at runtime so this file does not flag itself.
FAKE_AWS_KEY = "AK" + "IA" + "Q3ZL7XW2N5RT8KVB"
FAKE_GITHUB_TOKEN = "gh" + "p_" + "aB3dE5fG7hJ9kL1mN3pQ5rS7tU9vW1xY3zA5"
FAKE_API_VALUE = "q8Zr1vX4pL0wK7nT3yB6"

HEALTHY_LAYOUT = {
    "README.md": "# demo\n",
    "LICENSE": "MIT License\n",
    ".gitignore": "*.pyc\n",
    "tests/test_app.py": "def test_ok():\n    assert True\n",
    ".github/workflows/ci.yml": "on: [push]\n",
}


def write_tree(root, layout):
    """Create ``layout`` (relative path -> str or bytes) under ``root``."""
    for rel, content in layout.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content)
    return root


def entries(*paths, size=10, is_text=True):
    return [FileEntry(path=p, size=size, is_text=is_text) for p in paths]


@pytest.fixture(scope="session")
def rules():
    """Compiled built-in rule set, shared across the session."""
    return build_rules()


@pytest.fixture
def settings():
    return AuditSettings(workers=1, extra_ignores=())


@pytest.fixture
def engine(rules, settings):
    return AuditEngine(rules=rules, settings=settings)


@pytest.fixture
def make_repo(tmp_path):
    def _make(layout):
        return write_tree(tmp_path, layout)
    return _make


@pytest.fixture
def healthy_repo(make_repo):
    return make_repo(HEALTHY_LAYOUT)
