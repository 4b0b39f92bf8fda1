"""Shared fixtures for portscore tests."""
import json

import pytest

from portscore.analyzers.models import RepositoryFile


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Isolate every test from the developer's real config.

    HOME and the working directory point at an empty temp directory, the
    PORTSCORE_* env vars are cleared and the config singleton is reset.
    """
    home = tmp_path / "home"
    home.mkdir()
    workdir = tmp_path / "cwd"
    workdir.mkdir()

    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(workdir)
    for var in ("PORTSCORE_MAX_FILES", "PORTSCORE_FORMAT", "PORTSCORE_PLAIN",
                "PORTSCORE_LOG_LEVEL", "PORTSCORE_DEBUG"):
        monkeypatch.delenv(var, raising=False)

    from portscore.core import config_service
    monkeypatch.setattr(config_service, "_global_config_dir", lambda: home / ".config" / "portscore")
    config_service.reset_config_service()
    yield workdir
    config_service.reset_config_service()


def package_json(dependencies=None, dev_dependencies=None, scripts=None) -> RepositoryFile:
    """Build a root package.json record."""
    data = {"name": "test-app", "version": "1.0.0"}
    if dependencies is not None:
        data["dependencies"] = dependencies
    if dev_dependencies is not None:
        data["devDependencies"] = dev_dependencies
    if scripts is not None:
        data["scripts"] = scripts
    return RepositoryFile(path="package.json", content=json.dumps(data, indent=2))


COMPLIANT_SERVER = """\
const express = require('express');
const cors = require('cors');
const passport = require('passport');

const app = express();
app.use(cors());

app.get('/health', (req, res) => res.json({ status: 'ok' }));

const port = process.env.PORT || 3000;
app.listen(port);
"""

BARE_SERVER = """\
const express = require('express');
const app = express();

app.get('/', (req, res) => res.send('hello'));

app.listen(3000);
"""

LOCAL_STORE = """\
const fs = require('fs');

function save(state) {
  fs.writeFileSync('state.json', JSON.stringify(state));
}

module.exports = { save };
"""

ELECTRON_MAIN = """\
const { app, BrowserWindow, ipcMain } = require('electron');

ipcMain.handle('save', async () => true);
"""


@pytest.fixture
def compliant_web_app():
    return [
        package_json({"express": "^4.18.0", "passport": "^0.7.0", "cors": "^2.8.5"}),
        RepositoryFile(path="src/index.js", content=COMPLIANT_SERVER),
    ]


@pytest.fixture
def bare_web_app():
    return [
        package_json({"express": "^4.18.0"}),
        RepositoryFile(path="src/server.js", content=BARE_SERVER),
    ]


@pytest.fixture
def local_storage_app():
    return [
        package_json({"sqlite3": "^5.1.0"}),
        RepositoryFile(path="src/store.js", content=LOCAL_STORE),
    ]


@pytest.fixture
def desktop_app():
    return [
        package_json({"electron": "^28.0.0", "sqlite3": "^5.1.0"}),
        RepositoryFile(path="main.js", content=ELECTRON_MAIN),
        RepositoryFile(path="src/store.js", content=LOCAL_STORE),
    ]


@pytest.fixture
def write_repo(tmp_path):
    """Write a list of RepositoryFile records to disk and return the root."""

    def _write(files, name="repo"):
        root = tmp_path / name
        root.mkdir()
        for f in files:
            target = root / f.path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f.content)
        return root

    return _write
