"""Tests for the detection predicates and rule table."""

import pytest

from conftest import package_json
from portscore.analyzers.manifest import parse_manifest
from portscore.analyzers import rules
from portscore.analyzers.models import Manifest, RepositoryFile


def _files(content: str, path: str = "src/app.js") -> list[RepositoryFile]:
    return [RepositoryFile(path=path, content=content)]


class TestRuleTable:
    def test_order_and_weights(self):
        assert [(r.name, r.category, r.weight) for r in rules.SCORING_RULES] == [
            ("ipc", "communication", 50),
            ("no-http-server", "infrastructure", 40),
            ("no-auth", "security", 30),
            ("single-user-state", "architecture", 25),
            ("embedded-sql", "database", 15),
            ("local-file-storage", "storage", 15),
            ("hardcoded-port", "config", 10),
            ("no-health-check", "monitoring", 10),
            ("no-cors", "config", 5),
        ]

    def test_web_server_gated_rules(self):
        gated = {r.name for r in rules.SCORING_RULES if r.requires_web_server}
        assert gated == {"no-auth", "hardcoded-port", "no-health-check", "no-cors"}

    def test_desktop_rule_spans_whole_score(self):
        assert rules.DESKTOP_FRAMEWORK_RULE.weight == 100
        assert rules.DESKTOP_FRAMEWORK_RULE.is_blocker is True

    def test_desktop_rule_fires_on_manifest(self):
        manifest = Manifest(dependencies={"electron": "^28"})
        assert rules.DESKTOP_FRAMEWORK_RULE.fires([], manifest)
        assert not rules.DESKTOP_FRAMEWORK_RULE.fires([], None)


class TestPredicates:
    @pytest.mark.parametrize("snippet", ["ipcMain.on('x')", "ipcRenderer.invoke('y')", "ipc.send()"])
    def test_ipc(self, snippet):
        assert rules.has_ipc(_files(snippet), None)

    def test_ipc_absent(self):
        assert not rules.has_ipc(_files("fetch('/api')"), None)

    @pytest.mark.parametrize("package", ["express", "fastify", "koa", "@hapi/hapi", "hono"])
    def test_http_server_from_manifest(self, package):
        manifest = Manifest(dependencies={package: "1.0.0"})
        assert rules.has_http_server([], manifest)

    def test_http_server_dev_dependency_does_not_count(self):
        manifest = Manifest(dev_dependencies={"express": "1.0.0"})
        assert not rules.has_http_server([], manifest)

    @pytest.mark.parametrize("snippet", ["const app = express()", "new Fastify({})", "new Hono()"])
    def test_http_server_from_code(self, snippet):
        assert rules.has_http_server(_files(snippet), None)

    @pytest.mark.parametrize("snippet", ["passport.authenticate('local')", "jwt.sign(p, k)", "bcrypt.hash(pw, 10)"])
    def test_auth_from_code(self, snippet):
        assert rules.has_auth(_files(snippet), None)

    @pytest.mark.parametrize("package", ["passport", "jsonwebtoken", "express-session", "next-auth"])
    def test_auth_from_manifest(self, package):
        assert rules.has_auth([], Manifest(dependencies={package: "1"}))

    def test_single_user_state(self):
        assert rules.has_single_user_state(_files("let userData = {};"), None)
        assert rules.has_single_user_state(_files("let appData: State = load();"), None)

    def test_single_user_state_with_user_scoping(self):
        content = "let sessionData = {};\nfunction get(req) { return sessionData[req.user.id]; }"
        assert not rules.has_single_user_state(_files(content), None)

    def test_single_user_state_checked_per_file(self):
        files = [
            RepositoryFile(path="a.js", content="let cacheData = {};"),
            RepositoryFile(path="b.js", content="const userId = 1;"),
        ]
        assert rules.has_single_user_state(files, None)

    def test_sqlite(self):
        assert rules.has_sqlite([], Manifest(dependencies={"better-sqlite3": "9"}))
        assert rules.has_sqlite(_files("const db = new sqlite3.Database(':memory:');"), None)
        assert not rules.has_sqlite(_files("const db = new Pool();"), None)

    def test_file_storage(self):
        assert rules.has_file_storage(_files("fs.writeFileSync('a', b)"), None)
        assert rules.has_file_storage(_files("await fs.writeFile('a', b)"), None)

    def test_file_storage_ignores_dependency_dirs(self):
        files = _files("fs.writeFileSync('a', b)", path="node_modules/lib/index.js")
        assert not rules.has_file_storage(files, None)

    def test_hardcoded_port(self):
        assert rules.has_hardcoded_port(_files("app.listen(3000)"), None)
        assert not rules.has_hardcoded_port(_files("app.listen(80)"), None)
        assert not rules.has_hardcoded_port(
            _files("app.listen(3000)\nconst p = process.env.PORT"), None
        )

    @pytest.mark.parametrize("snippet", ["app.get('/health', h)", 'router.get("/healthz", h)'])
    def test_health_check(self, snippet):
        assert rules.has_health_check(_files(snippet), None)

    def test_health_check_requires_exact_route(self):
        assert not rules.has_health_check(_files("app.get('/health/live', h)"), None)

    def test_cors(self):
        assert rules.has_cors(_files("app.use(cors())"), None)
        assert rules.has_cors([], Manifest(dependencies={"cors": "2"}))
        assert not rules.has_cors(_files("app.use(helmet())"), None)

    def test_predicates_accept_missing_manifest_fields(self):
        manifest = parse_manifest([package_json()])
        assert manifest == Manifest()
        assert not rules.has_http_server([], manifest)
        assert rules.detect_desktop_framework([], manifest) is None
