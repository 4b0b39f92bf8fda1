"""Detection rule table for Azure App Service portability.

All detection is pattern matching over raw file text and manifest
dependency names. Rule order in ``SCORING_RULES`` is significant: the
``blocker`` flag on each issue depends on the running score at the time
the rule fires.
"""
from __future__ import annotations

import re
from typing import Optional

from .models import DetectionRule, Manifest, RepositoryFile

# Desktop frameworks: reported name -> packages, looked up in dependencies
# and devDependencies. Checked in this order.
DESKTOP_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "electron": ("electron",),
    "tauri": ("@tauri-apps/api", "@tauri-apps/cli"),
    "nwjs": ("nw",),
}

IPC_PATTERN = re.compile(r"ipcMain\.|ipcRenderer\.|ipc\.")

HTTP_SERVER_PACKAGES = ("express", "fastify", "koa", "@hapi/hapi", "hono")
HTTP_SERVER_PATTERN = re.compile(r"express\(\)|new Fastify|new Hono")

AUTH_PACKAGES = ("passport", "jsonwebtoken", "express-session", "next-auth")
AUTH_PATTERN = re.compile(r"passport\.authenticate|jwt\.sign|bcrypt\.hash")

GLOBAL_STATE_PATTERN = re.compile(r"let\s+\w+Data\s*[:=]")
USER_SCOPE_PATTERN = re.compile(r"userId|user_id|req\.user")

SQLITE_PACKAGES = ("sqlite3", "better-sqlite3")
SQLITE_PATTERN = re.compile(r"new sqlite3\.Database")

FILE_WRITE_PATTERN = re.compile(r"fs\.writeFile|fs\.writeFileSync")
DEPENDENCY_DIR_PATTERN = re.compile(r"node_modules")

HARDCODED_PORT_PATTERN = re.compile(r"\.listen\(\d{4}\)")
ENV_PORT_PATTERN = re.compile(r"process\.env\.PORT")

HEALTH_ROUTE_PATTERN = re.compile(r"""['"]/health['"]|['"]/healthz['"]""")

CORS_PACKAGE = "cors"
CORS_PATTERN = re.compile(r"cors\(\)")


def _any_content(files: list[RepositoryFile], pattern: re.Pattern) -> bool:
    return any(pattern.search(f.content) for f in files)


def _any_dependency(manifest: Optional[Manifest], names: tuple[str, ...]) -> bool:
    if manifest is None:
        return False
    return any(manifest.has_dependency(name) for name in names)


# ── Detection predicates ───────────────────────────────────────────


def detect_desktop_framework(
    files: list[RepositoryFile], manifest: Optional[Manifest]
) -> Optional[str]:
    """Return the first desktop framework found in the manifest, or None."""
    if manifest is None:
        return None
    for framework, packages in DESKTOP_FRAMEWORKS.items():
        if any(manifest.has_any_dependency(name) for name in packages):
            return framework
    return None


def has_ipc(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return _any_content(files, IPC_PATTERN)


def has_http_server(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return _any_dependency(manifest, HTTP_SERVER_PACKAGES) or _any_content(
        files, HTTP_SERVER_PATTERN
    )


def has_auth(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return _any_dependency(manifest, AUTH_PACKAGES) or _any_content(files, AUTH_PATTERN)


def has_single_user_state(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return any(
        GLOBAL_STATE_PATTERN.search(f.content) and not USER_SCOPE_PATTERN.search(f.content)
        for f in files
    )


def has_sqlite(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return _any_dependency(manifest, SQLITE_PACKAGES) or _any_content(files, SQLITE_PATTERN)


def has_file_storage(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return any(
        FILE_WRITE_PATTERN.search(f.content) and not DEPENDENCY_DIR_PATTERN.search(f.path)
        for f in files
    )


def has_hardcoded_port(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return any(
        HARDCODED_PORT_PATTERN.search(f.content) and not ENV_PORT_PATTERN.search(f.content)
        for f in files
    )


def has_health_check(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return _any_content(files, HEALTH_ROUTE_PATTERN)


def has_cors(files: list[RepositoryFile], manifest: Optional[Manifest]) -> bool:
    return _any_dependency(manifest, (CORS_PACKAGE,)) or _any_content(files, CORS_PATTERN)


def _negate(predicate):
    def negated(files, manifest):
        return not predicate(files, manifest)

    negated.__name__ = f"not_{predicate.__name__}"
    return negated


# ── Rule table ─────────────────────────────────────────────────────

DESKTOP_FRAMEWORK_RULE = DetectionRule(
    name="desktop-framework",
    category="architecture",
    weight=100,
    predicate=lambda files, manifest: detect_desktop_framework(files, manifest) is not None,
    description=(
        "Desktop application framework detected ({framework}). "
        "Desktop apps cannot run on Azure App Service web platform."
    ),
    is_blocker=True,
)

SCORING_RULES: tuple[DetectionRule, ...] = (
    DetectionRule(
        name="ipc",
        category="communication",
        weight=50,
        predicate=has_ipc,
        description="IPC (Inter-Process Communication) detected. Web apps use HTTP, not IPC.",
    ),
    DetectionRule(
        name="no-http-server",
        category="infrastructure",
        weight=40,
        predicate=_negate(has_http_server),
        description=(
            "No HTTP server framework detected. Azure App Service requires HTTP server."
        ),
    ),
    DetectionRule(
        name="no-auth",
        category="security",
        weight=30,
        predicate=_negate(has_auth),
        description="No authentication system detected. Web apps need user authentication.",
        requires_web_server=True,
    ),
    DetectionRule(
        name="single-user-state",
        category="architecture",
        weight=25,
        predicate=has_single_user_state,
        description="Single-user global state detected. Web apps need multi-user isolation.",
    ),
    DetectionRule(
        name="embedded-sql",
        category="database",
        weight=15,
        predicate=has_sqlite,
        description=(
            "SQLite database detected. Azure needs cloud database (SQL, PostgreSQL, etc.)."
        ),
    ),
    DetectionRule(
        name="local-file-storage",
        category="storage",
        weight=15,
        predicate=has_file_storage,
        description="Local file storage detected. Azure needs Blob Storage for persistence.",
    ),
    DetectionRule(
        name="hardcoded-port",
        category="config",
        weight=10,
        predicate=has_hardcoded_port,
        description="Hardcoded port detected. Azure requires process.env.PORT.",
        requires_web_server=True,
    ),
    DetectionRule(
        name="no-health-check",
        category="monitoring",
        weight=10,
        predicate=_negate(has_health_check),
        description="No health check endpoint. Azure needs /health for monitoring.",
        requires_web_server=True,
    ),
    DetectionRule(
        name="no-cors",
        category="config",
        weight=5,
        predicate=_negate(has_cors),
        description="No CORS configuration detected. May be needed for frontend.",
        requires_web_server=True,
    ),
)

MAX_ISSUES = len(SCORING_RULES) + 1
