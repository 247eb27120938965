"""Static detection tables for the audit engine.

Everything here is plain data. ``repomedic.audit.rules.build_rules`` turns
it into a compiled, immutable ``RuleSet`` once per process.
"""

# ─── Walker ──────────────────────────────────────────────────────────

# Directories never descended into
IGNORED_DIRS = frozenset({
    ".git",
    ".hg",
    ".svn",
    "node_modules",
    "bower_components",
    "vendor",
    "target",
    "dist",
    "build",
    "out",
    "_build",
    ".build",
    "bin",
    "obj",
    "deps",
    "__pycache__",
    ".venv",
    "venv",
    ".tox",
    ".nox",
    ".mypy_cache",
    ".pytest_cache",
    ".ruff_cache",
    ".cache",
    ".next",
    ".nuxt",
    ".svelte-kit",
    ".gradle",
    ".idea",
    ".terraform",
})

BINARY_EXTENSIONS = frozenset({
    ".png", ".jpg", ".jpeg", ".gif", ".bmp", ".ico", ".webp", ".tiff", ".psd",
    ".pdf", ".zip", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".tar", ".jar",
    ".war", ".whl", ".egg", ".exe", ".dll", ".so", ".dylib", ".a", ".o", ".obj",
    ".class", ".pyc", ".pyo", ".wasm", ".bin", ".dat", ".db", ".sqlite",
    ".sqlite3", ".mp3", ".mp4", ".mov", ".avi", ".wav", ".flac", ".ogg",
    ".woff", ".woff2", ".ttf", ".otf", ".eot", ".lockb", ".parquet", ".npy",
})

# ─── Ecosystems ──────────────────────────────────────────────────────

ECOSYSTEM_NAMES = {
    # languages
    "rust": "Rust",
    "python": "Python",
    "javascript": "JavaScript",
    "typescript": "TypeScript",
    "go": "Go",
    "java": "Java",
    "kotlin": "Kotlin",
    "scala": "Scala",
    "csharp": "C#",
    "cpp": "C++",
    "c": "C",
    "ruby": "Ruby",
    "php": "PHP",
    "swift": "Swift",
    "haskell": "Haskell",
    "elixir": "Elixir",
    "zig": "Zig",
    "nim": "Nim",
    "lua": "Lua",
    "r": "R",
    "perl": "Perl",
    "dart": "Dart",
    "crystal": "Crystal",
    # build systems
    "cargo": "Cargo (Rust)",
    "pip": "pip (Python)",
    "pyproject": "pyproject (Python)",
    "poetry": "Poetry (Python)",
    "pipenv": "Pipenv (Python)",
    "uv": "uv (Python)",
    "npm": "npm (Node.js)",
    "yarn": "Yarn (Node.js)",
    "pnpm": "pnpm (Node.js)",
    "bun": "Bun (JavaScript)",
    "go-modules": "Go modules",
    "maven": "Maven (Java)",
    "gradle": "Gradle (Java/Kotlin)",
    "msbuild": "MSBuild (.NET)",
    "cmake": "CMake (C/C++)",
    "make": "Make",
    "bundler": "Bundler (Ruby)",
    "composer": "Composer (PHP)",
    "mix": "Mix (Elixir)",
    "cabal": "Cabal (Haskell)",
    "stack": "Stack (Haskell)",
    "zig-build": "Zig build",
    "nimble": "Nimble (Nim)",
    "swiftpm": "SwiftPM (Swift)",
    "pub": "pub (Dart)",
}

L, B = "language", "build_system"

# Exact filename -> ecosystems it implies
MARKER_FILES = {
    "Cargo.toml": (("cargo", B), ("rust", L)),
    "Cargo.lock": (("cargo", B), ("rust", L)),
    "setup.py": (("pip", B), ("python", L)),
    "setup.cfg": (("pip", B), ("python", L)),
    "requirements.txt": (("pip", B), ("python", L)),
    "pyproject.toml": (("pyproject", B), ("python", L)),
    "poetry.lock": (("poetry", B), ("python", L)),
    "Pipfile": (("pipenv", B), ("python", L)),
    "Pipfile.lock": (("pipenv", B), ("python", L)),
    "uv.lock": (("uv", B), ("python", L)),
    "package.json": (("npm", B), ("javascript", L)),
    "package-lock.json": (("npm", B), ("javascript", L)),
    "yarn.lock": (("yarn", B), ("javascript", L)),
    "pnpm-lock.yaml": (("pnpm", B), ("javascript", L)),
    "bun.lockb": (("bun", B), ("javascript", L)),
    "tsconfig.json": (("typescript", L),),
    "go.mod": (("go-modules", B), ("go", L)),
    "go.sum": (("go-modules", B), ("go", L)),
    "pom.xml": (("maven", B), ("java", L)),
    "build.gradle": (("gradle", B), ("java", L)),
    "build.gradle.kts": (("gradle", B), ("kotlin", L)),
    "settings.gradle": (("gradle", B),),
    "settings.gradle.kts": (("gradle", B),),
    "gradlew": (("gradle", B),),
    "build.sbt": (("scala", L),),
    "CMakeLists.txt": (("cmake", B),),
    "Makefile": (("make", B),),
    "makefile": (("make", B),),
    "GNUmakefile": (("make", B),),
    "Gemfile": (("bundler", B), ("ruby", L)),
    "Gemfile.lock": (("bundler", B), ("ruby", L)),
    "composer.json": (("composer", B), ("php", L)),
    "composer.lock": (("composer", B), ("php", L)),
    "mix.exs": (("mix", B), ("elixir", L)),
    "mix.lock": (("mix", B), ("elixir", L)),
    "stack.yaml": (("stack", B), ("haskell", L)),
    "build.zig": (("zig-build", B), ("zig", L)),
    "Package.swift": (("swiftpm", B), ("swift", L)),
    "pubspec.yaml": (("pub", B), ("dart", L)),
    "shard.yml": (("crystal", L),),
}

# Manifest filename suffix -> ecosystems (checked when no exact name matched)
MANIFEST_SUFFIXES = {
    ".csproj": (("msbuild", B), ("csharp", L)),
    ".fsproj": (("msbuild", B),),
    ".vbproj": (("msbuild", B),),
    ".sln": (("msbuild", B),),
    ".cabal": (("cabal", B), ("haskell", L)),
    ".nimble": (("nimble", B), ("nim", L)),
    ".gemspec": (("bundler", B), ("ruby", L)),
}

# Extension fallback, always heuristic
LANGUAGE_EXTENSIONS = {
    ".rs": "rust",
    ".py": "python", ".pyw": "python", ".pyi": "python",
    ".js": "javascript", ".mjs": "javascript", ".cjs": "javascript", ".jsx": "javascript",
    ".ts": "typescript", ".mts": "typescript", ".cts": "typescript", ".tsx": "typescript",
    ".go": "go",
    ".java": "java",
    ".kt": "kotlin", ".kts": "kotlin",
    ".scala": "scala", ".sc": "scala",
    ".cs": "csharp",
    ".cpp": "cpp", ".cc": "cpp", ".cxx": "cpp", ".hpp": "cpp", ".hxx": "cpp",
    ".c": "c", ".h": "c",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
    ".hs": "haskell", ".lhs": "haskell",
    ".ex": "elixir", ".exs": "elixir",
    ".zig": "zig",
    ".nim": "nim",
    ".lua": "lua",
    ".r": "r",
    ".pl": "perl", ".pm": "perl",
    ".dart": "dart",
    ".cr": "crystal",
}

del L, B

MAX_MARKERS = 5  # marker paths kept per ecosystem

# ─── CI Providers ────────────────────────────────────────────────────
# (provider, display name, exact paths, path prefixes, required suffixes)
CI_PROVIDERS = (
    ("github-actions", "GitHub Actions", (), (".github/workflows/",), (".yml", ".yaml")),
    ("gitlab-ci", "GitLab CI", (".gitlab-ci.yml",), (), ()),
    ("jenkins", "Jenkins", ("Jenkinsfile",), (), ()),
    ("circleci", "CircleCI", (), (".circleci/",), ()),
    ("travis-ci", "Travis CI", (".travis.yml",), (), ()),
    ("azure-pipelines", "Azure Pipelines", ("azure-pipelines.yml", "azure-pipelines.yaml"), (), ()),
    ("bitbucket-pipelines", "Bitbucket Pipelines", ("bitbucket-pipelines.yml",), (), ()),
    ("drone", "Drone CI", (".drone.yml",), (), ()),
    ("buildkite", "Buildkite", (), (".buildkite/",), ()),
)

# ─── Repository Profile ──────────────────────────────────────────────

DEPENDENCY_FILES = frozenset({
    "Cargo.toml", "Cargo.lock",
    "package.json", "package-lock.json", "yarn.lock", "pnpm-lock.yaml", "bun.lockb",
    "requirements.txt", "Pipfile", "Pipfile.lock", "pyproject.toml", "poetry.lock", "uv.lock",
    "go.mod", "go.sum",
    "pom.xml", "build.gradle", "build.gradle.kts",
    "Gemfile", "Gemfile.lock",
    "composer.json", "composer.lock",
    "mix.exs", "mix.lock",
})
DEPENDENCY_SUFFIXES = (".csproj", ".cabal")

LINTER_CONFIGS = (
    ".eslintrc", ".eslintrc.js", ".eslintrc.cjs", ".eslintrc.json", ".eslintrc.yml",
    "eslint.config.js", "eslint.config.mjs",
    ".prettierrc", ".prettierrc.js", ".prettierrc.json", ".prettierrc.yml", "prettier.config.js",
    ".stylelintrc", ".stylelintrc.json",
    "rustfmt.toml", ".rustfmt.toml", "clippy.toml", ".clippy.toml",
    ".pylintrc", "pylintrc", ".flake8", "ruff.toml", ".ruff.toml", "mypy.ini",
    ".rubocop.yml",
    ".golangci.yml", ".golangci.yaml",
    "tslint.json", "biome.json",
    ".pre-commit-config.yaml",
)

# Marker file -> workspace label; content markers are checked first
WORKSPACE_CONTENT_MARKERS = (
    ("Cargo.toml", "[workspace]", "Cargo workspace"),
    ("package.json", '"workspaces"', "npm/yarn workspaces"),
)
WORKSPACE_FILES = (
    ("pnpm-workspace.yaml", "pnpm workspace"),
    ("lerna.json", "Lerna"),
    ("nx.json", "Nx"),
    ("turbo.json", "Turborepo"),
    ("go.work", "Go workspace"),
)

# ─── Secret Rules ────────────────────────────────────────────────────
# Literal prefixes are split so this module does not flag itself.

SECRET_RULES = (
    {
        "id": "aws-access-key-id",
        "description": "AWS access key ID",
        "severity": "high",
        "patterns": (r"\b(?P<secret>(?:AK" + r"IA|AS" + r"IA)[0-9A-Z]{16})\b",),
    },
    {
        "id": "aws-secret-access-key",
        "description": "AWS secret access key",
        "severity": "high",
        "patterns": (
            r"(?i)aws_?secret_?access_?key\s*[:=]\s*[\"']?(?P<secret>[A-Za-z0-9/+=]{40})(?![A-Za-z0-9/+=])",
        ),
        "min_entropy": 3.5,
    },
    {
        "id": "github-token",
        "description": "GitHub token",
        "severity": "high",
        "patterns": (
            r"\b(?P<secret>gh[pousr]" + r"_[A-Za-z0-9]{36})\b",
            r"\b(?P<secret>github" + r"_pat_[A-Za-z0-9_]{22,255})\b",
        ),
    },
    {
        "id": "gitlab-token",
        "description": "GitLab personal access token",
        "severity": "high",
        "patterns": (r"\b(?P<secret>glp" + r"at-[A-Za-z0-9_-]{20})(?![A-Za-z0-9_-])",),
    },
    {
        "id": "stripe-key",
        "description": "Stripe API key",
        "severity": "high",
        "patterns": (r"\b(?P<secret>(?:sk|rk)_(?:li" + r"ve|te" + r"st)_[A-Za-z0-9]{16,})\b",),
    },
    {
        "id": "openai-api-key",
        "description": "OpenAI API key",
        "severity": "high",
        "patterns": (r"\b(?P<secret>s" + r"k-(?:proj-)?[A-Za-z0-9_-]{32,})",),
        "min_entropy": 3.5,
    },
    {
        "id": "slack-token",
        "description": "Slack token",
        "severity": "high",
        "patterns": (r"\b(?P<secret>xo" + r"x[baprs]-[A-Za-z0-9-]{10,})",),
    },
    {
        "id": "slack-webhook",
        "description": "Slack incoming webhook URL",
        "severity": "medium",
        "patterns": (
            r"https://hooks\.slack\.com/services/(?P<secret>T[A-Z0-9]+/B[A-Z0-9]+/[A-Za-z0-9]+)",
        ),
    },
    {
        "id": "google-api-key",
        "description": "Google API key",
        "severity": "high",
        "patterns": (r"\b(?P<secret>AI" + r"za[0-9A-Za-z_-]{35})(?![0-9A-Za-z_-])",),
    },
    {
        "id": "npm-token",
        "description": "npm access token",
        "severity": "high",
        "patterns": (r"\b(?P<secret>np" + r"m_[A-Za-z0-9]{36})\b",),
    },
    {
        "id": "private-key",
        "description": "Private key block",
        "severity": "high",
        "patterns": (r"-----BEGIN (?:[A-Z0-9]+ )*PRIV" + r"ATE KEY(?: BLOCK)?-----",),
    },
    {
        "id": "database-url-credentials",
        "description": "Credentials embedded in a connection URL",
        "severity": "medium",
        "patterns": (r"\b[a-z][a-z0-9+.-]*://[^\s:/@]+:(?P<secret>[^\s:/@]{6,})@[^\s/]+",),
        "placeholders": True,
    },
    {
        "id": "generic-secret-assignment",
        "description": "High-entropy value assigned to a secret-like key",
        "severity": "medium",
        "patterns": (
            r"(?i)\b[\w.-]*(?:api[_-]?key|secret|token|passw(?:or)?d|auth[_-]?key)[\w.-]*[\"']?"
            r"\s*[:=]\s*[\"'](?P<secret>[^\"'\s]{12,})[\"']",
        ),
        "min_entropy": 3.5,
        "placeholders": True,
    },
    {
        "id": "jwt",
        "description": "JSON Web Token",
        "severity": "low",
        "patterns": (
            r"\b(?P<secret>ey" + r"J[A-Za-z0-9_-]{10,}\.ey" + r"J[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,})",
        ),
    },
)

# Values that look like documentation rather than credentials
PLACEHOLDER_TERMS = (
    "example",
    "sample",
    "changeme",
    "change_me",
    "dummy",
    "placeholder",
    "your_",
    "your-",
    "xxxx",
    "****",
    "redacted",
    "password",
    "passwd",
    "<",
    "${",
    "{{",
    "%(",
)

# Inline markers that silence every rule on that line
SUPPRESS_MARKERS = ("repomedic:ignore", "nosec")

EXCERPT_MAX = 80
MASK_VISIBLE = 4
MASK_MIN_LENGTH = 12

# ─── Presence Checks & Scoring ───────────────────────────────────────
# key, label, exact relative paths, path prefixes, root-level directory names.
# Everything is compared lowercase.

REQUIRED_CHECKS = (
    ("readme", "README",
     ("readme", "readme.md", "readme.rst", "readme.txt", "readme.markdown", "readme.adoc"), (), ()),
    ("license", "LICENSE",
     ("license", "license.md", "license.txt", "license.rst", "licence", "licence.md",
      "licence.txt", "copying", "copying.md", "unlicense"), (), ()),
    ("gitignore", ".gitignore", (".gitignore",), (), ()),
    ("tests", "Tests directory", (), (), ("tests", "test", "spec", "__tests__")),
    ("ci", "CI configuration", (), (), ()),  # satisfied by CI detection
)

RECOMMENDED_CHECKS = (
    ("contributing", "CONTRIBUTING",
     ("contributing", "contributing.md", "contributing.txt", "contributing.rst",
      ".github/contributing.md", "docs/contributing.md"), (), ()),
    ("changelog", "CHANGELOG",
     ("changelog", "changelog.md", "changelog.txt", "changelog.rst",
      "history.md", "changes.md", "news.md"), (), ()),
    ("docs", "Documentation directory", (), (), ("docs", "doc", "documentation")),
    ("security_policy", "SECURITY policy",
     ("security", "security.md", ".github/security.md", "docs/security.md"), (), ()),
    ("code_of_conduct", "CODE_OF_CONDUCT",
     ("code_of_conduct", "code_of_conduct.md", ".github/code_of_conduct.md",
      "docs/code_of_conduct.md"), (), ()),
    ("editorconfig", ".editorconfig", (".editorconfig",), (), ()),
    ("codeowners", "CODEOWNERS", ("codeowners", ".github/codeowners", "docs/codeowners"), (), ()),
    ("issue_template", "Issue template",
     (".github/issue_template.md", "issue_template.md"), (".github/issue_template/",), ()),
    ("pr_template", "Pull request template",
     (".github/pull_request_template.md", "pull_request_template.md",
      "docs/pull_request_template.md"), (".github/pull_request_template/",), ()),
    ("git", "Git repository", (), (), (".git",)),
    ("gitattributes", ".gitattributes", (".gitattributes",), (), ()),
    ("funding", "Funding file", (".github/funding.yml", ".github/funding.yaml"), (), ()),
)

REQUIRED_DEDUCTIONS = {
    "readme": 15,
    "license": 15,
    "gitignore": 10,
    "tests": 10,
    "ci": 10,
}

RECOMMENDED_BONUSES = {
    "contributing": 2,
    "changelog": 2,
    "docs": 2,
    "security_policy": 2,
    "code_of_conduct": 1,
    "editorconfig": 1,
    "codeowners": 1,
    "issue_template": 1,
    "pr_template": 1,
    "gitattributes": 1,
    "funding": 1,
}

SECRET_DEDUCTIONS = {"high": 10, "medium": 5, "low": 2}
SECRET_DEDUCTION_CAP = 40
LARGE_FILE_DEDUCTION = 2
LARGE_FILE_DEDUCTION_CAP = 6

GRADE_THRESHOLDS = ((90, "A"), (80, "B"), (70, "C"), (60, "D"))
