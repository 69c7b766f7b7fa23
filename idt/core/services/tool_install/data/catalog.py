"""
L0 Data: the tool catalog.

Every tool idt knows how to install. Pure data, no logic. Keys are the
``bin_name`` each tool is exposed under in the bin directory.

URL, member and checksum templates may use:
    {version}        release tag as published (v1.2.3)
    {version_bare}   tag without its leading "v" (1.2.3)
    {os} {arch}      platform tokens of the recipe's naming convention
    {target}         full platform string (default "{arch}-{os}")

See data/constants.py NAMING_CONVENTIONS for the conventions.
Field reference: data/catalog_schema.py.
"""

from __future__ import annotations

_GH = "https://github.com"

TOOL_CATALOG: dict[str, dict] = {

    # ── npm language servers and linters ────────────────────────

    "bash-language-server": {
        "description": "Bash language server",
        "strategy": "npm",
        "packages": ["bash-language-server"],
    },
    "commitlint": {
        "description": "Conventional commit linter",
        "strategy": "npm",
        "packages": ["@commitlint/cli", "@commitlint/config-conventional"],
    },
    "docker-langserver": {
        "description": "Dockerfile language server",
        "strategy": "npm",
        "packages": ["dockerfile-language-server-nodejs"],
        # --version starts the server on stdio
        "health_check_args": None,
    },
    "elm-language-server": {
        "description": "Elm language server",
        "strategy": "npm",
        "packages": ["@elm-tooling/elm-language-server"],
    },
    "eslint_d": {
        "description": "eslint as a daemon",
        "strategy": "npm",
        "packages": ["eslint_d"],
    },
    "graphql-lsp": {
        "description": "GraphQL language server",
        "strategy": "npm",
        "packages": ["graphql-language-service-cli"],
    },
    "prettierd": {
        "description": "prettier as a daemon",
        "strategy": "npm",
        "packages": ["@fsouza/prettierd"],
    },
    "quicktype": {
        "description": "Types from JSON samples",
        "strategy": "npm",
        "packages": ["quicktype"],
    },
    "sql-language-server": {
        "description": "SQL language server",
        "strategy": "npm",
        "packages": ["sql-language-server"],
    },
    "typescript-language-server": {
        "description": "TypeScript language server",
        "strategy": "npm",
        "packages": ["typescript-language-server", "typescript"],
    },
    "vscode-langservers-extracted": {
        "description": "HTML/CSS/JSON/ESLint servers from VS Code",
        "strategy": "npm",
        "packages": ["vscode-langservers-extracted"],
        "link_all": True,
        "health_check_args": None,
    },
    "yaml-language-server": {
        "description": "YAML language server",
        "strategy": "npm",
        "packages": ["yaml-language-server"],
        "health_check_args": None,
    },

    # ── pip / composer ──────────────────────────────────────────

    "ruff": {
        "description": "Python linter and formatter",
        "strategy": "pip",
        "packages": ["ruff"],
    },
    "php-cs-fixer": {
        "description": "PHP coding standards fixer",
        "strategy": "composer",
        "packages": ["friendsofphp/php-cs-fixer"],
    },

    # ── cargo (no usable binary release) ────────────────────────

    "taplo": {
        "description": "TOML toolkit and language server",
        "strategy": "cargo",
        "crate": "taplo-cli",
        "cargo_args": ["--all-features"],
    },
    "harper-ls": {
        "description": "Grammar checker language server",
        "strategy": "cargo",
        "crate": "harper-ls",
    },

    # ── built from source ───────────────────────────────────────

    "nvim": {
        "description": "Neovim, built from the master branch",
        "strategy": "make",
        "git_url": f"{_GH}/neovim/neovim",
        "git_ref": "master",
    },

    # ── HTTP release artifacts ──────────────────────────────────

    "deno": {
        "description": "Deno runtime (ships its own LSP)",
        "strategy": "http",
        "url": f"{_GH}/denoland/deno/releases/latest/download/deno-{{target}}.zip",
        "convention": "rust",
        "decompression": "zip",
        "member": "deno",
        "checksum_required": True,
        "checksum": {
            "manifest_url": (
                f"{_GH}/denoland/deno/releases/latest/download/deno-{{target}}.zip.sha256sum"
            ),
            "filename": "deno-{target}.zip",
        },
    },
    "elixir-ls": {
        "description": "Elixir language server",
        "strategy": "http",
        "repo": "elixir-lsp/elixir-ls",
        "version": "latest",
        "url": f"{_GH}/elixir-lsp/elixir-ls/releases/download/{{version}}/elixir-ls-{{version}}.zip",
        "decompression": "zip",
        "placement": "tool_dir",
        "link": "language_server.sh",
        "health_check_args": None,
    },
    "hadolint": {
        "description": "Dockerfile linter",
        "strategy": "http",
        "url": f"{_GH}/hadolint/hadolint/releases/latest/download/hadolint-{{os}}-{{arch}}",
        "convention": "uname",
        "checksum_required": True,
        "checksum": {
            "manifest_url": (
                f"{_GH}/hadolint/hadolint/releases/latest/download/hadolint-{{os}}-{{arch}}.sha256"
            ),
            "filename": "hadolint-{os}-{arch}",
        },
        "health_check_args": None,
    },
    "helm_ls": {
        "description": "Helm language server",
        "strategy": "http",
        "url": f"{_GH}/mrjosh/helm-ls/releases/latest/download/helm_ls_{{os}}_{{arch}}",
        "convention": "go",
        "health_check_args": ["version"],
    },
    "lua-language-server": {
        "description": "Lua language server",
        "strategy": "http",
        "repo": "LuaLS/lua-language-server",
        "version": "latest",
        "url": (
            f"{_GH}/LuaLS/lua-language-server/releases/download/{{version}}/"
            "lua-language-server-{version}-{os}-{arch}.tar.gz"
        ),
        "convention": "node",
        "decompression": "tar.gz",
        "placement": "tool_dir",
        # resolves its runtime files relative to the real binary path
        "link_enabled": False,
        "health_check_args": None,
    },
    "marksman": {
        "description": "Markdown language server",
        "strategy": "http",
        "url": f"{_GH}/artempyanykh/marksman/releases/latest/download/marksman-{{target}}",
        "target_map": {
            "macos-arm": "macos",
            "macos-x86": "macos",
            "linux-arm": "linux-arm64",
            "linux-x86": "linux-x64",
        },
    },
    "rust-analyzer": {
        "description": "Rust language server",
        "strategy": "http",
        "url": f"{_GH}/rust-lang/rust-analyzer/releases/download/nightly/rust-analyzer-{{target}}.gz",
        "convention": "rust",
        "decompression": "gzip",
    },
    "shellcheck": {
        "description": "Shell script linter",
        "strategy": "http",
        "repo": "koalaman/shellcheck",
        "version": "latest",
        "url": (
            f"{_GH}/koalaman/shellcheck/releases/download/{{version}}/"
            "shellcheck-{version}.{os}.{arch}.tar.xz"
        ),
        "convention": "rust",
        "os_map": {"macos": "darwin", "linux": "linux"},
        "decompression": "tar.xz",
        "member": "shellcheck-{version}/shellcheck",
    },
    "sqruff": {
        "description": "SQL linter and formatter",
        "strategy": "http",
        "url": f"{_GH}/quarylabs/sqruff/releases/latest/download/sqruff-{{target}}.tar.gz",
        "target_map": {
            "macos-arm": "darwin-aarch64",
            "macos-x86": "darwin-x86_64",
            "linux-arm": "linux-aarch64-musl",
            "linux-x86": "linux-x86_64-musl",
        },
        "decompression": "tar.gz",
        "member": "sqruff",
    },
    "terraform-ls": {
        "description": "Terraform language server",
        "strategy": "http",
        "repo": "hashicorp/terraform-ls",
        "version": "latest",
        "url": (
            "https://releases.hashicorp.com/terraform-ls/{version_bare}/"
            "terraform-ls_{version_bare}_{os}_{arch}.zip"
        ),
        "convention": "go",
        "decompression": "zip",
        "member": "terraform-ls",
        "checksum_required": True,
        "checksum": {
            "manifest_url": (
                "https://releases.hashicorp.com/terraform-ls/{version_bare}/"
                "terraform-ls_{version_bare}_SHA256SUMS"
            ),
            "filename": "terraform-ls_{version_bare}_{os}_{arch}.zip",
        },
    },
    "typos-lsp": {
        "description": "Spell checker language server",
        "strategy": "http",
        "repo": "tekumara/typos-vscode",
        "version": "latest",
        "url": (
            f"{_GH}/tekumara/typos-vscode/releases/download/{{version}}/"
            "typos-lsp-{version}-{target}.tar.gz"
        ),
        "convention": "rust",
        "decompression": "tar.gz",
        "member": "typos-lsp",
    },
    "vale": {
        "description": "Prose linter",
        "strategy": "http",
        "repo": "errata-ai/vale",
        "version": "latest",
        "url": (
            f"{_GH}/errata-ai/vale/releases/download/{{version}}/"
            "vale_{version_bare}_{os}_{arch}.tar.gz"
        ),
        "os_map": {"macos": "macOS", "linux": "Linux"},
        "arch_map": {"arm": "arm64", "x86": "64-bit"},
        "decompression": "tar.gz",
        "member": "vale",
        "checksum_required": True,
        "checksum": {
            "manifest_url": (
                f"{_GH}/errata-ai/vale/releases/download/{{version}}/"
                "vale_{version_bare}_checksums.txt"
            ),
            "filename": "vale_{version_bare}_{os}_{arch}.tar.gz",
        },
    },
}
