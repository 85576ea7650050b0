"""Helpers for names, paths and workspace manifests."""

from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import NoReturn

import tomlkit
from tomlkit.exceptions import ParseError


class CliError(Exception):
    """A user-facing error of the command line tool."""


_PROGRAM_MOD = re.compile(r"#\s*\[program\]\s*pub\s+mod\s+([a-zA-Z_][a-zA-Z0-9_]*)")


def to_camel_case(text: str) -> str:
    """Turn snake_case into CamelCase, dropping empty parts."""
    return "".join(
        (part[0].upper() if part[0].isascii() else part[0]) + part[1:]
        for part in text.split("_")
        if part
    )


def extract_program_mod_name(lib_rs_path: str | Path) -> str:
    """Return the name of the module marked with #[program] in lib.rs."""
    match = _PROGRAM_MOD.search(Path(lib_rs_path).read_text(encoding="utf-8"))
    if match is None:
        raise CliError("Could not find #[program] pub mod <name> in lib.rs")
    return match.group(1)


def infer_paths(package: str, root: str | Path | None = None) -> tuple[str, str]:
    """Work out the IDL path and program crate path of a package in a workspace."""
    base = Path.cwd() if root is None else Path(root)
    program_path = base / "programs" / package
    for required, label in ((program_path / "Cargo.toml", "Cargo.toml"),
                            (program_path / "src" / "lib.rs", "src/lib.rs")):
        if not required.exists():
            raise CliError(f"Could not find {label} at {required}")
    mod_name = extract_program_mod_name(program_path / "src" / "lib.rs")
    return str(base / "target" / "idl" / f"{mod_name}.json"), str(program_path)


def inject_workspace_member(cargo_toml: str | Path, member: str) -> None:
    """Add a member to workspace.members of a Cargo manifest unless present."""
    path = Path(cargo_toml)
    try:
        doc = tomlkit.parse(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        raise CliError(str(exc)) from exc

    workspace = doc.setdefault("workspace", tomlkit.table())
    if not isinstance(workspace, dict):
        raise CliError("`workspace` is not a table")
    members = workspace.setdefault("members", tomlkit.array())
    if not isinstance(members, list):
        raise CliError("`workspace.members` is not an array")

    if member not in (str(v) for v in members if isinstance(v, str)):
        members.append(member)
        path.write_text(tomlkit.dumps(doc), encoding="utf-8")


def cli_error(error: object) -> NoReturn:
    """Report an error on stderr and exit with status 1."""
    print(f"anchordbg Error: {error}", file=sys.stderr)
    raise SystemExit(1)


def binary_name_from_package(package: str) -> str:
    """Return the binary name Cargo builds for a package."""
    return package.replace("-", "_")