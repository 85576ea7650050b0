import json
import subprocess
from unittest import mock

import pytest
import tomlkit

from anchordbg.cli import build_parser, main

LIB_RS = """
use anchor_lang::prelude::*;

#[program]
pub mod my_prog {
    use super::*;
}

#[derive(Accounts)]
pub struct Initialize<'info> {
    pub counter: Account<'info, Counter>,
    pub user: Signer<'info>,
}
"""

IDL = {
    "metadata": {"name": "my_prog"},
    "instructions": [
        {
            "name": "initialize",
            "accounts": [{"name": "counter"}, {"name": "user", "signer": True}],
            "args": [],
        }
    ],
}


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    program = tmp_path / "programs" / "pkg"
    (program / "src").mkdir(parents=True)
    (program / "Cargo.toml").write_text('[package]\nname = "pkg"\n')
    (program / "src" / "lib.rs").write_text(LIB_RS)
    idl_dir = tmp_path / "target" / "idl"
    idl_dir.mkdir(parents=True)
    (idl_dir / "my_prog.json").write_text(json.dumps(IDL))
    (tmp_path / "Cargo.toml").write_text("[workspace]\nmembers = []\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_parser_reads_generate_options():
    args = build_parser().parse_args(
        ["generate", "--package", "pkg", "--idl", "a.json", "--program-crate-path", "p", "out"]
    )
    assert (args.command, args.package, args.idl, args.program_crate_path, args.out) == (
        "generate",
        "pkg",
        "a.json",
        "p",
        "out",
    )


def test_parser_requires_package():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["generate"])


def test_generate_into_output_dir(workspace):
    assert main(["generate", "--package", "pkg", "out"]) == 0
    main_rs = (workspace / "out" / "src" / "main.rs").read_text()
    assert "fn call_initialize()" in main_rs
    doc = tomlkit.parse((workspace / "Cargo.toml").read_text())
    assert list(doc["workspace"]["members"]) == ["out"]


def test_explicit_paths(workspace):
    code = main(
        [
            "generate",
            "--package",
            "pkg",
            "--idl",
            str(workspace / "target" / "idl" / "my_prog.json"),
            "--program-crate-path",
            str(workspace / "programs" / "pkg"),
            "wrapper",
        ]
    )
    assert code == 0
    cargo = tomlkit.parse((workspace / "wrapper" / "Cargo.toml").read_text())
    assert cargo["dependencies"]["my_prog"]["path"] == str(workspace / "programs" / "pkg")


def test_unknown_package_exits(workspace):
    with pytest.raises(SystemExit) as info:
        main(["generate", "--package", "missing", "out"])
    assert info.value.code == 1


def test_ephemeral_build_failure_exits(workspace):
    failed = subprocess.CompletedProcess(args=[], returncode=1)
    with mock.patch("anchordbg.builder.subprocess.run", return_value=failed) as run:
        with pytest.raises(SystemExit) as info:
            main(["generate", "--package", "pkg"])
    assert info.value.code == 1
    assert run.call_args.args[0][:2] == ["cargo", "build"]
    assert tomlkit.parse((workspace / "Cargo.toml").read_text())["workspace"]["members"] == []