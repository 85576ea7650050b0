from pathlib import Path

import pytest
import tomlkit

from anchordbg.codegen import CodeGenerator, GeneratorConfig, generate_wrapper
from anchordbg.idl import parse_idl
from anchordbg.instruction import generate_instruction_function

LIB_RS = """
use anchor_lang::prelude::*;

#[program]
pub mod my_prog {
    use super::*;
}

#[derive(Accounts)]
pub struct Initialize<'info> {
    #[account(mut)]
    pub counter: Account<'info, Counter>,
    pub user: Signer<'info>,
    pub system_program: Program<'info, System>,
}
"""


def _idl(name="my_prog"):
    return parse_idl(
        {
            "address": "Prog111",
            "metadata": {"name": name},
            "instructions": [
                {
                    "name": "initialize",
                    "accounts": [
                        {
                            "name": "counter",
                            "writable": True,
                            "pda": {"seeds": [{"kind": "const", "value": [1, 2]}]},
                        },
                        {"name": "user", "signer": True},
                        {"name": "system_program"},
                    ],
                    "args": [{"name": "amount", "type": "u64"}],
                }
            ],
        }
    )


@pytest.fixture
def crate(tmp_path):
    src = tmp_path / "program" / "src"
    src.mkdir(parents=True)
    (src / "lib.rs").write_text(LIB_RS)
    return tmp_path / "program"


def test_config_from_paths_reads_account_map(crate, tmp_path):
    config = GeneratorConfig.from_paths(crate, tmp_path / "out", "my-prog")
    assert config.account_map["counter"] == "Counter"
    assert config.account_map["user"] == "Signer"
    assert config.src_dir == tmp_path / "out" / "src"
    assert config.package_name == "my-prog"


def test_generator_creates_src_dir_and_crate_name(crate, tmp_path):
    gen = CodeGenerator(_idl("my-prog"), crate, tmp_path / "out", "pkg")
    assert gen.crate_name == "my_prog"
    assert (tmp_path / "out" / "src").is_dir()


def test_cargo_toml_round_trips(crate, tmp_path):
    out = tmp_path / "out"
    gen = CodeGenerator(_idl(), crate, out, "my-pkg")
    gen.generate_cargo_toml()
    text = (out / "Cargo.toml").read_text()
    assert text.startswith('[package]\n    name = "my_prog"')
    doc = tomlkit.parse(text)
    assert doc["dependencies"]["my_prog"]["package"] == "my-pkg"
    assert doc["dependencies"]["my_prog"]["path"] == str(crate)
    assert doc["dependencies"]["anchor-lang"] == "0.31.1"


def test_mock_rs_header_and_helpers(crate, tmp_path):
    out = tmp_path / "out"
    CodeGenerator(_idl(), crate, out, "pkg").generate_mock_rs()
    text = (out / "src" / "mock.rs").read_text()
    assert text.startswith("use my_prog::{ID as PROGRAM_ID};")
    for helper in ("mock_pubkey", "mock_signer_account", "mock_pda_account", "mock_system_program"):
        assert f"pub fn {helper}" in text


def test_main_rs_contains_calls_and_functions(crate, tmp_path):
    out = tmp_path / "out"
    idl = _idl()
    gen = CodeGenerator(idl, crate, out, "pkg")
    gen.generate_main_rs()
    text = (out / "src" / "main.rs").read_text()
    assert "    call_initialize();\n        }" in text
    assert "extern crate my_prog as cr;" in text
    expected_fn = generate_instruction_function(idl.instructions[0], gen.config.account_map)
    assert expected_fn.rstrip() in text


def test_generate_wrapper_writes_all_files(crate, tmp_path):
    out = tmp_path / "wrapper"
    generate_wrapper(_idl(), str(crate), out, "pkg")
    assert {p.name for p in out.rglob("*") if p.is_file()} == {"Cargo.toml", "mock.rs", "main.rs"}


def test_missing_account_struct_raises(tmp_path):
    empty = tmp_path / "empty"
    (empty / "src").mkdir(parents=True)
    gen = CodeGenerator(_idl(), empty, tmp_path / "out", "pkg")
    with pytest.raises(ValueError):
        gen.generate_main_rs()


def test_bad_source_raises_value_error(tmp_path):
    broken = tmp_path / "broken" / "src"
    broken.mkdir(parents=True)
    (broken / "lib.rs").write_text("struct A { x: (u8, }")
    with pytest.raises(ValueError):
        GeneratorConfig.from_paths(Path(tmp_path / "broken"), tmp_path / "out", "pkg")