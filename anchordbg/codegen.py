"""Writing the files of a debug wrapper crate for an Anchor program."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path

from anchordbg.account_map import extract_account_struct_map
from anchordbg.idl import Idl
from anchordbg.instruction import generate_instruction_function

# Helpers compiled into the wrapper crate: mocked account infos that live for
# the whole run of the debug binary.
MOCK_HELPERS = r"""
use anchor_lang::prelude::*;
use anchor_lang::Discriminator;

const MOCK_LAMPORTS: u64 = 1_000_000;

fn leak<T>(value: T) -> &'static mut T {
    Box::leak(Box::new(value))
}

pub fn mock_pubkey(label: &str) -> Pubkey {
    let mut raw = [0u8; 32];
    let used = label.len().min(raw.len());
    raw[..used].copy_from_slice(&label.as_bytes()[..used]);
    Pubkey::new_from_array(raw)
}

/// Signer account keyed by a label, owning itself.
pub fn mock_signer_account(label: &str) -> AccountInfo<'static> {
    let key: &'static Pubkey = leak(mock_pubkey(label));
    let buffer = leak([0u8; 10]);
    AccountInfo::new(key, true, true, leak(MOCK_LAMPORTS), &mut buffer[..], key, false, 0)
}

/// Program-derived account whose data starts with the discriminator of `T`.
pub fn mock_pda_account<T: Discriminator>(seeds: &[&[u8]], program_id: &Pubkey, size: usize) -> AccountInfo<'static> {
    let _ = size;
    let (address, _) = Pubkey::find_program_address(seeds, program_id);
    let buffer = leak([0u8; 64]);
    buffer[..8].copy_from_slice(&T::DISCRIMINATOR[..8]);
    let owner: &'static Pubkey = leak(*program_id);
    AccountInfo::new(leak(address), false, true, leak(MOCK_LAMPORTS), &mut buffer[..], owner, false, 0)
}

/// Executable account standing in for the system program.
pub fn mock_system_program() -> AccountInfo<'static> {
    let key: &'static Pubkey = leak(anchor_lang::system_program::ID);
    let owner: &'static Pubkey = leak(PROGRAM_ID);
    let buffer = leak([0u8; 10]);
    AccountInfo::new(key, false, false, leak(MOCK_LAMPORTS), &mut buffer[..], owner, true, 0)
}
"""


@dataclass
class GeneratorConfig:
    """Paths and account information used while generating the wrapper."""

    program_path: str
    out_dir: Path
    src_dir: Path
    package_name: str
    account_map: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_paths(cls, crate_path: str | Path, out_dir: str | Path, package: str) -> GeneratorConfig:
        """Build a configuration, scanning the program sources for account structs."""
        out = Path(out_dir)
        try:
            account_map = extract_account_struct_map(Path(crate_path) / "src")
        except (OSError, ValueError) as exc:
            raise ValueError(
                "Failed to extract account structs from source directory. "
                f"Maybe you have defined your account structs somewhere else? ({exc})"
            ) from exc
        return cls(str(crate_path), out, out / "src", package, account_map)


class CodeGenerator:
    """Generates Cargo.toml, src/mock.rs and src/main.rs of the wrapper crate."""

    def __init__(self, idl: Idl, crate_path: str | Path, out_dir: str | Path, package: str):
        self.idl = idl
        self.crate_name = idl.name.replace("-", "_")
        out = Path(out_dir)
        (out / "src").mkdir(parents=True, exist_ok=True)
        self.config = GeneratorConfig.from_paths(crate_path, out, package)

    def generate_cargo_toml(self) -> None:
        """Write the wrapper's Cargo.toml, reporting the outcome on the console."""
        name, cfg = self.crate_name, self.config
        lines = [
            "[package]",
            f'    name = "{name}"',
            '    version = "0.1.0"',
            '    edition = "2021"',
            "",
            "    [dependencies]",
            f'    {name} = {{ path = "{cfg.program_path}", package = "{cfg.package_name}" }}',
            '    anchor-lang = "0.31.1"',
            "    ",
        ]
        try:
            (cfg.out_dir / "Cargo.toml").write_text("\n".join(lines), encoding="utf-8")
        except OSError as exc:
            print(f"Failed to write Cargo.toml: {exc}", file=sys.stderr)
        else:
            print("File written successfully")

    def generate_mock_rs(self) -> None:
        """Write src/mock.rs holding the account mocking helpers."""
        header = f"use {self.crate_name}::{{ID as PROGRAM_ID}};\n        "
        (self.config.src_dir / "mock.rs").write_text(header + MOCK_HELPERS, encoding="utf-8")

    def generate_main_rs(self) -> None:
        """Write src/main.rs calling every instruction of the program."""
        name = self.crate_name
        instructions = self.idl.instructions
        calls = "".join(f"    call_{ix.name}();\n" for ix in instructions).rstrip()
        functions = "".join(
            generate_instruction_function(ix, self.config.account_map) for ix in instructions
        ).rstrip()
        lines = [
            "use anchor_lang::prelude::*;",
            "",
            f"    extern crate {name} as cr;",
            "    use cr::ID as PROGRAM_ID;",
            "    use cr::*;",
            f"    use cr::{name}::*;",
            "",
            "    mod mock;",
            "    use mock::*;",
            "",
            "        fn main() {",
            f"            println!(\"Native debug wrapper for Anchor program: '{name}'\");",
            f"        {calls}",
            "        }",
            "",
            f"        {functions}",
            "        ",
        ]
        (self.config.src_dir / "main.rs").write_text("\n".join(lines), encoding="utf-8")


def generate_wrapper(idl: Idl, crate_path: str | Path, out_path: str | Path, package: str) -> None:
    """Generate the whole wrapper crate into out_path."""
    generator = CodeGenerator(idl, crate_path, out_path, package)
    generator.generate_cargo_toml()
    generator.generate_mock_rs()
    generator.generate_main_rs()