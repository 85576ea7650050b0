# anchordbg

`anchordbg` reads the IDL of an Anchor Solana program and produces a small
standalone Rust crate, called a debug wrapper, that calls every instruction of
the program natively with mocked accounts, dummy arguments and PDA bumps. Once
built, the wrapper is an ordinary executable that you can step through with a
native debugger such as `lldb`.

## Installation

```
pip install anchordbg
```

Building the wrapper needs a working `cargo` on your `PATH`.

## Usage

Run the command from the root of an Anchor workspace:

```
anchordbg generate --package my_program
```

```
anchordbg generate --package NAME [--idl PATH] [--program-crate-path PATH] [OUT]
```

- `--package NAME`: package name of the Anchor program (required).
- `--idl PATH`: path to the generated IDL `.json` file.
- `--program-crate-path PATH`: path to the program crate root.
- `OUT`: output directory for the wrapper crate.

Paths are taken from `--idl` and `--program-crate-path` only when both are
given. Otherwise both are inferred from `--package`:

- the program crate is `programs/<package>` under the current directory, and
  it must hold `Cargo.toml` and `src/lib.rs`;
- the IDL is read from `target/idl/<module>.json`, where `<module>` is the name
  in the `#[program] pub mod <module>` declaration in `lib.rs`.

### With an output directory

The crate is written to `OUT` and kept there. `OUT` is added to
`workspace.members` in the `Cargo.toml` of the current directory (that file
must exist; the entry is not added twice). The crate is not built for you.

### Without an output directory

The crate is generated in a temporary directory and built with
`cargo build --target-dir target/debuggen`. The binary is copied to
`target/debug/<package>` and run once; its path is printed on a line starting
with `::BIN_OUT::` so that editor integrations can pick it up. The temporary
directory is removed afterwards.

Any error is printed on stderr as `anchordbg Error: ...` and the command exits
with status 1.

## What gets generated

- `Cargo.toml`: depends on your program crate by path, plus `anchor-lang`.
- `src/mock.rs`: `mock_pubkey`, `mock_signer_account`, `mock_pda_account` and
  `mock_system_program`, which build mocked `AccountInfo` values.
- `src/main.rs`: one `call_<instruction>()` function per instruction, each
  building the accounts struct, the bumps struct and the arguments, then
  calling the instruction and printing whether it succeeded. `main` calls them
  all in IDL order.

Accounts named `system_program` are mocked as the system program, signers as
signer accounts, and every other account as a PDA whose data starts with the
discriminator of its account type. Those types are found by scanning the
`#[derive(Accounts)]` structs in the `.rs` files under the program's `src`
directory, so every such account must be declared there.

Arguments of type `u8`, `u64`, `bool`, `string`, `pubkey` and arrays get a
dummy value; any other type gets `Default::default()` with a comment naming
the type. Bumps are computed with `Pubkey::find_program_address` from the PDA
seeds in the IDL.

## Using it as a library

```python
from anchordbg.idl import load_idl
from anchordbg.codegen import generate_wrapper

idl = load_idl("target/idl/my_program.json")
generate_wrapper(idl, "programs/my_program", "debug-wrapper", "my_program")
```

Other entry points:

- `anchordbg.idl`: `parse_idl`, `load_idl`, the IDL dataclasses and
  `format_idl_type`.
- `anchordbg.account_map`: `extract_from_source` and
  `extract_account_struct_map`.
- `anchordbg.instruction`: `generate_instruction_function`, the source of one
  `call_<name>` function.
- `anchordbg.builder`: `prepare_output_path`, `maybe_inject_workspace` and
  `build_and_extract_binary`.
- `anchordbg.utils`: `infer_paths`, `extract_program_mod_name`,
  `inject_workspace_member`, `to_camel_case` and `binary_name_from_package`.

Unreadable or malformed IDL raises `IdlError` (a `ValueError`); missing files
during path inference and bad workspace manifests raise `CliError`; an account
without a known struct type raises `ValueError`; a failed build or run of the
wrapper raises `BuildError`.

## What it does not do

`anchordbg` does not start a debugger. It builds and runs the wrapper once;
attaching `lldb` (or any other debugger) to the binary is left to you or your
editor.