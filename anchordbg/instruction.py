"""Rust function that calls one instruction with mocked accounts."""

from __future__ import annotations

from collections.abc import Mapping

from anchordbg.accounts import generate_account_code
from anchordbg.args import generate_argument_code
from anchordbg.bumps import generate_bumps_code
from anchordbg.idl import IdlInstruction
from anchordbg.utils import to_camel_case


def generate_instruction_function(
    instruction: IdlInstruction, account_map: Mapping[str, str]
) -> str:
    """Return the source of a `call_<name>` function for an instruction."""
    ix_name = instruction.name
    struct_name = to_camel_case(ix_name)
    bump_struct = f"{struct_name}Bumps"

    accounts = generate_account_code(instruction, account_map)
    args = generate_argument_code(instruction)
    bump_fields = generate_bumps_code(instruction)

    lines = [
        "",
        f"fn call_{ix_name}() {{",
        "    " + "\n    ".join(accounts.bindings),
        "",
        f"    let mut accounts = {struct_name} {{",
        "        " + ",\n       ".join(accounts.fields),
        "    };",
        "",
        f"    let account_infos = vec![{', '.join(accounts.account_infos)}];",
        f"    let bumps = {bump_struct} {{ ",
        "        " + ",\n     ".join(bump_fields),
        "    };",
        "",
        "    let ctx = Context::new(",
        "        &PROGRAM_ID,",
        "        &mut accounts,",
        "        &account_infos,",
        "        bumps",
        "    );",
        "    " + "\n    ".join(args.args),
        "",
        f"    match {ix_name}({', '.join(args.call_args)}) {{",
        f'        Ok(_) => println!("{ix_name} succeeded"),',
        f'        Err(e) => eprintln!("{ix_name} failed: {{:?}}", e),',
        "    }",
        "}",
        "    ",
    ]
    return "\n".join(lines)