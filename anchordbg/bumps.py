"""Rust code deriving PDA bumps for an instruction."""

from __future__ import annotations

from anchordbg.idl import AccountSeed, ArgSeed, ConstSeed, IdlInstruction, Seed, visit_account_item


def seed_expression(seed: Seed) -> str:
    """Return the Rust expression for one seed of find_program_address."""
    if isinstance(seed, ConstSeed):
        return "&[" + ", ".join(str(b) for b in seed.value) + "]"
    if isinstance(seed, ArgSeed):
        return f"&{seed.path}::to_le_bytes()"
    if isinstance(seed, AccountSeed):
        return f"{seed.path.split('.')[0]}.key().as_ref()"
    raise TypeError(f"unknown seed: {seed!r}")


def generate_bumps_code(instruction: IdlInstruction) -> list[str]:
    """Return one bumps struct field for every PDA account of an instruction."""
    fields = []
    for item in instruction.accounts:
        account = visit_account_item(item)
        if account is None:
            raise ValueError("Failed to retrieve accounts")
        if account.pda is None:
            continue
        seeds = ", ".join(seed_expression(s) for s in account.pda.seeds)
        fields.append(
            f"{account.name}: Pubkey::find_program_address(&[{seeds}], &PROGRAM_ID).1"
        )
    return fields