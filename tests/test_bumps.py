import pytest

from anchordbg.bumps import generate_bumps_code, seed_expression
from anchordbg.idl import (
    AccountSeed,
    ArgSeed,
    ConstSeed,
    IdlAccountGroup,
    IdlInstruction,
    IdlInstructionAccount,
    IdlPda,
)


def test_const_seed():
    assert seed_expression(ConstSeed((1, 2, 3))) == "&[1, 2, 3]"


def test_empty_const_seed():
    assert seed_expression(ConstSeed(())) == "&[]"


def test_arg_seed():
    assert seed_expression(ArgSeed("amount")) == "&amount::to_le_bytes()"


def test_account_seed_uses_first_path_part():
    assert seed_expression(AccountSeed("owner.authority")) == "owner.key().as_ref()"
    assert seed_expression(AccountSeed("owner")) == "owner.key().as_ref()"


def test_only_pda_accounts_get_fields():
    ix = IdlInstruction(
        name="init",
        accounts=(
            IdlInstructionAccount("payer", signer=True),
            IdlInstructionAccount(
                "vault", pda=IdlPda((ArgSeed("id"), AccountSeed("payer")))
            ),
        ),
    )
    assert generate_bumps_code(ix) == [
        "vault: Pubkey::find_program_address("
        "&[&id::to_le_bytes(), payer.key().as_ref()], &PROGRAM_ID).1"
    ]


def test_no_pda_no_fields():
    ix = IdlInstruction(name="x", accounts=(IdlInstructionAccount("a"),))
    assert generate_bumps_code(ix) == []


def test_empty_group_raises():
    ix = IdlInstruction(name="x", accounts=(IdlAccountGroup("g"),))
    with pytest.raises(ValueError):
        generate_bumps_code(ix)