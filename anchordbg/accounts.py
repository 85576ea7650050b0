"""Rust code for the accounts an instruction takes."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from anchordbg.idl import IdlInstruction, visit_account_item

_SYSTEM_PROGRAM = "system_program"


@dataclass
class AccountCode:
    """Bindings, struct fields and account-info clones for one instruction."""

    bindings: list[str] = field(default_factory=list)
    fields: list[str] = field(default_factory=list)
    account_infos: list[str] = field(default_factory=list)


def _mock_call(name: str, signer: bool, account_map: Mapping[str, str]) -> str:
    if name.lower() == _SYSTEM_PROGRAM:
        return "Box::leak(Box::new(mock_system_program()))"
    if signer:
        return f'Box::leak(Box::new(mock_signer_account("{name}")))'
    try:
        struct_name = account_map[name]
    except KeyError:
        raise ValueError(
            f"Account struct name not found for `{name}`, maybe you don't have it "
            "in lib.rs and it cannot be used to derive the account discriminator."
        ) from None
    return (
        f'Box::leak(Box::new(mock_pda_account::<{struct_name}>'
        f'(&[b"{name}"], &PROGRAM_ID, 64)))'
    )


def generate_account_code(
    instruction: IdlInstruction, account_map: Mapping[str, str]
) -> AccountCode:
    """Build the mock bindings and Accounts struct fields of an instruction."""
    code = AccountCode()
    for item in instruction.accounts:
        account = visit_account_item(item)
        if account is None:
            raise ValueError("Failed to retrieve accounts")
        name = account.name
        is_system = name.lower() == _SYSTEM_PROGRAM

        code.bindings.append(
            f"let {name} = {_mock_call(name, account.signer, account_map)};"
        )

        if account.signer:
            account_type = "Signer"
        elif is_system:
            account_type = "Program"
        else:
            account_type = "Account"
        prefix = "&*" if is_system else ""
        code.fields.append(f"{name}: {account_type}::try_from({prefix}{name}).unwrap()")
        code.account_infos.append(f"{name}.clone()")
    return code