"""Data model and loader for Anchor IDL JSON documents."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union


class IdlError(ValueError):
    """Raised when an IDL document cannot be read or understood."""


@dataclass(frozen=True)
class ConstSeed:
    """A constant PDA seed given as raw bytes."""

    value: tuple[int, ...]


@dataclass(frozen=True)
class ArgSeed:
    """A PDA seed taken from an instruction argument."""

    path: str


@dataclass(frozen=True)
class AccountSeed:
    """A PDA seed taken from another account's key or field."""

    path: str
    account: str | None = None


Seed = Union[ConstSeed, ArgSeed, AccountSeed]


@dataclass(frozen=True)
class IdlPda:
    """Seeds used to derive a program address."""

    seeds: tuple[Seed, ...] = ()


@dataclass(frozen=True)
class IdlInstructionAccount:
    """A single account taken by an instruction."""

    name: str
    writable: bool = False
    signer: bool = False
    optional: bool = False
    address: str | None = None
    pda: IdlPda | None = None


@dataclass(frozen=True)
class IdlAccountGroup:
    """A composite group of accounts, possibly nested."""

    name: str
    accounts: tuple[AccountItem, ...] = ()


AccountItem = Union[IdlInstructionAccount, IdlAccountGroup]


@dataclass(frozen=True)
class IdlField:
    """A named, typed value such as an instruction argument."""

    name: str
    ty: Any


@dataclass(frozen=True)
class IdlInstruction:
    """One instruction of the program."""

    name: str
    accounts: tuple[AccountItem, ...] = ()
    args: tuple[IdlField, ...] = ()


@dataclass(frozen=True)
class Idl:
    """A parsed IDL document."""

    name: str
    address: str = ""
    instructions: tuple[IdlInstruction, ...] = ()


def _get(obj: Any, key: str, where: str) -> Any:
    if not isinstance(obj, dict):
        raise IdlError(f"{where} must be an object")
    if key not in obj:
        raise IdlError(f"missing field `{key}` in {where}")
    return obj[key]


def _list(obj: Any, where: str) -> list:
    if not isinstance(obj, list):
        raise IdlError(f"{where} must be a list")
    return obj


def _parse_seed(raw: Any) -> Seed:
    kind = _get(raw, "kind", "seed")
    if kind == "const":
        value = _list(_get(raw, "value", "const seed"), "const seed value")
        if not all(isinstance(b, int) and 0 <= b <= 255 for b in value):
            raise IdlError("const seed value must be a list of bytes")
        return ConstSeed(tuple(value))
    if kind == "arg":
        return ArgSeed(str(_get(raw, "path", "arg seed")))
    if kind == "account":
        return AccountSeed(str(_get(raw, "path", "account seed")), raw.get("account"))
    raise IdlError(f"unknown seed kind: {kind!r}")


def _parse_account_item(raw: Any) -> AccountItem:
    name = str(_get(raw, "name", "instruction account"))
    if "accounts" in raw:
        nested = _list(raw["accounts"], f"accounts of group `{name}`")
        return IdlAccountGroup(name, tuple(map(_parse_account_item, nested)))
    pda = None
    if raw.get("pda") is not None:
        seeds = _list(_get(raw["pda"], "seeds", "pda"), "pda seeds")
        pda = IdlPda(tuple(map(_parse_seed, seeds)))
    return IdlInstructionAccount(
        name=name,
        writable=bool(raw.get("writable", False)),
        signer=bool(raw.get("signer", False)),
        optional=bool(raw.get("optional", False)),
        address=raw.get("address"),
        pda=pda,
    )


def _parse_instruction(raw: Any) -> IdlInstruction:
    name = str(_get(raw, "name", "instruction"))
    accounts = _list(raw.get("accounts", []), f"accounts of `{name}`")
    args = _list(raw.get("args", []), f"args of `{name}`")
    return IdlInstruction(
        name=name,
        accounts=tuple(map(_parse_account_item, accounts)),
        args=tuple(
            IdlField(str(_get(a, "name", "argument")), _get(a, "type", "argument")) for a in args
        ),
    )


def parse_idl(data: str | bytes | dict) -> Idl:
    """Parse an IDL from JSON text or an already decoded mapping."""
    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as exc:
            raise IdlError(str(exc)) from exc
    name = str(_get(_get(data, "metadata", "idl"), "name", "metadata"))
    instructions = _list(_get(data, "instructions", "idl"), "instructions")
    return Idl(
        name=name,
        address=str(data.get("address", "")),
        instructions=tuple(map(_parse_instruction, instructions)),
    )


def load_idl(path: str | Path) -> Idl:
    """Read and parse an IDL JSON file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise IdlError(f"Failed to read IDL file at {path}: {exc}") from exc
    try:
        return parse_idl(text)
    except IdlError as exc:
        raise IdlError(f"Failed to parse IDL JSON at {path}: {exc}") from exc


def visit_account_item(item: AccountItem) -> IdlInstructionAccount | None:
    """Return the first single account found in an item, searching groups depth first."""
    if isinstance(item, IdlInstructionAccount):
        return item
    return next(
        (found for found in map(visit_account_item, item.accounts) if found is not None), None
    )


_PRIMITIVES = {
    "bool": "Bool", "u8": "U8", "i8": "I8", "u16": "U16", "i16": "I16",
    "u32": "U32", "i32": "I32", "f32": "F32", "u64": "U64", "i64": "I64",
    "f64": "F64", "u128": "U128", "i128": "I128", "u256": "U256", "i256": "I256",
    "bytes": "Bytes", "string": "String", "pubkey": "Pubkey",
}
_WRAPPERS = {"vec": "Vec", "option": "Option", "coption": "COption"}


def _quote(text: Any) -> str:
    return json.dumps(str(text), ensure_ascii=False)


def _format_generic_arg(arg: Any) -> str:
    kind = _get(arg, "kind", "generic argument")
    if kind == "type":
        return f"Type {{ ty: {format_idl_type(_get(arg, 'type', 'generic argument'))} }}"
    if kind == "const":
        return f"Const {{ value: {_quote(_get(arg, 'value', 'generic argument'))} }}"
    raise IdlError(f"unknown generic argument kind: {kind!r}")


def _format_array_len(length: Any) -> str:
    if isinstance(length, int):
        return f"Value({length})"
    if isinstance(length, dict) and "generic" in length:
        return f"Generic({_quote(length['generic'])})"
    raise IdlError(f"bad array length: {length!r}")


def format_idl_type(ty: Any) -> str:
    """Render an IDL type the way a debug dump of the type names it."""
    if isinstance(ty, str) and ty in _PRIMITIVES:
        return _PRIMITIVES[ty]
    if isinstance(ty, dict) and len(ty) == 1:
        ((key, inner),) = ty.items()
        if key in _WRAPPERS:
            return f"{_WRAPPERS[key]}({format_idl_type(inner)})"
        if key == "generic":
            return f"Generic({_quote(inner)})"
        if key == "array":
            if not isinstance(inner, list) or len(inner) != 2:
                raise IdlError("array type must be [type, length]")
            return f"Array({format_idl_type(inner[0])}, {_format_array_len(inner[1])})"
        if key == "defined":
            if isinstance(inner, str):
                name, generics = inner, []
            else:
                name, generics = _get(inner, "name", "defined type"), inner.get("generics", [])
            rendered = ", ".join(map(_format_generic_arg, generics))
            return f"Defined {{ name: {_quote(name)}, generics: [{rendered}] }}"
    raise IdlError(f"unknown type: {ty!r}")