"""Dummy values for instruction arguments."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from anchordbg.idl import IdlInstruction, format_idl_type

_SIMPLE = {
    "u8": "0u8",
    "u64": "0u64",
    "bool": "false",
    "string": '"test".to_string()',
    "pubkey": "Pubkey::new_unique()",
}


@dataclass
class ArgCode:
    """Argument bindings and the arguments passed to the instruction call."""

    args: list[str] = field(default_factory=list)
    call_args: list[str] = field(default_factory=lambda: ["ctx"])


def _array_len_text(length: Any) -> str | None:
    if isinstance(length, int) and not isinstance(length, bool):
        return f"Value({length})"
    if isinstance(length, dict) and "generic" in length:
        return f"Generic({json.dumps(str(length['generic']), ensure_ascii=False)})"
    return None


def dummy_value(ty: Any) -> str:
    """Return a Rust expression usable as a placeholder for an argument type."""
    if isinstance(ty, str) and ty in _SIMPLE:
        return _SIMPLE[ty]
    if isinstance(ty, dict) and len(ty) == 1 and "array" in ty:
        inner = ty["array"]
        if isinstance(inner, list) and len(inner) == 2:
            length = _array_len_text(inner[1])
            if length is not None:
                return f"[0u8; {length}]"
    return f"/* unsupported arg type: {format_idl_type(ty)} */ Default::default()"


def generate_argument_code(instruction: IdlInstruction) -> ArgCode:
    """Bind a dummy value to every argument and list the call arguments."""
    code = ArgCode()
    for arg in instruction.args:
        code.args.append(f"let {arg.name} = {dummy_value(arg.ty)};")
        code.call_args.append(arg.name)
    return code