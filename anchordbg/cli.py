"""Command line entry point generating a debug wrapper for an Anchor program."""

from __future__ import annotations

import argparse

from anchordbg.builder import (
    BuildError,
    build_and_extract_binary,
    maybe_inject_workspace,
    prepare_output_path,
)
from anchordbg.codegen import generate_wrapper
from anchordbg.idl import load_idl
from anchordbg.utils import CliError, cli_error, infer_paths


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser of the tool."""
    parser = argparse.ArgumentParser(
        prog="anchordbg",
        description="Generate a standalone crate that runs Anchor program instructions "
        "natively so they can be debugged.",
    )
    sub = parser.add_subparsers(dest="command", required=True)
    gen = sub.add_parser("generate", help="Generate the debug wrapper crate")
    gen.add_argument("--package", required=True, help="Package name of the Anchor program (required)")
    gen.add_argument(
        "--idl",
        help="Optional path to the generated IDL .json file. Inferred from --package if not provided.",
    )
    gen.add_argument(
        "--program-crate-path",
        help="Optional path to the Anchor program crate root. Inferred from --package if not provided.",
    )
    gen.add_argument(
        "out",
        nargs="?",
        help="Optional output directory for the generated wrapper; a temporary one is used if omitted",
    )
    return parser


def _generate(package: str, idl_path: str | None, crate_path: str | None, out: str | None) -> None:
    if idl_path is None or crate_path is None:
        idl_path, crate_path = infer_paths(package)
    idl = load_idl(idl_path)

    out_path, is_ephemeral, guard = prepare_output_path(out)
    try:
        maybe_inject_workspace(out_path, is_ephemeral)
        try:
            generate_wrapper(idl, crate_path, out_path, package)
        except (OSError, ValueError) as exc:
            cli_error(exc)
        if is_ephemeral:
            build_and_extract_binary(package, out_path)
    finally:
        if guard is not None:
            guard.cleanup()


def main(argv: list[str] | None = None) -> int:
    """Run the tool and return its exit status."""
    args = build_parser().parse_args(argv)
    if args.command == "generate":
        try:
            _generate(args.package, args.idl, args.program_crate_path, args.out)
        except (CliError, ValueError, BuildError, OSError) as exc:
            cli_error(exc)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())