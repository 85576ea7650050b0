"""Output location handling and building of the generated wrapper crate."""

from __future__ import annotations

import shutil
import subprocess
import tempfile
from pathlib import Path

from anchordbg.utils import CliError, binary_name_from_package, cli_error, inject_workspace_member


class BuildError(RuntimeError):
    """Raised when building or running the wrapper binary fails."""


def prepare_output_path(
    user_out: str | Path | None,
) -> tuple[Path, bool, tempfile.TemporaryDirectory | None]:
    """Return the output path, whether it is temporary, and the directory guard."""
    if user_out is not None:
        return Path(user_out), False, None
    temp = tempfile.TemporaryDirectory()
    return Path(temp.name), True, temp


def maybe_inject_workspace(
    out_path: str | Path, is_ephemeral: bool, root: str | Path | None = None
) -> None:
    """Register a persistent output crate as a member of the root workspace."""
    if is_ephemeral:
        return
    try:
        base = Path.cwd() if root is None else Path(root)
    except OSError:
        return
    try:
        inject_workspace_member(base / "Cargo.toml", str(out_path))
    except (OSError, CliError) as exc:
        cli_error(exc)


def build_and_extract_binary(package: str, out_path: str | Path) -> None:
    """Build the wrapper, copy its binary to target/debug and run it."""
    manifest_path = Path(out_path) / "Cargo.toml"
    build = subprocess.run(
        [
            "cargo",
            "build",
            "--manifest-path",
            str(manifest_path),
            "--target-dir",
            "target/debuggen",
        ]
    )
    if build.returncode != 0:
        raise BuildError("Failed to build the debug wrapper in order to create the binary file.")

    built_bin_path = Path("target/debuggen/debug") / binary_name_from_package(package)
    bin_out_path = Path.cwd() / "target" / "debug" / package
    shutil.copy(built_bin_path, bin_out_path)
    print(
        f"\n[INFO] Debug binary successfully written to:\n -> {bin_out_path}\n"
        f"::BIN_OUT::{bin_out_path}\n"
    )

    run = subprocess.run([str(bin_out_path)])
    if run.returncode != 0:
        raise BuildError("Execution of the debug wrapper binary failed.")