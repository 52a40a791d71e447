"""unityweb CLI.

This is the stable CLI entrypoint (console-script: ``unityweb``).

Commands keep the historical names and aliases of the tool:
  unpack (u, un, extract, x)   archive -> directory
  pack   (p, repack, r)        directory -> archive
plus two read-only helpers: list (ls) and verify.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from unityweb.core.archive import Archive
from unityweb.errors import EXIT_GENERIC, EXIT_OK, UnityWebError

VERSION = "1.0.2"
PROG = "unityweb"


def _log(msg: str) -> None:
    print(f"[{PROG}] {msg}", file=sys.stderr)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")
    p.add_argument("-v", "--verbose", action="store_true", help="Print one line per entry")


def _log_entries(arc: Archive) -> None:
    for e in arc:
        _log(f"{e.offset:>10} {e.size:>10}  {e.display_name}")


def _cmd_unpack(input_path: Path, output_dir: Path, *, verbose: bool) -> int:
    from unityweb.tree import unpack_file

    arc = unpack_file(input_path, output_dir)
    if verbose:
        _log_entries(arc)
    _log(f"unpacked {len(arc)} files into {output_dir}")
    return EXIT_OK


def _cmd_pack(input_dir: Path, output_path: Path, *, verbose: bool) -> int:
    from unityweb.tree import pack_directory

    arc = pack_directory(input_dir, output_path)
    if verbose:
        _log_entries(arc)
    _log(f"packed {len(arc)} files into {output_path}")
    return EXIT_OK


def _cmd_list(input_path: Path) -> int:
    from unityweb.core.archive import decode_from_file

    arc = decode_from_file(input_path)
    for e in arc:
        print(f"{e.offset}\t{e.size}\t{e.display_name}")
    return EXIT_OK


def _cmd_verify(input_path: Path) -> int:
    from unityweb.verify import verify_archive_file

    verify_archive_file(input_path)
    print("OK")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog=PROG, description="A tool for unpacking and repacking Unity Web data files."
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_unpack = sub.add_parser(
        "unpack",
        aliases=["u", "un", "extract", "x"],
        help="Unpack a Unity Web data file into a directory.",
    )
    p_unpack.add_argument(
        "-i", "--input", type=Path, required=True, help="The path to the Unity Web data file."
    )
    p_unpack.add_argument(
        "-o", "--output", type=Path, required=True, help="The path to the output directory."
    )
    p_unpack.set_defaults(command="unpack")
    _add_common_args(p_unpack)

    p_pack = sub.add_parser(
        "pack",
        aliases=["p", "repack", "r"],
        help="Pack a directory into a Unity Web data file.",
    )
    p_pack.add_argument(
        "-i", "--input", type=Path, required=True, help="The path to the input directory."
    )
    p_pack.add_argument(
        "-o",
        "--output",
        type=Path,
        required=True,
        help="The path to the output Unity Web data file.",
    )
    p_pack.set_defaults(command="pack")
    _add_common_args(p_pack)

    p_list = sub.add_parser("list", aliases=["ls"], help="List entries (offset, size, name).")
    p_list.add_argument("-i", "--input", type=Path, required=True)
    p_list.set_defaults(command="list")
    _add_common_args(p_list)

    p_verify = sub.add_parser("verify", help="Decode an archive and check its offset table.")
    p_verify.add_argument("-i", "--input", type=Path, required=True)
    p_verify.set_defaults(command="verify")
    _add_common_args(p_verify)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        # ns.cmd holds whichever alias was typed; ns.command is canonical.
        if ns.command == "unpack":
            return _cmd_unpack(ns.input, ns.output, verbose=bool(ns.verbose))
        if ns.command == "pack":
            return _cmd_pack(ns.input, ns.output, verbose=bool(ns.verbose))
        if ns.command == "list":
            return _cmd_list(ns.input)
        if ns.command == "verify":
            return _cmd_verify(ns.input)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except UnityWebError as e:
        if getattr(ns, "debug", False):
            raise
        _log(str(e))
        return int(e.exit_code)
    except Exception as e:
        if getattr(ns, "debug", False):
            raise
        _log(f"error: {e}")
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
