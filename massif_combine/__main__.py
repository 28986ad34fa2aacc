import argparse
import logging
import sys
from typing import List, Optional

from .core import init_massif_combine
from .errors import MassifCombineError
from .files import delete_files, expand_input_patterns
from .massif import MassifFile

logger = logging.getLogger("massif_combine.main")


def build_parser() -> argparse.ArgumentParser:
    from . import env

    parser = argparse.ArgumentParser(
        prog="massif-combine",
        description="Combine massif output files into a single massif file, with "
        "snapshots sorted by time.",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=env.MASSIF_COMBINE_OUTPUT,
        help="output file path (default: %(default)s)",
    )
    parser.add_argument(
        "-d",
        "--delete",
        action="store_true",
        help="after combining, delete input files",
    )
    parser.add_argument(
        "-v", "--verbose", action="count", help="enable verbose logging"
    )
    parser.add_argument(
        "patterns",
        nargs="*",
        metavar="file-pattern",
        help="input file list, can include * character",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    if not argv:
        parser.print_help()
        return -1

    init_massif_combine()
    args, extras = parser.parse_known_args(argv)
    # like getopt, unknown options are skipped and other arguments are inputs
    unknown = [arg for arg in extras if arg.startswith("-")]
    args.patterns += [arg for arg in extras if not arg.startswith("-")]

    if args.verbose:
        from .core import enable_debug_mode, enable_verbose_output

        enable_verbose_output()
        enable_debug_mode()
        if args.verbose > 1:
            from .audit import enable_python_audit_log

            enable_python_audit_log()

    if unknown:
        logger.warning("ignoring unknown arguments: %s", " ".join(unknown))

    massif_file = MassifFile()
    added = massif_file.add_files(expand_input_patterns(args.patterns))

    try:
        massif_file.write(args.output)
    except MassifCombineError as err:
        logger.error("%s", err)
        return 0

    logger.info(
        "combined %d snapshots to %s", len(massif_file.snapshots), args.output
    )

    if args.delete:
        delete_files(added)

    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
