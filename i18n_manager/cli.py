"""
Command-line interface for comparing and filling translation folders
"""
import argparse
import asyncio
import signal
import sys

from i18n_manager.config import (
    DEFAULT_SERVICE,
    DEFAULT_SOURCE_LANGUAGE,
    SUPPORTED_SERVICES,
    get_api_key_for_service,
)
from i18n_manager.core.comparison import ReconciliationReport
from i18n_manager.core.exceptions import I18nManagerError, ValidationError
from i18n_manager.core.session import TranslationSession
from i18n_manager.utils.unified_logger import setup_cli_logger, LogType


def format_report(report: ReconciliationReport, issues_only: bool = False) -> str:
    """Plain-text table: one line per key with its status and per-language presence."""
    lines = []
    header = ["Key", "Status"] + list(report.languages)
    lines.append(" | ".join(header))
    lines.append("-" * len(lines[0]))
    for entry in report.view(issues_only):
        cells = [entry.key_path, entry.status.label]
        cells += ["yes" if entry.exists_by_language[lang] else "MISSING" for lang in report.languages]
        lines.append(" | ".join(cells))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare translation files and fill missing keys.")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    compare_parser = subparsers.add_parser("compare", help="Report keys missing or mistyped across languages.")
    compare_parser.add_argument("folder", help="Folder holding one JSON file (or sub-folder) per language.")
    compare_parser.add_argument("--issues-only", action="store_true", help="Hide keys that are Ok.")
    compare_parser.add_argument("--pair", nargs=2, metavar=("A", "B"), default=None,
                                help="Compare two languages only (pairwise mode).")

    translate_parser = subparsers.add_parser("translate", help="Translate keys missing from target languages.")
    translate_parser.add_argument("folder", help="Folder holding one JSON file (or sub-folder) per language.")
    translate_parser.add_argument("-sl", "--source_lang", default=DEFAULT_SOURCE_LANGUAGE,
                                  help=f"Source language (default: {DEFAULT_SOURCE_LANGUAGE}).")
    translate_parser.add_argument("-tl", "--target_lang", action="append", default=None,
                                  help="Target language; repeat for several. Default: every other loaded language.")
    translate_parser.add_argument("--service", default=DEFAULT_SERVICE, choices=list(SUPPORTED_SERVICES),
                                  help=f"Translation service (default: {DEFAULT_SERVICE}).")
    translate_parser.add_argument("--api_key", default=None,
                                  help="API key for the service. Defaults to the key configured in .env.")
    translate_parser.add_argument("-o", "--output", default=None,
                                  help="Output folder. If not specified, modified files are written in place.")
    return parser


def run_compare(args, logger) -> int:
    session = TranslationSession.from_folder(args.folder)
    if not session.language_set:
        logger.error(f"No translation files found in {args.folder}")
        return 1

    if args.pair:
        report = session.compare_pair(args.pair[0], args.pair[1])
    else:
        report = session.compare()

    print(format_report(report, issues_only=args.issues_only))
    logger.info("Comparison Results", LogType.COMPARISON_SUMMARY, {
        'languages': list(report.languages),
        'total': len(report),
        'counts': report.status_counts()
    })
    return 0 if not report.issues_only() else 2


async def run_translate(args, logger) -> int:
    api_key = args.api_key or get_api_key_for_service(args.service)
    session = TranslationSession.from_folder(args.folder, api_key=api_key, service=args.service)
    targets = args.target_lang or [lang for lang in session.languages if lang != args.source_lang]

    interrupted = False

    def on_sigint(signum, frame):
        nonlocal interrupted
        interrupted = True
        logger.warning("Interruption requested, stopping after the current key")

    previous_handler = signal.signal(signal.SIGINT, on_sigint)
    try:
        async with session:
            outcome = await session.translate_missing(
                args.source_lang,
                targets,
                check_interruption_callback=lambda: interrupted
            )
            if outcome.success_count:
                written = await session.save(args.output or args.folder, only_dirty=args.output is None)
                logger.info(f"Wrote {len(written)} file(s)", LogType.FILE_OPERATION)
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    report = session.compare()
    logger.info("Comparison Results", LogType.COMPARISON_SUMMARY, {
        'languages': list(report.languages),
        'total': len(report),
        'counts': report.status_counts()
    })
    return 0 if outcome.failed_count == 0 and not outcome.cancelled else 1


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = setup_cli_logger(enable_colors=not args.no_color)

    try:
        if args.command == "compare":
            return run_compare(args, logger)
        return asyncio.run(run_translate(args, logger))
    except ValidationError as e:
        logger.error(e.message, LogType.ERROR_DETAIL, {'details': str(e)})
        return 1
    except (I18nManagerError, FileNotFoundError) as e:
        logger.error(f"Operation failed: {e}", LogType.ERROR_DETAIL, {'details': str(e)})
        return 1


if __name__ == "__main__":
    sys.exit(main())
