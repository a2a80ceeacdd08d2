"""CLI application entry point for ytd-pick.

This module is the **sole error boundary** for the entire application.
It catches :class:`~ytd_pick.exceptions.YtdPickError`, ``KeyboardInterrupt``,
and any unexpected ``Exception``, renders a short message and returns a
well-defined exit code.

No selection policy lives here: filtering, naming and writing are all
delegated to the core and infrastructure layers.
"""

from __future__ import annotations

import argparse
import sys

from ytd_pick.cli import exit_codes
from ytd_pick.cli.console import configure_logging, console
from ytd_pick.exceptions import NoMatchingVariantError, YtdPickError
from ytd_pick.utils.constants import DEFAULT_FORMAT, DEFAULT_OUTPUT_DIR, DEFAULT_QUALITY
from ytd_pick.version import __version__


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    """Construct the argument parser.

    ``ytd-pick URL [NICKNAME] [PATH]`` downloads one variant of the video;
    ``--list`` only shows what is available.
    """
    parser = argparse.ArgumentParser(
        prog="ytd-pick",
        description="Download one encoded variant of a YouTube video.",
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "url",
        nargs="?",
        default=None,
        help="Video page URL or 11-character video ID.",
    )
    parser.add_argument(
        "nickname",
        nargs="?",
        default="",
        help="Output file name without extension (default: video title).",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=DEFAULT_OUTPUT_DIR,
        help="Destination directory, created if missing (default: %(default)s).",
    )
    parser.add_argument(
        "-q",
        "--quality",
        default=DEFAULT_QUALITY,
        metavar="TIER",
        help="Exact quality tier, e.g. hd720 (default: best available).",
    )
    format_group = parser.add_mutually_exclusive_group()
    format_group.add_argument(
        "-f",
        "--format",
        default=DEFAULT_FORMAT,
        metavar="MIME",
        help="Exact container format (default: %(default)s).",
    )
    format_group.add_argument(
        "--any-format",
        action="store_true",
        help="Do not constrain the container format.",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List the available variants and exit.",
    )
    parser.add_argument(
        "--pick",
        action="store_true",
        help="Choose interactively among the variants that match.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug logging.",
    )
    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------

def _handle_list(url: str) -> int:
    from ytd_pick.cli.variant_prompt import display_variant_table
    from ytd_pick.core.metadata_service import MetadataService
    from ytd_pick.infra.ytdlp_provider import YtDlpMetadataProvider

    metadata_service = MetadataService(YtDlpMetadataProvider())
    console.print(f"\n[bold]Fetching metadata…[/bold]  {url}\n")
    collection = metadata_service.get_variants(url)
    display_variant_table(collection)
    return exit_codes.SUCCESS


def _handle_download(args: argparse.Namespace) -> int:
    """Resolve, filter, optionally prompt, then download one variant."""
    from ytd_pick.cli.progress import RichProgressHook
    from ytd_pick.cli.variant_prompt import display_variant_table, prompt_variant_selection
    from ytd_pick.core.download_service import DownloadService
    from ytd_pick.core.metadata_service import MetadataService
    from ytd_pick.core.naming import extension_for_format
    from ytd_pick.infra.local_sink import LocalFileSink
    from ytd_pick.infra.ytdlp_fetcher import YtDlpByteFetcher
    from ytd_pick.infra.ytdlp_provider import YtDlpMetadataProvider

    metadata_service = MetadataService(YtDlpMetadataProvider())
    console.print(f"\n[bold]Fetching metadata…[/bold]  {args.url}\n")
    collection = metadata_service.get_variants(args.url)

    format_filter = "" if args.any_format else args.format
    candidates = collection.filter(args.quality, format_filter)
    if args.pick:
        display_variant_table(candidates)
        variant = prompt_variant_selection(candidates)
    else:
        variant = candidates[0]

    filename = ""
    if args.nickname:
        filename = args.nickname + extension_for_format(variant.format)

    console.print(
        f"[bold green]Starting download…[/bold green]  "
        f"quality={variant.quality} format={variant.format}\n"
    )

    download_service = DownloadService(YtDlpByteFetcher(), LocalFileSink())
    with RichProgressHook(filename or variant.title) as hook:
        written = download_service.download_variant(
            variant,
            args.path,
            filename,
            progress_callback=hook,
        )

    console.print(f"\n[bold green]Video downloaded to[/bold green] {written}")
    return exit_codes.SUCCESS


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------

def main(argv: list[str] | None = None) -> int:
    """Run the ytd-pick CLI and return the process exit code.

    *argv* defaults to ``sys.argv[1:]``; passing it explicitly keeps
    tests free of monkeypatching.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.url is None:
        parser.print_help()
        return exit_codes.SUCCESS

    configure_logging(args.verbose)

    if args.list:
        return _handle_list(args.url)
    return _handle_download(args)


# ---------------------------------------------------------------------------
# Script-level error boundary
# ---------------------------------------------------------------------------

def cli() -> None:
    """Top-level error boundary invoked by the console-script entry point."""
    try:
        code = main()
        sys.exit(code)
    except YtdPickError as exc:
        console.print(f"[bold red]Error:[/bold red] {exc}")
        if exc.hint:
            console.print(f"[yellow]Hint:[/yellow] {exc.hint}")
        if isinstance(exc, NoMatchingVariantError):
            sys.exit(exit_codes.NO_MATCHING_VARIANT)
        sys.exit(exit_codes.GENERAL_ERROR)
    except KeyboardInterrupt:
        console.print("\n[yellow]Aborted by user.[/yellow]")
        sys.exit(exit_codes.KEYBOARD_INTERRUPT)
    except Exception as exc:  # noqa: BLE001
        console.print(
            "[bold red]Unexpected error.[/bold red] "
            "Please report this issue.\n"
            f"  {type(exc).__name__}: {exc}"
        )
        sys.exit(exit_codes.UNEXPECTED_ERROR)
