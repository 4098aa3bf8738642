"""
Command-line entry point for the JSON to TOON converter.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Set
from urllib.parse import urlparse
from converter.toon_converter import ToonConverter
from sources.input_loader import InputLoader, STDIN_SOURCE, is_url
import config

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure root logging once for the CLI."""
    handlers = [logging.StreamHandler(sys.stderr)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
        handlers=handlers,
        force=True
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Convert JSON documents to Token-Oriented Object Notation (TOON)."
    )
    parser.add_argument(
        "sources", nargs="*",
        help="JSON files, http(s) URLs, or '-' for stdin (default: stdin)"
    )
    parser.add_argument(
        "-o", "--output-dir", type=Path,
        help="write <name>.toon files into this directory instead of printing"
    )
    parser.add_argument("--sample", action="store_true", help="convert the built-in sample document")
    parser.add_argument("--stats", action="store_true", help="log size and token statistics")
    parser.add_argument("--no-progress", action="store_true", help="hide the progress bar")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def output_name(source: str) -> str:
    """File name for the .toon output of a source."""
    if source == STDIN_SOURCE:
        stem = "stdin"
    elif source == config.SAMPLE_SOURCE:
        stem = "sample"
    elif is_url(source):
        stem = Path(urlparse(source).path).stem or "download"
    else:
        stem = Path(source).stem
    return stem + config.TOON_EXTENSION


def unique_output_name(source: str, used: Set[str]) -> str:
    """
    Output file name that no earlier source in this run has taken.

    Repeats get a numeric suffix: data.toon, data-2.toon, data-3.toon.
    """
    name = output_name(source)
    stem = name[:-len(config.TOON_EXTENSION)]
    counter = 1
    while name in used:
        counter += 1
        name = f"{stem}-{counter}{config.TOON_EXTENSION}"
    if counter > 1:
        logger.warning(f"Output name {output_name(source)} already used; writing {source} to {name}")
    used.add(name)
    return name


def log_stats(result: dict):
    inp, out = result["input_stats"], result["output_stats"]
    logger.info(
        f"{result['source']}: JSON {inp['chars']} chars (~{inp['tokens']} tokens) -> "
        f"TOON {out['chars']} chars (~{out['tokens']} tokens), "
        f"{result['reduction']}% reduction"
    )


def run(args: argparse.Namespace) -> int:
    """
    Convert every requested source.

    Returns:
        Process exit code: 0 if all sources converted, 1 otherwise
    """
    sources = list(args.sources)
    if args.sample:
        sources.append(config.SAMPLE_SOURCE)
    if not sources:
        sources = [STDIN_SOURCE]

    converter = ToonConverter()
    loader = InputLoader()
    show_progress = not args.no_progress and (len(sources) > 1 or args.output_dir is not None)
    failures = 0
    used_names: Set[str] = set()

    for source, text in loader.iter_sources(sources, show_progress=show_progress):
        if text is None:
            failures += 1
            continue

        result = converter.convert(text, source=source)
        if result["error"] is not None:
            print(f"{source}: {result['error']}", file=sys.stderr)
            failures += 1
            continue

        if args.stats:
            log_stats(result)

        if args.output_dir is not None:
            name = unique_output_name(source, used_names)
            try:
                converter.save_to_toon(result["output"], str(args.output_dir / name))
            except OSError:
                failures += 1
        else:
            if len(sources) > 1:
                print(f"# {source}")
            print(result["output"])

    if failures:
        logger.warning(f"{failures} of {len(sources)} sources failed")
    return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_args(argv)
    setup_logging(args.verbose)
    try:
        return run(args)
    except KeyboardInterrupt:
        logger.warning("Conversion interrupted by user.")
        return 130


if __name__ == "__main__":
    sys.exit(main())
