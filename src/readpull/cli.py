"""Command-line interface for readpull."""

import argparse
import sys
from pathlib import Path
from typing import Any, Optional

from rich.console import Console

from . import __version__
from .conversion import ReadabilityExtractor
from .logging_config import setup_logging
from .models.config import ReadpullConfig


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="readpull",
        description="Extract the readable content of an HTML page",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Plain text from a saved page
  readpull page.html

  # Markdown with frontmatter, links resolved against the page URL
  readpull page.html --format markdown --frontmatter --url https://example.com/post

  # Read from stdin, keep everything in the best candidate
  curl -s https://example.com/post | readpull --no-prune
        """,
    )

    parser.add_argument(
        "file",
        nargs="?",
        type=Path,
        help="HTML file to read (default: stdin)",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        metavar="YAML",
        help="Load configuration from a YAML file",
    )

    # Output
    output_group = parser.add_argument_group("output control")
    output_group.add_argument(
        "--format",
        "-f",
        choices=["text", "markdown", "html"],
        default=None,
        help="Output format (default: text)",
    )
    output_group.add_argument(
        "--no-prune",
        action="store_true",
        help="Keep low-scoring nodes inside the selected content",
    )
    output_group.add_argument(
        "--frontmatter",
        action="store_true",
        help="Prefix markdown output with YAML frontmatter",
    )
    output_group.add_argument(
        "--url",
        type=str,
        default="",
        help="Page URL used to resolve relative links",
    )
    output_group.add_argument(
        "--show-score",
        action="store_true",
        help="Print the selected element and its score to stderr",
    )
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress log output",
    )

    return parser


def build_config(args: argparse.Namespace) -> ReadpullConfig:
    """Merge the optional YAML config with command-line overrides."""
    config = ReadpullConfig.from_yaml_file(args.config) if args.config else ReadpullConfig()

    output_kwargs: dict[str, Any] = {}
    if args.format:
        output_kwargs["format"] = args.format
    if args.no_prune:
        output_kwargs["prune"] = False
    if args.frontmatter:
        output_kwargs["frontmatter"] = True

    config_kwargs: dict[str, Any] = {}
    if output_kwargs:
        config_kwargs["output"] = config.output.model_copy(update=output_kwargs)

    if args.verbose:
        config_kwargs["log_level"] = "DEBUG"
    elif args.quiet:
        config_kwargs["log_level"] = "ERROR"

    return config.model_copy(update=config_kwargs)


def run_extractor(args: argparse.Namespace) -> int:
    """Run the extractor with given arguments."""
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except Exception as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(config.log_level, str(config.log_file) if config.log_file else None)

    try:
        html = args.file.read_bytes() if args.file else sys.stdin.buffer.read()
    except OSError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    extractor = ReadabilityExtractor(config)
    document = extractor.prepare(html, args.url)

    if args.show_score:
        article = extractor.article(document)
        console.print(f"[bold]Title:[/bold] {article.title or '-'}")
        console.print(f"[bold]Element:[/bold] <{article.tag_name}>")
        console.print(f"[bold]Score:[/bold] {article.score:.2f}")
        console.print(f"[bold]Pruned:[/bold] {article.pruned} nodes")

    content = extractor.render(document, args.url)
    if not content:
        if not args.quiet:
            console.print("[yellow]No readable content found[/yellow]")
        return 1

    sys.stdout.write(content if content.endswith("\n") else content + "\n")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    return run_extractor(args)


if __name__ == "__main__":
    sys.exit(main())
