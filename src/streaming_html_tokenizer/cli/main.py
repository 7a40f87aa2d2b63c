"""Main CLI entry point for the html-tokenize command-line tool.

Provides commands to dump the token stream of HTML files, check that files
tokenize cleanly and run the tokenizer benchmark.
"""

import argparse
import csv
import io
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from streaming_html_tokenizer import __version__
from streaming_html_tokenizer.shared.config import (
    ConfigError,
    FilterConfig,
    TokenizationConfig,
    load_config,
)
from streaming_html_tokenizer.shared.logging import configure_logging, get_logger
from streaming_html_tokenizer.tokenization import (
    EnhancedHTMLTokenizer,
    TokenizationResult,
    TokenType,
)
from streaming_html_tokenizer.tokenization.benchmarks import (
    STDLIB_PARSER_NAME,
    TOKENIZER_NAME,
    TokenizationBenchmark,
)

STDIN_PATH = "-"
CSV_FIELDS = ["file", "index", "type", "value"]

logger = get_logger(__name__, component="cli")


def read_source(path: str) -> str:
    """Read a file, or stdin for ``-``, as UTF-8 text."""
    if path == STDIN_PATH:
        return sys.stdin.read()
    return Path(path).read_text(encoding="utf-8", errors="replace")


def build_config(args: argparse.Namespace) -> TokenizationConfig:
    """Load configuration and apply command-line overrides."""
    config = load_config(args.config) if args.config else TokenizationConfig()
    if args.types:
        config.filtering = FilterConfig(
            mode=config.filtering.mode,
            token_types=set(args.types),
            content_patterns=config.filtering.content_patterns,
            case_sensitive=config.filtering.case_sensitive,
            max_results=config.filtering.max_results,
        )
    if args.max_tokens is not None:
        if args.max_tokens < 1:
            raise ConfigError("--max-tokens must be >= 1")
        config.max_tokens = args.max_tokens
    return config


def process_file(tokenizer: EnhancedHTMLTokenizer, path: str) -> Dict[str, Any]:
    """Tokenize one file and return a JSON-friendly record."""
    try:
        text = read_source(path)
    except OSError as e:
        logger.error("Could not read input", extra={"file": path})
        return {"file": path, "success": False, "error": str(e), "tokens": []}

    result = tokenizer.tokenize(text)
    return {
        "file": path,
        "success": result.success,
        "error": str(result.error) if result.error else None,
        "tokens": [token.to_dict() for token in result.tokens],
        "summary": result.summary(),
        "diagnostics": [diag.to_dict() for diag in result.diagnostics],
    }


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format tokenization records for output."""
    if format_type == "json":
        return json.dumps(results, indent=2)

    if format_type == "csv":
        output = io.StringIO()
        writer = csv.DictWriter(output, fieldnames=CSV_FIELDS, lineterminator="\n")
        writer.writeheader()
        for record in results:
            for index, token in enumerate(record["tokens"]):
                writer.writerow({
                    "file": record["file"],
                    "index": index,
                    "type": token["type"],
                    "value": token["value"],
                })
        return output.getvalue().rstrip("\n")

    lines = []
    for record in results:
        status = "ok" if record["success"] else "FAILED"
        lines.append(f"== {record['file']} ({status})")
        for token in record["tokens"]:
            lines.append(f"  {format_token(token)}")
        if record["error"]:
            lines.append(f"  error: {record['error']}")
    return "\n".join(lines)


def format_token(token: Dict[str, Any]) -> str:
    """Render a serialized token as a single human readable line."""
    if token["type"] == TokenType.START_TAG.name:
        attrs = " ".join(f"{name}={value!r}" for name, value in token["attributes"])
        closing = " /" if token["self_closing"] else ""
        return f"START_TAG {token['value']}{' ' + attrs if attrs else ''}{closing}"
    return f"{token['type']} {token['value']!r}"


def validation_record(path: str, result: Optional[TokenizationResult],
                      read_error: Optional[str] = None) -> Dict[str, Any]:
    """Summarize whether a file tokenized cleanly."""
    if result is None:
        return {"file": path, "valid": False, "error": read_error}
    record: Dict[str, Any] = {
        "file": path,
        "valid": result.success,
        "token_count": result.metadata.total_tokens,
        "error": str(result.error) if result.error else None,
    }
    if result.error is not None and result.error.position is not None:
        record["line"] = result.error.position.line
        record["column"] = result.error.position.column
    return record


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="html-tokenize",
        description="Tokenize HTML documents into tags, text, comments and doctypes"
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    parser.add_argument("--quiet", "-q", action="store_true", help="Quiet output")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    tokenize_parser = subparsers.add_parser("tokenize", help="Print the tokens of HTML files")
    tokenize_parser.add_argument(
        "paths", nargs="+", help="HTML files to tokenize ('-' reads stdin)"
    )
    tokenize_parser.add_argument(
        "--format", "-f",
        choices=["json", "text", "csv"],
        default="json",
        help="Output format (default: json)"
    )
    tokenize_parser.add_argument("--output", "-o", type=Path, help="Output file (default: stdout)")
    tokenize_parser.add_argument("--config", "-c", type=Path, help="Configuration file path")
    tokenize_parser.add_argument(
        "--types", "-t",
        nargs="+",
        choices=[token_type.name for token_type in TokenType],
        help="Only keep these token types"
    )
    tokenize_parser.add_argument(
        "--max-tokens", type=int, help="Stop after this many tokens per file"
    )

    validate_parser = subparsers.add_parser(
        "validate", help="Check that HTML files tokenize without errors"
    )
    validate_parser.add_argument("paths", nargs="+", help="HTML files to check ('-' reads stdin)")
    validate_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    benchmark_parser = subparsers.add_parser("benchmark", help="Run the tokenizer benchmark")
    benchmark_parser.add_argument(
        "--iterations", "-n", type=int, default=5, help="Timed runs per test case"
    )
    benchmark_parser.add_argument(
        "--no-compare",
        action="store_true",
        help="Skip the html.parser comparison"
    )

    return parser


def cmd_tokenize(args: argparse.Namespace) -> int:
    """Handle tokenize command."""
    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    tokenizer = EnhancedHTMLTokenizer(config)
    results = [process_file(tokenizer, path) for path in args.paths]
    formatted_output = format_results(results, args.format)

    if args.output:
        try:
            args.output.write_text(formatted_output, encoding="utf-8")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(formatted_output)

    return 0 if all(record["success"] for record in results) else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle validate command."""
    tokenizer = EnhancedHTMLTokenizer(TokenizationConfig(enable_metrics=False))
    results = []
    for path in args.paths:
        try:
            text = read_source(path)
        except OSError as e:
            results.append(validation_record(path, None, read_error=str(e)))
            continue
        results.append(validation_record(path, tokenizer.tokenize(text)))

    if args.format == "json":
        print(json.dumps(results, indent=2))
    else:
        valid_count = sum(1 for r in results if r["valid"])
        print(f"Validated {len(results)} files, {valid_count} valid")
        print("-" * 50)
        for record in results:
            status = "✓" if record["valid"] else "✗"
            print(f"{status} {record['file']}")
            if not record["valid"]:
                print(f"   Error: {record['error']}")

    return 0 if all(r["valid"] for r in results) else 1


def cmd_benchmark(args: argparse.Namespace) -> int:
    """Handle benchmark command."""
    if args.iterations < 1:
        print("--iterations must be >= 1", file=sys.stderr)
        return 2

    benchmark = TokenizationBenchmark(benchmark_runs=args.iterations)
    suite = benchmark.run_benchmark(include_external_parsers=not args.no_compare)
    report = suite.generate_report()
    if not args.no_compare:
        report["relative_speed"] = suite.relative_speed(TOKENIZER_NAME, STDLIB_PARSER_NAME)
    print(json.dumps(report, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging(logging.WARNING)

    try:
        if args.command == "tokenize":
            return cmd_tokenize(args)
        if args.command == "validate":
            return cmd_validate(args)
        if args.command == "benchmark":
            return cmd_benchmark(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
