#!/usr/bin/env python3
"""
CLI entry point for chawuek word segmentation.

Reads one line at a time, writes the line's tokens joined by a separator
(default ``|``), one output line per input line.

Usage:
    echo "กินข้าวม้า" | chawuek-tokenize
    chawuek-tokenize --config chawuek.yaml --input text.txt --output tokens.txt
"""

import argparse
import sys
import time
from pathlib import Path
from typing import Iterator, List, Optional

import chardet
from tqdm import tqdm

# Import console from utils FIRST to configure it before anything else
from ..utils import console
from ..config import load_config, apply_overrides
from ..errors import ChawuekError
from ..inference import Segmenter, BatchStatistics


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Segment text into words, one line at a time',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
    # Read stdin, write tokens to stdout
    echo "กินข้าวม้า" | chawuek-tokenize

    # Use a config file
    chawuek-tokenize --config chawuek.yaml < input.txt

    # File to file with progress bar
    chawuek-tokenize --input input.txt --output tokens.txt

Environment variables:
    CHAWUEK_CONFIG=path    Config file (same as --config)
    CHAWUEK_VERBOSE=1      Enable verbose output (same as --verbose)
    CHAWUEK_QUIET=1        Enable quiet mode (same as --quiet)
    CHAWUEK_NO_COLOR=1     Disable colored output (same as --no-color)
'''
    )

    parser.add_argument(
        '--config', '-c',
        type=Path,
        default=None,
        help='Path to YAML configuration file'
    )
    parser.add_argument(
        '--char-map',
        type=Path,
        default=None,
        help='Path to character map JSON (overrides config)'
    )
    parser.add_argument(
        '--model', '-m',
        type=Path,
        default=None,
        help='Path to TorchScript model (overrides config)'
    )
    parser.add_argument(
        '--threshold',
        type=float,
        default=None,
        help='Boundary probability threshold (default: 0.5)'
    )
    parser.add_argument(
        '--separator', '-s',
        type=str,
        default=None,
        help='Token separator in output (default: "|")'
    )
    parser.add_argument(
        '--device',
        type=str,
        default=None,
        help='Device to use: cuda, cpu (default: from config)'
    )

    # I/O
    parser.add_argument(
        '--input', '-i',
        type=Path,
        default=None,
        help='Input text file (default: stdin)'
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=None,
        help='Output file (default: stdout)'
    )

    # Output control
    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )
    output_group.add_argument(
        '--quiet', '-q',
        action='store_true',
        help='Suppress all non-error output'
    )

    parser.add_argument(
        '--no-color',
        action='store_true',
        help='Disable colored output'
    )
    parser.add_argument(
        '--no-tqdm',
        action='store_true',
        help='Disable tqdm progress bar for file input'
    )

    return parser.parse_args(argv)


def read_text_file(file_path: Path) -> str:
    """
    Read a text file, detecting the encoding if it is not UTF-8.

    Raises:
        OSError: File cannot be read
    """
    try:
        with open(file_path, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except UnicodeDecodeError:
        pass

    with open(file_path, 'rb') as f:
        raw_data = f.read()

    detected = chardet.detect(raw_data)
    encoding = detected.get('encoding') or 'utf-8'
    confidence = detected.get('confidence', 0.0)

    console.warning(
        f"{file_path.name} is not UTF-8, detected {encoding} "
        f"(confidence: {confidence:.2f})"
    )
    try:
        return raw_data.decode(encoding, errors='replace')
    except LookupError:
        console.warning(f"Unknown encoding {encoding}, decoding as UTF-8")
        return raw_data.decode('utf-8', errors='replace')


def decode_line(raw: bytes, line_number: int) -> str:
    """Decode one UTF-8 input line, replacing undecodable bytes."""
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        console.warning(f"Line {line_number} is not valid UTF-8, replacing undecodable bytes")
        return raw.decode('utf-8', errors='replace')


def iter_lines(stream) -> Iterator[str]:
    """
    Yield lines without their line terminator.

    Binary streams are decoded line by line as UTF-8.
    """
    for line_number, line in enumerate(stream, start=1):
        if isinstance(line, bytes):
            line = decode_line(line, line_number)
        if line.endswith('\n'):
            line = line[:-1]
            if line.endswith('\r'):
                line = line[:-1]
        yield line


def split_lines(text: str) -> List[str]:
    """Split file content into lines, dropping the final terminator only."""
    if not text:
        return []
    lines = text.split('\n')
    if text.endswith('\n'):
        lines.pop()
    return [line[:-1] if line.endswith('\r') else line for line in lines]


def run(segmenter: Segmenter, lines, out, separator: str = '|',
        total: Optional[int] = None, use_tqdm: bool = False) -> BatchStatistics:
    """
    Tokenize lines and write one output line per input line.

    A failing line is reported on the console, written as an empty line,
    and the loop continues.
    """
    stats = BatchStatistics()
    start_time = time.time()

    results = segmenter.iter_tokenize(lines)
    if use_tqdm:
        results = tqdm(results, total=total, desc="Tokenizing", unit="line")

    for result in results:
        stats.update(result)
        if result.success:
            out.write(separator.join(result.tokens))
        else:
            console.error(f"Line {result.line_number}: {result.error}")
        out.write('\n')
        out.flush()

    stats.elapsed_time = time.time() - start_time
    return stats


def main(argv=None):
    args = parse_args(argv)

    # Token output owns stdout; diagnostics go to stderr
    console.configure(
        verbose=args.verbose,
        quiet=args.quiet,
        color=not args.no_color,
        stream=sys.stderr
    )

    try:
        config = load_config(args.config)
        config = apply_overrides(
            config,
            char_map=args.char_map,
            model=args.model,
            threshold=args.threshold,
            separator=args.separator,
            device=args.device
        )
    except ChawuekError as e:
        console.error(str(e))
        return 1

    try:
        with console.status("Loading segmenter"):
            segmenter = Segmenter.from_config(config)
    except ChawuekError:
        return 1

    console.verbose(repr(segmenter))
    separator = config['segmentation']['separator']

    if args.input is not None:
        try:
            text = read_text_file(args.input)
        except OSError as e:
            console.error(f"Failed to read {args.input}: {e}")
            return 1
        lines = split_lines(text)
        total = len(lines)
    else:
        lines = iter_lines(sys.stdin.buffer)
        total = None

    use_tqdm = args.input is not None and not args.no_tqdm and not args.quiet

    if args.output is not None:
        try:
            out = open(args.output, 'w', encoding='utf-8')
        except OSError as e:
            console.error(f"Failed to open {args.output}: {e}")
            return 1
    else:
        out = sys.stdout

    try:
        stats = run(segmenter, lines, out, separator, total, use_tqdm)
    except KeyboardInterrupt:
        console.warning("Interrupted by user")
        return 130
    finally:
        if out is not sys.stdout:
            out.close()

    if console.is_verbose or args.input is not None:
        console.section("Segmentation Statistics")
        console.table({
            "Lines:": stats.total_lines,
            "Failed lines:": stats.failed_lines,
            "Characters:": stats.total_characters,
            "Tokens:": stats.total_tokens,
            "Time (s):": stats.elapsed_time,
            "Characters/sec:": stats.characters_per_second,
        })

    if stats.failed_lines:
        console.warning(f"{stats.failed_lines} of {stats.total_lines} lines failed")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
