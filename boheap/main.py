"""Command-line heap sort.

Reads one key per line from the given files (or stdin), pushes them all
through a BOHeap and prints them back in sorted order.
"""

import logging
import sys
from argparse import ArgumentParser
from typing import Iterable, Iterator, List, Optional, TextIO

from boheap.heap import BOHeap


def make_parser() -> ArgumentParser:
    """Create the command-line argument parser.

    Returns:
        An ArgumentParser configured with all the command-line options.
    """
    parser = ArgumentParser(prog="boheap", description="Sort lines with a heap")
    parser.add_argument("files", nargs="*", help="input files (default: stdin)")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--numeric", action="store_true", help="sort keys as ints")
    parser.add_argument("--reverse", action="store_true", help="sort descending")
    return parser


def configure_logging(log_level: str) -> None:
    """Configure the logging system with the specified log level.

    Args:
        log_level: The logging level (e.g., 'DEBUG', 'INFO', 'WARNING').
    """
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(filename)s:%(lineno)d -- %(message)s",
        level=log_level,
    )


def read_lines(streams: Iterable[TextIO]) -> Iterator[str]:
    for stream in streams:
        for line in stream:
            line = line.rstrip("\n")
            if line:
                yield line


def sort_lines(lines: Iterable[str], numeric: bool, reverse: bool) -> List[str]:
    """Sort lines through a heap.

    Raises:
        ValueError: If numeric is set and a line is not an integer.
    """
    if numeric:
        num_heap = BOHeap.mk(int(line) for line in lines)
        logging.info("sorting %d keys", num_heap.size())
        out = [str(key) for key in num_heap.drain()]
    else:
        str_heap = BOHeap.mk(lines)
        logging.info("sorting %d keys", str_heap.size())
        out = list(str_heap.drain())
    if reverse:
        out.reverse()
    return out


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the boheap command.

    Parses command-line arguments, configures logging, reads the input and
    writes the sorted keys to stdout.
    """
    parser = make_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    streams: List[TextIO] = []
    try:
        if args.files:
            for path in args.files:
                try:
                    streams.append(open(path))
                except OSError as e:
                    parser.error(f"cannot read {path}: {e}")
        else:
            streams.append(sys.stdin)
        try:
            out = sort_lines(read_lines(streams), args.numeric, args.reverse)
        except ValueError as e:
            parser.error(str(e))
    finally:
        for stream in streams:
            if stream is not sys.stdin:
                stream.close()
    for line in out:
        print(line)
    logging.info("done")


if __name__ == "__main__":
    main()
