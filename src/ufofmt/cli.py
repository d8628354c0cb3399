# -*- coding: utf-8 -*-

import argparse
import logging
import time

from . import __version__
from .dispatch import Reporter, batchSucceeded, formatUFOs
from .formatter import FormatOptions
from .xmlwriter import DEFAULT_FLOAT_PRECISION


description = f"""
ufofmt (version {__version__}):

A fast, flexible UFO source formatter. Every UFO given
on the command line is rewritten with a consistent
indentation and XML declaration style.
"""


def _parseArgs(args):
    parser = argparse.ArgumentParser(prog="ufofmt", description=description)
    parser.add_argument("ufopaths",
                        help="UFO source path(s).",
                        metavar="UFO",
                        nargs="*")
    parser.add_argument("-s", "--singlequotes",
                        help="Format XML declaration attributes with single quotes.",
                        action="store_true")
    parser.add_argument("--indent-space",
                        help="Use space char for indentation [default: tab].",
                        action="store_true")
    parser.add_argument("--indent-number",
                        type=int,
                        default=2,
                        help="Number of indentation char per indent level "
                             "(valid range = 1 - 4, default is 2).")
    parser.add_argument("--out-ext",
                        metavar="UNIQUE_EXTENSION",
                        help="Define a unique directory write path extension.")
    parser.add_argument("--out-name",
                        metavar="UNIQUE_FILENAME_STRING",
                        help="Append a unique directory write path name "
                             "before the extension.")
    parser.add_argument("-t", "--time",
                        help="Display timing data.",
                        action="store_true")
    parser.add_argument("-j", "--jobs",
                        type=int,
                        help="Number of worker processes "
                             "(default is the number of CPUs).")
    parser.add_argument("--float-precision",
                        type=int,
                        default=DEFAULT_FLOAT_PRECISION,
                        help="Round floats to the specified number of decimal "
                             f"places (default is {DEFAULT_FLOAT_PRECISION}). "
                             "The value -1 means no rounding (i.e. use "
                             "built-in repr()).")
    parser.add_argument("--quote-post-pass",
                        help="Write double quotes and patch the XML "
                             "declarations of the written files afterwards.",
                        action="store_true")
    parser.add_argument("-v", "--verbose",
                        help="Print more info to console.",
                        action="store_true")
    parser.add_argument("-q", "--quiet",
                        help="Suppress all non-error messages.",
                        action="store_true")
    parser.add_argument("--version",
                        action="version",
                        version=f"%(prog)s {__version__}")
    args = parser.parse_args(args)

    if args.verbose and args.quiet:
        parser.error("--quiet and --verbose options are mutually exclusive.")
    if args.float_precision < -1:
        parser.error("float precision must be >= 0 or -1 (no round).")
    if args.jobs is not None and args.jobs < 1:
        parser.error("the number of jobs must be >= 1.")
    return args


def main(args=None, reporter=None):
    args = _parseArgs(args)
    logLevel = "DEBUG" if args.verbose else "ERROR" if args.quiet else "WARNING"
    logging.basicConfig(level=logLevel, format="%(message)s")
    if reporter is None:
        reporter = Reporter()

    try:
        options = FormatOptions(
            uniqueFileName=args.out_name,
            uniqueExtension=args.out_ext,
            singleQuotes=args.singlequotes,
            indentWithSpace=args.indent_space,
            indentNumber=args.indent_number,
            floatPrecision=None if args.float_precision == -1 else args.float_precision,
            quotePostPass=args.quote_post_pass)
    except ValueError as e:
        reporter.error(str(e))
        return 1

    start = time.time()
    outcomes = formatUFOs(args.ufopaths, options, maxWorkers=args.jobs)
    duration = int((time.time() - start) * 1000)

    reporter.outcomes(outcomes)
    if args.time:
        reporter.duration(duration)
    return 0 if batchSucceeded(outcomes) else 1
