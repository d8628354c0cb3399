# -*- coding: utf-8 -*-

import os
import logging
from concurrent.futures import ProcessPoolExecutor
from functools import partial

from rich.console import Console
from rich.text import Text

from .formatter import FormatOptions, formatUFO


log = logging.getLogger(__name__)


def formatUFOs(ufoPaths, options=None, maxWorkers=None):
    """
    Format every UFO in ufoPaths, each in its own worker process.

    The outcomes are returned in the order of ufoPaths. A failing
    job does not stop the others.
    """
    if options is None:
        options = FormatOptions()
    ufoPaths = [os.fspath(path) for path in ufoPaths]
    job = partial(formatUFO, options=options)
    if maxWorkers == 1 or len(ufoPaths) <= 1:
        return [job(path) for path in ufoPaths]
    if maxWorkers is None:
        maxWorkers = min(len(ufoPaths), os.cpu_count() or 1)
    log.debug("Formatting %d UFOs with %d workers.", len(ufoPaths), maxWorkers)
    with ProcessPoolExecutor(max_workers=maxWorkers) as executor:
        return list(executor.map(job, ufoPaths))


def batchSucceeded(outcomes):
    return all(outcome.ok for outcome in outcomes)


class Reporter(object):

    """
    Console output for a batch: one line per outcome,
    successes on stdout and errors on stderr.
    """

    okIndicator = Text("[OK]", style="bold green")
    errorIndicator = Text("[ERROR]", style="bold red")

    def __init__(self, out=None, err=None):
        if out is None:
            out = Console(highlight=False, soft_wrap=True)
        if err is None:
            err = Console(stderr=True, highlight=False, soft_wrap=True)
        self.out = out
        self.err = err

    def outcome(self, outcome):
        if outcome.ok:
            self.out.print(Text.assemble(self.okIndicator, " ", outcome.outputPath))
        else:
            self.error(str(outcome.error))

    def outcomes(self, outcomes):
        for outcome in outcomes:
            self.outcome(outcome)

    def error(self, message):
        self.err.print(Text.assemble(self.errorIndicator, " ", message))

    def duration(self, milliseconds):
        self.out.print(f"Total duration: {milliseconds} ms")
