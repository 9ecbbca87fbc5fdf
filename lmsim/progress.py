"""
Progress callbacks for parameter sweeps.

A sweep reports its position as ``callback(done, total)``; any callable with
that signature will do. Two ready-made reporters are provided: a plain text
bar on stderr and a ``tqdm`` bar.
"""

import sys
from typing import Callable, Optional, TextIO

from .errors import LMSimError

ProgressCallback = Callable[[int, int], None]


class SimulationCancelled(LMSimError):
    """A sweep was stopped by its ``cancel_check``."""


class ProgressReporter:
    """Counts finished simulations and forwards the count to a callback.

    Meant to wrap a sweep loop as a context manager: entering reports
    ``(0, total)``, leaving normally reports ``(total, total)`` if the last
    step was throttled away. Leaving on an exception reports nothing more.

    Args:
        total: Simulations in the sweep.
        callback: Receives ``(done, total)``.
        update_every: Report only every this many simulations; the last one
            is always reported. Defaults to ``max(1, total // 200)``.
    """

    def __init__(self, total: int, callback: ProgressCallback, update_every: Optional[int] = None):
        self.total = total
        self.update_every = max(1, total // 200) if update_every is None else update_every
        self._callback = callback
        self._done = 0

    @property
    def current(self) -> int:
        return self._done

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.finish()
        return False

    def start(self):
        self._done = 0
        self._callback(0, self.total)

    def advance(self, n: int = 1):
        self._done += n
        if self._done >= self.total or self._done % self.update_every == 0:
            self._callback(self._done, self.total)

    def finish(self):
        if self._done >= self.total:
            return
        self._done = self.total
        self._callback(self.total, self.total)


class PrintReporter:
    """Text progress bar, ``\\r[###---] 5/10 simulations``.

    Args:
        width: Bar width in characters.
        stream: Where to write; ``sys.stderr`` at call time when omitted.
    """

    def __init__(self, width: int = 30, stream: Optional[TextIO] = None):
        self.width = width
        self.stream = stream

    def __call__(self, current: int, total: int):
        if total <= 0:
            return
        stream = self.stream if self.stream is not None else sys.stderr
        filled = int(self.width * min(current, total) / total)
        bar = "#" * filled + "-" * (self.width - filled)
        stream.write(f"\r[{bar}] {current}/{total} simulations")
        if current >= total:
            stream.write("\n")
        stream.flush()


class TqdmReporter:
    """Progress through a ``tqdm`` bar (install the ``progress`` extra).

    Keyword arguments are passed to ``tqdm``. A bar is opened on the first
    update of a sweep and closed when the sweep completes, or when the next
    sweep starts after a cancelled one, so one reporter can serve several
    sweeps::

        reporter = TqdmReporter(desc="noise")
        simulator.sweep("noise", [1, 2, 5, 10], progress_callback=reporter)
    """

    def __init__(self, **tqdm_kwargs):
        self._tqdm_kwargs = {"unit": "sim", **tqdm_kwargs}
        self._bar = None

    def __call__(self, current: int, total: int):
        if self._bar is not None and current == 0:
            # a cancelled sweep never closed its bar
            self._bar.close()
            self._bar = None
        if self._bar is None:
            from tqdm.auto import tqdm

            self._bar = tqdm(total=total, **self._tqdm_kwargs)
        delta = current - self._bar.n
        if delta > 0:
            self._bar.update(delta)
        if current >= total:
            self._bar.close()
            self._bar = None
