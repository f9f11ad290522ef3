"""Optional memory profiling for long generation runs."""

import logging
import pickle
import signal
import sys
import tracemalloc
from collections.abc import Callable
from types import FrameType

from tsloadgen.core.config import ConfigurationError

logger = logging.getLogger(__name__)


def start_memory_profile(profile_file: str) -> Callable[[], None]:
    """Start tracing allocations and write a snapshot on exit or interrupt.

    The output file is opened immediately so a bad path fails before any
    data is generated. An interrupt (Ctrl+C) writes the profile and exits the
    process with status 0. The snapshot can be read back with
    tracemalloc.Snapshot.load().

    Args:
        profile_file: Path of the snapshot file to create.

    Returns:
        Idempotent function that writes the snapshot, closes the file and
        reinstalls the previous SIGINT handler.
        Callers should invoke it on the normal exit path.

    Raises:
        ConfigurationError: If the file cannot be created.
    """
    try:
        f = open(profile_file, "wb")  # noqa: SIM115 - closed by stop()
    except OSError as exc:
        raise ConfigurationError(f"could not create memory profile: {exc}") from exc

    tracemalloc.start()
    stopped = False
    previous_handler = signal.getsignal(signal.SIGINT)

    def stop() -> None:
        nonlocal stopped
        if stopped:
            return
        stopped = True
        if previous_handler is not None:
            signal.signal(signal.SIGINT, previous_handler)
        snapshot = tracemalloc.take_snapshot()
        tracemalloc.stop()
        with f:
            pickle.dump(snapshot, f, pickle.HIGHEST_PROTOCOL)
        logger.info("memory profile written", extra={"path": profile_file})

    def on_interrupt(signum: int, frame: FrameType | None) -> None:
        logger.warning("caught interrupt, stopping profile")
        stop()
        sys.exit(0)

    signal.signal(signal.SIGINT, on_interrupt)
    logger.info("memory profiling started", extra={"path": profile_file})
    return stop
