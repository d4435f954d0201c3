"""
Progress spinner for the ff15 file finder.

The spinner animates a single terminal line from a background thread while the
walker runs on the main thread. It shares no data with the walk; stopping it
joins the thread and blanks the line so results print on a clean line.
"""

import sys
import threading
import logging
from typing import List, Optional, TextIO

from ..models.config import SpinnerConfig, DEFAULT_SPINNER_FRAMES


logger = logging.getLogger(__name__)


class ProgressSpinner:
    """
    Rotating status line drawn by a daemon thread.

    A spinner runs once: ``start()`` launches the thread and ``stop()`` sets a
    one-shot event, waits for the thread to finish and clears the line.
    """

    def __init__(self, stream: Optional[TextIO] = None, frames: Optional[List[str]] = None,
                 interval: float = 0.5):
        """
        Initialize the spinner.

        Args:
            stream: Output stream to draw on (defaults to stdout)
            frames: Frames drawn in rotation
            interval: Seconds between two frames
        """
        self.stream = stream if stream is not None else sys.stdout
        self.frames = list(frames) if frames else list(DEFAULT_SPINNER_FRAMES)
        self.interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.frames_drawn = 0

    @classmethod
    def from_config(cls, config: SpinnerConfig, stream: Optional[TextIO] = None) -> 'ProgressSpinner':
        """Create a spinner from its configuration section."""
        return cls(stream=stream, frames=config.frames, interval=config.interval_seconds)

    def _spin(self) -> None:
        index = 0
        while not self._stop_event.is_set():
            self._write(f"\r{self.frames[index]}")
            self.frames_drawn += 1
            index = (index + 1) % len(self.frames)
            # Returns early once stop() is called
            self._stop_event.wait(self.interval)

    def _write(self, text: str) -> None:
        self.stream.write(text)
        self.stream.flush()

    def start(self) -> None:
        """Start drawing frames in the background."""
        if self._thread is not None or self._stop_event.is_set():
            raise RuntimeError("Spinner can only be started once")

        self._thread = threading.Thread(target=self._spin, name="ff15-spinner", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the animation and blank the status line."""
        if self._stop_event.is_set():
            return

        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()

        width = max(len(frame) for frame in self.frames)
        self._write("\r" + " " * width + "\r")
        logger.debug(f"Spinner stopped after {self.frames_drawn} frames")

    def is_running(self) -> bool:
        """Check if the background thread is still drawing."""
        return self._thread is not None and self._thread.is_alive()

    def __enter__(self) -> 'ProgressSpinner':
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.stop()


class NullSpinner:
    """Spinner stand-in used when the animation is disabled."""

    def start(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def is_running(self) -> bool:
        return False

    def __enter__(self) -> 'NullSpinner':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        pass


def create_spinner(config: SpinnerConfig, stream: Optional[TextIO] = None):
    """
    Create a fresh spinner for one walk.

    Args:
        config: Spinner configuration section
        stream: Output stream to draw on

    Returns:
        A ProgressSpinner, or a NullSpinner when the spinner is disabled
    """
    if not config.enabled:
        return NullSpinner()
    return ProgressSpinner.from_config(config, stream=stream)
