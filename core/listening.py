"""Continuous listening with auto-restart, and scoped audio metering."""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Callable

from .config import RESTART_DELAY_SECONDS
from .interfaces import AudioMeter, RecognitionError, SpeechRecognizer, SpeechUnavailable

logger = logging.getLogger(__name__)


class ContinuousListener:
    """Keeps a recognizer running while the listening flag is set.

    When the recognizer ends on its own (e.g. after silence) one restart is
    scheduled after restart_delay seconds. The flag is checked again when the
    restart fires, so an explicit stop in between always wins.
    """

    def __init__(self, recognizer: SpeechRecognizer, on_event: Callable[[dict], None],
                 restart_delay: float = RESTART_DELAY_SECONDS):
        self.recognizer = recognizer
        self.on_event = on_event
        self.restart_delay = restart_delay
        self.restart_count = 0
        self._listening = False
        self._loop = None
        self._pending_restart = None

    @property
    def listening(self) -> bool:
        return self._listening

    def start(self) -> None:
        """Start listening. Must be called from a running event loop."""
        if not self.recognizer.available:
            raise SpeechUnavailable("Speech recognition is not available")
        self._loop = asyncio.get_running_loop()
        self._listening = True
        self._start_recognizer()

    def stop(self) -> None:
        self._listening = False
        if self._pending_restart is not None:
            self._pending_restart.cancel()
            self._pending_restart = None
        try:
            self.recognizer.stop()
        except RecognitionError as e:
            logger.debug(f"Ignoring recognizer stop error: {e}")

    def _start_recognizer(self) -> None:
        try:
            self.recognizer.start(self._handle_result, self._handle_end)
        except RecognitionError as e:
            # Already running or just stopped
            logger.debug(f"Ignoring recognizer start race: {e}")

    def _handle_result(self, event: dict) -> None:
        if not self._listening:
            return
        try:
            self.on_event(event)
        except Exception as e:
            logger.error(f"Recognition event handler failed: {e}")

    def _handle_end(self) -> None:
        if not self._listening:
            return
        logger.info(f"Recognizer ended, restarting in {self.restart_delay}s")
        self._pending_restart = self._loop.call_later(self.restart_delay, self._restart)

    def _restart(self) -> None:
        self._pending_restart = None
        if not self._listening:
            return
        self.restart_count += 1
        self._start_recognizer()


@asynccontextmanager
async def metering(meter: AudioMeter, callback: Callable[[dict], None]):
    """Run an audio meter for the duration of the block; always released on exit."""
    try:
        await meter.start(callback)
        yield meter
    finally:
        meter.stop()
