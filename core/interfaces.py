"""Abstract base classes for dependency injection."""

from abc import ABC, abstractmethod
from typing import Callable


class SpeechUnavailable(RuntimeError):
    """No recognizer or capture device is present."""


class RecognitionError(RuntimeError):
    """Transient failure while capturing or recognizing speech."""


class SpeechRecognizer(ABC):
    """Abstract base class for a speech-to-text capability."""

    @property
    @abstractmethod
    def available(self) -> bool:
        """Whether a recognizer is present at all."""
        pass

    @abstractmethod
    async def start_once(self) -> dict:
        """Capture a single utterance. Returns {transcript, confidence}.
        Raises SpeechUnavailable or RecognitionError."""
        pass

    @abstractmethod
    def start(self, on_result: Callable[[dict], None], on_end: Callable[[], None]) -> None:
        """Start continuous recognition.

        on_result receives {transcript, confidence, is_final} events; on_end is
        called whenever the recognizer stops, including on its own after silence.
        Raises RecognitionError if the recognizer is already running.
        """
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop continuous recognition."""
        pass


class AudioMeter(ABC):
    """Abstract base class for microphone volume/pitch metering."""

    @abstractmethod
    async def start(self, callback: Callable[[dict], None]) -> None:
        """Open the microphone and deliver {rms, pitch_hz} samples to callback."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Release the microphone stream and processing graph."""
        pass


class LevelSource(ABC):
    """Abstract base class for level definitions."""

    @abstractmethod
    def load_levels(self) -> list:
        """Load levels. Returns list of Level. Raises InvalidLevelData."""
        pass
