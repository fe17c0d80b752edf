"""Game session: wires speech and metering collaborators to the combat resolver."""

import logging
import random
from typing import Callable

from .combat import CombatOutcome, CombatResolver, INTERIM
from .config import INITIAL_HP, METER_FULL_SCALE_RMS
from .interfaces import RecognitionError, SpeechRecognizer, SpeechUnavailable
from .listening import ContinuousListener
from .models import Level
from .utils import clamp, round_half_up

logger = logging.getLogger(__name__)


class GameSession:
    """One player's encounter, from the first level until restart."""

    def __init__(self, levels: list[Level], recognizer: SpeechRecognizer = None,
                 practice: bool = False, rng: random.Random = None,
                 initial_hp: int = INITIAL_HP,
                 on_outcome: Callable[[CombatOutcome], None] = None):
        self.levels = list(levels)
        self.recognizer = recognizer
        self.practice = practice
        self.rng = rng or random.Random()
        self.initial_hp = initial_hp
        self.on_outcome = on_outcome
        self.resolver = CombatResolver(self.levels, practice, initial_hp, self.rng)
        self.last_outcome = None
        self.last_meter = None
        self.listener = None
        self._resolving = False

    @property
    def speech_available(self) -> bool:
        return self.recognizer is not None and self.recognizer.available

    @property
    def listening(self) -> bool:
        return self.listener is not None and self.listener.listening

    def handle_event(self, event: dict) -> CombatOutcome:
        """Resolve a {transcript, confidence, is_final} event from any recognizer."""
        outcome = self.resolver.resolve(
            event.get('transcript') or '',
            event.get('confidence') or 0.0,
            bool(event.get('is_final', True))
        )
        if outcome.kind != INTERIM:
            self.last_outcome = outcome
            logger.info(f"Resolved '{outcome.said}' against '{outcome.word.text if outcome.word else None}': "
                        f"{outcome.kind} ({outcome.grade.label if outcome.grade else '-'})")
        if self.on_outcome:
            self.on_outcome(outcome)
        return outcome

    def handle_capture_error(self, reason: str) -> CombatOutcome:
        """Turn a capture-layer failure into a missed attempt."""
        logger.warning(f"Capture failed, counting as miss: {reason}")
        outcome = self.resolver.resolve_capture_error(reason)
        self.last_outcome = outcome
        if self.on_outcome:
            self.on_outcome(outcome)
        return outcome

    async def capture_once(self) -> CombatOutcome | None:
        """Capture and resolve one utterance.

        Returns None without capturing while a previous capture is still being
        resolved. Raises SpeechUnavailable when there is no recognizer.
        """
        if self._resolving:
            return None
        if not self.speech_available:
            raise SpeechUnavailable("Speech recognition is not available")

        self._resolving = True
        try:
            try:
                result = await self.recognizer.start_once()
            except RecognitionError as e:
                return self.handle_capture_error(str(e) or 'recognition_error')
            return self.handle_event({
                'transcript': result.get('transcript', ''),
                'confidence': result.get('confidence', 0.0),
                'is_final': True
            })
        finally:
            self._resolving = False

    def start_listening(self) -> None:
        if not self.speech_available:
            raise SpeechUnavailable("Speech recognition is not available")
        if self.listening:
            return
        self.listener = ContinuousListener(self.recognizer, self.handle_event)
        self.listener.start()
        logger.info("Continuous listening started")

    def stop_listening(self) -> None:
        if self.listener is not None:
            self.listener.stop()
            logger.info("Continuous listening stopped")

    def toggle_listening(self) -> bool:
        """Flip continuous listening. Returns the new listening state."""
        if self.listening:
            self.stop_listening()
        else:
            self.start_listening()
        return self.listening

    def record_meter(self, metrics: dict) -> dict:
        """Keep the latest volume/pitch sample for display. No gameplay effect."""
        rms = clamp(metrics.get('rms'), 0.0, float('inf'))
        pitch_hz = clamp(metrics.get('pitch_hz'), 0.0, float('inf'))
        self.last_meter = {
            'rms': rms,
            'pitch_hz': pitch_hz,
            'volume': round_half_up(clamp(rms / METER_FULL_SCALE_RMS, 0.0, 1.0) * 100)
        }
        return self.last_meter

    def restart(self) -> None:
        """Start a fresh encounter from the first level."""
        self.resolver = CombatResolver(self.levels, self.practice, self.initial_hp, self.rng)
        self.last_outcome = None
        logger.info("Session restarted")

    def get_status(self) -> dict:
        status = self.resolver.get_status()
        status['speech_available'] = self.speech_available
        status['listening'] = self.listening
        status['meter'] = self.last_meter
        return status
