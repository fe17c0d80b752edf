"""Level and word progression state machine."""

import random

from .models import Level, TuningProfile, Word
from .utils import shuffle_words

NO_LEVEL = 'no_level'
LEVEL_ACTIVE = 'level_active'
LEVEL_COMPLETE = 'level_complete'
RUN_COMPLETE = 'run_complete'

# Events returned by record_correct
ADVANCED = 'advanced'
WRAPPED = 'wrapped'


class LevelProgression:
    """Tracks the active level, the active word and unique-word win progress."""

    def __init__(self, levels: list[Level], rng: random.Random = None,
                 base_tuning: TuningProfile = None):
        self.levels = list(levels)
        self.rng = rng or random.Random()
        self.state = NO_LEVEL
        self.level_index = -1
        self.level = None
        self.shuffled_words = []       # normalized keys in play order
        self.current_word_index = 0
        self.unique_correct = set()
        self.unique_needed = 0
        self.base_tuning = base_tuning.copy() if base_tuning else TuningProfile.default()
        self._words_by_key = {}

    def apply_level(self, index: int) -> Word:
        """Activate levels[index] with a freshly shuffled word list. Returns the first word."""
        level = self.levels[index]
        self.level_index = index
        self.level = level
        self._words_by_key = {w.key: w for w in level.words}
        self.shuffled_words = shuffle_words([w.key for w in level.words], self.rng)
        self.current_word_index = 0
        self.unique_correct = set()
        self.unique_needed = min(len(level.words), level.correct_needed)
        self.base_tuning = self.base_tuning.merged(level.tuning_overrides)
        self.state = LEVEL_ACTIVE
        return self.current_word

    def advance_level(self) -> Word:
        """Activate the level after a completed one."""
        if self.state != LEVEL_COMPLETE:
            raise RuntimeError(f"Cannot advance level from state {self.state}")
        return self.apply_level(self.level_index + 1)

    def has_next_level(self) -> bool:
        return self.level_index + 1 < len(self.levels)

    @property
    def current_key(self) -> str | None:
        if not self.shuffled_words:
            return None
        return self.shuffled_words[self.current_word_index]

    @property
    def current_word(self) -> Word | None:
        key = self.current_key
        return self._words_by_key.get(key) if key is not None else None

    def record_correct(self) -> tuple[str, Word | None]:
        """Credit the current word and move on.

        Returns (event, current_word) where event is one of 'advanced',
        'wrapped', 'level_complete' or 'run_complete'. On completion the
        current word is left in place; the caller applies the next level.
        """
        if self.state != LEVEL_ACTIVE:
            raise RuntimeError(f"No active level (state: {self.state})")

        self.unique_correct.add(self.current_key)
        if len(self.unique_correct) >= self.unique_needed:
            self.state = LEVEL_COMPLETE if self.has_next_level() else RUN_COMPLETE
            return (self.state, self.current_word)

        self.current_word_index = (self.current_word_index + 1) % len(self.shuffled_words)
        event = WRAPPED if self.current_word_index == 0 else ADVANCED
        return (event, self.current_word)

    def record_miss(self) -> Word | None:
        """Misses never move progression."""
        return self.current_word

    def get_progress_display(self) -> str:
        return f"{len(self.unique_correct)}/{self.unique_needed}"

    def to_dict(self) -> dict:
        return {
            'state': self.state,
            'level_index': self.level_index,
            'shuffled_words': list(self.shuffled_words),
            'current_word_index': self.current_word_index,
            'unique_correct': sorted(self.unique_correct),
            'unique_needed': self.unique_needed,
            'base_tuning': self.base_tuning.to_dict()
        }
