"""Domain models for monstruo application."""

import math
import numbers

from .config import DEFAULT_TUNING, INITIAL_HP
from .utils import normalize_spanish


class InvalidLevelData(ValueError):
    """Raised when a level definition cannot be played."""


class Word:
    """A target word with its hint and English translation."""

    def __init__(self, text: str, hint: str = '', translation: str = ''):
        self.text = text
        self.hint = hint
        self.translation = translation

    @property
    def key(self) -> str:
        """Normalized form used for matching."""
        return normalize_spanish(self.text)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Word):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Word({self.text!r})"

    def to_dict(self) -> dict:
        return {
            'text': self.text,
            'hint': self.hint,
            'translation': self.translation
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Word':
        if isinstance(data, str):
            return cls(data)
        if not isinstance(data, dict) or not str(data.get('text') or '').strip():
            raise InvalidLevelData(f"Word entry has no text: {data!r}")
        return cls(
            str(data['text']).strip(),
            str(data.get('hint') or ''),
            str(data.get('translation') or '')
        )


class TuningProfile:
    """Motion and timing parameters for the monster and projectiles."""

    # attribute name -> wire key
    FIELDS = {
        'monster_step_px': 'monsterStepPx',
        'recoil_pushback_px': 'recoilPushbackPx',
        'advance_duration_ms': 'advanceDurationMs',
        'bullet_duration_ms': 'bulletDurationMs',
    }

    def __init__(self, monster_step_px: int, recoil_pushback_px: int,
                 advance_duration_ms: int, bullet_duration_ms: int):
        self.monster_step_px = monster_step_px
        self.recoil_pushback_px = recoil_pushback_px
        self.advance_duration_ms = advance_duration_ms
        self.bullet_duration_ms = bullet_duration_ms

    def __eq__(self, other) -> bool:
        if not isinstance(other, TuningProfile):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        fields = ', '.join(f"{name}={getattr(self, name)!r}" for name in self.FIELDS)
        return f"TuningProfile({fields})"

    def copy(self) -> 'TuningProfile':
        return TuningProfile(**{name: getattr(self, name) for name in self.FIELDS})

    def to_dict(self) -> dict:
        return {wire: getattr(self, name) for name, wire in self.FIELDS.items()}

    @classmethod
    def from_dict(cls, data: dict) -> 'TuningProfile':
        return cls.default().merged(data)

    @classmethod
    def default(cls) -> 'TuningProfile':
        return cls(**{name: DEFAULT_TUNING[wire] for name, wire in cls.FIELDS.items()})

    def merged(self, overrides: dict | None) -> 'TuningProfile':
        """Return a copy with wire-keyed overrides applied on top of this profile."""
        result = self.copy()
        if not overrides:
            return result
        if not isinstance(overrides, dict):
            raise InvalidLevelData(f"Tuning overrides must be an object, got {overrides!r}")
        by_wire = {wire: name for name, wire in self.FIELDS.items()}
        for key, value in overrides.items():
            name = by_wire.get(key) or (key if key in self.FIELDS else None)
            if name is None:
                raise InvalidLevelData(f"Unknown tuning field: {key!r}")
            if isinstance(value, bool) or not isinstance(value, numbers.Real) \
                    or not math.isfinite(value) or value <= 0:
                raise InvalidLevelData(f"Tuning field {key!r} must be a positive number, got {value!r}")
            setattr(result, name, value)
        return result


class Level:
    """A playable level: a word list, tuning overrides and a win condition."""

    def __init__(self, id: int, name: str, words: list[Word],
                 tuning_overrides: dict = None, correct_needed: int = None):
        self.id = id
        self.name = name
        self.words = tuple(words)
        self.tuning_overrides = dict(tuning_overrides or {})
        self.correct_needed = len(self.words) if correct_needed is None else correct_needed
        self.validate()

    def validate(self) -> None:
        """Reject levels that would make progression undefined."""
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise InvalidLevelData(f"Level id must be an integer, got {self.id!r}")
        if not self.words:
            raise InvalidLevelData(f"Level {self.id} ({self.name!r}) has no words")
        seen = set()
        for word in self.words:
            if not word.key.strip():
                raise InvalidLevelData(f"Level {self.id} has a word with empty text")
            if word.key in seen:
                raise InvalidLevelData(f"Level {self.id} lists {word.text!r} more than once")
            seen.add(word.key)
        if isinstance(self.correct_needed, bool) or not isinstance(self.correct_needed, int) \
                or self.correct_needed < 1:
            raise InvalidLevelData(
                f"Level {self.id} correctNeeded must be a positive integer, got {self.correct_needed!r}")
        # Raises on malformed overrides
        TuningProfile.default().merged(self.tuning_overrides)

    @property
    def label(self) -> str:
        return f"Level: {self.id} - {self.name}" if self.name else f"Level: {self.id}"

    def find_word(self, key: str) -> Word | None:
        """Look up a word by its normalized form."""
        key = normalize_spanish(key)
        for word in self.words:
            if word.key == key:
                return word
        return None

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'words': [w.to_dict() for w in self.words],
            'tuning': dict(self.tuning_overrides),
            'winCondition': {'correctNeeded': self.correct_needed}
        }

    @classmethod
    def from_dict(cls, data: dict, position: int = 0) -> 'Level':
        """Build a level from its JSON definition, filling documented defaults."""
        if not isinstance(data, dict):
            raise InvalidLevelData(f"Level definition must be an object, got {data!r}")
        words = data.get('words')
        if not isinstance(words, list):
            words = []
        win = data.get('winCondition') or {}
        correct_needed = win.get('correctNeeded') if isinstance(win, dict) else None
        return cls(
            # A missing or zero id falls back to the level's 1-based position
            id=data.get('id') or position + 1,
            name=str(data.get('name') or ''),
            words=[Word.from_dict(w) for w in words],
            tuning_overrides=data.get('tuning') or {},
            correct_needed=correct_needed or None
        )


class CombatStats:
    """Hit points and attempt counters for one encounter."""

    def __init__(self, initial_hp: int = INITIAL_HP):
        self.initial_hp = initial_hp
        self.hp = initial_hp
        self.combo_streak = 0
        self.best_combo = 0
        self.total_attempts = 0
        self.total_hits = 0

    def record_hit(self) -> None:
        self.total_attempts += 1
        self.total_hits += 1
        self.combo_streak += 1
        self.best_combo = max(self.best_combo, self.combo_streak)

    def record_miss(self) -> None:
        self.total_attempts += 1
        self.combo_streak = 0

    def take_damage(self, amount: int = 1) -> None:
        self.hp = max(0, min(self.initial_hp, self.hp - amount))

    @property
    def is_defeated(self) -> bool:
        return self.hp <= 0

    @property
    def accuracy(self) -> float:
        """Fraction of attempts that were hits; 0 before any attempt."""
        if self.total_attempts == 0:
            return 0.0
        return self.total_hits / self.total_attempts

    def get_accuracy_percent(self) -> int:
        return int(self.accuracy * 100 + 0.5)

    def get_hearts(self) -> str:
        return '♥' * self.hp

    def to_dict(self) -> dict:
        return {
            'hp': self.hp,
            'initial_hp': self.initial_hp,
            'combo_streak': self.combo_streak,
            'best_combo': self.best_combo,
            'total_attempts': self.total_attempts,
            'total_hits': self.total_hits,
            'accuracy': self.get_accuracy_percent()
        }
