from .models import Word, Level, TuningProfile, CombatStats, InvalidLevelData
from .interfaces import (
    SpeechRecognizer, AudioMeter, LevelSource,
    SpeechUnavailable, RecognitionError
)
from .utils import normalize_spanish, shuffle_words
from .scoring import GradeResult, levenshtein_distance, similarity, grade_pronunciation
from .difficulty import recompute_tuning
from .progression import LevelProgression
from .combat import CombatOutcome, CombatResolver
from .session import GameSession
from .config import (
    INITIAL_HP, OKAY_THRESHOLD, GOOD_THRESHOLD, PERFECT_THRESHOLD,
    LABEL_THRESHOLDS, COMBO_TIERS, LANGUAGE
)

__all__ = [
    'Word', 'Level', 'TuningProfile', 'CombatStats', 'InvalidLevelData',
    'SpeechRecognizer', 'AudioMeter', 'LevelSource',
    'SpeechUnavailable', 'RecognitionError',
    'normalize_spanish', 'shuffle_words',
    'GradeResult', 'levenshtein_distance', 'similarity', 'grade_pronunciation',
    'recompute_tuning',
    'LevelProgression',
    'CombatOutcome', 'CombatResolver',
    'GameSession',
    'INITIAL_HP', 'OKAY_THRESHOLD', 'GOOD_THRESHOLD', 'PERFECT_THRESHOLD',
    'LABEL_THRESHOLDS', 'COMBO_TIERS', 'LANGUAGE'
]
