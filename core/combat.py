"""Resolution of recognition events into hits, misses and progression."""

import random

from .config import INITIAL_HP, PLAYER_X, MONSTER_START_X, MONSTER_MIN_GAP
from .difficulty import recompute_tuning
from .models import CombatStats, InvalidLevelData, Level, Word
from .progression import LevelProgression, WRAPPED, LEVEL_COMPLETE, RUN_COMPLETE
from .scoring import GradeResult, grade_pronunciation
from .utils import normalize_spanish

INTERIM = 'interim'
HIT = 'hit'
MISS = 'miss'
IGNORED = 'ignored'


class CombatOutcome:
    """What happened for one recognition event, for the presentation layer to render."""

    def __init__(self, kind: str, said: str, word: Word | None, grade: GradeResult | None = None):
        self.kind = kind
        self.said = said
        self.word = word
        self.grade = grade
        self.event = None             # progression event on a hit
        self.next_word = word
        self.level_changed = False
        self.game_over = False
        self.run_complete = False
        self.reason = None
        self.hp = None
        self.combo_streak = None
        self.tuning = None
        self.monster_x = None

    @property
    def is_hit(self) -> bool:
        return self.kind == HIT

    def to_dict(self) -> dict:
        return {
            'kind': self.kind,
            'said': self.said,
            'word': self.word.to_dict() if self.word else None,
            'grade': self.grade.to_dict() if self.grade else None,
            'event': self.event,
            'next_word': self.next_word.to_dict() if self.next_word else None,
            'level_changed': self.level_changed,
            'game_over': self.game_over,
            'run_complete': self.run_complete,
            'reason': self.reason,
            'hp': self.hp,
            'combo_streak': self.combo_streak,
            'tuning': self.tuning.to_dict() if self.tuning else None,
            'monster_x': self.monster_x
        }


class CombatResolver:
    """Owns the stats, tuning and progression of one encounter."""

    def __init__(self, levels: list[Level], practice: bool = False,
                 initial_hp: int = INITIAL_HP, rng: random.Random = None):
        if not levels:
            raise InvalidLevelData("No levels to play")
        self.practice = practice
        self.stats = CombatStats(initial_hp)
        self.progression = LevelProgression(levels, rng)
        self.progression.apply_level(0)
        self.tuning = recompute_tuning(self.progression.base_tuning, 0)
        self.monster_x = MONSTER_START_X

    @property
    def base_tuning(self):
        return self.progression.base_tuning

    @property
    def current_word(self) -> Word | None:
        return self.progression.current_word

    @property
    def game_over(self) -> bool:
        return self.stats.is_defeated

    @property
    def run_complete(self) -> bool:
        return self.progression.state == RUN_COMPLETE

    @property
    def finished(self) -> bool:
        return self.game_over or self.run_complete

    def _recompute_tuning(self) -> None:
        self.tuning = recompute_tuning(self.progression.base_tuning, self.stats.combo_streak)

    def _finish(self, outcome: CombatOutcome) -> CombatOutcome:
        outcome.hp = self.stats.hp
        outcome.combo_streak = self.stats.combo_streak
        outcome.tuning = self.tuning.copy()
        outcome.monster_x = self.monster_x
        outcome.game_over = self.game_over
        outcome.run_complete = self.run_complete
        return outcome

    def resolve(self, transcript: str, confidence: float = 0.0, is_final: bool = True) -> CombatOutcome:
        """Grade one recognition event and apply its gameplay effect.

        Interim hypotheses are display-only and never touch stats or progression.
        """
        word = self.current_word
        said = normalize_spanish((transcript or '').strip())

        if not is_final:
            grade = grade_pronunciation(said, word.text, confidence) if word else None
            return self._finish(CombatOutcome(INTERIM, said, word, grade))

        if self.finished:
            outcome = CombatOutcome(IGNORED, said, word)
            outcome.reason = 'game_over' if self.game_over else 'run_complete'
            return self._finish(outcome)

        grade = grade_pronunciation(said, word.text, confidence)
        if grade.is_hit:
            return self._finish(self._apply_hit(CombatOutcome(HIT, said, word, grade)))
        return self._finish(self._apply_miss(CombatOutcome(MISS, said, word, grade)))

    def resolve_capture_error(self, reason: str = 'recognition_error') -> CombatOutcome:
        """Count a failed capture as a missed attempt."""
        outcome = self.resolve('', 0.0, is_final=True)
        outcome.reason = reason
        return outcome

    def _apply_hit(self, outcome: CombatOutcome) -> CombatOutcome:
        self.stats.record_hit()
        self._recompute_tuning()

        event, next_word = self.progression.record_correct()
        outcome.event = event
        outcome.next_word = next_word
        if event == WRAPPED:
            self.monster_x = MONSTER_START_X
        elif event == LEVEL_COMPLETE:
            outcome.next_word = self.progression.advance_level()
            outcome.level_changed = True
            self._recompute_tuning()
            self.monster_x = MONSTER_START_X
        return outcome

    def _apply_miss(self, outcome: CombatOutcome) -> CombatOutcome:
        self.stats.record_miss()
        self._recompute_tuning()
        self.progression.record_miss()
        self.monster_x = max(PLAYER_X + MONSTER_MIN_GAP, self.monster_x - self.tuning.monster_step_px)
        if not self.practice:
            self.stats.take_damage(1)
        return outcome

    def get_status(self) -> dict:
        """Snapshot for the HUD."""
        level = self.progression.level
        word = self.current_word
        if self.game_over:
            state = 'game_over'
        else:
            state = self.progression.state
        return {
            'state': state,
            'practice': self.practice,
            'hp': self.stats.hp,
            'hearts': self.stats.get_hearts(),
            'level': level.id,
            'level_name': level.name,
            'level_label': level.label,
            'level_index': self.progression.level_index,
            'level_count': len(self.progression.levels),
            'word': word.text if word else None,
            'translation': word.translation if word else '',
            'hint': word.hint if word else '',
            'progress_display': self.progression.get_progress_display(),
            'combo_streak': self.stats.combo_streak,
            'best_combo': self.stats.best_combo,
            'total_attempts': self.stats.total_attempts,
            'total_hits': self.stats.total_hits,
            'accuracy': self.stats.get_accuracy_percent(),
            'tuning': self.tuning.to_dict(),
            'base_tuning': self.base_tuning.to_dict(),
            'monster_x': self.monster_x
        }
