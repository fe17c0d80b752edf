"""Configuration constants for monstruo application."""

LANGUAGE = 'Spanish'
RECOGNITION_LANG = 'es-ES'

# Pronunciation grading
SIMILARITY_WEIGHT = 0.7       # Share of the weighted score taken by text similarity
CONFIDENCE_WEIGHT = 0.3       # Share taken by recognizer confidence
PERFECT_THRESHOLD = 0.85
GOOD_THRESHOLD = 0.70
OKAY_THRESHOLD = 0.55         # Also the hit boundary

# Ordered highest-first: (inclusive lower bound, label)
LABEL_THRESHOLDS = [
    (PERFECT_THRESHOLD, 'perfect'),
    (GOOD_THRESHOLD, 'good'),
    (OKAY_THRESHOLD, 'okay'),
]
MISS_LABEL = 'miss'
NO_INPUT_LABEL = 'no-input'

# Combo tiers, ordered highest streak first: (min streak, multipliers)
COMBO_TIERS = [
    (8, {
        'monster_step_px': 1.4,
        'advance_duration_ms': 0.85,
        'recoil_pushback_px': 1.3,
        'bullet_duration_ms': 0.9,
    }),
    (4, {
        'monster_step_px': 1.2,
        'advance_duration_ms': 0.9,
        'recoil_pushback_px': 1.15,
        'bullet_duration_ms': 0.95,
    }),
]

DEFAULT_TUNING = {
    'monsterStepPx': 26,
    'recoilPushbackPx': 26,
    'advanceDurationMs': 160,
    'bulletDurationMs': 260,
}

# Player
INITIAL_HP = 5

# Arena geometry (pixels)
PLAYER_X = 120
MONSTER_START_X = 640
MONSTER_MIN_GAP = 60          # Monster never steps closer than this to the player

# Continuous listening
RESTART_DELAY_SECONDS = 0.02  # Pause before restarting a recognizer that ended on its own

# Audio metering display
METER_FULL_SCALE_RMS = 0.3    # RMS mapped to a full volume bar
