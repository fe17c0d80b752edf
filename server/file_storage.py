"""File-based level source implementation."""

import json
import logging
import os

from core.interfaces import LevelSource
from core.levels import parse_levels
from core.models import InvalidLevelData, Level

logger = logging.getLogger(__name__)


class FileLevelSource(LevelSource):
    """Loads level definitions from a JSON file such as words_es.json."""

    def __init__(self, levels_file: str):
        self.levels_file = os.path.expanduser(levels_file)

    def load_levels(self) -> list[Level]:
        if not os.path.exists(self.levels_file):
            raise FileNotFoundError(
                f"Levels file not found at {self.levels_file}\n"
                f'Expected JSON like: {{"levels": [{{"id": 1, "name": "...", "words": [...]}}]}}'
            )
        with open(self.levels_file, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise InvalidLevelData(f"{self.levels_file} is not valid JSON: {e}") from e
        levels = parse_levels(data)
        logger.info(f"Loaded {len(levels)} levels from {self.levels_file}")
        return levels
