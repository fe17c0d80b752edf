"""Bundled Spanish level definitions and level parsing."""

from .interfaces import LevelSource
from .models import InvalidLevelData, Level

# Same schema as the JSON level files: {levels: [{id, name, words, tuning, winCondition}]}
DEFAULT_LEVELS = {
    'levels': [
        {
            'id': 1,
            'name': 'Saludos',
            'words': [
                {'text': 'hola', 'hint': 'OH-lah', 'translation': 'hello'},
                {'text': 'adiós', 'hint': 'ah-DYOHS', 'translation': 'goodbye'},
                {'text': 'gracias', 'hint': 'GRAH-syahs', 'translation': 'thank you'},
                {'text': 'por favor', 'hint': 'por fah-BOR', 'translation': 'please'},
                {'text': 'buenos días', 'hint': 'BWEH-nohs DEE-ahs', 'translation': 'good morning'}
            ],
            'tuning': {'monsterStepPx': 24, 'advanceDurationMs': 180},
            'winCondition': {'correctNeeded': 4}
        },
        {
            'id': 2,
            'name': 'Colores',
            'words': [
                {'text': 'rojo', 'hint': 'ROH-hoh', 'translation': 'red'},
                {'text': 'azul', 'hint': 'ah-SOOL', 'translation': 'blue'},
                {'text': 'verde', 'hint': 'BEHR-deh', 'translation': 'green'},
                {'text': 'amarillo', 'hint': 'ah-mah-REE-yoh', 'translation': 'yellow'},
                {'text': 'negro', 'hint': 'NEH-groh', 'translation': 'black'},
                {'text': 'blanco', 'hint': 'BLAHN-koh', 'translation': 'white'}
            ],
            'tuning': {'monsterStepPx': 28, 'advanceDurationMs': 160},
            'winCondition': {'correctNeeded': 5}
        },
        {
            'id': 3,
            'name': 'Animales',
            'words': [
                {'text': 'perro', 'hint': 'PEH-rroh', 'translation': 'dog'},
                {'text': 'gato', 'hint': 'GAH-toh', 'translation': 'cat'},
                {'text': 'pájaro', 'hint': 'PAH-hah-roh', 'translation': 'bird'},
                {'text': 'caballo', 'hint': 'kah-BAH-yoh', 'translation': 'horse'},
                {'text': 'ratón', 'hint': 'rrah-TOHN', 'translation': 'mouse'},
                {'text': 'conejo', 'hint': 'koh-NEH-hoh', 'translation': 'rabbit'}
            ],
            'tuning': {'monsterStepPx': 32, 'advanceDurationMs': 140, 'bulletDurationMs': 240},
            'winCondition': {'correctNeeded': 5}
        },
        {
            'id': 4,
            'name': 'Comida',
            'words': [
                {'text': 'pan', 'hint': 'pahn', 'translation': 'bread'},
                {'text': 'leche', 'hint': 'LEH-cheh', 'translation': 'milk'},
                {'text': 'agua', 'hint': 'AH-gwah', 'translation': 'water'},
                {'text': 'manzana', 'hint': 'mahn-SAH-nah', 'translation': 'apple'},
                {'text': 'plátano', 'hint': 'PLAH-tah-noh', 'translation': 'banana'},
                {'text': 'queso', 'hint': 'KEH-soh', 'translation': 'cheese'},
                {'text': 'huevo', 'hint': 'WEH-boh', 'translation': 'egg'}
            ],
            'tuning': {'monsterStepPx': 36, 'advanceDurationMs': 130, 'recoilPushbackPx': 22},
            'winCondition': {'correctNeeded': 6}
        }
    ]
}


def parse_levels(data) -> list[Level]:
    """Parse level definitions from {levels: [...]} or a bare list.

    Raises InvalidLevelData naming the offending level.
    """
    if isinstance(data, dict):
        data = data.get('levels')
    if not isinstance(data, list):
        raise InvalidLevelData("Level data must contain a 'levels' list")

    levels = []
    for position, entry in enumerate(data):
        try:
            levels.append(Level.from_dict(entry, position))
        except InvalidLevelData as e:
            raise InvalidLevelData(f"Invalid level #{position + 1}: {e}") from e
    return levels


class BundledLevelSource(LevelSource):
    """Levels shipped with the game."""

    def load_levels(self) -> list[Level]:
        return parse_levels(DEFAULT_LEVELS)
