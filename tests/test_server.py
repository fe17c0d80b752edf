"""Tests for the monstruo API server and file level source."""

import json
import os
import tempfile
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from core.levels import BundledLevelSource, DEFAULT_LEVELS
from core.models import InvalidLevelData
from server import app as app_module
from server.app import app, load_level_source
from server.file_storage import FileLevelSource


ONE_LEVEL = {
    'levels': [
        {'id': 9, 'name': 'Números', 'words': ['uno', 'dos', 'tres'],
         'winCondition': {'correctNeeded': 2}}
    ]
}


def write_json(data) -> str:
    fd, path = tempfile.mkstemp(suffix='.json')
    with os.fdopen(fd, 'w', encoding='utf-8') as f:
        if isinstance(data, str):
            f.write(data)
        else:
            json.dump(data, f)
    return path


class TestFileLevelSource(unittest.TestCase):
    """Tests for FileLevelSource."""

    def test_loads_levels(self):
        path = write_json(ONE_LEVEL)
        self.addCleanup(os.remove, path)
        levels = FileLevelSource(path).load_levels()
        self.assertEqual(len(levels), 1)
        self.assertEqual(levels[0].name, 'Números')
        self.assertEqual(levels[0].correct_needed, 2)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            FileLevelSource('/nonexistent/words_es.json').load_levels()

    def test_invalid_json(self):
        path = write_json('{"levels": [')
        self.addCleanup(os.remove, path)
        with self.assertRaises(InvalidLevelData):
            FileLevelSource(path).load_levels()

    def test_empty_level_rejected(self):
        path = write_json({'levels': [{'id': 1, 'words': []}]})
        self.addCleanup(os.remove, path)
        with self.assertRaises(InvalidLevelData):
            FileLevelSource(path).load_levels()

    def test_load_level_source_from_env(self):
        with patch.dict(os.environ, {'MONSTRUO_LEVELS_FILE': '/tmp/words_es.json'}):
            source = load_level_source()
        self.assertIsInstance(source, FileLevelSource)
        self.assertEqual(source.levels_file, '/tmp/words_es.json')

    def test_load_level_source_default(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertIsInstance(load_level_source(), BundledLevelSource)


class ServerTestCase(unittest.TestCase):
    """Runs each test against a freshly started app with the bundled levels."""

    env = {}

    def setUp(self):
        app_module.sessions.clear()
        app_module.session_locks.clear()
        env = {k: v for k, v in os.environ.items()
               if k not in ('MONSTRUO_LEVELS_FILE', 'MONSTRUO_PRACTICE')}
        env.update(self.env)
        patcher = patch.dict(os.environ, env, clear=True)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def start(self, **body) -> dict:
        body.setdefault('seed', 1)
        response = self.client.post('/api/session', json=body)
        self.assertEqual(response.status_code, 200)
        return response.json()

    def say(self, transcript: str, confidence: float = 1.0, is_final: bool = True,
            user_id: str = 'default') -> dict:
        response = self.client.post('/api/recognition', json={
            'user_id': user_id, 'transcript': transcript,
            'confidence': confidence, 'is_final': is_final
        })
        self.assertEqual(response.status_code, 200)
        return response.json()


class TestServer(ServerTestCase):
    """Tests for the game endpoints."""

    def test_root(self):
        data = self.client.get('/').json()
        self.assertEqual(data['service'], 'monstruo')
        self.assertEqual(data['levels'], len(DEFAULT_LEVELS['levels']))

    def test_levels(self):
        levels = self.client.get('/api/levels').json()
        self.assertEqual(len(levels), 4)
        self.assertEqual(levels[0], {'id': 1, 'name': 'Saludos', 'word_count': 5, 'correct_needed': 4})

    def test_new_session(self):
        status = self.start()
        self.assertEqual(status['language'], 'Spanish')
        self.assertEqual(status['hp'], 5)
        self.assertEqual(status['max_hp'], 5)
        self.assertEqual(status['state'], 'level_active')
        self.assertEqual(status['level_label'], 'Level: 1 - Saludos')
        self.assertEqual(status['progress_display'], '0/4')
        self.assertEqual(status['tuning']['monsterStepPx'], 24)
        self.assertFalse(status['practice'])
        self.assertFalse(status['speech_available'])

    def test_seeded_sessions_match(self):
        first = self.start(seed=42)['word']
        self.assertEqual(self.start(seed=42)['word'], first)

    def test_status_creates_session(self):
        status = self.client.get('/api/status', params={'user_id': 'ana'}).json()
        self.assertEqual(status['hp'], 5)
        self.assertIn('ana', app_module.sessions)

    def test_hit(self):
        word = self.start()['word']
        outcome = self.say(word)
        self.assertEqual(outcome['kind'], 'hit')
        self.assertEqual(outcome['grade']['label'], 'perfect')
        self.assertEqual(outcome['progress_display'], '1/4')
        self.assertEqual(outcome['accuracy'], 100)
        self.assertEqual(outcome['combo_streak'], 1)

    def test_interim_does_not_count(self):
        word = self.start()['word']
        outcome = self.say(word, is_final=False)
        self.assertEqual(outcome['kind'], 'interim')
        status = self.client.get('/api/status').json()
        self.assertEqual(status['total_attempts'], 0)
        self.assertEqual(status['word'], word)

    def test_miss(self):
        self.start()
        outcome = self.say('xxxxxxxx', 0.1)
        self.assertEqual(outcome['kind'], 'miss')
        self.assertEqual(outcome['hp'], 4)
        self.assertEqual(outcome['monster_x'], 640 - 24)

    def test_practice_session(self):
        self.start(practice=True)
        outcome = self.say('xxxxxxxx', 0.0)
        self.assertEqual(outcome['kind'], 'miss')
        self.assertEqual(outcome['hp'], 5)

    def test_game_over_then_ignored(self):
        self.start()
        for _ in range(5):
            outcome = self.say('xxxxxxxx', 0.0)
        self.assertTrue(outcome['game_over'])
        after = self.say('hola')
        self.assertEqual(after['kind'], 'ignored')
        self.assertEqual(after['reason'], 'game_over')
        self.assertEqual(self.client.get('/api/status').json()['state'], 'game_over')

    def test_level_advance(self):
        self.start()
        for _ in range(4):
            outcome = self.say(self.client.get('/api/status').json()['word'])
        self.assertTrue(outcome['level_changed'])
        status = self.client.get('/api/status').json()
        self.assertEqual(status['level'], 2)
        self.assertEqual(status['progress_display'], '0/5')
        self.assertEqual(status['monster_x'], 640)

    def test_recognition_error_is_miss(self):
        self.start()
        response = self.client.post('/api/recognition-error', json={'error': 'no-speech'})
        outcome = response.json()
        self.assertEqual(outcome['kind'], 'miss')
        self.assertEqual(outcome['reason'], 'no-speech')
        self.assertEqual(outcome['grade']['label'], 'no-input')
        self.assertEqual(outcome['hp'], 4)

    def test_meter(self):
        self.start()
        response = self.client.post('/api/meter', json={'rms': 0.15, 'pitch_hz': 180.0})
        self.assertEqual(response.json(), {'rms': 0.15, 'pitch_hz': 180.0, 'volume': 50})
        status = self.client.get('/api/status').json()
        self.assertEqual(status['meter']['volume'], 50)

    def test_users_are_independent(self):
        self.start()
        self.say('xxxxxxxx', 0.0, user_id='other')
        self.assertEqual(self.client.get('/api/status').json()['hp'], 5)
        self.assertEqual(self.client.get('/api/status', params={'user_id': 'other'}).json()['hp'], 4)

    def test_malformed_request(self):
        response = self.client.post('/api/recognition', json={'transcript': 'hola', 'confidence': 'loud'})
        self.assertEqual(response.status_code, 422)


class TestServerWithLevelsFile(ServerTestCase):
    """Startup with MONSTRUO_LEVELS_FILE and MONSTRUO_PRACTICE set."""

    @classmethod
    def setUpClass(cls):
        cls.path = write_json(ONE_LEVEL)
        cls.env = {'MONSTRUO_LEVELS_FILE': cls.path, 'MONSTRUO_PRACTICE': '1'}

    @classmethod
    def tearDownClass(cls):
        os.remove(cls.path)

    def test_levels_from_file(self):
        levels = self.client.get('/api/levels').json()
        self.assertEqual(levels, [{'id': 9, 'name': 'Números', 'word_count': 3, 'correct_needed': 2}])

    def test_practice_default(self):
        status = self.client.get('/api/status').json()
        self.assertTrue(status['practice'])
        outcome = self.say('xxxxxxxx', 0.0)
        self.assertEqual(outcome['hp'], 5)

    def test_run_complete(self):
        self.start()
        self.say(self.client.get('/api/status').json()['word'])
        outcome = self.say(self.client.get('/api/status').json()['word'])
        self.assertTrue(outcome['run_complete'])
        self.assertEqual(outcome['event'], 'run_complete')
        self.assertEqual(self.say('uno')['reason'], 'run_complete')


if __name__ == '__main__':
    unittest.main()
