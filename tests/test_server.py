"""Tests for the sight words server: storage backends, timers and API."""

import asyncio
import os
import shutil
import tempfile
import time
import unittest

from fastapi.testclient import TestClient

import server.app as server_app
from core.config import ADVANCE_DELAY_SECONDS
from core.models import Difficulty, SessionStats
from core.settings import SettingsStore
from server.file_storage import FileStorage
from server.timers import AsyncioScheduler


def make_stats(correct: int, incorrect: int) -> SessionStats:
    stats = SessionStats()
    stats.correct_count = correct
    stats.incorrect_count = incorrect
    stats.total_answered = correct + incorrect
    stats.score = correct
    return stats


class TestFileStorage(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.storage = FileStorage(
            config_file=os.path.join(self.temp_dir, 'config', 'config.json'),
            state_dir=self.temp_dir
        )

    def tearDown(self):
        shutil.rmtree(self.temp_dir)

    def test_builtin_words_until_seeded(self):
        self.assertEqual(self.storage.count_rounds('soccer'), 16)
        self.assertFalse(os.path.exists(os.path.join(self.temp_dir, 'sightwords_rounds.json')))

    def test_seeded_rounds_replace_builtin(self):
        self.storage.seed_rounds([{
            'id': 'r1', 'sport': 'soccer', 'prompt_word': 'ball',
            'options': ['ball', 'goal'], 'correct_word': 'ball'
        }])
        self.assertEqual(self.storage.count_rounds('soccer'), 1)
        self.assertEqual(self.storage.count_rounds('football'), 0)

    def test_config_missing_is_empty(self):
        self.assertEqual(self.storage.load_config(), {})

    def test_config_saved(self):
        self.storage.save_config({'difficulty': 'easy'})
        self.assertEqual(self.storage.load_config(), {'difficulty': 'easy'})

    def test_history_newest_first(self):
        self.storage.record_session_summary('soccer', make_stats(1, 1), 100.0)
        self.storage.record_session_summary('football', make_stats(3, 0), 200.0)
        sessions = self.storage.list_session_summaries()
        self.assertEqual([s['sport'] for s in sessions], ['football', 'soccer'])
        self.assertEqual(sessions[0]['accuracy_percent'], 100)
        self.assertEqual(sessions[1]['accuracy_percent'], 50)

    def test_history_filter_and_limit(self):
        for i in range(3):
            self.storage.record_session_summary('soccer', make_stats(i, 1), float(i))
        self.storage.record_session_summary('football', make_stats(1, 0), 10.0)
        self.assertEqual(len(self.storage.list_session_summaries('soccer')), 3)
        self.assertEqual(len(self.storage.list_session_summaries(limit=2)), 2)

    def test_attempts_and_clear(self):
        self.storage.record_attempt('soccer', 'goal', False, 1.0)
        self.storage.record_attempt('football', 'catch', True, 2.0)
        self.assertEqual(len(self.storage.list_attempts('soccer')), 1)
        self.assertEqual(self.storage.list_attempts()[0]['word'], 'catch')
        self.storage.clear_history()
        self.assertEqual(self.storage.list_attempts(), [])
        self.assertEqual(self.storage.list_session_summaries(), [])


class TestAsyncioScheduler(unittest.TestCase):

    def test_callbacks_run_and_cancel(self):
        loop = asyncio.new_event_loop()
        try:
            calls = []
            scheduler = AsyncioScheduler(loop)
            stale = scheduler.after(0.01, lambda: calls.append('stale'))
            scheduler.after(0.02, lambda: calls.append('fresh'))
            stale.cancel()
            self.assertTrue(stale.cancelled)
            loop.run_until_complete(asyncio.sleep(0.1))
            self.assertEqual(calls, ['fresh'])
        finally:
            loop.close()


class TestAPI(unittest.TestCase):
    """API tests against file storage in a temporary directory."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        storage = FileStorage(
            config_file=os.path.join(self.temp_dir, 'config.json'),
            state_dir=self.temp_dir
        )
        server_app.storage = storage
        server_app.settings = SettingsStore(storage)
        server_app.engines.clear()
        self.client = TestClient(server_app.app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        server_app.engines.clear()
        server_app.storage = None
        server_app.settings = None
        shutil.rmtree(self.temp_dir)

    def test_health(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ok')

    def test_sports(self):
        sports = self.client.get('/api/sports').json()
        self.assertEqual([s['sport'] for s in sports], ['soccer', 'basketball', 'football'])
        self.assertTrue(all(s['round_count'] == 16 for s in sports))

    def test_settings(self):
        self.assertEqual(self.client.get('/api/settings').json()['difficulty'], 'normal')
        response = self.client.post('/api/settings', json={'difficulty': 'hard'})
        self.assertEqual(response.json()['seconds_visible'], 1.0)
        self.assertEqual(self.client.get('/api/settings').json()['difficulty'], 'hard')

    def test_settings_unknown_difficulty(self):
        response = self.client.post('/api/settings', json={'difficulty': 'extreme'})
        self.assertEqual(response.status_code, 400)

    def test_start_unknown_sport(self):
        response = self.client.post('/api/session/start', json={'sport': 'curling'})
        self.assertEqual(response.status_code, 404)

    def test_start_session(self):
        body = self.client.post('/api/session/start', json={'sport': 'soccer'}).json()
        self.assertTrue(body['ok'])
        state = body['state']
        self.assertEqual(state['phase'], 'pick')
        self.assertTrue(state['locked'])
        self.assertTrue(state['prompt_visible'])
        self.assertEqual(state['pick_total'], 10)
        self.assertEqual(state['spell_total'], 5)
        self.assertEqual(state['grid_slots'].count(None), 1)

    def test_pick_while_locked_rejected(self):
        state = self.client.post('/api/session/start', json={'sport': 'soccer'}).json()['state']
        body = self.client.post('/api/session/pick',
                                json={'option': state['current_round']['correct_word']}).json()
        self.assertFalse(body['ok'])
        self.assertEqual(body['state']['stats']['total_answered'], 0)

    def test_users_have_separate_sessions(self):
        self.client.post('/api/session/start', json={'sport': 'soccer', 'user_id': 'ana'})
        other = self.client.get('/api/session', params={'user_id': 'ben'}).json()
        self.assertIsNone(other['sport'])
        self.assertEqual(self.client.get('/api/session', params={'user_id': 'ana'}).json()['sport'], 'soccer')

    def test_lookup_does_not_create_sessions(self):
        state = self.client.get('/api/session', params={'user_id': 'ghost'}).json()
        self.assertIsNone(state['sport'])
        self.assertEqual(state['phase'], 'complete')
        body = self.client.post('/api/session/pick', json={'option': 'ball', 'user_id': 'ghost'}).json()
        self.assertFalse(body['ok'])
        self.assertEqual(body['message'], 'No active session')
        self.assertNotIn('ghost', server_app.engines)

    def test_round_runs_on_event_loop_timers(self):
        self.client.post('/api/settings', json={'difficulty': 'hard'})
        state = self.client.post('/api/session/start', json={'sport': 'soccer'}).json()['state']
        self.assertTrue(state['locked'])

        time.sleep(Difficulty.HARD.seconds_visible + 0.2)
        state = self.client.get('/api/session').json()
        self.assertFalse(state['locked'])
        self.assertFalse(state['prompt_visible'])

        correct = state['current_round']['correct_word']
        wrong = next(s for s in state['grid_slots'] if s is not None and s != correct)
        body = self.client.post('/api/session/pick', json={'option': wrong}).json()
        self.assertTrue(body['ok'])
        self.assertFalse(body['correct'])
        self.assertTrue(body['state']['awaiting_advance'])
        self.assertEqual(body['state']['pick_total'], 11)

        time.sleep(ADVANCE_DELAY_SECONDS + 0.2)
        state = self.client.get('/api/session').json()
        self.assertEqual(state['progress_label'], 'Pick 2/11')
        self.assertTrue(state['locked'])
        self.assertTrue(state['prompt_visible'])

    def test_end_session_records_history(self):
        self.client.post('/api/session/start', json={'sport': 'football'})
        body = self.client.post('/api/session/end', json={}).json()
        self.assertTrue(body['ok'])
        self.assertEqual(body['state']['phase'], 'complete')
        history = self.client.get('/api/history').json()
        self.assertEqual(history['total'], 1)
        self.assertEqual(history['sessions'][0]['sport'], 'football')
        self.assertEqual(history['sessions'][0]['total_answered'], 0)

    def test_end_without_session(self):
        body = self.client.post('/api/session/end', json={}).json()
        self.assertFalse(body['ok'])

    def test_clear_history(self):
        self.client.post('/api/session/start', json={'sport': 'soccer'})
        self.client.post('/api/session/end', json={})
        self.client.delete('/api/history')
        self.assertEqual(self.client.get('/api/history').json()['total'], 0)

    def test_history_unknown_sport(self):
        self.assertEqual(self.client.get('/api/history', params={'sport': 'curling'}).status_code, 404)

    def test_progress(self):
        progress = self.client.get('/api/progress').json()
        self.assertEqual(progress['sessions_completed'], 0)
        self.assertEqual(len(progress['sports']), 3)

    def test_events_unavailable_with_file_storage(self):
        body = self.client.get('/api/events/recent', params={'user_id': 'default'}).json()
        self.assertIn('error', body)


if __name__ == '__main__':
    unittest.main()
