"""REST API client for the sight words server."""

import requests


class SightWordsAPIClient:
    """Client for communicating with the sight words REST API."""

    def __init__(self, base_url: str = "http://localhost:8000", user_id: str = "default"):
        self.base_url = base_url.rstrip('/')
        self.user_id = user_id
        self.session = requests.Session()

    def _get(self, endpoint: str, params: dict = None) -> dict:
        """Make a GET request."""
        if params is None:
            params = {}
        params['user_id'] = self.user_id
        response = self.session.get(f"{self.base_url}{endpoint}", params=params)
        response.raise_for_status()
        return response.json()

    def _post(self, endpoint: str, data: dict = None) -> dict:
        """Make a POST request."""
        data = dict(data or {})
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_sports(self) -> list:
        return self._get("/api/sports")

    def get_settings(self) -> dict:
        return self._get("/api/settings")

    def set_difficulty(self, difficulty: str) -> dict:
        return self._post("/api/settings", {'difficulty': difficulty})

    def start(self, sport: str) -> dict:
        """Start a new session for a sport."""
        return self._post("/api/session/start", {'sport': sport})

    def restart(self) -> dict:
        return self._post("/api/session/restart")

    def end_session(self) -> dict:
        return self._post("/api/session/end")

    def get_state(self) -> dict:
        """Get the current session snapshot."""
        return self._get("/api/session")

    def submit_pick(self, option: str) -> dict:
        return self._post("/api/session/pick", {'option': option})

    def submit_spelling(self, text: str) -> dict:
        return self._post("/api/session/spell", {'text': text})

    def get_history(self, sport: str = None) -> dict:
        params = {'sport': sport} if sport else {}
        return self._get("/api/history", params)

    def get_progress(self) -> dict:
        return self._get("/api/progress")
