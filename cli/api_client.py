"""REST API client for monstruo server."""

import requests


class MonstruoAPIClient:
    """Client for communicating with the monstruo REST API."""

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

    def _post(self, endpoint: str, data: dict) -> dict:
        """Make a POST request."""
        data['user_id'] = self.user_id
        response = self.session.post(f"{self.base_url}{endpoint}", json=data)
        response.raise_for_status()
        return response.json()

    def health_check(self) -> dict:
        """Check if the server is running."""
        response = self.session.get(f"{self.base_url}/")
        response.raise_for_status()
        return response.json()

    def get_levels(self) -> list:
        """List the levels in play order."""
        return self._get("/api/levels")

    def get_status(self) -> dict:
        """Get HUD state for this user."""
        return self._get("/api/status")

    def new_session(self, practice: bool = None, seed: int = None) -> dict:
        """Start a new encounter from the first level."""
        data = {}
        if practice is not None:
            data['practice'] = practice
        if seed is not None:
            data['seed'] = seed
        return self._post("/api/session", data)

    def submit_recognition(self, transcript: str, confidence: float, is_final: bool = True) -> dict:
        """Send a recognized utterance for grading."""
        return self._post("/api/recognition", {
            'transcript': transcript,
            'confidence': confidence,
            'is_final': is_final
        })

    def report_error(self, error: str) -> dict:
        """Report a capture failure (counts as a miss)."""
        return self._post("/api/recognition-error", {'error': error})
