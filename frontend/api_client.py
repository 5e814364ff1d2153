import json
import os
import requests
from typing import Dict, Optional, Tuple

API_URL = os.getenv("API_URL", "http://localhost:8000")

def request_analysis(pr_url: str, api_url: str = None, timeout: int = 60) -> Tuple[Optional[Dict], Optional[str]]:
    """POST the PR URL to the backend. Returns (data, None) or (None, error message)."""
    try:
        resp = requests.post(f"{api_url or API_URL}/api/v1/analyze", json={"prUrl": pr_url}, timeout=timeout)
    except requests.RequestException as e:
        return None, f"API unreachable: {e}"
    try:
        data = resp.json()
    except ValueError:
        return None, f"API failed ({resp.status_code})"
    if not resp.ok:
        return None, data.get("error") or "API failed"
    return data, None

def report_json(data: Dict) -> str:
    """Full API response as pretty-printed JSON for download."""
    return json.dumps(data, indent=2)
