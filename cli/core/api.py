import requests
from typing import Optional

from .config import BASE_URL, TIMEOUT


def _token_pair(resp: requests.Response) -> Optional[dict]:
    if resp.status_code not in (200, 201):
        return None
    data = resp.json()
    if "access_token" not in data or "refresh_token" not in data:
        return None
    return data


def api_signup(email: str, password: str, name: str) -> Optional[dict]:
    """
    Registers a new user and returns the first token pair.
    """
    url = f"{BASE_URL}/users"
    data = {"email": email, "password": password, "name": name}

    try:
        resp = requests.post(url, json=data, timeout=TIMEOUT)
    except requests.RequestException:
        return None
    return _token_pair(resp)


def api_login(email: str, password: str) -> Optional[dict]:
    """
    Logs in and returns the access and refresh token.
    """
    url = f"{BASE_URL}/auth/login"
    data = {"email": email, "password": password}

    try:
        resp = requests.post(url, json=data, timeout=TIMEOUT)
    except requests.RequestException:
        return None
    return _token_pair(resp)


def api_reissue(refresh_token: str) -> Optional[dict]:
    """
    Trades the refresh token for a new token pair.
    """
    url = f"{BASE_URL}/auth/reissue"

    try:
        resp = requests.post(url, json={"refresh_token": refresh_token}, timeout=TIMEOUT)
    except requests.RequestException:
        return None
    return _token_pair(resp)


def api_logout(refresh_token: str) -> bool:
    url = f"{BASE_URL}/auth/logout"

    try:
        resp = requests.post(url, json={"refresh_token": refresh_token}, timeout=TIMEOUT)
    except requests.RequestException:
        return False
    return resp.status_code == 200


def api_get_my_info(token: str) -> Optional[dict]:
    """
    Returns the authenticated user's information.
    Returns {"error_code": ...} when the backend rejects the token.
    """
    url = f"{BASE_URL}/users/me"
    headers = {"Authorization": f"Bearer {token}"}

    try:
        resp = requests.get(url, headers=headers, timeout=TIMEOUT)
    except requests.RequestException:
        return None

    if resp.status_code != 200:
        try:
            return {"error_code": resp.json().get("code", str(resp.status_code))}
        except ValueError:
            return {"error_code": str(resp.status_code)}
    return resp.json()
