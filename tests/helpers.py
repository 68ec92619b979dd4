from __future__ import annotations

BASE_URL = "https://api.example.com/api"


def envelope(data, message: str = "OK") -> dict:
    return {"success": True, "message": message, "data": data}


def url(path: str) -> str:
    return f"{BASE_URL}{path}"


def error_body(message: str, status: int = 400) -> dict:
    return {"success": False, "message": message, "status": status}
