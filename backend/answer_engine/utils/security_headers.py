"""
Заголовки безопасности для ответов API
"""
from fastapi import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}


def add_security_headers(response: Response) -> Response:
    """Добавляет фиксированный набор заголовков к ответу"""
    for name, value in SECURITY_HEADERS.items():
        response.headers[name] = value
    return response
