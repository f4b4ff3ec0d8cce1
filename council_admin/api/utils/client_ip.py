from fastapi import Request

UNKNOWN_IP = "unknown"


def get_client_ip(request: Request) -> str:
    """
    Client IP from proxy headers: first ``X-Forwarded-For`` entry, then
    ``X-Real-IP``. Both are client-controlled when no trusted proxy strips
    them, so callers must not treat the value as authenticated.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        client_ip = forwarded_for.split(",")[0].strip()
        if client_ip:
            return client_ip

    real_ip = request.headers.get("X-Real-IP")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_IP
