from starlette.requests import Request

from council_admin.api.utils.client_ip import UNKNOWN_IP, get_client_ip


def make_request(headers):
    return Request(
        {
            "type": "http",
            "headers": [(name.lower().encode(), value.encode()) for name, value in headers.items()],
        }
    )


def test_first_forwarded_for_entry_wins():
    request = make_request({"X-Forwarded-For": "203.0.113.7, 10.0.0.1", "X-Real-IP": "10.0.0.2"})

    assert get_client_ip(request) == "203.0.113.7"


def test_real_ip_fallback():
    assert get_client_ip(make_request({"X-Real-IP": " 203.0.113.9 "})) == "203.0.113.9"


def test_unknown_without_proxy_headers():
    assert get_client_ip(make_request({})) == UNKNOWN_IP
