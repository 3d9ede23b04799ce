"""Helper to find the address of the client issuing a request."""

from collections.abc import Mapping

# Keys of a WSGI/CGI environment checked in order
CLIENT_IP_KEYS = (
    "HTTP_CLIENT_IP",
    "HTTP_X_FORWARDED_FOR",
    "HTTP_X_FORWARDED",
    "HTTP_FORWARDED_FOR",
    "HTTP_FORWARDED",
    "REMOTE_ADDR",
)


def client_ip(environ: Mapping[str, str]) -> str:
    """Return the client address found in `environ` or "UNKNOWN"."""
    for key in CLIENT_IP_KEYS:
        if key in environ:
            return environ[key]
    return "UNKNOWN"
