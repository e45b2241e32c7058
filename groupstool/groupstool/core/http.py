"""HTTPS helpers authenticated with a client certificate.

The implementation uses :mod:`urllib` and :mod:`ssl` from the standard
library.  Each call builds its own SSL context from the certificate+key
bundle, performs exactly one request and closes the connection before
returning.  Redirects are never followed: a 3xx answer is handled like any
other non-2xx status.
"""

from __future__ import annotations

import http.client
import json
import ssl
from urllib.error import HTTPError, URLError
from urllib.request import HTTPRedirectHandler, HTTPSHandler, Request, build_opener

from .. import __version__
from .errors import CredentialError, GroupsToolError, NetworkError, ResponseError
from .log import get_logger

logger = get_logger(__name__)

HEADERS = {
    "Accept": "application/json",
    "User-Agent": f"groupstool/{__version__}",
}


class _NoRedirect(HTTPRedirectHandler):
    def redirect_request(self, req, fp, code, msg, hdrs, newurl):
        return None


def _ssl_context(credential: str, ca_file: str | None = None) -> ssl.SSLContext:
    """Return a client context presenting ``credential`` (cert and key in one PEM)."""
    try:
        context = ssl.create_default_context(cafile=ca_file)
    except (OSError, ssl.SSLError) as e:
        raise GroupsToolError(f"Cannot load CA file {ca_file}: {e}") from e
    try:
        context.load_cert_chain(credential)
    except ssl.SSLError as e:
        raise CredentialError(f"Invalid certificate/key bundle {credential}: {e}") from e
    except OSError as e:
        raise CredentialError(f"Cannot read certificate {credential}: {e.strerror or e}") from e
    return context


def _open(req: Request, context: ssl.SSLContext, timeout: float):
    opener = build_opener(HTTPSHandler(context=context), _NoRedirect)
    return opener.open(req, timeout=timeout)


def _transport_error(exc: BaseException) -> GroupsToolError:
    """Map a low level failure to :class:`CredentialError` or :class:`NetworkError`."""
    reason = exc.reason if isinstance(exc, URLError) else exc
    if isinstance(reason, ssl.SSLCertVerificationError):
        return NetworkError(f"Server certificate verification failed: {reason}")
    if isinstance(reason, ssl.SSLError):
        # Handshake alerts such as "certificate required" mean the server refused us.
        return CredentialError(f"TLS handshake rejected the client certificate: {reason}")
    if isinstance(reason, TimeoutError):
        return NetworkError("Request timed out")
    return NetworkError(f"Network error: {reason}")


def _error_message(e: HTTPError) -> str:
    if e.fp is None:
        return str(e.reason or "")
    try:
        body = e.read().decode("utf-8", errors="ignore")
    finally:
        e.close()
    message = body.strip()
    try:
        data = json.loads(body)
    except ValueError:
        return message
    if isinstance(data, dict):
        for key in ("error", "message"):
            if data.get(key):
                return str(data[key])
    return message


def _close_quietly(e: HTTPError) -> None:
    if e.fp is not None:
        e.close()


def fetch_body(
    url: str,
    credential: str,
    *,
    timeout: float,
    ca_file: str | None = None,
) -> bytes:
    """GET ``url`` and return the raw body of a 2xx response.

    Any other status raises :class:`ResponseError` with the service's error
    text.  Transport and TLS problems raise :class:`NetworkError` or
    :class:`CredentialError`.
    """

    context = _ssl_context(credential, ca_file)
    req = Request(url=url, method="GET", headers=HEADERS)
    logger.debug("request", method="GET", url=url, timeout=timeout)
    try:
        with _open(req, context, timeout) as resp:
            raw = resp.read()
            logger.debug("response", status=resp.status, length=len(raw))
            return raw
    except HTTPError as e:
        logger.debug("response", status=e.code)
        raise ResponseError(e.code, _error_message(e)) from e
    except (URLError, OSError, http.client.HTTPException) as e:
        raise _transport_error(e) from e


def fetch_status(
    method: str,
    url: str,
    credential: str,
    *,
    timeout: float,
    ca_file: str | None = None,
) -> int:
    """Send a bodiless ``method`` request and return the HTTP status code.

    Non-2xx statuses are returned rather than raised; only failures to
    complete the exchange are errors.
    """

    context = _ssl_context(credential, ca_file)
    req = Request(url=url, method=method.upper(), headers=HEADERS)
    logger.debug("request", method=req.get_method(), url=url, timeout=timeout)
    try:
        with _open(req, context, timeout) as resp:
            resp.read()
            status = resp.status
    except HTTPError as e:
        _close_quietly(e)
        status = e.code
    except (URLError, OSError, http.client.HTTPException) as e:
        raise _transport_error(e) from e
    logger.debug("response", status=status)
    return status
