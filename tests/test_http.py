import json
import socket
import ssl
import threading
from http.server import BaseHTTPRequestHandler, HTTPServer
from io import BytesIO
from pathlib import Path
from urllib.error import HTTPError, URLError

import pytest

import groupstool.core.http as http
from groupstool.core.errors import CredentialError, NetworkError, ResponseError

URL = "https://groups.example.edu/group_sws/v3/group/u_admins/member"


class FakeResponse:
    def __init__(self, body=b"", status=200):
        self._body = body
        self.status = status
        self.closed = False

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True


@pytest.fixture
def requests(monkeypatch):
    """Capture requests instead of opening connections."""
    sent = []
    monkeypatch.setattr(http, "_ssl_context", lambda credential, ca_file=None: object())

    def install(outcome):
        def fake_open(req, context, timeout):
            sent.append((req.get_method(), req.full_url, timeout, dict(req.header_items())))
            if isinstance(outcome, BaseException):
                raise outcome
            return outcome

        monkeypatch.setattr(http, "_open", fake_open)
        return sent

    return install


def test_fetch_body_returns_raw_bytes(requests):
    resp = FakeResponse(b'{"data":[]}')
    sent = requests(resp)
    assert http.fetch_body(URL, "cert.pem", timeout=12.5) == b'{"data":[]}'
    method, url, timeout, headers = sent[0]
    assert (method, url, timeout) == ("GET", URL, 12.5)
    assert headers["Accept"] == "application/json"
    assert headers["User-agent"].startswith("groupstool/")
    assert resp.closed


def test_fetch_body_http_error_uses_json_message(requests):
    body = b'{"error":"Not authorized to view group membership"}'
    requests(HTTPError(URL, 403, "Forbidden", None, BytesIO(body)))
    with pytest.raises(ResponseError) as exc:
        http.fetch_body(URL, "cert.pem", timeout=30)
    assert exc.value.status == 403
    assert "Not authorized" in str(exc.value)


def test_fetch_body_http_error_plain_body(requests):
    requests(HTTPError(URL, 500, "Server Error", None, BytesIO(b"upstream down")))
    with pytest.raises(ResponseError) as exc:
        http.fetch_body(URL, "cert.pem", timeout=30)
    assert str(exc.value) == "[HTTP 500] upstream down"


def test_fetch_body_redirect_is_not_followed(requests):
    requests(HTTPError(URL, 302, "Found", None, BytesIO(b"")))
    with pytest.raises(ResponseError) as exc:
        http.fetch_body(URL, "cert.pem", timeout=30)
    assert exc.value.status == 302


def test_fetch_status_success(requests):
    sent = requests(FakeResponse(status=201))
    assert http.fetch_status("put", URL + "/jdoe", "cert.pem", timeout=30) == 201
    assert sent[0][0] == "PUT"


@pytest.mark.parametrize("code", [301, 403, 404, 500])
def test_fetch_status_returns_error_codes(requests, code):
    requests(HTTPError(URL, code, "nope", None, BytesIO(b"{}")))
    assert http.fetch_status("DELETE", URL + "/jdoe", "cert.pem", timeout=30) == code


def test_connection_refused_is_network_error(requests):
    requests(URLError(ConnectionRefusedError(111, "Connection refused")))
    with pytest.raises(NetworkError, match="Connection refused"):
        http.fetch_status("PUT", URL, "cert.pem", timeout=30)


def test_timeout_is_network_error(requests):
    requests(URLError(socket.timeout("timed out")))
    with pytest.raises(NetworkError, match="timed out"):
        http.fetch_body(URL, "cert.pem", timeout=0.1)


def test_read_timeout_is_network_error(requests):
    requests(TimeoutError("The read operation timed out"))
    with pytest.raises(NetworkError, match="timed out"):
        http.fetch_body(URL, "cert.pem", timeout=0.1)


def test_handshake_rejection_is_credential_error(requests):
    requests(URLError(ssl.SSLError(1, "[SSL: TLSV13_ALERT_CERTIFICATE_REQUIRED] alert")))
    with pytest.raises(CredentialError, match="handshake"):
        http.fetch_body(URL, "cert.pem", timeout=30)


def test_server_verification_failure_is_network_error(requests):
    requests(URLError(ssl.SSLCertVerificationError(1, "certificate verify failed")))
    with pytest.raises(NetworkError, match="verification failed"):
        http.fetch_body(URL, "cert.pem", timeout=30)


def test_missing_certificate(tmp_path):
    missing = tmp_path / "missing.pem"
    with pytest.raises(CredentialError, match="Cannot read certificate"):
        http.fetch_body(URL, str(missing), timeout=30)


def test_garbage_certificate(tmp_path):
    bogus = tmp_path / "bogus.pem"
    bogus.write_text("this is not a certificate\n")
    with pytest.raises(CredentialError, match="Invalid certificate"):
        http.fetch_status("PUT", URL, str(bogus), timeout=30)


# --- against a local server requiring client certificates -----------------

CERTS = Path(__file__).resolve().parent / "certs"


class MembershipHandler(BaseHTTPRequestHandler):
    def _reply(self, status, body=b"", location=None):
        self.send_response(status)
        if location:
            self.send_header("Location", location)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_GET(self):
        if self.path.startswith("/moved"):
            self._reply(302, location="/group/u_admins/member")
            return
        # Echo the CN of the presented client certificate as the only member.
        subject = dict(item[0] for item in self.connection.getpeercert()["subject"])
        body = json.dumps({"data": [{"id": subject["commonName"]}]}).encode()
        self._reply(200, body)

    def do_PUT(self):
        self._reply(201)

    def do_DELETE(self):
        if self.path.startswith("/moved"):
            self._reply(302, location="/group/u_admins/member/jdoe")
        else:
            self._reply(200)

    def log_message(self, format, *args):
        pass


@pytest.fixture(scope="module")
def tls_server():
    context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH, cafile=str(CERTS / "ca.pem"))
    context.load_cert_chain(str(CERTS / "server.pem"))
    context.verify_mode = ssl.CERT_REQUIRED
    server = HTTPServer(("127.0.0.1", 0), MembershipHandler)
    server.socket = context.wrap_socket(server.socket, server_side=True)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"https://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


CLIENT = str(CERTS / "client.pem")
CA = str(CERTS / "ca.pem")


def test_client_certificate_is_presented(tls_server):
    raw = http.fetch_body(f"{tls_server}/group/u_admins/member", CLIENT, timeout=5, ca_file=CA)
    assert json.loads(raw) == {"data": [{"id": "groupstool-client"}]}


def test_put_status(tls_server):
    status = http.fetch_status("PUT", f"{tls_server}/group/u_admins/member/jdoe", CLIENT, timeout=5, ca_file=CA)
    assert status == 201


def test_delete_redirect_not_followed(tls_server):
    status = http.fetch_status("DELETE", f"{tls_server}/moved/jdoe", CLIENT, timeout=5, ca_file=CA)
    assert status == 302


def test_get_redirect_not_followed(tls_server):
    with pytest.raises(ResponseError) as exc:
        http.fetch_body(f"{tls_server}/moved", CLIENT, timeout=5, ca_file=CA)
    assert exc.value.status == 302


def test_foreign_client_certificate_rejected(tls_server):
    foreign = str(CERTS / "foreign.pem")
    with pytest.raises(CredentialError, match="handshake"):
        http.fetch_body(f"{tls_server}/group/u_admins/member", foreign, timeout=5, ca_file=CA)


def test_untrusted_server_is_network_error(tls_server):
    with pytest.raises(NetworkError, match="verification failed"):
        http.fetch_status("PUT", f"{tls_server}/group/u_admins/member/jdoe", CLIENT, timeout=5)
