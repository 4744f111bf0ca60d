"""HTTP plumbing for talking to a Jira instance: requests, responses and auth."""

from __future__ import annotations

import base64
import dataclasses
import hashlib
import json
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import (
    quote_plus,
    parse_qs,
    unquote,
    urlencode,
    urljoin,
    urlsplit,
    urlunsplit,
)

import jwt
import requests

__all__ = [
    "JiraError",
    "Response",
    "Client",
    "BasicAuthTransport",
    "CookieAuthTransport",
    "JWTAuthTransport",
    "check_response",
    "add_options",
]

_AUTH_TIMEOUT = 60
_JWT_LIFETIME = 59


class JiraError(Exception):
    """An error reported by the Jira API or raised while talking to it."""

    def __init__(self, message: str, response: Response | None = None):
        super().__init__(message)
        self.message = message
        self.response = response

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


@dataclass
class Response:
    """A Jira API response with the decoded value and paging information."""

    http: requests.Response
    value: Any = None
    start_at: int = 0
    max_results: int = 0
    total: int = 0

    @property
    def status_code(self) -> int:
        return self.http.status_code

    @property
    def headers(self) -> Mapping[str, str]:
        return self.http.headers

    @property
    def content(self) -> bytes:
        return self.http.content

    @property
    def text(self) -> str:
        return self.http.text

    def json(self) -> Any:
        return self.http.json()

    def populate_page_values(self, payload: Any) -> None:
        """Take paging values from a decoded search-like payload."""
        if isinstance(payload, Mapping) and "startAt" in payload and "total" in payload:
            self.start_at = int(payload.get("startAt") or 0)
            self.max_results = int(payload.get("maxResults") or 0)
            self.total = int(payload.get("total") or 0)


def check_response(response: requests.Response) -> None:
    """Raise JiraError when the status code is outside the 2xx range."""
    if 200 <= response.status_code <= 299:
        return
    raise JiraError(
        "request failed. Please analyze the request body for more details. "
        f"Status code: {response.status_code}"
    )


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _query_mapping(options: Any) -> Mapping[str, Any]:
    if isinstance(options, Mapping):
        return options
    to_query = getattr(options, "to_query", None)
    if callable(to_query):
        return to_query()
    if dataclasses.is_dataclass(options) and not isinstance(options, type):
        return dataclasses.asdict(options)
    raise TypeError(f"cannot encode {type(options).__name__} as query options")


def _encode_query(options: Any) -> str:
    pairs: list[tuple[str, str]] = []
    for key, value in sorted(_query_mapping(options).items()):
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _query_value(item)) for item in value)
        else:
            pairs.append((key, _query_value(value)))
    return urlencode(pairs)


def add_options(url: str, options: Any) -> str:
    """Replace the query of ``url`` with the encoded ``options``."""
    if options is None:
        return url
    parts = urlsplit(url)
    return urlunsplit(parts._replace(query=_encode_query(options)))


def _json_default(obj: Any) -> Any:
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _encode_json(body: Any) -> str:
    if not isinstance(body, (Mapping, list, tuple, str, int, float, bool)):
        body = _json_default(body)
    return json.dumps(body, default=_json_default)


class Client:
    """Builds and sends requests against a Jira base URL."""

    def __init__(self, base_url: str, http: requests.Session | None = None, auth: Any = None):
        if not base_url.endswith("/"):
            base_url += "/"
        parts = urlsplit(base_url)
        if parts.scheme and not parts.netloc:
            raise ValueError(f"invalid base URL: {base_url!r}")
        self._base_url = base_url
        self._http = http if http is not None else requests.Session()
        self._auth = auth

    @property
    def base_url(self) -> str:
        """The base URL, always with a trailing slash."""
        return self._base_url

    def _resolve(self, url: str) -> str:
        parts = urlsplit(url)
        relative = urlunsplit(parts._replace(path=parts.path.lstrip("/")))
        return urljoin(self._base_url, relative)

    def _build(self, method: str, url: str, data: Any, headers: dict[str, str]) -> requests.Request:
        request = requests.Request(method, self._resolve(url), headers=headers, data=data)
        auth = self._auth
        if isinstance(auth, tuple) and not auth[0]:
            auth = None
        if auth is not None:
            request.auth = auth
        return request

    def new_request(self, method: str, url: str, body: Any = None) -> requests.Request:
        """Create a request whose body, if given, is JSON encoded."""
        data = None if body is None else _encode_json(body)
        return self._build(method, url, data, {"Content-Type": "application/json"})

    def new_raw_request(self, method: str, url: str, data: Any = None) -> requests.Request:
        """Create a request that sends ``data`` unchanged as its body."""
        return self._build(method, url, data, {"Content-Type": "application/json"})

    def new_multipart_request(self, method: str, url: str, data: Any = None) -> requests.Request:
        """Create a request carrying an already encoded multipart body."""
        return self._build(method, url, data, {"X-Atlassian-Token": "nocheck"})

    def do(
        self,
        request: requests.Request | requests.PreparedRequest,
        decode: Callable[[Any], Any] | None = None,
    ) -> Response:
        """Send ``request``; when ``decode`` is given, apply it to the JSON body."""
        if isinstance(request, requests.Request):
            prepared = self._http.prepare_request(request)
        else:
            prepared = request
        http_response = self._http.send(prepared)
        response = Response(http_response)
        try:
            check_response(http_response)
        except JiraError as err:
            err.response = response
            raise
        if decode is None:
            return response
        try:
            payload = http_response.json()
        except ValueError as err:
            raise JiraError(f"could not decode response body: {err}", response) from err
        response.populate_page_values(payload)
        response.value = decode(payload)
        return response

    def _send(
        self,
        method: str,
        url: str,
        body: Any = None,
        decode: Callable[[Any], Any] | None = None,
        options: Any = None,
    ) -> Response:
        """Build a JSON request, add query options and send it in one step."""
        request = self.new_request(method, url, body)
        if options is not None:
            request.url = add_options(request.url, options)
        return self.do(request, decode)


def _basic_header(username: str, password: str) -> str:
    pair = f"{username}:{password}".encode("utf-8")
    return "Basic " + base64.b64encode(pair).decode("ascii")


class _SessionClient:
    """Gives a transport a ``client()`` that returns a session using it as auth."""

    def client(self) -> requests.Session:
        session = requests.Session()
        session.auth = self
        return session


@dataclass
class BasicAuthTransport(_SessionClient, requests.auth.AuthBase):
    """Authenticates every request with HTTP Basic authentication."""

    username: str
    password: str

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        request.headers["Authorization"] = _basic_header(self.username, self.password)
        return request

    def client(self) -> requests.Session:
        return super().client()


@dataclass
class CookieAuthTransport(_SessionClient, requests.auth.AuthBase):
    """Authenticates every request with a Jira session cookie."""

    username: str
    password: str
    auth_url: str
    session_object: list[Any] | None = None
    http: requests.Session | None = field(default=None, repr=False)

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        if self.session_object is None:
            try:
                self._set_session_object()
            except (requests.RequestException, ValueError) as err:
                raise JiraError(f"cookieauth: no session object has been set: {err}") from err
        pairs = [f"{c.name}={c.value}" for c in self.session_object if c.value]
        if pairs:
            existing = request.headers.get("Cookie")
            cookies = "; ".join(pairs)
            request.headers["Cookie"] = f"{existing}; {cookies}" if existing else cookies
        return request

    def client(self) -> requests.Session:
        return super().client()

    def build_auth_request(self) -> requests.PreparedRequest:
        """Assemble the login request that yields the session cookie."""
        password = self.password
        body = json.dumps(dict(username=self.username, password=password))
        return requests.Request(
            "POST",
            self.auth_url,
            data=body,
            headers={"Content-Type": "application/json"},
        ).prepare()

    def _set_session_object(self) -> None:
        session = self.http if self.http is not None else requests.Session()
        response = session.send(self.build_auth_request(), timeout=_AUTH_TIMEOUT)
        self.session_object = list(response.cookies)


@dataclass
class JWTAuthTransport(_SessionClient, requests.auth.AuthBase):
    """Authenticates every request with a short-lived HS256 JWT."""

    secret: bytes | str
    issuer: str

    def __call__(self, request: requests.PreparedRequest) -> requests.PreparedRequest:
        now = int(time.time())
        claims = {
            "iss": self.issuer,
            "iat": now,
            "exp": now + _JWT_LIFETIME,
            "qsh": self.create_query_string_hash(request.method or "", request.url or ""),
        }
        try:
            signed = jwt.encode(claims, self.secret, algorithm="HS256")
        except (jwt.PyJWTError, TypeError, ValueError) as err:
            raise JiraError(f"jwtAuth: error signing JWT: {err}") from err
        request.headers["Authorization"] = f"JWT {signed}"
        return request

    def client(self) -> requests.Session:
        return super().client()

    def create_query_string_hash(self, method: str, url: str) -> str:
        canonical = self.canonicalize_request(method, url)
        return hashlib.sha256(canonical.encode("utf-8")).hexdigest()

    def canonicalize_request(self, method: str, url: str) -> str:
        parts = urlsplit(url)
        path = "/" + unquote(parts.path).strip("/").replace("&", "%26")
        entries = sorted(
            f"{quote_plus(key)}={quote_plus(''.join(values))}".replace("+", "%20")
            for key, values in parse_qs(parts.query, keep_blank_values=True).items()
            if key != "jwt"
        )
        return f"{method.upper()}&{path}&{'&'.join(entries)}"