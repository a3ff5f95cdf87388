"""Classification of OAuth return parameters.

Identity providers send the user back with one of two parameter shapes:

- OAuth 2.0: ``platform`` + ``code``
- OAuth 1.0a: ``platform`` + ``oauth_token`` + ``oauth_verifier``

Anything else is treated as an ordinary page load with no pending handshake.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

CALLBACK_PARAM_NAMES = frozenset({"platform", "code", "oauth_token", "oauth_verifier", "state"})


@dataclass(frozen=True)
class OAuth2Callback:
    platform: str
    code: str


@dataclass(frozen=True)
class OAuth1Callback:
    platform: str
    token: str
    verifier: str


@dataclass(frozen=True)
class NoCallback:
    pass


Callback = OAuth2Callback | OAuth1Callback | NoCallback


def _first(params: Mapping[str, str | Sequence[str]], key: str) -> str | None:
    value = params.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        value = value[0] if value else ""
    # Empty values count as absent
    return value or None


def classify_callback(params: Mapping[str, str | Sequence[str]]) -> Callback:
    """Classify raw query parameters into a callback shape.

    Accepts both flat mappings and ``parse_qs``-style lists. When a callback
    carries both a ``code`` and a token/verifier pair, the OAuth 2.0 shape wins.
    """
    platform = _first(params, "platform")
    if not platform:
        return NoCallback()

    code = _first(params, "code")
    if code:
        return OAuth2Callback(platform=platform, code=code)

    token = _first(params, "oauth_token")
    verifier = _first(params, "oauth_verifier")
    if token and verifier:
        return OAuth1Callback(platform=platform, token=token, verifier=verifier)

    return NoCallback()


class CallbackLocation:
    """The current location the identity provider returned the user to.

    Stands in for the browser address bar: callback parameters are read from
    it and stripped from it once consumed so a reload cannot replay them.
    """

    def __init__(self, url: str) -> None:
        self._url = url

    @property
    def url(self) -> str:
        return self._url

    def params(self) -> dict[str, str]:
        return dict(parse_qsl(urlsplit(self._url).query, keep_blank_values=True))

    def clear_callback_params(self) -> None:
        parts = urlsplit(self._url)
        kept = [
            (key, value)
            for key, value in parse_qsl(parts.query, keep_blank_values=True)
            if key not in CALLBACK_PARAM_NAMES
        ]
        self._url = urlunsplit(parts._replace(query=urlencode(kept)))
