"""URL helpers shared by the provider adapters."""

from __future__ import annotations

from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


def strip_query(url: str) -> str:
    """Drop the query string and fragment."""
    parts = urlsplit(url)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))


def query_param(url: str, name: str) -> str | None:
    """Value of query parameter *name*, or None."""
    for k, v in parse_qsl(urlsplit(url).query, keep_blank_values=False):
        if k == name:
            return v
    return None


def with_query_params(url: str, params: dict[str, str], *, replace: bool = False) -> str:
    """
    Set *params* on *url*'s query string.

    With ``replace=True`` any existing query is discarded first.  The
    fragment is preserved.
    """
    parts = urlsplit(url)
    existing = [] if replace else [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k not in params]
    query = urlencode(existing + list(params.items()))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def fragment_params(url: str) -> dict[str, str]:
    """
    Parse a fragment that carries its own query string.

    ``https://x/club/1/widget#?course_id=5&nb_holes=18`` →
    ``{"course_id": "5", "nb_holes": "18"}``.
    """
    fragment = urlsplit(url).fragment
    if fragment.startswith("?"):
        fragment = fragment[1:]
    return dict(parse_qsl(fragment, keep_blank_values=False))


def with_fragment_params(url: str, params: dict[str, str]) -> str:
    """Replace the fragment with ``?`` + *params* encoded as a query string."""
    parts = urlsplit(url)
    fragment = "?" + urlencode(params, safe=",")
    return urlunsplit((parts.scheme, parts.netloc, parts.path, parts.query, fragment))
