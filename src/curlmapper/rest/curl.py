from __future__ import annotations

import base64
import json
import shlex
from typing import Any, Dict, List, Optional
from urllib.parse import parse_qsl, urlencode

from ..core.models import ApiConfig
from ..core.schema import clean_internal_keys
from .exceptions import CurlParseError

DATA_FLAGS = {"-d", "--data", "--data-raw", "--data-binary", "--data-ascii", "--data-urlencode"}

# Flags whose argument is irrelevant to the request config but must be skipped.
VALUE_FLAGS = {
    "-o", "--output", "-m", "--max-time", "--connect-timeout", "-x", "--proxy",
    "--cacert", "--cert", "--key", "-w", "--write-out", "-F", "--form",
    "--retry", "--limit-rate", "-T", "--upload-file", "-c", "--cookie-jar",
}

HEADER_FLAGS = {"-A": "User-Agent", "--user-agent": "User-Agent", "-e": "Referer", "--referer": "Referer", "-b": "Cookie", "--cookie": "Cookie"}


def _tokenize(command: str) -> List[str]:
    text = command.replace("\\\r\n", " ").replace("\\\n", " ")
    try:
        tokens = shlex.split(text)
    except ValueError as e:
        raise CurlParseError(f"Could not tokenize cURL command: {e}") from e

    if tokens and tokens[0].lower() == "curl":
        tokens = tokens[1:]
    return tokens


def _next_value(it, flag: str) -> str:
    try:
        return next(it)
    except StopIteration:
        raise CurlParseError(f"Flag '{flag}' expects a value.") from None


def _decode_body(raw: str) -> Dict[str, Any]:
    if not raw:
        return {}

    try:
        parsed = json.loads(raw)
    except ValueError:
        pairs = parse_qsl(raw, keep_blank_values=True)
        return dict(pairs) if pairs else {"body": raw}

    return parsed if isinstance(parsed, dict) else {"body": parsed}


def parse_curl(command: str) -> ApiConfig:
    """
    Turn a cURL command into an :class:`ApiConfig` seed.

    Example:
        >>> cfg = parse_curl("curl https://api.example.com/items -d sku=A1 -d qty=2")
        >>> cfg.method, cfg.body_template
        ('POST', {'sku': 'A1', 'qty': '2'})
    """
    if not command or not command.strip():
        raise CurlParseError("Empty cURL command.")

    tokens = _tokenize(command)
    method: Optional[str] = None
    url: Optional[str] = None
    headers: Dict[str, str] = {}
    data: List[str] = []
    force_get = False

    it = iter(tokens)
    for tok in it:
        if tok in ("-X", "--request"):
            method = _next_value(it, tok)
        elif tok.startswith("-X") and len(tok) > 2:
            method = tok[2:]
        elif tok in ("-H", "--header"):
            name, sep, val = _next_value(it, tok).partition(":")
            if sep and name.strip():
                headers[name.strip()] = val.strip()
        elif tok in DATA_FLAGS:
            data.append(_next_value(it, tok))
        elif tok == "--json":
            data.append(_next_value(it, tok))
            headers.setdefault("Content-Type", "application/json")
            headers.setdefault("Accept", "application/json")
        elif tok in ("-u", "--user"):
            token = base64.b64encode(_next_value(it, tok).encode("utf-8")).decode("ascii")
            headers["Authorization"] = f"Basic {token}"
        elif tok in HEADER_FLAGS:
            headers[HEADER_FLAGS[tok]] = _next_value(it, tok)
        elif tok == "--url":
            url = _next_value(it, tok)
        elif tok in ("-G", "--get"):
            force_get = True
        elif tok in VALUE_FLAGS:
            _next_value(it, tok)
        elif tok.startswith("-"):
            continue
        elif url is None:
            url = tok

    if not url:
        raise CurlParseError("No URL found in cURL command.")

    raw_body = "&".join(data)
    body: Dict[str, Any] = {}
    if force_get:
        if raw_body:
            url = f"{url}{'&' if '?' in url else '?'}{urlencode(parse_qsl(raw_body, keep_blank_values=True))}"
        method = method or "GET"
    else:
        body = _decode_body(raw_body)
        method = method or ("POST" if raw_body else "GET")

    return ApiConfig(
        method=method,
        url=url,
        headers=clean_internal_keys(headers),
        body_template=clean_internal_keys(body),
    )
