import string as _string
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..Char import any_of, except_
from ..Combinators import one_or_more, optional, zero_or_more
from ..Parser import Parser
from ..Rules import AMPERSAND, COLON, DIGIT, EQUALS_SIGN, HASH, QUESTION_MARK, SLASH


@dataclass(frozen=True)
class URL:
    protocol: str = "http"
    domain: str = ""
    port: int = 80
    path: str = ""
    anchor: str = ""
    params: Tuple[Tuple[str, str], ...] = ()  # (name, value) pairs in order, names unique

    def __str__(self) -> str:
        port = "" if self.port == 80 else f":{self.port}"
        anchor = f"#{self.anchor}" if self.anchor else ""
        params = ""
        if self.params:
            params = "?" + "&".join(f"{key}={value}" for key, value in self.params)
        return f"{self.protocol}://{self.domain}{port}{self.path}{anchor}{params}"


def _joined(chars: Tuple[str, ...]) -> str:
    return "".join(chars)


_param_name: Parser[str] = zero_or_more(except_("&=")).map(_joined).with_name("parameter name")
_param_value: Parser[str] = zero_or_more(except_("&")).map(_joined).with_name("parameter value")

_pair_with_value = _param_name.before(EQUALS_SIGN).and_(_param_value)
_pair_without_equals_sign = _param_name.map(lambda name: (name, ""))
_pair: Parser[Tuple[str, str]] = _pair_with_value | _pair_without_equals_sign


def _collect_pairs(parts: Tuple[Tuple[str, str], Tuple[Optional[Tuple[str, str]], ...]]) -> List[Tuple[str, str]]:
    first, rest = parts
    pairs = [first, *(pair for pair in rest if pair is not None)]
    return [pair for pair in pairs if pair[0]]


_pairs = _pair.and_(zero_or_more(AMPERSAND.then(optional(_pair)))).map(_collect_pairs)
_params: Parser[Tuple[Tuple[str, str], ...]] = (
    QUESTION_MARK.then(optional(_pairs))
    .map(lambda pairs: tuple(dict(pairs or ()).items()))
    .with_name("parameters")
)

_anchor: Parser[str] = HASH.then(zero_or_more(except_("?"))).map(_joined).with_name("anchor")
_path: Parser[str] = zero_or_more(except_("#?")).map(_joined).with_name("path")
_domain: Parser[str] = (
    one_or_more(any_of(_string.digits + _string.ascii_letters + ".-"))
    .map(_joined)
    .with_name("domain")
)
_port: Parser[int] = COLON.then(one_or_more(DIGIT)).map(lambda digits: int(_joined(digits))).with_name("port")
_protocol: Parser[str] = (
    one_or_more(any_of(_string.ascii_letters)).before(COLON).before(SLASH).before(SLASH)
    .map(_joined)
    .with_name("protocol")
)


def _to_url(parts) -> URL:
    (((((protocol, domain), port), path), anchor), params) = parts
    return URL(protocol or "http", domain, 80 if port is None else port, path, anchor or "", params or ())


_url: Parser[URL] = (
    optional(_protocol).and_(_domain).and_(optional(_port)).and_(_path).and_(optional(_anchor)).and_(optional(_params))
    .map(_to_url)
    .with_name("URL")
)


def parse(text: str) -> URL:
    return _url.parse(text)


def parse_file(path) -> URL:
    return _url.parse_file(path)
