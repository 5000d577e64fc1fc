"""Text codecs for the on-disk representation of synced content.

Provides:
  - Codec: a parse/stringify pair describing one file format.
  - JSON_CODEC: the default compact JSON codec.
  - FormatError: raised when stored text cannot be parsed.
  - decode(): run a codec's parser and normalize its failures to FormatError.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

Parser = Callable[[str], Any]
Stringifier = Callable[[Any], str]


class FormatError(ValueError):
    """Raised when a file's text cannot be parsed by the configured codec."""


@dataclass(frozen=True, slots=True)
class Codec:
    """A parse/stringify pair, e.g. JSON, YAML or any custom format.

    ``parse`` turns the full file text into content; ``stringify`` turns the
    full content back into text. Both see the whole value on every call.
    """

    parse: Parser
    stringify: Stringifier


def _json_stringify(data: Any) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


JSON_CODEC = Codec(parse=json.loads, stringify=_json_stringify)


def decode(codec: Codec, text: str) -> Any:
    """Parse *text* with *codec*, raising FormatError on any parser failure."""
    try:
        return codec.parse(text)
    except FormatError:
        raise
    except Exception as e:
        raise FormatError(f"Cannot parse content: {e}") from e
