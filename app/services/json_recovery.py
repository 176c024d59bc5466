import json
from typing import Any, NamedTuple, Optional


class RecoveryResult(NamedTuple):
    found: bool
    value: Any = None

    @property
    def is_structured(self) -> bool:
        return self.found and isinstance(self.value, (dict, list))


NOT_FOUND = RecoveryResult(found=False)


def _reject_constant(name: str):
    # NaN and +/-Infinity are not JSON, even though json.loads accepts them.
    raise ValueError(f"Invalid JSON constant: {name}")


def _try_parse(candidate: str) -> RecoveryResult:
    try:
        value = json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError):
        return NOT_FOUND
    return RecoveryResult(found=True, value=value)


def _outermost_span(text: str, opening: str, closing: str) -> Optional[str]:
    first = text.find(opening)
    last = text.rfind(closing)
    if first != -1 and last != -1 and last > first:
        return text[first : last + 1]
    return None


def recover_json(text: str) -> RecoveryResult:
    """
    Salvage a single JSON value out of an LLM reply.

    Tries, in order: the whole string, the span between the first "{" and
    the last "}", then the span between the first "[" and the last "]".
    Returns NOT_FOUND instead of raising when nothing parses.

    Spans are outermost, not balanced: braces in surrounding prose widen the
    candidate and usually make it unparseable.
    """
    result = _try_parse(text)
    if result.found:
        return result

    for opening, closing in (("{", "}"), ("[", "]")):
        candidate = _outermost_span(text, opening, closing)
        if candidate is None:
            continue
        result = _try_parse(candidate)
        if result.found:
            return result

    return NOT_FOUND
