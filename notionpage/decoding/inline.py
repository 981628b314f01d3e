"""
Rich-text run parsing for Notionpage.

Rich text is encoded as a list of runs:

    [["Hello "], ["world", [["b"], ["a", "https://example.com"]]], ["‣", [["u", "<user id>"]]]]

Each run is the text optionally followed by a list of attributes. Each
attribute is a one-letter code optionally followed by an argument.
"""

import logging
from typing import Any, List

from ..errors import InlineParseError
from ..models import InlineToken


# Attribute code -> InlineToken flag
FLAG_ATTRIBUTES = {
    "b": "bold",
    "i": "italic",
    "s": "strikethrough",
    "c": "code",
    "_": "underline",
}

# Attribute code -> InlineToken field set from the attribute argument
VALUE_ATTRIBUTES = {
    "a": "link",
    "u": "user_id",
    "p": "page_id",
    "h": "highlight",
    "e": "equation",
}


def _apply_attribute(token: InlineToken, attr: Any) -> None:
    if not isinstance(attr, list) or not attr or not isinstance(attr[0], str):
        raise InlineParseError("attribute is not a [code, ...] list", attr)

    code = attr[0]
    if code in FLAG_ATTRIBUTES:
        setattr(token, FLAG_ATTRIBUTES[code], True)
        return

    if code in VALUE_ATTRIBUTES or code in ("d", "m"):
        if len(attr) < 2:
            raise InlineParseError(f"attribute '{code}' is missing its argument", attr)
        arg = attr[1]
        if code == "d":
            if not isinstance(arg, dict):
                raise InlineParseError("date attribute argument is not an object", attr)
            token.date = arg
        elif code == "m":
            if not isinstance(arg, str):
                raise InlineParseError("comment attribute argument is not a string", attr)
            token.comment_ids.append(arg)
        else:
            if not isinstance(arg, str):
                raise InlineParseError(f"attribute '{code}' argument is not a string", attr)
            setattr(token, VALUE_ATTRIBUTES[code], arg)
        return

    logging.debug(f"Ignoring unknown inline attribute '{code}'")


def _parse_run(run: Any) -> InlineToken:
    if not isinstance(run, list) or not run:
        raise InlineParseError("run is not a non-empty list", run)

    text = run[0]
    if not isinstance(text, str):
        raise InlineParseError("run text is not a string", run)

    token = InlineToken(text=text)
    if len(run) < 2 or run[1] is None:
        return token

    attrs = run[1]
    if not isinstance(attrs, list):
        raise InlineParseError("run attributes are not a list", run)
    for attr in attrs:
        _apply_attribute(token, attr)
    return token


def parse_inline_blocks(value: Any) -> List[InlineToken]:
    """
    Parse rich-text runs into inline tokens.

    Args:
        value: The raw property value (a list of runs)

    Returns:
        Tokens in run order; empty list for None or an empty value

    Raises:
        InlineParseError: If the value does not have the run structure
    """
    if value is None:
        return []
    if not isinstance(value, list):
        raise InlineParseError("rich text is not a list of runs", value)
    return [_parse_run(run) for run in value]


def get_first_inline(tokens: List[InlineToken]) -> str:
    if not tokens:
        return ""
    return tokens[0].text


def get_first_inline_block(value: Any) -> str:
    """Parse rich text and reduce it to the text of its first run."""
    return get_first_inline(parse_inline_blocks(value))


def inline_to_plain_text(tokens: List[InlineToken]) -> str:
    return "".join(token.text for token in tokens)
