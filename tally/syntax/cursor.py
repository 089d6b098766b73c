"""Primitive parsers that work directly on slices of source text. There is no tokenizer: every parser takes the text
that is left and returns a tuple of (remaining text, extracted value), or raises a ParseError.

A failed parser never consumes anything; the caller simply keeps using the slice it had before the attempt.
"""

from tally.lang.error import ParseError


LINE_BREAKS = "\n\r\v\f\x1c\x1d\x1e\x85\u2028\u2029"  # same boundaries as str.splitlines


def take_while(accept, s):
    """Splits s at the first character that accept rejects. Never fails."""
    end = 0
    while end < len(s) and accept(s[end]):
        end += 1
    return s[end:], s[:end]


def take_while1(accept, s, error_msg):
    """Like take_while, but at least one character must be accepted."""
    remaining, extracted = take_while(accept, s)
    if not extracted:
        raise ParseError(error_msg)
    return remaining, extracted


def tag(literal, s):
    """Strips literal off the front of s, returning the remainder."""
    if s.startswith(literal):
        return s[len(literal):]
    raise ParseError("expected {}", literal)


def extract_whitespace(s):
    return take_while(lambda char: char.isspace(), s)


def extract_whitespace1(s):
    return take_while1(lambda char: char.isspace(), s, "expected whitespace")


def extract_spaces(s):
    """Whitespace within a single line: used between call arguments, so that a newline ends the call."""
    return take_while(lambda char: char.isspace() and char not in LINE_BREAKS, s)


def extract_digits(s):
    return take_while1(lambda char: char in "0123456789", s, "expected digits")


def extract_number(s):
    """Optional leading '-' followed by one or more decimal digits. Returns the literal as a str."""
    sign = ""
    if s.startswith("-"):
        sign, s = "-", s[1:]
    remaining, digits = extract_digits(s)
    return remaining, sign + digits


def extract_ident(s):
    """An identifier is an ASCII letter followed by any number of ASCII letters and digits."""
    if not s or not (s[0].isascii() and s[0].isalpha()):
        raise ParseError("expected identifier")
    return take_while(lambda char: char.isascii() and char.isalnum(), s)


def extract_operator(s, symbols):
    """Extracts the first of symbols that s starts with."""
    for symbol in symbols:
        if s.startswith(symbol):
            return s[len(symbol):], symbol
    raise ParseError("expected operator")


def sequence(parser, separator, s):
    """Applies parser, then separator, over and over, collecting what parser returns. Stops without failing at the
    first ParseError from either of them, and returns the items collected so far along with the text left just
    before the failed attempt. Zero items is a success.
    """
    items = []
    while True:
        try:
            s, item = parser(s)
        except ParseError:
            return s, items
        items.append(item)

        try:
            s, __ = separator(s)
        except ParseError:
            return s, items
