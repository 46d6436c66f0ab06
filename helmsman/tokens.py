"""
Console line tokenizer.

Rules
- the line is trimmed, then split on whitespace.
- a run enclosed in matching quotes (" or ') belongs to one token, quotes stripped;
  text that directly follows a closing quote is concatenated ('"hi there"!' → 'hi there!').
- a quote only opens a run before any unquoted character of the token, so
  apostrophes inside words stay literal ("server's" → "server's").
- an empty pair of quotes yields an empty token.
- an unterminated quote consumes to the end of the line; tokenizing never fails.
- escapes: inside quotes, a backslash followed by the active quote or by another
  backslash yields that character; any other backslash is kept literally.
  outside quotes backslashes are always literal (operators type paths, not shell).
"""

QUOTES = frozenset("\"'")
ESCAPE = "\\"


def tokenize(line, /):
    """
    split a console line into tokens.

    examples
    - 'kick bob'                      → ['kick', 'bob']
    - 'announce "hello   world"'      → ['announce', 'hello   world']
    - "say 'it\\'s fine'"             → ['say', "it's fine"]
    - 'say "unterminated tail'        → ['say', 'unterminated tail']
    - '   '                           → []
    """
    if not isinstance(line, str):
        raise TypeError("tokenize() argument must be a string")

    line = line.strip()
    length = len(line)
    tokens = []
    buffer = []
    pending = False  # a token is open even if the buffer is empty ("")
    literal = False  # the token already holds unquoted characters
    index = 0

    while index < length:
        char = line[index]
        if char.isspace():
            if pending:
                tokens.append("".join(buffer))
                buffer.clear()
                pending = literal = False
            index += 1
            continue

        pending = True
        if char not in QUOTES or literal:
            buffer.append(char)
            literal = True
            index += 1
            continue

        # quoted run: read until the matching quote or the end of the line
        quote = char
        index += 1
        while index < length and line[index] != quote:
            if line[index] == ESCAPE and index + 1 < length and line[index + 1] in (quote, ESCAPE):
                index += 1
            buffer.append(line[index])
            index += 1
        index += 1  # skip the closing quote (past the end when unterminated)

    if pending:
        tokens.append("".join(buffer))

    return tokens


__all__ = (
    "tokenize",
)
