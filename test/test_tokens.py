# python
"""
Tokenizer behavioral tests.

Scope
- Whitespace splitting and trimming.
- Quoted runs (both quote characters), concatenation, empty quotes.
- Unterminated quotes and escapes inside quotes.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from helmsman import tokenize


class TestTokenize(TestCase):
    """Behavioral tests for tokenize()."""

    def testSplitsOnWhitespace(self):
        self.assertEqual(tokenize("kick  bob\tnow"), ["kick", "bob", "now"])

    def testTrimsLine(self):
        self.assertEqual(tokenize("   status   "), ["status"])

    def testBlankLineYieldsNoTokens(self):
        self.assertEqual(tokenize(""), [])
        self.assertEqual(tokenize("  \t "), [])

    def testDoubleQuotesKeepInteriorSpaces(self):
        self.assertEqual(tokenize('announce "hello   world"'), ["announce", "hello   world"])

    def testSingleQuotes(self):
        self.assertEqual(tokenize("announce 'hi there'"), ["announce", "hi there"])

    def testOtherQuoteIsLiteralInsideQuotes(self):
        self.assertEqual(tokenize('say "it\'s fine"'), ["say", "it's fine"])

    def testTextAfterClosingQuoteConcatenates(self):
        self.assertEqual(tokenize('say "fix run"post'), ["say", "fix runpost"])

    def testAdjacentQuotedRunsConcatenate(self):
        self.assertEqual(tokenize('say "one "\'two\''), ["say", "one two"])

    def testMidWordQuotesAreLiteral(self):
        self.assertEqual(tokenize('say pre"fix run"post'), ["say", 'pre"fix', 'run"post'])

    def testApostropheInsideWord(self):
        self.assertEqual(
            tokenize("announce server's restarting, don't log off"),
            ["announce", "server's", "restarting,", "don't", "log", "off"],
        )

    def testEmptyQuotesYieldEmptyToken(self):
        self.assertEqual(tokenize('say "" end'), ["say", "", "end"])

    def testUnterminatedQuoteRunsToEndOfLine(self):
        self.assertEqual(tokenize('say "unterminated  tail'), ["say", "unterminated  tail"])

    def testEscapedQuoteInsideQuotes(self):
        self.assertEqual(tokenize(r'say "a \"quoted\" word"'), ["say", 'a "quoted" word'])

    def testEscapedBackslashInsideQuotes(self):
        self.assertEqual(tokenize(r'say "a\\b"'), ["say", "a\\b"])

    def testOtherBackslashesAreLiteral(self):
        self.assertEqual(tokenize(r'load C:\maps\arena "x\ny"'), ["load", r"C:\maps\arena", r"x\ny"])

    def testNonStringRejected(self):
        with self.assertRaises(TypeError):
            tokenize(b"kick bob")  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
