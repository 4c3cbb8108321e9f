# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Lexer for TypeScript declaration files."""

from __future__ import annotations

import ply.lex as lex


class DeclarationLexer:
    """Tokenizer for the subset of TypeScript found in declaration files.

    Comments are dropped.  Characters without a token of their own are
    returned as ``OTHER`` tokens so that arbitrary user-supplied import
    lines never stop the lexer.  The keywords that open declarations have
    token types of their own.  Token values are the exact source text,
    so ``lexpos + len(value)`` is the end offset of every token.
    """

    reserved = {
        "export": "EXPORT",
        "interface": "INTERFACE",
        "type": "TYPE",
        "declare": "DECLARE",
        "module": "MODULE",
        "import": "IMPORT",
        "extends": "EXTENDS",
    }

    tokens = (
        "IDENTIFIER",
        "STRING",
        "NUMBER",
        "ARROW",
        "ELLIPSIS",
        "LBRACE",
        "RBRACE",
        "LPAREN",
        "RPAREN",
        "LBRACKET",
        "RBRACKET",
        "LT",
        "GT",
        "COLON",
        "SEMI",
        "COMMA",
        "QUESTION",
        "EQUALS",
        "PIPE",
        "AMP",
        "DOT",
        "OTHER",
        *reserved.values(),
    )

    t_ARROW = r"=>"
    t_ELLIPSIS = r"\.\.\."
    t_LBRACE = r"\{"
    t_RBRACE = r"\}"
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"
    t_LT = r"<"
    t_GT = r">"
    t_COLON = r":"
    t_SEMI = r";"
    t_COMMA = r","
    t_QUESTION = r"\?"
    t_EQUALS = r"="
    t_PIPE = r"\|"
    t_AMP = r"&"
    t_DOT = r"\."

    t_ignore = " \t\r"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore [assignment]

    def t_BLOCK_COMMENT(self, t: lex.LexToken) -> None:
        r"/\*(.|\n)*?\*/"
        t.lexer.lineno += t.value.count("\n")

    def t_LINE_COMMENT(self, t: lex.LexToken) -> None:
        r"//[^\n]*"

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r"\"([^\\\"\n]|\\.)*\"|'([^\\'\n]|\\.)*'|`([^\\`]|\\.)*`"
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_NUMBER(self, t: lex.LexToken) -> lex.LexToken:
        r"\d+(\.\d+)?"
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[A-Za-z_$][A-Za-z0-9_$]*"
        t.type = self.reserved.get(t.value, "IDENTIFIER")
        return t

    def t_newline(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(self, t: lex.LexToken) -> lex.LexToken:
        t.type = "OTHER"
        t.value = t.value[0]
        t.lexer.skip(1)
        return t

    def build(self, **kwargs) -> None:  # type: ignore [no-untyped-def]
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

