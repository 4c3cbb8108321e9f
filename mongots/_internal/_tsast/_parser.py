# SPDX-PackageName: mongots
# SPDX-License-Identifier: Apache-2.0
# SPDX-FileCopyrightText: Copyright the mongots authors and contributors.

"""Parser for TypeScript declaration files.

Only ``interface``, ``type`` and ``declare module`` statements become
nodes; import statements are parsed and dropped.  Type expressions are
not interpreted: a type is a run of tokens with balanced brackets, and
only its source span is kept, except for object types, whose property
signatures are parsed as well.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

import functools

import ply.yacc as yacc

from mongots._internal._struct import struct
from mongots.errors import DeclarationSyntaxError

from ._lexer import DeclarationLexer
from ._nodes import (
    InterfaceDeclaration,
    ModuleDeclaration,
    PropertySignature,
    Statement,
    StatementContainer,
    TypeAliasDeclaration,
    TypeLiteral,
    unquote,
)

if TYPE_CHECKING:
    from ._source import SourceFile


@struct
class TypeSpan:
    start: int
    end: int
    literal: TypeLiteral | None = None


class DeclarationParser:
    """Parser for the statements of a declaration file."""

    tokens = DeclarationLexer.tokens
    start = "source"

    def __init__(self) -> None:
        self._lexer = DeclarationLexer()
        self._parser: yacc.LRParser | None = None
        self._source: SourceFile | None = None

    def build(self, **kwargs) -> None:  # type: ignore [no-untyped-def]
        self._lexer.build(debug=False, errorlog=yacc.NullLogger())
        kwargs.setdefault("debug", False)
        kwargs.setdefault("write_tables", False)
        kwargs.setdefault("errorlog", yacc.NullLogger())
        self._parser = yacc.yacc(module=self, **kwargs)

    def parse(self, text: str, source: SourceFile) -> list[Statement]:
        """Parse *text*; property signatures edit through *source*."""
        if self._parser is None:
            self.build()
        self._source = source
        self._lexer.lexer.lineno = 1
        try:
            return self._parser.parse(  # type: ignore [union-attr]
                text, lexer=self._lexer.lexer
            )
        finally:
            self._source = None

    # ---- Statements ----

    def p_source(self, p: yacc.YaccProduction) -> None:
        """source : statements"""
        p[0] = p[1]

    def p_statements_empty(self, p: yacc.YaccProduction) -> None:
        """statements : """
        p[0] = []

    def p_statements_multi(self, p: yacc.YaccProduction) -> None:
        """statements : statements statement"""
        p[0] = p[1]
        if p[2] is not None:
            p[0].append(p[2])

    def p_statement(self, p: yacc.YaccProduction) -> None:
        """statement : declaration
        | module_declaration"""
        p[0] = p[1]

    def p_statement_export(self, p: yacc.YaccProduction) -> None:
        """statement : EXPORT declaration"""
        p[2].exported = True
        p[0] = p[2]

    def p_statement_import(self, p: yacc.YaccProduction) -> None:
        """statement : import_declaration"""
        p[0] = None

    def p_declaration(self, p: yacc.YaccProduction) -> None:
        """declaration : interface_declaration
        | type_alias_declaration"""
        p[0] = p[1]

    # ---- interface Name<T> extends A, B<C> { ... } ----

    def p_interface_declaration(self, p: yacc.YaccProduction) -> None:
        """interface_declaration : INTERFACE IDENTIFIER type_parameters heritage object_type"""
        p[0] = InterfaceDeclaration(
            name=p[2], exported=False, body=p[5].literal
        )

    def p_type_parameters(self, p: yacc.YaccProduction) -> None:
        """type_parameters :
        | LT balanced GT"""

    def p_heritage(self, p: yacc.YaccProduction) -> None:
        """heritage :
        | EXTENDS type_reference_list"""

    def p_type_reference_list(self, p: yacc.YaccProduction) -> None:
        """type_reference_list : type_reference
        | type_reference_list COMMA type_reference"""

    def p_type_reference(self, p: yacc.YaccProduction) -> None:
        """type_reference : qualified_name type_arguments"""

    def p_type_arguments(self, p: yacc.YaccProduction) -> None:
        """type_arguments :
        | LT balanced GT"""

    def p_qualified_name(self, p: yacc.YaccProduction) -> None:
        """qualified_name : IDENTIFIER
        | qualified_name DOT IDENTIFIER"""

    # ---- type Name<T> = ... ----

    def p_type_alias_declaration(self, p: yacc.YaccProduction) -> None:
        """type_alias_declaration : TYPE IDENTIFIER type_parameters EQUALS type opt_semi"""
        p[0] = TypeAliasDeclaration(
            name=p[2], exported=False, type_literal=p[5].literal
        )

    def p_opt_semi(self, p: yacc.YaccProduction) -> None:
        """opt_semi :
        | SEMI"""

    # ---- declare module "name" { ... } ----

    def p_module_declaration(self, p: yacc.YaccProduction) -> None:
        """module_declaration : DECLARE MODULE module_name LBRACE statements RBRACE"""
        p[0] = ModuleDeclaration(name=p[3], body=StatementContainer(p[5]))

    def p_module_name(self, p: yacc.YaccProduction) -> None:
        """module_name : STRING
        | IDENTIFIER"""
        p[0] = unquote(p[1])

    # ---- import ... ----

    def p_import_declaration(self, p: yacc.YaccProduction) -> None:
        """import_declaration : IMPORT import_clause opt_semi
        | IMPORT TYPE import_clause opt_semi"""

    def p_import_clause(self, p: yacc.YaccProduction) -> None:
        """import_clause : import_item
        | import_clause import_item"""

    def p_import_item(self, p: yacc.YaccProduction) -> None:
        """import_item : IDENTIFIER
        | STRING
        | COMMA
        | DOT
        | EQUALS
        | OTHER
        | LBRACE balanced RBRACE
        | LPAREN balanced RPAREN"""

    # ---- Object types ----

    def p_object_type(self, p: yacc.YaccProduction) -> None:
        """object_type : LBRACE members RBRACE"""
        p[0] = TypeSpan(
            start=p.lexpos(1),
            end=p.lexpos(3) + 1,
            literal=TypeLiteral(p[2]),
        )

    def p_members(self, p: yacc.YaccProduction) -> None:
        """members : member_list"""
        p[0] = p[1]

    def p_members_last(self, p: yacc.YaccProduction) -> None:
        """members : member_list member"""
        p[0] = p[1]
        if p[2] is not None:
            p[0].append(p[2])

    def p_member_list_empty(self, p: yacc.YaccProduction) -> None:
        """member_list : """
        p[0] = []

    def p_member_list_multi(self, p: yacc.YaccProduction) -> None:
        """member_list : member_list member separator"""
        p[0] = p[1]
        if p[2] is not None:
            p[0].append(p[2])

    def p_separator(self, p: yacc.YaccProduction) -> None:
        """separator : SEMI
        | COMMA"""

    def p_member(self, p: yacc.YaccProduction) -> None:
        """member : property_signature"""
        p[0] = p[1]

    def p_member_signature(self, p: yacc.YaccProduction) -> None:
        """member : property_name optional LPAREN balanced RPAREN COLON type
        | LPAREN balanced RPAREN COLON type
        | LBRACKET balanced RBRACKET optional COLON type"""
        # method, call and index signatures carry no property
        p[0] = None

    def p_property_signature(self, p: yacc.YaccProduction) -> None:
        """property_signature : property_name optional COLON type"""
        p[0] = PropertySignature(
            source=self._source,
            name=p[1],
            optional=p[2],
            type_start=p[4].start,
            type_end=p[4].end,
        )

    def p_property_name(self, p: yacc.YaccProduction) -> None:
        """property_name : IDENTIFIER
        | STRING
        | NUMBER
        | keyword"""
        p[0] = unquote(p[1])

    def p_keyword(self, p: yacc.YaccProduction) -> None:
        """keyword : EXPORT
        | INTERFACE
        | TYPE
        | DECLARE
        | MODULE
        | IMPORT
        | EXTENDS"""
        p[0] = p[1]

    def p_optional(self, p: yacc.YaccProduction) -> None:
        """optional :
        | QUESTION"""
        p[0] = len(p) == 2

    # ---- Type expressions ----

    def p_type(self, p: yacc.YaccProduction) -> None:
        """type : type_item"""
        p[0] = p[1]

    def p_type_multi(self, p: yacc.YaccProduction) -> None:
        """type : type type_item"""
        p[0] = TypeSpan(start=p[1].start, end=p[2].end)

    def p_type_item_token(self, p: yacc.YaccProduction) -> None:
        """type_item : IDENTIFIER
        | STRING
        | NUMBER
        | DOT
        | PIPE
        | AMP
        | ARROW
        | ELLIPSIS
        | QUESTION
        | COLON
        | EXTENDS
        | OTHER"""
        start = p.lexpos(1)
        p[0] = TypeSpan(start=start, end=start + len(p[1]))

    def p_type_item_group(self, p: yacc.YaccProduction) -> None:
        """type_item : LPAREN balanced RPAREN
        | LBRACKET balanced RBRACKET
        | LT balanced GT"""
        p[0] = TypeSpan(start=p.lexpos(1), end=p.lexpos(3) + 1)

    def p_type_item_object(self, p: yacc.YaccProduction) -> None:
        """type_item : object_type"""
        p[0] = p[1]

    # ---- Balanced token runs ----

    def p_balanced(self, p: yacc.YaccProduction) -> None:
        """balanced :
        | balanced balanced_item"""

    def p_balanced_item(self, p: yacc.YaccProduction) -> None:
        """balanced_item : IDENTIFIER
        | STRING
        | NUMBER
        | ARROW
        | ELLIPSIS
        | COLON
        | SEMI
        | COMMA
        | QUESTION
        | EQUALS
        | PIPE
        | AMP
        | DOT
        | OTHER
        | keyword
        | LPAREN balanced RPAREN
        | LBRACKET balanced RBRACKET
        | LBRACE balanced RBRACE
        | LT balanced GT"""

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise DeclarationSyntaxError(
                f"unexpected {p.value!r} on line {p.lineno}"
            )
        else:
            raise DeclarationSyntaxError("unexpected end of declarations")


@functools.cache
def _get_parser() -> DeclarationParser:
    parser = DeclarationParser()
    parser.build()
    return parser


def parse_declarations(text: str, source: SourceFile) -> list[Statement]:
    return _get_parser().parse(text, source)
