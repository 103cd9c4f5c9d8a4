"""
pickaxe/parser.py

Recursive-descent parser for the Pickaxe query subset.

Responsibilities:
- Convert token sequences into instructions (see pickaxe/ast.py)
- Provide clear syntax errors with line/column positions
- Keep going after a bad statement so every error in a script is reported

Grammar:
    script := [stmt] (';' [stmt])*
    stmt   := SELECT item (',' item)*
            | VALUES row (',' row)* [AS '(' IDENT (',' IDENT)* ')']
            | SLEEP INT
            | RAISE STRING
    item   := literal [AS IDENT]
    row    := '(' literal (',' literal)* ')'
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .ast import Instruction, Raise, Select, SelectItem, Sleep, Values
from .errors import CompileError
from .lexer import Token, TokenType


@dataclass
class Parser:
    """
    Stateful parser over a token list.

    Attributes:
        tokens: List of Token.
        i: Current token index.
        errors: Errors collected so far by parse_script().
    """
    tokens: list[Token]
    i: int = 0
    errors: list[CompileError] = field(default_factory=list)

    def peek(self, offset: int = 0) -> Token:
        """Return the token at current index + offset without consuming."""
        j = self.i + offset
        if j >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[j]

    def at(self, typ: TokenType) -> bool:
        """Check whether current token is of a specific type."""
        return self.peek().typ == typ

    def consume(self) -> Token:
        """Consume and return the current token."""
        t = self.peek()
        self.i += 1
        return t

    def expect(self, typ: TokenType, msg: str) -> Token:
        """Consume a token of the expected type, otherwise raise a compile error."""
        t = self.peek()
        if t.typ != typ:
            raise CompileError(msg, t.pos)
        return self.consume()

    def match(self, typ: TokenType) -> bool:
        """If current token matches typ, consume it and return True."""
        if self.at(typ):
            self.consume()
            return True
        return False

    def synchronize(self) -> None:
        """Skip to just past the next ';' (or to EOF) after an error."""
        while not self.at(TokenType.EOF):
            if self.consume().typ == TokenType.SEMI:
                return

    # ---------------- entry point ----------------

    def parse_script(self) -> list[Instruction]:
        """
        Parse one or more statements separated by semicolons.

        Returns:
            Instructions of the statements that parsed. Errors for the ones
            that did not are appended to self.errors.
        """
        program: list[Instruction] = []
        while not self.at(TokenType.EOF):
            if self.match(TokenType.SEMI):
                continue
            try:
                program.append(self.parse_statement())
                if not self.at(TokenType.EOF):
                    self.expect(TokenType.SEMI, f"Expected ';' before {self.peek().lexeme!r}")
            except CompileError as e:
                self.errors.append(e)
                self.synchronize()
        return program

    # ---------------- statement dispatch ----------------

    def parse_statement(self) -> Instruction:
        """Dispatch based on the first keyword token."""
        t = self.peek()
        if t.typ == TokenType.SELECT:
            return self.parse_select()
        if t.typ == TokenType.VALUES:
            return self.parse_values()
        if t.typ == TokenType.SLEEP:
            self.consume()
            millis = int(self.expect(TokenType.INT, "Expected milliseconds after SLEEP").value)
            if millis < 0:
                raise CompileError("SLEEP needs a non-negative duration", t.pos)
            return Sleep(millis=millis)
        if t.typ == TokenType.RAISE:
            self.consume()
            msg = str(self.expect(TokenType.STRING, "Expected message string after RAISE").value)
            return Raise(message=msg, pos=t.pos)
        raise CompileError(f"Unexpected token: {t.lexeme!r}", t.pos)

    # ---------------- SELECT ----------------

    def parse_select(self) -> Select:
        """
        Parse:
          SELECT <literal> [AS <ident>] (',' <literal> [AS <ident>])*
        """
        self.expect(TokenType.SELECT, "Expected SELECT")
        items = [self.parse_select_item()]
        while self.match(TokenType.COMMA):
            items.append(self.parse_select_item())
        return Select(items=items)

    def parse_select_item(self) -> SelectItem:
        value = self.parse_literal()
        alias = None
        if self.match(TokenType.AS):
            alias = str(self.expect(TokenType.IDENT, "Expected column name after AS").value)
        return SelectItem(value=value, alias=alias)

    # ---------------- VALUES ----------------

    def parse_values(self) -> Values:
        """
        Parse:
          VALUES (v, ...) [, (v, ...)]* [AS (c1, c2, ...)]

        All rows must have the same width, and so must the AS list.
        """
        self.expect(TokenType.VALUES, "Expected VALUES")
        rows = [self.parse_row()]
        while self.match(TokenType.COMMA):
            row_pos = self.peek().pos
            row = self.parse_row()
            if len(row) != len(rows[0]):
                raise CompileError(
                    f"Row has {len(row)} values, expected {len(rows[0])}", row_pos
                )
            rows.append(row)

        columns = None
        if self.match(TokenType.AS):
            alias_pos = self.peek().pos
            self.expect(TokenType.LPAREN, "Expected '(' before column names")
            columns = [str(self.expect(TokenType.IDENT, "Expected column name").value)]
            while self.match(TokenType.COMMA):
                columns.append(str(self.expect(TokenType.IDENT, "Expected column name").value))
            self.expect(TokenType.RPAREN, "Expected ')' after column names")
            if len(columns) != len(rows[0]):
                raise CompileError("Number of column names does not match number of values", alias_pos)
        return Values(rows=rows, columns=columns)

    def parse_row(self) -> list:
        self.expect(TokenType.LPAREN, "Expected '(' before values")
        vals = [self.parse_literal()]
        while self.match(TokenType.COMMA):
            vals.append(self.parse_literal())
        self.expect(TokenType.RPAREN, "Expected ')' after values")
        return vals

    # ---------------- atoms ----------------

    def parse_literal(self):
        """
        Parse a literal value.

        Returns:
            int | str | bool | None

        Raises:
            CompileError if token is not a supported literal type.
        """
        t = self.peek()
        if t.typ == TokenType.INT:
            return int(self.consume().value)
        if t.typ == TokenType.STRING:
            return str(self.consume().value)
        if t.typ == TokenType.BOOL:
            return bool(self.consume().value)
        if t.typ == TokenType.NULL:
            self.consume()
            return None
        raise CompileError("Expected literal (INT, STRING, BOOL, NULL)", t.pos)
