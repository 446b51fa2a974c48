import logging
import re
from typing import List

from ..cir.model import Field, Method, Modifier, Parameter, TypeDecl, TypeKind, parse_modifiers
from .preprocess import brace_depth, extract_block_body

logger = logging.getLogger(__name__)


class JavaAdapter:
    """
    Java source → TypeDecl list, regex based.
    Works on text already normalised by ``preprocess_code``:
      - type headers (class / interface / enum) with modifiers,
        super type and implemented interfaces
      - brace-balanced isolation of each type body
      - fields, methods and constructors at the top level of that body

    Nothing here builds an AST. A construct the patterns do not recognise
    is simply missing from the result.
    """

    language = "java"

    # [visibility] [abstract|final|static] kind Name [<T>] [extends S] [implements I, J] {
    CLASS_PATTERN = re.compile(
        r"\b(public\s+|private\s+|protected\s+)?(abstract\s+|final\s+|static\s+)?"
        r"(class|interface|enum)\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*(?:<[^>]*>)?\s*"
        r"(?:extends\s+([a-zA-Z_][a-zA-Z0-9_.<>\s]*?))?\s*"
        r"(?:implements\s+([^{]+?))?\s*\{"
    )

    # [visibility] [static|final] [static|final] Type name [= init] ;
    FIELD_PATTERN = re.compile(
        r"\b(public|private|protected)?\s*(?:(static|final)\s+)?(?:(static|final)\s+)?\s*"
        r"([a-zA-Z_][a-zA-Z0-9_<>\[\]]*)\s+([a-zA-Z_][a-zA-Z0-9_]*)\s*(?:=\s*[^;]+)?\s*;"
    )

    # [visibility] [mod] [mod] [ReturnType|void] name ( params ) [throws ...] { or ;
    METHOD_PATTERN = re.compile(
        r"\b(public|private|protected)?\s*(?:(static|final|abstract)\s+)?"
        r"(?:(static|final|abstract)\s+)?\s*(?:([a-zA-Z_][a-zA-Z0-9_<>\[\]]*|void)\s+)?"
        r"([a-zA-Z_][a-zA-Z0-9_]*)\s*\(([^)]*)\)\s*(?:throws\s+[^{;]+)?\s*[{;]"
    )

    PARAMETER_PATTERN = re.compile(
        r"(?:final\s+)?([a-zA-Z_][a-zA-Z0-9_<>\[\]]*)\s+([a-zA-Z_][a-zA-Z0-9_]*)"
    )

    # `x = new Foo();` at member level would otherwise read as method Foo returning "new"
    STATEMENT_KEYWORDS = frozenset({"new", "return", "throw", "else", "case"})

    # ---------------- Types ----------------

    def extract_types(self, code: str, package_name: str = "") -> List[TypeDecl]:
        """
        Scan cleaned source for type headers, left to right.
        Nested types are found too, since scanning resumes right after each
        header rather than after the body.
        """
        types: List[TypeDecl] = []

        for match in self.CLASS_PATTERN.finditer(code):
            visibility, modifier, kind, name, super_type, implements = match.groups()

            type_decl = TypeDecl(
                name=name,
                kind=TypeKind(kind),
                package=package_name,
                modifiers=parse_modifiers((visibility, modifier)),
            )

            if super_type:
                type_decl.super_type = super_type.strip()

            if implements:
                type_decl.interfaces = [i.strip() for i in implements.strip().split(",") if i.strip()]

            body = extract_block_body(code, match.end() - 1)
            self.extract_members(type_decl, body)

            logger.debug(
                "Found %s %s: %d fields, %d methods, %d constructors",
                type_decl.kind.value,
                name,
                len(type_decl.fields),
                len(type_decl.methods),
                len(type_decl.constructors),
            )
            types.append(type_decl)

        return types

    # ---------------- Members ----------------

    def extract_members(self, type_decl: TypeDecl, body: str) -> None:
        self._extract_fields(type_decl, body)
        self._extract_methods(type_decl, body)

    def _extract_fields(self, type_decl: TypeDecl, body: str) -> None:
        for match in self.FIELD_PATTERN.finditer(body):
            # local variables and nested-type members sit at positive depth
            if brace_depth(body[:match.start()]) != 0:
                continue

            visibility, mod_a, mod_b, type_name, name = match.groups()
            type_decl.fields.append(
                Field(
                    name=name,
                    type_name=type_name,
                    modifiers=parse_modifiers((visibility, mod_a, mod_b)),
                )
            )

    def _extract_methods(self, type_decl: TypeDecl, body: str) -> None:
        for match in self.METHOD_PATTERN.finditer(body):
            if brace_depth(body[:match.start()]) != 0:
                continue

            visibility, mod_a, mod_b, return_type, name, params = match.groups()
            if return_type in self.STATEMENT_KEYWORDS:
                continue

            modifiers = parse_modifiers((visibility, mod_a, mod_b))
            is_constructor = name == type_decl.name

            method = Method(
                name=name,
                return_type=None if is_constructor else (return_type or "void"),
                modifiers=modifiers,
                is_constructor=is_constructor,
                is_abstract=Modifier.ABSTRACT in modifiers or type_decl.kind is TypeKind.INTERFACE,
            )
            if params.strip():
                method.parameters = self.parse_parameters(params)

            if is_constructor:
                type_decl.constructors.append(method)
            else:
                type_decl.methods.append(method)

    def parse_parameters(self, params: str) -> List[Parameter]:
        """
        Split on every comma; generic arguments containing commas are not
        handled. A leading ``final`` is dropped, only type and name are kept.
        """
        parameters: List[Parameter] = []
        for part in params.split(","):
            part = part.strip()
            if not part:
                continue
            m = self.PARAMETER_PATTERN.search(part)
            if m:
                parameters.append(Parameter(name=m.group(2), type_name=m.group(1)))
        return parameters
