"""
Text-level helpers shared by the Java extractors.

Everything downstream matches declarations with regular expressions and
counts braces by hand, so the source is first normalised here: literals are
replaced by placeholders, comments and annotations are removed and all
whitespace is collapsed to single spaces.
"""
from __future__ import annotations

import logging
import re
from typing import List

from ..cir.model import ImportDecl

logger = logging.getLogger(__name__)

# ---------------- Preprocessing ----------------

_STRING_LITERAL_RE = re.compile(r'"(?:[^"\\]|\\.)*"')
_CHAR_LITERAL_RE = re.compile(r"'(?:[^'\\]|\\.)*'")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_ANNOTATION_RE = re.compile(r"@[a-zA-Z_][a-zA-Z0-9_]*(?:\([^)]*\))?")
_WHITESPACE_RE = re.compile(r"\s+")

# ---------------- Declarations ----------------

_PACKAGE_RE = re.compile(r"package\s+([a-zA-Z_][a-zA-Z0-9_.]*)\s*;")
_IMPORT_RE = re.compile(r"import\s+(static\s+)?([a-zA-Z_][a-zA-Z0-9_.*]*)\s*;")

# Types never treated as relationship targets.
BASIC_TYPES = frozenset({
    "int", "long", "double", "float", "boolean", "char", "byte", "short",
    "Integer", "Long", "Double", "Float", "Boolean", "Character", "Byte", "Short",
    "String", "Object", "BigDecimal", "BigInteger",
    "List", "ArrayList", "LinkedList", "Set", "HashSet", "LinkedHashSet", "TreeSet",
    "Map", "HashMap", "LinkedHashMap", "TreeMap", "Collection", "Queue", "Deque",
    "Math", "System", "Thread",
})

_GENERIC_ARGS_RE = re.compile(r"<.*>")


def preprocess_code(code: str) -> str:
    """
    Normalise raw Java source for regex matching.

    Order matters: literals go first so that comment markers, braces or
    quotes inside them cannot confuse the later steps. Malformed input is
    never rejected; whatever the patterns leave behind is returned.
    """
    counter = 0

    def _string_placeholder(_m: re.Match) -> str:
        nonlocal counter
        placeholder = f'"STRING_LITERAL_{counter}"'
        counter += 1
        return placeholder

    def _char_placeholder(_m: re.Match) -> str:
        nonlocal counter
        placeholder = f"'CHAR_LITERAL_{counter}'"
        counter += 1
        return placeholder

    code = _STRING_LITERAL_RE.sub(_string_placeholder, code)
    code = _CHAR_LITERAL_RE.sub(_char_placeholder, code)
    code = _BLOCK_COMMENT_RE.sub("", code)
    code = _LINE_COMMENT_RE.sub("", code)
    code = _ANNOTATION_RE.sub("", code)
    code = _WHITESPACE_RE.sub(" ", code)

    logger.debug("Preprocessed source: %d literals replaced, %d chars", counter, len(code))
    return code


def scan_package(code: str) -> str:
    m = _PACKAGE_RE.search(code)
    return m.group(1) if m else ""


def scan_imports(code: str) -> List[ImportDecl]:
    return [
        ImportDecl(path=m.group(2), is_static=bool(m.group(1)))
        for m in _IMPORT_RE.finditer(code)
    ]


# ---------------- Types & braces ----------------

def is_basic_type(type_name: str) -> bool:
    return type_name in BASIC_TYPES


def extract_base_type(type_name: str) -> str:
    """List<Item> -> List, Engine[] -> Engine."""
    base = _GENERIC_ARGS_RE.sub("", type_name)
    base = base.replace("[]", "")
    return base.strip()


def extract_block_body(code: str, open_index: int, strict: bool = False) -> str:
    """
    Return the text strictly between the brace at ``open_index`` and its
    matching closing brace.

    Regexes cannot pair nested braces, so this is a linear depth count
    starting at 1 just after the opening brace. When the text ends before
    the depth returns to zero the rest of the text is returned, or ``""``
    if ``strict`` is set.
    """
    depth = 1
    i = open_index + 1
    n = len(code)
    while i < n and depth > 0:
        ch = code[i]
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
        i += 1

    if depth > 0:
        return "" if strict else code[open_index + 1:]
    return code[open_index + 1:i - 1]


def brace_depth(prefix: str) -> int:
    """Open minus close braces in ``prefix``."""
    return prefix.count("{") - prefix.count("}")
