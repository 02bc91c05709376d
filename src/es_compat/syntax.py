"""Script reading and ECMAScript syntax validation.

esprima has no notion of a target version, so validation is two-step: parse
the script, then walk the tree and reject the first construct that is newer
than the target edition. esprima also accepts ES2018 object rest/spread,
which is rejected at every supported target.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import esprima
from esprima.error_handler import Error as EsprimaError

from es_compat.config import es_label
from es_compat.errors import ParseAborted, ReadFailed, SyntaxIncompatible
from es_compat.models import Diagnostic

log = logging.getLogger(__name__)

# Node types that exist only from a given edition onwards.
_NODE_EDITIONS: dict[str, tuple[str, int]] = {
    "ArrowFunctionExpression": ("arrow function", 6),
    "ClassDeclaration": ("class declaration", 6),
    "ClassExpression": ("class expression", 6),
    "Super": ("super", 6),
    "TemplateLiteral": ("template literal", 6),
    "TaggedTemplateExpression": ("tagged template", 6),
    "ArrayPattern": ("array destructuring", 6),
    "ObjectPattern": ("object destructuring", 6),
    "AssignmentPattern": ("default value", 6),
    "RestElement": ("rest element", 6),
    "SpreadElement": ("spread element", 6),
    "ForOfStatement": ("for-of loop", 6),
    "YieldExpression": ("yield expression", 6),
    "MetaProperty": ("new.target", 6),
    "AwaitExpression": ("await expression", 8),
}

# Members of an object literal or pattern that make it an ES2018 rest/spread.
_OBJECT_REST_SPREAD = frozenset({
    "SpreadElement", "RestElement",
    "SpreadProperty", "RestProperty", "ExperimentalSpreadProperty", "ExperimentalRestProperty",
})

# ES3 forbids these as bare property names (`o.class`, `{default: 1}`).
_RESERVED_WORDS = frozenset("""
    break case catch class const continue debugger default delete do else enum
    export extends false finally for function if import in instanceof new null
    return super switch this throw true try typeof var void while with
""".split())

_COMMENT_RE = re.compile(r"/\*.*?\*/|//[^\n]*", re.DOTALL)


def read_script(path: Path) -> str:
    """Return the text of a script file; raise ReadFailed on any OS error."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        raise ReadFailed(path, e.strerror or str(e)) from e


def _strip_hashbang(source: str) -> str:
    # Node's CommonJS loader ignores a leading "#!" line; keep line numbers intact.
    if source.startswith("#!"):
        end = source.find("\n")
        return "//" + (source[2:] if end == -1 else source[2:end] + source[end:])
    return source


def _regex_flags(node) -> str:
    regex = getattr(node, "regex", None)
    if regex is None:
        return ""
    if isinstance(regex, dict):
        return regex.get("flags") or ""
    return getattr(regex, "flags", None) or ""


def _gap(source: str, start: int, end: int) -> str:
    """Source text between two offsets with comments removed."""
    return _COMMENT_RE.sub("", source[start:end])


def _trailing_comma(source: str, items: list, end: int | None) -> bool:
    """Whether a comma follows the last of ``items`` before offset ``end``."""
    if not items or end is None:
        return False
    last_range = getattr(items[-1], "range", None)
    if not last_range:
        return False
    return "," in _gap(source, last_range[1], end)


def _node_end(node) -> int | None:
    node_range = getattr(node, "range", None)
    return node_range[1] if node_range else None


def _node_start(node) -> int | None:
    node_range = getattr(node, "range", None)
    return node_range[0] if node_range else None


def _features(node, source: str) -> list[tuple[str, int]]:
    """Return every (description, edition introduced) a node depends on."""
    found: list[tuple[str, int]] = []
    node_type = node.type

    if node_type in ("FunctionDeclaration", "FunctionExpression", "ArrowFunctionExpression"):
        if getattr(node, "isAsync", False) or getattr(node, "async", False):
            found.append(("async function", 8))
        if getattr(node, "generator", False):
            found.append(("generator function", 6))
        body = getattr(node, "body", None)
        if _trailing_comma(source, node.params or [], _node_start(body)):
            found.append(("trailing comma in parameter list", 8))

    if node_type in ("CallExpression", "NewExpression"):
        if _trailing_comma(source, node.arguments or [], _node_end(node)):
            found.append(("trailing comma in argument list", 8))

    if node_type in _NODE_EDITIONS:
        found.append(_NODE_EDITIONS[node_type])

    if node_type in ("ObjectExpression", "ObjectPattern"):
        properties = node.properties or []
        if any(p.type in _OBJECT_REST_SPREAD for p in properties):
            found.append(("object rest/spread", 9))
        if node_type == "ObjectExpression" and _trailing_comma(source, properties, _node_end(node)):
            found.append(("trailing comma in object literal", 5))

    if node_type == "VariableDeclaration" and node.kind in ("let", "const"):
        found.append((f"'{node.kind}' declaration", 6))

    if node_type == "Property":
        if getattr(node, "method", False):
            found.append(("method shorthand", 6))
        elif getattr(node, "shorthand", False):
            found.append(("shorthand property", 6))
        if getattr(node, "computed", False):
            found.append(("computed property name", 6))
        elif _is_reserved_name(node.key):
            found.append(("reserved word as property name", 5))
        if node.kind in ("get", "set"):
            found.append(("accessor property", 5))

    if node_type == "MemberExpression" and not node.computed and _is_reserved_name(node.property):
        found.append(("reserved word as property name", 5))

    if node_type == "BinaryExpression" and node.operator == "**":
        found.append(("exponentiation operator", 7))
    if node_type == "AssignmentExpression" and node.operator == "**=":
        found.append(("exponentiation assignment", 7))

    if node_type == "Literal":
        raw = getattr(node, "raw", None) or ""
        if raw[:2].lower() in ("0b", "0o"):
            found.append(("binary/octal literal", 6))
        flags = _regex_flags(node)
        if "u" in flags or "y" in flags:
            found.append((f"regular expression flag '{'u' if 'u' in flags else 'y'}'", 6))

    return found


def _is_reserved_name(key) -> bool:
    return getattr(key, "type", None) == "Identifier" and key.name in _RESERVED_WORDS


def _children(node) -> list:
    children = []
    for value in vars(node).values():
        if isinstance(value, list):
            children.extend(v for v in value if isinstance(getattr(v, "type", None), str))
        elif isinstance(getattr(value, "type", None), str):
            children.append(value)
    return children


def _position(node) -> tuple[int | None, int | None]:
    loc = getattr(node, "loc", None)
    start = getattr(loc, "start", None)
    return getattr(start, "line", None), getattr(start, "column", None)


def _check_edition(program, source: str, edition: int) -> None:
    stack = [program]
    while stack:
        node = stack.pop()
        for description, introduced in _features(node, source):
            if introduced > edition:
                line, column = _position(node)
                raise SyntaxIncompatible(Diagnostic(
                    message=f"{description} requires {es_label(introduced)}",
                    line=line,
                    column=column,
                ))
        stack.extend(reversed(_children(node)))


def validate_syntax(source: str, es_version: int) -> None:
    """Check that ``source`` parses as a script under edition ``es_version``.

    Raises SyntaxIncompatible carrying a Diagnostic on the first failure, and
    ParseAborted when the parser runs out of stack on deeply nested source.
    """
    source = _strip_hashbang(source)
    try:
        program = esprima.parseScript(source, {"loc": True, "range": True})
    except EsprimaError as e:
        raise SyntaxIncompatible(Diagnostic(
            message=getattr(e, "description", None) or str(e),
            line=getattr(e, "lineNumber", None),
            column=getattr(e, "column", None),
        )) from e
    except RecursionError as e:
        raise ParseAborted("source nests too deeply to parse") from e

    _check_edition(program, source, es_version)
