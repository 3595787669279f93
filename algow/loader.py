"""JSON interchange for expressions, types and schemes.

Expressions:
    {"kind": "var", "name": "x"}
    {"kind": "int", "value": 1}
    {"kind": "bool", "value": true}
    {"kind": "app", "fn": <exp>, "arg": <exp>}
    {"kind": "abs", "param": "x", "body": <exp>}
    {"kind": "let", "name": "x", "binding": <exp>, "body": <exp>}

Types:
    {"kind": "var", "name": "a"}   {"kind": "int"}   {"kind": "bool"}
    {"kind": "fun", "arg": <type>, "result": <type>}

Schemes: {"vars": ["a"], "type": <type>}

A document is a single expression or
{"definitions": [{"name": "f", "expr": <exp>}, ...]}.
"""

from __future__ import annotations

import json
from typing import Any, Union

from algow.ast_nodes import Exp, EVar, ELit, EApp, EAbs, ELet, LInt, LBool
from algow.errors import DecodeError
from algow.types import Type, TVar, TFun, TInt, TBool, INT, BOOL, Scheme

Document = Union[Exp, list[tuple[str, Exp]]]


def _field(data: dict, key: str, path: str) -> Any:
    if key not in data:
        raise DecodeError(f"missing field '{key}'", path)
    return data[key]


def _name(data: dict, key: str, path: str) -> str:
    value = _field(data, key, path)
    if not isinstance(value, str) or not value:
        raise DecodeError(f"field '{key}' must be a non-empty string", f"{path}.{key}")
    return value


def _kind(data: Any, path: str) -> str:
    if not isinstance(data, dict):
        raise DecodeError("expected an object", path)
    kind = _field(data, "kind", path)
    if not isinstance(kind, str):
        raise DecodeError("field 'kind' must be a string", f"{path}.kind")
    return kind


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def exp_from_dict(data: Any, path: str = "$") -> Exp:
    kind = _kind(data, path)
    if kind == "var":
        return EVar(_name(data, "name", path))
    if kind == "int":
        value = _field(data, "value", path)
        # bool is a subclass of int
        if isinstance(value, bool) or not isinstance(value, int):
            raise DecodeError("int literal needs an integer value", f"{path}.value")
        return ELit(LInt(value))
    if kind == "bool":
        value = _field(data, "value", path)
        if not isinstance(value, bool):
            raise DecodeError("bool literal needs a boolean value", f"{path}.value")
        return ELit(LBool(value))
    if kind == "app":
        return EApp(
            exp_from_dict(_field(data, "fn", path), f"{path}.fn"),
            exp_from_dict(_field(data, "arg", path), f"{path}.arg"),
        )
    if kind == "abs":
        return EAbs(
            _name(data, "param", path),
            exp_from_dict(_field(data, "body", path), f"{path}.body"),
        )
    if kind == "let":
        return ELet(
            _name(data, "name", path),
            exp_from_dict(_field(data, "binding", path), f"{path}.binding"),
            exp_from_dict(_field(data, "body", path), f"{path}.body"),
        )
    raise DecodeError(f"unknown expression kind '{kind}'", path)


def type_from_dict(data: Any, path: str = "$") -> Type:
    kind = _kind(data, path)
    if kind == "var":
        return TVar(_name(data, "name", path))
    if kind == "int":
        return INT
    if kind == "bool":
        return BOOL
    if kind == "fun":
        return TFun(
            type_from_dict(_field(data, "arg", path), f"{path}.arg"),
            type_from_dict(_field(data, "result", path), f"{path}.result"),
        )
    raise DecodeError(f"unknown type kind '{kind}'", path)


def scheme_from_dict(data: Any, path: str = "$") -> Scheme:
    if not isinstance(data, dict):
        raise DecodeError("expected an object", path)
    names = data.get("vars", [])
    if not isinstance(names, list) or not all(isinstance(n, str) for n in names):
        raise DecodeError("field 'vars' must be a list of strings", f"{path}.vars")
    return Scheme(tuple(names), type_from_dict(_field(data, "type", path), f"{path}.type"))


def load_document(data: Any) -> Document:
    if isinstance(data, dict) and "definitions" in data:
        defs = data["definitions"]
        if not isinstance(defs, list):
            raise DecodeError("field 'definitions' must be a list", "$.definitions")
        result = []
        for i, item in enumerate(defs):
            path = f"$.definitions[{i}]"
            if not isinstance(item, dict):
                raise DecodeError("expected an object", path)
            result.append((_name(item, "name", path),
                           exp_from_dict(_field(item, "expr", path), f"{path}.expr")))
        return result
    return exp_from_dict(data)


def load_context(path: str) -> dict[str, Scheme]:
    """Read a JSON object mapping names to schemes."""
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid JSON: {e.msg}") from e
        except UnicodeDecodeError as e:
            raise DecodeError(f"not UTF-8: {e.reason} at byte {e.start}") from e
    if not isinstance(data, dict):
        raise DecodeError("expected an object")
    return {name: scheme_from_dict(s, f"$.{name}") for name, s in data.items()}


def load_file(path: str) -> Document:
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise DecodeError(f"invalid JSON: {e.msg}") from e
        except UnicodeDecodeError as e:
            raise DecodeError(f"not UTF-8: {e.reason} at byte {e.start}") from e
    return load_document(data)


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------

def type_to_dict(t: Type) -> dict[str, Any]:
    if isinstance(t, TVar):
        return {"kind": "var", "name": t.name}
    if isinstance(t, TInt):
        return {"kind": "int"}
    if isinstance(t, TBool):
        return {"kind": "bool"}
    if isinstance(t, TFun):
        return {"kind": "fun", "arg": type_to_dict(t.arg), "result": type_to_dict(t.result)}
    raise TypeError(f"not a type: {t!r}")


def scheme_to_dict(s: Scheme) -> dict[str, Any]:
    return {"vars": list(s.vars), "type": type_to_dict(s.type)}
