"""Tests for script reading and ECMAScript syntax validation."""

import tempfile
from pathlib import Path

import pytest

from es_compat.config import normalize_es_version
from es_compat.errors import ParseAborted, ReadFailed, SyntaxIncompatible
from es_compat.syntax import read_script, validate_syntax

ES3, ES5 = 3, 5
ES2015 = normalize_es_version(2015)
ES2016 = normalize_es_version(2016)
ES2017 = normalize_es_version(2017)


def test_var_is_es5():
    validate_syntax("var x = 1;", ES5)


def test_arrow_const_needs_es2015():
    with pytest.raises(SyntaxIncompatible):
        validate_syntax("const f = () => 1;", ES5)
    validate_syntax("const f = () => 1;", ES2015)


@pytest.mark.parametrize("source", [
    "let x = 1;",
    "class A {}",
    "var s = `tpl`;",
    "var f = function (a, b = 1) { return a + b; };",
    "var [a, b] = [1, 2];",
    "for (var v of []) {}",
    "function* gen() { yield 1; }",
    "var o = { m() { return 1; } };",
    "var k = 'x'; var o = { [k]: 1 };",
    "var n = 0b101;",
])
def test_es2015_constructs_rejected_at_es5(source):
    with pytest.raises(SyntaxIncompatible) as exc:
        validate_syntax(source, ES5)
    assert "ES2015" in exc.value.diagnostic.message
    validate_syntax(source, ES2015)


def test_exponent_needs_es2016():
    with pytest.raises(SyntaxIncompatible) as exc:
        validate_syntax("var y = 2 ** 3;", ES2015)
    assert "exponentiation" in exc.value.diagnostic.message
    validate_syntax("var y = 2 ** 3;", ES2016)


def test_async_needs_es2017():
    source = "async function load() { await fetch(); }"
    with pytest.raises(SyntaxIncompatible):
        validate_syntax(source, ES2016)
    validate_syntax(source, ES2017)


def test_async_arrow_needs_es2017():
    with pytest.raises(SyntaxIncompatible) as exc:
        validate_syntax("var f = async () => 1;", ES2016)
    assert "async" in exc.value.diagnostic.message


@pytest.mark.parametrize("source", [
    "var o = {...a};",
    "var {a, ...r} = o;",
])
def test_object_rest_spread_rejected_at_every_target(source):
    for edition in (ES5, ES2015, ES2017):
        with pytest.raises(SyntaxIncompatible) as exc:
            validate_syntax(source, edition)
    assert "ES2018" in exc.value.diagnostic.message


@pytest.mark.parametrize("source", [
    "function f(a,) {}",
    "var g = function (a, b,) { return a; };",
    "f(a,);",
    "new F(1, /* last */ 2,\n);",
])
def test_trailing_comma_in_calls_needs_es2017(source):
    with pytest.raises(SyntaxIncompatible) as exc:
        validate_syntax(source, ES2016)
    assert "trailing comma" in exc.value.diagnostic.message
    validate_syntax(source, ES2017)


@pytest.mark.parametrize("source", [
    "f(a, (b, c));",
    "function f(a /* , */) {}",
    "f(\"a,\");",
])
def test_commas_that_are_not_trailing(source):
    validate_syntax(source, ES2016)


@pytest.mark.parametrize("source", [
    "var c = o.class;",
    "var o = {default: 1};",
    "var o = {a: 1,};",
])
def test_es5_property_syntax_rejected_at_es3(source):
    with pytest.raises(SyntaxIncompatible) as exc:
        validate_syntax(source, ES3)
    assert "ES5" in exc.value.diagnostic.message
    validate_syntax(source, ES5)


def test_plain_property_names_pass_at_es3():
    validate_syntax("var o = {a: 1, b: [1, 2]}; o.klass = o[\"class\"];", ES3)


def test_deep_nesting_aborts_instead_of_crashing():
    source = "var x = " + "(" * 3000 + "1" + ")" * 3000 + ";"
    with pytest.raises(ParseAborted):
        validate_syntax(source, ES5)


def test_accessor_needs_es5():
    source = "var o = { get a() { return 1; } };"
    with pytest.raises(SyntaxIncompatible):
        validate_syntax(source, ES3)
    validate_syntax(source, ES5)


def test_parse_error_is_incompatible_at_every_version():
    for edition in (ES3, ES5, ES2015, ES2017):
        with pytest.raises(SyntaxIncompatible) as exc:
            validate_syntax("var = ;", edition)
        assert exc.value.diagnostic.message
        assert exc.value.diagnostic.line == 1


def test_diagnostic_points_at_offending_line():
    with pytest.raises(SyntaxIncompatible) as exc:
        validate_syntax("var a = 1;\nvar b = 2;\nlet c = 3;\n", ES5)
    assert exc.value.diagnostic.line == 3


def test_hashbang_is_ignored():
    validate_syntax("#!/usr/bin/env node\nvar a = 1;\n", ES5)


def test_read_script_missing_file():
    with tempfile.TemporaryDirectory() as d:
        with pytest.raises(ReadFailed):
            read_script(Path(d) / "nope.js")


def test_read_script_returns_text():
    with tempfile.TemporaryDirectory() as d:
        p = Path(d) / "a.js"
        p.write_text("var a = 1;\n")
        assert read_script(p) == "var a = 1;\n"
