import itertools
import re

import pytest

from regex_to_dfa import (INVALID_INPUT, MALFORMED_EXPRESSION, InvalidRegexError, convert,
                          regex_to_dfa)
from subset_construction import TRAP
from thompson import MalformedExpressionError

EXPRESSIONS = [
    "a",
    "ab",
    "a|b",
    "a(b|c)*d",
    "(a|b)*abb",
    "a+b?",
    "(ab|c)*",
    "a?b+c*",
    "((a|b)c)+",
    "ab|cd",
    "(a*)*",
    "x(y|z)?w*",
]


def words(alphabet, max_len=5):
    for n in range(max_len + 1):
        for letters in itertools.product(alphabet, repeat=n):
            yield ''.join(letters)


def test_empty_expression():
    assert regex_to_dfa("").to_dict() == {
        "states": ["q0"],
        "alphabet": [],
        "start_state": "q0",
        "final_states": ["q0"],
        "transitions": {},
    }


@pytest.mark.parametrize("value", [None, 42, b"ab", ["a"]])
def test_non_string_input(value):
    with pytest.raises(InvalidRegexError, match="Invalid regular expression") as info:
        regex_to_dfa(value)
    assert info.value.kind == INVALID_INPUT


@pytest.mark.parametrize("regex", ["a|", "|", "*a", "()", "(a", "\\"])
def test_malformed_expression(regex):
    with pytest.raises(InvalidRegexError) as info:
        regex_to_dfa(regex)
    assert info.value.kind == MALFORMED_EXPRESSION
    assert str(info.value).startswith("Invalid regular expression: ")
    assert isinstance(info.value.__cause__, MalformedExpressionError)


def test_convert_wraps_result():
    ok = convert("ab")
    assert ok.ok and ok.dfa.accepts("ab")
    failed = convert("a|")
    assert not failed.ok
    assert failed.dfa is None
    assert failed.error.kind == MALFORMED_EXPRESSION


@pytest.mark.parametrize("regex, accepted, rejected", [
    ("a", ["a"], ["", "aa"]),
    ("a(b|c)*d", ["ad", "abd", "acbcd"], ["a", "abc", "d"]),
    ("(a|b)*abb", ["abb", "aababb", "ababb"], ["ab", "abba", "abbb"]),
    ("a\\*b", ["a*b"], ["ab", "aaab", "a**b"]),
    ("a+", ["a", "aaa"], [""]),
    ("a?", ["", "a"], ["aa"]),
])
def test_examples(regex, accepted, rejected):
    dfa = regex_to_dfa(regex)
    for word in accepted:
        assert dfa.accepts(word), word
    for word in rejected:
        assert not dfa.accepts(word), word


@pytest.mark.parametrize("regex", EXPRESSIONS)
def test_transition_function_is_total(regex):
    dfa = regex_to_dfa(regex)
    assert dfa.start_state == "q0"
    assert dfa.start_state in dfa.states
    assert set(dfa.final_states) <= set(dfa.states)
    for state in dfa.states:
        assert set(dfa.transitions[state]) == set(dfa.alphabet)
        assert set(dfa.transitions[state].values()) <= set(dfa.states)


@pytest.mark.parametrize("regex", EXPRESSIONS)
def test_trap_state_loops_and_rejects(regex):
    dfa = regex_to_dfa(regex)
    if dfa.trap_state is not None:
        assert dfa.transitions[TRAP] == {sym: TRAP for sym in dfa.alphabet}
        assert TRAP not in dfa.final_states


@pytest.mark.parametrize("regex", EXPRESSIONS)
def test_conversion_is_reproducible(regex):
    assert regex_to_dfa(regex) == regex_to_dfa(regex)


@pytest.mark.parametrize("regex", EXPRESSIONS)
def test_same_language_as_re(regex):
    dfa = regex_to_dfa(regex)
    pattern = re.compile(regex)
    for word in words(dfa.alphabet):
        assert dfa.accepts(word) == bool(pattern.fullmatch(word)), word
