import logging
from collections import namedtuple

from regex_to_postfix import to_postfix
from subset_construction import DFA, nfa_to_dfa
from thompson import MalformedExpressionError, ThompsonBuilder

logger = logging.getLogger(__name__)

INVALID_INPUT = 'invalid-input'
MALFORMED_EXPRESSION = 'malformed-expression'


class InvalidRegexError(ValueError):
    def __init__(self, message, kind):
        super().__init__(message)
        self.kind = kind


class Conversion(namedtuple('Conversion', ['dfa', 'error'])):
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


def empty_dfa():
    # l'expression vide ne reconnaît que le mot vide
    return DFA(states=('q0',), alphabet=(), start_state='q0',
               final_states=('q0',), transitions={})


def regex_to_dfa(regex):
    if not isinstance(regex, str):
        raise InvalidRegexError("Invalid regular expression", INVALID_INPUT)
    if regex == '':
        return empty_dfa()

    postfix = to_postfix(regex)
    try:
        nfa = ThompsonBuilder().build(postfix)
    except MalformedExpressionError as e:
        raise InvalidRegexError(f"Invalid regular expression: {e}", MALFORMED_EXPRESSION) from e
    return nfa_to_dfa(nfa)


def convert(regex):
    try:
        return Conversion(regex_to_dfa(regex), None)
    except InvalidRegexError as e:
        logger.warning("conversion de %r impossible : %s", regex, e)
        return Conversion(None, e)
