import logging
from collections import namedtuple

logger = logging.getLogger(__name__)

CONCAT = '·'
PREC = {'|': 1, CONCAT: 2, '*': 3, '+': 3, '?': 3}
UNARY = '*+?'
OPERATORS = '()|*+?'
# caractères à échapper pour réafficher un postfix
SPECIAL = OPERATORS + '\\' + CONCAT


class Token(namedtuple('Token', ['value', 'is_operator'])):
    __slots__ = ()

    @classmethod
    def symbol(cls, value):
        return cls(value, False)

    @classmethod
    def operator(cls, value):
        return cls(value, True)

    def __str__(self):
        if not self.is_operator and self.value in SPECIAL:
            return '\\' + self.value
        return self.value


# -------------------------
# Helpers : regex -> postfix
# -------------------------
def to_postfix(regex):
    output, stack = [], []
    prev_literal = False

    def push_operator(op):
        # associativité gauche : on dépile tout ce qui a une priorité >= op
        while stack and stack[-1] != '(' and PREC[stack[-1]] >= PREC[op]:
            output.append(Token.operator(stack.pop()))
        stack.append(op)

    i = 0
    while i < len(regex):
        c = regex[i]
        escaped = False
        if c == '\\':
            i += 1
            if i >= len(regex):
                break  # antislash final ignoré
            c = regex[i]
            escaped = True

        if escaped or c not in OPERATORS:
            if prev_literal:
                push_operator(CONCAT)
            output.append(Token.symbol(c))
            prev_literal = True
        elif c == '(':
            if prev_literal:
                push_operator(CONCAT)
            stack.append(c)
            prev_literal = False
        elif c == ')':
            while stack and stack[-1] != '(':
                output.append(Token.operator(stack.pop()))
            if stack:
                stack.pop()
            prev_literal = True
        else:
            push_operator(c)
            # * + ? terminent un opérande, | non
            prev_literal = c in UNARY
        i += 1

    # une '(' non fermée part aussi dans la sortie, le constructeur la rejettera
    while stack:
        output.append(Token.operator(stack.pop()))

    logger.debug("postfix de %r : %s", regex, postfix_to_string(output))
    return output


def postfix_to_string(tokens):
    return ''.join(str(tok) for tok in tokens)
