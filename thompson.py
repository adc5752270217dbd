import itertools
import logging

from regex_to_postfix import CONCAT

logger = logging.getLogger(__name__)

EPS = 'ε'


class MalformedExpressionError(ValueError):
    pass


class NFAState:
    def __init__(self, id):
        self.id = id
        self.transitions = {}  # symbole -> [ids]
        self.epsilon = []
        self.accepting = False

    def add_transition(self, symbol, target):
        self.transitions.setdefault(symbol, []).append(target)

    def add_epsilon(self, target):
        self.epsilon.append(target)


class Fragment:
    def __init__(self, start, accept):
        self.start = start
        self.accept = accept


class NFA:
    """Automate de Thompson : arène d'états indexée par identifiant."""

    def __init__(self, states, start, accept):
        self.states = states
        self.start = start
        self.accept = accept

    def __getitem__(self, id):
        return self.states[id]

    def __len__(self):
        return len(self.states)

    def transitions(self):
        return transitions_of(self.states)


def transitions_of(states):
    # format {état: [(symbole, destination), ...]}, ε en premier
    result = {}
    for s in sorted(states):
        state = states[s]
        lst = [(EPS, d) for d in state.epsilon]
        for sym, targets in state.transitions.items():
            lst += [(sym, d) for d in targets]
        result[s] = lst
    return result


# -------------------------
# Thompson construction
# -------------------------
class ThompsonBuilder:
    # un constructeur par conversion : le compteur repart de 0
    def __init__(self):
        self.counter = itertools.count()
        self.states = {}
        self.stack = []

    def new_state(self, accepting=False):
        state = NFAState(next(self.counter))
        state.accepting = accepting
        self.states[state.id] = state
        return state.id

    def pop(self, tok, count):
        if len(self.stack) < count:
            raise MalformedExpressionError(f"operator '{tok}' is missing an operand")
        frags = self.stack[-count:]
        del self.stack[-count:]
        return frags

    def absorb(self, frag):
        accept = self.states[frag.accept]
        accept.accepting = False
        return accept

    def build(self, postfix, on_step=None):
        for tok in postfix:
            if not tok.is_operator:
                s, a = self.new_state(), self.new_state(accepting=True)
                self.states[s].add_transition(tok.value, a)
                self.stack.append(Fragment(s, a))
            elif tok.value == CONCAT:
                f1, f2 = self.pop(tok.value, 2)
                self.absorb(f1).add_epsilon(f2.start)
                self.stack.append(Fragment(f1.start, f2.accept))
            elif tok.value == '|':
                f1, f2 = self.pop(tok.value, 2)
                s, a = self.new_state(), self.new_state(accepting=True)
                self.states[s].add_epsilon(f1.start)
                self.states[s].add_epsilon(f2.start)
                self.absorb(f1).add_epsilon(a)
                self.absorb(f2).add_epsilon(a)
                self.stack.append(Fragment(s, a))
            elif tok.value in '*+?':
                f, = self.pop(tok.value, 1)
                s, a = self.new_state(), self.new_state(accepting=True)
                self.states[s].add_epsilon(f.start)
                if tok.value != '+':
                    self.states[s].add_epsilon(a)
                old = self.absorb(f)
                if tok.value != '?':
                    old.add_epsilon(f.start)
                old.add_epsilon(a)
                self.stack.append(Fragment(s, a))
            else:
                raise MalformedExpressionError(f"unbalanced parenthesis '{tok.value}'")
            if on_step is not None:
                on_step(tok, self.stack, self.states)

        if not self.stack:
            raise MalformedExpressionError("empty expression")
        if len(self.stack) != 1:
            raise MalformedExpressionError(f"{len(self.stack)} operands left without operator")

        frag = self.stack.pop()
        logger.debug("NFA de Thompson : %d états", len(self.states))
        return NFA(self.states, frag.start, frag.accept)


def thompson_with_steps(postfix):
    steps = []
    seen = set()

    def snapshot(tok, stack, states):
        copy_trans = transitions_of(states)
        edges = [(s, sym, d) for s, lst in copy_trans.items() for sym, d in lst]
        steps.append({
            'tok': str(tok),
            'stack': [f"[{f.start}->{f.accept}]" for f in stack],
            'transitions': copy_trans,
            'new': [e for e in edges if e not in seen],
        })
        seen.update(edges)

    nfa = ThompsonBuilder().build(postfix, on_step=snapshot)
    return steps, nfa
