import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)

TRAP = 'qtrap'


@dataclass(frozen=True)
class DFA:
    states: Tuple[str, ...]
    alphabet: Tuple[str, ...]
    start_state: str
    final_states: Tuple[str, ...]
    transitions: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @property
    def trap_state(self) -> Optional[str]:
        return TRAP if TRAP in self.states else None

    def step(self, state, symbol):
        return self.transitions.get(state, {}).get(symbol)

    def accepts(self, word):
        state = self.start_state
        for symbol in word:
            state = self.step(state, symbol)
            if state is None:
                return False
        return state in self.final_states

    def to_dict(self):
        return {
            'states': list(self.states),
            'alphabet': list(self.alphabet),
            'start_state': self.start_state,
            'final_states': list(self.final_states),
            'transitions': {s: dict(row) for s, row in self.transitions.items()},
        }


# -------------------------
# NFA → DFA
# -------------------------
def collect_states(nfa):
    # parcours en profondeur, ordre de découverte conservé
    visited = {nfa.start: None}
    stack = [nfa.start]
    while stack:
        state = nfa[stack.pop()]
        successors = list(state.epsilon)
        for targets in state.transitions.values():
            successors += targets
        for d in successors:
            if d not in visited:
                visited[d] = None
                stack.append(d)
    return list(visited)


def alphabet_of(nfa, states):
    symbols = {}
    for s in states:
        for sym in nfa[s].transitions:
            symbols.setdefault(sym, None)
    return list(symbols)


def epsilon_closure(nfa, states):
    closure = set(states)
    stack = list(states)
    while stack:
        s = stack.pop()
        for d in nfa[s].epsilon:
            if d not in closure:
                closure.add(d)
                stack.append(d)
    return closure


def move(nfa, states, symbol):
    result = set()
    for s in states:
        result.update(nfa[s].transitions.get(symbol, ()))
    return epsilon_closure(nfa, result)


def state_key(states):
    return tuple(sorted(states))


def nfa_to_dfa(nfa):
    symbols = alphabet_of(nfa, collect_states(nfa))

    start_set = epsilon_closure(nfa, {nfa.start})
    labels = {state_key(start_set): 'q0'}
    dfa_states = ['q0']
    dfa_trans = {}
    finals = []
    unmarked = deque([start_set])

    while unmarked:
        T = unmarked.popleft()
        name = labels[state_key(T)]
        if any(nfa[s].accepting for s in T):
            finals.append(name)
        dfa_trans[name] = {}
        for sym in symbols:
            U = move(nfa, T, sym)
            if not U:
                continue
            key = state_key(U)
            if key not in labels:
                labels[key] = f"q{len(labels)}"
                dfa_states.append(labels[key])
                unmarked.append(U)
            dfa_trans[name][sym] = labels[key]

    # Compléter le DFA avec un état puits unique
    for name in list(dfa_states):
        for sym in symbols:
            if sym in dfa_trans[name]:
                continue
            if TRAP not in dfa_trans:
                dfa_states.append(TRAP)
                dfa_trans[TRAP] = {a: TRAP for a in symbols}
            dfa_trans[name][sym] = TRAP

    logger.debug("DFA : %d états, alphabet %s, puits %s",
                 len(dfa_states), symbols, TRAP in dfa_trans)
    return DFA(
        states=tuple(dfa_states),
        alphabet=tuple(symbols),
        start_state='q0',
        final_states=tuple(finals),
        transitions=dfa_trans,
    )
