import graphviz

from subset_construction import TRAP
from thompson import EPS

LAYOUTS = {'Gauche → droite': 'dot', 'Circulaire': 'circo'}


def _label(sym):
    return EPS if sym == EPS or sym is None else str(sym)


def _digraph(engine):
    g = graphviz.Digraph(engine=engine)
    if engine == 'dot':
        g.attr(rankdir='LR', ranksep='1', nodesep='0.5')
    g.attr('node', shape='circle', fixedsize='true', width='0.8', height='0.8', fontsize='12')
    return g


# -------------------------
# Graphviz
# -------------------------
def transitions_to_dot(transitions, new_edges=None, start=None, accept=None, engine='dot'):
    g = _digraph(engine)
    if start is not None:
        g.node('start', label='', shape='point', width='0.1', height='0.1')
        g.edge('start', str(start))

    all_states = set(transitions.keys())
    for s, lst in transitions.items():
        for _, d in lst:
            all_states.add(d)

    for s in sorted(all_states):
        g.node(str(s), shape='doublecircle' if s == accept else 'circle')

    new_edges = set(new_edges or ())
    for s, lst in transitions.items():
        for sym, d in lst:
            color = 'red' if (s, sym, d) in new_edges else 'black'
            g.edge(str(s), str(d), label=graphviz.escape(_label(sym)), color=color)

    return g


def dfa_to_dot(dfa, engine='dot'):
    g = _digraph(engine)
    g.node('start', label='', shape='point', width='0.1', height='0.1')
    g.edge('start', dfa.start_state)

    for state in dfa.states:
        shape = 'doublecircle' if state in dfa.final_states else 'circle'
        color = 'lightgrey' if state == TRAP else 'white'
        g.node(state, shape=shape, style='filled', fillcolor=color)

    # une seule flèche par couple (source, destination)
    groups = {}
    for src, row in dfa.transitions.items():
        for sym, dest in row.items():
            groups.setdefault((src, dest), []).append(sym)
    for (src, dest), symbols in groups.items():
        g.edge(src, dest, label=graphviz.escape(','.join(_label(sym) for sym in symbols)))

    return g
