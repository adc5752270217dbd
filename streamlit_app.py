import logging
import os

import streamlit as st

from dfa_diagram import LAYOUTS, dfa_to_dot, transitions_to_dot
from regex_to_dfa import convert
from regex_to_postfix import postfix_to_string, to_postfix
from thompson import thompson_with_steps

logging.basicConfig(level=os.environ.get('REGEX_DFA_LOG_LEVEL', 'WARNING'))

DEFAULT_REGEX = 'a(b|c)*d'
EXAMPLES = {
    'a(b|c)*d': "a, puis un nombre quelconque de b ou de c, puis d",
    '(a|b)*abb': "tout mot sur {a, b} qui se termine par abb",
}

st.set_page_config(page_title="Expression régulière → DFA", layout="wide")
# Réduire l’espace blanc en haut de la page
st.markdown(
    """
    <style>
        .block-container {
            padding-top: 1rem;
            padding-bottom: 1rem;
        }
    </style>
    """,
    unsafe_allow_html=True
)

for key, default in [('regex', DEFAULT_REGEX), ('dfa', None), ('steps', []),
                     ('final_nfa', None), ('idx', 0), ('last_postfix', '')]:
    if key not in st.session_state:
        st.session_state[key] = default


def set_example(example):
    st.session_state.regex = example


def show_step(delta):
    st.session_state.idx = min(max(st.session_state.idx + delta, 0), len(st.session_state.steps) - 1)


# -------------------------
# Interface Streamlit
# -------------------------
st.title("Expression régulière → DFA")
st.caption("Thompson (NFA) puis construction des sous-ensembles (DFA complet avec état puits)")

regex = st.text_input("Expression régulière", key='regex', placeholder="Essayez : a(b|c)*d")
st.markdown("**Exemples :**")
for example, description in EXAMPLES.items():
    col_btn, col_desc = st.columns([1, 4])
    col_btn.button(example, key=f"ex_{example}", on_click=set_example, args=(example,))
    col_desc.write(description)

colA, colB = st.columns([1, 1])
with colA:
    build = st.button("Convertir en DFA", key='convert', type='primary')
with colB:
    layout = st.radio("Disposition", list(LAYOUTS), horizontal=True, key='layout')

if build:
    result = convert(regex.strip())
    if result.ok:
        st.session_state.dfa = result.dfa
        postfix = to_postfix(regex.strip())
        st.session_state.last_postfix = postfix_to_string(postfix)
        if postfix:
            st.session_state.steps, st.session_state.final_nfa = thompson_with_steps(postfix)
        else:
            st.session_state.steps, st.session_state.final_nfa = [], None
        st.session_state.idx = 0
        st.success("DFA construit avec succès.")
    else:
        # l'ancien diagramme ne doit plus être affiché
        st.session_state.dfa = None
        st.session_state.steps = []
        st.session_state.final_nfa = None
        st.error(str(result.error))
        st.caption("Essayez l'un des exemples ci-dessus.")

dfa = st.session_state.dfa
if dfa is not None:
    engine = LAYOUTS[layout]
    st.divider()
    st.subheader("Visualisation du DFA")
    st.graphviz_chart(dfa_to_dot(dfa, engine=engine).source)

    st.subheader("Détails du DFA")
    col1, col2 = st.columns(2)
    col1.markdown(f"**États :** {', '.join(dfa.states)}")
    col1.markdown(f"**Alphabet :** {', '.join(dfa.alphabet) or '∅'}")
    col2.markdown(f"**État initial :** {dfa.start_state}")
    col2.markdown(f"**États finaux :** {', '.join(dfa.final_states)}")
    if st.session_state.last_postfix:
        st.markdown(f"**Forme postfixée :** `{st.session_state.last_postfix}`")

    if dfa.alphabet:
        st.table([{'État': s, **dfa.transitions[s]} for s in dfa.states])

    word = st.text_input("Tester un mot", key='word')
    if word:
        if dfa.accepts(word):
            st.success(f"« {word} » est accepté.")
        else:
            st.warning(f"« {word} » est rejeté.")

    steps = st.session_state.steps
    if steps:
        with st.expander("Construction de Thompson pas à pas"):
            nav1, nav2 = st.columns([1, 1])
            nav1.button("← Étape précédente", on_click=show_step, args=(-1,))
            nav2.button("Étape suivante", on_click=show_step, args=(1,))
            idx = st.session_state.idx
            step = steps[idx]
            st.markdown(f"### Étape {idx+1}/{len(steps)} — Symbole : **{step['tok']}**")
            st.write(f"Pile : {step['stack']}")
            nfa = st.session_state.final_nfa
            dot = transitions_to_dot(step['transitions'], step['new'],
                                     start=nfa.start, accept=nfa.accept, engine=engine)
            st.graphviz_chart(dot.source)
else:
    st.info("Entrez une expression régulière et cliquez sur *Convertir en DFA*.")
