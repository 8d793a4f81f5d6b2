"""
Automata classes and the subset construction.

The construction trace is logged with loguru and is disabled for this
package by default; call ``logger.enable("nfa2dfa")`` to see it.
"""

from loguru import logger

from nfa2dfa.automata.closure import EPSILON, epsilon_closure
from nfa2dfa.automata.fsa import DFA, NFA, InvalidAutomaton, canonical_label
from nfa2dfa.automata.subset import SubsetConstructor, convert

logger.disable("nfa2dfa")
