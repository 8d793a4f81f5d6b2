import random
from itertools import product

from nfa2dfa.automata.closure import EPSILON
from nfa2dfa.automata.fsa import NFA


def random_nfa(size, symbols="ab", density=0.3, epsilon_density=0.1, seed=None):
    """
    Generates a random NFA for tests and benchmarks.

    Args:
        size (int): Number of states, named ``q0`` to ``q<size-1>``.
        symbols (iterable): The non-epsilon alphabet.
        density (float): Probability of each possible labeled transition.
        epsilon_density (float): Probability of each possible epsilon
            transition between two distinct states.
        seed (optional): Seed for the random generator, so a failing case can
            be reproduced.

    Returns:
        NFA: An automaton starting in ``q0`` with a random, non-empty set of
            accepting states. The alphabet always includes ``EPSILON``.
    """
    rng = random.Random(seed)
    states = ["q%d" % i for i in range(size)]
    symbols = list(symbols)

    transitions = []
    for src in states:
        for dest in states:
            for label in symbols:
                if rng.random() < density:
                    transitions.append((src, label, dest))
            if src != dest and rng.random() < epsilon_density:
                transitions.append((src, EPSILON, dest))

    final_states = [s for s in states if rng.random() < 0.3] or [rng.choice(states)]
    return NFA(states, symbols + [EPSILON], transitions, states[0], final_states)


def nth_from_last_nfa(n, symbols="01", marker="1"):
    """
    Returns the NFA for strings whose ``n``-th symbol from the end is
    ``marker``. Its DFA needs 2^n states, which makes it a worst case for
    the subset construction.
    """
    states = ["s%d" % i for i in range(n + 1)]
    transitions = [("s0", label, "s0") for label in symbols]
    transitions.append(("s0", marker, "s1"))
    for i in range(1, n):
        for label in symbols:
            transitions.append((states[i], label, states[i + 1]))
    return NFA(states, symbols, transitions, "s0", [states[n]])


def all_strings(symbols, maxlen):
    """
    Generates every string over ``symbols`` of length 0 to ``maxlen`` as a
    tuple of symbols, shortest first.
    """
    symbols = sorted(symbols)
    for length in range(maxlen + 1):
        yield from product(symbols, repeat=length)
