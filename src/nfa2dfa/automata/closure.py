# Copyright 2023 Matt Chaput. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.

"""
Epsilon closures over a transition list of ``(src, label, dest)`` triples.
"""

# The label of an empty-string transition
EPSILON = "ε"


def epsilon_moves(transitions, epsilon=EPSILON):
    """
    Builds the adjacency mapping of the epsilon edges in a transition list.

    Args:
        transitions (iterable): ``(src, label, dest)`` triples.
        epsilon (str, optional): The label of empty-string transitions.
            Defaults to ``EPSILON``.

    Returns:
        dict: A dictionary mapping each source state that has at least one
            epsilon edge to the set of its epsilon destinations.

    Example:
        >>> moves = epsilon_moves([("a", "ε", "b"), ("a", "x", "c"), ("a", "ε", "c")])
        >>> sorted(moves["a"])
        ['b', 'c']
    """
    moves = {}
    for src, label, dest in transitions:
        if label == epsilon:
            moves.setdefault(src, set()).add(dest)
    return moves


def expand(states, moves):
    """
    Closes a set of states under an epsilon adjacency mapping.

    Args:
        states (iterable): The states to start from. They are all part of
            the result.
        moves (dict): Epsilon adjacency, as returned by
            :func:`epsilon_moves`.

    Returns:
        frozenset: Every state reachable from ``states`` by following zero
            or more epsilon edges.

    Each state enters the closed set at most once, so cycles of epsilon
    edges terminate.
    """
    closed = set(states)
    frontier = set(closed)
    while frontier:
        state = frontier.pop()
        if state in moves:
            new_states = moves[state].difference(closed)
            frontier.update(new_states)
            closed.update(new_states)
    return frozenset(closed)


def epsilon_closure(state, transitions, epsilon=EPSILON):
    """
    Returns the set of states reachable from ``state`` using only epsilon
    transitions, including ``state`` itself.

    Args:
        state (str): The state to start from.
        transitions (iterable): The automaton's full list of
            ``(src, label, dest)`` triples.
        epsilon (str, optional): The label of empty-string transitions.

    Returns:
        frozenset: The epsilon closure. A state with no epsilon edges gives
            a singleton.

    Example:
        >>> sorted(epsilon_closure("q0", [("q0", "ε", "q1"), ("q1", "ε", "q0")]))
        ['q0', 'q1']
    """
    return expand((state,), epsilon_moves(transitions, epsilon))
