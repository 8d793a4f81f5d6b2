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
The subset (powerset) construction of a DFA from an epsilon-NFA.

Each DFA state stands for the set of NFA states the NFA could be in after
reading the same input. Sets are discovered breadth first from the epsilon
closure of the NFA start state; only reachable sets become DFA states.
"""

from collections import deque

from loguru import logger

from nfa2dfa.automata.fsa import DFA, SEPARATOR, InvalidAutomaton, canonical_label
from nfa2dfa.util import elapsed_ms, now


class SubsetConstructor:
    """
    Builds the DFA equivalent to an NFA.

    A constructor holds no state between calls to :meth:`convert`, so it
    can be reused, and the same NFA can be converted from several threads.

    Args:
        nfa (NFA): The automaton to convert.
        sink (str, optional): The label of an explicit dead state for the
            ``(state, symbol)`` pairs that have no successor. If None (the
            default) those pairs simply have no transition.

    Example:
        >>> dfa = SubsetConstructor(nfa).convert()
        >>> complete = SubsetConstructor(nfa, sink="dead").convert()
    """

    def __init__(self, nfa, sink=None):
        self.nfa = nfa
        self.sink = sink

    def check(self):
        """
        Validates the NFA and the sink label before construction starts.

        A sink label made only of NFA state names joined by the separator
        could be the label of some discovered state, so it is refused up
        front rather than after the work is done.

        Raises:
            InvalidAutomaton: If the NFA is malformed or the sink label is
                unusable.
        """
        nfa = self.nfa.validate()
        sink = self.sink
        if sink is None:
            return
        if not isinstance(sink, str) or not sink:
            raise InvalidAutomaton("sink label must be a non-empty string")
        if all(part in nfa.states for part in sink.split(SEPARATOR)):
            raise InvalidAutomaton("sink label %r could name a set of NFA states" % (sink,))

    def convert(self):
        """
        Runs the subset construction.

        Returns:
            DFA: A new DFA. Its alphabet is the NFA alphabet without epsilon,
                its start state is the label of the epsilon closure of the NFA
                start state, and a state accepts if its set contains an NFA
                accepting state.

        Raises:
            InvalidAutomaton: If :meth:`check` fails. Nothing can fail once
                construction has started.
        """
        self.check()
        nfa = self.nfa
        t = now()

        symbols = nfa.symbols()
        start = nfa.start()
        dfa = DFA(canonical_label(start), symbols)
        logger.debug("Start closure {}", dfa.initial)

        # Every set ever queued, so each is expanded exactly once
        seen = {start}
        queue = deque([start])
        while queue:
            current = queue.popleft()
            src = canonical_label(current)
            dfa.add_state(src, current)
            if nfa.is_final(current):
                dfa.add_final_state(src)
            logger.debug("Expanding {}", src)

            discovered = []
            for label in symbols:
                dest_states = nfa.next_state(current, label)
                if not dest_states:
                    continue
                dest = canonical_label(dest_states)
                if dest_states not in seen:
                    seen.add(dest_states)
                    discovered.append(dest_states)
                    logger.debug("Discovered {} from {} on {!r}", dest, src, label)
                dfa.add_transition(src, label, dest)
            queue.extend(discovered)

        if self.sink is not None and dfa.add_sink(self.sink):
            logger.debug("Added dead state {}", self.sink)

        logger.debug(
            "Converted {!r} to {} states, {} transitions in {} ms",
            nfa,
            len(dfa.states),
            sum(len(trans) for trans in dfa.transitions.values()),
            elapsed_ms(t),
        )
        return dfa


def convert(nfa, sink=None):
    """
    Converts ``nfa`` to an equivalent DFA.

    This is a shortcut for ``SubsetConstructor(nfa, sink).convert()``.
    """
    return SubsetConstructor(nfa, sink=sink).convert()
