from cached_property import cached_property
from loguru import logger

from nfa2dfa.automata.closure import EPSILON, epsilon_moves, expand

# Joins the members of a state set into a DFA state label
SEPARATOR = ","


class InvalidAutomaton(ValueError):
    """
    Raised when an NFA is not structurally well formed, for example when its
    start state or a transition endpoint is not one of its declared states.
    """


def _triple(transition):
    transition = tuple(transition)
    if len(transition) != 3:
        raise InvalidAutomaton(
            "transition %r is not a (src, label, dest) triple" % (transition,)
        )
    return transition


def canonical_label(states, separator=SEPARATOR):
    """
    Returns the canonical label of a set of NFA states.

    The label is the sorted, de-duplicated list of the states joined with
    ``separator``, so it does not depend on the order the set was built in.

    Args:
        states (iterable): The NFA states.
        separator (str, optional): The string placed between members.

    Returns:
        str: The label.

    Example:
        >>> canonical_label({"q2", "q0"}) == canonical_label(["q0", "q2", "q0"])
        True
        >>> canonical_label(["q2", "q0"])
        'q0,q2'
    """
    return separator.join(sorted(set(states)))


# Base class


class FSA:
    """
    Finite State Automaton (FSA) base class.

    Attributes:
        initial (object): The start state.
        alphabet (frozenset): The input symbols.
        final_states (set): The accepting states.

    Subclasses implement :meth:`start`, :meth:`next_state` and
    :meth:`is_final`; :meth:`accept` is written in terms of them.
    """

    def __len__(self):
        """
        Returns the number of states in the automaton.
        """
        return len(self.all_states())

    def all_states(self):
        raise NotImplementedError

    def start(self):
        """
        Returns the state a run of the automaton begins in.
        """
        return self.initial

    def next_state(self, state, label):
        """
        Returns the state reached from ``state`` by consuming ``label``.

        Raises:
            NotImplementedError: This method should be implemented in a subclass.
        """
        raise NotImplementedError

    def is_final(self, state):
        raise NotImplementedError

    def accept(self, string):
        """
        Checks if a given sequence of symbols is accepted by the automaton.

        Args:
            string (str or sequence): The input. A string is read one
                character per symbol; any other sequence is read one item per
                symbol, which allows multi-character symbols.

        Returns:
            bool: True if the automaton ends in an accepting state after
                consuming the whole input, False otherwise.

        Example:
            >>> nfa.accept("01")
            True
            >>> nfa.accept(["0", "1"])
            True
        """
        state = self.start()

        for label in string:
            state = self.next_state(state, label)
            if not state:
                return False

        return self.is_final(state)


# Implementations


class NFA(FSA):
    """
    Nondeterministic finite automaton with epsilon transitions.

    An NFA is immutable once built: the constructor copies its arguments into
    frozensets and a tuple, so the cached adjacency and closures computed
    from it never go stale and the same NFA may be converted from several
    threads at once.

    Attributes:
        states (frozenset): All states.
        alphabet (frozenset): The input symbols, which may include ``EPSILON``.
        transitions (tuple): ``(src, label, dest)`` triples, in the order given.
            Several triples may share a source and label.
        initial (str): The start state.
        final_states (frozenset): The accepting states.

    The constructor raises :class:`InvalidAutomaton` if a transition is not a
    three-item sequence; every other check is done by :meth:`validate`.

    Example:
        >>> nfa = NFA(
        ...     states=["q0", "q1"],
        ...     alphabet=["a", "ε"],
        ...     transitions=[("q0", "ε", "q1"), ("q1", "a", "q1")],
        ...     initial="q0",
        ...     final_states=["q1"],
        ... )
        >>> sorted(nfa.start())
        ['q0', 'q1']
    """

    def __init__(self, states, alphabet, transitions, initial, final_states):
        self.states = frozenset(states)
        self.alphabet = frozenset(alphabet)
        self.transitions = tuple(_triple(t) for t in transitions)
        self.initial = initial
        self.final_states = frozenset(final_states)
        self._closures = {}

    def __repr__(self):
        return "<%s %d states, %d transitions>" % (
            type(self).__name__,
            len(self.states),
            len(self.transitions),
        )

    def all_states(self):
        return self.states

    def triples(self):
        """
        Returns an iterator of the ``(src, label, dest)`` transition triples.
        """
        return iter(self.transitions)

    def symbols(self):
        """
        Returns the alphabet without ``EPSILON``, sorted.
        """
        return sorted(self.alphabet - {EPSILON})

    @cached_property
    def epsilon_moves(self):
        """
        A dictionary mapping states to the set of their epsilon destinations.
        """
        return epsilon_moves(self.transitions)

    @cached_property
    def moves(self):
        """
        A dictionary mapping ``(src, label)`` pairs to the list of
        destinations of the non-epsilon transitions with that source and
        label, in transition order.
        """
        moves = {}
        for src, label, dest in self.transitions:
            if label != EPSILON:
                moves.setdefault((src, label), []).append(dest)
        return moves

    def closure(self, state):
        """
        Returns the epsilon closure of ``state`` as a frozenset.

        Closures are remembered per state, since the subset construction asks
        for the closure of the same destination state many times.
        """
        try:
            return self._closures[state]
        except KeyError:
            closed = self._closures[state] = expand((state,), self.epsilon_moves)
            return closed

    def start(self):
        """
        Returns the epsilon closure of the initial state.
        """
        return self.closure(self.initial)

    def is_final(self, states):
        """
        Checks if any of the given states is an accepting state.

        Args:
            states (iterable): The set of states to check.

        Returns:
            bool: True if any of the states is final, False otherwise.
        """
        return not self.final_states.isdisjoint(states)

    def next_state(self, states, label):
        """
        Returns the set of states reachable from ``states`` by one transition
        labeled ``label`` followed by any number of epsilon transitions.

        Args:
            states (iterable): The set of states to start from.
            label (str): A non-epsilon input symbol.

        Returns:
            frozenset: The reached states, empty if there is no such
                transition.
        """
        moves = self.moves
        dest_states = set()
        for state in states:
            for dest in moves.get((state, label), ()):
                dest_states.update(self.closure(dest))
        return frozenset(dest_states)

    def validate(self):
        """
        Checks that the automaton is structurally well formed.

        Returns:
            NFA: This automaton, so calls can be chained.

        Raises:
            InvalidAutomaton: If there are no states, if a state label is not
                a non-empty string free of the label separator, if an alphabet
                symbol is not a non-empty string, if the start
                state, an accepting state or a transition endpoint is not a
                declared state, or if a transition uses a symbol other than
                ``EPSILON`` that is not in the alphabet.
        """
        states = self.states
        if not states:
            self._invalid("the automaton has no states")
        for state in states:
            if not isinstance(state, str) or not state or SEPARATOR in state:
                self._invalid(
                    "state %r must be a non-empty string without %r" % (state, SEPARATOR)
                )
        for label in self.alphabet:
            if not isinstance(label, str) or not label:
                self._invalid("symbol %r must be a non-empty string" % (label,))
        if self.initial not in states:
            self._invalid("start state %r is not declared" % (self.initial,))
        undeclared = self.final_states - states
        if undeclared:
            self._invalid("accept state %r is not declared" % (min(map(str, undeclared)),))
        for src, label, dest in self.transitions:
            for state in (src, dest):
                if state not in states:
                    self._invalid(
                        "transition %r uses undeclared state %r" % ((src, label, dest), state)
                    )
            if label != EPSILON and label not in self.alphabet:
                self._invalid(
                    "transition %r uses symbol %r which is not in the alphabet"
                    % ((src, label, dest), label)
                )
        return self

    def _invalid(self, message):
        logger.debug("Rejecting {!r}: {}", self, message)
        raise InvalidAutomaton(message)

    def to_dfa(self, sink=None):
        """
        Converts the NFA to an equivalent DFA with the subset construction.

        Args:
            sink (str, optional): If given, the label of an explicit dead
                state that receives every missing transition. By default the
                DFA is left partial.

        Returns:
            DFA: The converted DFA.

        Raises:
            InvalidAutomaton: If the NFA fails :meth:`validate`.
        """
        from nfa2dfa.automata.subset import convert

        return convert(self, sink=sink)


class DFA(FSA):
    """
    Deterministic finite automaton produced by the subset construction.

    Each state is the canonical label (see :func:`canonical_label`) of the
    set of NFA states it stands for.

    Attributes:
        initial (str): The label of the start state.
        alphabet (frozenset): The input symbols. Never contains ``EPSILON``.
        states (set): The labels of all states.
        state_sets (dict): Maps each label to the frozenset of NFA states it
            stands for.
        transitions (dict): Maps a source label to a dictionary of symbols
            and destination labels. States with no outgoing transitions have
            no entry.
        final_states (set): The labels of the accepting states.

    A missing ``(state, symbol)`` entry means the input is rejected; see
    :meth:`add_sink` for the explicit alternative.
    """

    def __init__(self, initial, alphabet=()):
        self.initial = initial
        self.alphabet = frozenset(alphabet)
        self.states = set()
        self.state_sets = {}
        self.transitions = {}
        self.final_states = set()

    def __repr__(self):
        return "<%s %d states, start %r>" % (type(self).__name__, len(self.states), self.initial)

    def __eq__(self, other):
        """
        Check if two DFAs have the same states, alphabet, start, accepting
        states and transition table.
        """
        if not isinstance(other, DFA):
            return NotImplemented
        return (
            self.initial == other.initial
            and self.alphabet == other.alphabet
            and self.states == other.states
            and self.final_states == other.final_states
            and self.transitions == other.transitions
        )

    def all_states(self):
        return self.states

    def add_state(self, label, nfa_states):
        """
        Adds a state labeled ``label`` standing for the NFA states
        ``nfa_states``.
        """
        self.states.add(label)
        self.state_sets[label] = frozenset(nfa_states)

    def add_transition(self, src, label, dest):
        """
        Records the transition ``src -label-> dest``.

        Only the first transition recorded for a ``(src, label)`` pair is
        kept; later calls for the same pair do nothing.

        Returns:
            bool: True if the transition was recorded.
        """
        trans = self.transitions.setdefault(src, {})
        if label in trans:
            return False
        trans[label] = dest
        return True

    def add_final_state(self, state):
        self.final_states.add(state)

    def is_final(self, state):
        return state in self.final_states

    def next_state(self, src, label):
        """
        Returns the label reached from ``src`` on ``label``, or None if no
        transition is recorded for the pair.
        """
        return self.transitions.get(src, {}).get(label)

    def triples(self):
        """
        Generates the ``(src, label, dest)`` transitions, sorted by source
        and then by label.

        This is the order used to list the DFA as ``src -label-> dest``
        lines.
        """
        for src in sorted(self.transitions):
            trans = self.transitions[src]
            for label in sorted(trans):
                yield src, label, trans[label]

    def reachable_from(self, src, inclusive=True):
        """
        Returns the set of states that can be reached from the specified
        source state.

        Args:
            src (str): The source state.
            inclusive (bool, optional): Whether the source state itself is
                included in the result. Defaults to True.

        Returns:
            set: The set of reachable states.
        """
        transitions = self.transitions

        reached = set()
        if inclusive:
            reached.add(src)

        stack = [src]
        seen = set()
        while stack:
            src = stack.pop()
            seen.add(src)
            for dest in transitions.get(src, {}).values():
                reached.add(dest)
                if dest not in seen:
                    stack.append(dest)
        return reached

    def add_sink(self, sink):
        """
        Makes the transition function total by routing every missing
        ``(state, symbol)`` pair to a non-accepting dead state labeled
        ``sink``, which loops to itself on every symbol.

        The dead state is only added if at least one pair is missing.

        Args:
            sink (str): The label of the dead state. It must not already be a
                state of this DFA.

        Returns:
            bool: True if the dead state was added.
        """
        if sink in self.states:
            raise InvalidAutomaton("sink label %r is already a state" % (sink,))

        symbols = sorted(self.alphabet)
        missing = [
            (src, label)
            for src in sorted(self.states)
            for label in symbols
            if self.next_state(src, label) is None
        ]
        if not missing:
            return False

        self.add_state(sink, ())
        for src, label in missing:
            self.add_transition(src, label, sink)
        for label in symbols:
            self.add_transition(sink, label, sink)
        return True
