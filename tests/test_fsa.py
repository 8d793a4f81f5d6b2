import pytest
from nfa2dfa import versionstring
from nfa2dfa.automata import DFA, EPSILON, NFA, InvalidAutomaton, canonical_label
from nfa2dfa.util import elapsed_ms, now


def _nfa(**kwargs):
    args = dict(
        states=["q0", "q1", "q2"],
        alphabet=["0", "1", EPSILON],
        transitions=[
            ("q0", EPSILON, "q1"),
            ("q1", "0", "q1"),
            ("q1", "1", "q2"),
            ("q2", "0", "q2"),
        ],
        initial="q0",
        final_states=["q2"],
    )
    args.update(kwargs)
    return NFA(**args)


def test_version():
    assert versionstring() == "1.0.0"
    assert versionstring(build=False) == "1.0"


def test_canonical_label():
    assert canonical_label({"q2", "q1"}) == "q1,q2"
    assert canonical_label(["q2", "q1"]) == canonical_label(["q1", "q2"])
    assert canonical_label(["q1", "q1", "q0"]) == "q0,q1"
    assert canonical_label(["b", "a"], separator="|") == "a|b"
    assert canonical_label(["q0"]) == "q0"


def test_canonical_label_insertion_order():
    forward = set()
    backward = set()
    names = ["q%d" % i for i in range(30)]
    for name in names:
        forward.add(name)
    for name in reversed(names):
        backward.add(name)
    assert canonical_label(forward) == canonical_label(backward)


def test_nfa_is_immutable_copy():
    states = ["q0", "q1", "q2"]
    transitions = [("q0", EPSILON, "q1")]
    nfa = _nfa(states=states, transitions=transitions)
    states.append("q3")
    transitions.append(("q1", "0", "q2"))
    assert "q3" not in nfa.states
    assert nfa.transitions == (("q0", EPSILON, "q1"),)
    assert isinstance(nfa.alphabet, frozenset)


def test_nfa_basics():
    nfa = _nfa()
    assert len(nfa) == 3
    assert nfa.symbols() == ["0", "1"]
    assert list(nfa.triples())[0] == ("q0", EPSILON, "q1")
    assert nfa.start() == {"q0", "q1"}
    assert nfa.is_final({"q1", "q2"})
    assert not nfa.is_final({"q0", "q1"})
    assert nfa.moves[("q1", "0")] == ["q1"]
    assert ("q0", EPSILON) not in nfa.moves


def test_nfa_next_state():
    nfa = _nfa()
    assert nfa.next_state(nfa.start(), "0") == {"q1"}
    assert nfa.next_state(nfa.start(), "1") == {"q2"}
    assert nfa.next_state({"q2"}, "1") == frozenset()
    assert nfa.next_state({"q0"}, "0") == frozenset()


def test_nfa_next_state_follows_epsilon():
    nfa = NFA(
        ["a", "b", "c", "d"],
        ["x"],
        [("a", "x", "b"), ("b", EPSILON, "c"), ("c", EPSILON, "d")],
        "a",
        ["d"],
    )
    assert nfa.next_state({"a"}, "x") == {"b", "c", "d"}


def test_nfa_accept():
    nfa = _nfa()
    assert nfa.accept("1")
    assert nfa.accept("0010")
    assert not nfa.accept("")
    assert not nfa.accept("11")
    assert not nfa.accept("2")
    assert nfa.accept(["0", "1"])


def test_multichar_symbols():
    nfa = NFA(
        ["start", "end"],
        ["ab", "cd"],
        [("start", "ab", "start"), ("start", "cd", "end")],
        "start",
        ["end"],
    )
    assert nfa.accept(["ab", "ab", "cd"])
    assert not nfa.accept("abcd")
    dfa = nfa.to_dfa()
    assert dfa.accept(["ab", "cd"])
    assert dfa.alphabet == {"ab", "cd"}


def test_validate_ok():
    nfa = _nfa()
    assert nfa.validate() is nfa


def test_validate_no_states():
    with pytest.raises(InvalidAutomaton):
        NFA([], [], [], "q0", []).validate()


def test_validate_start_state():
    with pytest.raises(InvalidAutomaton) as e:
        _nfa(initial="q9").validate()
    assert "q9" in str(e.value)


def test_validate_accept_state():
    with pytest.raises(InvalidAutomaton) as e:
        _nfa(final_states=["q2", "q7"]).validate()
    assert "q7" in str(e.value)


def test_validate_transition_states():
    with pytest.raises(InvalidAutomaton):
        _nfa(transitions=[("q0", "0", "q5")]).validate()
    with pytest.raises(InvalidAutomaton):
        _nfa(transitions=[("q5", "0", "q0")]).validate()


def test_validate_transition_symbol():
    with pytest.raises(InvalidAutomaton) as e:
        _nfa(transitions=[("q0", "7", "q1")]).validate()
    assert "'7'" in str(e.value)


def test_epsilon_need_not_be_declared():
    nfa = _nfa(alphabet=["0", "1"])
    assert nfa.validate() is nfa
    assert nfa.to_dfa().initial == "q0,q1"


def test_validate_state_labels():
    with pytest.raises(InvalidAutomaton):
        NFA(["q0", "a,b"], [], [], "q0", []).validate()
    with pytest.raises(InvalidAutomaton):
        NFA(["q0", ""], [], [], "q0", []).validate()
    with pytest.raises(InvalidAutomaton):
        NFA(["q0", 1], [], [], "q0", []).validate()


def test_validate_alphabet_symbols():
    with pytest.raises(InvalidAutomaton) as e:
        NFA(["q0"], ["a", 1], [("q0", "a", "q0")], "q0", []).validate()
    assert "1" in str(e.value)
    with pytest.raises(InvalidAutomaton):
        NFA(["q0"], ["a", ""], [], "q0", []).validate()
    with pytest.raises(InvalidAutomaton):
        NFA(["q0"], ["a", None], [], "q0", []).to_dfa()


def test_transition_must_be_triple():
    with pytest.raises(InvalidAutomaton) as e:
        NFA(["q0"], ["a"], [("q0", "a")], "q0", [])
    assert "('q0', 'a')" in str(e.value)
    with pytest.raises(InvalidAutomaton):
        NFA(["q0"], ["a"], [("q0", "a", "q0", "q0")], "q0", [])
    nfa = NFA(["q0"], ["a"], [["q0", "a", "q0"]], "q0", [])
    assert nfa.transitions == (("q0", "a", "q0"),)


def test_invalid_is_value_error():
    assert issubclass(InvalidAutomaton, ValueError)


def test_dfa_add_transition_once():
    dfa = DFA("a", ["x"])
    assert dfa.add_transition("a", "x", "b")
    assert not dfa.add_transition("a", "x", "c")
    assert dfa.next_state("a", "x") == "b"
    assert dfa.next_state("a", "y") is None
    assert dfa.next_state("b", "x") is None


def test_dfa_triples_sorted():
    dfa = DFA("a", ["x", "y"])
    dfa.add_transition("b", "y", "a")
    dfa.add_transition("a", "y", "b")
    dfa.add_transition("a", "x", "a")
    assert list(dfa.triples()) == [("a", "x", "a"), ("a", "y", "b"), ("b", "y", "a")]


def test_dfa_reachable_from():
    dfa = DFA("a", ["x"])
    for label in "abcd":
        dfa.add_state(label, [label])
    dfa.add_transition("a", "x", "b")
    dfa.add_transition("b", "x", "c")
    dfa.add_transition("c", "x", "b")
    assert dfa.reachable_from("a") == {"a", "b", "c"}
    assert dfa.reachable_from("a", inclusive=False) == {"b", "c"}
    assert dfa.reachable_from("d") == {"d"}


def test_dfa_add_sink():
    dfa = DFA("a", ["x", "y"])
    dfa.add_state("a", ["a"])
    dfa.add_transition("a", "x", "a")
    assert dfa.add_sink("dead")
    assert dfa.next_state("a", "y") == "dead"
    assert dfa.next_state("dead", "x") == "dead"
    assert dfa.next_state("dead", "y") == "dead"
    assert not dfa.is_final("dead")
    assert dfa.state_sets["dead"] == frozenset()
    # Already total
    assert not dfa.add_sink("other")
    with pytest.raises(InvalidAutomaton):
        dfa.add_sink("a")


def test_dfa_equality():
    a = _nfa().to_dfa()
    b = _nfa().to_dfa()
    assert a == b
    b.add_final_state("q1")
    assert a != b
    assert a != "q0,q1"


def test_elapsed_ms():
    start = now()
    assert now() >= start
    assert elapsed_ms(start) >= 0.0
