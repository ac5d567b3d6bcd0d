import copy
import io
import itertools

import pytest
from qualfsa.automata.fsa import (
    DFA,
    StateLimitError,
    canonicalize,
    intersection,
    product,
    union,
    universal_dfa,
)
from qualfsa.automata.literal import contains_dfa, ends_with_dfa, starts_with_dfa


def all_strings(alphabet, maxlen):
    for n in range(maxlen + 1):
        for chars in itertools.product(alphabet, repeat=n):
            yield "".join(chars)


def check_dead_state(canon):
    qualifying = [
        state
        for state in canon.states
        if not canon.is_final(state)
        and all(canon.transitions[state][label] == [state] for label in canon.alphabet)
    ]
    if canon.dead_state is None:
        assert qualifying == []
    else:
        assert canon.dead_state == qualifying[0]


def test_dfa_basics():
    dfa = DFA("ab")
    q0 = dfa.add_state()
    q1 = dfa.add_state()
    assert (q0, q1) == (0, 1)
    assert not dfa.is_total()

    dfa.add_transition(q0, "a", q1)
    dfa.set_default_transition(q0, q0)
    dfa.set_default_transition(q1, q1)
    dfa.add_final_state(q1)

    assert dfa.is_total()
    assert dfa.transitions == [[1, 0], [1, 1]]
    assert dfa.next_state(q0, "a") == q1
    assert dfa.next_state(q0, "z") is None
    assert dfa.next_states(q0, "b") == frozenset([q0])
    assert dfa.next_states(q0, "z") == frozenset()
    assert dfa.accept("ba")
    assert not dfa.accept("bb")
    assert not dfa.accept("az")
    assert list(dfa.all_states()) == [0, 1]


def test_add_transition_unknown_label():
    dfa = DFA("ab")
    dfa.add_state()
    with pytest.raises(KeyError):
        dfa.add_transition(0, "c", 0)


def test_dfa_dump():
    dfa = starts_with_dfa("ab", "a")
    out = io.StringIO()
    dfa.dump(out)
    lines = out.getvalue().splitlines()
    assert lines[0].split() == ["@", "0"]
    assert lines[1].split() == ["a", "->", "1", "||"]
    assert lines[2].split() == ["b", "->", "2"]


def test_universal():
    dfa = universal_dfa("01")
    assert len(dfa) == 1
    assert dfa.is_total()
    for s in all_strings("01", 5):
        assert dfa.accept(s)


def test_intersection_language():
    sw = starts_with_dfa("ab", "a")
    ew = ends_with_dfa("ab", "b")
    both = intersection(sw, ew)
    assert both.initial == 0
    assert both.is_total()
    for s in all_strings("ab", 7):
        assert both.accept(s) == (s.startswith("a") and s.endswith("b")), s


def test_intersection_reachable_only():
    both = intersection(starts_with_dfa("ab", "a"), ends_with_dfa("ab", "b"))
    assert len(both) == 5

    # Only three of the nine state pairs are reachable
    never = intersection(starts_with_dfa("ab", "a"), starts_with_dfa("ab", "b"))
    assert len(never) == 3
    assert never.final_states == set()
    assert never.transitions == [[1, 2], [1, 1], [2, 2]]


def test_intersection_does_not_modify_operands():
    dfa1 = contains_dfa("ab", "aba")
    dfa2 = ends_with_dfa("ab", "bb")
    before1 = copy.deepcopy((dfa1.transitions, dfa1.final_states, dfa1.initial))
    before2 = copy.deepcopy((dfa2.transitions, dfa2.final_states, dfa2.initial))
    intersection(dfa1, dfa2)
    assert (dfa1.transitions, dfa1.final_states, dfa1.initial) == before1
    assert (dfa2.transitions, dfa2.final_states, dfa2.initial) == before2


def test_intersection_with_universal_keeps_language():
    dfa = contains_dfa("ab", "bab")
    both = intersection(universal_dfa("ab"), dfa)
    for s in all_strings("ab", 7):
        assert both.accept(s) == dfa.accept(s)


def test_union_language():
    either = union(starts_with_dfa("ab", "a"), ends_with_dfa("ab", "b"))
    assert either.is_total()
    for s in all_strings("ab", 6):
        assert either.accept(s) == (s.startswith("a") or s.endswith("b")), s


def test_product_alphabet_mismatch():
    with pytest.raises(ValueError):
        intersection(contains_dfa("ab", "a"), contains_dfa("ba", "a"))


def test_product_state_limit():
    sw = starts_with_dfa("ab", "a")
    ew = ends_with_dfa("ab", "b")
    with pytest.raises(StateLimitError) as excinfo:
        product(sw, lambda x, y: x and y, ew, max_states=4)
    assert excinfo.value.limit == 4
    assert "4" in excinfo.value.message
    assert len(intersection(sw, ew, max_states=5)) == 5


def test_canonicalize_names_and_order():
    canon = canonicalize(starts_with_dfa("ab", "ab"))
    assert canon.states == ["Q0", "Q1", "Q2", "Q3"]
    assert canon.alphabet == ("a", "b")
    assert canon.start_state == "Q0"
    assert canon.final_states == ["Q2"]
    assert canon.dead_state == "Q3"
    assert canon.transitions["Q0"] == {"a": ["Q1"], "b": ["Q3"]}
    assert canon.transitions["Q1"] == {"a": ["Q3"], "b": ["Q2"]}


def test_canonicalize_pins_start_first():
    dfa = DFA("ab", initial=2)
    for _ in range(3):
        dfa.add_state()
    dfa.add_transition(2, "a", 0)
    dfa.set_default_transition(2, 1)
    dfa.set_default_transition(0, 0)
    dfa.set_default_transition(1, 1)
    dfa.add_final_state(0)

    canon = canonicalize(dfa)
    assert canon.states == ["Q0", "Q1", "Q2"]
    assert canon.start_state == "Q0"
    assert canon.transitions["Q0"] == {"a": ["Q1"], "b": ["Q2"]}
    assert canon.final_states == ["Q1"]
    assert canon.dead_state == "Q2"


def test_canonicalize_prefix():
    canon = canonicalize(contains_dfa("ab", "a"), prefix="S")
    assert canon.states == ["S0", "S1"]
    assert canon.final_states == ["S1"]


def test_canonicalize_preserves_language():
    dfas = [
        starts_with_dfa("ab", "aba"),
        ends_with_dfa("ab", "abb"),
        contains_dfa("ab", "bab"),
        intersection(contains_dfa("ab", "aa"), ends_with_dfa("ab", "ba")),
        union(starts_with_dfa("ab", "b"), contains_dfa("ab", "aab")),
    ]
    for dfa in dfas:
        canon = canonicalize(dfa)
        for s in all_strings("ab", 7):
            assert canon.accept(s) == dfa.accept(s), s


def test_canonical_is_total():
    canon = canonicalize(intersection(contains_dfa("ab", "ab"), starts_with_dfa("ab", "b")))
    for state in canon.states:
        for label in canon.alphabet:
            assert len(canon.transitions[state][label]) == 1
    assert len(list(canon.triples())) == len(canon) * len(canon.alphabet)


def test_dead_state_detection():
    dfas = [
        starts_with_dfa("ab", "ab"),
        contains_dfa("ab", "ab"),
        ends_with_dfa("ab", "ab"),
        intersection(starts_with_dfa("ab", "a"), starts_with_dfa("ab", "b")),
        intersection(starts_with_dfa("ab", "a"), ends_with_dfa("ab", "b")),
        contains_dfa("ab", "c"),
    ]
    for dfa in dfas:
        check_dead_state(canonicalize(dfa))


def test_dead_state_never_final():
    # Final states that loop on every symbol are not dead
    canon = canonicalize(contains_dfa("ab", "a"))
    assert canon.transitions["Q1"] == {"a": ["Q1"], "b": ["Q1"]}
    assert canon.dead_state is None


def test_dead_state_first_reported():
    canon = canonicalize(intersection(starts_with_dfa("ab", "a"), starts_with_dfa("ab", "b")))
    # Both Q1 and Q2 are absorbing and non-final; the first one wins
    assert canon.dead_state == "Q1"


def test_canonical_to_dict():
    canon = canonicalize(ends_with_dfa("ab", "b"))
    assert canon.to_dict() == {
        "states": ["Q0", "Q1"],
        "alphabet": ["a", "b"],
        "transitions": {
            "Q0": {"a": ["Q0"], "b": ["Q1"]},
            "Q1": {"a": ["Q0"], "b": ["Q1"]},
        },
        "startState": "Q0",
        "finalStates": ["Q1"],
        "deadState": None,
    }


def test_canonical_equality():
    assert canonicalize(contains_dfa("ab", "ab")) == canonicalize(contains_dfa("ab", "ab"))
    assert canonicalize(contains_dfa("ab", "ab")) != canonicalize(ends_with_dfa("ab", "ab"))


def test_canonical_next_state():
    canon = canonicalize(starts_with_dfa("ab", "a"))
    assert canon.next_state("Q0", "a") == "Q1"
    assert canon.next_state("Q0", "z") is None
    assert not canon.accept("az")


def test_canonical_dump():
    canon = canonicalize(starts_with_dfa("ab", "a"))
    out = io.StringIO()
    canon.dump(out)
    assert out.getvalue().splitlines() == [
        "Start state: Q0",
        "Final states: {Q1}",
        "Dead state: Q2",
        "State  a     b",
        "-> Q0  {Q1}  {Q2}",
        "* Q1   {Q1}  {Q1}",
        "Q2     {Q2}  {Q2}",
    ]
