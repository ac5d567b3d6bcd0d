# Copyright 2024 The QualFSA Authors. All rights reserved.
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
# THIS SOFTWARE IS PROVIDED BY THE QUALFSA AUTHORS ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL THE QUALFSA AUTHORS OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT,
# INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING,
# BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE,
# DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY
# OF LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of the QualFSA Authors.

import operator
import sys
from collections import deque

from cached_property import cached_property
from loguru import logger

# Exceptions


class AutomatonError(Exception):
    """
    Base class for errors raised while building or composing automata.

    Attributes:
        message -- explanation of the error
    """

    def __init__(self, message):
        self.message = message
        super().__init__(message)


class StateLimitError(AutomatonError):
    """
    Raised when a product construction discovers more reachable states than
    the caller allowed.

    Attributes:
        limit -- the state ceiling that was exceeded
    """

    def __init__(self, limit):
        self.limit = limit
        super().__init__(f"Product automaton exceeded {limit} states")


# Working representation


class DFA:
    """
    Complete deterministic finite automaton over a fixed alphabet.

    States are dense integer indices starting at 0. Each state owns a row with
    one slot per alphabet position, holding the index of the single
    destination state for that symbol. A row slot is ``None`` only while the
    automaton is under construction; every builder in this package fills all
    slots before returning, so finished automata are total.

    Attributes:
        alphabet (tuple): The ordered symbols of the automaton.
        initial (int): The start state.
        transitions (list): One list of destination indices per state.
        final_states (set): The accepting states.

    Example:
        >>> dfa = DFA("ab")
        >>> q0 = dfa.add_state()
        >>> q1 = dfa.add_state()
        >>> dfa.add_transition(q0, "a", q1)
        >>> dfa.set_default_transition(q0, q0)
        >>> dfa.set_default_transition(q1, q1)
        >>> dfa.add_final_state(q1)
        >>> dfa.accept("ba")
        True
    """

    def __init__(self, alphabet, initial=0):
        """
        Initializes an empty automaton.

        Args:
            alphabet (iterable): The symbols of the automaton, in display order.
            initial (int, optional): The start state. Defaults to 0, which is
                the first state handed out by :meth:`add_state`.
        """
        self.alphabet = tuple(alphabet)
        self.initial = initial
        self.transitions = []
        self.final_states = set()

    @cached_property
    def symbol_index(self):
        """
        Maps each alphabet symbol to its position in a transition row.
        """
        return {label: pos for pos, label in enumerate(self.alphabet)}

    def __len__(self):
        return len(self.transitions)

    def __eq__(self, other):
        if not isinstance(other, DFA):
            return NotImplemented
        return (
            self.alphabet == other.alphabet
            and self.initial == other.initial
            and self.final_states == other.final_states
            and self.transitions == other.transitions
        )

    def __repr__(self):
        return f"<{type(self).__name__} {len(self)} states over {''.join(self.alphabet)!r}>"

    def all_states(self):
        return range(len(self.transitions))

    def add_state(self):
        """
        Appends a new state with no transitions and returns its index.
        """
        self.transitions.append([None] * len(self.alphabet))
        return len(self.transitions) - 1

    def add_transition(self, src, label, dest):
        """
        Sets the destination of ``src`` on ``label``, replacing any previous
        destination.

        Raises:
            KeyError: If ``label`` is not in the alphabet.
        """
        self.transitions[src][self.symbol_index[label]] = dest

    def set_default_transition(self, src, dest):
        """
        Points every still-unset slot of ``src`` at ``dest``.

        Calling this on a fresh state with ``dest == src`` makes the state loop
        on every symbol.
        """
        row = self.transitions[src]
        for pos, target in enumerate(row):
            if target is None:
                row[pos] = dest

    def add_final_state(self, state):
        self.final_states.add(state)

    def start(self):
        return self.initial

    def is_final(self, state):
        return state in self.final_states

    def next_state(self, src, label):
        """
        Returns the state reached from ``src`` on ``label``, or None if the
        label is not part of the alphabet.
        """
        pos = self.symbol_index.get(label)
        if pos is None:
            return None
        return self.transitions[src][pos]

    def next_states(self, src, label):
        """
        Returns the destinations of ``src`` on ``label`` as a frozenset.

        For a total automaton and an alphabet symbol the set always holds
        exactly one state. This is the set-shaped view used when the automaton
        is treated as a general transition relation.
        """
        dest = self.next_state(src, label)
        if dest is None:
            return frozenset()
        return frozenset((dest,))

    def accept(self, string):
        """
        Runs the automaton over ``string`` and reports whether it ends in a
        final state. A symbol outside the alphabet rejects the string.
        """
        state = self.initial
        for label in string:
            state = self.next_state(state, label)
            if state is None:
                return False
        return self.is_final(state)

    def is_total(self):
        """
        Returns True if every state has a valid destination for every symbol.
        """
        size = len(self.transitions)
        if not 0 <= self.initial < size:
            return False
        return all(
            dest is not None and 0 <= dest < size
            for row in self.transitions
            for dest in row
        )

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the automaton to ``stream``.

        The start state is marked with ``@`` and final destinations with
        ``||``.
        """
        for src in self.all_states():
            beg = "@" if src == self.initial else " "
            print(beg, src, file=stream)
            for label, dest in zip(self.alphabet, self.transitions[src]):
                end = "||" if self.is_final(dest) else ""
                print("  ", label, "->", dest, end, file=stream)


def universal_dfa(alphabet):
    """
    Returns the one-state automaton accepting every string over ``alphabet``,
    including the empty string.
    """
    dfa = DFA(alphabet)
    state = dfa.add_state()
    dfa.set_default_transition(state, state)
    dfa.add_final_state(state)
    return dfa


# Product construction


def product(dfa1, op, dfa2, max_states=None):
    """
    Computes the synchronized product of two total DFAs over the same alphabet.

    The product tracks a pair of states, one per operand. Exploration is
    breadth-first from the pair of start states and only reachable pairs are
    materialized, each receiving a fresh index in discovery order, so the
    start pair is always state 0 of the result. A pair is final when
    ``op(dfa1.is_final(s1), dfa2.is_final(s2))`` is true.

    Neither operand is modified.

    Args:
        dfa1 (DFA): The left operand.
        op (callable): Combines the two finality flags, e.g. ``operator.and_``.
        dfa2 (DFA): The right operand.
        max_states (int, optional): Ceiling on the number of product states.
            None means unlimited.

    Returns:
        DFA: The product automaton.

    Raises:
        ValueError: If the operands have different alphabets.
        StateLimitError: If more than ``max_states`` states are reachable.
    """
    if dfa1.alphabet != dfa2.alphabet:
        raise ValueError(
            f"Alphabet mismatch: {dfa1.alphabet!r} vs {dfa2.alphabet!r}"
        )

    dfa = DFA(dfa1.alphabet)
    start = (dfa1.initial, dfa2.initial)
    index = {start: dfa.add_state()}
    queue = deque([start])
    while queue:
        pair = queue.popleft()
        state1, state2 = pair
        src = index[pair]
        if op(dfa1.is_final(state1), dfa2.is_final(state2)):
            dfa.add_final_state(src)

        row = dfa.transitions[src]
        for pos, dest in enumerate(
            zip(dfa1.transitions[state1], dfa2.transitions[state2])
        ):
            if dest not in index:
                if max_states is not None and len(index) >= max_states:
                    raise StateLimitError(max_states)
                index[dest] = dfa.add_state()
                queue.append(dest)
            row[pos] = index[dest]

    logger.debug(
        "Product ({}) of {} x {} states reached {} states",
        getattr(op, "__name__", op),
        len(dfa1),
        len(dfa2),
        len(dfa),
    )
    return dfa


def intersection(dfa1, dfa2, max_states=None):
    """
    Returns a DFA accepting exactly the strings accepted by both operands.

    Example:
        >>> both = intersection(starts_with_dfa("ab", "a"), ends_with_dfa("ab", "b"))
        >>> both.accept("aab")
        True
    """
    return product(dfa1, operator.and_, dfa2, max_states=max_states)


def union(dfa1, dfa2, max_states=None):
    """
    Returns a DFA accepting the strings accepted by either operand.
    """
    return product(dfa1, operator.or_, dfa2, max_states=max_states)


# Canonical (display) representation


class CanonicalAutomaton:
    """
    Read-only automaton with display state names, produced by
    :func:`canonicalize`.

    Transitions are list-shaped (``transitions[state][label]`` is a list of
    state names) so consumers can treat the result like any other
    transition relation. For automata built by this package each list holds
    exactly one name.

    Attributes:
        states (list): Display names, the start state first.
        alphabet (tuple): The symbols, in their original order.
        transitions (dict): ``{state: {label: [dest, ...]}}``.
        start_state (str): Name of the start state.
        final_states (list): Names of the accepting states, in state order.
        dead_state (str or None): A non-final state that loops to itself on
            every symbol, if there is one.
    """

    def __init__(
        self, states, alphabet, transitions, start_state, final_states, dead_state=None
    ):
        self.states = list(states)
        self.alphabet = tuple(alphabet)
        self.transitions = transitions
        self.start_state = start_state
        self.final_states = list(final_states)
        self.dead_state = dead_state

    @cached_property
    def _final_set(self):
        return frozenset(self.final_states)

    def __len__(self):
        return len(self.states)

    def __eq__(self, other):
        if not isinstance(other, CanonicalAutomaton):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self):
        return (
            f"<{type(self).__name__} {len(self)} states, start={self.start_state}, "
            f"final={self.final_states}, dead={self.dead_state}>"
        )

    def is_final(self, state):
        return state in self._final_set

    def next_state(self, state, label):
        """
        Returns the single destination of ``state`` on ``label``, or None if
        there is none (including when ``label`` is outside the alphabet).
        """
        dests = self.transitions.get(state, {}).get(label)
        if not dests:
            return None
        return dests[0]

    def accept(self, string):
        state = self.start_state
        for label in string:
            state = self.next_state(state, label)
            if state is None:
                return False
        return self.is_final(state)

    def triples(self):
        """
        Yields ``(src, label, dest)`` for every transition, in state then
        alphabet order.
        """
        for src in self.states:
            trans = self.transitions[src]
            for label in self.alphabet:
                for dest in trans[label]:
                    yield src, label, dest

    def to_dict(self):
        """
        Returns a plain, JSON-serializable mapping of the automaton.
        """
        return {
            "states": list(self.states),
            "alphabet": list(self.alphabet),
            "transitions": {
                src: {label: list(dests) for label, dests in trans.items()}
                for src, trans in self.transitions.items()
            },
            "startState": self.start_state,
            "finalStates": list(self.final_states),
            "deadState": self.dead_state,
        }

    def dump(self, stream=sys.stdout):
        """
        Prints the transition table to ``stream``.

        ``->`` marks the start state and ``*`` marks final states. Each cell
        shows the destination set, or ``-`` if it is empty.

        Example:
            >>> generate("ab", [Quality(QualityType.ENDS_WITH, "b")]).dump()
            Start state: Q0
            Final states: {Q1}
            State  a     b
            -> Q0  {Q0}  {Q1}
            * Q1   {Q0}  {Q1}
        """
        print(f"Start state: {self.start_state}", file=stream)
        print(f"Final states: {{{', '.join(self.final_states)}}}", file=stream)
        if self.dead_state is not None:
            print(f"Dead state: {self.dead_state}", file=stream)

        def label_state(state):
            prefix = ""
            if state == self.start_state:
                prefix += "-> "
            if self.is_final(state):
                prefix += "* "
            return prefix + state

        def cell(dests):
            if not dests:
                return "-"
            return "{" + ", ".join(dests) + "}"

        rows = [["State"] + list(self.alphabet)]
        for state in self.states:
            trans = self.transitions[state]
            rows.append(
                [label_state(state)] + [cell(trans.get(label)) for label in self.alphabet]
            )
        widths = [max(len(row[col]) for row in rows) for col in range(len(rows[0]))]
        for row in rows:
            line = "  ".join(text.ljust(width) for text, width in zip(row, widths))
            print(line.rstrip(), file=stream)


def canonicalize(dfa, prefix="Q"):
    """
    Relabels a DFA with display names and detects its dead state.

    The start state becomes ``Q0``; the remaining states follow in ascending
    index order, so the output is deterministic for a given input. After
    renaming, the states are scanned in display order and the first non-final
    state whose every transition leads back to itself is reported as the dead
    state.

    Args:
        dfa (DFA): A total automaton.
        prefix (str, optional): Prefix of the display names. Defaults to "Q".

    Returns:
        CanonicalAutomaton: The relabeled automaton.

    Example:
        >>> canon = canonicalize(starts_with_dfa("ab", "a"))
        >>> canon.states, canon.dead_state
        (['Q0', 'Q1', 'Q2'], 'Q2')
    """
    order = [dfa.initial]
    order.extend(state for state in dfa.all_states() if state != dfa.initial)
    names = {state: f"{prefix}{num}" for num, state in enumerate(order)}

    transitions = {}
    for state in order:
        transitions[names[state]] = {
            label: [names[dest]]
            for label, dest in zip(dfa.alphabet, dfa.transitions[state])
        }
    final_states = [names[state] for state in order if dfa.is_final(state)]

    dead_state = None
    for state in order:
        if dfa.is_final(state):
            continue
        if all(dest == state for dest in dfa.transitions[state]):
            dead_state = names[state]
            break

    logger.debug(
        "Canonicalized {} states, {} final, dead state {}",
        len(order),
        len(final_states),
        dead_state,
    )
    return CanonicalAutomaton(
        [names[state] for state in order],
        dfa.alphabet,
        transitions,
        names[dfa.initial],
        final_states,
        dead_state,
    )
