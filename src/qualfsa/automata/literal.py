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

from loguru import logger

from qualfsa.automata.fsa import DFA
from qualfsa.qualities import QualityType


def border_table(pattern):
    """
    Computes the failure function of ``pattern``.

    ``table[i]`` is the length of the longest proper prefix of
    ``pattern[:i + 1]`` that is also a suffix of it.

    Example:
        >>> border_table("abab")
        [0, 0, 1, 2]
    """
    table = [0] * len(pattern)
    length = 0
    i = 1
    while i < len(pattern):
        if pattern[i] == pattern[length]:
            length += 1
            table[i] = length
            i += 1
        elif length:
            length = table[length - 1]
        else:
            table[i] = 0
            i += 1
    return table


def starts_with_dfa(alphabet, pattern):
    """
    Builds a DFA accepting the strings that begin with ``pattern``.

    States ``0 .. n`` count the matched prefix, state ``n + 1`` is the dead
    state entered on the first mismatch.
    """
    n = len(pattern)
    dfa = DFA(alphabet)
    for _ in range(n + 2):
        dfa.add_state()
    dead = n + 1

    for i, char in enumerate(pattern):
        if char in dfa.symbol_index:
            dfa.add_transition(i, char, i + 1)
        dfa.set_default_transition(i, dead)
    dfa.set_default_transition(n, n)
    dfa.set_default_transition(dead, dead)
    dfa.add_final_state(n)
    return dfa


def _kmp_dfa(alphabet, pattern, absorbing):
    n = len(pattern)
    lps = border_table(pattern)
    dfa = DFA(alphabet)
    for _ in range(n + 1):
        dfa.add_state()

    for i in range(n + 1):
        if absorbing and i == n:
            dfa.set_default_transition(n, n)
            continue
        for char in dfa.alphabet:
            if i < n and char == pattern[i]:
                dfa.add_transition(i, char, i + 1)
                continue
            # Fall back to the longest border that can be extended by char
            j = i
            while j > 0 and (j == n or char != pattern[j]):
                j = lps[j - 1]
            if char == pattern[j]:
                j += 1
            dfa.add_transition(i, char, j)

    dfa.add_final_state(n)
    return dfa


def contains_dfa(alphabet, pattern):
    """
    Builds a DFA accepting the strings that contain ``pattern``.

    State ``i`` means the longest suffix of the input read so far that is a
    prefix of ``pattern`` has length ``i``. State ``n`` is final and
    absorbing.
    """
    return _kmp_dfa(alphabet, pattern, absorbing=True)


def ends_with_dfa(alphabet, pattern):
    """
    Builds a DFA accepting the strings that end with ``pattern``.

    Same states as :func:`contains_dfa`, but the final state keeps its
    failure transitions: after a full match of "ab", reading "a" drops back
    to state 1.
    """
    return _kmp_dfa(alphabet, pattern, absorbing=False)


_builders = {
    QualityType.STARTS_WITH: starts_with_dfa,
    QualityType.ENDS_WITH: ends_with_dfa,
    QualityType.CONTAINS: contains_dfa,
}


def quality_dfa(alphabet, quality):
    """
    Builds the DFA recognizing the language of a single quality.

    Args:
        alphabet (tuple): A non-empty, duplicate-free alphabet.
        quality (Quality): The quality. Its pattern must not be empty.

    Returns:
        DFA: A total deterministic automaton whose start state is 0 and whose
        only final state is ``len(quality.pattern)``.
    """
    dfa = _builders[quality.type](alphabet, quality.pattern)
    logger.debug("Built {} states for {}", len(dfa), quality)
    return dfa
