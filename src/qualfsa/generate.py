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

from qualfsa.automata.fsa import canonicalize, intersection, universal_dfa
from qualfsa.automata.literal import quality_dfa
from qualfsa.qualities import normalize_alphabet

# Ceiling on the number of states explored by a single product construction
DEFAULT_MAX_STATES = 10000


def build_dfa(alphabet, qualities, max_states=DEFAULT_MAX_STATES):
    """
    Builds the working DFA for the conjunction of ``qualities``.

    The first quality's automaton seeds the result and every following
    quality is intersected into it, left to right. With no qualities the
    result is the automaton accepting every string.

    Args:
        alphabet (tuple): A normalized alphabet.
        qualities (sequence): The qualities to satisfy.
        max_states (int, optional): Ceiling passed to each intersection.

    Returns:
        DFA: The combined automaton.
    """
    if not qualities:
        return universal_dfa(alphabet)

    dfa = quality_dfa(alphabet, qualities[0])
    for quality in qualities[1:]:
        dfa = intersection(dfa, quality_dfa(alphabet, quality), max_states=max_states)
    return dfa


def generate(alphabet, qualities, max_states=DEFAULT_MAX_STATES):
    """
    Generates the automaton accepting exactly the strings over ``alphabet``
    that satisfy every quality in ``qualities``.

    Args:
        alphabet (str or iterable): The symbols. Duplicates are dropped,
            keeping the first occurrence.
        qualities (iterable): :class:`~qualfsa.qualities.Quality` objects.
            The order does not change the accepted language.
        max_states (int, optional): Ceiling on the reachable states of each
            intermediate product. Defaults to ``DEFAULT_MAX_STATES``; None
            disables the check.

    Returns:
        CanonicalAutomaton: The relabeled automaton, start state first.

    Raises:
        InvalidAlphabet: If the alphabet is empty or has a symbol that is not
            a single character.
        StateLimitError: If an intermediate product grows past ``max_states``.

    Example:
        >>> nfa = generate("ab", [Quality(QualityType.STARTS_WITH, "a"),
        ...                       Quality(QualityType.ENDS_WITH, "b")])
        >>> nfa.accept("aab"), nfa.accept("ba")
        (True, False)
    """
    alphabet = normalize_alphabet(alphabet)
    qualities = list(qualities)
    logger.debug(
        "Generating automaton over {!r} for {} qualities",
        "".join(alphabet),
        len(qualities),
    )
    return canonicalize(build_dfa(alphabet, qualities, max_states=max_states))
