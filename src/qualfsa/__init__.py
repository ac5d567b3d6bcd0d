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

"""Builds finite automata for conjunctions of literal-pattern qualities.

Example::

    from qualfsa import Quality, QualityType, generate

    nfa = generate("ab", [Quality(QualityType.CONTAINS, "aba")])
    nfa.accept("ababa")  # True
"""

from loguru import logger

from qualfsa.automata.fsa import (
    DFA,
    AutomatonError,
    CanonicalAutomaton,
    StateLimitError,
    canonicalize,
    intersection,
)
from qualfsa.generate import DEFAULT_MAX_STATES, generate
from qualfsa.qualities import InvalidAlphabet, InvalidQuality, Quality, QualityType
from qualfsa.version import __version__, versionstring

# Library code stays quiet unless the application opts in
logger.disable("qualfsa")
