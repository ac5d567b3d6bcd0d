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

import enum
from dataclasses import dataclass

from qualfsa.automata.fsa import AutomatonError

# Exceptions


class InvalidAlphabet(AutomatonError):
    """
    Raised when the alphabet is empty or contains symbols the engine cannot
    use.

    Attributes:
        message -- explanation of the error
    """


class InvalidQuality(AutomatonError):
    """
    Raised when a quality has an empty pattern or an unknown operator.

    Attributes:
        message -- explanation of the error
    """


# Data model


class QualityType(str, enum.Enum):
    STARTS_WITH = "starts with"
    ENDS_WITH = "ends with"
    CONTAINS = "contains"

    @classmethod
    def parse(cls, text):
        """
        Looks up an operator by its display value ("starts with") or its
        identifier ("starts_with"), ignoring case and surrounding whitespace.

        Raises:
            InvalidQuality: If ``text`` names no operator.
        """
        key = " ".join(text.strip().lower().replace("_", " ").split())
        for qtype in cls:
            if qtype.value == key:
                return qtype
        choices = ", ".join(repr(qtype.value) for qtype in cls)
        raise InvalidQuality(f"Unknown quality type {text!r}; expected one of {choices}")


@dataclass(frozen=True)
class Quality:
    """A literal-pattern constraint on the accepted strings.

    ``pattern`` may contain characters outside the working alphabet; such a
    quality can never be satisfied.
    """

    type: QualityType
    pattern: str

    def __str__(self):
        return f"{self.type.value} {self.pattern!r}"


# Validation


def normalize_alphabet(symbols):
    """
    Turns ``symbols`` (a string or any iterable of one-character strings)
    into an ordered, duplicate-free tuple.

    Duplicates are dropped, keeping the first occurrence.

    Raises:
        InvalidAlphabet: If a symbol is not a single character, or nothing is
            left after removing duplicates.
    """
    alphabet = []
    seen = set()
    for symbol in symbols:
        if not isinstance(symbol, str) or len(symbol) != 1:
            raise InvalidAlphabet(
                f"Alphabet symbols must be single characters, got {symbol!r}"
            )
        if symbol not in seen:
            seen.add(symbol)
            alphabet.append(symbol)
    if not alphabet:
        raise InvalidAlphabet("Alphabet cannot be empty")
    return tuple(alphabet)


def validate_alphabet(symbols):
    """
    Strict check for alphabets typed in by a user.

    Unlike :func:`normalize_alphabet`, duplicates are an error here, and only
    alphanumeric symbols are allowed.

    Returns:
        tuple: The validated alphabet.

    Raises:
        InvalidAlphabet: If the alphabet is empty, repeats a symbol, or has a
            non-alphanumeric symbol.
    """
    symbols = list(symbols)
    alphabet = normalize_alphabet(symbols)
    if len(alphabet) != len(symbols):
        dupes = sorted({s for s in symbols if symbols.count(s) > 1})
        raise InvalidAlphabet(f"Alphabet has duplicate symbols: {', '.join(dupes)}")
    for symbol in alphabet:
        if not symbol.isalnum():
            raise InvalidAlphabet(f"Alphabet symbol {symbol!r} is not alphanumeric")
    return alphabet


def validate_quality(quality):
    if not isinstance(quality.type, QualityType):
        raise InvalidQuality(f"Unknown quality type {quality.type!r}")
    if not quality.pattern:
        raise InvalidQuality(f"Quality {quality.type.value!r} has an empty pattern")
    return quality


def parse_quality(text):
    """
    Parses a ``"TYPE:PATTERN"`` string such as ``"contains:aba"`` or
    ``"starts with:01"`` into a validated :class:`Quality`.

    Raises:
        InvalidQuality: If the separator is missing, the type is unknown, or
            the pattern is empty.
    """
    qtype, sep, pattern = text.partition(":")
    if not sep:
        raise InvalidQuality(f"Expected TYPE:PATTERN, got {text!r}")
    return validate_quality(Quality(QualityType.parse(qtype), pattern))
