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

"""Command line front end: builds an automaton and prints its transition table."""

import argparse
import json
import sys

from loguru import logger

from qualfsa.automata.fsa import AutomatonError
from qualfsa.generate import DEFAULT_MAX_STATES, generate
from qualfsa.qualities import parse_quality, validate_alphabet
from qualfsa.version import versionstring


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="qualfsa",
        description="Build the automaton accepting strings that satisfy every quality.",
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"qualfsa {versionstring()}"
    )
    parser.add_argument("alphabet", help="Symbols of the alphabet, e.g. 'ab' or '01'")
    parser.add_argument(
        "-q",
        "--quality",
        action="append",
        default=[],
        metavar="TYPE:PATTERN",
        help="A quality such as 'contains:aba' or 'starts with:0'. Repeat to combine.",
    )
    parser.add_argument("--json", action="store_true", help="Print the automaton as JSON")
    parser.add_argument("--max-states", type=int, default=DEFAULT_MAX_STATES)
    parser.add_argument("-v", "--verbose", action="store_true", help="Log construction steps")
    return parser


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logger.enable("qualfsa")

    try:
        alphabet = validate_alphabet(args.alphabet)
        qualities = [parse_quality(text) for text in args.quality]
        nfa = generate(alphabet, qualities, max_states=args.max_states)
    except AutomatonError as e:
        print(f"error: {e.message}", file=sys.stderr)
        return 2

    if args.json:
        json.dump(nfa.to_dict(), sys.stdout, indent=2)
        sys.stdout.write("\n")
    else:
        nfa.dump(sys.stdout)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
