"""
Times the subset construction on the classic worst case (the n-th symbol
from the end is 1, whose DFA has 2^n states) and on random NFAs.

Usage: subsets.py [-n MAX_N] [-r REPEAT] [-d]
"""

import sys
from optparse import OptionParser

from loguru import logger

from nfa2dfa.automata import convert
from nfa2dfa.util import elapsed_ms, now
from nfa2dfa.util.testing import nth_from_last_nfa, random_nfa


def bench(name, nfa, repeat):
    best = None
    for _ in range(repeat):
        t = now()
        dfa = convert(nfa)
        ms = elapsed_ms(t)
        best = ms if best is None else min(best, ms)
    print("%-28s %6d NFA states %8d DFA states %10.3f ms" % (name, len(nfa), len(dfa), best))


def _parser():
    p = OptionParser()
    p.add_option(
        "-n",
        "--max-n",
        dest="max_n",
        type="int",
        default=14,
        help="Largest n for the nth-from-last automaton.",
    )
    p.add_option(
        "-r",
        "--repeat",
        dest="repeat",
        type="int",
        default=3,
        help="Number of timed runs per automaton; the best is reported.",
    )
    p.add_option(
        "-d",
        "--debug",
        dest="debug",
        action="store_true",
        default=False,
        help="Log the construction trace to stderr.",
    )
    return p


def main(argv):
    options, _ = _parser().parse_args(argv)
    if options.debug:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("nfa2dfa")

    for n in range(2, options.max_n + 1, 2):
        bench("nth-from-last n=%d" % n, nth_from_last_nfa(n), options.repeat)
    for size in (10, 20, 40):
        nfa = random_nfa(size, symbols="abc", density=0.1, seed=size)
        bench("random size=%d" % size, nfa, options.repeat)


if __name__ == "__main__":
    main(sys.argv[1:])
