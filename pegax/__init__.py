# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
pegax is a parsing expression grammar (PEG) combinator library.

A grammar is written directly as a Python expression of rules.
Applying a rule to a pair of positions `(i1, i2)` returns a `Result`:
whether it matched, and where the input continues.
Evaluation is plain recursive descent with ordered choice and full backtracking; there is no memoization.

Layers, from the bottom up:
* `pos` and `result`: positions into an input sequence, and match results.
* `terminals`, `binary`, `predicates`: rules that inspect or consume input directly.
* `rule`: the Rule base class, its operator overloads, and the composite rules.
* `algebra`: named composition functions.
* `source` and `parse`: diagnostics and an optional driver that raises ParseError.
'''

from .algebra import (action, and_, difference, fail_hook, many, not_, on_fail, one_or_more, opt, or_, ref, select, sep_by,
  skip_until, test, trace, xor, zero_or_more)
from .binary import Bin, BinVar, Read, ReadArray, ReadSeq
from .parse import ExcessInput, parse, parse_or_fail, ParseError
from .pos import Pos, span
from .predicates import (any_of, is_alnum, is_alpha, is_any, is_char, is_digit, is_lower, is_punct, is_range, is_space,
  is_upper, is_xdigit, none_of, Pred)
from .result import make_result, Result
from .rule import (Action, And, as_rule, DefinitionError, FailHandler, FailHook, Many, Not, Opt, Or, Ref, Rule, Select,
  SkipUntil, Test, Trace, Xor)
from .source import Source
from .terminals import Advance, Char, Empty, empty, End, end, Fn, Ident, ident, Lit, One, Probe, Run, Tok
