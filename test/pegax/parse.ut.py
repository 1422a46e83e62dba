# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from io import StringIO

from pegax import ExcessInput, ident, is_digit, Lit, parse, parse_or_fail, ParseError, ref, Run, Source
from pegax.parse import rule_desc
from utest import utest, utest_exc, utest_val


utest(slice(0, 3), lambda: parse(ident, 'abc').slc)
utest(slice(0, 3), lambda: parse(ident, Source('s', 'abc')).slc)
utest(slice(0, 3), lambda: parse(ident, 'abc def', partial=True).slc)
utest_exc(ParseError, parse, ident, '123')
utest_exc(ExcessInput, parse, ident, 'abc def')
utest_exc(SystemExit, parse_or_fail, ident, Source('s', '123'))
utest(slice(0, 1), lambda: parse_or_fail(Lit('x'), 'x').slc)

utest('Ident()', rule_desc, ident)
utest('number', rule_desc, ref(Run(is_digit, min=1), name='number'))
utest(8, lambda: len(rule_desc(Lit('abcdefghijklmnop'), width=8)))


def parse_error(rule, source) -> str:
  try: parse(rule, source)
  except ParseError as e: return str(e)
  return ''

utest('t:1:1: parse error: Ident() did not match.\n| 1\n  ^\n', parse_error, ident, Source('t', '1\n'))
utest('t:1:3-6: parse error: excess input.\n| ab 1⏎\n    ~~~\n', parse_error, ident, Source('t', 'ab 1\n'))
utest("[0]: parse error: Lit('b') did not match.\n  ['a']\n", parse_error, Lit('b'), ['a'])


# A failure handler that raises turns a local mismatch into a precise error.
src = Source('t', 'x=\n')
assignment = ident & '=' & (Run(is_digit, min=1) | src.raise_on_fail('expected digits'))
try:
  assignment(*src.span())
  utest_val('ParseError', None)
except ParseError as e:
  utest_val('expected digits', e.msg)
  utest_val(2, e.syntax.idx)
  utest_val('t:1:3: parse error: expected digits\n| x=⏎\n    ^\n', e.diagnostic())

# A reporting handler writes a diagnostic and lets the choice backtrack.
src = Source('t', 'b')
log = StringIO()
either = (Lit('a') | src.report_on_fail('no a', file=log)) | Lit('b')
utest(slice(0, 1), lambda: parse(either, src).slc)
utest_val('t:1:1: no a\n| b⏎͓\n  ^\n', log.getvalue())
