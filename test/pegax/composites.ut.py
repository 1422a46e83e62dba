# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from io import StringIO
from typing import Any

from pegax import (Action, Char, DefinitionError, empty, end, Fn, ident, is_alpha, is_digit, Lit, many, Not, on_fail, One,
  Opt, Pos, Ref, Result, Rule, Run, select, skip_until, test, Test, Trace, zero_or_more)
from utest import utest, utest_exc, utest_val


def m(rule:Rule, seq:Any, start:int=0) -> tuple[bool,int]:
  res = rule.match(seq, start)
  return (res.matched, res.position.idx)


calls:list[tuple[str,int]] = []

def recording(label:str, rule:Rule) -> Fn:
  'Wrap `rule` to record each application.'
  def apply(i1:Pos, i2:Pos) -> Result:
    calls.append((label, i1.idx))
    return rule(i1, i2)
  return Fn(apply)


# Sequence.
utest((True, 3), m, Lit('ab') & Lit('c'), 'abcd')
utest((False, 0), m, Lit('ab') & Lit('c'), 'abd')
utest((True, 4), m, Lit('a') & Lit('b') & Lit('c'), 'xabc', 1)

calls.clear()
utest((False, 0), m, Lit('x') & recording('second', Lit('y')), 'ab')
utest_val([], calls) # The second rule is not applied after the first fails.

# The sequence continues exactly where its first rule stopped.
ab = Lit('ab')
c = Lit('c')
i1, i2 = Pos('abc', 0), Pos('abc', 3)
utest_val(c(ab(i1, i2).position, i2).position, (ab & c)(i1, i2).position)

# Ordered choice.
utest((True, 1), m, Lit('a') | Lit('ab'), 'ab')
utest((True, 2), m, Lit('x') | Lit('ab'), 'ab')
utest((False, 0), m, Lit('x') | Lit('y'), 'ab')
calls.clear()
utest((True, 1), m, Lit('a') | recording('second', Lit('a')), 'a')
utest_val([], calls)

# Exclusive choice.
utest((True, 1), m, Lit('a') ^ Lit('b'), 'a')
utest((True, 1), m, Lit('a') ^ Lit('b'), 'b')
utest((False, 0), m, Lit('a') ^ Lit('ab'), 'ab')
utest((False, 0), m, Lit('a') ^ Lit('b'), 'c')

# Negative lookahead.
utest((False, 0), m, ~Lit('a'), 'a')
utest((True, 0), m, ~Lit('a'), 'b')
utest((True, 0), m, Not('a'), '')

# Optional.
utest((True, 0), m, Opt('a'), 'b')
utest((True, 1), m, Lit('a').opt(), 'a')

# Difference: a keyword prefix blocks the identifier.
utest((False, 0), m, ident - Lit('if'), 'iffy')
utest((True, 2), m, ident - Lit('if'), 'x1')
utest((False, 0), m, One(is_alpha) - Char('x'), 'x')
utest((True, 1), m, One(is_alpha) - Char('x'), 'y')

# Repetition.
utest((True, 3), m, many(Char('a'), min=2, max=3), 'aaaa')
utest((True, 2), m, many(Char('a'), min=2, max=3), 'aab')
utest((False, 0), m, many(Char('a'), min=2, max=3), 'ab')
utest((True, 0), m, many(Char('a'), min=0, max=0), 'aaa')
utest((True, 2), m, +Char('a'), 'aab')
utest((False, 0), m, +Char('a'), 'b')
utest((True, 0), m, Char('a').zero_or_more(), 'b')
utest((True, 3), m, Char('a').zero_or_more(), 'aaa')
utest((True, 5), m, Char('a') % Char(','), 'a,a,a')
utest((True, 3), m, Char('a') % Char(','), 'a,a,') # A trailing separator is not consumed.
utest((True, 1), m, Char('a') % ',', 'a;a')
utest((True, 3), m, Char('a').many(sep=',', min=2, max=2), 'a,a,a')
utest_exc(DefinitionError, many, Char('a'), min=3, max=1)
utest_exc(DefinitionError, many, Char('a'), min=-1)
# A repeated rule that can match nothing does not loop forever.
utest((True, 0), m, zero_or_more(Opt('a')), 'b')
utest((True, 2), m, zero_or_more(Opt('a')), 'aab')
utest((True, 0), m, zero_or_more(Opt('a')), '')
# An empty first item still lets the separator and later items be tried.
utest((True, 2), m, Run(is_digit) % ',', ',1')
utest((True, 3), m, Run(is_digit) % ',', '1,,')
# A zero-width repetition can be repeated as often as `min` requires.
utest((True, 0), m, many(empty, min=2), '')
utest((True, 0), m, many(Opt('a'), min=2), 'b')
utest((True, 1), m, many(Opt('a'), min=3), 'ab')
utest((True, 3), m, many(Opt('a'), sep=',', min=2), ',a,')
utest((True, 2), m, many(Opt('a'), sep=',', min=2, max=5), ',,')

# Forward references and recursion.
parens = Ref(name='parens')
parens.define('(' & parens.opt() & ')')
utest((True, 4), m, parens, '(())')
utest((False, 0), m, parens, '(()')
utest((True, 2), m, parens, '()x')
utest_exc(DefinitionError, parens.define, 'x')
utest_exc(DefinitionError, m, Ref(), 'a')
utest((True, 1), m, Ref('a'), 'a')
utest("Ref('parens')", repr, parens)

# Skipping.
utest((True, 5), m, skip_until(Lit('*/')), 'abc*/d')
utest((True, 2), m, skip_until(Lit('*/')), '*/')
utest((False, 0), m, skip_until(Lit('*/')), 'abc')
utest((True, 3), m, skip_until(end), 'abc')

# Conditional: exactly one branch is applied.
branch = select(Lit('if '), recording('then', ident), recording('else', ident))
calls.clear()
utest((True, 3), m, branch, 'abc')
utest_val([('else', 0)], calls)
calls.clear()
utest((True, 4), m, branch, 'if x')
utest_val([('then', 3)], calls)
calls.clear()
utest((False, 0), m, branch, 'if 1')
utest_val([('then', 3)], calls)

# Test applies its rule for effect and never consumes.
seen:list[Any] = []
utest((True, 0), m, test(Lit('ab') >> (lambda res: seen.append(res.elems))), 'abc')
utest_val(['ab'], seen)
utest((False, 0), m, Test('x'), 'abc')

# Actions run only on a match.
names:list[Any] = []
name = ident >> (lambda res: names.append(res.elems))
utest((True, 3), m, name, 'abc')
utest((False, 0), m, name, '1')
utest_val(['abc'], names)
utest_exc(DefinitionError, Action, 'a', None)

# Failure hooks.
fails:list[tuple[int,int]] = []
hooked = Lit('a') | on_fail(lambda i1, i2: fails.append((i1.idx, i2.idx)))
utest((False, 1), m, hooked, 'xb', 1)
utest((True, 2), m, hooked, 'xa', 1)
utest_val([(1, 2)], fails)

# Tracing.
buf = StringIO()
traced = Trace(Lit('a'), 'lit_a', file=buf)
utest((True, 1), m, traced, 'ab')
utest((False, 1), m, traced, 'ab', 1)
utest_val('lit_a: apply at 0-2\nlit_a: matched 0-1\nlit_a: apply at 1-2\nlit_a: failed 1-1\n', buf.getvalue())
utest("Lit('a')", lambda: Trace('a').label)

# No composite consumes input when it fails.
for rule in [
  Lit('a') & 'b' & 'c',
  Lit('ax') | Lit('ac'),
  Lit('a') ^ Lit('ab'),
  many('a', min=3),
  Char('a') % ',' & end,
  select('a', 'c', 'b'),
  parens,
  skip_until('z'),
  Action('abd', print),
  Trace('abd', file=StringIO()),
]:
  res = rule.match('abacus')
  utest_val(False, res.matched, desc=repr(rule))
  utest_val(0, res.position.idx, desc=repr(rule))
