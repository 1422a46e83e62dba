# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Named composition functions, equivalent to the operators defined on `Rule`,
plus the compositions that have no operator form.
'''

from typing import TextIO

from .rule import (Action, ActionFn, And, FailFn, FailHandler, FailHook, Many, Not, Opt, Or, Ref, RuleRef, Select,
  SkipUntil, Test, Trace, Xor)


def and_(*rules:RuleRef) -> And:
  'Match each rule in sequence.'
  return And(*rules)


def or_(*rules:RuleRef) -> Or:
  'Ordered choice.'
  return Or(*rules)


def xor(r1:RuleRef, r2:RuleRef) -> Xor:
  'Match exactly one of `r1` and `r2`.'
  return Xor(r1, r2)


def not_(rule:RuleRef) -> Not:
  'Succeed, consuming nothing, if `rule` fails.'
  return Not(rule)


def opt(rule:RuleRef) -> Opt: return Opt(rule)


def zero_or_more(rule:RuleRef) -> Many: return Many(rule, min=0)


def one_or_more(rule:RuleRef) -> Many: return Many(rule, min=1)


def sep_by(rule:RuleRef, sep:RuleRef) -> Many:
  'One or more `rule` separated by `sep`; same as `rule % sep`.'
  return Many(rule, sep=sep, min=1)


def difference(r1:RuleRef, r2:RuleRef) -> And:
  'Match `r1` unless `r2` also matches at the same position; same as `r1 - r2`.'
  return And(Not(r2), r1)


def many(rule:RuleRef, sep:RuleRef|None=None, min:int=1, max:int|None=None) -> Many:
  'Between `min` and `max` repetitions of `rule`, separated by `sep` if provided.'
  return Many(rule, sep=sep, min=min, max=max)


def ref(target:RuleRef|None=None, name:str='') -> Ref:
  'Refer to `target` indirectly, or forward-declare a rule to be defined later with `Ref.define`.'
  return Ref(target, name=name)


def skip_until(rule:RuleRef) -> SkipUntil:
  'Skip input until `rule` matches, then consume the match.'
  return SkipUntil(rule)


def on_fail(fn:FailFn) -> FailHandler:
  'Wrap `fn` to be used as `rule | on_fail(fn)`.'
  return FailHandler(fn)


def fail_hook(rule:RuleRef, fn:FailFn) -> FailHook:
  'Call `fn(i1, i2)` whenever `rule` fails; same as `rule | on_fail(fn)`.'
  return FailHook(rule, fn)


def select(probe:RuleRef, then:RuleRef, else_:RuleRef) -> Select:
  'If `probe` matches, continue with `then`; otherwise apply `else_` at the original position.'
  return Select(probe, then, else_)


def test(rule:RuleRef) -> Test:
  'Apply `rule` for its effects, without consuming input.'
  return Test(rule)


def action(rule:RuleRef, fn:ActionFn) -> Action:
  'Call `fn(result)` when `rule` matches; same as `rule >> fn`.'
  return Action(rule, fn)


def trace(rule:RuleRef, label:str='', file:TextIO|None=None) -> Trace:
  'Log each application of `rule` and its outcome.'
  return Trace(rule, label=label, file=file)
