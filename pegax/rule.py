# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Rule base class, operator algebra and composite rules.

A rule is applied to a pair of positions `(i1, i2)` delimiting the unconsumed input, and returns a `Result`.
Rules are composed with Python operators:
* `a & b`: sequence.
* `a | b`: ordered choice; `a | on_fail(f)` calls `f(i1, i2)` when `a` fails.
* `a ^ b`: exactly one of `a` and `b`.
* `~a`: negative lookahead.
* `+a`: one or more.
* `a - b`: `a`, unless `b` also matches at the same position.
* `a % s`: one or more `a` separated by `s`.
* `a >> f`: call `f(result)` when `a` matches.

Operands that are not rules are coerced by `as_rule`: strings and bytes become literals, and predicates become single-element matchers.
Two predicates combined with `&`, `|` or `~` form a new predicate first (see `pegax.predicates`), not a composite rule.
Anything else is rejected with `DefinitionError` when the expression is built, not when it is applied.

On failure, every composite reports the position it was applied at, so that an enclosing choice retries from a clean start.
The exceptions are `Not`, `Opt` and `Test`, which never consume input on failure either but report success differently.
'''

from sys import stderr
from typing import Any, Callable, TextIO, TYPE_CHECKING, Union

from .io import writeL
from .pos import Pos, span
from .result import Result


if TYPE_CHECKING:
  from .predicates import Pred


RuleRef = Union['Rule',str,bytes,bytearray,'Pred']
FailFn = Callable[[Pos,Pos],Any]
ActionFn = Callable[[Result],Any]


class DefinitionError(Exception):
  'Raised when a grammar is composed from invalid parts.'

  def __init__(self, *msgs:Any):
    super().__init__(''.join(str(msg) for msg in msgs))



class FailHandler:
  '''
  A function to be called with `(i1, i2)` when a rule fails.
  It is only valid as the right operand of `|`, e.g. `rule | on_fail(fn)`.
  '''

  def __init__(self, fn:FailFn):
    if not callable(fn): raise DefinitionError(f'failure handler is not callable: {fn!r}')
    self.fn = fn


  def __repr__(self) -> str: return f'{type(self).__name__}({self.fn!r})'


  def __ror__(self, other:RuleRef) -> 'FailHook':
    return FailHook(other, self.fn)



def as_rule(obj:Any) -> 'Rule':
  'Return `obj` if it is a Rule, or coerce a literal or predicate into one.'
  if isinstance(obj, Rule): return obj
  from .predicates import Pred
  from .terminals import Lit, One
  if isinstance(obj, (str, bytes, bytearray)): return Lit(obj)
  if isinstance(obj, Pred): return One(obj)
  if isinstance(obj, FailHandler):
    raise DefinitionError(f'failure handler must be the right operand of `|`: {obj!r}')
  raise DefinitionError(f'operand is not a rule: {obj!r}')



class Rule:
  'A parser rule. A grammar is a graph of rules.'

  subs:tuple['Rule',...] = () # Sub-rules.


  def __call__(self, i1:Pos, i2:Pos) -> Result: raise NotImplementedError(self)


  def __repr__(self) -> str:
    return f'{type(self).__name__}({", ".join(self.repr_args())})'


  def repr_args(self) -> list[str]:
    return [repr(s) for s in self.subs]


  def match(self, seq:Any, start:int=0, end:int|None=None) -> Result:
    'Apply the rule to `seq[start:end]`.'
    i1, i2 = span(seq, start, end)
    return self(i1, i2)


  def __and__(self, other:RuleRef) -> 'And': return And(self, other)

  def __rand__(self, other:RuleRef) -> 'And': return And(other, self)


  def __or__(self, other:Union[RuleRef,FailHandler]) -> 'Rule':
    if isinstance(other, FailHandler): return FailHook(self, other.fn)
    return Or(self, other)

  def __ror__(self, other:RuleRef) -> 'Or': return Or(other, self)


  def __xor__(self, other:RuleRef) -> 'Xor': return Xor(self, other)

  def __rxor__(self, other:RuleRef) -> 'Xor': return Xor(other, self)


  def __sub__(self, other:RuleRef) -> 'And': return And(Not(other), self)

  def __rsub__(self, other:RuleRef) -> 'And': return And(Not(self), other)


  def __mod__(self, sep:RuleRef) -> 'Many': return Many(self, sep=sep, min=1)


  def __rshift__(self, fn:ActionFn) -> 'Action': return Action(self, fn)


  def __invert__(self) -> 'Not': return Not(self)


  def __pos__(self) -> 'Many': return Many(self, min=1)


  def opt(self) -> 'Opt': return Opt(self)

  def zero_or_more(self) -> 'Many': return Many(self, min=0)

  def one_or_more(self) -> 'Many': return Many(self, min=1)

  def many(self, sep:RuleRef|None=None, min:int=1, max:int|None=None) -> 'Many':
    return Many(self, sep=sep, min=min, max=max)



def _fail(i1:Pos) -> Result: return Result(False, i1, i1)



class And(Rule):
  'Match each rule in turn, each starting where the previous one stopped.'

  def __init__(self, *rules:RuleRef):
    if not rules: raise DefinitionError('And requires at least one rule')
    subs:list[Rule] = []
    for r in rules:
      rule = as_rule(r)
      if type(rule) is And: subs.extend(rule.subs) # Flatten nested sequences.
      else: subs.append(rule)
    self.subs = tuple(subs)


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    pos = i1
    for sub in self.subs:
      res = sub(pos, i2)
      if not res.matched: return _fail(i1)
      pos = res.position
    return Result(True, pos, i1)



class Or(Rule):
  'Ordered choice: the first rule that matches at the start position wins.'

  def __init__(self, *rules:RuleRef):
    if not rules: raise DefinitionError('Or requires at least one rule')
    subs:list[Rule] = []
    for r in rules:
      rule = as_rule(r)
      if type(rule) is Or: subs.extend(rule.subs)
      else: subs.append(rule)
    self.subs = tuple(subs)


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    for sub in self.subs:
      res = sub(i1, i2)
      if res.matched: return res
    return _fail(i1)



class FailHook(Rule):
  'Behaves like `rule`, and calls `fn(i1, i2)` whenever `rule` fails.'

  def __init__(self, rule:RuleRef, fn:FailFn):
    if not callable(fn): raise DefinitionError(f'failure handler is not callable: {fn!r}')
    self.subs = (as_rule(rule),)
    self.fn = fn


  def repr_args(self) -> list[str]: return [repr(self.subs[0]), repr(self.fn)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    res = self.subs[0](i1, i2)
    if not res.matched: self.fn(i1, i2)
    return res



class Xor(Rule):
  'Match exactly one of two rules, each applied at the start position.'

  def __init__(self, r1:RuleRef, r2:RuleRef):
    self.subs = (as_rule(r1), as_rule(r2))


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    r1, r2 = self.subs
    res1 = r1(i1, i2)
    res2 = r2(i1, i2)
    if res1.matched and not res2.matched: return res1
    if res2.matched and not res1.matched: return res2
    return _fail(i1)



class Not(Rule):
  'Succeed without consuming input if and only if `rule` fails.'

  def __init__(self, rule:RuleRef):
    self.subs = (as_rule(rule),)


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    return Result(not self.subs[0](i1, i2).matched, i1, i1)



class Opt(Rule):
  'Match `rule` if possible; always succeed.'

  def __init__(self, rule:RuleRef):
    self.subs = (as_rule(rule),)


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    res = self.subs[0](i1, i2)
    return res if res.matched else Result(True, i1, i1)



class Many(Rule):
  '''
  Match `rule` repeatedly, with `sep` between repetitions.
  Repetition stops at the first failure of `rule` or `sep`, or after `max` repetitions.
  A separator that is not followed by a repetition is not consumed.
  The rule succeeds if the number of repetitions is between `min` and `max`, inclusive.
  `max=None` means unbounded.
  Once a repetition after the first consumes nothing (separator included), repetition stops and counts as satisfying `min`.
  '''

  def __init__(self, rule:RuleRef, sep:RuleRef|None=None, min:int=1, max:int|None=None):
    if min < 0: raise DefinitionError(f'Many: negative min: {min}')
    if max is not None and max < min: raise DefinitionError(f'Many: max {max} is less than min {min}')
    if sep is None:
      from .terminals import empty
      sep = empty
    self.subs = (as_rule(rule), as_rule(sep))
    self.min = min
    self.max = max


  @property
  def rule(self) -> Rule: return self.subs[0]

  @property
  def sep(self) -> Rule: return self.subs[1]


  def repr_args(self) -> list[str]:
    return [*super().repr_args(), f'min={self.min}', f'max={self.max}']


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    rule, sep = self.subs
    max_ = self.max
    count = 0
    pos = i1
    while max_ is None or count < max_:
      it_pos = pos
      el_pos = pos
      if count:
        sep_res = sep(pos, i2)
        if not sep_res.matched: break
        el_pos = sep_res.position
      res = rule(el_pos, i2)
      if not res.matched: break
      count += 1
      pos = res.position
      if count > 1 and pos == it_pos:
        # Every further repetition would match the same empty span, so any count up to `max` is reachable.
        count = max(count, self.min)
        break
    if count < self.min: return _fail(i1)
    return Result(True, pos, i1)



class Ref(Rule):
  '''
  A non-owning indirection to another rule, resolved each time it is applied.
  Create it empty to forward-declare a recursive rule, then call `define`:
  `expr = Ref(name='expr'); expr.define(term % '+')`.
  '''

  def __init__(self, target:RuleRef|None=None, name:str=''):
    self.name = name
    self.target:Rule|None = None if target is None else as_rule(target)


  def __repr__(self) -> str:
    if self.name: return f'Ref({self.name!r})'
    if self.target is None: return 'Ref()'
    return f'Ref(<{type(self.target).__name__}>)' # Do not recurse; the target may refer back to this rule.


  def define(self, target:RuleRef) -> 'Ref':
    if self.target is not None: raise DefinitionError(f'{self!r} is already defined')
    self.target = as_rule(target)
    return self


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    target = self.target
    if target is None: raise DefinitionError(f'{self!r} was applied before being defined')
    return target(i1, i2)



class SkipUntil(Rule):
  '''
  Skip elements one at a time until `rule` matches, and consume through the end of that match.
  Fails if the end of the range is reached first. Intended for error recovery and scanning.
  '''

  def __init__(self, rule:RuleRef):
    self.subs = (as_rule(rule),)


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    rule = self.subs[0]
    seq = i1.seq
    for idx in range(i1.idx, i2.idx + 1):
      res = rule(Pos(seq, idx), i2)
      if res.matched: return Result(True, res.position, i1)
    return _fail(i1)



class Select(Rule):
  '''
  If `probe` matches, continue with `then` after it; otherwise apply `else_` at the start position.
  Equivalent to `(probe & then) | (~probe & else_)`, but `probe` is applied only once.
  '''

  def __init__(self, probe:RuleRef, then:RuleRef, else_:RuleRef):
    self.subs = (as_rule(probe), as_rule(then), as_rule(else_))


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    probe, then, else_ = self.subs
    probe_res = probe(i1, i2)
    if probe_res.matched:
      res = then(probe_res.position, i2)
      return Result(True, res.position, i1) if res.matched else _fail(i1)
    res = else_(i1, i2)
    return Result(True, res.position, i1) if res.matched else _fail(i1)



class Test(Rule):
  '''
  Apply `rule` for its match and side effects, but always continue from the start position.
  The matched flag is that of `rule`.
  '''

  def __init__(self, rule:RuleRef):
    self.subs = (as_rule(rule),)


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    return Result(self.subs[0](i1, i2).matched, i1, i1)



class Action(Rule):
  'Call `fn(result)` when `rule` matches. The result is passed through unchanged.'

  def __init__(self, rule:RuleRef, fn:ActionFn):
    if not callable(fn): raise DefinitionError(f'action is not callable: {fn!r}')
    self.subs = (as_rule(rule),)
    self.fn = fn


  def repr_args(self) -> list[str]: return [repr(self.subs[0]), repr(self.fn)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    res = self.subs[0](i1, i2)
    if res.matched: self.fn(res)
    return res



class Trace(Rule):
  'Write a line to `file` (default stderr) before and after each application of `rule`.'

  def __init__(self, rule:RuleRef, label:str='', file:TextIO|None=None):
    self.subs = (as_rule(rule),)
    self.label = label or repr(self.subs[0])
    self.file = file


  def repr_args(self) -> list[str]: return [repr(self.subs[0]), repr(self.label)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    file = self.file or stderr
    writeL(file, self.label, ': apply at ', i1.idx, '-', i2.idx)
    res = self.subs[0](i1, i2)
    outcome = 'matched' if res.matched else 'failed'
    writeL(file, self.label, ': ', outcome, ' ', res.start.idx, '-', res.position.idx)
    return res
