# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Terminal rules, which inspect or consume input directly.
A terminal that fails reports the position it was applied at, so an enclosing choice can retry from the same place.
Binary-format terminals are in `pegax.binary`.
'''

from typing import Any, Callable, Sequence

from .pos import Pos
from .predicates import is_alnum, is_alpha
from .result import Result
from .rule import DefinitionError, Rule


def _fail(i1:Pos) -> Result: return Result(False, i1, i1)



class Empty(Rule):
  'Always match, consuming nothing.'

  def __call__(self, i1:Pos, i2:Pos) -> Result: return Result(True, i1, i1)


empty = Empty()



class Char(Rule):
  '''
  Match a single element equal to `value`.
  A single-byte bytes value is converted to the int that indexing bytes input yields.
  '''

  def __init__(self, value:Any):
    if isinstance(value, (bytes, bytearray)):
      if len(value) != 1: raise DefinitionError(f'Char expects a single byte: {value!r}')
      value = value[0]
    self.value = value


  def repr_args(self) -> list[str]: return [repr(self.value)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    idx = i1.idx
    if idx < i2.idx and self.value == i1.seq[idx]: return Result(True, Pos(i1.seq, idx + 1), i1)
    return _fail(i1)



class Tok(Rule):
  '''
  Match a single token equal to `value`, for token sequences produced by a lexer.
  The element's own `__eq__` is consulted first, so token types can define what they are equal to.
  '''

  def __init__(self, value:Any):
    self.value = value


  def repr_args(self) -> list[str]: return [repr(self.value)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    idx = i1.idx
    if idx < i2.idx and i1.seq[idx] == self.value: return Result(True, Pos(i1.seq, idx + 1), i1)
    return _fail(i1)



class Lit(Rule):
  '''
  Match the elements of `literal` in order.
  The literal may be a str, bytes, or any sequence of elements. The empty literal always matches.
  A str literal applied to bytes input matches its UTF-8 encoding, so `Lit('=')` matches `b'='`.
  '''

  def __init__(self, literal:Sequence[Any]):
    self.literal = literal
    self.encoded = literal.encode() if isinstance(literal, str) else None


  def repr_args(self) -> list[str]: return [repr(self.literal)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    lit = self.literal
    seq = i1.seq
    if self.encoded is not None and isinstance(seq, (bytes, bytearray)): lit = self.encoded
    n = len(lit)
    if not n: return Result(True, i1, i1)
    idx = i1.idx
    end = idx + n
    if end > i2.idx: return _fail(i1)
    if isinstance(seq, str) and isinstance(lit, str):
      matched = seq.startswith(lit, idx)
    elif isinstance(seq, (bytes, bytearray)) and isinstance(lit, (bytes, bytearray)):
      matched = seq.startswith(lit, idx)
    else:
      matched = all(seq[idx + k] == el for k, el in enumerate(lit))
    return Result(True, Pos(seq, end), i1) if matched else _fail(i1)



class One(Rule):
  'Match a single element satisfying `pred`.'

  def __init__(self, pred:Callable[[Any],bool]):
    if not callable(pred): raise DefinitionError(f'One expects a predicate: {pred!r}')
    self.pred = pred


  def repr_args(self) -> list[str]: return [repr(self.pred)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    idx = i1.idx
    if idx < i2.idx and self.pred(i1.seq[idx]): return Result(True, Pos(i1.seq, idx + 1), i1)
    return _fail(i1)



class Run(Rule):
  '''
  Match a run of consecutive elements satisfying `pred`.
  With the default `min=0, max=None` the rule always succeeds, possibly matching nothing.
  Otherwise it fails if fewer than `min` elements satisfy `pred`, and consumes at most `max` elements.
  '''

  def __init__(self, pred:Callable[[Any],bool], min:int=0, max:int|None=None):
    if not callable(pred): raise DefinitionError(f'Run expects a predicate: {pred!r}')
    if min < 0: raise DefinitionError(f'Run: negative min: {min}')
    if max is not None and max < min: raise DefinitionError(f'Run: max {max} is less than min {min}')
    self.pred = pred
    self.min = min
    self.max = max


  def repr_args(self) -> list[str]:
    args = [repr(self.pred)]
    if self.min: args.append(f'min={self.min}')
    if self.max is not None: args.append(f'max={self.max}')
    return args


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    pred = self.pred
    seq = i1.seq
    start = i1.idx
    end = i2.idx if self.max is None else min(i2.idx, start + self.max)
    idx = start
    while idx < end and pred(seq[idx]): idx += 1
    if idx - start < self.min: return _fail(i1)
    return Result(True, Pos(seq, idx), i1)



class Probe(Rule):
  '''
  Match, without consuming input, if `cond` holds.
  `cond` is either a bool or a callable taking no arguments, which is evaluated each time the rule is applied.
  '''

  def __init__(self, cond:bool|Callable[[],Any]):
    if not (isinstance(cond, bool) or callable(cond)): raise DefinitionError(f'Probe expects a bool or callable: {cond!r}')
    self.cond = cond


  def repr_args(self) -> list[str]: return [repr(self.cond)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    cond = self.cond
    matched = cond if isinstance(cond, bool) else bool(cond())
    return Result(matched, i1, i1)



class Ident(Rule):
  'Match an identifier: one alphabetic element followed by any number of alphanumeric elements.'

  def __call__(self, i1:Pos, i2:Pos) -> Result:
    seq = i1.seq
    idx = i1.idx
    end = i2.idx
    if idx >= end or not is_alpha(seq[idx]): return _fail(i1)
    idx += 1
    while idx < end and is_alnum(seq[idx]): idx += 1
    return Result(True, Pos(seq, idx), i1)


ident = Ident()



class End(Rule):
  'Match only at the end of the range.'

  def __call__(self, i1:Pos, i2:Pos) -> Result: return Result(i1 == i2, i1, i1)


end = End()



class Advance(Rule):
  '''
  Skip `offset` elements, failing if fewer remain.
  `offset` is an int, a callable returning an int, or any object with a `val` attribute such as a `BinVar`.
  Dynamic offsets are read each time the rule is applied, which supports length-prefixed fields.
  A negative offset fails.
  '''

  def __init__(self, offset:Any):
    if not (isinstance(offset, int) or callable(offset) or hasattr(offset, 'val')):
      raise DefinitionError(f'Advance expects an int, callable, or value holder: {offset!r}')
    self.offset = offset


  def repr_args(self) -> list[str]: return [repr(self.offset)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    offset = self.offset
    if isinstance(offset, int): count = offset
    elif callable(offset): count = int(offset())
    else: count = int(offset.val)
    if count < 0 or i2.idx - i1.idx < count: return _fail(i1)
    return Result(True, Pos(i1.seq, i1.idx + count), i1)



class Fn(Rule):
  'Adapt a plain callable with the rule signature `(i1, i2) -> Result` into a Rule.'

  def __init__(self, fn:Callable[[Pos,Pos],Result]):
    if not callable(fn): raise DefinitionError(f'Fn expects a callable: {fn!r}')
    self.fn = fn


  def repr_args(self) -> list[str]: return [repr(self.fn)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    res = self.fn(i1, i2)
    if not isinstance(res, Result): raise TypeError(f'{self!r} returned a non-Result value: {res!r}')
    return res
