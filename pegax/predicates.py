# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Element predicates for the `One` and `Run` terminals.
Predicates compose with `&`, `|` and `~` into new predicates over the same single element:
`is_alpha & is_lower` is one element that is both, and `~is_digit` is one element that is not a digit.
These operators bind before a predicate is coerced into a rule, so as a grammar operand
`~is_digit` consumes one non-digit element (unlike the non-consuming rule `~One(is_digit)`),
and `is_alpha & is_digit` matches a single element rather than a sequence of two; write `One(is_alpha) & is_digit` for that.
Character classes accept `str` elements and, for bytes input, `int` elements, which are classified as ASCII.
'''

from string import punctuation
from typing import Any, Callable, Iterable


class Pred:
  'A predicate over a single element.'

  def __init__(self, fn:Callable[[Any],bool], desc:str=''):
    self.fn = fn
    self.desc = desc or getattr(fn, '__name__', repr(fn))


  def __repr__(self) -> str: return self.desc


  def __call__(self, el:Any) -> bool: return bool(self.fn(el))


  def __and__(self, other:Any) -> 'Pred':
    if not isinstance(other, Pred): return NotImplemented
    return Pred(lambda el: self(el) and other(el), f'({self.desc} & {other.desc})')


  def __or__(self, other:Any) -> 'Pred':
    if not isinstance(other, Pred): return NotImplemented
    return Pred(lambda el: self(el) or other(el), f'({self.desc} | {other.desc})')


  def __invert__(self) -> 'Pred':
    return Pred(lambda el: not self(el), f'~{self.desc}')



def _char(el:Any) -> str|None:
  'Return `el` as a one-character string, or None if it is neither a character nor an ASCII byte.'
  if isinstance(el, str): return el if len(el) == 1 else None
  if isinstance(el, int) and 0 <= el < 0x80: return chr(el)
  return None


def _char_class(test:Callable[[str],bool], desc:str) -> Pred:
  def pred(el:Any) -> bool:
    c = _char(el)
    return c is not None and test(c)
  return Pred(pred, desc)


is_alpha = _char_class(str.isalpha, 'is_alpha')
is_alnum = _char_class(str.isalnum, 'is_alnum')
is_digit = _char_class(lambda c: '0' <= c <= '9', 'is_digit')
is_xdigit = _char_class(lambda c: c in '0123456789abcdefABCDEF', 'is_xdigit')
is_space = _char_class(str.isspace, 'is_space')
is_lower = _char_class(str.islower, 'is_lower')
is_upper = _char_class(str.isupper, 'is_upper')
is_punct = _char_class(lambda c: c in punctuation, 'is_punct')
is_any = Pred(lambda el: True, 'is_any')


def _as_el(c:Any) -> Any:
  'Normalize single-byte bytes to the int that indexing a bytes object yields.'
  if isinstance(c, (bytes, bytearray)):
    if len(c) != 1: raise ValueError(f'expected a single byte: {c!r}')
    return c[0]
  return c


def is_char(c:Any) -> Pred:
  'Match elements equal to `c`.'
  el = _as_el(c)
  return Pred(lambda x: x == el, f'is_char({c!r})')


def is_range(lo:Any, hi:Any) -> Pred:
  'Match elements between `lo` and `hi`, inclusive.'
  lo_el = _as_el(lo)
  hi_el = _as_el(hi)
  if isinstance(lo_el, str) and isinstance(hi_el, str):
    return Pred(lambda x: isinstance(x, str) and lo_el <= x <= hi_el, f'is_range({lo!r}, {hi!r})')
  return Pred(lambda x: type(x) is type(lo_el) and lo_el <= x <= hi_el, f'is_range({lo!r}, {hi!r})')


def any_of(chars:Iterable[Any]) -> Pred:
  'Match elements contained in `chars`.'
  members = frozenset(chars)
  return Pred(lambda x: x in members, f'any_of({"".join(sorted(map(str, members)))!r})')


def none_of(chars:Iterable[Any]) -> Pred:
  'Match elements not contained in `chars`.'
  members = frozenset(chars)
  return Pred(lambda x: x not in members, f'none_of({"".join(sorted(map(str, members)))!r})')
