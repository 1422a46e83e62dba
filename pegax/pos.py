# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Positions into an input sequence.
'''

from dataclasses import dataclass
from typing import Any, Sequence


_setattr = object.__setattr__


@dataclass(frozen=True, eq=False)
class Pos:
  '''
  An immutable cursor into a sequence.
  Two positions are equal when they refer to the same sequence object at the same index.
  '''
  seq:Sequence[Any]
  idx:int

  def __init__(self, seq:Sequence[Any], idx:int=0):
    if not (0 <= idx <= len(seq)): raise IndexError(idx)
    _setattr(self, 'seq', seq)
    _setattr(self, 'idx', idx)

  def __repr__(self) -> str:
    return f'Pos(<{type(self.seq).__name__}[{len(self.seq)}]>, {self.idx})'

  def __eq__(self, other:Any) -> bool:
    if not isinstance(other, Pos): return NotImplemented
    return self.seq is other.seq and self.idx == other.idx

  def __hash__(self) -> int: return hash((id(self.seq), self.idx))

  def __lt__(self, other:'Pos') -> bool: return self.idx < self._other_idx(other)
  def __le__(self, other:'Pos') -> bool: return self.idx <= self._other_idx(other)
  def __gt__(self, other:'Pos') -> bool: return self.idx > self._other_idx(other)
  def __ge__(self, other:'Pos') -> bool: return self.idx >= self._other_idx(other)

  def __add__(self, count:int) -> 'Pos':
    'Advance by `count` elements.'
    return Pos(self.seq, self.idx + count)

  def __sub__(self, other:'Pos') -> int:
    'The distance from `other` to this position.'
    return self.idx - self._other_idx(other)

  def _other_idx(self, other:'Pos') -> int:
    if not isinstance(other, Pos): raise TypeError(other)
    if self.seq is not other.seq: raise ValueError(f'positions refer to different sequences: {self!r}; {other!r}')
    return other.idx

  @property
  def el(self) -> Any:
    'The element at the cursor.'
    return self.seq[self.idx]

  def elems(self, end:'Pos') -> Sequence[Any]:
    'The subsequence from this position up to `end`.'
    return self.seq[self.idx:self._other_idx(end)]


def span(seq:Sequence[Any], start:int=0, end:int|None=None) -> tuple[Pos,Pos]:
  'Return the pair of positions delimiting `seq[start:end]`.'
  if end is None: end = len(seq)
  if start > end: raise ValueError(f'start {start} is greater than end {end}')
  return Pos(seq, start), Pos(seq, end)
