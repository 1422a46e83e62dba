# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from dataclasses import dataclass
from typing import Any, Sequence

from .pos import Pos


@dataclass(frozen=True)
class Result:
  '''
  The outcome of applying a rule.
  `position` is where the input continues; on failure it equals `start`, the position the rule was applied at.
  '''
  matched:bool
  position:Pos
  start:Pos

  def __bool__(self) -> bool: return self.matched

  @property
  def slc(self) -> slice: return slice(self.start.idx, self.position.idx)

  @property
  def length(self) -> int: return self.position.idx - self.start.idx

  @property
  def elems(self) -> Sequence[Any]:
    'The consumed subsequence.'
    return self.start.elems(self.position)


def make_result(matched:bool, position:Pos, start:Pos|None=None) -> Result:
  'Create a Result; `start` defaults to `position`, as for zero-width rules.'
  return Result(matched, position, position if start is None else start)
