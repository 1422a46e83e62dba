# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Terminal rules for binary formats, applied to bytes-like input (or any sequence of byte-valued ints).

Values are described by `struct` format strings, e.g. '<I' for a little-endian 32-bit unsigned integer.
The read terminals write into caller-owned storage as a side effect of matching:
a `BinVar` for a single value or a fixed array of them, or a plain list for a variable-length run.
Such rules must not be applied by two parses at the same time, and each application overwrites the previous values.

A read that runs out of input fails without consuming anything,
but the bytes that were available have already been copied into the target `BinVar`.
'''

from struct import Struct
from typing import Any, Sequence

from .pos import Pos
from .result import Result
from .rule import DefinitionError, Rule


def _fail(i1:Pos) -> Result: return Result(False, i1, i1)



class BinVar:
  'Storage for a fixed-width binary value, written by the `Read` and `ReadArray` rules.'

  def __init__(self, fmt:str, val:Any=None):
    self.struct = Struct(fmt)
    self.buf = bytearray(self.struct.size)
    if val is not None: self.val = val


  def __repr__(self) -> str: return f'BinVar({self.struct.format!r}, buf={bytes(self.buf)!r})'


  @classmethod
  def array(cls, fmt:str, count:int) -> list['BinVar']:
    'Create a fixed-size array of vars for `ReadArray`.'
    return [cls(fmt) for _ in range(count)]


  @property
  def size(self) -> int: return self.struct.size


  @property
  def val(self) -> Any:
    'The unpacked value: a scalar for single-field formats, otherwise a tuple.'
    vals = self.struct.unpack(self.buf)
    return vals[0] if len(vals) == 1 else vals

  @val.setter
  def val(self, val:Any) -> None:
    packed = self.struct.pack(*val) if isinstance(val, tuple) else self.struct.pack(val)
    self.buf[:] = packed



def _bytes_at(seq:Sequence[Any], idx:int, end:int) -> bytes:
  return bytes(seq[idx:end])



class Bin(Rule):
  '''
  Match the byte image of `value`.
  With `fmt`, the image is `struct.pack(fmt, value)`; without it, `value` must be bytes-like.
  '''

  def __init__(self, value:Any, fmt:str|None=None):
    if fmt is None:
      if not isinstance(value, (bytes, bytearray, memoryview)): raise DefinitionError(f'Bin requires a format for value: {value!r}')
      self.image = bytes(value)
    else:
      self.image = Struct(fmt).pack(value)
    self.value = value
    self.fmt = fmt


  def repr_args(self) -> list[str]:
    return [repr(self.value)] if self.fmt is None else [repr(self.value), repr(self.fmt)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    idx = i1.idx
    end = idx + len(self.image)
    if end > i2.idx or _bytes_at(i1.seq, idx, end) != self.image: return _fail(i1)
    return Result(True, Pos(i1.seq, end), i1)



class Read(Rule):
  'Read `var.size` bytes into `var`. Fails if fewer remain, leaving the available bytes copied into `var`.'

  def __init__(self, var:BinVar):
    if not isinstance(var, BinVar): raise DefinitionError(f'Read expects a BinVar: {var!r}')
    self.var = var


  def repr_args(self) -> list[str]: return [repr(self.var)]


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    buf = self.var.buf
    size = len(buf)
    idx = i1.idx
    count = min(size, i2.idx - idx)
    buf[:count] = _bytes_at(i1.seq, idx, idx + count)
    if count < size: return _fail(i1)
    return Result(True, Pos(i1.seq, idx + size), i1)



class ReadArray(Rule):
  'Read each var of a fixed-size array in turn. Stops at the first short read, leaving the array partially filled.'

  def __init__(self, vars:Sequence[BinVar]):
    if not all(isinstance(v, BinVar) for v in vars): raise DefinitionError(f'ReadArray expects a sequence of BinVar: {vars!r}')
    self.reads = tuple(Read(v) for v in vars)


  def repr_args(self) -> list[str]: return [f'<{len(self.reads)} vars>']


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    pos = i1
    for read in self.reads:
      res = read(pos, i2)
      if not res.matched: return _fail(i1)
      pos = res.position
    return Result(True, pos, i1)



class ReadSeq(Rule):
  '''
  Clear `out`, then unpack consecutive `fmt` values from the input and append them to `out`,
  until the input is exhausted or `max` values have been read.
  A trailing partial value is not consumed. Succeeds if at least `min` values were read.
  '''

  def __init__(self, fmt:str, out:list[Any], min:int=0, max:int|None=None):
    if min < 0: raise DefinitionError(f'ReadSeq: negative min: {min}')
    if max is not None and max < min: raise DefinitionError(f'ReadSeq: max {max} is less than min {min}')
    self.struct = Struct(fmt)
    if not self.struct.size: raise DefinitionError(f'ReadSeq: zero-width format: {fmt!r}')
    self.out = out
    self.min = min
    self.max = max


  def repr_args(self) -> list[str]:
    return [repr(self.struct.format), f'min={self.min}', f'max={self.max}']


  def __call__(self, i1:Pos, i2:Pos) -> Result:
    out = self.out
    out.clear()
    st = self.struct
    size = st.size
    seq = i1.seq
    idx = i1.idx
    end = i2.idx
    while (self.max is None or len(out) < self.max) and idx + size <= end:
      vals = st.unpack(_bytes_at(seq, idx, idx + size))
      out.append(vals[0] if len(vals) == 1 else vals)
      idx += size
    if len(out) < self.min: return _fail(i1)
    return Result(True, Pos(seq, idx), i1)
