# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from typing import Any

from pegax import Advance, Bin, BinVar, DefinitionError, end, Read, ReadArray, ReadSeq, Rule
from utest import utest, utest_exc, utest_seq, utest_val


def m(rule:Rule, seq:Any) -> tuple[bool,int]:
  res = rule.match(seq)
  return (res.matched, res.position.idx)


utest((True, 2), m, Bin(0x0102, '>H'), b'\x01\x02\x03')
utest((False, 0), m, Bin(0x0102, '<H'), b'\x01\x02\x03')
utest((False, 0), m, Bin(0x0102, '>H'), b'\x01')
utest((True, 1), m, Bin(b'\xff'), b'\xff')
utest((True, 2), m, Bin(b'\xff\x00'), [0xff, 0x00])
utest_exc(DefinitionError, Bin, 1)


v = BinVar('<I')
utest_val(4, v.size)
utest((True, 4), m, Read(v), b'\x01\x00\x00\x00\xff')
utest_val(1, v.val)

# A short read fails without consuming, but keeps the bytes that were available.
v = BinVar('<I')
utest((False, 0), m, Read(v), b'\xaa\xbb')
utest_val(bytearray(b'\xaa\xbb\x00\x00'), v.buf)

pair = BinVar('<BB', (1, 2))
utest_val((1, 2), pair.val)
utest_val(bytearray(b'\x01\x02'), pair.buf)
utest_exc(DefinitionError, Read, 'x')


arr = BinVar.array('<H', 3)
utest((True, 6), m, ReadArray(arr), b'\x01\x00\x02\x00\x03\x00')
utest_seq([1, 2, 3], lambda: (a.val for a in arr))

arr = BinVar.array('<H', 3)
utest((False, 0), m, ReadArray(arr), b'\x05\x00\x06')
utest_val(5, arr[0].val)
utest_val(bytearray(b'\x06\x00'), arr[1].buf)
utest_val(0, arr[2].val)


out:list[Any] = [9]
utest((True, 4), m, ReadSeq('<H', out), b'\x01\x00\x02\x00\x03')
utest_val([1, 2], out) # The trailing partial value is not consumed.
utest((True, 2), m, ReadSeq('<H', out, max=1), b'\x01\x00\x02\x00')
utest_val([1], out)
utest((False, 0), m, ReadSeq('<H', out, min=3), b'\x01\x00\x02\x00')
utest((True, 0), m, ReadSeq('<H', out), b'')
utest_val([], out)
utest((True, 4), m, ReadSeq('<BB', out), b'\x01\x02\x03\x04')
utest_val([(1, 2), (3, 4)], out)
utest_exc(DefinitionError, ReadSeq, '', out)
utest_exc(DefinitionError, ReadSeq, 'B', out, min=2, max=1)


# Length-prefixed field: the count is read from the input, then used by Advance.
n = BinVar('B')
payload = Read(n) & Advance(n)
utest((True, 3), m, payload, b'\x02ab')
utest((True, 3), m, payload & end, b'\x02ab')
utest((False, 0), m, payload & end, b'\x02abc')
utest((False, 0), m, payload, b'\x03ab')

# A magic number followed by a header field.
version = BinVar('<H')
header = Bin(b'PX') & Read(version)
utest((True, 4), m, header, b'PX\x07\x00')
utest_val(7, version.val)
utest((False, 0), m, header, b'PY\x07\x00')
