# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from pegax import Lit, Pos, Source
from utest import utest, utest_exc


empty = Source(name='empty', text='')
utest(0, empty.get_line_index, 0)
utest_exc(IndexError(1), empty.get_line_index, 1)

source = Source(name='lines', text='a\nb\n')
utest(0, source.get_line_index, 0) # 'a'.
utest(0, source.get_line_index, 1) # '\n'.
utest(1, source.get_line_index, 2) # 'b'.
utest(1, source.get_line_index, 4) # End of text after the final newline.
utest_exc(IndexError(-1), source.get_line_index, -1)
utest(2, source.get_line_start, 3)
utest(4, source.get_line_end, 2)

unterminated = Source(name='unterminated', text='a\nb')
utest(1, unterminated.get_line_index, 3)

numbered = Source('numbered', 'x\ny', line_idx_start=9)
utest(10, numbered.get_line_index, 2)

binary = Source('bin', b'ab\ncd')
utest(1, binary.get_line_index, 4)
utest('cd', binary.__getitem__, slice(3, 5))

text = 'ab\ncd\n'
src = Source('t', text)
utest('t:1:2: x\n| ab\n   ^\n', src.diagnostic, (Pos(text, 1), 'x'))
utest('t:2:1-3: oops\n| cd\n  ~~\n', src.diagnostic, (slice(3, 5), 'oops'))
utest('t:1:3: eol\n| ab⏎\n    ^\n', src.diagnostic, (2, 'eol'))
utest('t:1:1-4: two lines\n| ab⏎\n  ~~~\nt:2:1-2: ending here.\n| cd\n  ~\n', src.diagnostic, (slice(0, 4), 'two lines'))
utest('', src.diagnostic, None)
utest('note: t:1:1: n\n| ab\n  ^\n', src.diagnostic, (0, 'n'), prefix='note')

res = Lit('ab').match(text)
utest('t:1:1-3: lit\n| ab\n  ~~\n', src.diagnostic, (res, 'lit'))
utest('ab', src.__getitem__, res)

missing = Source('m', 'ab')
utest('m:1:1: x\n| ab⏎͓\n  ^\n', missing.diagnostic, (0, 'x'))
quiet = Source('m', 'ab', show_missing_newline=False)
utest('m:1:1: x\n| ab\n  ^\n', quiet.diagnostic, (0, 'x'))

tokens = Source('toks', ['a', 'b', 'c'])
utest(False, lambda: tokens.is_text)
utest("toks:[1]: bad\n  ['b']\n", tokens.diagnostic, (1, 'bad'))
utest("toks:[0-2]: span\n  ['a', 'b']\n", tokens.diagnostic, (slice(0, 2), 'span'))

utest_exc(SystemExit, src.fail, (0, 'fatal'))
