# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Named input with line/column diagnostics.
'''

from bisect import bisect_left
from sys import stderr
from typing import Any, Generic, NoReturn, Sequence, TextIO, TYPE_CHECKING, TypeVar, Union

from .io import writeZ
from .pos import Pos, span
from .result import Result


if TYPE_CHECKING:
  from .rule import FailHandler


Syntax = Union[slice,Pos,Result,int]
SyntaxMsg = tuple[Syntax,str]


def get_syntax_slc(syntax:Syntax) -> slice:
  if isinstance(syntax, slice): return syntax
  if isinstance(syntax, Result): return syntax.slc
  if isinstance(syntax, Pos): return slice(syntax.idx, syntax.idx)
  if isinstance(syntax, int): return slice(syntax, syntax)
  raise TypeError(syntax)


_Seq = TypeVar('_Seq', bound=Sequence[Any])


class Source(Generic[_Seq]):
  '''
  Input to be parsed, with a name for diagnostics.
  `text` is usually a str or bytes; other sequences (e.g. lists of tokens) are accepted,
  but diagnostics for them report element indices instead of lines and columns.
  '''

  def __init__(self, name:str, text:_Seq, *, line_idx_start:int=0, show_missing_newline:bool=True):
    self.name = name
    self.text = text
    self.line_idx_start = line_idx_start
    self.show_missing_newline = show_missing_newline
    self.newline_positions:list[int] = []


  def __repr__(self):
    return f'{self.__class__.__name__}({self.name!r}, text=<{type(self.text).__name__}[{len(self.text)}]>)'


  @property
  def is_text(self) -> bool: return isinstance(self.text, (str, bytes, bytearray))


  def span(self) -> tuple[Pos,Pos]:
    'The pair of positions delimiting the whole text.'
    return span(self.text)


  def update_line_positions(self, pos:int) -> None:
    'Lazily update newline positions array up to `pos`. `pos` must be less than or equal to the text length.'
    start = self.newline_positions[-1] + 1 if self.newline_positions else 0
    newline_char = '\n' if isinstance(self.text, str) else ord('\n')
    for i in range(start, pos):
      if self.text[i] == newline_char: self.newline_positions.append(i)


  def get_line_index(self, pos:int) -> int:
    text = self.text
    length = len(text)
    if not (0 <= pos <= length): raise IndexError(pos)
    self.update_line_positions(pos)
    if pos == length:
      newline_count = self.line_idx_start + len(self.newline_positions)
      return (newline_count - 1) if (text and self._ends_with_newline()) else newline_count
      #^ The EOF position after a final newline belongs to the last line.
    return self.line_idx_start + bisect_left(self.newline_positions, pos) # A newline belongs to the line it ends.


  def _ends_with_newline(self) -> bool:
    text = self.text
    return text[-1] == ('\n' if isinstance(text, str) else ord('\n'))


  def get_line_start(self, pos:int) -> int:
    'Return the index of the start of the line containing `pos`.'
    text = self.text
    if isinstance(text, str):
      if pos == len(text) and text.endswith('\n'): pos -= 1
      return text.rfind('\n', 0, pos) + 1 # rfind returns -1 for no match.
    assert isinstance(text, (bytes, bytearray))
    if pos == len(text) and text.endswith(b'\n'): pos -= 1
    return text.rfind(b'\n', 0, pos) + 1


  def get_line_end(self, pos:int) -> int:
    'Return the index of the end of the line containing `pos`; a newline is the final character of its line.'
    text = self.text
    if isinstance(text, str):
      newline_pos = text.find('\n', pos)
    else:
      assert isinstance(text, (bytes, bytearray))
      newline_pos = text.find(b'\n', pos)
    return len(text) if newline_pos == -1 else newline_pos + 1


  def get_line_str(self, pos:int, end:int) -> str:
    assert pos <= end, (pos, end)
    line = self.text[pos:end]
    if isinstance(line, str): return line
    assert isinstance(line, (bytes, bytearray))
    return line.decode(errors='replace')


  def __getitem__(self, syntax:Syntax) -> Any:
    'Return the text for `syntax`; bytes are decoded.'
    slc = slice(syntax, syntax+1) if isinstance(syntax, int) else get_syntax_slc(syntax)
    part = self.text[slc]
    return part.decode(errors='replace') if isinstance(part, (bytes, bytearray)) else part


  def diagnostic(self, *syntax_msgs:SyntaxMsg|None, prefix:str='') -> str:
    return ''.join(self.diagnostic_for_syntax(sm[0], sm[1], prefix=prefix) for sm in syntax_msgs if sm is not None)


  def fail(self, *syntax_msgs:SyntaxMsg|None, prefix:str='') -> NoReturn:
    exit(self.diagnostic(*syntax_msgs, prefix=prefix))


  def diagnostic_for_syntax(self, syntax:Syntax, msg:str, *, prefix:str='') -> str:
    slc = get_syntax_slc(syntax)
    return self.diagnostic_for_pos(pos=slc.start, end=slc.stop, msg=msg, prefix=prefix)


  def diagnostic_for_pos(self, pos:int, *, end:int, prefix:str='', msg:str='') -> str:
    if not self.is_text:
      pre = (prefix + ': ') if prefix else ''
      name_colon = (self.name + ':') if self.name else ''
      loc = f'{pos}-{end}' if pos < end else str(pos)
      msg_space = ' ' if msg else ''
      return f'{pre}{name_colon}[{loc}]:{msg_space}{msg}\n  {list(self.text[pos:max(end, pos+1)])!r}\n'
    line_idx = self.get_line_index(pos)
    line_pos = self.get_line_start(pos)
    line_end = self.get_line_end(pos)
    if end <= line_end:
      return self._diagnostic(pos=pos, end=end, line_pos=line_pos, line_end=line_end, line_idx=line_idx, prefix=prefix, msg=msg)
    end_line_idx = self.get_line_index(end)
    end_line_pos = self.get_line_start(end)
    end_line_end = self.get_line_end(end)
    return (
      self._diagnostic(pos=pos, end=line_end, line_pos=line_pos, line_end=line_end, line_idx=line_idx, prefix=prefix, msg=msg) +
      self._diagnostic(pos=end_line_pos, end=end, line_pos=end_line_pos, line_end=end_line_end, line_idx=end_line_idx,
        prefix=prefix, msg='ending here.'))


  def _diagnostic(self, pos:int, end:int, line_pos:int, line_end:int, line_idx:int, *, prefix:str, msg:str) -> str:
    assert 0 <= line_pos <= pos <= end

    line_str = self.get_line_str(line_pos, line_end)

    if line_str.endswith('\n'):
      src_line = line_str[:-1]
      if pos == len(line_str) - 1 + line_pos or end == line_end:
        src_line += '⏎' # RETURN SYMBOL.
    elif self.show_missing_newline:
      src_line = line_str + '⏎͓' # RETURN SYMBOL, COMBINING X BELOW.
    else:
      src_line = line_str

    src_bar = '| ' if src_line else '|'

    indent = ''.join('\t' if c == '\t' else ' ' for c in line_str[:(pos - line_pos)])
    underline = indent + ('^' if pos >= end else '~' * (end - pos))

    col = f'{pos - line_pos + 1}-{end - line_pos + 1}' if pos < end else str(pos - line_pos + 1)
    pre = (prefix + ': ') if prefix else ''
    msg_space = '' if (not msg or msg.startswith('\n')) else ' '
    name_colon = (self.name + ':') if self.name else ''
    return f'{pre}{name_colon}{line_idx+1}:{col}:{msg_space}{msg}\n{src_bar}{src_line}\n  {underline}\n'


  def raise_on_fail(self, msg:str) -> 'FailHandler':
    'A failure handler that raises ParseError at the failing position: `rule | source.raise_on_fail(msg)`.'
    from .parse import ParseError
    from .rule import FailHandler
    def handler(i1:Pos, i2:Pos) -> None:
      raise ParseError(self, i1, msg)
    return FailHandler(handler)


  def report_on_fail(self, msg:str, file:TextIO|None=None) -> 'FailHandler':
    'A failure handler that writes a diagnostic to `file` (default stderr) and lets parsing backtrack as usual.'
    from .rule import FailHandler
    def handler(i1:Pos, i2:Pos) -> None:
      writeZ(file or stderr, self.diagnostic((i1, msg)))
    return FailHandler(handler)
