# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Top-level driver: apply a rule to a whole source and turn an overall mismatch into a ParseError.
Rules themselves never raise on mismatch; this layer is optional.
'''

from typing import Any, NoReturn

from .io import errL
from .result import Result
from .rule import Ref, Rule
from .source import Source, Syntax


class ParseError(Exception):
  error_prefix = 'parse'

  def __init__(self, source:Source, syntax:Syntax, msg:str):
    self.source = source
    self.syntax = syntax
    self.msg = msg
    super().__init__((self.syntax, self.msg))


  def __str__(self) -> str: return self.diagnostic()


  def diagnostic(self) -> str:
    return self.source.diagnostic((self.syntax, f'{self.error_prefix} error: {self.msg}'))


  def fail(self) -> NoReturn:
    self.source.fail((self.syntax, f'{self.error_prefix} error: {self.msg}'))



class ExcessInput(ParseError):
  'Raised by `parse` when the rule matches but does not consume the whole source.'



def rule_desc(rule:Rule, width:int=64) -> str:
  'A short description of a rule for messages; named references are described by name.'
  if isinstance(rule, Ref) and rule.name: return rule.name
  desc = repr(rule)
  return desc if len(desc) <= width else desc[:width-1] + '…'


def parse(rule:Rule, source:Source|Any, *, partial:bool=False, dbg:bool=False) -> Result:
  '''
  Apply `rule` to the whole of `source` (a Source, or a raw sequence which is wrapped in an unnamed Source).
  Raise ParseError if the rule fails, or ExcessInput if it stops short of the end and `partial` is not set.
  '''
  if not isinstance(source, Source): source = Source('', source)
  i1, i2 = source.span()
  res = rule(i1, i2)
  if dbg: errL('parse: ', rule_desc(rule), ': ', 'matched' if res.matched else 'failed', ' ', res.start.idx, '-', res.position.idx)
  if not res.matched:
    raise ParseError(source, i1, f'{rule_desc(rule)} did not match.')
  if not partial and res.position != i2:
    raise ExcessInput(source, slice(res.position.idx, i2.idx), 'excess input.')
  return res


def parse_or_fail(rule:Rule, source:Source|Any, *, partial:bool=False, dbg:bool=False) -> Result:
  'Like `parse`, but exit the process with a diagnostic on error.'
  try: return parse(rule, source, partial=partial, dbg=dbg)
  except ParseError as e: e.fail()
