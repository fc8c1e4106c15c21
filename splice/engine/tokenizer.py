"""
Splice Tokenizer
================

Splits source text into the fragments the parser consumes.

Structural symbols always arrive whole and alone:

    <!--  -->  </  />  //  /*  */  {...
    <  >  /  "  '  =  @  (  )  [  ]  {  }  *  \\n

Everything else is grouped into maximal runs. A ``-`` stays in a run
unless it begins ``-->``, so ``data-id`` is one fragment.

Joining the fragments always gives back the source.
"""

from __future__ import annotations

import re
from typing import List

FRAGMENT = re.compile(
    r"""
      <!-- | --> | </ | /> | // | /\* | \*/ | \{\.\.\.
    | [<>/"'=@()\[\]{}*\n]
    | (?: [^<>/"'=@()\[\]{}*\n-] | -(?!->) )+
    | -
    """,
    re.VERBOSE,
)


def tokenize(source: str) -> List[str]:
    """
    Split ``source`` into parser fragments.

    Example:
        >>> tokenize('<a href="x">')
        ['<', 'a href', '=', '"', 'x', '"', '>']
    """
    return FRAGMENT.findall(source)
