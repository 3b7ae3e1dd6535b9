# ebnf/grammar/loader.py
"""Grammar file loader

- accepts `str` or `Path`
- drops a leading UTF-8 BOM (editors on Windows like to add one)
- newlines normalised to '\\n' so error line:col match what editors show
- undecodable bytes are reported as GrammarFileError, an OSError, with the
  file name and byte offset instead of a bare UnicodeDecodeError
"""

from __future__ import annotations
from pathlib    import Path
from typing     import Union


class GrammarFileError(OSError):
    pass


def load_grammar_text(path: Union[str, Path]) -> str:
    path = Path(path)
    data = path.read_bytes()
    try:
        text = data.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise GrammarFileError(f"{path}: not valid UTF-8 at byte {e.start}") from e
    return text.replace("\r\n", "\n").replace("\r", "\n")
