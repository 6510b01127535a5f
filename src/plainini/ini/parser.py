# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/12 22:10:45
# @Author : Kariko Lin

"""Note: the format here is the *plain* one, like this:

    ```ini
    Key0=Value0  ; no section yet, filed under section ''.

    [SectionName]
    Key1=Value1
    Key2=a=b=c  ; only the first '=' splits.
    ```

Comments are NOT supported: the `; ...` parts above are values, verbatim.
Whitespace is never trimmed from section names, keys or values.
Lines that are neither a header nor a `key=value` pair are silently skipped.
"""

import logging
import os
import stat
from contextlib import suppress
from os import PathLike
from re import compile as regex
from tempfile import NamedTemporaryFile
from typing import NamedTuple

from .model import IniDocument
from ..abstract import FileHandler

__all__ = [
    'ParseResult', 'parse', 'serialize',
    'IniFileHandler', 'load_file', 'save_file'
]

LINE_TERMINATOR = '\r\n'
PAIR_DELIMITER = '='
# first `[...]` span with something inside, anywhere in the line.
SECTION_PATTERN = regex(r'\[(?P<name>[^\]]+)\]')


class ParseResult(NamedTuple):
    """Either a document, or the error that stopped parsing. Never both."""
    document: IniDocument | None
    error: Exception | None = None

    @property
    def success(self) -> bool:
        return self.document is not None

    def __bool__(self) -> bool:
        return self.success


def _split_pair(line: str) -> tuple[str, str] | None:
    key, sep, value = line.partition(PAIR_DELIMITER)
    if not sep or not key or not value:
        return None
    return key, value


def _parse(text: str) -> IniDocument:
    ret = IniDocument()
    this_sect = ''
    for line in text.replace('\r', '').split('\n'):
        if (m := SECTION_PATTERN.search(line)) is not None:
            this_sect = m.group('name')
            continue
        if (pair := _split_pair(line)) is not None:
            ret.set_value(this_sect, *pair)
    return ret


def parse(text: str) -> ParseResult:
    """读取解码好的 INI 文本。

    `\\r\\n`和`\\n`均可作为换行。任何意外错误都不会抛出，
    而是以`ParseResult(None, error)`返回，此时没有可用的文档。
    """
    try:
        return ParseResult(_parse(text))
    except Exception as e:
        logging.warning(f"Failed to parse INI contents: {e!r}")
        return ParseResult(None, e)


def serialize(document: IniDocument) -> str:
    """Render `document` as INI text, every line ended with CR-LF.

    An empty section still gets its header; an empty document gives `''`.
    """
    buf: list[str] = []
    for section, pairs in document._iter_pairs():
        buf.append(f'[{section}]{LINE_TERMINATOR}')
        for k, v in pairs.items():
            buf.append(f'{k}{PAIR_DELIMITER}{v}{LINE_TERMINATOR}')
    return ''.join(buf)


def _target_mode(target: str) -> int:
    """Mode of the existing `target`, or what `open()` would create."""
    try:
        return stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class IniFileHandler(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str = 'utf-8'
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    def _read_text(self) -> str | None:
        # newline='' to hand '\r' over to the parser untouched.
        try:
            with open(self._fn, 'r', encoding=self._codec, newline='') as fp:
                return fp.read()
        except FileNotFoundError:
            logging.warning(f"INI file not found: {self._fn}")
        except (OSError, UnicodeDecodeError, LookupError) as e:
            logging.warning(f"Unable to read `{self._fn}`:\n  {e}")
        return None

    def read(self) -> IniDocument | None:
        """读取`IniFileHandler`实例指定的文件。

        文件不存在、不可读或解析失败时记录告警并返回`None`。
        """
        if (text := self._read_text()) is None:
            return None
        result = parse(text)
        if result:
            logging.debug(f"Read {len(result.document)} section(s) "
                          f"from {self._fn}")
        return result.document

    def load(self, document: IniDocument) -> bool:
        """把文件内容载入已有的文档，替换其全部内容。

        失败时返回`False`，文档保持原样。
        """
        if (text := self._read_text()) is None:
            return False
        return document.load_contents(text)

    def write(self, instance: IniDocument) -> bool:
        """保存到 INI 文件。

        先写入同目录下的临时文件，再整体替换目标文件，
        所以写入失败*不会*截断已经存在的旧文件。
        """
        content = serialize(instance)
        target = os.fspath(self._fn)
        tmp = None
        try:
            with NamedTemporaryFile(
                'w', encoding=self._codec, newline='',
                dir=os.path.dirname(os.path.abspath(target)),
                prefix='.' + os.path.basename(target) + '.',
                suffix='.tmp', delete=False
            ) as fp:
                tmp = fp.name
                fp.write(content)
            # mkstemp always gives 0o600.
            os.chmod(tmp, _target_mode(target))
            os.replace(tmp, target)
        except (OSError, UnicodeEncodeError, LookupError) as e:
            logging.warning(f"Unable to write `{target}`:\n  {e}")
            if tmp is not None:
                with suppress(OSError):
                    os.remove(tmp)
            return False
        logging.debug(f"Wrote {len(instance)} section(s) to {target}")
        return True

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load_file(
    filename: str | PathLike[str], encoding: str = 'utf-8'
) -> IniDocument | None:
    return IniFileHandler(filename, encoding).read()


def save_file(
    document: IniDocument,
    filename: str | PathLike[str],
    encoding: str = 'utf-8'
) -> bool:
    return IniFileHandler(filename, encoding).write(document)
