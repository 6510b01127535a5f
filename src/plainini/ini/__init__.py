# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 22:41:09
# @Author : Kariko Lin

from .model import IniDocument
from .parser import (
    ParseResult,
    parse,
    serialize,
    IniFileHandler,
    load_file,
    save_file
)
