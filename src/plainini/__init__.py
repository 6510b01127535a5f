# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/12 22:43:27
# @Author : Kariko Lin

import logging

from .abstract import FileHandler
from .ini import (
    IniDocument, IniFileHandler, ParseResult,
    parse, serialize, load_file, save_file
)

__all__ = [
    'IniDocument', 'ParseResult', 'parse', 'serialize',
    'FileHandler', 'IniFileHandler', 'load_file', 'save_file'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
