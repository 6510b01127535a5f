# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from os import PathLike
from typing import Generic, TypeVar

T = TypeVar('T')


class FileHandler(Generic[T], metaclass=ABCMeta):
    """Binds a file name to a reader/writer of some in-memory model.

    Subclasses report storage failures by return value, never by raising.
    """
    def __init__(self, filename: str | PathLike[str]) -> None:
        self._fn = filename

    @property
    def filename(self) -> str | PathLike[str]:
        return self._fn

    @abstractmethod
    def read(self) -> T | None:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> bool:
        raise NotImplementedError

    def __str__(self) -> str:
        return str(self._fn)
