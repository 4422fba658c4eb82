"""
Caller attribution.

A resolver takes the number of frames to skip, counted from the
function that calls the resolver, and returns a CallerInfo (or None if
the stack can't be inspected). The default uses ``sys._getframe``;
interpreters without it simply get no caller info.
"""

import os
import sys
from typing import Callable, NamedTuple, Optional


class CallerInfo(NamedTuple):
    filename: str
    line: int
    function: str

    @property
    def module_and_file(self) -> str:
        """Last two path components joined with '/' ("pkg/client.py")."""
        return module_and_file_name(self.filename)

    def format(self) -> str:
        return f'[{self.module_and_file}:{self.line} ({self.function})]'


CallerResolver = Callable[[int], Optional[CallerInfo]]


def module_and_file_name(path: str) -> str:
    if not path:
        return ''
    dir_path, file_name = os.path.split(path)
    module_name = os.path.basename(dir_path)
    return f'{module_name}/{file_name}'


def frame_resolver(skip: int) -> Optional[CallerInfo]:
    """Resolve the frame ``skip`` levels above the resolver's caller."""
    getframe = getattr(sys, '_getframe', None)
    if getframe is None:
        return None
    try:
        frame = getframe(skip + 1)
    except ValueError:
        return None
    try:
        code = frame.f_code
        module = frame.f_globals.get('__name__', '?')
        function = getattr(code, 'co_qualname', code.co_name)
        return CallerInfo(code.co_filename, frame.f_lineno, f'{module}.{function}')
    finally:
        del frame
