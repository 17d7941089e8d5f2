__version__ = "0.9.0"

from .config import InterpreterOptions, load_config, parse_config
from .errors import (
    BFPlusError,
    BFPlusSyntaxError,
    LoopNestingError,
    ResourceExhausted,
    SourceUnavailable,
    TapeBoundsError,
    UnmatchedBracketError,
)
from .interpreter import Interpreter
from .api import RunResult, run_file, run_string

__all__ = [
    'InterpreterOptions',
    'load_config',
    'parse_config',
    'BFPlusError',
    'BFPlusSyntaxError',
    'LoopNestingError',
    'ResourceExhausted',
    'SourceUnavailable',
    'TapeBoundsError',
    'UnmatchedBracketError',
    'Interpreter',
    'RunResult',
    'run_file',
    'run_string',
]
