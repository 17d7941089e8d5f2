from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Dict, FrozenSet, Optional

logger = logging.getLogger(__name__)

# Delimiter byte for each comment class, in class order 1..4.
COMMENT_DELIMITERS = (ord('|'), ord('}'), ord('*'), ord('#'))

# Accepted for compatibility with existing config files; they change nothing.
RESERVED_FLAGS = ('use_procedure', 'use_symbol_equal', 'use_symbol_under')


@dataclass(frozen=True)
class InterpreterOptions:
    use_comment_type1: bool = False
    use_comment_type2: bool = False
    use_comment_type3: bool = False
    use_comment_type4: bool = False
    use_infinite_cells: bool = False
    use_infinite_nested_loops: bool = False
    use_negative_value: bool = False
    use_large_cell_size: bool = False
    use_fast_input: bool = False
    use_procedure: bool = False
    use_symbol_equal: bool = False
    use_symbol_under: bool = False
    use_syntax_hq9plus: bool = False
    use_mod255: bool = False
    use_force_rn: bool = False

    @property
    def comment_delimiters(self) -> FrozenSet[int]:
        enabled = (
            self.use_comment_type1,
            self.use_comment_type2,
            self.use_comment_type3,
            self.use_comment_type4,
        )
        return frozenset(d for d, on in zip(COMMENT_DELIMITERS, enabled) if on)

    @property
    def comment_mask(self) -> int:
        """Comment classes packed as bits, class 1 in bit 0."""
        mask = 0
        for bit, name in enumerate(('use_comment_type1', 'use_comment_type2',
                                    'use_comment_type3', 'use_comment_type4')):
            if getattr(self, name):
                mask |= 1 << bit
        return mask

    def as_dict(self) -> Dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def parse_config(text: str, *, base: Optional[InterpreterOptions] = None) -> InterpreterOptions:
    """
    Parse config text into options.

    Each line is ``name: value`` (or ``name value``). Lines starting with
    ``#`` are comments. Only the literal value ``true`` enables a flag; any
    other value disables it. A name with no value leaves the flag as it was.
    """
    options = base if base is not None else InterpreterOptions()
    known = {f.name for f in fields(InterpreterOptions)}
    updates: Dict[str, bool] = {}

    for line_no, raw in enumerate(text.splitlines(), start=1):
        tokens = raw.replace(':', ' ', 1).split()
        if not tokens or tokens[0].startswith('#'):
            continue
        name, value = tokens[0], tokens[1:]
        if name not in known:
            logger.warning("config line %d: unknown parameter %r ignored", line_no, name)
            continue
        if not value:
            continue
        updates[name] = value[0] == 'true'

    return replace(options, **updates)


def load_config(path: Optional[str | Path], *, base: Optional[InterpreterOptions] = None) -> InterpreterOptions:
    """Load options from a config file, falling back to defaults if it cannot be read."""
    options = base if base is not None else InterpreterOptions()
    if not path:
        return options
    try:
        text = Path(path).read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        logger.warning("config file %s not read (%s); using defaults", path, e.strerror or e)
        return options
    return parse_config(text, base=options)
