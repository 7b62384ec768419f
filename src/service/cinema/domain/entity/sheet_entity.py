from typing import Optional

import attrs


@attrs.define(frozen=True)
class Sheet:
    """A physical seat in a screen, displayed as `<row>-<column>`"""

    screen_id: int
    column: int
    row: str
    id: Optional[int] = None

    @property
    def label(self) -> str:
        return f'{self.row}-{self.column}'
