from typing import Optional

import attrs


@attrs.define
class Movie:
    name: str
    year: Optional[int]
    description: str
    image_url: str
    is_showing: Optional[bool] = None
    id: Optional[int] = None
