from typing import Optional

import attrs


@attrs.define(frozen=True)
class UserEntity:
    """Acting user, rebuilt from the auth token on every request"""

    id: Optional[int] = None
    name: str = ''
    email: str = ''
