from typing import Optional

import attrs


@attrs.define
class UserEntity:
    """Caller identity rebuilt from the bearer token, no database lookup"""

    id: int
    email: Optional[str] = None
