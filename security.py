from typing import Optional

import bcrypt


def hash_secret(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def verify_secret(plain: str, stored: Optional[str]) -> bool:
    # a card that was never activated has no stored password
    if not stored:
        return False
    try:
        return bcrypt.checkpw(plain.encode(), stored.encode())
    except ValueError:
        # stored value is not a bcrypt hash
        return False
