import re
import secrets

from passlib.context import CryptContext

pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")

TOKEN_SCHEME_PATTERN = re.compile(r"^(Token|Bearer)\s+")
PARAM_DELIMITER_PATTERN = re.compile(r"\s*(?:,|;|\t)\s*")


def HashPassword(password: str) -> str:
    return pwd_context.hash(password)


def VerifyPassword(password: str, password_hash: str | None) -> bool:
    if not password_hash:
        return False
    return pwd_context.verify(password, password_hash)


def CreateApiKey() -> str:
    return secrets.token_urlsafe(32)


def ParseTokenHeader(header: str | None) -> str | None:
    """Extract the token from `Token token=<value>` (or `Bearer ...`).

    Options after the token are separated by commas, semicolons or tabs and
    ignored. Only the first pair's value counts, with surrounding double
    quotes removed; `Token abc` has no `=` and therefore no token.
    """
    if not header:
        return None
    match = TOKEN_SCHEME_PATTERN.match(header)
    if not match:
        return None
    raw = header[match.end():].strip()
    if not raw:
        return None
    first_pair = PARAM_DELIMITER_PATTERN.split(raw)[0]
    _, separator, value = first_pair.partition("=")
    if not separator:
        return None
    value = value.strip()
    if value.startswith('"'):
        value = value[1:]
    if value.endswith('"'):
        value = value[:-1]
    return value or None
