import re
from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
DATE_PATTERN: Final[re.Pattern] = re.compile(r'^\d{4}-\d{2}-\d{2}$')

USER_ID_HEADER: Final[str] = "X-User-Id"
USER_EMAIL_HEADER: Final[str] = "X-User-Email"

EMAIL_INDEX: Final[str] = "EmailIndex"
USER_ID_INDEX: Final[str] = "UserIdIndex"

QUANTITY_SEPARATOR: Final[str] = ", "
