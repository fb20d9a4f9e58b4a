"""Default tags attached to results constructed without an explicit tag."""

from __future__ import annotations

from typing import Final

DEFAULT_TAG_OK: Final = "Ok"
DEFAULT_TAG_ERR: Final = "Err"
