"""IMDB identifier strategy."""

import re
from typing import Any

from mediamerge.models.metadata import IMDB

from .base import IdNamespaceStrategy

IMDB_ID_PATTERN = re.compile(r"tt\d{6,}")


class ImdbIdStrategy(IdNamespaceStrategy):
    """Strategy for IMDB ids (``tt`` followed by at least six digits)."""

    namespace = IMDB

    def parse(self, value: Any) -> str | None:
        if not isinstance(value, str):
            return None
        value = value.strip()
        return value if IMDB_ID_PATTERN.fullmatch(value) else None


def is_valid_imdb_id(value: Any) -> bool:
    """Check whether a value is a syntactically valid IMDB id."""
    return ImdbIdStrategy().is_valid(value)
