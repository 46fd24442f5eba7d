"""Sort and include tokens.

Declare them as enums on top of the bases here:

    ```python
    class ArticleSort(SortField):
        TITLE = "title"
        CREATED = "createdAt"

    class ArticleInclude(IncludeField):
        AUTHOR = "author"
        COMMENTS = "comments.author"

    join_tokens([ArticleSort.CREATED.desc, ArticleSort.TITLE])  # "-createdAt,title"
    ```
"""

from collections.abc import Iterable
from enum import Enum


class SortField(str, Enum):
    """Sortable field; `.desc` yields the `-` prefixed descending token."""

    @property
    def asc(self) -> str:
        return self.value

    @property
    def desc(self) -> str:
        return f"-{self.value}"


class IncludeField(str, Enum):
    """Relationship path that can be side-loaded with `include`."""

    pass


def token_value(token: str | Enum) -> str:
    if isinstance(token, Enum):
        return str(token.value)
    return str(token)


def join_tokens(tokens: Iterable[str | Enum] | None) -> str | None:
    """Comma-join tokens in order; None when there are none."""
    values = [token_value(token) for token in tokens or ()]
    return ",".join(values) if values else None
