"""Page/sort argument validation shared by the list operations."""

from orgstructure.domain.exceptions import ValidationError


def resolve_page(
    page: int,
    size: int,
    sort_by: str,
    sort_dir: str,
    sortable: frozenset[str],
) -> tuple[int, bool]:
    """Validate paging arguments and return ``(skip, descending)``."""
    if page < 0:
        raise ValidationError("page", f"page must be >= 0, got {page}")
    if size < 1:
        raise ValidationError("size", f"size must be >= 1, got {size}")
    if sort_by not in sortable:
        allowed = ", ".join(sorted(sortable))
        raise ValidationError("sort_by", f"Cannot sort by '{sort_by}'; expected one of: {allowed}")
    direction = sort_dir.lower()
    if direction not in ("asc", "desc"):
        raise ValidationError("sort_dir", f"sort_dir must be 'asc' or 'desc', got '{sort_dir}'")
    return page * size, direction == "desc"
