"""Shared command-line parameter parsing utilities."""


def parse_category_ids(category_ids: str | None) -> list[int]:
    """Parse a comma-separated category ID string into a list of ints.

    Args:
        category_ids: Comma-separated string of category IDs (e.g. "2,5"),
            or None.

    Returns:
        List of IDs in the order given; empty if input is empty.

    Raises:
        ValueError: If any ID is not a positive integer.
    """
    if not category_ids:
        return []
    result = []
    for cid in category_ids.split(","):
        cid = cid.strip()
        if not cid:
            continue
        if not cid.isdigit() or int(cid) == 0:
            raise ValueError(f"Invalid category ID: {cid}")
        result.append(int(cid))
    return result
