from typing import List, Literal, Optional


def generate_markdown_table(
    headers: Optional[List[str]],
    rows: List[List[object]],
    aligns: Optional[List[Literal["l", "c", "r"]]] = None,
) -> str:
    """
    Generate a Markdown table.

    Args:
        headers: List of column headers, or None to use first row as headers.
        rows: List of rows; cells are str()-ed.
        aligns: 'l', 'c' or 'r' per column. Defaults to all left.

    Returns:
        str: Markdown formatted table, "" if there are no rows.
    """
    if not rows:
        return ""

    if not headers:
        headers, rows = rows[0], rows[1:]

    headers = [str(h) for h in headers]
    aligns = aligns or ["l"] * len(headers)
    if len(aligns) != len(headers):
        raise ValueError("Length of aligns must match number of headers.")

    align_map = {"l": ":---", "c": ":---:", "r": "---:"}

    lines = [
        "| " + " | ".join(headers) + " |",
        "| " + " | ".join(align_map[a] for a in aligns) + " |",
    ]
    lines += ["| " + " | ".join(str(cell) for cell in row) + " |" for row in rows]
    return "\n".join(lines)


def format_money(amount: float) -> str:
    """Naira, thousands separated, no decimals unless there are kobo."""
    if float(amount).is_integer():
        return f"₦{int(amount):,}"
    return f"₦{amount:,.2f}"


def short_id(full_id: str, length: int = 6) -> str:
    """Mongo ids are 24 hex chars; the tail is enough to tell them apart."""
    return full_id[-length:] if len(full_id) > length else full_id
