from __future__ import annotations


def _fmt_float(x: float, digits: int = 3) -> str:
    """Compact numeric formatting: fixed for moderate values, scientific otherwise."""
    VALUE_RANGE: tuple[float, float] = (1e-3, 1e4)
    abs_x: float = abs(float(x))
    if abs_x == 0.0:
        return "0"
    if (abs_x < VALUE_RANGE[0]) or (abs_x >= VALUE_RANGE[1]):
        return f"{x:.{digits}e}"
    return f"{x:.{digits}g}"

def _block_header(title: str, width: int) -> str:
    # Construct a header that is centered in a given width.
    return f"{title:-^{width}}"

def _kv_line(key: str, val: str, width: int, key_w: int = 22) -> str:
    # | key.................. = value............................... |
    rhs_w = max(0, width - (key_w + 7))
    v = val if len(val) <= rhs_w else (val[: max(0, rhs_w - 3)] + "...")
    return f"| {key:<{key_w}} = {v:<{rhs_w}} |"

def _fmt_values(values, digits: int = 3, max_items: int = 6) -> str:
    """Short, comma separated rendering of the leading entries of a sequence."""
    items: list[str] = [_fmt_float(float(v), digits) for v in list(values)[:max_items]]
    if len(values) > max_items:
        items.append("...")
    return ", ".join(items)
