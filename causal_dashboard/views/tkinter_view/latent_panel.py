"""
Row contents for the latent-variable panel, kept free of tkinter so the
values shown can be computed without a display.
"""


def latent_rows(latent_variables):
    """
    One (id, label text, bar fraction) triple per latent record.

    Non-dict records are skipped. A non-numeric value is shown as 0.0 and the
    bar fraction is clamped to [0, 1].
    """
    rows = []
    for lv in latent_variables:
        if not isinstance(lv, dict):
            continue
        value = lv.get("value")
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            value = 0.0
        text = f"{lv.get('name', lv.get('id'))}: {value:.3f}"
        rows.append((lv.get("id"), text, max(0.0, min(1.0, value))))
    return rows


def row_layout_key(rows):
    """Rows must be rebuilt only when this key changes."""
    return tuple(repr(row_id) for row_id, _, _ in rows)
