"""CSV parsing — turn the raw answers export into row dicts.

The export is simple enough that a single-line parser covers it: no
embedded newlines, double quotes for fields containing commas, "" as an
escaped quote. Malformed quoting never raises.
"""

import re

from survey.constants import ROW_FIELDS

_LINE_BREAK = re.compile(r"\r?\n")


def parse_csv_line(line):
    """Split one CSV line into fields.

    A quote outside a quoted region opens one and is dropped. Inside a
    quoted region commas are literal, "" is one quote, and a lone quote
    closes the region. An unterminated quote swallows the rest of the line.
    """
    out = []
    cur = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        ch = line[i]
        if in_quotes:
            if ch == '"' and i + 1 < n and line[i + 1] == '"':
                cur.append('"')
                i += 1
            elif ch == '"':
                in_quotes = False
            else:
                cur.append(ch)
        elif ch == '"':
            in_quotes = True
        elif ch == ",":
            out.append("".join(cur))
            cur = []
        else:
            cur.append(ch)
        i += 1

    out.append("".join(cur))
    return out


def to_row(fields, header):
    """Map parsed fields onto header names.

    Short rows pad with "", extra fields are dropped, and every key in
    ROW_FIELDS is present even if the header doesn't name it.
    """
    row = {name: (fields[i] if i < len(fields) else "") for i, name in enumerate(header)}
    for name in ROW_FIELDS:
        row.setdefault(name, "")
    return row


def split_lines(text):
    """Split on \\n or \\r\\n and drop empty lines."""
    return [line for line in _LINE_BREAK.split(text) if line]


def parse_csv_text(text):
    """Parse a whole export. Returns (header, rows).

    Returns ([], []) when there is no header, and (header, []) when there
    are no data lines.
    """
    lines = split_lines(text.lstrip("\ufeff"))
    if not lines:
        return [], []

    header = parse_csv_line(lines[0])
    rows = [to_row(parse_csv_line(line), header) for line in lines[1:]]
    return header, rows
