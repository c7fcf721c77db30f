"""Printable standings PDF.

Landscape letter pages with:
- Title line and section heading (school standings first, then students)
- One column per tournament, in the same order as the text/CSV tables
- Alternating row shading, header rule repeated on every page
"""

import fitz  # PyMuPDF

from .models import Standings

# --- Page layout constants (landscape letter: 792 x 612 pt) ---
PAGE_W = 792
PAGE_H = 612
LEFT_MARGIN = 36
RIGHT_MARGIN = PAGE_W - 36
TABLE_W = RIGHT_MARGIN - LEFT_MARGIN

TITLE_Y = 40
SECTION_Y = 66
TABLE_TOP_Y = 90
TABLE_BOTTOM_Y = PAGE_H - 36
FOOTER_Y = PAGE_H - 16

# Column widths (pt); tournament columns share what is left
RANK_W = 30
NAME_W = 190
SCHOOL_W = 130
COUNT_W = 44
TOTAL_W = 48
MIN_TOURNAMENT_W = 24

# Font sizes
TITLE_SIZE = 16
SECTION_SIZE = 12
HEADER_SIZE = 8
ROW_SIZE = 8
FOOTER_SIZE = 7
ROW_HEIGHT = 13

FONT_REGULAR = 'Times-Roman'
FONT_BOLD = 'Times-Bold'

BLACK = (0, 0, 0)
GRAY = (0.4, 0.4, 0.4)
SHADE = (0.93, 0.93, 0.93)


def generate_standings_pdf(standings: Standings, output_path: str,
                           title: str = 'Tournament Standings'):
    """Generate the standings PDF.

    Args:
        standings: Computed standings.
        output_path: Where to save the PDF.
        title: Title printed at the top of every page.
    """
    doc = fitz.open()

    if not standings.entrants and not standings.schools:
        page = doc.new_page(width=PAGE_W, height=PAGE_H)
        _draw_title(page, title)
        doc.save(output_path)
        doc.close()
        return

    tournaments = list(standings.tournaments)

    school_columns = _layout_columns(
        [('#', RANK_W), ('School', None)], tournaments)
    school_rows = [
        [str(rank), *(str(v) for v in row)]
        for rank, row in enumerate(standings.school_table()[1:], start=1)
    ]
    _draw_section(doc, title, 'SCHOOL STANDINGS', school_columns, school_rows)

    entrant_columns = _layout_columns(
        [('#', RANK_W), ('Entry', None), ('School', SCHOOL_W), ('Tourn.', COUNT_W)],
        tournaments)
    entrant_rows = []
    for rank, row in enumerate(standings.entrant_table()[1:], start=1):
        entry_id, school = row[0], row[1]
        name = entry_id[len(school) + 1:] if entry_id.startswith(school + ':') else entry_id
        entrant_rows.append([str(rank), name, school, *(str(v) for v in row[2:])])
    _draw_section(doc, title, 'STUDENT STANDINGS', entrant_columns, entrant_rows)

    for page_num, page in enumerate(doc, start=1):
        _draw_footer(page, page_num, doc.page_count)

    doc.save(output_path)
    doc.close()


# --- Layout helpers ---

def _layout_columns(fixed, tournaments):
    """Return [(label, x, width, align)] for fixed columns + tournaments + total.

    A fixed column with width None takes whatever space is left after the
    tournament columns, but never less than NAME_W / 2.
    """
    fixed_w = sum(w for _, w in fixed if w)
    n = len(tournaments)
    flexible = [label for label, w in fixed if w is None]

    remaining = TABLE_W - fixed_w - TOTAL_W
    if n:
        name_w = NAME_W if flexible else 0
        t_w = max(MIN_TOURNAMENT_W, (remaining - name_w) / n)
        if flexible:
            name_w = max(NAME_W / 2, remaining - t_w * n)
    else:
        t_w = 0
        name_w = remaining

    columns = []
    x = LEFT_MARGIN
    for label, w in fixed:
        width = w if w else name_w
        align = 'right' if label in ('#', 'Tourn.') else 'left'
        columns.append((label, x, width, align))
        x += width
    for t in tournaments:
        columns.append((t, x, t_w, 'right'))
        x += t_w
    columns.append(('Total', x, TOTAL_W, 'right'))
    return columns


def _fit_text(text, width, fontname, fontsize):
    """Truncate text with an ellipsis so it fits the given width."""
    if fitz.get_text_length(text, fontname=fontname, fontsize=fontsize) <= width:
        return text
    while text and fitz.get_text_length(text + '...', fontname=fontname,
                                        fontsize=fontsize) > width:
        text = text[:-1]
    return text + '...' if text else ''


def _rows_per_page():
    return int((TABLE_BOTTOM_Y - TABLE_TOP_Y) // ROW_HEIGHT) - 1


# --- Drawing functions ---

def _draw_section(doc, title, heading, columns, rows):
    """Draw one table, starting a new page and continuing onto more as needed."""
    per_page = _rows_per_page()
    chunks = [rows[i:i + per_page] for i in range(0, len(rows), per_page)] or [[]]

    for ci, chunk in enumerate(chunks):
        page = doc.new_page(width=PAGE_W, height=PAGE_H)
        _draw_title(page, title)
        label = heading if ci == 0 else f'{heading} (CONTINUED)'
        page.insert_text(fitz.Point(LEFT_MARGIN, SECTION_Y), label,
                         fontname=FONT_BOLD, fontsize=SECTION_SIZE, color=BLACK)

        y = TABLE_TOP_Y
        _draw_row(page, y, columns, [c[0] for c in columns], FONT_BOLD, HEADER_SIZE)
        page.draw_line(fitz.Point(LEFT_MARGIN, y + 4), fitz.Point(RIGHT_MARGIN, y + 4),
                       color=BLACK, width=0.75)

        for ri, values in enumerate(chunk):
            y += ROW_HEIGHT
            if ri % 2 == 1:
                rect = fitz.Rect(LEFT_MARGIN, y - ROW_HEIGHT + 4, RIGHT_MARGIN, y + 4)
                page.draw_rect(rect, color=None, fill=SHADE)
            _draw_row(page, y, columns, values, FONT_REGULAR, ROW_SIZE)


def _draw_row(page, y, columns, values, fontname, fontsize):
    """Draw one line of cells at baseline y."""
    pad = 3
    for (_, x, width, align), value in zip(columns, values):
        text = _fit_text(str(value), width - 2 * pad, fontname, fontsize)
        if align == 'right':
            tw = fitz.get_text_length(text, fontname=fontname, fontsize=fontsize)
            tx = x + width - pad - tw
        else:
            tx = x + pad
        page.insert_text(fitz.Point(tx, y), text,
                         fontname=fontname, fontsize=fontsize, color=BLACK)


def _draw_title(page, title):
    """Draw the centered title line."""
    tw = fitz.get_text_length(title, fontname=FONT_BOLD, fontsize=TITLE_SIZE)
    page.insert_text(fitz.Point(PAGE_W / 2 - tw / 2, TITLE_Y), title,
                     fontname=FONT_BOLD, fontsize=TITLE_SIZE, color=BLACK)


def _draw_footer(page, page_num, page_count):
    """Draw 'Page N of M' at page bottom."""
    text = f'Page {page_num} of {page_count}'
    tw = fitz.get_text_length(text, fontname=FONT_REGULAR, fontsize=FOOTER_SIZE)
    page.insert_text(fitz.Point(PAGE_W / 2 - tw / 2, FOOTER_Y), text,
                     fontname=FONT_REGULAR, fontsize=FOOTER_SIZE, color=GRAY)
