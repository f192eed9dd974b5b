"""Geometry of box-drawing, block, shade and braille characters.

Shapes for U+2500..U+259F (except dashes and diagonals) and, optionally,
braille U+2800..U+28FF are described as 16-bit codes. The high bits give
the category and the low byte its data. ``draw_box`` turns a code into the
rectangles that fill a character cell, so that lines meet exactly between
cells whatever the font.
"""

from __future__ import annotations

from dataclasses import dataclass

# Categories (mutually exclusive except BDB).
BDL = 1 << 8  # lines: light, double, heavy
BDA = 1 << 9  # light arcs
BBD = 1 << 10  # lower block, data is 8 - X eighths
BBL = 2 << 10  # left block, data is X eighths
BBU = 3 << 10  # upper block, data is X eighths
BBR = 4 << 10  # right block, data is 8 - X eighths
BBQ = 5 << 10  # quadrants
BRL = 6 << 10  # braille, data is the low byte of U+28XX
BBS = 1 << 14  # shades, data is alpha in quarters
BDB = 1 << 15  # bold

# Light / double rays; heavy is light plus double.
LL, LU, LR, LD = 1 << 0, 1 << 1, 1 << 2, 1 << 3
LH, LV = LL + LR, LU + LD
DL, DU, DR, DD = 1 << 4, 1 << 5, 1 << 6, 1 << 7
DH, DV = DL + DR, DU + DD
HL, HU, HR, HD = LL + DL, LU + DU, LR + DR, LD + DD
HH, HV = HL + HR, HU + HD

# Quadrants.
TL, TR, BL, BR = 1 << 0, 1 << 1, 1 << 2, 1 << 3

_DATA = {
    # light lines
    0x00: BDL + LH, 0x02: BDL + LV, 0x0C: BDL + LD + LR, 0x10: BDL + LD + LL,
    0x14: BDL + LU + LR, 0x18: BDL + LU + LL, 0x1C: BDL + LV + LR,
    0x24: BDL + LV + LL, 0x2C: BDL + LH + LD, 0x34: BDL + LH + LU,
    0x3C: BDL + LV + LH, 0x74: BDL + LL, 0x75: BDL + LU, 0x76: BDL + LR,
    0x77: BDL + LD,
    # heavy [+light] lines
    0x01: BDL + HH, 0x03: BDL + HV, 0x0D: BDL + HR + LD, 0x0E: BDL + HD + LR,
    0x0F: BDL + HD + HR, 0x11: BDL + HL + LD, 0x12: BDL + HD + LL,
    0x13: BDL + HD + HL, 0x15: BDL + HR + LU, 0x16: BDL + HU + LR,
    0x17: BDL + HU + HR, 0x19: BDL + HL + LU, 0x1A: BDL + HU + LL,
    0x1B: BDL + HU + HL, 0x1D: BDL + HR + LV, 0x1E: BDL + HU + LD + LR,
    0x1F: BDL + HD + LR + LU, 0x20: BDL + HV + LR, 0x21: BDL + HU + HR + LD,
    0x22: BDL + HD + HR + LU, 0x23: BDL + HV + HR, 0x25: BDL + HL + LV,
    0x26: BDL + HU + LD + LL, 0x27: BDL + HD + LU + LL, 0x28: BDL + HV + LL,
    0x29: BDL + HU + HL + LD, 0x2A: BDL + HD + HL + LU, 0x2B: BDL + HV + HL,
    0x2D: BDL + HL + LD + LR, 0x2E: BDL + HR + LL + LD, 0x2F: BDL + HH + LD,
    0x30: BDL + HD + LH, 0x31: BDL + HD + HL + LR, 0x32: BDL + HR + HD + LL,
    0x33: BDL + HH + HD, 0x35: BDL + HL + LU + LR, 0x36: BDL + HR + LU + LL,
    0x37: BDL + HH + LU, 0x38: BDL + HU + LH, 0x39: BDL + HU + HL + LR,
    0x3A: BDL + HU + HR + LL, 0x3B: BDL + HH + HU, 0x3D: BDL + HL + LV + LR,
    0x3E: BDL + HR + LV + LL, 0x3F: BDL + HH + LV, 0x40: BDL + HU + LH + LD,
    0x41: BDL + HD + LH + LU, 0x42: BDL + HV + LH,
    0x43: BDL + HU + HL + LD + LR, 0x44: BDL + HU + HR + LD + LL,
    0x45: BDL + HD + HL + LU + LR, 0x46: BDL + HD + HR + LU + LL,
    0x47: BDL + HH + HU + LD, 0x48: BDL + HH + HD + LU,
    0x49: BDL + HV + HL + LR, 0x4A: BDL + HV + HR + LL, 0x4B: BDL + HV + HH,
    0x78: BDL + HL, 0x79: BDL + HU, 0x7A: BDL + HR, 0x7B: BDL + HD,
    0x7C: BDL + HR + LL, 0x7D: BDL + HD + LU, 0x7E: BDL + HL + LR,
    0x7F: BDL + HU + LD,
    # double [+light] lines
    0x50: BDL + DH, 0x51: BDL + DV, 0x52: BDL + DR + LD, 0x53: BDL + DD + LR,
    0x54: BDL + DR + DD, 0x55: BDL + DL + LD, 0x56: BDL + DD + LL,
    0x57: BDL + DL + DD, 0x58: BDL + DR + LU, 0x59: BDL + DU + LR,
    0x5A: BDL + DU + DR, 0x5B: BDL + DL + LU, 0x5C: BDL + DU + LL,
    0x5D: BDL + DL + DU, 0x5E: BDL + DR + LV, 0x5F: BDL + DV + LR,
    0x60: BDL + DV + DR, 0x61: BDL + DL + LV, 0x62: BDL + DV + LL,
    0x63: BDL + DV + DL, 0x64: BDL + DH + LD, 0x65: BDL + DD + LH,
    0x66: BDL + DD + DH, 0x67: BDL + DH + LU, 0x68: BDL + DU + LH,
    0x69: BDL + DH + DU, 0x6A: BDL + DH + LV, 0x6B: BDL + DV + LH,
    0x6C: BDL + DH + DV,
    # light arcs
    0x6D: BDA + LD + LR, 0x6E: BDA + LD + LL, 0x6F: BDA + LU + LL,
    0x70: BDA + LU + LR,
    # lower X/8 blocks (data is 8 - X)
    0x81: BBD + 7, 0x82: BBD + 6, 0x83: BBD + 5, 0x84: BBD + 4,
    0x85: BBD + 3, 0x86: BBD + 2, 0x87: BBD + 1, 0x88: BBD + 0,
    # left X/8 blocks
    0x89: BBL + 7, 0x8A: BBL + 6, 0x8B: BBL + 5, 0x8C: BBL + 4,
    0x8D: BBL + 3, 0x8E: BBL + 2, 0x8F: BBL + 1,
    # upper 1/2 and 1/8, right 1/2 and 1/8
    0x80: BBU + 4, 0x94: BBU + 1, 0x90: BBR + 4, 0x95: BBR + 7,
    # quadrants
    0x96: BBQ + BL, 0x97: BBQ + BR, 0x98: BBQ + TL, 0x99: BBQ + TL + BL + BR,
    0x9A: BBQ + TL + BR, 0x9B: BBQ + TL + TR + BL, 0x9C: BBQ + TL + TR + BR,
    0x9D: BBQ + TR, 0x9E: BBQ + BL + TR, 0x9F: BBQ + BL + TR + BR,
    # shades, alpha in quarters
    0x91: BBS + 1, 0x92: BBS + 2, 0x93: BBS + 3,
}

BOXDATA: tuple[int, ...] = tuple(_DATA.get(i, 0) for i in range(256))


@dataclass(frozen=True)
class Rect:
    """A filled rectangle; ``shade`` 0 is the foreground, 1-3 a shade level."""

    x: int
    y: int
    w: int
    h: int
    shade: int = 0


def _div(n: int, d: int) -> int:
    """Rounded division that truncates toward zero like integer C division."""
    q = n + d // 2
    result = abs(q) // d
    return result if q >= 0 else -result


def is_boxdraw(u: int, enabled: bool = True, braille: bool = False) -> bool:
    """Whether code point ``u`` is drawn from shape data rather than the font."""
    block = u & ~0xFF
    return (enabled and block == 0x2500 and BOXDATA[u & 0xFF] != 0) or (
        braille and block == 0x2800
    )


def box_index(
    u: int, bold: bool = False, use_bold: bool = False, braille: bool = False
) -> int:
    """The shape code of ``u``, with the bold bit when bold lines are enabled."""
    if braille and (u & ~0xFF) == 0x2800:
        return BRL | (u & 0xFF)
    if use_bold and bold:
        return BDB | BOXDATA[u & 0xFF]
    return BOXDATA[u & 0xFF]


def shade_color(
    fg: tuple[int, int, int], bg: tuple[int, int, int], level: int
) -> tuple[int, int, int]:
    """Blend of foreground and background with ``level`` quarters of foreground."""
    r, g, b = (
        _div(f * level + k * (4 - level), 4) for f, k in zip(fg, bg)
    )
    return (r, g, b)


def draw_box(x: int, y: int, w: int, h: int, bd: int) -> list[Rect]:
    """Rectangles that draw shape code ``bd`` in the cell at (x, y) of size w x h."""
    cat = bd & ~(BDB | 0xFF)
    data = bd & 0xFF
    if bd & (BDL | BDA):
        return draw_box_lines(x, y, w, h, bd)
    if cat == BBD:
        d = _div(data * h, 8)
        return [Rect(x, y + d, w, h - d)]
    if cat == BBU:
        return [Rect(x, y, w, _div(data * h, 8))]
    if cat == BBL:
        return [Rect(x, y, _div(data * w, 8), h)]
    if cat == BBR:
        d = _div(data * w, 8)
        return [Rect(x + d, y, w - d, h)]
    if cat == BBQ:
        w2, h2 = _div(w, 2), _div(h, 2)
        quadrants = (
            (TL, Rect(x, y, w2, h2)),
            (TR, Rect(x + w2, y, w - w2, h2)),
            (BL, Rect(x, y + h2, w2, h - h2)),
            (BR, Rect(x + w2, y + h2, w - w2, h - h2)),
        )
        return [rect for bit, rect in quadrants if bd & bit]
    if bd & BBS:
        return [Rect(x, y, w, h, shade=data)]
    if cat == BRL:
        w1 = _div(w, 2)
        h1, h2, h3 = _div(h, 4), _div(h, 2), _div(3 * h, 4)
        dots = (
            Rect(x, y, w1, h1),
            Rect(x, y + h1, w1, h2 - h1),
            Rect(x, y + h2, w1, h3 - h2),
            Rect(x + w1, y, w - w1, h1),
            Rect(x + w1, y + h1, w - w1, h2 - h1),
            Rect(x + w1, y + h2, w - w1, h3 - h2),
            Rect(x, y + h3, w1, h - h3),
            Rect(x + w1, y + h3, w - w1, h - h3),
        )
        return [rect for bit, rect in enumerate(dots) if bd & (1 << bit)]
    return []


def draw_box_lines(x: int, y: int, w: int, h: int, bd: int) -> list[Rect]:
    """Rectangles for light, double, heavy and arc line shapes."""
    # Stem thickness about width/8; bold is 1.5x and at least 1px thicker.
    mwh = min(w, h)
    base_s = max(1, _div(mwh, 8))
    bold = bool(bd & BDB) and mwh >= 6
    s = max(base_s + 1, _div(3 * base_s, 2)) if bold else base_s
    w2, h2 = _div(w - s, 2), _div(h - s, 2)

    light = bd & (LL | LU | LR | LD)
    double = bd & (DL | DU | DR | DD)
    rects: list[Rect] = []

    if light:
        arc = bd & BDA
        multi_light = light & (light - 1)
        multi_double = double & (double - 1)
        d = -s if arc or (multi_double and not multi_light) else 0
        if bd & LL:
            rects.append(Rect(x, y + h2, w2 + s + d, s))
        if bd & LU:
            rects.append(Rect(x + w2, y, s, h2 + s + d))
        if bd & LR:
            rects.append(Rect(x + w2 - d, y + h2, w - w2 + d, s))
        if bd & LD:
            rects.append(Rect(x + w2, y + h2 - d, s, h - h2 + d))

    if double:
        # p and n adjust each double ray toward the previous and next direction.
        dl, du, dr, dd = bd & DL, bd & DU, bd & DR, bd & DD
        if dl:
            p = -s if dd else 0
            n = -s if du else (s if dd else 0)
            rects.append(Rect(x, y + h2 + s, w2 + s + p, s))
            rects.append(Rect(x, y + h2 - s, w2 + s + n, s))
        if du:
            p = -s if dl else 0
            n = -s if dr else (s if dl else 0)
            rects.append(Rect(x + w2 - s, y, s, h2 + s + p))
            rects.append(Rect(x + w2 + s, y, s, h2 + s + n))
        if dr:
            p = -s if du else 0
            n = -s if dd else (s if du else 0)
            rects.append(Rect(x + w2 - p, y + h2 - s, w - w2 + p, s))
            rects.append(Rect(x + w2 - n, y + h2 + s, w - w2 + n, s))
        if dd:
            p = -s if dr else 0
            n = -s if dl else (s if dr else 0)
            rects.append(Rect(x + w2 + s, y + h2 - p, s, h - h2 + p))
            rects.append(Rect(x + w2 - s, y + h2 - n, s, h - h2 + n))

    return rects