"""
D4 symmetries of the 4x4 board (8 transforms), used to expand feature tuples.

Rotations: 0°, 90°, 180°, 270°
Reflections: horizontal, vertical, main diagonal, anti-diagonal
"""

from typing import List, Sequence


def _idx(r: int, c: int) -> int:
    """Convert (row, col) to flat index."""
    return r * 4 + c


def _build_symmetry_maps() -> List[List[int]]:
    """Build 8 maps sending each cell to its image under a transform."""
    maps = []
    for k in range(8):
        mp = [0] * 16
        for r in range(4):
            for c in range(4):
                if k == 0:   rt, ct = r, c                # identity
                elif k == 1: rt, ct = c, 3 - r            # rotate 90
                elif k == 2: rt, ct = 3 - r, 3 - c        # rotate 180
                elif k == 3: rt, ct = 3 - c, r            # rotate 270
                elif k == 4: rt, ct = r, 3 - c            # reflect horizontal
                elif k == 5: rt, ct = 3 - r, c            # reflect vertical
                elif k == 6: rt, ct = c, r                # reflect main diag
                else:        rt, ct = 3 - c, 3 - r        # reflect anti-diag
                mp[_idx(r, c)] = _idx(rt, ct)
        maps.append(mp)
    return maps


# Pre-computed symmetry maps
SYM_MAPS = _build_symmetry_maps()


def apply_symmetry_tuple(positions: Sequence[int], sym_id: int) -> List[int]:
    """Image of an ordered tuple of cells under transform sym_id."""
    mp = SYM_MAPS[sym_id]
    return [mp[p] for p in positions]


def isomorphic_encodings(bases: Sequence[Sequence[int]]) -> List[List[int]]:
    """
    Expand base tuples into their 8 symmetric images.

    Output is symmetry-major: [base0@sym0, base1@sym0, base0@sym1, ...], so
    encoding i is an image of base i % len(bases). With one table per base and
    modulo table sharing, every image shares its base's weights.
    """
    return [
        apply_symmetry_tuple(base, sym_id)
        for sym_id in range(8)
        for base in bases
    ]


# Outer line and inner line
DEFAULT_BASES = [(0, 1, 2, 3), (4, 5, 6, 7)]
DEFAULT_ENCODINGS = isomorphic_encodings(DEFAULT_BASES)
DEFAULT_INIT = "65536,65536"
