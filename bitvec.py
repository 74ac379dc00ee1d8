# -*- coding: utf-8 -*-
# bitvec.py — 定宽二进制计数器（低位在前），供译码器/编码器生成时按行寻址

from typing import List


class BitVector:
    """Fixed-width unsigned counter, digit 0 is the least significant."""

    def __init__(self, width: int, fill: bool = False):
        self.bits: List[bool] = [fill] * width

    @classmethod
    def full(cls, width: int) -> "BitVector":
        return cls(width, fill=True)

    @classmethod
    def from_int(cls, value: int, width: int) -> "BitVector":
        bv = cls(width)
        for i in range(width):
            bv.bits[i] = bool((value >> i) & 1)
        return bv

    def __len__(self):
        return len(self.bits)

    def __getitem__(self, idx: int) -> bool:
        return self.bits[idx]

    def __eq__(self, other):
        if not isinstance(other, BitVector):
            return NotImplemented
        return self.bits == other.bits

    def __str__(self):
        return "[ " + "".join(f"{int(b)} " for b in reversed(self.bits)) + "]"

    def is_zero(self) -> bool:
        return not any(self.bits)

    def to_int(self) -> int:
        return sum(1 << i for i, b in enumerate(self.bits) if b)

    def increment(self):
        # carry past the MSB is dropped
        for i in range(len(self.bits)):
            if not self.bits[i]:
                self.bits[i] = True
                return
            self.bits[i] = False

    def decrement(self):
        # saturates at zero
        if self.is_zero():
            return
        low = self.bits.index(True)
        self.bits[low] = False
        for i in range(low):
            self.bits[i] = True


def to_binary_string(i: int, width: int | None = None) -> str:
    if i < 0:
        raise ValueError(f"negative value {i}")
    s = format(i, "b")
    if width is None:
        return s
    if len(s) > width:
        raise ValueError(f"{i} does not fit in {width} bits")
    return s.zfill(width)
