# -*- coding: utf-8 -*-
# sim_multiplier.py — 两级乘法算法的软件模型（逐周期跟踪）
#
# 编码器 / 译码器 / 移位器都按生成的硬件结构（粗 + 细两级）建模，
# 加法用行波进位加法器代替 CLA。
#
# 用法：
#   python sim_multiplier.py 10001011 01011011
#   python sim_multiplier.py 10001011 01011011 --signed   # 最高位当符号位

import argparse
from dataclasses import dataclass, field
from typing import List

from ngen_params import Dimensions, derive


def _mask(width: int) -> int:
    return (1 << width) - 1


# ----------------- 单级参考模型 -----------------
def encode(value: int) -> int:
    # position of the most significant 1, -1 if none
    return value.bit_length() - 1


def decode(shamt: int) -> int:
    return 1 << shamt


def shift(md: int, shamt: int) -> int:
    return md << shamt


# ----------------- 两级结构模型 -----------------
def two_level_encode(value: int, dims: Dimensions) -> int:
    q, k = dims.q, dims.k
    if value == 0:
        return -1
    slice_or = 1  # slice_or(0) is tied high
    for i in range(1, k):
        if (value >> (q * i)) & _mask(q):
            slice_or |= 1 << i
    coarse = encode(slice_or)
    f_input = (value >> (q * coarse)) & _mask(q)
    fine = encode(f_input)
    return (coarse << dims.log2q) | fine


def two_level_decode(shamt: int, dims: Dimensions) -> int:
    col = decode(shamt >> dims.log2q)
    row = decode(shamt & _mask(dims.log2q))
    result = 0
    for i in range(dims.k):
        for j in range(dims.q):
            if (col >> i) & (row >> j) & 1:
                result |= 1 << (dims.q * i + j)
    return result


def two_level_shift(md: int, shamt: int, dims: Dimensions) -> int:
    lower = shamt & _mask(dims.log2q)
    upper = shamt >> dims.log2q
    fine_result = (md & _mask(dims.m)) << lower
    coarse_result = fine_result << (dims.q * upper)
    return coarse_result & _mask(dims.m + dims.n)


def ripple_carry_add(a: int, b: int, width: int, cin: int = 0) -> tuple[int, int]:
    carry = cin & 1
    total = 0
    for i in range(width):
        x = (a >> i) & 1
        y = (b >> i) & 1
        total |= (x ^ y ^ carry) << i
        carry = (x & y) | ((x ^ y) & carry)
    return total, carry


# ----------------- 乘法器 -----------------
@dataclass
class Iteration:
    index: int
    mr: int
    shamt: int
    partial_product: int
    product: int
    decoded: int
    done: bool


@dataclass
class MulResult:
    mr: int
    md: int
    product: int
    sign: int = 0
    trace: List[Iteration] = field(default_factory=list)

    @property
    def iterations(self) -> int:
        return len(self.trace)


class TwoLevelMultiplier:
    def __init__(self, dims: Dimensions):
        self.dims = dims

    def multiply(self, mr: int, md: int, s_mr: int = 0, s_md: int = 0) -> MulResult:
        dims = self.dims
        width = dims.n + dims.m
        mr_reg = mr & _mask(dims.n)
        md &= _mask(dims.m)
        prod = 0
        result = MulResult(mr=mr_reg, md=md, product=0, sign=(s_mr ^ s_md) & 1)

        while mr_reg:
            shamt = two_level_encode(mr_reg, dims)
            pp = two_level_shift(md, shamt, dims)
            prod, _ = ripple_carry_add(prod, pp, width)
            decoded = two_level_decode(shamt, dims)
            before = mr_reg
            mr_reg ^= decoded
            result.trace.append(Iteration(
                index=len(result.trace) + 1,
                mr=before,
                shamt=shamt,
                partial_product=pp,
                product=prod,
                decoded=decoded,
                done=mr_reg == 0,
            ))

        result.product = prod
        return result


def trace_rows(result: MulResult, dims: Dimensions) -> list[tuple[int, list[bool], int]]:
    """Per iteration: index, multiplier register bits (MSB first), consumed bit position."""
    rows = []
    for it in result.trace:
        bits = [bool((it.mr >> b) & 1) for b in range(dims.n - 1, -1, -1)]
        rows.append((it.index, bits, it.shamt))
    return rows


def format_trace(result: MulResult, dims: Dimensions) -> list[str]:
    nw = dims.n
    pw = dims.n + dims.m
    header = f"{format(result.mr, f'0{nw}b')} * {format(result.md, f'0{dims.m}b')}"
    s = [header, "-" * len(header)]
    for it in result.trace:
        s.append(f"Iteration {it.index}:")
        s.append(f"Mr_i:   {format(it.mr, f'0{nw}b')}")
        s.append(f"Sh_i:   {it.shamt} bits")
        s.append(f"Pp_i:   {format(it.partial_product, f'0{pw}b')}")
        s.append(f"Prod_i: {format(it.product, f'0{pw}b')}")
        s.append(f"C_i:    {format(it.decoded, f'0{nw}b')}")
        s.append(f"Done:   {it.done}")
        s.append("")
    s.append(f"Total Iterations: {result.iterations}")
    s.append(f"Number of high bits in multiplier (h): {bin(result.mr).count('1')}")
    return s


def dims_for_operands(*bit_strings: str) -> Dimensions:
    longest = max(len(b) for b in bit_strings)
    n = max(4, 1 << max(longest - 1, 0).bit_length())
    return derive(n)


def run(mr_bits: str, md_bits: str, signed: bool = False):
    if signed:
        s_mr, mr_bits = int(mr_bits[0], 2), mr_bits[1:]
        s_md, md_bits = int(md_bits[0], 2), md_bits[1:]
    else:
        s_mr = s_md = 0
    dims = dims_for_operands(mr_bits, md_bits)
    mr, md = int(mr_bits, 2), int(md_bits, 2)
    result = TwoLevelMultiplier(dims).multiply(mr, md, s_mr, s_md)

    print("\n".join(format_trace(result, dims)))
    if signed:
        neg = lambda b: "-" if b else "+"
        print(f"Base 10: {neg(s_mr)}{mr} * {neg(s_md)}{md} = {neg(result.sign)}{result.product}")
        print(f"Base 2: {s_mr}_{mr_bits} * {s_md}_{md_bits} = {result.sign}_{result.product:b}")
    else:
        print(f"Base 10: {mr} * {md} = {result.product}")
        print(f"Base 2: {mr_bits} * {md_bits} = {result.product:b}")
    return result


def main():
    ap = argparse.ArgumentParser(description="Trace the two-level shift-and-add multiplication in software.")
    ap.add_argument("mr", nargs="?", default="10001011", help="乘数（二进制串）")
    ap.add_argument("md", nargs="?", default="01011011", help="被乘数（二进制串）")
    ap.add_argument("--signed", action="store_true", help="最高位作为符号位（原码）")
    args = ap.parse_args()
    run(args.mr, args.md, args.signed)


if __name__ == "__main__":
    main()
