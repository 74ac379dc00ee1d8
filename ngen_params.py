# -*- coding: utf-8 -*-
# ngen_params.py — 由位宽 n 推导两级结构的尺寸参数 (q, k, log2)，以及各生成器共用的 VHDL 文本片段
#
# n: 乘数位宽（2 的幂），m: 被乘数位宽（目前 m = n）
# q: 不小于 sqrt(n) 的最小 2 的幂；k = n / q

import math
import os
from dataclasses import dataclass

FILE_ENDING = "_ngen.vhd"
DEFAULT_N = 256


@dataclass(frozen=True)
class Dimensions:
    n: int
    m: int
    log2n: int
    q: int
    log2q: int
    k: int
    log2k: int


def derive(n: int, m: int | None = None) -> Dimensions:
    # n must be a power of two; not checked here
    if m is None:
        m = n
    log2n = int(math.log2(n))
    q = 2 ** math.ceil(math.log2(math.sqrt(n)))
    k = n // q
    return Dimensions(
        n=n,
        m=m,
        log2n=log2n,
        q=q,
        log2q=int(math.log2(q)),
        k=k,
        log2k=int(math.log2(k)),
    )


def describe(dims: Dimensions) -> list[str]:
    return [
        "Parameters: ",
        f"n = ...... {dims.n}",
        f"m = ...... {dims.m}",
        f"log_2(n) = {dims.log2n}",
        f"q = ...... {dims.q}",
        f"log_2(q) = {dims.log2q}",
        f"k = ...... {dims.k}",
        f"log_2(k) = {dims.log2k}",
    ]


def print_parameters(dims: Dimensions):
    print("\n".join(describe(dims)))


# ----------------- 命名 -----------------
def entity_name(kind: str, n: int) -> str:
    return f"{kind}_{n}"


def output_filename(kind: str, n: int, suffix: str = FILE_ENDING) -> str:
    return entity_name(kind, n) + suffix


def adder_width(dims: Dimensions) -> int:
    # n + m would be enough, the CLA is kept at a power-of-two size
    return 2 * max(dims.n, dims.m)


def adder_name(dims: Dimensions) -> str:
    return f"CLA{adder_width(dims)}"


# ----------------- 公用 VHDL 片段 -----------------
def library_clause(misc: bool = False) -> list[str]:
    s = [
        "library IEEE;",
        "use IEEE.std_logic_1164.all;",
        "use IEEE.numeric_std.all;",
        "use IEEE.std_logic_unsigned.all;",
    ]
    if misc:
        s.append("use IEEE.std_logic_misc.all;")
    s.append("")
    return s


def generic_clause(dims: Dimensions, with_m: bool = False) -> list[str]:
    rows = [
        ("g_n", dims.n, "Input (multiplier) length is n"),
        ("g_log2n", dims.log2n, "Base 2 Logarithm of input length n; i.e., output length"),
    ]
    if with_m:
        rows.append(("g_m", dims.m, "Input (multiplicand) length is m"))
    rows += [
        ("g_q", dims.q, "q is the least power of 2 greater than sqrt(n); i.e., 2^(ceil(log_2(sqrt(n)))"),
        ("g_log2q", dims.log2q, "Base 2 Logarithm of q"),
        ("g_k", dims.k, "k is defined as n/q, if n is a perfect square, then k = sqrt(n) = q"),
        ("g_log2k", dims.log2k, "Base 2 Logarithm of k"),
    ]

    s = ["generic("]
    for idx, (name, value, note) in enumerate(rows):
        sep = ";" if idx < len(rows) - 1 else ""
        decl = f"  {name + ':':<9} integer := {value}{sep}"
        s.append(f"{decl:<30}  -- {note}")
    s.append(");")
    return s


def write_text(path, text):
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(text)
