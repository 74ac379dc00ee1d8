# -*- coding: utf-8 -*-
# gen_decoder.py — 生成两级 one-hot 译码器 decoder_{n}（VHDL）
#
# - 列译码器 col：k 路输出，取输入高 log2(k) 位
# - 行译码器 row：q 路输出，取输入低 log2(q) 位
# - result(q*i + j) = col(i) and row(j)，在 Python 里展开为显式赋值（不使用 generate）
#
# 用法：
#   python gen_decoder.py --n 256 --out decoder_256_ngen.vhd

import argparse
import math

from bitvec import BitVector
from ngen_params import Dimensions, derive, entity_name, generic_clause, library_clause, write_text


def partial_decoder_terms(max_out: int, upper: int, lower: int) -> list[tuple[int, list[tuple[int, bool]]]]:
    """One-hot truth table of a single-level ``max_out``-way decoder.

    Returns one ``(i, terms)`` entry per output, from ``max_out - 1`` down to 0.
    ``terms`` lists ``(input_bit, positive)`` from ``upper`` down to ``lower``;
    the MSB of ``i`` lines up with ``upper``.
    """
    bv = BitVector.full(int(math.log2(max_out)))
    rows = []
    for i in range(max_out - 1, -1, -1):
        terms = [(j, bv[j - lower]) for j in range(upper, lower - 1, -1)]
        rows.append((i, terms))
        bv.decrement()
    return rows


def gen_partial_decoder(name: str, max_out: int, upper: int, lower: int) -> list[str]:
    width = len(str(max_out - 1))
    s = []
    for i, terms in partial_decoder_terms(max_out, upper, lower):
        lhs = f"{name}({i})"
        expr = " and ".join(f"input({j})" if pos else f"not input({j})" for j, pos in terms)
        s.append(f"{lhs:<{len(name) + width + 2}} <= {expr};")
    return s


def gen_decoder_module(dims: Dimensions) -> str:
    name = entity_name("decoder", dims.n)

    s: list[str] = []
    s.extend(library_clause())

    # ---- entity ----
    s.append(f"entity {name} is")
    s.extend(generic_clause(dims))
    s.append("port(")
    s.append("  input: in std_logic_vector(g_log2n - 1 downto 0); -- value to decode, i.e., shift amount for multiplication")
    s.append("  output: out std_logic_vector(g_n - 1 downto 0) -- decoded result (C_i)")
    s.append(");")
    s.append(f"end {name};")
    s.append("")

    # ---- architecture ----
    s.append(f"architecture behavioral of {name} is")
    s.append("")
    s.append("signal col: std_logic_vector(g_k - 1 downto 0); -- column/coarse decoder, handles log2k most significant bits of input")
    s.append("signal row: std_logic_vector(g_q - 1 downto 0); -- row/fine decoder, handles log2q least significant bits of input")
    s.append("signal result: std_logic_vector(g_n - 1 downto 0); -- result of decoding, i.e., 2^{input}")
    s.append("")
    s.append("begin")
    s.append("-- Decoding corresponds to binary representation of given portions of shift")
    s.append("")
    s.extend(gen_partial_decoder("col", dims.k, dims.log2n - 1, dims.log2q))
    s.append("")
    s.extend(gen_partial_decoder("row", dims.q, dims.log2q - 1, 0))
    s.append("")

    s.append("-- two-level AND grid: result(q*i + j) = col(i) and row(j)")
    for i in range(dims.k - 1, -1, -1):
        for j in range(dims.q - 1, -1, -1):
            s.append(f"result({dims.q * i + j}) <= col({i}) and row({j});")
    s.append("")
    s.append("output <= result;")
    s.append("end;")
    s.append("")
    return "\n".join(s)


def main():
    ap = argparse.ArgumentParser(description="Generate a two-level one-hot decoder (VHDL).")
    ap.add_argument("--n", type=int, required=True, help="输出位宽 n（2 的幂）")
    ap.add_argument("--out", type=str, default=None, help="输出 .vhd 文件（省略则打印到 stdout）")
    args = ap.parse_args()

    text = gen_decoder_module(derive(args.n))
    if args.out:
        write_text(args.out, text)
    else:
        print(text)


if __name__ == "__main__":
    main()
