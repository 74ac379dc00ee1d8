# -*- coding: utf-8 -*-
# gen_barrel_shifter.py — 生成两级桶形移位器 barrel_shifter_{n}（VHDL）
#
# - 移位量 shamt 拆成高 log2(k) 位（粗移，按 q 位一组）和低 log2(q) 位（细移，按位）
# - 先细移再粗移，细移结果只有 m+q-1 位，中间信号更窄
# - 输出 m+n 位：最高位补 '0'
#
# 用法：
#   python gen_barrel_shifter.py --n 256 --out barrel_shifter_256_ngen.vhd

import argparse

from ngen_params import Dimensions, derive, entity_name, generic_clause, library_clause, write_text


def fine_shift_amounts(dims: Dimensions) -> list[int]:
    # amount 0 is the default branch
    return list(range(dims.q - 1, 0, -1))


def coarse_shift_amounts(dims: Dimensions) -> list[int]:
    return list(range(dims.k - 1, 0, -1))


def _zeros(count: int) -> str:
    return '"' + "0" * count + '"'


def fine_branch(dims: Dimensions, amount: int) -> str:
    # every branch is m + q - 1 bits wide
    parts = []
    lead = dims.q - 1 - amount
    if lead > 0:
        parts.append(_zeros(lead))
    parts.append("input")
    if amount > 0:
        parts.append(_zeros(amount))
    return " & ".join(parts)


def coarse_branch(dims: Dimensions, amount: int) -> str:
    parts = ["q_0s"] * (dims.k - 1 - amount) + ["fine_result"] + ["q_0s"] * amount
    return " & ".join(parts)


def gen_barrel_shifter_module(dims: Dimensions) -> str:
    name = entity_name("barrel_shifter", dims.n)
    width = len(str(max(dims.q - 1, dims.k - 1, 1)))

    s: list[str] = []
    s.extend(library_clause())

    # ---- entity ----
    s.append(f"entity {name} is")
    s.extend(generic_clause(dims, with_m=True))
    s.append("port(")
    s.append("  input: in std_logic_vector(g_m - 1 downto 0); -- input to shift, i.e., multiplicand Md")
    s.append("  shamt: in std_logic_vector(g_log2n - 1 downto 0); -- shift amount, i.e., floor(log_2(Mr))")
    s.append("  output: out std_logic_vector(g_m + g_n - 1 downto 0) -- shifted output")
    s.append(");")
    s.append(f"end {name};")
    s.append("")

    # ---- architecture ----
    s.append(f"architecture behavioral of {name} is")
    s.append("")
    s.append("signal shamt_upper: std_logic_vector(g_log2k - 1 downto 0); -- most significant log2(k) bits of shift amount")
    s.append("signal shamt_lower: std_logic_vector(g_log2q - 1 downto 0); -- least significant log2(q) bits of shift amount")
    s.append("signal coarse_result: std_logic_vector(g_m + g_n - 2 downto 0); -- result of coarse shifting")
    s.append("signal fine_result: std_logic_vector(g_m + g_q - 2 downto 0); -- result of fine shifting")
    s.append("constant q_0s: std_logic_vector(g_q - 1 downto 0) := (others => '0'); -- shorthand for q zeroes")
    s.append("")
    s.append("begin")
    s.append("shamt_upper <= shamt(g_log2n - 1 downto g_log2q); -- log2(k) most significant bits")
    s.append("shamt_lower <= shamt(g_log2q - 1 downto 0); -- log2(q) least significant bits")
    s.append("")

    # ---- fine shift: q-1 .. 1, default 0 ----
    s.append("-- maximum fine shift: q - 1 bits")
    s.append("fine_result <=")
    for i in fine_shift_amounts(dims):
        s.append(f"  {fine_branch(dims, i)} when shamt_lower = {i:<{width}} else")
    s.append(f"  {fine_branch(dims, 0)};")
    s.append("")

    # ---- coarse shift: k-1 .. 1, default 0 ----
    s.append("-- maximum coarse shift: k - 1 groups of q bits")
    s.append("coarse_result <=")
    for i in coarse_shift_amounts(dims):
        s.append(f"  {coarse_branch(dims, i)} when shamt_upper = {i:<{width}} else")
    s.append(f"  {coarse_branch(dims, 0)};")
    s.append("")

    s.append("output <= '0' & coarse_result;")
    s.append("end;")
    s.append("")
    return "\n".join(s)


def main():
    ap = argparse.ArgumentParser(description="Generate a two-level barrel shifter (VHDL).")
    ap.add_argument("--n", type=int, required=True, help="移位量范围 n（2 的幂）")
    ap.add_argument("--m", type=int, default=None, help="被移位数位宽 m（默认等于 n）")
    ap.add_argument("--out", type=str, default=None, help="输出 .vhd 文件（省略则打印到 stdout）")
    args = ap.parse_args()

    text = gen_barrel_shifter_module(derive(args.n, args.m))
    if args.out:
        write_text(args.out, text)
    else:
        print(text)


if __name__ == "__main__":
    main()
