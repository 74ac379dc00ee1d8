# -*- coding: utf-8 -*-
# gen_encoder.py — 生成两级优先编码器 priority_encoder_{n}（VHDL）
#
# 结构：
# - 输入按 q 位一组分成 k 组，每组 OR 归约得到 k 位 slice_or
# - 粗编码器 priority_encoder_{k} 编码 slice_or，得到高 log2(k) 位
# - 按粗编码结果选出对应的 q 位组，送入细编码器 priority_encoder_{q}，得到低 log2(q) 位
#
# 用法：
#   python gen_encoder.py --n 256 --out priority_encoder_256_ngen.vhd

import argparse

from bitvec import to_binary_string
from ngen_params import Dimensions, derive, entity_name, generic_clause, library_clause, write_text


def sub_encoder_widths(dims: Dimensions) -> list[int]:
    # coarse first; a perfect square only needs one size
    if dims.q == dims.k:
        return [dims.k]
    return [dims.k, dims.q]


def _component(width: int, generic_w: str, generic_log: str) -> list[str]:
    return [
        f"component {entity_name('priority_encoder', width)}",
        "port(",
        f"  input: in std_logic_vector({generic_w} - 1 downto 0);",
        f"  output: out std_logic_vector({generic_log} - 1 downto 0)",
        ");",
        "end component;",
        "",
    ]


def wrap_or_terms(target: str, terms: list[str], per_line: int = 8) -> list[str]:
    head = f"{target} <= "
    cont = " " * len(head)
    lines = []
    for i in range(0, len(terms), per_line):
        chunk = " or ".join(terms[i:i + per_line])
        last = i + per_line >= len(terms)
        lines.append((head if i == 0 else cont) + chunk + (";" if last else " or"))
    return lines


def gen_encoder_module(dims: Dimensions) -> str:
    n, q, k = dims.n, dims.q, dims.k
    name = entity_name("priority_encoder", n)

    s: list[str] = []
    s.extend(library_clause())

    # ---- entity ----
    s.append(f"entity {name} is")
    s.extend(generic_clause(dims))
    s.append("port(")
    s.append("  input: in std_logic_vector(g_n-1 downto 0);")
    s.append("  output: out std_logic_vector(g_log2n-1 downto 0)")
    s.append(");")
    s.append(f"end {name};")
    s.append("")

    # ---- architecture ----
    s.append(f"architecture behavioral of {name} is")
    s.append("")
    widths = sub_encoder_widths(dims)
    s.extend(_component(k, "g_k", "g_log2k"))
    if len(widths) > 1:
        s.extend(_component(q, "g_q", "g_log2q"))

    s.append("signal c_output: std_logic_vector(g_log2k - 1 downto 0); -- coarse encoder output, select input signal for mux")
    s.append("signal f_input: std_logic_vector(g_q - 1 downto 0); -- fine encoder input")
    s.append("signal slice_or: std_logic_vector(g_k - 1 downto 0); -- k OR gates with q inputs each, slice_or(0) is unused")
    s.append("")
    s.append("begin")

    # group OR gates, highest group first
    for i in range(k - 1, 0, -1):
        terms = [f"input({q * (i + 1) - j})" for j in range(1, q + 1)]
        s.extend(wrap_or_terms(f"slice_or({i})", terms))
        s.append("")
    # group 0 is the final else of the mux below
    s.append("slice_or(0) <= '1';")
    s.append("")

    s.append(f"coarse_encoder: {entity_name('priority_encoder', k)} port map(slice_or, c_output);")
    s.append("")

    s.append("f_input <=")
    for i in range(k, 0, -1):
        upper = q * i - 1
        lower = q * (i - 1)
        sel = f"  input({upper} downto {lower})"
        if i > 1:
            lit = to_binary_string(i - 1, dims.log2k)
            s.append(f'{sel} when c_output = "{lit}" else')
        else:
            s.append(f"{sel};")
    s.append("")

    s.append(f"fine_encoder: {entity_name('priority_encoder', q)} port map(f_input, output(g_log2q - 1 downto 0));")
    s.append("")
    s.append("output(g_log2n - 1 downto g_log2q) <= c_output(g_log2k - 1 downto 0);")
    s.append("end;")
    s.append("")
    return "\n".join(s)


def main():
    ap = argparse.ArgumentParser(description="Generate a two-level priority encoder (VHDL).")
    ap.add_argument("--n", type=int, required=True, help="输入位宽 n（2 的幂）")
    ap.add_argument("--out", type=str, default=None, help="输出 .vhd 文件（省略则打印到 stdout）")
    args = ap.parse_args()

    text = gen_encoder_module(derive(args.n))
    if args.out:
        write_text(args.out, text)
    else:
        print(text)


if __name__ == "__main__":
    main()
