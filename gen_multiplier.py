# -*- coding: utf-8 -*-
# gen_multiplier.py — 生成顶层时序乘法器 multiplier_{n}（VHDL）
#
# 每个时钟周期：
#   1) priority_encoder 找出 mr_reg 的最高位 1 -> shamt
#   2) decoder 把 shamt 还原成 one-hot，和 mr_reg 异或以清掉该位
#   3) barrel_shifter 把 md 左移 shamt 位，CLA 累加进 prod_reg
# mr_reg 全 0 时完成；复位时 mr_reg 置全 1，避免空闲时被误判为 done
#
# CLA 不在这里生成，只按名字 CLA{2*max(n,m)} 引用
#
# 用法：
#   python gen_multiplier.py --n 256 --out multiplier_256_ngen.vhd

import argparse

from ngen_params import (Dimensions, adder_name, adder_width, derive, entity_name,
                         generic_clause, library_clause, write_text)


def _component(name: str, ports: list[str]) -> list[str]:
    s = [f"  component {name}", "  port("]
    s.extend(f"    {p}" for p in ports)
    s.append("  );")
    s.append("  end component;")
    s.append("")
    return s


def gen_multiplier_module(dims: Dimensions) -> str:
    n = dims.n
    name = entity_name("multiplier", n)
    encoder = entity_name("priority_encoder", n)
    shifter = entity_name("barrel_shifter", n)
    decoder = entity_name("decoder", n)
    adder = adder_name(dims)

    s: list[str] = []
    s.extend(library_clause(misc=True))

    # ---- entity ----
    s.append(f"entity {name} is")
    s.extend(generic_clause(dims, with_m=True))
    s.append("port(")
    s.append("  clk: in std_logic;")
    s.append("  start: in std_logic;")
    s.append("  reset: in std_logic;")
    s.append("  mr: in std_logic_vector(g_n - 1 downto 0);")
    s.append("  s_mr: in std_logic;")
    s.append("  md: in std_logic_vector(g_m - 1 downto 0);")
    s.append("  s_md: in std_logic;")
    s.append("  prod: out std_logic_vector(g_n + g_m - 1 downto 0);")
    s.append("  s_prod: out std_logic;")
    s.append("  done: out std_logic")
    s.append(");")
    s.append(f"end {name};")
    s.append("")

    # ---- architecture ----
    s.append(f"architecture structural of {name} is")
    s.append("")
    s.extend(_component(encoder, [
        "input: in std_logic_vector(g_n-1 downto 0);",
        "output: out std_logic_vector(g_log2n-1 downto 0)",
    ]))
    s.extend(_component(shifter, [
        "input: in std_logic_vector(g_m - 1 downto 0); -- input to shift, i.e., multiplicand Md",
        "shamt: in std_logic_vector(g_log2n - 1 downto 0); -- shift amount, i.e., floor(log_2(Mr))",
        "output: out std_logic_vector(g_m + g_n - 1 downto 0) -- shifted output",
    ]))
    s.extend(_component(decoder, [
        "input: in std_logic_vector(g_log2n - 1 downto 0); -- value to decode, i.e., shift amount for multiplication",
        "output: out std_logic_vector(g_n - 1 downto 0) -- decoded result (C_i)",
    ]))
    if adder_width(dims) != n + dims.m:
        s.append(f"  -- NOTE: {adder} is sized 2*max(n, m) = {adder_width(dims)}, ports below are n + m = {n + dims.m} wide")
    s.extend(_component(adder, [
        "A, B: in std_logic_vector(g_n + g_m - 1 downto 0);",
        "Ci: in std_logic;",
        "S: out std_logic_vector(g_n + g_m - 1 downto 0);",
        "Co, PG, GG: out std_logic",
    ]))

    s.append("  -- Registers")
    s.append("  signal mr_reg: std_logic_vector(g_n - 1 downto 0) := (others => '1');")
    s.append("  signal prod_reg: std_logic_vector(g_n + g_m - 1 downto 0);")
    s.append("")
    s.append("  -- Intermediate Signals")
    s.append("  signal encoder_output: std_logic_vector(g_log2n - 1 downto 0);")
    s.append("  signal decoder_output: std_logic_vector(g_n - 1 downto 0);")
    s.append("  signal shifter_output: std_logic_vector(g_n + g_m - 1 downto 0);")
    s.append("  signal xor_output: std_logic_vector(g_n - 1 downto 0);")
    s.append("  signal adder_output: std_logic_vector(g_n + g_m - 1 downto 0);")
    s.append("  signal adder_cout: std_logic;")
    s.append("  signal hw_done: std_logic := '0';")
    s.append("  signal active: std_logic := '0';")
    s.append("  signal armed: std_logic := '1'; -- cleared by a load until start is released")
    s.append("  attribute dont_touch: string;")
    s.append('  attribute dont_touch of shifter_output: signal is "true";')
    s.append('  attribute dont_touch of active: signal is "true";')
    s.append("")

    s.append("begin")
    s.append("  -- Instantiate Components")
    s.append(f"  encoder: {encoder} port map(mr_reg, encoder_output);")
    s.append(f"  decoder: {decoder} port map(encoder_output, decoder_output);")
    s.append(f"  shifter: {shifter} port map(md, encoder_output, shifter_output);")
    s.append(f"  adder: {adder} port map(")
    s.append("    A => prod_reg,")
    s.append("    B => shifter_output,")
    s.append("    Ci => '0',")
    s.append("    S => adder_output,")
    s.append("    Co => adder_cout,")
    s.append("    PG => open,")
    s.append("    GG => open")
    s.append("  );")
    s.append("")

    s.append("  xor_output <= mr_reg xor decoder_output;")
    s.append("  prod <= prod_reg;")
    s.append("  s_prod <= s_mr xor s_md;")
    s.append("  hw_done <= not or_reduce(mr_reg);")
    s.append("")

    # reset > load > step > finish
    s.append("  process (clk, reset) begin")
    s.append("    if (reset = '1') then")
    s.append("      mr_reg <= (others => '1'); -- set all 1s initially to avoid premature done")
    s.append("      prod_reg <= (others => '0');")
    s.append("      active <= '0';")
    s.append("      armed <= '1';")
    s.append("      done <= '0';")
    s.append("    elsif (clk'event and clk = '1') then")
    s.append("      done <= hw_done;")
    s.append("      if (start = '0') then")
    s.append("        armed <= '1'; -- start released, next start may load")
    s.append("      end if;")
    s.append("      if (start = '1' and active = '0' and armed = '1') then")
    s.append("        mr_reg <= mr; -- take initial value of multiplier")
    s.append("        prod_reg <= (others => '0'); -- reset product register")
    s.append("        done <= '0';")
    s.append("        active <= '1';")
    s.append("        armed <= '0';")
    s.append("      elsif (active = '1' and hw_done = '0') then")
    s.append("        mr_reg <= xor_output;")
    s.append("        prod_reg <= adder_output;")
    s.append("      elsif (active = '1' and hw_done = '1') then")
    s.append("        active <= '0'; -- finished, wait for the next start")
    s.append("      end if;")
    s.append("    end if;")
    s.append("  end process;")
    s.append("end;")
    s.append("")
    return "\n".join(s)


def main():
    ap = argparse.ArgumentParser(description="Generate the sequential two-level multiplier top (VHDL).")
    ap.add_argument("--n", type=int, required=True, help="乘数位宽 n（2 的幂）")
    ap.add_argument("--m", type=int, default=None, help="被乘数位宽 m（默认等于 n）")
    ap.add_argument("--out", type=str, default=None, help="输出 .vhd 文件（省略则打印到 stdout）")
    args = ap.parse_args()

    text = gen_multiplier_module(derive(args.n, args.m))
    if args.out:
        write_text(args.out, text)
    else:
        print(text)


if __name__ == "__main__":
    main()
