# -*- coding: utf-8 -*-
# mulgen_allinone.py — 一键生成：priority_encoder / barrel_shifter / decoder / multiplier 四个 VHDL 文件
# 正常运行：按 --n（或 --config 里的 n）批量生成到 --out 目录
# 参数 --gui：打开 Tk 一键生成器
# 参数 --simulate MR MD：打印软件模型的逐周期跟踪
# 参数 --view MR MD：打开跟踪气泡图（PySide6）

import os, sys, json, traceback, argparse

from gen_barrel_shifter import gen_barrel_shifter_module
from gen_decoder import gen_decoder_module
from gen_encoder import gen_encoder_module
from gen_multiplier import gen_multiplier_module
from ngen_params import DEFAULT_N, FILE_ENDING, Dimensions, derive, output_filename, print_parameters, write_text

APP_TITLE = "NGen 两级乘法器组件生成器"

GENERATORS = [
    ("priority_encoder", gen_encoder_module),
    ("barrel_shifter", gen_barrel_shifter_module),
    ("decoder", gen_decoder_module),
    ("multiplier", gen_multiplier_module),
]


# ----------------- 公用 I/O -----------------
def read_json(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_params(path) -> dict:
    obj = read_json(path)
    params = {"n": int(obj["n"])}
    if obj.get("m") is not None:
        params["m"] = int(obj["m"])
    for key in ("out", "suffix"):
        if obj.get(key):
            params[key] = str(obj[key])
    return params


def is_valid_n(n: int) -> bool:
    return n >= 4 and (n & (n - 1)) == 0


def generate_all(dims: Dimensions, out_dir: str, suffix: str = FILE_ENDING) -> list[str]:
    print_parameters(dims)
    written = []
    for kind, gen in GENERATORS:
        filename = output_filename(kind, dims.n, suffix)
        path = os.path.join(out_dir, filename)
        print(f"Creating {filename}")
        write_text(path, gen(dims))
        print(f"Created {filename}")
        written.append(path)
    return written


# ----------------- Tk 一键生成器 -----------------
def run_tk_main(default_n: int = DEFAULT_N, default_out: str | None = None,
                m: int | None = None, suffix: str = FILE_ENDING):
    import tkinter as tk
    from tkinter import ttk, filedialog, messagebox

    root = tk.Tk()
    root.title(APP_TITLE)
    root.geometry("560x220")

    frm = ttk.Frame(root, padding=12)
    frm.pack(fill="both", expand=True)

    status_text = tk.StringVar(value="请选择位宽 n（2 的幂，≥ 4），然后生成。")

    row = 0
    ttk.Label(frm, text="位宽 n：").grid(row=row, column=0, sticky="e", padx=4, pady=6)
    ent_n = ttk.Entry(frm, width=10)
    ent_n.insert(0, str(default_n))
    ent_n.grid(row=row, column=1, sticky="w", padx=4, pady=6)

    row += 1
    ttk.Label(frm, text="输出目录：").grid(row=row, column=0, sticky="e", padx=4, pady=6)
    out_var = tk.StringVar(value=default_out or os.getcwd())
    ttk.Entry(frm, textvariable=out_var, width=50).grid(row=row, column=1, sticky="w", padx=4, pady=6, columnspan=2)

    def browse_out():
        path = filedialog.askdirectory(title="选择输出目录")
        if path:
            out_var.set(path)
    ttk.Button(frm, text="浏览...", command=browse_out).grid(row=row, column=3, sticky="w", padx=4, pady=6)

    def do_generate():
        try:
            n = int(ent_n.get())
        except ValueError:
            messagebox.showerror("非法位宽", "请输入正确的 n（整数）")
            return
        if not is_valid_n(n):
            messagebox.showerror("非法位宽", "n 必须是 2 的幂且 ≥ 4")
            return

        out_dir = out_var.get().strip() or os.getcwd()
        try:
            generate_all(derive(n, m), out_dir, suffix)
        except OSError as e:
            traceback.print_exc()
            messagebox.showerror("生成失败", f"{e}")
            return
        status_text.set(f"生成完成：4 个模块已输出到 {out_dir}")
        messagebox.showinfo("完成", f"生成完成！\n输出目录：{out_dir}")

    row += 1
    ttk.Button(frm, text="一键生成", width=18, command=do_generate).grid(row=row, column=1, sticky="w", padx=4, pady=14)
    ttk.Button(frm, text="退出", width=8, command=root.destroy).grid(row=row, column=3, sticky="e", padx=4, pady=14)

    row += 1
    ttk.Label(frm, textvariable=status_text, foreground="#555").grid(row=row, column=0, columnspan=4, sticky="w", padx=4, pady=6)

    root.mainloop()


# ----------------- 入口 -----------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Generate the two-level multiplier components (VHDL).")
    ap.add_argument("--n", type=int, default=None, help=f"乘数位宽 n（2 的幂，默认 {DEFAULT_N}）")
    ap.add_argument("--m", type=int, default=None, help="被乘数位宽 m（默认等于 n）")
    ap.add_argument("--out", type=str, default=None, help="输出目录（默认当前目录）")
    ap.add_argument("--suffix", type=str, default=None, help=f"文件后缀（默认 {FILE_ENDING}）")
    ap.add_argument("--config", type=str, default=None, help="JSON 参数文件：{\"n\": 16, \"m\": 16, \"out\": \"rtl\"}")
    ap.add_argument("--gui", action="store_true", help="打开 Tk 一键生成器")
    ap.add_argument("--simulate", nargs=2, metavar=("MR", "MD"), help="软件模型跟踪（二进制串）")
    ap.add_argument("--signed", action="store_true", help="--simulate 时把最高位当符号位")
    ap.add_argument("--view", nargs=2, metavar=("MR", "MD"), help="打开跟踪气泡图（需要 PySide6）")
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)

    params = {}
    if args.config:
        try:
            params = load_params(args.config)
        except (OSError, ValueError, KeyError, TypeError) as e:
            ap.error(f"无法读取参数文件 {args.config}: {e}")
    for key in ("n", "m", "out", "suffix"):
        value = getattr(args, key)
        if value is not None:
            params[key] = value

    n = params.get("n", DEFAULT_N)
    out_dir = params.get("out", ".")

    if args.simulate:
        import sim_multiplier
        sim_multiplier.run(*args.simulate, signed=args.signed)
        return 0
    if args.view:
        import trace_viewer
        return trace_viewer.show_trace(*args.view)
    m = params.get("m")
    if m is not None and not is_valid_n(m):
        ap.error(f"m = {m} 不是 ≥ 4 的 2 的幂")
    suffix = params.get("suffix", FILE_ENDING)
    if args.gui:
        run_tk_main(n, out_dir, m, suffix)
        return 0

    if not is_valid_n(n):
        ap.error(f"n = {n} 不是 ≥ 4 的 2 的幂")

    try:
        generate_all(derive(n, m), out_dir, suffix)
    except OSError as e:
        print(f"生成失败: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
