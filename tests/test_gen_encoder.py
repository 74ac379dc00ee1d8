import re

import pytest

from gen_encoder import gen_encoder_module, sub_encoder_widths, wrap_or_terms
from ngen_params import derive
from sim_multiplier import encode


def components(text):
    return [int(w) for w in re.findall(r"^component priority_encoder_(\d+)$", text, re.M)]


@pytest.mark.parametrize("n, widths", [(16, [4]), (256, [16]), (64, [8]), (8, [2, 4]), (32, [4, 8])])
def test_sub_encoder_references(n, widths):
    d = derive(n)
    assert sub_encoder_widths(d) == widths
    text = gen_encoder_module(d)
    assert components(text) == widths
    assert f"coarse_encoder: priority_encoder_{d.k} port map(slice_or, c_output);" in text
    assert f"fine_encoder: priority_encoder_{d.q} port map(f_input, output(g_log2q - 1 downto 0));" in text


def test_entity_and_ports():
    text = gen_encoder_module(derive(16))
    assert "entity priority_encoder_16 is" in text
    assert "end priority_encoder_16;" in text
    assert "  input: in std_logic_vector(g_n-1 downto 0);" in text
    assert "  output: out std_logic_vector(g_log2n-1 downto 0)" in text
    assert "output(g_log2n - 1 downto g_log2q) <= c_output(g_log2k - 1 downto 0);" in text
    assert text.rstrip().endswith("end;")


def test_group_or_gates_n16():
    text = gen_encoder_module(derive(16))
    assert "slice_or(3) <= input(15) or input(14) or input(13) or input(12);" in text
    assert "slice_or(1) <= input(7) or input(6) or input(5) or input(4);" in text
    assert "slice_or(0) <= '1';" in text


def test_group_or_gates_cover_every_upper_bit():
    d = derive(256)
    text = gen_encoder_module(d)
    used = {int(b) for b in re.findall(r"input\((\d+)\)(?= or|;)", text.split("coarse_encoder")[0])}
    assert used == set(range(d.q, d.n))


def test_select_chain_is_highest_group_first():
    text = gen_encoder_module(derive(16))
    chain = text.split("f_input <=\n")[1].split("\n\n")[0].splitlines()
    assert chain == [
        '  input(15 downto 12) when c_output = "11" else',
        '  input(11 downto 8) when c_output = "10" else',
        '  input(7 downto 4) when c_output = "01" else',
        "  input(3 downto 0);",
    ]


def test_select_literals_match_coarse_width():
    d = derive(256)
    text = gen_encoder_module(d)
    lits = re.findall(r'c_output = "([01]+)"', text)
    assert len(lits) == d.k - 1
    assert all(len(l) == d.log2k for l in lits)
    assert sorted(int(l, 2) for l in lits) == list(range(1, d.k))


def test_wrap_or_terms():
    terms = [f"t{i}" for i in range(10)]
    lines = wrap_or_terms("x", terms, per_line=4)
    assert lines[0] == "x <= t0 or t1 or t2 or t3 or"
    assert lines[1] == "     t4 or t5 or t6 or t7 or"
    assert lines[2] == "     t8 or t9;"


def parse_encoder(text):
    body = text.split("\nbegin\n")[1]
    groups = []
    for idx, expr in re.findall(r"slice_or\((\d+)\) <= (.*?);", body, re.S):
        bits = [int(b) for b in re.findall(r"input\((\d+)\)", expr)]
        groups.append((int(idx), expr == "'1'", bits))
    chain = body.split("f_input <=\n")[1].split(";")[0]
    selects = [(int(hi), int(lo), lit) for hi, lo, lit in
               re.findall(r'input\((\d+) downto (\d+)\)(?: when c_output = "([01]+)")?', chain)]
    return groups, selects


def evaluate_encoder(groups, selects, log2q, value):
    slice_or = 0
    for idx, tied, bits in groups:
        if tied or any((value >> b) & 1 for b in bits):
            slice_or |= 1 << idx
    coarse = encode(slice_or)
    for hi, lo, lit in selects:
        if not lit or int(lit, 2) == coarse:
            f_input = (value >> lo) & ((1 << (hi - lo + 1)) - 1)
            break
    return (coarse << log2q) | encode(f_input)


@pytest.mark.parametrize("n", [4, 8, 16])
def test_generated_encoder_finds_highest_one(n):
    d = derive(n)
    groups, selects = parse_encoder(gen_encoder_module(d))
    assert len(groups) == d.k
    assert len(selects) == d.k
    for value in range(1, 1 << n):
        assert evaluate_encoder(groups, selects, d.log2q, value) == value.bit_length() - 1
